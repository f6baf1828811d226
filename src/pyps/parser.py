"""Parser for /proc/<pid>/stat records."""

import re
from collections.abc import Iterator

from pyps.errors import MalformedRecordError, SourceUnavailableError
from pyps.models import ProcessEntry

# Fields between ppid and utime: pgrp, session, tty_nr, tpgid, flags,
# minflt, cminflt, majflt, cmajflt
SKIPPED_BEFORE_TIMES = 9
# Fields between stime and num_threads: cutime, cstime, priority, nice
SKIPPED_BEFORE_THREADS = 4

# ASCII decimal only: no underscores or non-ASCII digits
INTEGER_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)


class _Fields:
    """Cursor over the whitespace-separated tokens of one record."""

    def __init__(self, text: str, path: str) -> None:
        self._tokens: Iterator[str] = iter(text.split())
        self._path = path

    def malformed(self, what: str) -> MalformedRecordError:
        return MalformedRecordError(f"malformed record ({what})", self._path)

    def take(self, what: str) -> str:
        try:
            return next(self._tokens)
        except StopIteration:
            raise self.malformed(f"missing {what}") from None

    def take_int(self, what: str) -> int:
        token = self.take(what)
        if not INTEGER_RE.fullmatch(token):
            raise self.malformed(f"{what} is not an integer: {token!r}")
        return int(token)

    def take_unsigned(self, what: str) -> int:
        value = self.take_int(what)
        if value < 0:
            raise self.malformed(f"{what} is negative: {value}")
        return value

    def skip_ints(self, count: int, what: str) -> None:
        for index in range(count):
            self.take_int(f"{what} field {index + 1} of {count}")

    def take_comm(self) -> str:
        """
        Read the parenthesized command name.

        The name may contain whitespace, so tokens are joined with single
        spaces until one ends with ')'.
        """
        comm = self.take("command name")
        if not comm.startswith("("):
            raise self.malformed(f"command name does not start with '(': {comm!r}")
        while not comm.endswith(")"):
            try:
                comm = f"{comm} {next(self._tokens)}"
            except StopIteration:
                raise self.malformed("unterminated command name") from None
        return comm


def parse_record(text: str, path: str = "") -> ProcessEntry:
    """
    Parse the text of a stat record into a ProcessEntry.

    Args:
        text: Record contents.
        path: Where the record came from; stored on the entry and used in
            error messages.

    Raises:
        MalformedRecordError: If a field is missing or has the wrong type.
    """
    fields = _Fields(text, path)

    pid = fields.take_unsigned("pid")
    comm = fields.take_comm()
    state = fields.take("state")
    if len(state) != 1:
        raise fields.malformed(f"state is not a single character: {state!r}")
    ppid = fields.take_int("ppid")
    fields.skip_ints(SKIPPED_BEFORE_TIMES, "pre-utime")
    utime = fields.take_unsigned("utime")
    stime = fields.take_unsigned("stime")
    fields.skip_ints(SKIPPED_BEFORE_THREADS, "pre-num_threads")
    num_threads = fields.take_int("num_threads")

    return ProcessEntry(
        pid=pid,
        ppid=ppid,
        comm=comm,
        state=state,
        utime=utime,
        stime=stime,
        num_threads=num_threads,
        path=path,
    )


def read_record(path: str) -> ProcessEntry:
    """Read and parse the stat record stored at path."""
    try:
        with open(path, encoding="utf-8", errors="surrogateescape") as stat_file:
            text = stat_file.read()
    except OSError as exc:
        raise SourceUnavailableError(
            f"source unavailable ({exc.strerror or exc})", path
        ) from exc
    return parse_record(text, path)
