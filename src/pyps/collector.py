"""Process record collection for pyps."""

import logging
import os
import string

import psutil

from pyps.errors import ParseError, SourceUnavailableError
from pyps.models import ProcessEntry
from pyps.parser import read_record

log = logging.getLogger(__name__)

DEFAULT_PROCFS_PATH = getattr(psutil, "PROCFS_PATH", "/proc")


class ProcessCollector:
    """
    Collector that reads every <pid>/stat record below a procfs-style directory.

    By default the first record that cannot be read or parsed aborts the
    collection. With skip_errors the failing record is logged and skipped.
    """

    def __init__(self, base_dir: str | None = None, skip_errors: bool = False) -> None:
        """
        Initialize the ProcessCollector.

        Args:
            base_dir: Directory laid out like /proc. Default psutil.PROCFS_PATH.
            skip_errors: Skip unreadable or malformed records instead of failing.
        """
        self._base_dir = base_dir or DEFAULT_PROCFS_PATH
        self._skip_errors = skip_errors
        self._skipped = 0

    @property
    def base_dir(self) -> str:
        return self._base_dir

    @property
    def skip_errors(self) -> bool:
        return self._skip_errors

    @property
    def skipped(self) -> int:
        """Number of records skipped by the last collect() call."""
        return self._skipped

    def list_sources(self) -> list[str]:
        """
        List the process directory names in base_dir.

        Only directories whose name starts with a digit are returned, in
        directory listing order.
        """
        try:
            with os.scandir(self._base_dir) as entries:
                names = [
                    entry.name
                    for entry in entries
                    if entry.name[0] in string.digits and entry.is_dir()
                ]
        except OSError as exc:
            raise SourceUnavailableError(
                f"unable to scan directory ({exc.strerror or exc})", self._base_dir
            ) from exc

        log.info("Found %d process directories in %s", len(names), self._base_dir)
        return names

    def stat_path(self, name: str) -> str:
        return os.path.join(self._base_dir, name, "stat")

    def collect(self, sources: list[str] | None = None) -> list[ProcessEntry]:
        """
        Parse the stat record of each source, in the order given.

        Args:
            sources: Process directory names. Defaults to list_sources().

        Raises:
            ParseError: If a record fails and skip_errors is off.
        """
        if sources is None:
            sources = self.list_sources()

        self._skipped = 0
        entries: list[ProcessEntry] = []
        for name in sources:
            path = self.stat_path(name)
            try:
                entry = read_record(path)
            except ParseError as exc:
                if not self._skip_errors:
                    raise
                self._skipped += 1
                log.warning("Skipping %s", exc)
                continue

            log.debug(
                "Parsed %s: pid=%d comm=%s status=%s",
                path,
                entry.pid,
                entry.comm,
                entry.status,
            )
            entries.append(entry)

        if self._skipped:
            log.warning(
                "Skipped %d of %d process records in %s",
                self._skipped,
                len(sources),
                self._base_dir,
            )
        return entries
