"""Sorted, filtered process table for pyps."""

import sys
from collections.abc import Iterator
from enum import Enum
from typing import TextIO

from pyps.collector import ProcessCollector
from pyps.errors import EmptyReportError
from pyps.models import (
    COMM_WIDTH,
    PATH_WIDTH,
    PID_WIDTH,
    PPID_WIDTH,
    STATE_WIDTH,
    THREADS_WIDTH,
    TIME_WIDTH,
    ProcessEntry,
    clock_ticks,
)
from pyps.ordering import ByDisplayName, ById, EntryOrder


class SortKey(Enum):
    """Sort keys for the process table."""

    PID = "pid"
    CMD = "cmd"

    @property
    def order(self) -> EntryOrder:
        return _ORDERS[self]


_ORDERS: dict[SortKey, EntryOrder] = {
    SortKey.PID: ById(),
    SortKey.CMD: ByDisplayName(),
}


def format_header() -> str:
    """Format the column titles in the row layout of ProcessEntry.render."""
    return (
        f"{'PID':>{PID_WIDTH}} "
        f"{'PPID':>{PPID_WIDTH}} "
        f"{'STATE':>{STATE_WIDTH}} "
        f"{'UTIME':>{TIME_WIDTH}} "
        f"{'STIME':>{TIME_WIDTH}} "
        f"{'THREADS':>{THREADS_WIDTH}} "
        f"{'CMD':<{COMM_WIDTH}} "
        f"{'STAT_FILE':<{PATH_WIDTH}}"
    )


class ProcessReport:
    """Sorts process entries and prints them as a fixed-width table."""

    def __init__(
        self,
        sort_key: SortKey = SortKey.PID,
        zombies_only: bool = False,
        ticks: int | None = None,
    ) -> None:
        """
        Initialize the ProcessReport.

        Args:
            sort_key: Order of the printed rows.
            zombies_only: Print only entries in the zombie state.
            ticks: Clock-tick rate for CPU times. Defaults to the system rate.
        """
        self._sort_key = sort_key
        self._zombies_only = zombies_only
        self._ticks = ticks if ticks is not None else clock_ticks()

    @property
    def sort_key(self) -> SortKey:
        return self._sort_key

    @property
    def zombies_only(self) -> bool:
        return self._zombies_only

    @property
    def ticks(self) -> int:
        return self._ticks

    def sort(self, entries: list[ProcessEntry]) -> None:
        """Sort entries in place by the current sort key."""
        self._sort_key.order.sort(entries)

    def rows(self, entries: list[ProcessEntry]) -> Iterator[str]:
        """Yield rendered rows in list order, skipping non-zombies if filtering."""
        for entry in entries:
            if self._zombies_only and not entry.is_zombie:
                continue
            yield entry.render(self._ticks)

    def print_table(
        self,
        entries: list[ProcessEntry] | None,
        stream: TextIO | None = None,
    ) -> None:
        """
        Write the header and one row per entry.

        Raises:
            EmptyReportError: If entries is None or empty. Nothing is written.
        """
        if not entries:
            raise EmptyReportError("attempted to print nothing")
        if stream is None:
            stream = sys.stdout

        print(format_header(), file=stream)
        for row in self.rows(entries):
            print(row, file=stream)

    def run(self, collector: ProcessCollector, stream: TextIO | None = None) -> None:
        """Collect, sort and print all entries, then release them."""
        entries = collector.collect()
        try:
            self.sort(entries)
            self.print_table(entries, stream)
        finally:
            entries.clear()
