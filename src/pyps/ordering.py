"""Sort orders for process entries."""

from abc import ABC, abstractmethod
from functools import cmp_to_key

from pyps.models import ProcessEntry


class EntryOrder(ABC):
    """Total order over ProcessEntry objects."""

    @abstractmethod
    def compare(self, a: ProcessEntry, b: ProcessEntry) -> int:
        """Return a negative number, zero or a positive number as a < b, a == b, a > b."""

    def sort(self, entries: list[ProcessEntry]) -> None:
        """Sort entries in place."""
        entries.sort(key=cmp_to_key(self.compare))


class ById(EntryOrder):
    """Ascending process id."""

    def compare(self, a: ProcessEntry, b: ProcessEntry) -> int:
        return a.pid - b.pid


class ByDisplayName(EntryOrder):
    """
    Byte-wise ascending command name, case sensitive.

    A name whose second character is '(' (e.g. '((sd-pam))') is compared
    without its first character, so it sorts next to the names starting with
    its inner text rather than ahead of every letter. The stored name is not
    changed.
    """

    @staticmethod
    def sort_name(comm: str) -> bytes:
        if len(comm) > 1 and comm[1] == "(":
            comm = comm[1:]
        return comm.encode("utf-8", "surrogateescape")

    def compare(self, a: ProcessEntry, b: ProcessEntry) -> int:
        name_a = self.sort_name(a.comm)
        name_b = self.sort_name(b.comm)
        return (name_a > name_b) - (name_a < name_b)
