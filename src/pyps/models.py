"""Data models for pyps."""

import os
from dataclasses import dataclass

import psutil

ZOMBIE_STATE = "Z"

DEFAULT_CLOCK_TICKS = 100

# Column widths shared by the header and every rendered row
PID_WIDTH = 7
PPID_WIDTH = 7
STATE_WIDTH = 5
TIME_WIDTH = 5
THREADS_WIDTH = 7
COMM_WIDTH = 25
PATH_WIDTH = 20

# Single-letter states from /proc/<pid>/stat, see proc(5)
STATE_NAMES = {
    "R": psutil.STATUS_RUNNING,
    "S": psutil.STATUS_SLEEPING,
    "D": psutil.STATUS_DISK_SLEEP,
    "T": psutil.STATUS_STOPPED,
    "t": psutil.STATUS_TRACING_STOP,
    "Z": psutil.STATUS_ZOMBIE,
    "X": psutil.STATUS_DEAD,
    "x": psutil.STATUS_DEAD,
    "W": psutil.STATUS_WAKING,
    "P": psutil.STATUS_PARKED,
    "I": psutil.STATUS_IDLE,
}


def clock_ticks() -> int:
    """Return the scheduler clock-tick rate (ticks per second)."""
    try:
        ticks = os.sysconf("SC_CLK_TCK")
    except (AttributeError, ValueError, OSError):
        return DEFAULT_CLOCK_TICKS
    return ticks if ticks > 0 else DEFAULT_CLOCK_TICKS


def fit(text: str, width: int) -> str:
    """Left-align text in a fixed-width column, truncating if it is too long."""
    return f"{text:<{width}.{width}}"


@dataclass(slots=True, frozen=True)
class ProcessEntry:
    """Immutable entry parsed from one /proc/<pid>/stat record."""

    pid: int
    ppid: int
    comm: str  # Includes the surrounding parentheses, e.g. '(bash)'
    state: str  # 'R', 'S', 'Z', 'D', etc.
    utime: int  # Clock ticks
    stime: int  # Clock ticks
    num_threads: int
    path: str  # Source the record was read from

    @classmethod
    def create(cls) -> "ProcessEntry":
        """Return a zero-valued placeholder entry."""
        return cls(
            pid=0,
            ppid=0,
            comm="",
            state="",
            utime=0,
            stime=0,
            num_threads=0,
            path="",
        )

    @property
    def status(self) -> str:
        """psutil status name for the state code, '?' if unknown."""
        return STATE_NAMES.get(self.state, "?")

    @property
    def is_zombie(self) -> bool:
        return self.state == ZOMBIE_STATE

    def utime_seconds(self, ticks: int) -> int:
        return self.utime // ticks

    def stime_seconds(self, ticks: int) -> int:
        return self.stime // ticks

    def render(self, ticks: int | None = None) -> str:
        """
        Render the entry as one fixed-width report row.

        Args:
            ticks: Clock-tick rate used to convert CPU times to whole seconds.
                Defaults to the system rate.
        """
        if ticks is None:
            ticks = clock_ticks()
        return (
            f"{self.pid:>{PID_WIDTH}} "
            f"{self.ppid:>{PPID_WIDTH}} "
            f"{self.state:>{STATE_WIDTH}} "
            f"{self.utime_seconds(ticks):>{TIME_WIDTH}} "
            f"{self.stime_seconds(ticks):>{TIME_WIDTH}} "
            f"{self.num_threads:>{THREADS_WIDTH}} "
            f"{fit(self.comm, COMM_WIDTH)} "
            f"{fit(self.path, PATH_WIDTH)}"
        )
