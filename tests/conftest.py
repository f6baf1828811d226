"""Shared fixtures for pyps tests."""

from collections.abc import Callable
from pathlib import Path

import pytest


def _stat_line(
    pid: int = 1,
    comm: str = "(init)",
    state: str = "S",
    ppid: int = 0,
    utime: int = 0,
    stime: int = 0,
    num_threads: int = 1,
) -> str:
    # Same layout as a Linux /proc/<pid>/stat line, trailing fields included
    return (
        f"{pid} {comm} {state} {ppid} {pid} {pid} 0 -1 4194560 1523 0 12 0 "
        f"{utime} {stime} 0 0 20 0 {num_threads} 0 4321 172032000 3012 "
        "18446744073709551615 1 1 0 0 0 0 0 0 0 0 0 17 3 0 0 0 0 0\n"
    )


@pytest.fixture
def stat_line() -> Callable[..., str]:
    """Factory for well-formed stat record text."""
    return _stat_line


@pytest.fixture
def fake_proc(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Factory that lays out {dir_name: stat_text} like /proc under tmp_path."""

    def _make(records: dict[str, str]) -> Path:
        root = tmp_path / "proc"
        root.mkdir(exist_ok=True)
        for name, text in records.items():
            proc_dir = root / name
            proc_dir.mkdir()
            (proc_dir / "stat").write_text(text)
        return root

    return _make
