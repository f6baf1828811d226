"""Tests for the ProcessCollector class."""

import logging
import os

import psutil
import pytest

from pyps.collector import DEFAULT_PROCFS_PATH, ProcessCollector
from pyps.errors import MalformedRecordError, SourceUnavailableError


class TestProcessCollector:
    """Tests for ProcessCollector."""

    def test_collector_defaults(self):
        """Test ProcessCollector reads psutil's procfs path by default."""
        collector = ProcessCollector()

        assert collector.base_dir == DEFAULT_PROCFS_PATH
        assert DEFAULT_PROCFS_PATH == getattr(psutil, "PROCFS_PATH", "/proc")
        assert not collector.skip_errors

    def test_custom_base_dir(self, tmp_path):
        collector = ProcessCollector(str(tmp_path), skip_errors=True)

        assert collector.base_dir == str(tmp_path)
        assert collector.skip_errors

    def test_stat_path(self):
        collector = ProcessCollector("/srv/proc")

        assert collector.stat_path("42") == os.path.join("/srv/proc", "42", "stat")

    def test_list_sources_only_numeric_dirs(self, fake_proc, stat_line):
        """Test only directories whose name starts with a digit are listed."""
        root = fake_proc({"1": stat_line(1), "42": stat_line(42), "self": stat_line(9)})
        (root / "99").write_text("not a directory")
        (root / "sys").mkdir()

        sources = ProcessCollector(str(root)).list_sources()

        assert sorted(sources) == ["1", "42"]

    def test_list_sources_ascii_digits_only(self, fake_proc, stat_line):
        """Test directory names starting with a non-ASCII digit are ignored."""
        root = fake_proc({"7": stat_line(7), "\u00b2": stat_line(2), "\u0663": stat_line(3)})

        sources = ProcessCollector(str(root)).list_sources()

        assert sources == ["7"]

    def test_list_sources_missing_dir(self, tmp_path):
        collector = ProcessCollector(str(tmp_path / "nope"))

        with pytest.raises(SourceUnavailableError, match="unable to scan directory"):
            collector.list_sources()

    def test_collect_all(self, fake_proc, stat_line):
        root = fake_proc(
            {
                "50": stat_line(50, "(bash)"),
                "3": stat_line(3, "(Zsh)"),
                "200": stat_line(200, "((weird))"),
            }
        )

        entries = ProcessCollector(str(root)).collect()

        assert sorted(e.pid for e in entries) == [3, 50, 200]
        for e in entries:
            assert e.path == os.path.join(str(root), str(e.pid), "stat")

    def test_collect_follows_given_order(self, fake_proc, stat_line):
        root = fake_proc({"5": stat_line(5), "6": stat_line(6), "7": stat_line(7)})

        entries = ProcessCollector(str(root)).collect(["7", "5", "6"])

        assert [e.pid for e in entries] == [7, 5, 6]

    def test_collect_empty_dir(self, fake_proc):
        root = fake_proc({})

        assert ProcessCollector(str(root)).collect() == []

    def test_malformed_record_aborts(self, fake_proc, stat_line):
        """Test one bad record fails the whole collection by default."""
        root = fake_proc({"1": stat_line(1), "2": "2 (broken) S\n"})

        with pytest.raises(MalformedRecordError) as exc_info:
            ProcessCollector(str(root)).collect(["1", "2"])

        assert exc_info.value.path.endswith(os.path.join("2", "stat"))

    def test_missing_stat_aborts(self, fake_proc, stat_line):
        root = fake_proc({"1": stat_line(1)})
        (root / "2").mkdir()

        with pytest.raises(SourceUnavailableError):
            ProcessCollector(str(root)).collect(["1", "2"])

    def test_skip_errors(self, fake_proc, stat_line, caplog):
        """Test skip_errors drops failing records and logs a summary."""
        root = fake_proc({"1": stat_line(1), "2": "2 (broken) S\n", "3": stat_line(3)})
        (root / "4").mkdir()
        collector = ProcessCollector(str(root), skip_errors=True)

        with caplog.at_level(logging.WARNING, logger="pyps.collector"):
            entries = collector.collect(["1", "2", "3", "4"])

        assert [e.pid for e in entries] == [1, 3]
        assert collector.skipped == 2
        assert "Skipped 2 of 4 process records" in caplog.text

    def test_skipped_resets(self, fake_proc, stat_line):
        root = fake_proc({"1": stat_line(1), "2": "garbage"})
        collector = ProcessCollector(str(root), skip_errors=True)

        collector.collect(["1", "2"])
        collector.collect(["1"])

        assert collector.skipped == 0

    def test_debug_log_includes_status(self, fake_proc, stat_line, caplog):
        root = fake_proc({"8": stat_line(8, "(defunct)", state="Z")})

        with caplog.at_level(logging.DEBUG, logger="pyps.collector"):
            ProcessCollector(str(root)).collect()

        assert f"status={psutil.STATUS_ZOMBIE}" in caplog.text


@pytest.mark.skipif(not os.path.isdir("/proc/self"), reason="requires Linux procfs")
class TestLiveProcfs:
    """Read the real /proc and cross-check against psutil."""

    def test_list_sources_contains_current_process(self):
        sources = ProcessCollector("/proc").list_sources()

        assert str(os.getpid()) in sources

    def test_current_process_matches_psutil(self):
        collector = ProcessCollector("/proc")

        [entry] = collector.collect([str(os.getpid())])
        proc = psutil.Process()

        assert entry.pid == proc.pid
        assert entry.ppid == proc.ppid()
        assert proc.name().startswith(entry.comm[1:-1])
        assert entry.status == psutil.STATUS_RUNNING
        assert entry.num_threads == proc.num_threads()
