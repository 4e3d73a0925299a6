"""Tests for report formatting."""

from dido.core.types import BatchSummary, ScanResult
from dido.services.report import (
    display_path,
    format_file_count,
    format_scan_table,
    format_summary,
    relative_path,
)


class TestDisplayPath:
    def test_short_path_is_padded(self):
        shown = display_path("/base/repo", "/base")
        assert shown == "./repo".ljust(30)

    def test_long_path_is_ellipsized(self):
        shown = display_path("/base/" + "x" * 40, "/base")
        assert len(shown) == 30
        assert shown.startswith("...")
        assert shown.endswith("x" * 27)

    def test_base_itself(self):
        assert relative_path("/base", "/base") == "./"


def test_format_file_count():
    assert format_file_count(0) == "0 files"
    assert format_file_count(1) == "1 file"
    assert format_file_count(5) == "5 files"


def test_format_scan_table():
    results = [
        ScanResult("/b/a", "a", has_changes=True, file_count=2),
        ScanResult("/b/b", "b", has_changes=False, file_count=0),
        ScanResult("/b/c", "c", has_changes=False, file_count=0, error="permission denied"),
    ]
    lines = format_scan_table(results, "/b")
    assert lines[0] == "Found 3 repositories:"
    assert lines[3] == "  " + "-" * 60
    assert lines[4].rstrip().endswith("ready") and "2 files" in lines[4]
    assert lines[5].rstrip().endswith("no changes") and "0 files" in lines[5]
    assert lines[6].endswith("error: permission denied")


def test_format_summary():
    summary = BatchSummary(total=3, committed=1, skipped=2, failed=0, pushed=1)
    lines = format_summary(summary)
    assert lines == [
        "Summary:",
        "  Total repositories:  3",
        "  Committed:           1",
        "  Skipped:             2",
        "  Failed:              0",
    ]
    assert format_summary(summary, show_pushed=True)[-1] == "  Pushed:              1"
