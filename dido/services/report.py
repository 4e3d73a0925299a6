"""Text rendering for the recursive commit report."""

from __future__ import annotations

import os
from collections.abc import Sequence

from ..core.constants import DISPLAY_PATH_WIDTH
from ..core.types import BatchSummary, ScanResult


def relative_path(path: str, base: str) -> str:
    rel = os.path.relpath(path, base)
    return "./" if rel == os.curdir else "./" + rel


def display_path(path: str, base: str, width: int = DISPLAY_PATH_WIDTH) -> str:
    rel = relative_path(path, base)
    if len(rel) > width:
        return "..." + rel[-(width - 3):]
    return rel.ljust(width)


def format_file_count(count: int) -> str:
    return "1 file" if count == 1 else f"{count} files"


def format_scan_table(results: Sequence[ScanResult], base: str) -> list[str]:
    lines = [
        f"Found {len(results)} repositories:",
        "",
        f"  {'Repository'.ljust(DISPLAY_PATH_WIDTH)}  {'Changed'.ljust(10)}   Status",
        "  " + "-" * 60,
    ]
    for r in results:
        shown = display_path(r.path, base)
        if r.error is not None:
            lines.append(f"  {shown}  {'error'.ljust(10)}   error: {r.error}")
        elif r.has_changes:
            lines.append(f"  {shown}  {format_file_count(r.file_count).ljust(10)}   ready")
        else:
            lines.append(f"  {shown}  {'0 files'.ljust(10)}   no changes")
    return lines


def format_summary(summary: BatchSummary, show_pushed: bool = False) -> list[str]:
    lines = [
        "Summary:",
        f"  Total repositories:  {summary.total}",
        f"  Committed:           {summary.committed}",
        f"  Skipped:             {summary.skipped}",
        f"  Failed:              {summary.failed}",
    ]
    if show_pushed:
        lines.append(f"  Pushed:              {summary.pushed}")
    return lines
