"""Services: discover repositories under a directory and commit them in one batch."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence

import typer

from ..core.discovery import RepoDiscovery
from ..core.git_client import GitClient
from ..core.types import BatchSummary, CommitOutcome, ScanResult
from .commit import ConfirmFn, GitFactory
from .report import format_scan_table, format_summary, relative_path

logger = logging.getLogger(__name__)


def scan_repositories(roots: Sequence[str], *, git_factory: GitFactory = GitClient) -> list[ScanResult]:
    """Query change status for each root; errors are kept per repository."""
    results: list[ScanResult] = []
    for root in roots:
        name = os.path.basename(root.rstrip(os.sep))
        try:
            git = git_factory(root)
            has_changes = git.has_changes()
            file_count = len(git.status()) if has_changes else 0
            results.append(ScanResult(path=root, name=name, has_changes=has_changes, file_count=file_count))
        except Exception as e:
            logger.warning("scan failed for %s: %s", root, e)
            results.append(ScanResult(path=root, name=name, has_changes=False, file_count=0, error=str(e)))
    return results


def run_batch(
    results: Sequence[ScanResult],
    commit_one: Callable[[str], CommitOutcome],
    *,
    base_path: str | None = None,
) -> BatchSummary:
    """
    Commit every ready repository in scan order.

    Clean and scan-errored repositories are counted as skipped without being
    attempted. A cancelled outcome is skipped too; anything else that does not
    commit is failed.
    """
    ready = [r for r in results if r.ready]
    summary = BatchSummary(total=len(results), skipped=len(results) - len(ready))

    for i, result in enumerate(ready, start=1):
        shown = relative_path(result.path, base_path) if base_path else result.path
        print(f"[{i}/{len(ready)}] {shown}")
        try:
            outcome = commit_one(result.path)
        except typer.Abort:
            raise
        except Exception as e:
            outcome = CommitOutcome.failed(str(e))
        summary.record(result.path, outcome)

        if outcome.success:
            print("  Committed!\n")
        elif outcome.error_tag == "cancelled":
            print("  Skipped.\n")
        else:
            print(f"  Failed: {outcome.error}\n")

    return summary


def push_committed(
    summary: BatchSummary,
    *,
    confirm: ConfirmFn,
    git_factory: GitFactory = GitClient,
    base_path: str | None = None,
) -> int:
    """Push every committed repository after one batch confirmation. Returns the push count."""
    repos = summary.committed_repos
    if not repos:
        return 0
    if not confirm(f"Push {len(repos)} repositories to remote?", True):
        return 0

    print("\nPushing...")
    for repo_path in repos:
        shown = relative_path(repo_path, base_path) if base_path else repo_path
        try:
            git_factory(repo_path).push()
        except Exception as e:
            logger.warning("push failed for %s: %s", repo_path, e)
            print(f"  {shown} - failed: {e}")
            continue
        summary.pushed += 1
        print(f"  {shown} - pushed")
    return summary.pushed


def recursive_commit(
    *,
    base_path: str,
    max_depth: int | None,
    push: bool,
    commit_one: Callable[[str], CommitOutcome],
    confirm: ConfirmFn,
    git_factory: GitFactory = GitClient,
    discovery: RepoDiscovery | None = None,
) -> BatchSummary:
    """Walk, scan, commit and push; print the report along the way."""
    base = os.path.abspath(base_path)
    discovery = discovery or RepoDiscovery()

    print("Scanning for git repositories...")
    roots = discovery.find_repositories(base, max_depth)
    if not roots:
        print("No git repositories found.")
        return BatchSummary()

    results = scan_repositories(roots, git_factory=git_factory)
    print()
    for line in format_scan_table(results, base):
        print(line)

    ready = [r for r in results if r.ready]
    if not ready:
        print("\nNo repositories have changes to commit.")
        return BatchSummary(total=len(results), skipped=len(results))

    print(f"\nProcessing {len(ready)} repositories with changes...\n")
    summary = run_batch(results, commit_one, base_path=base)

    if push:
        push_committed(summary, confirm=confirm, git_factory=git_factory, base_path=base)

    print()
    for line in format_summary(summary, show_pushed=push):
        print(line)
    return summary
