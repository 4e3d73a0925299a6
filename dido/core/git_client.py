"""Small helpers for running Git commands in one repository."""

from __future__ import annotations

import logging
import os
import subprocess

from .constants import RECENT_COMMITS
from .types import StagedStats

logger = logging.getLogger(__name__)


class GitError(RuntimeError):
    pass


class GitClient:
    def __init__(self, repo_dir: str | None = None) -> None:
        self.repo_dir = os.path.abspath(repo_dir or os.getcwd())

    # ---------- process helpers ----------
    def _run_out(self, *args: str) -> str:
        cmd = ["git", *args]
        logger.debug("git %s (in %s)", " ".join(args), self.repo_dir)
        try:
            out = subprocess.check_output(cmd, cwd=self.repo_dir, stderr=subprocess.PIPE)
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or e.output or b"").decode("utf-8", "ignore").strip()
            raise GitError(detail or f"git {args[0]} failed with exit code {e.returncode}") from e
        except OSError as e:
            raise GitError(str(e)) from e
        return out.decode("utf-8", "ignore")

    # ---------- queries ----------
    def is_git_repository(self) -> bool:
        try:
            self._run_out("rev-parse", "--git-dir")
        except GitError:
            return False
        return True

    def repository_root(self) -> str:
        return self._run_out("rev-parse", "--show-toplevel").strip()

    def status(self) -> list[str]:
        """Paths of staged, unstaged and untracked changes."""
        out = self._run_out("status", "--porcelain", "-z", "--untracked-files=all")
        files: list[str] = []
        entries = iter(out.split("\0"))
        for entry in entries:
            if len(entry) < 4:
                continue
            files.append(entry[3:])
            # renames and copies are followed by their original path
            if "R" in entry[:2] or "C" in entry[:2]:
                next(entries, None)
        return files

    def has_changes(self) -> bool:
        return bool(self.status())

    def diff(self) -> str:
        """The staged diff."""
        return self._run_out("diff", "--staged")

    def staged_stats(self) -> StagedStats:
        out = self._run_out("diff", "--staged", "--numstat")
        files = insertions = deletions = 0
        for line in out.splitlines():
            parts = line.split("\t")
            if len(parts) < 3:
                continue
            files += 1
            # binary files report "-" for both counts
            insertions += int(parts[0]) if parts[0].isdigit() else 0
            deletions += int(parts[1]) if parts[1].isdigit() else 0
        return StagedStats(files=files, insertions=insertions, deletions=deletions)

    def recent_commits(self, count: int = RECENT_COMMITS) -> list[str]:
        try:
            out = self._run_out("log", f"--max-count={count}", "--format=%s")
        except GitError:
            # no commits yet
            return []
        return [line for line in out.splitlines() if line.strip()]

    def read_file(self, rel_path: str) -> str | None:
        full = os.path.join(self.repo_dir, rel_path)
        if not os.path.isfile(full):
            return None
        try:
            with open(full, encoding="utf-8", errors="replace") as f:
                return f.read()
        except OSError:
            return None

    # ---------- mutations ----------
    def stage_all(self) -> None:
        self._run_out("add", "-A")

    def commit(self, message: str) -> None:
        self._run_out("commit", "-m", message)

    def push(self) -> None:
        self._run_out("push")
