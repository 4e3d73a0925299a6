"""Find git repositories below a directory."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable

from .constants import DEFAULT_SKIP_DIRECTORIES

logger = logging.getLogger(__name__)


class RepoDiscovery:
    def __init__(self, skip_directories: Iterable[str] = DEFAULT_SKIP_DIRECTORIES) -> None:
        self.skip_directories = frozenset(skip_directories)

    def find_repositories(self, base_path: str, max_depth: int | None = None) -> list[str]:
        """
        Return absolute paths of every git repository root under base_path, sorted.

        max_depth=None (or a negative value) means no depth limit; the base
        directory itself is depth 0. Repositories are not searched for nested
        repositories.
        """
        base = os.path.abspath(base_path)
        if not os.path.isdir(base):
            raise NotADirectoryError(f"Not a directory: {base}")
        if max_depth is not None and max_depth < 0:
            max_depth = None

        repos: list[str] = []
        self._walk(base, 0, max_depth, repos)
        return sorted(repos)

    def _walk(self, dir_path: str, depth: int, max_depth: int | None, repos: list[str]) -> None:
        if max_depth is not None and depth > max_depth:
            return

        try:
            with os.scandir(dir_path) as it:
                entries = list(it)
        except OSError as e:
            logger.debug("cannot list %s: %s", dir_path, e)
            return

        subdirs: list[os.DirEntry] = []
        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                continue
            if not is_dir:
                continue
            if entry.name == ".git":
                repos.append(dir_path)
                return
            subdirs.append(entry)

        for entry in subdirs:
            if entry.name in self.skip_directories or entry.name.startswith("."):
                continue
            self._walk(entry.path, depth + 1, max_depth, repos)


def find_repositories(
    base_path: str,
    max_depth: int | None = None,
    skip_directories: Iterable[str] = DEFAULT_SKIP_DIRECTORIES,
) -> list[str]:
    return RepoDiscovery(skip_directories).find_repositories(base_path, max_depth)
