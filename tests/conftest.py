"""Shared pytest fixtures for dido tests."""

import subprocess
from pathlib import Path

import pytest

from dido.config.settings import Settings
from dido.core.context_store import ProjectContextStore
from dido.core.git_client import GitError
from dido.core.types import CommitAnalysis, StagedStats


def init_repo(path: Path, *, commit: bool = True) -> Path:
    """Initialize a git repository at path, optionally with one commit."""
    path.mkdir(parents=True, exist_ok=True)
    subprocess.run(["git", "init"], cwd=path, check=True, capture_output=True)
    subprocess.run(["git", "config", "user.email", "test@example.com"], cwd=path, check=True, capture_output=True)
    subprocess.run(["git", "config", "user.name", "Test User"], cwd=path, check=True, capture_output=True)
    subprocess.run(["git", "config", "commit.gpgsign", "false"], cwd=path, check=True, capture_output=True)
    if commit:
        (path / "README.md").write_text("# Test Repo\n")
        subprocess.run(["git", "add", "README.md"], cwd=path, check=True, capture_output=True)
        subprocess.run(["git", "commit", "-m", "Initial commit"], cwd=path, check=True, capture_output=True)
    return path


def commit_count(path: Path) -> int:
    out = subprocess.run(
        ["git", "rev-list", "--count", "HEAD"], cwd=path, check=True, capture_output=True, text=True
    )
    return int(out.stdout.strip())


def last_message(path: Path) -> str:
    out = subprocess.run(["git", "log", "-1", "--format=%B"], cwd=path, check=True, capture_output=True, text=True)
    return out.stdout.strip()


@pytest.fixture
def git_repo(tmp_path):
    """
    Create a temporary git repository with one commit.

    Returns:
        Path: Path to the temporary git repository
    """
    return init_repo(tmp_path / "test-repo")


@pytest.fixture
def git_repo_with_remote(tmp_path, git_repo):
    """
    Create a git repository whose current branch tracks a bare remote.

    Returns:
        tuple: (repo_path, remote_path)
    """
    remote = tmp_path / "remote.git"
    remote.mkdir()
    subprocess.run(["git", "init", "--bare"], cwd=remote, check=True, capture_output=True)
    subprocess.run(["git", "remote", "add", "origin", str(remote)], cwd=git_repo, check=True, capture_output=True)
    subprocess.run(["git", "push", "-u", "origin", "HEAD"], cwd=git_repo, check=True, capture_output=True)
    return git_repo, remote


@pytest.fixture
def dido_home(tmp_path, monkeypatch):
    home = tmp_path / "dido-home"
    monkeypatch.setenv("DIDO_HOME", str(home))
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.delenv("DIDO_API_KEY", raising=False)
    monkeypatch.delenv("DIDO_AUTO_PUSH", raising=False)
    monkeypatch.delenv("DIDO_MODEL", raising=False)
    return home


@pytest.fixture
def settings(dido_home):
    return Settings(home=str(dido_home), api_key="sk-test-1234")


@pytest.fixture
def store(dido_home):
    with ProjectContextStore(str(dido_home)) as s:
        yield s


class FakeGit:
    """In-memory stand-in for GitClient; records calls."""

    def __init__(self, path, *, files=(), fail_on=(), error="boom"):
        self.path = path
        self.files = list(files)
        self.fail_on = set(fail_on)
        self.error = error
        self.calls = []

    def _call(self, name):
        self.calls.append(name)
        if name in self.fail_on:
            raise GitError(self.error)

    def is_git_repository(self):
        return True

    def repository_root(self):
        return self.path

    def status(self):
        self._call("status")
        return list(self.files)

    def has_changes(self):
        self._call("has_changes")
        return bool(self.files)

    def stage_all(self):
        self._call("stage_all")

    def diff(self):
        return "diff --git a/x b/x\n+added\n"

    def staged_stats(self):
        return StagedStats(files=1, insertions=1, deletions=0)

    def recent_commits(self, count=10):
        return ["Initial commit"]

    def read_file(self, rel_path):
        return None

    def commit(self, message):
        self._call("commit")
        self.committed = message

    def push(self):
        self._call("push")


class FakeGitFactory:
    """Returns one FakeGit per path; unknown paths get a clean repo."""

    def __init__(self, repos=None):
        self.repos = repos or {}

    def __call__(self, path):
        if path not in self.repos:
            self.repos[path] = FakeGit(path)
        return self.repos[path]


class FakeGenerator:
    def __init__(self, api_key=None, model=None, *, message="Add feature", project_type="Python CLI tool"):
        self.message = message
        self.project_type = project_type
        self.generated = 0
        self.analyzed = 0

    def generate_commit_message(self, diff, recent_commits, project_context=None, readme=None):
        self.generated += 1
        return CommitAnalysis(message=self.message)

    def analyze_project_type(self, readme, files):
        self.analyzed += 1
        return self.project_type


@pytest.fixture
def fake_generator():
    return FakeGenerator()


def answers(*values):
    """Confirm callable that replays the given answers and records prompts."""
    queue = list(values)
    prompts = []

    def confirm(prompt, default=True):
        prompts.append(prompt)
        return queue.pop(0) if queue else default

    confirm.prompts = prompts
    return confirm
