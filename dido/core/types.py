"""Small types and Enums used by dido."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OutcomeStatus(str, Enum):
    """Terminal state of one repository's commit attempt."""

    committed = "committed"
    cancelled = "cancelled"
    failed = "failed"


@dataclass(frozen=True)
class ScanResult:
    path: str
    name: str
    has_changes: bool
    file_count: int
    error: str | None = None

    @property
    def ready(self) -> bool:
        return self.has_changes and self.error is None

    @property
    def status(self) -> str:
        if self.error is not None:
            return "error"
        return "ready" if self.has_changes else "no changes"


@dataclass(frozen=True)
class CommitOutcome:
    status: OutcomeStatus
    message: str | None = None
    error: str | None = None

    @classmethod
    def committed(cls, message: str) -> CommitOutcome:
        return cls(OutcomeStatus.committed, message=message)

    @classmethod
    def cancelled(cls, message: str | None = None) -> CommitOutcome:
        return cls(OutcomeStatus.cancelled, message=message)

    @classmethod
    def failed(cls, reason: str) -> CommitOutcome:
        return cls(OutcomeStatus.failed, error=reason)

    @property
    def success(self) -> bool:
        return self.status is OutcomeStatus.committed

    @property
    def error_tag(self) -> str | None:
        """'cancelled' for declined messages, the failure reason otherwise."""
        if self.status is OutcomeStatus.cancelled:
            return "cancelled"
        return self.error


@dataclass
class BatchSummary:
    """Counters for one recursive run, plus the repositories to push."""

    total: int = 0
    committed: int = 0
    skipped: int = 0
    failed: int = 0
    pushed: int = 0
    committed_repos: list[str] = field(default_factory=list)
    outcomes: list[tuple[str, CommitOutcome]] = field(default_factory=list)

    def record(self, path: str, outcome: CommitOutcome) -> None:
        self.outcomes.append((path, outcome))
        if outcome.status is OutcomeStatus.committed:
            self.committed += 1
            self.committed_repos.append(path)
        elif outcome.status is OutcomeStatus.cancelled:
            self.skipped += 1
        else:
            self.failed += 1

    @property
    def balanced(self) -> bool:
        return self.committed + self.skipped + self.failed == self.total


@dataclass(frozen=True)
class CommitAnalysis:
    message: str
    reasoning: str = ""
    files_changed: int = 0
    insertions: int = 0
    deletions: int = 0


@dataclass(frozen=True)
class StagedStats:
    files: int
    insertions: int
    deletions: int


@dataclass
class ProjectContext:
    project_path: str
    last_analyzed: str
    project_type: str | None = None
    commit_style: str | None = None
    readme_content: str | None = None
    id: int | None = None
