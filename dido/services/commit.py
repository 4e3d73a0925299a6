"""Services for committing one repository, with or without a generated message."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timezone

import typer

from ..config.settings import Settings
from ..core.constants import API_KEY_MISSING, README_CONTEXT_CHARS, README_NAME, RECENT_COMMITS
from ..core.context_store import ProjectContextStore
from ..core.git_client import GitClient
from ..core.llm_client import CommitMessageGenerator
from ..core.types import CommitAnalysis, CommitOutcome, ProjectContext

logger = logging.getLogger(__name__)

ConfirmFn = Callable[[str, bool], bool]
GitFactory = Callable[[str], GitClient]
GeneratorFactory = Callable[[str, str], CommitMessageGenerator]


class CommitError(RuntimeError):
    """A precondition that stops the whole command."""


def typer_confirm(prompt: str, default: bool = True) -> bool:
    return typer.confirm(prompt, default=default)


def resolve_project_context(
    *,
    store: ProjectContextStore,
    git: GitClient,
    generator: CommitMessageGenerator,
    repo_path: str,
    readme: str | None,
    announce: bool = False,
) -> ProjectContext | None:
    """Return the stored context, analysing the project the first time a README is seen."""
    context = store.get(repo_path)
    if context is not None or not readme:
        return context

    if announce:
        print("First time in this project, analyzing...")
    project_type = generator.analyze_project_type(readme, git.status())
    context = ProjectContext(
        project_path=repo_path,
        project_type=project_type,
        last_analyzed=datetime.now(timezone.utc).isoformat(),
        readme_content=readme[:README_CONTEXT_CHARS],
    )
    store.save(context)
    return context


class CommitWorkflow:
    """Stage, describe, confirm and commit, for the current repo or for a batch."""

    def __init__(
        self,
        settings: Settings,
        *,
        store: ProjectContextStore,
        confirm: ConfirmFn = typer_confirm,
        git_factory: GitFactory = GitClient,
        generator_factory: GeneratorFactory = CommitMessageGenerator,
    ) -> None:
        self.settings = settings
        self.store = store
        self.confirm = confirm
        self.git_factory = git_factory
        self.generator_factory = generator_factory

    def _generate(self, git: GitClient, repo_path: str, *, announce: bool) -> CommitAnalysis:
        generator = self.generator_factory(self.settings.api_key, self.settings.model)
        diff = git.diff()
        recent = git.recent_commits(RECENT_COMMITS)
        readme = git.read_file(README_NAME)
        context = resolve_project_context(
            store=self.store,
            git=git,
            generator=generator,
            repo_path=repo_path,
            readme=readme,
            announce=announce,
        )
        analysis = generator.generate_commit_message(diff, recent, context, readme)
        logger.debug("generated message for %s: %s (%s)", repo_path, analysis.message, analysis.reasoning)
        stats = git.staged_stats()
        return replace(
            analysis,
            files_changed=stats.files,
            insertions=stats.insertions,
            deletions=stats.deletions,
        )

    # ---------- batch: one repository, never raises, never pushes ----------
    def commit_repository(self, repo_dir: str, message: str | None = None) -> CommitOutcome:
        git = self.git_factory(repo_dir)
        try:
            print("  Staging changes...")
            git.stage_all()

            if message:
                commit_message = message
            else:
                if not self.settings.api_key:
                    return CommitOutcome.failed(API_KEY_MISSING)

                print("  Analyzing changes...")
                commit_message = self._generate(git, repo_dir, announce=False).message
                print(f'  Generated: "{commit_message}"')

                if not self.confirm("  Proceed?", True):
                    return CommitOutcome.cancelled(commit_message)

            git.commit(commit_message)
            return CommitOutcome.committed(commit_message)
        except typer.Abort:
            raise
        except Exception as e:
            logger.warning("commit failed in %s: %s", repo_dir, e)
            return CommitOutcome.failed(str(e))

    # ---------- single repository in the working directory ----------
    def commit_current(self, repo_dir: str, *, message: str | None = None, push: bool = False) -> CommitOutcome | None:
        """
        Commit the repository at repo_dir interactively.

        Returns None when there was nothing to commit. Raises CommitError for
        a missing repository or API key; git and API errors propagate.
        """
        git = self.git_factory(repo_dir)
        if not git.is_git_repository():
            raise CommitError("Not a git repository")

        if not git.has_changes():
            if push:
                print("No changes to commit, pushing...")
                git.push()
                print("Pushed successfully!")
            else:
                print("No changes to commit")
            return None

        print("Staging all changes...")
        git.stage_all()

        if not message and not self.settings.api_key:
            raise CommitError(
                "Anthropic API key not configured.\n"
                "Set it via: dido config --api-key YOUR_API_KEY\n"
                "Or set ANTHROPIC_API_KEY environment variable"
            )

        if message:
            commit_message = message
        else:
            print("Analyzing changes...")
            analysis = self._generate(git, git.repository_root(), announce=True)
            commit_message = analysis.message
            print(
                f"  {analysis.files_changed} files changed, "
                f"{analysis.insertions} insertions(+), {analysis.deletions} deletions(-)"
            )
            print("\nGenerated commit message:")
            print(f'  "{commit_message}"\n')
            if not self.confirm("Proceed with this commit message?", True):
                print("Commit cancelled")
                return CommitOutcome.cancelled(commit_message)

        print("Creating commit...")
        git.commit(commit_message)
        print("Committed successfully!")

        if push or self.settings.auto_push:
            if self.confirm("Push to remote?", True):
                print("Pushing...")
                git.push()
                print("Pushed successfully!")

        return CommitOutcome.committed(commit_message)
