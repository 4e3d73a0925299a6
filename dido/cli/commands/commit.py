"""CLI for committing the current repository or every repository below a folder."""

from __future__ import annotations

import os

import typer

from ...config.settings import Settings, get_settings
from ...core.context_store import ProjectContextStore
from ...core.discovery import RepoDiscovery
from ...core.git_client import GitError
from ...core.llm_client import LLMError
from ...services.commit import CommitError, CommitWorkflow, typer_confirm
from ...services.recursive import recursive_commit


def run_commit(
    settings: Settings,
    *,
    push: bool = False,
    message: str | None = None,
    recursive: bool = False,
    depth: int | None = None,
    path: str | None = None,
) -> None:
    base = path or os.getcwd()
    with ProjectContextStore(settings.home) as store:
        workflow = CommitWorkflow(settings, store=store, confirm=typer_confirm)
        try:
            if recursive:
                recursive_commit(
                    base_path=base,
                    max_depth=depth,
                    push=push or settings.auto_push,
                    commit_one=lambda repo: workflow.commit_repository(repo, message),
                    confirm=typer_confirm,
                    discovery=RepoDiscovery(settings.skip_directories),
                )
            else:
                workflow.commit_current(base, message=message, push=push)
        except (CommitError, GitError, LLMError, NotADirectoryError) as e:
            typer.secho(f"Error: {e}", err=True, fg=typer.colors.RED)
            raise typer.Exit(code=1)


PUSH_OPTION = typer.Option(False, "--push", "-p", help="Push after committing")
MESSAGE_OPTION = typer.Option(None, "--message", "-m", help="Use a custom message instead of AI generation")
RECURSIVE_OPTION = typer.Option(False, "--recursive", "-r", help="Traverse child directories for git repos")
DEPTH_OPTION = typer.Option(None, "--depth", "-d", min=0, help="Max recursion depth (default: unlimited)")
PATH_OPTION = typer.Option(None, "--path", help="Repository or base folder (default: current directory)")


def commit(
    push: bool = PUSH_OPTION,
    message: str | None = MESSAGE_OPTION,
    recursive: bool = RECURSIVE_OPTION,
    depth: int | None = DEPTH_OPTION,
    path: str | None = PATH_OPTION,
):
    """Stage all changes and create an AI-generated commit.

    Examples:
      dido commit                      # current repository
      dido commit -m 'Fix typo' --push
      dido commit -r -d 2              # every repository up to two levels down
    """
    run_commit(
        get_settings(),
        push=push,
        message=message,
        recursive=recursive,
        depth=depth,
        path=path,
    )
