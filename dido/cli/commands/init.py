"""CLI for initializing dido in the current project."""

from __future__ import annotations

import os

import typer

from ...config.settings import get_settings
from ...core.context_store import ProjectContextStore
from ...core.git_client import GitError
from ...core.llm_client import LLMError
from ...services.commit import CommitError
from ...services.init import init_project


def init(
    path: str | None = typer.Option(None, "--path", help="Repository (default: current directory)"),
):
    """Initialize dido for this project."""
    s = get_settings()
    with ProjectContextStore(s.home) as store:
        try:
            init_project(s, path or os.getcwd(), store=store)
        except (CommitError, GitError, LLMError) as e:
            typer.secho(f"Error: {e}", err=True, fg=typer.colors.RED)
            raise typer.Exit(code=1)
