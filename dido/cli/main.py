"""CLI entrypoint that wires subcommands into a Typer app."""

import logging

import typer

from .. import __version__
from ..config.settings import get_settings
from .commands.commit import (
    DEPTH_OPTION,
    MESSAGE_OPTION,
    PATH_OPTION,
    PUSH_OPTION,
    RECURSIVE_OPTION,
    commit,
    run_commit,
)
from .commands.config import config
from .commands.init import init

app = typer.Typer(add_completion=False, help="AI-powered git commit assistant.")

app.command(help="Stage all changes and create an AI-generated commit")(commit)
app.command(help="Initialize dido for this project")(init)
app.command(help="Configure dido settings")(config)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log git and API calls"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit"
    ),
    push: bool = PUSH_OPTION,
    message: str | None = MESSAGE_OPTION,
    recursive: bool = RECURSIVE_OPTION,
    depth: int | None = DEPTH_OPTION,
    path: str | None = PATH_OPTION,
):
    """Runs `commit` with these options when no command is given."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if ctx.invoked_subcommand is None:
        run_commit(get_settings(), push=push, message=message, recursive=recursive, depth=depth, path=path)
