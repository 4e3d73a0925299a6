"""CLI for viewing and changing dido settings."""

from __future__ import annotations

import typer

from ...config.settings import get_settings
from ...config.store import ConfigStore


def mask_key(key: str | None) -> str:
    return "***" + key[-4:] if key else "not set"


def config(
    api_key: str | None = typer.Option(None, "--api-key", help="Set Anthropic API key"),
    auto_push: str | None = typer.Option(None, "--auto-push", help="Enable/disable auto-push (true|false)"),
    model: str | None = typer.Option(None, "--model", help="Set Claude model"),
):
    """Configure dido settings."""
    s = get_settings()
    store = ConfigStore(s.home)
    changes: dict[str, object] = {}

    if api_key:
        changes["api_key"] = api_key
        typer.echo("API key saved")
    if auto_push:
        changes["auto_push"] = auto_push.lower() == "true"
        typer.echo(f"Auto-push {'enabled' if changes['auto_push'] else 'disabled'}")
    if model:
        changes["model"] = model
        typer.echo(f"Model set to: {model}")

    if changes:
        store.update(**changes)
        return

    typer.echo("Current configuration:")
    typer.echo(f"  API Key: {mask_key(s.api_key)}")
    typer.echo(f"  Auto-push: {str(s.auto_push).lower()}")
    typer.echo(f"  Model: {s.model}")
