from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.constants import DEFAULT_HOME, DEFAULT_MODEL, DEFAULT_SKIP_DIRECTORIES
from .store import ConfigStore

# Load .env once, early
load_dotenv()


def _default_home() -> str:
    return os.path.expanduser(os.getenv("DIDO_HOME", DEFAULT_HOME))


class Settings(BaseSettings):
    """Application config (config file, env or .env)."""

    model_config = SettingsConfigDict(env_prefix="DIDO_", env_file=None, extra="ignore")

    api_key: str | None = Field(default_factory=lambda: os.getenv("ANTHROPIC_API_KEY"))
    model: str = Field(default=DEFAULT_MODEL)
    auto_push: bool = Field(default=False)
    home: str = Field(default_factory=_default_home)
    skip_directories: list[str] = Field(default_factory=lambda: sorted(DEFAULT_SKIP_DIRECTORIES))


def get_settings(home: str | None = None) -> Settings:
    """Settings with config file values taking precedence over the environment."""
    home = os.path.expanduser(home) if home else _default_home()
    stored = ConfigStore(home).load()
    stored.pop("home", None)
    return Settings(home=home, **stored)
