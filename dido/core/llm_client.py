"""Anthropic Messages API client for commit messages and project analysis."""

from __future__ import annotations

import json
import logging
import re
import urllib.error
import urllib.request
from collections.abc import Sequence
from typing import Any

from .constants import (
    ANTHROPIC_API_URL,
    ANTHROPIC_VERSION,
    DEFAULT_MODEL,
    HTTP_TIMEOUT_SEC,
    MAX_DIFF_CHARS,
    MAX_TOKENS,
    README_CONTEXT_CHARS,
    USER_AGENT,
)
from .types import CommitAnalysis, ProjectContext

logger = logging.getLogger(__name__)

COMMIT_SYSTEM_PROMPT = (
    "You write git commit messages. Reply with a JSON object with the keys "
    '"message" (the commit message: an imperative subject line of at most 72 '
    "characters, optionally followed by a blank line and a short body) and "
    '"reasoning" (one sentence on why). Match the style of the recent commits '
    "when there are any. Reply with JSON only."
)

PROJECT_SYSTEM_PROMPT = (
    "You classify software projects. Reply with a short project type such as "
    '"Python CLI tool", "React web application" or "Rust library". '
    "Reply with the project type only."
)

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$")


class LLMError(RuntimeError):
    pass


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + f"\n... [truncated {len(text) - limit} characters]"


def build_commit_prompt(
    diff: str,
    recent_commits: Sequence[str],
    project_context: ProjectContext | None,
    readme: str | None,
) -> str:
    parts: list[str] = []
    if project_context and project_context.project_type:
        parts.append(f"Project type: {project_context.project_type}")
    if project_context and project_context.commit_style:
        parts.append(f"Preferred commit style: {project_context.commit_style}")
    if readme:
        parts.append("README excerpt:\n" + readme[:README_CONTEXT_CHARS])
    if recent_commits:
        parts.append("Recent commits:\n" + "\n".join(f"- {c}" for c in recent_commits))
    parts.append("Staged diff:\n" + _truncate(diff, MAX_DIFF_CHARS))
    return "\n\n".join(parts)


def build_project_prompt(readme: str, files: Sequence[str]) -> str:
    listing = "\n".join(files[:100])
    return f"README:\n{readme[:README_CONTEXT_CHARS]}\n\nChanged files:\n{listing}"


def parse_commit_reply(text: str) -> tuple[str, str]:
    """Return (message, reasoning) from a model reply, JSON or plain text."""
    cleaned = _FENCE_RE.sub("", text.strip()).strip()
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        data = None
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        message = data["message"].strip()
        reasoning = str(data.get("reasoning") or "").strip()
    else:
        message, reasoning = cleaned.strip('"'), ""
    if not message:
        raise LLMError("Model returned an empty commit message")
    return message, reasoning


class CommitMessageGenerator:
    def __init__(self, api_key: str, model: str = DEFAULT_MODEL) -> None:
        if not api_key:
            raise LLMError("API key not configured")
        self.api_key = api_key
        self.model = model

    # ---------- low-level HTTP ----------
    def _request_json(self, payload: dict[str, Any]) -> Any:
        req = urllib.request.Request(
            ANTHROPIC_API_URL,
            data=json.dumps(payload).encode("utf-8"),
            method="POST",
        )
        req.add_header("Content-Type", "application/json")
        req.add_header("User-Agent", USER_AGENT)
        req.add_header("x-api-key", self.api_key)
        req.add_header("anthropic-version", ANTHROPIC_VERSION)
        logger.debug("POST %s model=%s", ANTHROPIC_API_URL, self.model)
        try:
            with urllib.request.urlopen(req, timeout=HTTP_TIMEOUT_SEC) as resp:
                return json.loads(resp.read().decode("utf-8"))
        except urllib.error.HTTPError as e:
            body = e.read().decode("utf-8", "ignore")
            raise LLMError(f"API request failed ({e.code}): {body or e.reason}") from e
        except urllib.error.URLError as e:
            raise LLMError(f"API request failed: {e.reason}") from e

    def _complete(self, system: str, prompt: str) -> str:
        data = self._request_json(
            {
                "model": self.model,
                "max_tokens": MAX_TOKENS,
                "system": system,
                "messages": [{"role": "user", "content": prompt}],
            }
        )
        try:
            blocks = data["content"]
            text = "".join(b.get("text", "") for b in blocks if b.get("type") == "text")
        except (KeyError, TypeError, AttributeError) as e:
            raise LLMError(f"Unexpected API response: {data!r}") from e
        return text.strip()

    # ---------- public API ----------
    def generate_commit_message(
        self,
        diff: str,
        recent_commits: Sequence[str],
        project_context: ProjectContext | None = None,
        readme: str | None = None,
    ) -> CommitAnalysis:
        if not diff.strip():
            raise LLMError("Nothing staged to describe")
        reply = self._complete(
            COMMIT_SYSTEM_PROMPT,
            build_commit_prompt(diff, recent_commits, project_context, readme),
        )
        message, reasoning = parse_commit_reply(reply)
        return CommitAnalysis(message=message, reasoning=reasoning)

    def analyze_project_type(self, readme: str, files: Sequence[str]) -> str:
        reply = self._complete(PROJECT_SYSTEM_PROMPT, build_project_prompt(readme, files))
        return reply.splitlines()[0].strip().strip('"') if reply else "unknown"
