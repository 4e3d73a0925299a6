"""JSON config file kept in the dido home directory."""

from __future__ import annotations

import json
import logging
import os
from typing import Any

from ..core.constants import CONFIG_FILENAME

logger = logging.getLogger(__name__)


class ConfigStore:
    def __init__(self, home: str) -> None:
        self.home = home
        self.path = os.path.join(home, CONFIG_FILENAME)

    def load(self) -> dict[str, Any]:
        if not os.path.isfile(self.path):
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("ignoring unreadable config %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("ignoring config %s: expected a JSON object", self.path)
            return {}
        return {k: v for k, v in data.items() if v is not None}

    def save(self, values: dict[str, Any]) -> None:
        os.makedirs(self.home, exist_ok=True)
        clean = {k: v for k, v in values.items() if v is not None}
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(clean, f, indent=2)
            f.write("\n")

    def update(self, **changes: Any) -> dict[str, Any]:
        values = self.load()
        values.update({k: v for k, v in changes.items() if v is not None})
        self.save(values)
        return values
