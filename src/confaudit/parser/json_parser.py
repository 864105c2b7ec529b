"""JSON configuration backend."""

from __future__ import annotations

import json
from typing import Any


class JSONParser:
    """Parses JSON documents."""

    name = "json"
    extensions = (".json",)
    filenames: tuple[str, ...] = ()

    def unmarshal(self, content: bytes) -> Any:
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(f"invalid JSON: {e}") from e
