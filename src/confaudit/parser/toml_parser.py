"""TOML configuration backend."""

from __future__ import annotations

import tomllib
from typing import Any


class TOMLParser:
    """Parses TOML documents.

    Dates and times are returned as ISO strings so that values stay
    JSON-like.
    """

    name = "toml"
    extensions = (".toml",)
    filenames: tuple[str, ...] = ()

    def unmarshal(self, content: bytes) -> Any:
        try:
            data = tomllib.loads(content.decode("utf-8"))
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
            raise ValueError(f"invalid TOML: {e}") from e
        return _stringify_dates(data)


def _stringify_dates(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _stringify_dates(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_stringify_dates(v) for v in value]
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return value
