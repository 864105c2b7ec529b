"""Dotenv configuration backend."""

from __future__ import annotations

from typing import Any


class DotenvParser:
    """Parses ``KEY=value`` environment files.

    Supports:
    - KEY=value
    - KEY="quoted value" and KEY='quoted value'
    - export KEY=value
    - # comments and empty lines
    """

    name = "dotenv"
    extensions = (".env",)
    filenames = (".env",)

    def unmarshal(self, content: bytes) -> Any:
        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ValueError(f"invalid dotenv: {e}") from e

        env: dict[str, str] = {}
        for line_num, line in enumerate(text.splitlines(), 1):
            line = line.strip()

            if not line or line.startswith("#"):
                continue

            if line.startswith("export "):
                line = line[len("export "):].lstrip()

            if "=" not in line:
                raise ValueError(f"invalid dotenv: line {line_num} has no '='")

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip()

            if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
                value = value[1:-1]

            env[key] = value

        return env
