"""INI configuration backend."""

from __future__ import annotations

import configparser
from typing import Any


class INIParser:
    """Parses INI files into a mapping of section name to key/value mapping.

    Values are kept as strings. Keys in the ``DEFAULT`` section are
    inherited by every other section, as configparser does.
    """

    name = "ini"
    extensions = (".ini", ".cfg", ".conf")
    filenames: tuple[str, ...] = ()

    def unmarshal(self, content: bytes) -> Any:
        parser = configparser.ConfigParser(interpolation=None)
        # Keep key case as written
        parser.optionxform = str  # type: ignore[assignment,method-assign]
        try:
            parser.read_string(content.decode("utf-8"))
        except (configparser.Error, UnicodeDecodeError) as e:
            raise ValueError(f"invalid INI: {e}") from e

        data: dict[str, Any] = {}
        defaults = dict(parser.defaults())
        if defaults:
            data[parser.default_section] = defaults
        for section in parser.sections():
            data[section] = dict(parser.items(section))
        return data
