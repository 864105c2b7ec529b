"""Multi-backend configuration parser used by the test runner."""

from __future__ import annotations

import os
import sys
from typing import Any, TextIO

from confaudit.parser.registry import ParserRegistry
from confaudit.utils.errors import ParserError, UnknownParserError
from confaudit.utils.logging import get_logger

logger = get_logger("parser")

STDIN_MARKER = "-"


class ConfigurationParser:
    """Turns a list of files into a mapping of file name to parsed value.

    Files are matched to a backend by name and extension, or forced to a
    single backend by name. The stdin marker ``-`` reads the given text
    stream once and is parsed as YAML unless a backend is forced.

    Example:
        parser = ConfigurationParser()
        configs = parser.parse(["deploy.yaml", "app.toml"])
        configs = parser.parse_as(["settings.txt"], "ini")
    """

    STDIN_PARSER = "yaml"

    def __init__(self, registry: ParserRegistry | None = None, stdin: TextIO | None = None) -> None:
        """Initialize the parser.

        Args:
            registry: Backends to use. Defaults to the built-in backends.
            stdin: Stream read for the ``-`` marker. Defaults to ``sys.stdin``.
        """
        if registry is None:
            from confaudit.parser import get_default_registry

            registry = get_default_registry()
        self._registry = registry
        self._stdin = stdin

    @property
    def registry(self) -> ParserRegistry:
        return self._registry

    def is_supported(self, path: str) -> bool:
        """Check whether any backend handles the path."""
        return self._registry.for_path(path) is not None

    def parse(self, files: list[str]) -> dict[str, Any]:
        """Parse files, choosing each file's backend from its name.

        Raises:
            UnknownParserError: If no backend handles a file
            ParserError: If a file cannot be read or parsed
        """
        configurations: dict[str, Any] = {}
        for path in files:
            if path == STDIN_MARKER:
                backend = self._registry[self.STDIN_PARSER]
            else:
                backend = self._registry.for_path(path)
                if backend is None:
                    extension = os.path.splitext(path)[1] or os.path.basename(path)
                    raise UnknownParserError(extension)
            configurations[path] = self._unmarshal(backend, path)
        return configurations

    def parse_as(self, files: list[str], name: str) -> dict[str, Any]:
        """Parse every file with the named backend.

        Raises:
            UnknownParserError: If no backend has that name
            ParserError: If a file cannot be read or parsed
        """
        backend = self._registry[name]
        return {path: self._unmarshal(backend, path) for path in files}

    def _unmarshal(self, backend: Any, path: str) -> Any:
        content = self._read(path)
        logger.debug(f"Parsing {path} as {backend.name}")
        try:
            return backend.unmarshal(content)
        except ValueError as e:
            raise ParserError(path, e) from e

    def _read(self, path: str) -> bytes:
        if path == STDIN_MARKER:
            stream = self._stdin if self._stdin is not None else sys.stdin
            return stream.read().encode("utf-8")
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as e:
            raise ParserError(path, e) from e
