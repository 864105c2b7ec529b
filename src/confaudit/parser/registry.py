"""Parser registry for looking up format backends by name or path."""

from __future__ import annotations

import os
from typing import Iterator

from confaudit.parser.base import Parser
from confaudit.utils.errors import UnknownParserError


class ParserRegistry:
    """Registry of configuration format backends.

    Backends are looked up by name (for ``--parser``) or by the file name
    and extension of a path (for auto-detection).

    Example:
        registry = ParserRegistry()
        registry.register(YAMLParser())
        registry.for_path("deploy/service.yaml").name  # "yaml"
    """

    def __init__(self) -> None:
        self._parsers: dict[str, Parser] = {}

    def register(self, parser: Parser) -> None:
        """Register a backend.

        Raises:
            ValueError: If a backend with the same name is already registered
        """
        if parser.name in self._parsers:
            raise ValueError(f"Parser '{parser.name}' is already registered")
        self._parsers[parser.name] = parser

    def unregister(self, name: str) -> None:
        """Unregister a backend by name.

        Raises:
            KeyError: If no backend with that name is registered
        """
        if name not in self._parsers:
            raise KeyError(f"No parser named '{name}' is registered")
        del self._parsers[name]

    def get(self, name: str) -> Parser | None:
        return self._parsers.get(name)

    def __getitem__(self, name: str) -> Parser:
        """Get a backend by name.

        Raises:
            UnknownParserError: If no backend with that name is registered
        """
        if name not in self._parsers:
            raise UnknownParserError(name)
        return self._parsers[name]

    def __contains__(self, name: str) -> bool:
        return name in self._parsers

    def __iter__(self) -> Iterator[Parser]:
        return iter(self._parsers.values())

    def __len__(self) -> int:
        return len(self._parsers)

    @property
    def names(self) -> list[str]:
        """Get names of all registered backends."""
        return list(self._parsers.keys())

    def for_path(self, path: str) -> Parser | None:
        """Find the backend that handles a path.

        Exact file names win over extensions. Matching is case-insensitive.

        Args:
            path: File path

        Returns:
            The matching backend, or None if the path is not supported
        """
        basename = os.path.basename(path).lower()
        for parser in self._parsers.values():
            if basename in parser.filenames:
                return parser

        extension = os.path.splitext(basename)[1]
        if not extension:
            return None
        for parser in self._parsers.values():
            if extension in parser.extensions:
                return parser
        return None

    def clear(self) -> None:
        self._parsers.clear()
