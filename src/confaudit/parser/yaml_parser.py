"""YAML configuration backend."""

from __future__ import annotations

from typing import Any

import yaml


class YAMLParser:
    """Parses YAML, including multi-document streams.

    A stream with one document yields that document's value; a stream with
    several yields the list of documents. Empty documents are dropped.
    """

    name = "yaml"
    extensions = (".yaml", ".yml")
    filenames: tuple[str, ...] = ()

    def unmarshal(self, content: bytes) -> Any:
        try:
            documents = [doc for doc in yaml.safe_load_all(content) if doc is not None]
        except yaml.YAMLError as e:
            raise ValueError(f"invalid YAML: {e}") from e

        if not documents:
            return None
        if len(documents) == 1:
            return documents[0]
        return documents
