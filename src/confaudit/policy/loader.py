"""Loading of policy documents and data files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from confaudit.policy.models import PolicyDocument
from confaudit.utils.context import RunContext
from confaudit.utils.errors import PolicyLoadError
from confaudit.utils.logging import get_logger

logger = get_logger("policy")

POLICY_EXTENSIONS = (".yaml", ".yml")
DATA_EXTENSIONS = (".yaml", ".yml", ".json")


def collect_files(paths: list[str], extensions: tuple[str, ...]) -> list[Path]:
    """Expand files and directories into a sorted list of matching files.

    Files named directly are kept whatever their extension; directories are
    searched recursively for files with one of ``extensions``.

    Raises:
        PolicyLoadError: If a path does not exist
    """
    files: list[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            files.extend(
                sorted(p for p in path.rglob("*") if p.is_file() and p.suffix.lower() in extensions)
            )
        elif path.is_file():
            files.append(path)
        else:
            raise PolicyLoadError(f"policy path not found: {raw}", path=raw)
    return files


def load_policy_documents(ctx: RunContext, paths: list[str]) -> list[PolicyDocument]:
    """Load every policy document found under the given paths.

    A file may hold several YAML documents; each becomes one
    PolicyDocument.

    Raises:
        PolicyLoadError: If a file is not valid YAML or not a valid policy
    """
    documents: list[PolicyDocument] = []
    for path in collect_files(paths, POLICY_EXTENSIONS):
        ctx.raise_if_done()
        logger.debug(f"Loading policy {path}")
        try:
            raw_documents = [d for d in yaml.safe_load_all(path.read_text()) if d is not None]
        except (OSError, yaml.YAMLError) as e:
            raise PolicyLoadError(f"read policy {path}: {e}", path=str(path)) from e

        for raw in raw_documents:
            if not isinstance(raw, dict):
                raise PolicyLoadError(f"policy {path} must be a mapping", path=str(path))
            try:
                documents.append(PolicyDocument.model_validate({**raw, "source": str(path)}))
            except ValidationError as e:
                raise PolicyLoadError(f"invalid policy {path}: {e}", path=str(path)) from e

    return documents


def load_data(ctx: RunContext, paths: list[str]) -> dict[str, Any]:
    """Load and deep-merge data files into one mapping.

    Raises:
        PolicyLoadError: If a file cannot be parsed or is not a mapping
    """
    data: dict[str, Any] = {}
    for path in collect_files(paths, DATA_EXTENSIONS):
        ctx.raise_if_done()
        logger.debug(f"Loading data {path}")
        try:
            text = path.read_text()
            value = json.loads(text) if path.suffix.lower() == ".json" else yaml.safe_load(text)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise PolicyLoadError(f"read data {path}: {e}", path=str(path)) from e

        if value is None:
            continue
        if not isinstance(value, dict):
            raise PolicyLoadError(f"data file {path} must contain a mapping", path=str(path))
        deep_merge(data, value)
    return data


def deep_merge(target: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """Merge ``source`` into ``target`` in place; nested mappings are merged, other values replaced."""
    for key, value in source.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            deep_merge(target[key], value)
        else:
            target[key] = value
    return target
