"""Collaborator protocols the test runner depends on."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from confaudit.models.result import CheckResult
from confaudit.utils.context import RunContext


@runtime_checkable
class ConfigParser(Protocol):
    """Turns resolved files into a mapping of file name to parsed value."""

    def parse(self, files: list[str]) -> dict[str, Any]:
        """Parse files, detecting each file's format."""
        ...

    def parse_as(self, files: list[str], name: str) -> dict[str, Any]:
        """Parse every file with the named format."""
        ...

    def is_supported(self, path: str) -> bool:
        """Check whether a file found in a directory walk can be parsed."""
        ...


@runtime_checkable
class PolicyEngine(Protocol):
    """A loaded set of policies."""

    def namespaces(self) -> list[str]:
        """Namespaces that contain policy rules."""
        ...

    def check(self, ctx: RunContext, configs: dict[str, Any], namespace: str) -> list[CheckResult]:
        """Evaluate a namespace against each configuration separately."""
        ...

    def check_combined(self, ctx: RunContext, configs: dict[str, Any], namespace: str) -> CheckResult:
        """Evaluate a namespace against all configurations at once."""
        ...


@runtime_checkable
class EngineLoader(Protocol):
    """Builds a PolicyEngine from policy and data sources."""

    def load(self, ctx: RunContext, policy_paths: list[str], data_paths: list[str]) -> PolicyEngine:
        ...


@runtime_checkable
class Downloader(Protocol):
    """Fetches policy bundles into a local directory."""

    def download(self, ctx: RunContext, destination: str, sources: list[str]) -> None:
        ...
