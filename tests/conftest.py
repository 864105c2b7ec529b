"""Shared test fixtures for confaudit tests."""

import logging
from pathlib import Path
from typing import Any

import pytest

from confaudit.models.result import CheckResult, Result
from confaudit.utils.context import RunContext


class StubParser:
    """Parser that returns the file name as each file's value."""

    def __init__(self, supported: tuple[str, ...] = (".yaml", ".json")) -> None:
        self.supported = supported
        self.calls: list[tuple[str, list[str], str | None]] = []

    def parse(self, files: list[str]) -> dict[str, Any]:
        self.calls.append(("parse", files, None))
        return {f: {"name": f} for f in files}

    def parse_as(self, files: list[str], name: str) -> dict[str, Any]:
        self.calls.append(("parse_as", files, name))
        return {f: {"name": f, "parser": name} for f in files}

    def is_supported(self, path: str) -> bool:
        return path.endswith(self.supported)


class StubEngine:
    """Engine returning canned results and recording calls."""

    def __init__(
        self,
        namespaces: list[str] | None = None,
        fail_on: str | None = None,
    ) -> None:
        self._namespaces = namespaces or ["main"]
        self.fail_on = fail_on
        self.calls: list[tuple[str, str]] = []

    def namespaces(self) -> list[str]:
        return self._namespaces

    def check(self, ctx: RunContext, configs: dict[str, Any], namespace: str) -> list[CheckResult]:
        self.calls.append(("check", namespace))
        if namespace == self.fail_on:
            raise RuntimeError(f"boom in {namespace}")
        return [CheckResult(filename=f, namespace=namespace, successes=1) for f in configs]

    def check_combined(self, ctx: RunContext, configs: dict[str, Any], namespace: str) -> CheckResult:
        self.calls.append(("check_combined", namespace))
        if namespace == self.fail_on:
            raise RuntimeError(f"boom in {namespace}")
        return CheckResult(
            filename="Combined",
            namespace="fixed",
            failures=[Result(message="fixed result")],
        )


class StubLoader:
    """Loader handing out a prepared engine."""

    def __init__(self, engine: StubEngine, events: list[str] | None = None) -> None:
        self.engine = engine
        self.events = events if events is not None else []
        self.calls: list[tuple[list[str], list[str]]] = []

    def load(self, ctx: RunContext, policy_paths: list[str], data_paths: list[str]) -> StubEngine:
        self.events.append("load")
        self.calls.append((policy_paths, data_paths))
        return self.engine


class StubDownloader:
    """Downloader recording its calls."""

    def __init__(self, events: list[str] | None = None, error: Exception | None = None) -> None:
        self.events = events if events is not None else []
        self.error = error
        self.calls: list[tuple[str, list[str]]] = []

    def download(self, ctx: RunContext, destination: str, sources: list[str]) -> None:
        self.events.append("download")
        self.calls.append((destination, sources))
        if self.error:
            raise self.error


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by CLI invocations."""
    yield
    logger = logging.getLogger("confaudit")
    logger.handlers = []
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def ctx() -> RunContext:
    return RunContext.background()


@pytest.fixture
def config_files(tmp_path: Path) -> list[str]:
    """Three YAML configuration files."""
    paths = []
    for name, user in (("a.yaml", "root"), ("b.yaml", "app"), ("c.yaml", "root")):
        path = tmp_path / "configs" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"kind: Deployment\nuser: {user}\nreplicas: 1\n")
        paths.append(str(path))
    return paths


@pytest.fixture
def policy_dir(tmp_path: Path) -> Path:
    """A policy directory with two namespaces."""
    directory = tmp_path / "policy"
    directory.mkdir()
    (directory / "main.yaml").write_text(
        """
namespace: main
rules:
  - name: no-root
    kind: deny
    condition: "input.get('user') == 'root'"
    message: "{filename} runs as root"
  - name: replicas
    kind: warn
    condition: "input.get('replicas', 0) < 2"
    message: "fewer than two replicas"
"""
    )
    (directory / "kubernetes.yaml").write_text(
        """
namespace: kubernetes.deployment
rules:
  - name: allowed-kind
    condition: "input.get('kind') not in data.get('kinds', [])"
    message: "kind {input[kind]} is not allowed"
"""
    )
    return directory
