"""Configuration file support for confaudit."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field


class TestOptions(BaseModel):
    """Options for one test run.

    Every option the ``test`` command exposes. The runner interprets the
    selection and loading options; ``fail_on_warn``, ``no_color`` and
    ``output`` are only read by the CLI and renderers, and ``trace`` is
    handed to the policy engine loader.
    """

    __test__ = False

    policy: list[str] = Field(default_factory=lambda: ["policy"], description="Policy paths")
    data: list[str] = Field(default_factory=list, description="Data file paths")
    update: list[str] = Field(
        default_factory=list,
        description="Policy bundle URLs downloaded into the first policy path",
    )
    ignore: str = Field(default="", description="Regex of paths to skip in directories")
    parser: str = Field(default="", description="Force a configuration parser")
    namespace: list[str] = Field(default_factory=lambda: ["main"], description="Namespaces")
    all_namespaces: bool = Field(default=False, description="Evaluate every namespace")
    namespace_prefix: str = Field(default="", description="Evaluate namespaces with this prefix")
    combine: bool = Field(default=False, description="Evaluate all files together")
    fail_on_warn: bool = Field(default=False, description="Non-zero exit code on warnings")
    no_color: bool = Field(default=False, description="Disable color output")
    trace: bool = Field(default=False, description="Record rule evaluation traces")
    output: str = Field(default="stdout", description="Output format (stdout, table, json)")


class OutputConfig(BaseModel):
    """Output configuration."""

    color: bool = Field(default=True, description="Enable color output")
    verbose: bool = Field(default=False, description="Verbose output")


class DownloadConfig(BaseModel):
    """Policy bundle download configuration."""

    timeout: float = Field(default=30.0, description="HTTP timeout in seconds")
    max_retries: int = Field(default=0, description="Transport-level connection retries")


class ConfauditConfig(BaseModel):
    """Main configuration for confaudit."""

    test: TestOptions = Field(default_factory=TestOptions)
    output: OutputConfig = Field(default_factory=OutputConfig)
    download: DownloadConfig = Field(default_factory=DownloadConfig)


def get_config_paths() -> list[Path]:
    """Get possible configuration file paths.

    Returns:
        List of paths to check for configuration files
    """
    paths = []

    paths.append(Path.cwd() / ".confaudit.yaml")
    paths.append(Path.cwd() / ".confaudit.yml")
    paths.append(Path.cwd() / "confaudit.yaml")

    home = Path.home()
    paths.append(home / ".confaudit.yaml")
    paths.append(home / ".config" / "confaudit" / "config.yaml")

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        paths.append(Path(xdg_config) / "confaudit" / "config.yaml")

    return paths


def load_config(config_path: Path | str | None = None) -> ConfauditConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file. If None, searches default locations.

    Returns:
        Loaded configuration
    """
    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            return _load_config_file(path)
        raise FileNotFoundError(f"Config file not found: {config_path}")

    for path in get_config_paths():
        if path.exists():
            return _load_config_file(path)

    return ConfauditConfig()


def _load_config_file(path: Path) -> ConfauditConfig:
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}") from e
    if data is None:
        return ConfauditConfig()
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")

    # Accept the CLI spelling of option names (all-namespaces)
    test = data.get("test")
    if isinstance(test, dict):
        data["test"] = {key.replace("-", "_"): value for key, value in test.items()}

    try:
        return ConfauditConfig.model_validate(data)
    except ValueError as e:
        raise ValueError(f"Failed to load config file: {e}") from e


def save_config(config: ConfauditConfig, config_path: Path | str | None = None) -> Path:
    """Save configuration to file.

    Args:
        config: Configuration to save
        config_path: Path to save to. Defaults to ./.confaudit.yaml

    Returns:
        Path where config was saved
    """
    if config_path is None:
        config_path = Path.cwd() / ".confaudit.yaml"
    else:
        config_path = Path(config_path)

    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json", exclude_defaults=True)
    config_path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=False))

    return config_path


def get_default_config() -> ConfauditConfig:
    """Get the default configuration."""
    return ConfauditConfig()
