"""Base renderer protocol and types."""

from enum import Enum
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field

from confaudit.models.result import CheckResult


class OutputFormat(str, Enum):
    """Supported output formats."""

    STDOUT = "stdout"
    TABLE = "table"
    JSON = "json"


class RenderContext(BaseModel):
    """Context for rendering operations."""

    model_config = {"frozen": True}

    format: OutputFormat = Field(default=OutputFormat.STDOUT, description="Output format")
    color: bool = Field(default=True, description="Enable color output (terminal only)")
    trace: bool = Field(default=False, description="Include evaluation traces")
    indent: int = Field(default=2, description="JSON indentation")


@runtime_checkable
class Renderer(Protocol):
    """Protocol for result renderers.

    Renderers turn the results of a test run into human-readable or
    machine-readable output.

    Example:
        class CountRenderer:
            @property
            def format(self) -> OutputFormat:
                return OutputFormat.STDOUT

            def render(self, results: list[CheckResult], context: RenderContext) -> str:
                return f"{len(results)} results"
    """

    @property
    def format(self) -> OutputFormat:
        """The output format this renderer produces."""
        ...

    def render(self, results: list[CheckResult], context: RenderContext) -> str:
        """Render results.

        Args:
            results: Results of a test run
            context: Rendering context with options

        Returns:
            Rendered output; terminal renderers print directly and return ""
        """
        ...
