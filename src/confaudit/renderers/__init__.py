"""Output format renderers."""

from confaudit.renderers.base import OutputFormat, RenderContext, Renderer
from confaudit.renderers.json import JSONRenderer
from confaudit.renderers.terminal import StdoutRenderer, TableRenderer

__all__ = [
    "OutputFormat",
    "RenderContext",
    "Renderer",
    "JSONRenderer",
    "StdoutRenderer",
    "TableRenderer",
    "get_renderer",
]


def get_renderer(format: OutputFormat | str) -> Renderer:
    """Get a renderer for the specified format.

    Args:
        format: Output format (OutputFormat enum or string)

    Returns:
        Appropriate renderer instance

    Raises:
        ValueError: If format is not supported
    """
    if isinstance(format, str):
        format = OutputFormat(format)

    renderers = {
        OutputFormat.STDOUT: StdoutRenderer,
        OutputFormat.TABLE: TableRenderer,
        OutputFormat.JSON: JSONRenderer,
    }

    renderer_class = renderers.get(format)
    if renderer_class is None:
        raise ValueError(f"Unsupported format: {format}")

    return renderer_class()
