"""JSON renderer for check results."""

from __future__ import annotations

import json

from confaudit.models.result import CheckResult
from confaudit.renderers.base import OutputFormat, RenderContext


class JSONRenderer:
    """Renders results as a JSON array, one object per check result.

    Example:
        renderer = JSONRenderer()
        print(renderer.render(results, RenderContext(format=OutputFormat.JSON)))
    """

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.JSON

    def render(self, results: list[CheckResult], context: RenderContext) -> str:
        exclude = None if context.trace else {"traces"}
        data = [result.model_dump(mode="json", exclude=exclude) for result in results]
        return json.dumps(data, indent=context.indent or None, ensure_ascii=False)
