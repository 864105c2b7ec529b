"""Check result data models."""

from typing import Any

from pydantic import BaseModel, Field


class Result(BaseModel):
    """A single message produced by a policy rule."""

    model_config = {"frozen": True}

    message: str = Field(description="Message reported by the rule")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional rule context (rule name, kind)",
    )


class CheckResult(BaseModel):
    """Outcome of evaluating one namespace against one file (or all files combined)."""

    model_config = {"frozen": True}

    filename: str = Field(description="File the result applies to, or 'Combined'")
    namespace: str = Field(description="Policy namespace that was evaluated")
    successes: int = Field(default=0, description="Number of rules that passed")
    warnings: list[Result] = Field(default_factory=list, description="Warnings raised")
    failures: list[Result] = Field(default_factory=list, description="Failures raised")
    exceptions: list[Result] = Field(
        default_factory=list,
        description="Failures suppressed by exception rules",
    )
    traces: list[str] = Field(default_factory=list, description="Evaluation trace lines")

    @property
    def passed(self) -> bool:
        """Check if no failures were raised."""
        return not self.failures

    @property
    def failure_count(self) -> int:
        return len(self.failures)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)


class Summary(BaseModel):
    """Totals over a list of check results."""

    model_config = {"frozen": True}

    tests: int = Field(default=0, description="Total number of rule evaluations")
    passed: int = Field(default=0, description="Rules that passed")
    warnings: int = Field(default=0, description="Warnings raised")
    failures: int = Field(default=0, description="Failures raised")
    exceptions: int = Field(default=0, description="Failures turned into exceptions")


def summarize(results: list[CheckResult]) -> Summary:
    """Compute totals for a list of check results.

    Args:
        results: Results returned by a test run

    Returns:
        Summary with counts across all results
    """
    passed = sum(r.successes for r in results)
    warnings = sum(len(r.warnings) for r in results)
    failures = sum(len(r.failures) for r in results)
    exceptions = sum(len(r.exceptions) for r in results)
    return Summary(
        tests=passed + warnings + failures + exceptions,
        passed=passed,
        warnings=warnings,
        failures=failures,
        exceptions=exceptions,
    )
