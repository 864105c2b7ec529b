"""Policy document data models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class RuleKind(str, Enum):
    """What a rule reports when its condition holds."""

    DENY = "deny"
    VIOLATION = "violation"
    WARN = "warn"
    EXCEPTION = "exception"

    @property
    def is_failure(self) -> bool:
        return self in (RuleKind.DENY, RuleKind.VIOLATION)


class PolicyRule(BaseModel):
    """A single policy rule.

    The condition describes the offending state: a ``deny`` rule whose
    condition is true reports a failure, a ``warn`` rule a warning. An
    ``exception`` rule whose condition is true turns the failures of the
    rules it names into exceptions.
    """

    model_config = {"frozen": True}

    name: str = Field(description="Rule name, unique within its namespace")
    kind: RuleKind = Field(default=RuleKind.DENY, description="Rule kind")
    condition: str = Field(description="Condition expression")
    message: str = Field(default="", description="Message reported when the condition holds")
    description: str = Field(default="", description="Rule description")
    enabled: bool = Field(default=True, description="Whether rule is enabled")
    rules: list[str] = Field(
        default_factory=list,
        description="Rules suppressed by an exception rule",
    )
    metadata: dict[str, Any] = Field(default_factory=dict, description="Extra rule metadata")

    @property
    def report_message(self) -> str:
        return self.message or self.description or self.name


class PolicyDocument(BaseModel):
    """A namespace's worth of rules loaded from one YAML document."""

    model_config = {"frozen": True}

    namespace: str = Field(default="main", description="Policy namespace")
    description: str = Field(default="", description="Policy description")
    rules: list[PolicyRule] = Field(default_factory=list, description="Policy rules")
    source: str | None = Field(default=None, description="File the document was loaded from")

    @property
    def enabled_rules(self) -> list[PolicyRule]:
        """Get all enabled rules."""
        return [r for r in self.rules if r.enabled]
