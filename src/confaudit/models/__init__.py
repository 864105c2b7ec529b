"""Data models for confaudit.

All models are Pydantic BaseModel with frozen=True for immutability.
"""

from confaudit.models.common import AuditError
from confaudit.models.result import CheckResult, Result, Summary, summarize

__all__ = [
    # Common
    "AuditError",
    # Results
    "CheckResult",
    "Result",
    "Summary",
    "summarize",
]
