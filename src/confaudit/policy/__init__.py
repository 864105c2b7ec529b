"""Rule-expression policy engine."""

from confaudit.policy.models import PolicyDocument, PolicyRule, RuleKind
from confaudit.policy.loader import collect_files, deep_merge, load_data, load_policy_documents
from confaudit.policy.engine import COMBINED_FILENAME, Engine, PolicyEngineLoader

__all__ = [
    "PolicyDocument",
    "PolicyRule",
    "RuleKind",
    "collect_files",
    "deep_merge",
    "load_data",
    "load_policy_documents",
    "COMBINED_FILENAME",
    "Engine",
    "PolicyEngineLoader",
]
