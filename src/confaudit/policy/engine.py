"""Rule-expression policy engine."""

from __future__ import annotations

from typing import Any

from confaudit.models.result import CheckResult, Result
from confaudit.policy.loader import load_data, load_policy_documents
from confaudit.policy.models import PolicyDocument, PolicyRule, RuleKind
from confaudit.utils.context import RunContext
from confaudit.utils.errors import PolicyEvaluationError, PolicyLoadError
from confaudit.utils.expression import SafeExpressionEvaluator
from confaudit.utils.logging import get_logger

logger = get_logger("policy")

COMBINED_FILENAME = "Combined"


class _FormatContext(dict):
    """Mapping for str.format_map that leaves unknown placeholders untouched."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


class Engine:
    """Evaluates YAML rule policies against parsed configurations.

    Rules are grouped by namespace. Each rule condition is evaluated with
    these variables:

    - ``input``: the configuration value, or in combined mode a list of
      ``{"path": ..., "contents": ...}`` entries
    - ``filename``: the file being checked ("Combined" in combined mode)
    - ``namespace``: the namespace being evaluated
    - ``data``: the merged data files

    Example:
        engine = Engine(documents, data={"allowed_registries": ["ghcr.io"]})
        results = engine.check(ctx, {"pod.yaml": pod}, "main")
    """

    def __init__(
        self,
        documents: list[PolicyDocument],
        data: dict[str, Any] | None = None,
        trace: bool = False,
        evaluator: SafeExpressionEvaluator | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            documents: Loaded policy documents
            data: Merged data files, exposed as ``data``
            trace: Record one trace line per evaluated rule
            evaluator: Expression evaluator for rule conditions

        Raises:
            PolicyLoadError: If rules are duplicated, malformed or reference unknown rules
        """
        self._data = data or {}
        self._trace = trace
        self._evaluator = evaluator or SafeExpressionEvaluator()
        self._rules: dict[str, list[PolicyRule]] = {}

        for document in documents:
            rules = self._rules.setdefault(document.namespace, [])
            for rule in document.enabled_rules:
                if any(existing.name == rule.name for existing in rules):
                    raise PolicyLoadError(
                        f"duplicate rule {document.namespace}.{rule.name}",
                        path=document.source,
                    )
                try:
                    self._evaluator.compile(rule.condition)
                except ValueError as e:
                    raise PolicyLoadError(
                        f"rule {document.namespace}.{rule.name}: {e}",
                        path=document.source,
                    ) from e
                rules.append(rule)

        for namespace, rules in self._rules.items():
            names = {r.name for r in rules if r.kind.is_failure}
            for rule in rules:
                if rule.kind != RuleKind.EXCEPTION:
                    continue
                unknown = [name for name in rule.rules if name not in names]
                if unknown:
                    raise PolicyLoadError(
                        f"exception {namespace}.{rule.name} references unknown rules: {', '.join(unknown)}"
                    )

    def namespaces(self) -> list[str]:
        """Namespaces in the order they were first loaded."""
        return list(self._rules.keys())

    def rules(self, namespace: str) -> list[PolicyRule]:
        return list(self._rules.get(namespace, []))

    def check(self, ctx: RunContext, configs: dict[str, Any], namespace: str) -> list[CheckResult]:
        """Evaluate a namespace against each configuration.

        Returns:
            One result per configuration, ordered by file name
        """
        results = []
        for filename in sorted(configs):
            ctx.raise_if_done()
            results.append(self._evaluate(namespace, filename, configs[filename]))
        return results

    def check_combined(self, ctx: RunContext, configs: dict[str, Any], namespace: str) -> CheckResult:
        """Evaluate a namespace once against every configuration."""
        ctx.raise_if_done()
        combined = [{"path": path, "contents": configs[path]} for path in sorted(configs)]
        return self._evaluate(namespace, COMBINED_FILENAME, combined)

    def _evaluate(self, namespace: str, filename: str, value: Any) -> CheckResult:
        rules = self._rules.get(namespace, [])
        context = {"input": value, "filename": filename, "namespace": namespace, "data": self._data}
        traces: list[str] = []

        excepted: set[str] = set()
        for rule in rules:
            if rule.kind == RuleKind.EXCEPTION and self._holds(rule, namespace, context, traces):
                excepted.update(rule.rules)

        successes = 0
        warnings: list[Result] = []
        failures: list[Result] = []
        exceptions: list[Result] = []

        for rule in rules:
            if rule.kind == RuleKind.EXCEPTION:
                continue
            if not self._holds(rule, namespace, context, traces):
                successes += 1
                continue

            result = Result(
                message=self._format(rule.report_message, context),
                metadata={"rule": rule.name, "kind": rule.kind.value, **rule.metadata},
            )
            if rule.kind == RuleKind.WARN:
                warnings.append(result)
            elif rule.name in excepted:
                exceptions.append(result)
            else:
                failures.append(result)

        return CheckResult(
            filename=filename,
            namespace=namespace,
            successes=successes,
            warnings=warnings,
            failures=failures,
            exceptions=exceptions,
            traces=traces,
        )

    def _holds(self, rule: PolicyRule, namespace: str, context: dict[str, Any], traces: list[str]) -> bool:
        try:
            holds = bool(self._evaluator.evaluate(rule.condition, context))
        except Exception as e:
            raise PolicyEvaluationError(rule.name, namespace, e) from e

        if self._trace:
            line = f"{context['filename']}: {namespace}.{rule.name} [{rule.kind.value}] condition={holds}"
            traces.append(line)
            logger.debug(line, extra={"context": {"namespace": namespace, "rule": rule.name}})
        return holds

    @staticmethod
    def _format(message: str, context: dict[str, Any]) -> str:
        try:
            return message.format_map(_FormatContext(context))
        except (KeyError, IndexError, AttributeError, TypeError, ValueError):
            return message


class PolicyEngineLoader:
    """Loads an Engine from policy and data paths.

    Example:
        loader = PolicyEngineLoader(trace=True)
        engine = loader.load(RunContext.background(), ["policy"], ["data"])
    """

    def __init__(self, trace: bool = False, evaluator: SafeExpressionEvaluator | None = None) -> None:
        self._trace = trace
        self._evaluator = evaluator

    def load(self, ctx: RunContext, policy_paths: list[str], data_paths: list[str]) -> Engine:
        """Load policies and data.

        Raises:
            PolicyLoadError: If no policies are found or a source is invalid
        """
        documents = load_policy_documents(ctx, policy_paths)
        if not documents:
            raise PolicyLoadError(f"no policies found in {', '.join(policy_paths) or 'no paths'}")
        data = load_data(ctx, data_paths)

        engine = Engine(documents, data=data, trace=self._trace, evaluator=self._evaluator)
        logger.debug(f"Loaded namespaces: {', '.join(engine.namespaces())}")
        return engine
