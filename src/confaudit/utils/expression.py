"""Safe expression evaluator for policy rule conditions."""

from __future__ import annotations

import ast
import operator
import re
from typing import Any, Callable


def _regex_match(pattern: str, value: Any) -> bool:
    return isinstance(value, str) and re.search(pattern, value) is not None


def _get_path(value: Any, path: str, default: Any = None) -> Any:
    """Follow a dotted path through nested mappings and lists."""
    current = value
    for part in path.split("."):
        if isinstance(current, dict):
            if part not in current:
                return default
            current = current[part]
        elif isinstance(current, list) and part.isdigit() and int(part) < len(current):
            current = current[int(part)]
        else:
            return default
    return current


class SafeExpressionEvaluator:
    """Safe evaluator for policy rule conditions.

    Conditions are parsed with Python's AST and walked node by node, never
    handed to eval(). Only a small expression subset is accepted:

    - Comparisons: ==, !=, <, <=, >, >=, in, not in, is, is not
    - Boolean: and, or, not
    - Subscript and ``.get()`` on mappings, whitelisted str/dict/list methods
    - Calls to whitelisted helpers (len, any, all, regex_match, get_path, ...)
    - Literals, conditional expressions, list/set/generator comprehensions

    Example:
        evaluator = SafeExpressionEvaluator()
        context = {"input": {"kind": "Deployment", "spec": {"replicas": 1}}}
        evaluator.evaluate("input['spec']['replicas'] < 2", context)
    """

    COMPARE_OPS: dict[type, Callable[[Any, Any], bool]] = {
        ast.Eq: operator.eq,
        ast.NotEq: operator.ne,
        ast.Lt: operator.lt,
        ast.LtE: operator.le,
        ast.Gt: operator.gt,
        ast.GtE: operator.ge,
        ast.Is: operator.is_,
        ast.IsNot: operator.is_not,
        ast.In: lambda a, b: a in b,
        ast.NotIn: lambda a, b: a not in b,
    }

    BINARY_OPS: dict[type, Callable[[Any, Any], Any]] = {
        ast.Add: operator.add,
        ast.Sub: operator.sub,
        ast.Mult: operator.mul,
        ast.Div: operator.truediv,
        ast.FloorDiv: operator.floordiv,
        ast.Mod: operator.mod,
    }

    UNARY_OPS: dict[type, Callable[[Any], Any]] = {
        ast.Not: operator.not_,
        ast.USub: operator.neg,
        ast.UAdd: operator.pos,
    }

    ALLOWED_FUNCTIONS: dict[str, Callable[..., Any]] = {
        "len": len,
        "str": str,
        "int": int,
        "float": float,
        "bool": bool,
        "list": list,
        "dict": dict,
        "set": set,
        "min": min,
        "max": max,
        "sum": sum,
        "abs": abs,
        "all": all,
        "any": any,
        "sorted": sorted,
        "isinstance_str": lambda x: isinstance(x, str),
        "isinstance_list": lambda x: isinstance(x, list),
        "isinstance_dict": lambda x: isinstance(x, dict),
        "regex_match": _regex_match,
        "get_path": _get_path,
    }

    ALLOWED_STRING_METHODS = {
        "startswith",
        "endswith",
        "lower",
        "upper",
        "strip",
        "lstrip",
        "rstrip",
        "split",
        "join",
        "replace",
        "find",
        "count",
        "isdigit",
        "isalpha",
        "isalnum",
    }

    ALLOWED_DICT_METHODS = {
        "get",
        "keys",
        "values",
        "items",
    }

    ALLOWED_LIST_METHODS = {
        "index",
        "count",
    }

    def __init__(self, max_depth: int = 32) -> None:
        """Initialize the evaluator.

        Args:
            max_depth: Maximum AST depth to prevent stack overflow
        """
        self._max_depth = max_depth
        self._cache: dict[str, ast.expr] = {}

    def compile(self, expression: str) -> ast.expr:
        """Parse an expression, caching the tree.

        Raises:
            ValueError: If the expression has invalid syntax
        """
        tree = self._cache.get(expression)
        if tree is None:
            try:
                tree = ast.parse(expression, mode="eval").body
            except SyntaxError as e:
                raise ValueError(f"Invalid expression syntax: {e}") from e
            self._cache[expression] = tree
        return tree

    def evaluate(self, expression: str, context: dict[str, Any]) -> Any:
        """Evaluate an expression with the given context.

        Args:
            expression: Condition expression string
            context: Variables available in the expression

        Returns:
            Result of evaluating the expression

        Raises:
            ValueError: If expression is invalid or unsafe
        """
        return self._eval_node(self.compile(expression), context, depth=0)

    def _eval_node(self, node: ast.AST, context: dict[str, Any], depth: int) -> Any:
        if depth > self._max_depth:
            raise ValueError("Expression too deeply nested")

        if isinstance(node, ast.Constant):
            return node.value

        if isinstance(node, ast.Name):
            if node.id in context:
                return context[node.id]
            if node.id in self.ALLOWED_FUNCTIONS:
                return self.ALLOWED_FUNCTIONS[node.id]
            raise ValueError(f"Unknown variable: {node.id}")

        if isinstance(node, ast.Attribute):
            value = self._eval_node(node.value, context, depth + 1)
            attr = node.attr

            if isinstance(value, str) and attr in self.ALLOWED_STRING_METHODS:
                return getattr(value, attr)
            if isinstance(value, dict) and attr in self.ALLOWED_DICT_METHODS:
                return getattr(value, attr)
            if isinstance(value, list) and attr in self.ALLOWED_LIST_METHODS:
                return getattr(value, attr)

            raise ValueError(f"Cannot access attribute '{attr}'")

        if isinstance(node, ast.Subscript):
            value = self._eval_node(node.value, context, depth + 1)
            key = self._eval_node(node.slice, context, depth + 1)
            return value[key]

        if isinstance(node, ast.Slice):
            lower = self._eval_node(node.lower, context, depth + 1) if node.lower else None
            upper = self._eval_node(node.upper, context, depth + 1) if node.upper else None
            return slice(lower, upper)

        if isinstance(node, ast.Call):
            func = self._eval_node(node.func, context, depth + 1)
            args = [self._eval_node(arg, context, depth + 1) for arg in node.args]
            kwargs = {
                kw.arg: self._eval_node(kw.value, context, depth + 1)
                for kw in node.keywords
                if kw.arg is not None
            }
            if callable(func):
                return func(*args, **kwargs)
            raise ValueError("Cannot call non-callable")

        if isinstance(node, ast.Compare):
            left = self._eval_node(node.left, context, depth + 1)
            for op, comparator in zip(node.ops, node.comparators):
                op_func = self.COMPARE_OPS.get(type(op))
                if op_func is None:
                    raise ValueError(f"Unsupported comparison operator: {type(op).__name__}")
                right = self._eval_node(comparator, context, depth + 1)
                if not op_func(left, right):
                    return False
                left = right
            return True

        if isinstance(node, ast.BoolOp):
            # Short-circuit and return the deciding operand, as Python does
            result: Any = None
            for value in node.values:
                result = self._eval_node(value, context, depth + 1)
                if isinstance(node.op, ast.And) and not result:
                    return result
                if isinstance(node.op, ast.Or) and result:
                    return result
            return result

        if isinstance(node, ast.UnaryOp):
            op_func = self.UNARY_OPS.get(type(node.op))
            if op_func is None:
                raise ValueError(f"Unsupported unary operator: {type(node.op).__name__}")
            return op_func(self._eval_node(node.operand, context, depth + 1))

        if isinstance(node, ast.BinOp):
            op_func = self.BINARY_OPS.get(type(node.op))
            if op_func is None:
                raise ValueError(f"Unsupported binary operator: {type(node.op).__name__}")
            left = self._eval_node(node.left, context, depth + 1)
            right = self._eval_node(node.right, context, depth + 1)
            return op_func(left, right)

        if isinstance(node, ast.List):
            return [self._eval_node(elt, context, depth + 1) for elt in node.elts]

        if isinstance(node, ast.Tuple):
            return tuple(self._eval_node(elt, context, depth + 1) for elt in node.elts)

        if isinstance(node, ast.Set):
            return {self._eval_node(elt, context, depth + 1) for elt in node.elts}

        if isinstance(node, ast.Dict):
            return {
                self._eval_node(k, context, depth + 1): self._eval_node(v, context, depth + 1)
                for k, v in zip(node.keys, node.values)
                if k is not None
            }

        if isinstance(node, ast.IfExp):
            if self._eval_node(node.test, context, depth + 1):
                return self._eval_node(node.body, context, depth + 1)
            return self._eval_node(node.orelse, context, depth + 1)

        if isinstance(node, (ast.ListComp, ast.GeneratorExp)):
            return list(self._iter_comprehension(node, context, depth))

        if isinstance(node, ast.SetComp):
            return set(self._iter_comprehension(node, context, depth))

        raise ValueError(f"Unsupported expression type: {type(node).__name__}")

    def _iter_comprehension(
        self,
        node: ast.ListComp | ast.GeneratorExp | ast.SetComp,
        context: dict[str, Any],
        depth: int,
    ):
        """Yield the elements of a comprehension over its generators."""
        scopes = [context]
        for gen in node.generators:
            if gen.is_async:
                raise ValueError("Async comprehensions are not supported")
            next_scopes = []
            for scope in scopes:
                for item in self._eval_node(gen.iter, scope, depth + 1):
                    local = {**scope, **self._bind(gen.target, item)}
                    if all(self._eval_node(cond, local, depth + 1) for cond in gen.ifs):
                        next_scopes.append(local)
            scopes = next_scopes

        for scope in scopes:
            yield self._eval_node(node.elt, scope, depth + 1)

    def _bind(self, target: ast.AST, value: Any) -> dict[str, Any]:
        if isinstance(target, ast.Name):
            return {target.id: value}
        if isinstance(target, ast.Tuple):
            items = list(value)
            if len(items) != len(target.elts):
                raise ValueError("Cannot unpack loop value")
            bound: dict[str, Any] = {}
            for elt, item in zip(target.elts, items):
                bound.update(self._bind(elt, item))
            return bound
        raise ValueError("Only simple loop variables are supported")


_evaluator = SafeExpressionEvaluator()


def safe_eval(expression: str, context: dict[str, Any]) -> Any:
    """Safely evaluate an expression with the shared evaluator.

    Args:
        expression: Condition expression string
        context: Variables available in the expression

    Returns:
        Result of evaluating the expression
    """
    return _evaluator.evaluate(expression, context)
