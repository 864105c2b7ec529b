"""Unit tests for the SafeExpressionEvaluator."""

import pytest

from confaudit.utils.expression import SafeExpressionEvaluator, safe_eval


class TestSafeExpressionEvaluator:
    """Tests for SafeExpressionEvaluator."""

    @pytest.fixture
    def evaluator(self):
        """Create an evaluator instance."""
        return SafeExpressionEvaluator()

    @pytest.fixture
    def sample_context(self):
        """Create a sample context for evaluation."""
        return {
            "input": {
                "kind": "Deployment",
                "metadata": {"name": "web", "labels": {"app": "web"}},
                "spec": {
                    "replicas": 1,
                    "containers": [
                        {"name": "app", "image": "ghcr.io/acme/web:1.2", "ports": [80, 443]},
                        {"name": "sidecar", "image": "docker.io/envoy:latest", "ports": []},
                    ],
                },
            },
            "filename": "deploy.yaml",
            "namespace": "main",
            "data": {"registries": ["ghcr.io"]},
        }

    def test_evaluate_literals(self, evaluator):
        """Test evaluating literals."""
        assert evaluator.evaluate("'hello'", {}) == "hello"
        assert evaluator.evaluate("42", {}) == 42
        assert evaluator.evaluate("-5", {}) == -5
        assert evaluator.evaluate("True", {}) is True
        assert evaluator.evaluate("None", {}) is None

    def test_evaluate_variable(self, evaluator, sample_context):
        """Test evaluating variables from context."""
        assert evaluator.evaluate("filename", sample_context) == "deploy.yaml"

    def test_context_shadows_functions(self, evaluator):
        """Context names take priority over helper names."""
        assert evaluator.evaluate("len", {"len": 3}) == 3

    def test_evaluate_dict_access(self, evaluator, sample_context):
        """Test subscript and .get() access."""
        assert evaluator.evaluate("input['metadata']['name']", sample_context) == "web"
        assert evaluator.evaluate("input.get('missing', 'default')", sample_context) == "default"

    def test_evaluate_comparisons(self, evaluator, sample_context):
        """Test comparison operators, including chains."""
        assert evaluator.evaluate("input['spec']['replicas'] < 2", sample_context) is True
        assert evaluator.evaluate("0 < input['spec']['replicas'] <= 1", sample_context) is True
        assert evaluator.evaluate("input['kind'] != 'Deployment'", sample_context) is False

    def test_evaluate_in_operator(self, evaluator, sample_context):
        """Test in and not in."""
        assert evaluator.evaluate("'app' in input['metadata']['labels']", sample_context) is True
        assert evaluator.evaluate("'Pod' not in ['Deployment']", sample_context) is True

    def test_boolean_operators_return_operand(self, evaluator):
        """and/or short-circuit and return the deciding operand."""
        assert evaluator.evaluate("'' or 'fallback'", {}) == "fallback"
        assert evaluator.evaluate("0 and missing", {}) == 0
        assert evaluator.evaluate("not False", {}) is True

    def test_arithmetic(self, evaluator):
        """Test binary operators."""
        assert evaluator.evaluate("7 // 2", {}) == 3
        assert evaluator.evaluate("7 % 4 + 2 * 3", {}) == 9

    def test_string_methods(self, evaluator, sample_context):
        """Test whitelisted string methods."""
        assert evaluator.evaluate(
            "input['spec']['containers'][0]['image'].startswith('ghcr.io/')", sample_context
        ) is True
        assert evaluator.evaluate("filename.split('.')[-1]", sample_context) == "yaml"

    def test_slice(self, evaluator):
        """Test slicing."""
        assert evaluator.evaluate("'abcdef'[1:3]", {}) == "bc"
        assert evaluator.evaluate("[1, 2, 3][:2]", {}) == [1, 2]

    def test_comprehensions(self, evaluator, sample_context):
        """Test list, generator and set comprehensions."""
        assert evaluator.evaluate(
            "[c['name'] for c in input['spec']['containers'] if c['ports']]", sample_context
        ) == ["app"]
        assert evaluator.evaluate(
            "any(c['image'].endswith(':latest') for c in input['spec']['containers'])", sample_context
        ) is True
        assert evaluator.evaluate("{x % 2 for x in [1, 2, 3]}", {}) == {0, 1}

    def test_nested_comprehension(self, evaluator, sample_context):
        """Multiple generators iterate like nested loops."""
        assert evaluator.evaluate(
            "[p for c in input['spec']['containers'] for p in c['ports']]", sample_context
        ) == [80, 443]

    def test_tuple_unpacking(self, evaluator, sample_context):
        """Loop targets may unpack tuples."""
        assert evaluator.evaluate(
            "[k for k, v in input['metadata']['labels'].items() if v == 'web']", sample_context
        ) == ["app"]

    def test_conditional_expression(self, evaluator):
        """Test x if cond else y."""
        assert evaluator.evaluate("'a' if 1 > 2 else 'b'", {}) == "b"

    def test_helpers(self, evaluator, sample_context):
        """Test regex_match and get_path helpers."""
        assert evaluator.evaluate("regex_match('^ghcr', input['spec']['containers'][0]['image'])", sample_context)
        assert not evaluator.evaluate("regex_match('x', 5)", {})
        assert evaluator.evaluate("get_path(input, 'spec.containers.1.name')", sample_context) == "sidecar"
        assert evaluator.evaluate("get_path(input, 'spec.missing', 'none')", sample_context) == "none"
        assert evaluator.evaluate("isinstance_list(input['spec']['containers'])", sample_context) is True

    def test_unknown_variable(self, evaluator):
        """Unknown names raise ValueError."""
        with pytest.raises(ValueError, match="Unknown variable"):
            evaluator.evaluate("undefined", {})

    @pytest.mark.parametrize(
        "expression",
        [
            "filename.__class__",
            "input.__class__.__bases__",
            "data.update({})",
            "filename.format('x')",
        ],
    )
    def test_attribute_access_blocked(self, evaluator, sample_context, expression):
        """Only whitelisted methods are reachable."""
        with pytest.raises(ValueError, match="Cannot access attribute"):
            evaluator.evaluate(expression, sample_context)

    @pytest.mark.parametrize("expression", ["lambda: 1", "(x := 1)", "f'{filename}'"])
    def test_unsupported_nodes(self, evaluator, sample_context, expression):
        """Unsupported syntax is rejected."""
        with pytest.raises(ValueError, match="Unsupported expression type"):
            evaluator.evaluate(expression, sample_context)

    def test_invalid_syntax(self, evaluator):
        """Syntax errors surface as ValueError."""
        with pytest.raises(ValueError, match="Invalid expression syntax"):
            evaluator.compile("input[[")

    def test_compile_caches(self, evaluator):
        """Compiling the same expression twice returns the cached tree."""
        assert evaluator.compile("1 + 1") is evaluator.compile("1 + 1")

    def test_max_depth(self):
        """Deeply nested expressions are rejected."""
        evaluator = SafeExpressionEvaluator(max_depth=5)
        with pytest.raises(ValueError, match="too deeply nested"):
            evaluator.evaluate("((((((((1 + 1) + 1) + 1) + 1) + 1) + 1) + 1) + 1)", {})


class TestSafeEval:
    """Tests for the safe_eval shortcut."""

    def test_safe_eval(self):
        """Test the module-level helper."""
        assert safe_eval("input['a'] > 1", {"input": {"a": 2}}) is True
