"""Unit tests for the errors module."""

import pytest

from confaudit.models.common import AuditError
from confaudit.utils.errors import (
    ConfauditError,
    ConfigurationError,
    ContextCancelledError,
    DeadlineExceededError,
    DownloadError,
    EngineLoadError,
    EvaluationError,
    FileAccessError,
    InvalidIgnorePatternError,
    NoFilesFoundError,
    ParseFilesError,
    StageError,
    UnknownParserError,
)


class TestConfauditError:
    """Tests for base ConfauditError."""

    def test_basic_error(self):
        """Test basic error creation."""
        error = ConfauditError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.code == "UNKNOWN_ERROR"
        assert error.details == {}

    def test_to_audit_error(self):
        """Test conversion to the AuditError model."""
        error = ConfauditError("Test error", code="TEST_ERROR", details={"key": "value"})
        audit_error = error.to_audit_error()

        assert isinstance(audit_error, AuditError)
        assert audit_error.code == "TEST_ERROR"
        assert audit_error.details == {"key": "value"}


class TestResolutionErrors:
    """Tests for file resolution errors."""

    def test_file_access(self):
        cause = FileNotFoundError(2, "No such file or directory")
        error = FileAccessError("x.yaml", cause)

        assert str(error).startswith("get file info: ")
        assert error.details == {"path": "x.yaml"}
        assert error.cause is cause

    def test_invalid_pattern(self):
        error = InvalidIgnorePatternError("((", ValueError("missing )"))
        assert error.pattern == "(("
        assert error.code == "INVALID_IGNORE_PATTERN"

    def test_no_files(self):
        assert str(NoFilesFoundError()) == "no files found"


class TestStageErrors:
    """Tests for the stage wrappers."""

    @pytest.mark.parametrize(
        "error_class,stage",
        [
            (ParseFilesError, "parse files"),
            (ConfigurationError, "get configurations"),
            (DownloadError, "update policies"),
            (EngineLoadError, "load"),
        ],
    )
    def test_stage_labels(self, error_class, stage):
        cause = ValueError("bad")
        error = error_class(cause)

        assert isinstance(error, StageError)
        assert error.stage == stage
        assert str(error) == f"{stage}: bad"
        assert error.cause is cause
        assert error.__cause__ is cause

    def test_cause_code_recorded(self):
        error = ConfigurationError(UnknownParserError("hcl9"))
        assert error.details["cause_code"] == "UNKNOWN_PARSER"
        assert str(error) == "get configurations: unknown parser: hcl9"

    def test_nested_chain(self):
        error = ParseFilesError(NoFilesFoundError())
        assert str(error) == "parse files: no files found"

    def test_evaluation_labels(self):
        per_file = EvaluationError(RuntimeError("x"), "main")
        combined = EvaluationError(RuntimeError("x"), "main", combined=True)

        assert str(per_file) == "check rule: x"
        assert str(combined) == "check combined: x"
        assert combined.namespace == "main"
        assert combined.details["namespace"] == "main"

    def test_custom_stage(self):
        assert StageError(ValueError("v"), stage="custom").stage == "custom"


class TestContextErrors:
    """Tests for cancellation errors."""

    def test_cancelled(self):
        assert str(ContextCancelledError()) == "context canceled"

    def test_deadline(self):
        error = DeadlineExceededError(1.5)
        assert str(error) == "context deadline exceeded"
        assert error.details == {"timeout": 1.5}
