"""Error handling utilities for confaudit."""

from __future__ import annotations

from typing import Any

from confaudit.models.common import AuditError


class ConfauditError(Exception):
    """Base exception for confaudit."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_audit_error(self) -> AuditError:
        """Convert to AuditError model."""
        return AuditError(code=self.code, message=self.message, details=self.details)


# File resolution


class FileAccessError(ConfauditError):
    """A named input path could not be stat'd."""

    def __init__(self, path: str, cause: BaseException):
        super().__init__(
            f"get file info: {cause}",
            code="FILE_ACCESS_ERROR",
            details={"path": path},
        )
        self.path = path
        self.cause = cause


class InvalidIgnorePatternError(ConfauditError):
    """The ignore expression is not a valid regular expression."""

    def __init__(self, pattern: str, cause: BaseException):
        super().__init__(
            f"given regexp couldn't be parsed: {cause}",
            code="INVALID_IGNORE_PATTERN",
            details={"pattern": pattern},
        )
        self.pattern = pattern
        self.cause = cause


class DirectoryWalkError(ConfauditError):
    """Traversing a directory failed."""

    def __init__(self, path: str, cause: BaseException):
        super().__init__(
            f"walk path {path}: {cause}",
            code="DIRECTORY_WALK_ERROR",
            details={"path": path},
        )
        self.path = path
        self.cause = cause


class NoFilesFoundError(ConfauditError):
    """Resolution produced no files."""

    def __init__(self) -> None:
        super().__init__("no files found", code="NO_FILES_FOUND")


# Parsing


class UnknownParserError(ConfauditError):
    """No configuration parser is registered under the given name."""

    def __init__(self, name: str):
        super().__init__(
            f"unknown parser: {name}",
            code="UNKNOWN_PARSER",
            details={"parser": name},
        )
        self.name = name


class ParserError(ConfauditError):
    """A configuration file could not be read or parsed."""

    def __init__(self, path: str, cause: BaseException | str):
        super().__init__(
            f"parse {path}: {cause}",
            code="PARSE_ERROR",
            details={"path": path},
        )
        self.path = path


# Policy engine


class PolicyLoadError(ConfauditError):
    """A policy or data source could not be loaded."""

    def __init__(self, message: str, path: str | None = None):
        details = {"path": path} if path else {}
        super().__init__(message, code="POLICY_LOAD_ERROR", details=details)
        self.path = path


class PolicyEvaluationError(ConfauditError):
    """A rule condition failed to evaluate."""

    def __init__(self, rule: str, namespace: str, cause: BaseException):
        super().__init__(
            f"rule {namespace}.{rule}: {cause}",
            code="POLICY_EVALUATION_ERROR",
            details={"rule": rule, "namespace": namespace},
        )
        self.rule = rule
        self.namespace = namespace


# Downloads


class BundleFetchError(ConfauditError):
    """A policy bundle could not be fetched."""

    def __init__(self, source: str, message: str):
        super().__init__(
            f"download {source}: {message}",
            code="BUNDLE_FETCH_ERROR",
            details={"source": source},
        )
        self.source = source


# Run context


class ContextCancelledError(ConfauditError):
    """The run context was cancelled."""

    def __init__(self) -> None:
        super().__init__("context canceled", code="CANCELLED")


class DeadlineExceededError(ConfauditError):
    """The run context deadline passed."""

    def __init__(self, timeout: float | None = None) -> None:
        details = {"timeout": timeout} if timeout else {}
        super().__init__("context deadline exceeded", code="DEADLINE_EXCEEDED", details=details)


# Stage wrappers raised by the test runner


class StageError(ConfauditError):
    """Failure of one runner stage, wrapping the underlying cause.

    The message reads ``"<stage>: <cause>"`` so that a chain of wrapped
    errors prints the same way at every level.
    """

    stage = "run"
    code_name = "STAGE_ERROR"

    def __init__(self, cause: BaseException, stage: str | None = None):
        if stage is not None:
            self.stage = stage
        details = {"stage": self.stage}
        if isinstance(cause, ConfauditError):
            details["cause_code"] = cause.code
        super().__init__(f"{self.stage}: {cause}", code=self.code_name, details=details)
        self.cause = cause
        self.__cause__ = cause


class ParseFilesError(StageError):
    """File resolution failed."""

    stage = "parse files"
    code_name = "PARSE_FILES_ERROR"


class ConfigurationError(StageError):
    """Parsing the resolved files failed."""

    stage = "get configurations"
    code_name = "CONFIGURATION_ERROR"


class DownloadError(StageError):
    """Downloading policy bundles failed."""

    stage = "update policies"
    code_name = "DOWNLOAD_ERROR"


class EngineLoadError(StageError):
    """Loading the policy engine failed."""

    stage = "load"
    code_name = "ENGINE_LOAD_ERROR"


class EvaluationError(StageError):
    """Evaluating a namespace failed."""

    stage = "check rule"
    code_name = "EVALUATION_ERROR"

    def __init__(self, cause: BaseException, namespace: str, combined: bool = False):
        super().__init__(cause, stage="check combined" if combined else "check rule")
        self.namespace = namespace
        self.details["namespace"] = namespace
