"""Utility functions for confaudit."""

from confaudit.utils.logging import configure_logging, get_logger, get_logger_with_context
from confaudit.utils.errors import (
    ConfauditError,
    FileAccessError,
    InvalidIgnorePatternError,
    DirectoryWalkError,
    NoFilesFoundError,
    UnknownParserError,
    ParserError,
    PolicyLoadError,
    PolicyEvaluationError,
    BundleFetchError,
    ContextCancelledError,
    DeadlineExceededError,
    StageError,
    ParseFilesError,
    ConfigurationError,
    DownloadError,
    EngineLoadError,
    EvaluationError,
)
from confaudit.utils.context import RunContext
from confaudit.utils.expression import SafeExpressionEvaluator, safe_eval
from confaudit.utils.config import (
    ConfauditConfig,
    DownloadConfig,
    OutputConfig,
    TestOptions,
    load_config,
    save_config,
    get_default_config,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "get_logger_with_context",
    # Errors
    "ConfauditError",
    "FileAccessError",
    "InvalidIgnorePatternError",
    "DirectoryWalkError",
    "NoFilesFoundError",
    "UnknownParserError",
    "ParserError",
    "PolicyLoadError",
    "PolicyEvaluationError",
    "BundleFetchError",
    "ContextCancelledError",
    "DeadlineExceededError",
    "StageError",
    "ParseFilesError",
    "ConfigurationError",
    "DownloadError",
    "EngineLoadError",
    "EvaluationError",
    # Context
    "RunContext",
    # Expression
    "SafeExpressionEvaluator",
    "safe_eval",
    # Config
    "ConfauditConfig",
    "DownloadConfig",
    "OutputConfig",
    "TestOptions",
    "load_config",
    "save_config",
    "get_default_config",
]
