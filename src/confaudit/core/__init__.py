"""Core orchestration for confaudit.

This module provides the main library API for running policy tests.
"""

from confaudit.core.files import files_from_directory, resolve_files
from confaudit.core.interfaces import ConfigParser, Downloader, EngineLoader, PolicyEngine
from confaudit.core.namespaces import select_namespaces
from confaudit.core.runner import TestRunner

__all__ = [
    "TestRunner",
    "resolve_files",
    "files_from_directory",
    "select_namespaces",
    # Collaborators
    "ConfigParser",
    "Downloader",
    "EngineLoader",
    "PolicyEngine",
]
