"""confaudit: test configuration files against policies.

This package runs policy checks against structured configuration files:

- **File resolution**: expand files and directories, honoring ignore patterns
- **Parsing**: YAML, JSON, TOML, INI and dotenv files into plain values
- **Policies**: YAML rule documents grouped into namespaces
- **Namespace selection**: explicit, by prefix, or all
- **Bundles**: download policies over HTTP before a run

Usage:
    # Library API
    from confaudit import RunContext, TestOptions, TestRunner

    runner = TestRunner(TestOptions(policy=["policy"], all_namespaces=True))
    results = runner.run(RunContext.background(), ["deploy/"])
    for result in results:
        print(result.filename, result.namespace, result.failures)

CLI:
    confaudit test <paths> --policy <dir>
    confaudit parse <paths>
"""

__version__ = "0.1.0"

# Core
from confaudit.core.runner import TestRunner
from confaudit.core.files import resolve_files
from confaudit.core.namespaces import select_namespaces

# Models
from confaudit.models.result import CheckResult, Result, Summary, summarize

# Collaborators
from confaudit.parser import ConfigurationParser
from confaudit.policy import Engine, PolicyEngineLoader
from confaudit.downloader import BundleDownloader

# Utilities
from confaudit.utils.config import TestOptions
from confaudit.utils.context import RunContext
from confaudit.utils.errors import ConfauditError

__all__ = [
    # Version
    "__version__",
    # Core
    "TestRunner",
    "resolve_files",
    "select_namespaces",
    # Models
    "CheckResult",
    "Result",
    "Summary",
    "summarize",
    # Collaborators
    "ConfigurationParser",
    "Engine",
    "PolicyEngineLoader",
    "BundleDownloader",
    # Utilities
    "TestOptions",
    "RunContext",
    "ConfauditError",
]
