"""TestRunner: evaluates policies against configuration files."""

from __future__ import annotations

from typing import Any

from confaudit.core.files import resolve_files
from confaudit.core.interfaces import ConfigParser, Downloader, EngineLoader
from confaudit.core.namespaces import select_namespaces
from confaudit.models.result import CheckResult
from confaudit.utils.config import TestOptions
from confaudit.utils.context import RunContext
from confaudit.utils.errors import (
    ConfigurationError,
    DownloadError,
    EngineLoadError,
    EvaluationError,
    ParseFilesError,
)


class TestRunner:
    """Runner for the ``test`` command.

    Resolves the input paths, parses them, optionally downloads policy
    bundles, loads the policy engine and evaluates every selected namespace.
    A run either returns the results for every namespace or raises a
    single stage error; partial results are never returned.

    Collaborators default to the built-in implementations and can be
    replaced, e.g. with stubs in tests.

    Example:
        runner = TestRunner(TestOptions(policy=["policy"], combine=True))
        results = runner.run(RunContext.background(), ["deploy/"])
    """

    __test__ = False

    def __init__(
        self,
        options: TestOptions | None = None,
        parser: ConfigParser | None = None,
        loader: EngineLoader | None = None,
        downloader: Downloader | None = None,
    ) -> None:
        self.options = options or TestOptions()

        if parser is None:
            from confaudit.parser import ConfigurationParser

            parser = ConfigurationParser()
        if loader is None:
            from confaudit.policy import PolicyEngineLoader

            loader = PolicyEngineLoader(trace=self.options.trace)
        if downloader is None:
            from confaudit.downloader import BundleDownloader

            downloader = BundleDownloader()

        self._parser = parser
        self._loader = loader
        self._downloader = downloader

    def run(self, ctx: RunContext, file_list: list[str]) -> list[CheckResult]:
        """Evaluate the configured policies against the given paths.

        Args:
            ctx: Context bounding the download, load and evaluation calls
            file_list: Files, directories or "-" for stdin

        Returns:
            Results for every selected namespace, in namespace order

        Raises:
            ParseFilesError: If the inputs cannot be resolved to files
            ConfigurationError: If the files cannot be parsed
            DownloadError: If policy bundles cannot be downloaded
            EngineLoadError: If the policies cannot be loaded
            EvaluationError: If evaluating a namespace fails
        """
        opts = self.options

        try:
            files = resolve_files(file_list, opts.ignore, self._parser.is_supported)
        except Exception as e:
            raise ParseFilesError(e) from e

        try:
            configurations = self._parse(files)
        except Exception as e:
            raise ConfigurationError(e) from e

        # Bundles land in the first policy directory
        if opts.update:
            try:
                ctx.raise_if_done()
                if not opts.policy:
                    raise ValueError("no policy directory to download into")
                self._downloader.download(ctx, opts.policy[0], opts.update)
            except Exception as e:
                raise DownloadError(e) from e

        try:
            ctx.raise_if_done()
            engine = self._loader.load(ctx, opts.policy, opts.data)
        except Exception as e:
            raise EngineLoadError(e) from e

        namespaces = opts.namespace
        if opts.all_namespaces or opts.namespace_prefix != "":
            namespaces = select_namespaces(engine.namespaces(), opts.namespace_prefix, opts.all_namespaces)

        results: list[CheckResult] = []
        for namespace in namespaces:
            if opts.combine:
                try:
                    ctx.raise_if_done()
                    result = engine.check_combined(ctx, configurations, namespace)
                except Exception as e:
                    raise EvaluationError(e, namespace, combined=True) from e

                results.append(result)
            else:
                try:
                    ctx.raise_if_done()
                    file_results = engine.check(ctx, configurations, namespace)
                except Exception as e:
                    raise EvaluationError(e, namespace) from e

                results.extend(file_results)

        return results

    def _parse(self, files: list[str]) -> dict[str, Any]:
        if self.options.parser:
            return self._parser.parse_as(files, self.options.parser)
        return self._parser.parse(files)
