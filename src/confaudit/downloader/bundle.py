"""Policy bundle downloader."""

from __future__ import annotations

import io
import os
import shutil
import tarfile
from pathlib import Path
from urllib.parse import unquote, urlparse

import httpx

from confaudit.utils.context import RunContext
from confaudit.utils.errors import BundleFetchError
from confaudit.utils.logging import get_logger, get_logger_with_context

logger = get_logger("downloader")

ARCHIVE_SUFFIXES = (".tar.gz", ".tgz", ".tar")


class BundleDownloader:
    """Fetches policy bundles into a local policy directory.

    Supported sources:
    - ``http://`` and ``https://`` URLs (fetched with httpx)
    - ``file://`` URLs and plain local paths (files or directories)

    Tar archives (``.tar.gz``, ``.tgz``, ``.tar``) are extracted into the
    destination; any other file is written under its base name.

    Example:
        downloader = BundleDownloader(timeout=10)
        downloader.download(ctx, "policy", ["https://example.com/k8s.tar.gz"])
    """

    def __init__(
        self,
        timeout: float = 30.0,
        max_retries: int = 0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the downloader.

        Args:
            timeout: HTTP timeout in seconds
            max_retries: Connection retries performed by the HTTP transport
            transport: Custom httpx transport, e.g. httpx.MockTransport in tests
        """
        self._timeout = timeout
        self._max_retries = max_retries
        self._transport = transport

    def download(self, ctx: RunContext, destination: str, sources: list[str]) -> None:
        """Download every source into ``destination``.

        Args:
            ctx: Run context; checked before each source
            destination: Directory receiving the bundles, created if missing
            sources: URLs or local paths

        Raises:
            BundleFetchError: If a source cannot be fetched or installed
        """
        target = Path(destination)
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise BundleFetchError(destination, f"create destination: {e}") from e

        for source in sources:
            ctx.raise_if_done()
            log = get_logger_with_context("downloader", source=source, destination=destination)
            log.info(f"Downloading {source}")

            scheme = urlparse(source).scheme
            if scheme in ("http", "https"):
                self._fetch_http(ctx, source, target)
            elif scheme == "file":
                self._copy_local(source, Path(unquote(urlparse(source).path)), target)
            elif scheme == "" or len(scheme) == 1:
                # A one-letter scheme is a Windows drive letter
                self._copy_local(source, Path(source), target)
            else:
                raise BundleFetchError(source, f"unsupported scheme: {scheme}")

    def _get_client(self, ctx: RunContext) -> httpx.Client:
        timeout = self._timeout
        remaining = ctx.remaining()
        if remaining is not None:
            timeout = min(timeout, remaining)

        transport = self._transport or httpx.HTTPTransport(retries=self._max_retries)
        return httpx.Client(timeout=timeout, transport=transport, follow_redirects=True)

    def _fetch_http(self, ctx: RunContext, source: str, target: Path) -> None:
        try:
            with self._get_client(ctx) as client:
                response = client.get(source)
        except httpx.HTTPError as e:
            raise BundleFetchError(source, str(e)) from e

        if response.status_code != 200:
            raise BundleFetchError(source, f"unexpected status {response.status_code}")

        name = os.path.basename(unquote(urlparse(source).path)) or "bundle"
        try:
            self._install(source, name, response.content, target)
        except OSError as e:
            raise BundleFetchError(source, str(e)) from e

    def _copy_local(self, source: str, path: Path, target: Path) -> None:
        try:
            if path.is_dir():
                shutil.copytree(path, target / path.name, dirs_exist_ok=True)
            elif path.is_file():
                self._install(source, path.name, path.read_bytes(), target)
            else:
                raise BundleFetchError(source, "no such file or directory")
        except OSError as e:
            raise BundleFetchError(source, str(e)) from e

    def _install(self, source: str, name: str, content: bytes, target: Path) -> None:
        if name.lower().endswith(ARCHIVE_SUFFIXES):
            self._extract(source, content, target)
            return
        (target / name).write_bytes(content)
        logger.debug(f"Wrote {target / name}")

    def _extract(self, source: str, content: bytes, target: Path) -> None:
        root = target.resolve()
        try:
            with tarfile.open(fileobj=io.BytesIO(content), mode="r:*") as archive:
                members = archive.getmembers()
                for member in members:
                    if not (member.isfile() or member.isdir()):
                        raise BundleFetchError(source, f"unsupported archive member: {member.name}")
                    destination = (root / member.name).resolve()
                    if destination != root and root not in destination.parents:
                        raise BundleFetchError(source, f"archive member escapes destination: {member.name}")
                archive.extractall(root, members=members, filter="data")
        except tarfile.TarError as e:
            raise BundleFetchError(source, f"invalid archive: {e}") from e
        logger.debug(f"Extracted {len(members)} entries into {root}")
