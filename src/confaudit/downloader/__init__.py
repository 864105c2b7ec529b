"""Policy bundle downloads."""

from confaudit.downloader.bundle import BundleDownloader

__all__ = ["BundleDownloader"]
