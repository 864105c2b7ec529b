"""Resolution of input paths into the list of files to test."""

from __future__ import annotations

import os
import re
import stat
from typing import Callable

from confaudit.utils.errors import (
    DirectoryWalkError,
    FileAccessError,
    InvalidIgnorePatternError,
    NoFilesFoundError,
)

STDIN_MARKER = "-"


def resolve_files(
    inputs: list[str],
    ignore_pattern: str,
    is_supported: Callable[[str], bool],
) -> list[str]:
    """Resolve input paths into the ordered list of files to parse.

    Empty strings are skipped and the stdin marker is passed through
    untouched. Files named directly are always kept. Directories are walked
    recursively, keeping only files that ``is_supported`` accepts and whose
    path does not match ``ignore_pattern``.

    Args:
        inputs: Paths, directories or the stdin marker, in order
        ignore_pattern: Regular expression searched in each walked path; "" disables it
        is_supported: Predicate deciding whether a walked file can be parsed

    Returns:
        Files in input order, directory contents at their directory's position

    Raises:
        FileAccessError: If an input cannot be stat'd
        InvalidIgnorePatternError: If a directory is walked with an invalid pattern
        DirectoryWalkError: If a directory cannot be traversed
        NoFilesFoundError: If nothing remains
    """
    files: list[str] = []
    for path in inputs:
        if path == "":
            continue

        if path == STDIN_MARKER:
            files.append(path)
            continue

        try:
            info = os.stat(path)
        except OSError as e:
            raise FileAccessError(path, e) from e

        if stat.S_ISDIR(info.st_mode):
            files.extend(files_from_directory(path, ignore_pattern, is_supported))
        else:
            files.append(path)

    if not files:
        raise NoFilesFoundError()

    return files


def files_from_directory(
    directory: str,
    ignore_pattern: str,
    is_supported: Callable[[str], bool],
) -> list[str]:
    """Collect the supported files below a directory.

    Entries are visited in lexical pre-order: each directory's entries are
    sorted by name and a subdirectory's files appear at the position of the
    subdirectory's name. Symlinks are not followed. The ignore pattern only
    filters files; every subdirectory is still walked.

    Raises:
        InvalidIgnorePatternError: If the pattern does not compile
        DirectoryWalkError: If a directory cannot be listed
    """
    try:
        regexp = re.compile(ignore_pattern)
    except re.error as e:
        raise InvalidIgnorePatternError(ignore_pattern, e) from e

    files: list[str] = []
    for path in _walk(directory):
        if ignore_pattern and regexp.search(path):
            continue
        if is_supported(path):
            files.append(path)
    return files


def _walk(directory: str):
    """Yield every non-directory path below ``directory`` in lexical order."""
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        raise DirectoryWalkError(directory, e) from e

    for entry in entries:
        path = os.path.join(directory, entry.name)
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as e:
            raise DirectoryWalkError(path, e) from e

        if is_dir:
            yield from _walk(path)
        else:
            yield path
