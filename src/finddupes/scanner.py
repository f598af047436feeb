"""Regular-file discovery across one or more directory trees."""

from __future__ import annotations

from collections.abc import Iterable

import logging
import os
import pathlib


logger = logging.getLogger(__name__)


def _normalize(path: pathlib.Path) -> str:
    return os.path.normpath(os.path.abspath(path))


def check_roots(roots: Iterable[pathlib.Path]) -> None:
    """Raise if any root is missing or not a directory."""
    for root in roots:
        if not root.exists():
            raise FileNotFoundError(f"Path does not exist: {root}")
        if not root.is_dir():
            raise NotADirectoryError(f"Path is not a directory: {root}")


def scan(
    roots: Iterable[pathlib.Path],
    excludes: Iterable[pathlib.Path] = (),
) -> list[pathlib.Path]:
    """Recursively list regular files under each root, in a stable order.

    Directories and files whose path equals an exclude path are skipped.
    A file reachable from more than one root (repeated or nested roots) is
    listed once. Symlinks are neither followed nor listed. Unreadable directories are
    skipped silently.
    """
    roots = [pathlib.Path(r) for r in roots]
    check_roots(roots)
    excluded = {_normalize(pathlib.Path(e)) for e in excludes}

    files: list[pathlib.Path] = []
    seen: set[str] = set()
    for root in roots:
        before = len(files)
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(
                d for d in dirnames
                if _normalize(pathlib.Path(dirpath, d)) not in excluded
            )
            for name in sorted(filenames):
                path = pathlib.Path(dirpath, name)
                if path.is_symlink() or not path.is_file():
                    continue
                key = _normalize(path)
                if key in excluded or key in seen:
                    continue
                seen.add(key)
                files.append(path)
        logger.debug(f"{root}: {len(files) - before} file(s)")
    return files
