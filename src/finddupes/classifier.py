"""Bucket files by name+size or by size, and drop unique buckets."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Hashable
from collections.abc import Iterable
from dataclasses import dataclass
from dataclasses import field
from finddupes.models import CompareMode
from finddupes.models import FileRecord
from finddupes.models import Skipped

import errno
import logging
import os
import pathlib
import stat


logger = logging.getLogger(__name__)

# Running out of descriptors or memory aborts the run instead of skipping files
_FATAL_ERRNOS = {errno.EMFILE, errno.ENFILE, errno.ENOMEM}


@dataclass
class Classification:
    """Buckets produced by classify(), plus the files that could not be stat'ed."""

    buckets: dict[Hashable, list[FileRecord]] = field(default_factory=dict)
    skipped: list[Skipped] = field(default_factory=list)


def is_resource_exhaustion(exc: OSError) -> bool:
    return exc.errno in _FATAL_ERRNOS


def stat_file(path: pathlib.Path) -> FileRecord | Skipped:
    """Stat *path* once and return its record, or a Skipped entry on failure."""
    try:
        st = os.stat(path)
    except OSError as e:
        if is_resource_exhaustion(e):
            raise
        return Skipped(path=path, reason=e.strerror or str(e), stage="stat")
    if not stat.S_ISREG(st.st_mode):
        return Skipped(path=path, reason="not a regular file", stage="stat")
    return FileRecord(path=path, size=st.st_size)


def bucket_key(record: FileRecord, mode: CompareMode) -> Hashable:
    """Classification key: (lowercase name, size) in fast mode, size otherwise."""
    if mode is CompareMode.NAME_SIZE:
        return (record.name.lower(), record.size)
    return record.size


def classify(paths: Iterable[pathlib.Path], mode: CompareMode) -> Classification:
    """Stat every path and bucket the records by the mode's key.

    Buckets keep discovery order. Files that fail to stat are left out of
    every bucket and reported in ``skipped``.
    """
    buckets: dict[Hashable, list[FileRecord]] = defaultdict(list)
    skipped: list[Skipped] = []
    for path in paths:
        result = stat_file(pathlib.Path(path))
        if isinstance(result, Skipped):
            logger.debug(f"skipping {result.path}: {result.reason}")
            skipped.append(result)
            continue
        buckets[bucket_key(result, mode)].append(result)
    return Classification(buckets=dict(buckets), skipped=skipped)


def filter_candidates(buckets: dict[Hashable, list[FileRecord]]) -> dict[Hashable, list[FileRecord]]:
    """Keep only buckets with at least two members."""
    return {key: list(members) for key, members in buckets.items() if len(members) >= 2}
