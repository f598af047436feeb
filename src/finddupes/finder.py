"""Duplicate detection pipeline.

Fast mode (nands): bucket by (lowercase name, size), keep buckets with two
or more files.

Hash modes: bucket by size, keep sizes shared by two or more files, digest
those candidates and bucket by digest. Equal digests are trusted as equal
content; files are not compared byte by byte.
"""

from __future__ import annotations

from collections.abc import Hashable
from collections.abc import Iterable
from finddupes.classifier import classify
from finddupes.classifier import filter_candidates
from finddupes.hasher import digest_function
from finddupes.hasher import verify_candidates
from finddupes.models import CompareMode
from finddupes.models import DetectionResult
from finddupes.models import DuplicateGroup
from finddupes.models import FileRecord

import logging
import pathlib


logger = logging.getLogger(__name__)


def _group_label(key: Hashable, mode: CompareMode) -> str:
    if mode is CompareMode.NAME_SIZE:
        name, _size = key
        return name
    return str(key)


def build_groups(buckets: dict[Hashable, list[FileRecord]], mode: CompareMode) -> list[DuplicateGroup]:
    """Turn buckets with two or more members into groups sorted by (size, label)."""
    groups = [
        DuplicateGroup(label=_group_label(key, mode), size=members[0].size, members=tuple(members))
        for key, members in buckets.items()
        if len(members) >= 2
    ]
    groups.sort(key=lambda g: (g.size, g.label))
    return groups


def run_pipeline(
    paths: Iterable[pathlib.Path],
    mode: CompareMode | str,
    *,
    workers: int | None = None,
    progress: bool = False,
) -> DetectionResult:
    """Run the full pipeline over *paths* and return groups plus skip details."""
    mode = CompareMode.parse(mode)
    digest_fn = digest_function(mode.value) if mode.is_hash else None
    paths = list(paths)
    result = DetectionResult(files_total=len(paths))
    if not paths:
        return result

    classification = classify(paths, mode)
    result.skipped.extend(classification.skipped)
    candidates = filter_candidates(classification.buckets)
    result.candidates = sum(len(g) for g in candidates.values())
    logger.debug(
        f"classification ({mode.value}): {len(paths)} files -> "
        f"{len(classification.skipped)} skipped, "
        f"{len(candidates)} bucket(s) with {result.candidates} candidate files"
    )

    if not mode.is_hash:
        result.groups = build_groups(candidates, mode)
        logger.debug(f"{len(result.groups)} name+size group(s)")
        return result

    if not candidates:
        return result

    ordered = [record for members in candidates.values() for record in members]
    logger.info(f"Computing {mode.value} hashes for {len(ordered)} candidate files...")
    verification = verify_candidates(ordered, digest_fn, workers=workers, progress=progress)
    result.skipped.extend(verification.skipped)
    result.hashed = verification.hashed
    result.groups = build_groups(verification.buckets, mode)
    logger.debug(f"hashing: {result.hashed} files hashed, {len(result.groups)} duplicate group(s)")
    return result


def detect_duplicates(
    paths: Iterable[pathlib.Path],
    mode: CompareMode | str,
    *,
    workers: int | None = None,
    progress: bool = False,
) -> list[DuplicateGroup]:
    """Find duplicate groups among *paths* in a deterministic order."""
    return run_pipeline(paths, mode, workers=workers, progress=progress).groups
