"""Content verification: digest every candidate and re-bucket by digest."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from collections.abc import Iterable
from concurrent.futures import as_completed
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from dataclasses import field
from finddupes.classifier import is_resource_exhaustion
from finddupes.models import FileRecord
from finddupes.models import Skipped
from functools import partial
from tqdm import tqdm

import hashlib
import logging
import os
import pathlib


logger = logging.getLogger(__name__)

ALGORITHMS: dict[str, Callable] = {
    "sha256": hashlib.sha256,
    "sha1": hashlib.sha1,
    "md5": hashlib.md5,
}

DigestFn = Callable[[pathlib.Path], str]


@dataclass
class Verification:
    """Digest buckets produced by verify_candidates()."""

    buckets: dict[str, list[FileRecord]] = field(default_factory=dict)
    skipped: list[Skipped] = field(default_factory=list)
    hashed: int = 0


def get_algorithm(name: str) -> Callable:
    """Return the hashlib constructor for *name*.

    Raises ValueError for unknown algorithms.
    """
    try:
        return ALGORITHMS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown hash algorithm: {name}") from None


def hash_file(path: pathlib.Path, algorithm: str = "sha256", chunk_size: int = 65536) -> str:
    """Compute the hex digest of a file."""
    h = get_algorithm(algorithm)()
    with path.open("rb") as f:
        while chunk := f.read(chunk_size):
            h.update(chunk)
    return h.hexdigest()


def digest_function(algorithm: str) -> DigestFn:
    """Return a path -> hex digest callable for *algorithm*."""
    get_algorithm(algorithm)
    return partial(hash_file, algorithm=algorithm)


def digest_record(record: FileRecord, digest_fn: DigestFn) -> FileRecord | Skipped:
    """Digest one record. Read failures become a Skipped entry."""
    try:
        digest = digest_fn(record.path)
    except OSError as e:
        if is_resource_exhaustion(e):
            raise
        return Skipped(path=record.path, reason=e.strerror or str(e), stage="read")
    return record.with_digest(digest)


def _default_workers(n_candidates: int) -> int:
    return max(1, min(32, (os.cpu_count() or 1) + 4, n_candidates))


def verify_candidates(
    candidates: Iterable[FileRecord],
    digest_fn: DigestFn,
    workers: int | None = None,
    progress: bool = False,
) -> Verification:
    """Digest every candidate on a bounded thread pool and bucket by digest.

    Results are collected by the calling thread and placed back in candidate
    order before bucketing, so the outcome does not depend on which worker
    finishes first. On KeyboardInterrupt pending work is cancelled and the
    interrupt propagates.
    """
    records = list(candidates)
    if not records:
        return Verification()
    if workers is None:
        workers = _default_workers(len(records))
    if workers < 1:
        raise ValueError("workers must be at least 1")

    results: list[FileRecord | Skipped | None] = [None] * len(records)
    executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="finddupes-hash")
    try:
        futures = {executor.submit(digest_record, r, digest_fn): i for i, r in enumerate(records)}
        with tqdm(total=len(records), desc="Hashing", unit="file", disable=not progress) as bar:
            for future in as_completed(futures):
                results[futures[future]] = future.result()
                bar.update(1)
    except BaseException:
        executor.shutdown(wait=True, cancel_futures=True)
        raise
    executor.shutdown(wait=True)

    buckets: dict[str, list[FileRecord]] = defaultdict(list)
    skipped: list[Skipped] = []
    hashed = 0
    for result in results:
        if isinstance(result, Skipped):
            logger.debug(f"skipping {result.path}: {result.reason}")
            skipped.append(result)
            continue
        hashed += 1
        logger.debug(f"  {result.digest[:12]}.. {result.path}")
        buckets[result.digest].append(result)

    return Verification(buckets=dict(buckets), skipped=skipped, hashed=hashed)
