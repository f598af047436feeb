"""Display and CSV export of duplicate groups."""

from __future__ import annotations

from finddupes.models import CompareMode
from finddupes.models import DuplicateGroup
from typing import NamedTuple

import csv
import logging
import pathlib


logger = logging.getLogger(__name__)

DEFAULT_DISPLAY_LIMIT = 10

CSV_HEADER = ("Name", "DupeNumber", "SizeBytes", "Path1", "Path2")


class ExportRow(NamedTuple):
    name: str
    pair_index: int
    size_bytes: int
    path_a: str
    path_b: str


def _check_limit(display_limit: int) -> None:
    if display_limit < 0:
        raise ValueError("display limit cannot be negative")


def format_number(n: int) -> str:
    return f"{n:,}"


def display_lines(group: DuplicateGroup, display_limit: int, mode: CompareMode) -> list[str]:
    """Lines describing *group*, listing at most *display_limit* members."""
    _check_limit(display_limit)
    if mode is CompareMode.NAME_SIZE:
        header = f"Name: {group.label}   Size: {format_number(group.size)} bytes   - {group.count} files"
    else:
        header = f"Hash: {group.label}  - {group.count} files"
    lines = [header]
    lines.extend(f"  {p}" for p in group.paths[:display_limit])
    if group.count > display_limit:
        first = group.members[0].name
        last = group.members[-1].name
        lines.append(f"  ... and {group.count - display_limit} more files")
        lines.append(f"  (Total: {group.count} duplicate files from '{first}' to '{last}')")
    return lines


def export_rows(group: DuplicateGroup, display_limit: int) -> list[ExportRow]:
    """CSV pair rows for *group*.

    Groups within the display limit export every pair (i, j), i < j,
    numbered from 1. Larger groups export only the first pair (numbered 1)
    and the last pair (numbered with the group's member count).
    """
    _check_limit(display_limit)
    paths = [str(p) for p in group.paths]
    n = len(paths)
    if n < 2:
        return []
    name = group.members[0].name

    def row(index: int, a: int, b: int) -> ExportRow:
        return ExportRow(name, index, group.size, paths[a], paths[b])

    if n > display_limit:
        rows = [row(1, 0, 1)]
        if n > 2:
            rows.append(row(n, n - 2, n - 1))
        return rows

    rows = []
    index = 1
    for i in range(n):
        for j in range(i + 1, n):
            rows.append(row(index, i, j))
            index += 1
    return rows


def write_csv(path: pathlib.Path, groups: list[DuplicateGroup], display_limit: int) -> int:
    """Write export rows for all *groups* to *path*. Returns the number of rows."""
    _check_limit(display_limit)
    count = 0
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)
        for group in groups:
            for row in export_rows(group, display_limit):
                writer.writerow(row)
                count += 1
    logger.debug(f"wrote {count} row(s) to {path}")
    return count
