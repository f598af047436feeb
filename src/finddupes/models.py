"""File records, per-file results, compare modes and duplicate groups."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from dataclasses import replace

import enum
import pathlib


class CompareMode(enum.Enum):
    """How files are compared."""

    NAME_SIZE = "nands"
    SHA256 = "sha256"
    SHA1 = "sha1"
    MD5 = "md5"

    @property
    def is_hash(self) -> bool:
        return self is not CompareMode.NAME_SIZE

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @classmethod
    def parse(cls, value: CompareMode | str) -> CompareMode:
        """Return the mode for *value*, matching names case-insensitively.

        Raises ValueError for unknown modes.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Invalid comparison mode: {value} (valid modes: {valid})") from None


_DESCRIPTIONS = {
    CompareMode.SHA256: "Most accurate, slowest",
    CompareMode.SHA1: "Balanced",
    CompareMode.MD5: "Fastest hash but less collision-resistant",
    CompareMode.NAME_SIZE: "Filename (case-insensitive) + size only, very fast first-pass check",
}


@dataclass(frozen=True)
class FileRecord:
    """A regular file seen by the pipeline."""

    path: pathlib.Path
    size: int
    digest: str | None = None

    @property
    def name(self) -> str:
        return self.path.name

    def with_digest(self, digest: str) -> FileRecord:
        return replace(self, digest=digest)


@dataclass(frozen=True)
class Skipped:
    """A file dropped from the run because it could not be stat'ed or read."""

    path: pathlib.Path
    reason: str
    stage: str


@dataclass(frozen=True)
class DuplicateGroup:
    """Two or more files sharing a name+size key or a content digest."""

    label: str
    size: int
    members: tuple[FileRecord, ...]

    @property
    def count(self) -> int:
        return len(self.members)

    @property
    def paths(self) -> list[pathlib.Path]:
        return [m.path for m in self.members]


@dataclass
class DetectionResult:
    """Outcome of one pipeline run."""

    groups: list[DuplicateGroup] = field(default_factory=list)
    skipped: list[Skipped] = field(default_factory=list)
    files_total: int = 0
    candidates: int = 0
    hashed: int = 0

    @property
    def duplicate_files(self) -> int:
        return sum(g.count for g in self.groups)
