"""projroot domain models — root spec entries and detection results."""

from __future__ import annotations

import os
from collections.abc import Callable, Hashable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Union

from projroot.core.errors import SpecInvalid

# Opaque host buffer identifier.
BufferRef = Hashable

PathValue = Union[str, "os.PathLike[str]"]

# A custom detector may return one path, several, or nothing.
RootFn = Callable[[BufferRef], Union[PathValue, Iterable[PathValue], None]]


class DetectorName(str, Enum):
    CWD = "cwd"
    LSP = "lsp"


# ── Spec entries (tagged union) ─────────────────────────────
@dataclass(frozen=True)
class NamedDetector:
    name: DetectorName

    @property
    def label(self) -> str:
        return self.name.value


@dataclass(frozen=True)
class PatternList:
    patterns: tuple[str, ...]

    @property
    def label(self) -> str:
        return "{" + ", ".join(self.patterns) + "}"


@dataclass(frozen=True)
class CustomFn:
    fn: RootFn

    @property
    def label(self) -> str:
        return getattr(self.fn, "__name__", repr(self.fn))


SpecEntry = Union[NamedDetector, PatternList, CustomFn]

DEFAULT_SPEC: tuple[SpecEntry, ...] = (
    NamedDetector(DetectorName.LSP),
    PatternList((".git", "lua")),
    NamedDetector(DetectorName.CWD),
)


@dataclass(frozen=True)
class DetectionResult:
    """Candidate roots produced by one spec entry.

    ``paths`` is non-empty, free of duplicates and ordered longest
    (deepest) first.
    """

    spec: SpecEntry
    paths: tuple[str, ...]


# ── Parsing raw entries ─────────────────────────────────────
def parse_spec_entry(raw: object) -> SpecEntry:
    """Turn a raw entry (name, pattern(s) or callable) into a :data:`SpecEntry`.

    A string that names a detector selects it; any other string is a
    single marker pattern.

    Raises
    ------
    SpecInvalid
        Empty strings or lists, non-string patterns, the bare
        ``"pattern"`` name, or an unsupported type.
    """
    if isinstance(raw, (NamedDetector, PatternList, CustomFn)):
        return raw
    if isinstance(raw, DetectorName):
        return NamedDetector(raw)

    if isinstance(raw, str):
        if not raw:
            raise SpecInvalid(raw, "empty string")
        if raw == "pattern":
            raise SpecInvalid(raw, "the pattern detector needs a list of patterns")
        try:
            return NamedDetector(DetectorName(raw))
        except ValueError:
            return PatternList((raw,))

    if isinstance(raw, (list, tuple)):
        if not raw:
            raise SpecInvalid(raw, "empty pattern list")
        if not all(isinstance(p, str) and p for p in raw):
            raise SpecInvalid(raw, "patterns must be non-empty strings")
        return PatternList(tuple(raw))

    if callable(raw):
        return CustomFn(raw)

    raise SpecInvalid(raw)


def parse_spec(raw_entries: Sequence[object]) -> tuple[SpecEntry, ...]:
    """Parse an ordered list of raw entries, keeping their priority order."""
    return tuple(parse_spec_entry(entry) for entry in raw_entries)
