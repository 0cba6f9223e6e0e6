"""Upward marker search.

Walks from a start directory towards the filesystem root, listing each
directory and testing its entries against a set of marker patterns.

Pattern syntax
--------------
* ``".git"`` — literal entry name (file or directory).
* ``"*.mod"`` — suffix wildcard: a leading ``*`` means "name ends with
  the rest", so ``go.mod`` matches.

Entries of one directory are examined in sorted-name order, so the
reported marker is the same on every platform.  The returned root does
not depend on which entry matched: it is always the listed directory.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

import structlog

from projroot.core.paths import normalize

logger = structlog.get_logger()


def matches(name: str, patterns: Iterable[str]) -> bool:
    """True when *name* equals a pattern or ends with a ``*``-pattern's suffix."""
    for pattern in patterns:
        if name == pattern:
            return True
        if pattern.startswith("*") and name.endswith(pattern[1:]):
            return True
    return False


def _first_match(directory: Path, patterns: tuple[str, ...]) -> str | None:
    try:
        names = sorted(entry.name for entry in directory.iterdir())
    except OSError:
        # Unreadable or vanished directory: no signal at this level.
        return None
    for name in names:
        if matches(name, patterns):
            return name
    return None


def find_upward(
    start: str | os.PathLike[str],
    patterns: str | Iterable[str],
    *,
    max_depth: int | None = None,
) -> str | None:
    """Return the nearest directory at or above *start* holding a marker.

    Parameters
    ----------
    start:
        Directory to start from.  A file path starts from its parent.
    patterns:
        One pattern or an iterable of patterns.
    max_depth:
        Maximum number of parent hops.  ``0`` only inspects *start*;
        ``None`` walks to the filesystem root.

    Returns
    -------
    str | None
        Normalised directory containing the first matching entry, or
        ``None`` when nothing matched.
    """
    wanted = (patterns,) if isinstance(patterns, str) else tuple(patterns)
    origin = normalize(start)
    if not wanted or origin is None:
        return None

    current = Path(origin)
    if not current.is_dir():
        current = current.parent

    ascents = 0
    while True:
        marker = _first_match(current, wanted)
        if marker is not None:
            root = normalize(current)
            logger.debug("marker_found", marker=marker, root=root)
            return root

        parent = current.parent
        if parent == current:
            return None
        if max_depth is not None and ascents >= max_depth:
            logger.debug("marker_search_depth_exhausted", start=origin, max_depth=max_depth)
            return None
        current = parent
        ascents += 1
