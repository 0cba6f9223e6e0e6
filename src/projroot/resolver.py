"""Root resolution — spec resolver + orchestrator.

A *spec* is an ordered list of strategies.  For a buffer, each entry is
turned into a detector (:func:`resolve_spec`), run, and its candidates
normalised, de-duplicated and sorted longest-first.  :meth:`RootResolver.get`
stops at the first entry with an answer; :meth:`RootResolver.detect` can
also report every entry, which is what diagnostics want.

Separators
----------
Every path handed out here (``get``, ``git``, ``detect``, the cache) is in
forward-slash form.  Converting to the platform separator is left to the
presentation layer (:func:`projroot.core.paths.to_native`).
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from functools import partial

import structlog

from projroot.core.cache import RootCache
from projroot.core.matcher import find_upward
from projroot.core.models import (
    BufferRef,
    CustomFn,
    DetectionResult,
    DetectorName,
    NamedDetector,
    PathValue,
    PatternList,
    RootFn,
    SpecEntry,
    parse_spec,
    parse_spec_entry,
)
from projroot.core.paths import current_dir, normalize
from projroot.core.settings import Settings, get_settings
from projroot.host import BufferHost
from projroot.modules import detectors

logger = structlog.get_logger()


def resolve_spec(entry: SpecEntry | object, host: BufferHost, settings: Settings) -> RootFn:
    """Return the detector function for one spec entry.

    Raw entries (``"lsp"``, ``[".git"]``, a callable) are parsed first;
    unusable ones raise :class:`projroot.core.errors.SpecInvalid`.
    """
    spec = parse_spec_entry(entry)

    if isinstance(spec, NamedDetector):
        if spec.name is DetectorName.CWD:
            return partial(detectors.cwd, host)
        return partial(detectors.lsp, host, ignore=settings.ignored_services())

    if isinstance(spec, CustomFn):
        return spec.fn

    assert isinstance(spec, PatternList)
    return partial(_pattern_detector, host, spec.patterns, settings.max_depth)


def _pattern_detector(
    host: BufferHost,
    patterns: tuple[str, ...],
    max_depth: int | None,
    buffer: BufferRef,
) -> list[str]:
    return detectors.pattern(host, buffer, patterns, max_depth=max_depth)


def _as_paths(found: PathValue | Iterable[PathValue] | None) -> list[PathValue]:
    if found is None:
        return []
    if isinstance(found, (str, os.PathLike)):
        return [found]
    return list(found)


def _clean(raw: Iterable[PathValue]) -> tuple[str, ...]:
    """Normalise, drop empties, de-duplicate (first seen wins), longest first."""
    roots: list[str] = []
    for path in raw:
        normalized = normalize(path)
        if normalized is not None and normalized not in roots:
            roots.append(normalized)
    # Stable: equal-length paths keep their reported order.
    roots.sort(key=len, reverse=True)
    return tuple(roots)


class RootResolver:
    """Project-root lookup for the buffers of one host.

    Parameters
    ----------
    host:
        Buffer accessor and language-service registry.
    settings:
        Detection settings.  Defaults to the process-wide :func:`get_settings`.
    cache:
        Per-buffer root cache.  Defaults to a new, empty one.
    spec:
        Spec for this resolver, may hold callables.  Overrides the
        spec from *settings*.
    """

    def __init__(
        self,
        host: BufferHost,
        settings: Settings | None = None,
        cache: RootCache | None = None,
        spec: Sequence[SpecEntry | object] | None = None,
    ) -> None:
        self.host = host
        self.settings = settings if settings is not None else get_settings()
        self.cache = cache if cache is not None else RootCache()
        self.spec = parse_spec(spec) if spec is not None else None

    def _buffer(self, buffer: BufferRef | None) -> BufferRef:
        return self.host.current_buffer() if buffer is None else buffer

    def bufpath(self, buffer: BufferRef | None = None) -> str | None:
        """Normalised path of *buffer*, ``None`` when it has no file."""
        return detectors.bufpath(self.host, self._buffer(buffer))

    def detect(
        self,
        buffer: BufferRef | None = None,
        spec: Sequence[SpecEntry | object] | None = None,
        all: bool = True,
    ) -> list[DetectionResult]:
        """Run the spec for *buffer* and return every non-empty result.

        Results keep spec order.  With ``all=False`` detection stops at
        the first entry that produced a path, so at most one result is
        returned.
        """
        buffer = self._buffer(buffer)
        if spec is None:
            spec = self.spec if self.spec is not None else self.settings.spec_entries()

        results: list[DetectionResult] = []
        for raw_entry in spec:
            entry = parse_spec_entry(raw_entry)
            found = resolve_spec(entry, self.host, self.settings)(buffer)
            paths = _clean(_as_paths(found))
            logger.debug("spec_entry_resolved", spec=entry.label, buffer=buffer, paths=list(paths))
            if not paths:
                continue
            results.append(DetectionResult(spec=entry, paths=paths))
            if not all:
                break
        return results

    def get(self, buffer: BufferRef | None = None) -> str:
        """Project root of *buffer* (cached).

        Falls back to the working directory when no spec entry produced
        anything, so callers always receive a usable path.
        """
        buffer = self._buffer(buffer)
        cached = self.cache.get(buffer)
        if cached is not None:
            logger.debug("root_cache_hit", buffer=buffer, root=cached)
            return cached

        results = self.detect(buffer=buffer, all=False)
        if results:
            root = results[0].paths[0]
            logger.info("root_detected", buffer=buffer, root=root, spec=results[0].spec.label)
        else:
            root = current_dir()
            logger.info("root_fallback_cwd", buffer=buffer, root=root)

        self.cache.set(buffer, root)
        return root

    def git(self, buffer: BufferRef | None = None) -> str:
        """Directory holding the nearest ``.git`` at or above the root.

        ``.git`` may be a directory or a file (worktrees, submodules).
        Without one, the plain root from :meth:`get` is returned.
        """
        root = self.get(buffer)
        git_root = find_upward(root, (".git",), max_depth=self.settings.max_depth)
        return git_root if git_root is not None else root

    def invalidate(self, buffer: BufferRef | None = None) -> bool:
        """Forget the cached root of *buffer*; the next ``get`` re-detects."""
        buffer = self._buffer(buffer)
        dropped = self.cache.invalidate(buffer)
        if dropped:
            logger.debug("root_cache_invalidated", buffer=buffer)
        return dropped

    def clear_cache(self) -> None:
        self.cache.clear()
