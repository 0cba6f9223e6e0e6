"""Root detectors.

Each detector answers "where could this buffer's project root be?" with a
list of raw candidate paths.  An empty list means "no opinion"; detectors
never raise for missing signal (unsaved buffer, no services, no marker).

* :func:`cwd` — the process working directory when the buffer lives
  under it, otherwise the buffer's own directory.
* :func:`lsp` — workspace folders and root dirs reported by the language
  services attached to the buffer, limited to those containing the file.
* :func:`pattern` — nearest ancestor holding one of the marker patterns.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable

import structlog

from projroot.core.matcher import find_upward
from projroot.core.models import BufferRef
from projroot.core.paths import current_dir, dirname, is_within, normalize, uri_to_path
from projroot.host import BufferHost

logger = structlog.get_logger()


def bufpath(host: BufferHost, buffer: BufferRef) -> str | None:
    """Normalised path of *buffer*, ``None`` for an unsaved buffer."""
    return normalize(host.buffer_name(buffer))


def cwd(host: BufferHost, buffer: BufferRef) -> list[str]:
    """Working root for *buffer*.

    Prefers the process working directory whenever the buffer is inside
    it, so files deep in a project do not produce narrow roots.  When the
    working directory is below the buffer's directory, or unrelated to
    it, the buffer's directory wins.
    """
    working = current_dir()
    path = bufpath(host, buffer)
    if path is None:
        return [working]

    buffer_dir = dirname(path)
    if is_within(buffer_dir, working):
        root = working
    else:
        root = buffer_dir
    return [root]


def lsp(
    host: BufferHost,
    buffer: BufferRef,
    *,
    ignore: Collection[str] = (),
) -> list[str]:
    """Roots reported by language services attached to *buffer*.

    Services named in *ignore* are skipped entirely.  Reported roots
    that do not contain the buffer's file are dropped, which filters out
    stale or unrelated workspaces.
    """
    path = bufpath(host, buffer)
    if path is None:
        return []

    reported: list[str] = []
    for service in host.language_services(buffer):
        if service.name in ignore:
            logger.debug("lsp_service_ignored", service=service.name)
            continue
        reported.extend(uri_to_path(folder) for folder in service.workspace_folders)
        if service.root_dir:
            reported.append(service.root_dir)

    roots: list[str] = []
    for candidate in reported:
        normalized = normalize(candidate)
        if normalized is not None and is_within(path, normalized):
            roots.append(candidate)
    return roots


def pattern(
    host: BufferHost,
    buffer: BufferRef,
    patterns: str | Iterable[str],
    *,
    max_depth: int | None = None,
) -> list[str]:
    """Directory of the nearest marker above the buffer (or the cwd)."""
    start = bufpath(host, buffer) or current_dir()
    root = find_upward(start, patterns, max_depth=max_depth)
    return [root] if root else []
