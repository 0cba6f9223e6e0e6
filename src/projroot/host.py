"""Host collaborators.

projroot does not talk to an editor directly.  The host (editor plugin,
language server, CLI) implements :class:`BufferHost`; the resolver only
asks it three things: which buffer is current, what file a buffer holds,
and which language services are attached to it.

:class:`MemoryHost` is the bundled in-process implementation, used by
the CLI and handy for embedding in tools that track files themselves.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from projroot.core.errors import BufferNotFound
from projroot.core.models import BufferRef


@dataclass(frozen=True)
class LanguageService:
    """A language-analysis service attached to a buffer.

    ``workspace_folders`` holds ``file://`` URIs or plain paths.
    """

    name: str
    root_dir: str | None = None
    workspace_folders: tuple[str, ...] = ()


class BufferHost(Protocol):
    def current_buffer(self) -> BufferRef: ...

    def buffer_name(self, buffer: BufferRef) -> str:
        """File path of *buffer*, ``""`` when unsaved.  Unknown buffers raise."""
        ...

    def language_services(self, buffer: BufferRef) -> Iterable[LanguageService]: ...


@dataclass
class _Buffer:
    path: str
    services: list[LanguageService] = field(default_factory=list)


class MemoryHost:
    """Dictionary-backed :class:`BufferHost` with integer buffer ids."""

    def __init__(self) -> None:
        self._buffers: dict[int, _Buffer] = {}
        self._next_id = 1
        self._current: int | None = None

    def open(self, path: str = "") -> int:
        """Register a buffer for *path* and make it current."""
        buffer = self._next_id
        self._next_id += 1
        self._buffers[buffer] = _Buffer(path=path)
        self._current = buffer
        return buffer

    def close(self, buffer: int) -> None:
        self._require(buffer)
        del self._buffers[buffer]
        if self._current == buffer:
            self._current = max(self._buffers, default=None)

    def focus(self, buffer: int) -> None:
        self._require(buffer)
        self._current = buffer

    def attach(self, buffer: int, service: LanguageService) -> None:
        self._require(buffer).services.append(service)

    # ── BufferHost ──────────────────────────────────────────
    def current_buffer(self) -> int:
        if self._current is None:
            # Like an editor with no file open: an empty scratch buffer.
            self._current = self.open()
        return self._current

    def buffer_name(self, buffer: BufferRef) -> str:
        return self._require(buffer).path

    def language_services(self, buffer: BufferRef) -> list[LanguageService]:
        return list(self._require(buffer).services)

    def _require(self, buffer: BufferRef) -> _Buffer:
        try:
            return self._buffers[buffer]  # type: ignore[index]
        except KeyError:
            raise BufferNotFound(buffer) from None
