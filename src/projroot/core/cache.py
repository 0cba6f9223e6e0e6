"""Per-buffer root cache.

Owned by a :class:`projroot.resolver.RootResolver`.  A cached root is
authoritative: it is returned as-is, without checking the filesystem,
until the host invalidates it (buffer closed, working directory changed).
"""

from __future__ import annotations

from projroot.core.models import BufferRef


class RootCache:
    """Mapping of buffer → resolved root path."""

    def __init__(self) -> None:
        self._roots: dict[BufferRef, str] = {}

    def get(self, buffer: BufferRef) -> str | None:
        return self._roots.get(buffer)

    def set(self, buffer: BufferRef, root: str) -> None:
        self._roots[buffer] = root

    def invalidate(self, buffer: BufferRef) -> bool:
        """Forget *buffer*'s root.  Returns whether an entry was dropped."""
        return self._roots.pop(buffer, None) is not None

    def clear(self) -> None:
        self._roots.clear()

    def __contains__(self, buffer: object) -> bool:
        return buffer in self._roots

    def __len__(self) -> int:
        return len(self._roots)
