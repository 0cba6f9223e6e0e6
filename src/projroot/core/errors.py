"""projroot domain exceptions.

Root detection itself never raises for missing signal (an empty result is
the answer).  These types cover the few real failures: a host that does not
know a buffer, and configuration that cannot be understood.
"""

from __future__ import annotations


# ── Base ────────────────────────────────────────────────────
class ProjRootError(Exception):
    """Root exception for all projroot errors."""


# ── Host / buffers ──────────────────────────────────────────
class BufferNotFound(ProjRootError):
    """The host has no buffer with the given identifier."""

    def __init__(self, buffer: object) -> None:
        super().__init__(f"Unknown buffer: {buffer!r}")
        self.buffer = buffer


# ── Root spec ───────────────────────────────────────────────
class SpecInvalid(ProjRootError):
    """A root spec entry is neither a detector name, a pattern list nor a callable."""

    def __init__(self, entry: object, reason: str = "unsupported spec entry") -> None:
        super().__init__(f"Invalid root spec entry {entry!r}: {reason}")
        self.entry = entry


# ── Config file ─────────────────────────────────────────────
class ConfigNotFound(ProjRootError):
    """The YAML config file does not exist at the expected path."""


class ConfigInvalid(ProjRootError):
    """The YAML config failed safe-load or schema validation."""


class ConfigTooLarge(ConfigInvalid):
    """The YAML config file exceeds the allowed size limit."""
