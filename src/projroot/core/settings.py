"""projroot runtime settings (Pydantic v2 Settings).

Centralises every knob of root detection so that:

* Hosts never reach for hidden globals: a :class:`Settings` instance is
  handed to the resolver explicitly.
* Environment overrides work (``PROJROOT_ROOT_SPEC``, ``PROJROOT_LSP_IGNORE``,
  ``PROJROOT_MAX_DEPTH``, ...).  List values are given as JSON.
* A YAML config file (``PROJROOT_CONFIG_FILE``) can carry the same spec.
* Tests can inject values via ``Settings(root_spec=[...], max_depth=0)``.

Usage
-----
::

    from projroot.core.settings import get_settings

    s = get_settings()
    s.spec_entries()            # configured spec, or DEFAULT_SPEC
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, PrivateAttr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from projroot.config import RootConfig, load_root_config
from projroot.core.models import DEFAULT_SPEC, SpecEntry, parse_spec


class Settings(BaseSettings):
    """All runtime configuration for projroot.

    Precedence for the spec: ``root_spec`` (argument / env), then the
    config file's ``spec``, then :data:`projroot.core.models.DEFAULT_SPEC`.
    """

    model_config = SettingsConfigDict(
        env_prefix="PROJROOT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Detection ───────────────────────────────────────────
    root_spec: list[str | list[str]] | None = None
    lsp_ignore: list[str] = []
    max_depth: int | None = Field(default=256, ge=0)  # parent hops per marker search

    # ── Config file ─────────────────────────────────────────
    config_file: Path | None = None

    # ── Logging ─────────────────────────────────────────────
    log_level: str = "INFO"
    log_json: bool = True  # structured JSON by default

    _spec: tuple[SpecEntry, ...] | None = PrivateAttr(default=None)
    _file_config: RootConfig = PrivateAttr(default_factory=RootConfig)

    @model_validator(mode="after")
    def _load_spec(self) -> "Settings":
        """Parse the spec override and read the config file, if any."""
        if self.config_file is not None:
            self._file_config = load_root_config(self.config_file)
        if self.root_spec is not None:
            self._spec = parse_spec(self.root_spec)
        return self

    # ── Convenience ─────────────────────────────────────────
    def spec_entries(self) -> tuple[SpecEntry, ...]:
        """The effective detection spec, highest priority first."""
        if self._spec is not None:
            return self._spec
        from_file = self._file_config.spec_entries()
        if from_file is not None:
            return from_file
        return DEFAULT_SPEC

    def ignored_services(self) -> frozenset[str]:
        """Language-service names the ``lsp`` detector must skip."""
        return frozenset(self.lsp_ignore) | frozenset(self._file_config.lsp_ignore)


@lru_cache(maxsize=1)
def get_settings(**overrides: object) -> Settings:
    """Return a cached :class:`Settings` instance.

    In tests, build ``Settings(...)`` directly instead.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
