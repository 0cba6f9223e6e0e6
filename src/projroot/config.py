"""Root detection config file loader.

Loads a YAML file such as::

    spec:
      - lsp
      - [".git", "pyproject.toml", "*.mod"]
      - cwd
    lsp_ignore:
      - copilot

with safety guards:

* Size limit (default 64 KB) — rejects oversized files.
* ``yaml.safe_load`` only — no arbitrary Python objects.
* Encoding validated (UTF-8).
* Typed exceptions (:class:`ConfigNotFound`, :class:`ConfigInvalid`,
  :class:`ConfigTooLarge`).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from projroot.core.errors import ConfigInvalid, ConfigNotFound, ConfigTooLarge, SpecInvalid
from projroot.core.models import SpecEntry, parse_spec

# Default max config size (bytes).
_DEFAULT_MAX_SIZE_BYTES = 64 * 1024  # 64 KB

logger = structlog.get_logger()


# ── Pydantic v2 strict model ───────────────────────────────
class RootConfig(BaseModel):
    """Validated contents of a config file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    spec: list[str | list[str]] | None = None
    lsp_ignore: list[str] = []

    @field_validator("lsp_ignore")
    @classmethod
    def _names_not_blank(cls, v: list[str]) -> list[str]:
        names = [name.strip() for name in v]
        if not all(names):
            raise ValueError("service names must not be blank")
        return names

    def spec_entries(self) -> tuple[SpecEntry, ...] | None:
        """Parsed spec, or ``None`` when the file does not set one."""
        if self.spec is None:
            return None
        return parse_spec(self.spec)


# ── Loader ──────────────────────────────────────────────────
def load_root_config(
    path: Path,
    *,
    max_size_bytes: int = _DEFAULT_MAX_SIZE_BYTES,
) -> RootConfig:
    """Load and validate a root detection config file.

    Parameters
    ----------
    path:
        Absolute or resolved path to the YAML file.
    max_size_bytes:
        Reject files larger than this.

    Returns
    -------
    RootConfig
        Validated config; an empty file yields the defaults.

    Raises
    ------
    ConfigNotFound
        File does not exist.
    ConfigTooLarge
        File exceeds *max_size_bytes*.
    ConfigInvalid
        YAML parse error, schema violation or unusable spec entry.
    """
    if not path.is_file():
        raise ConfigNotFound(f"config not found: {path}")

    size = path.stat().st_size
    if size > max_size_bytes:
        raise ConfigTooLarge(f"config {path.name} is {size:,} bytes (limit {max_size_bytes:,})")

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigInvalid(f"config is not valid UTF-8: {exc}") from exc

    try:
        raw: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigInvalid(f"YAML parse error: {exc}") from exc

    if raw is None:
        logger.debug("config_loaded", path=path, empty=True)
        return RootConfig()
    if not isinstance(raw, dict):
        raise ConfigInvalid("config schema invalid: expected a mapping")

    try:
        config = RootConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigInvalid(f"config schema invalid: {exc}") from exc

    # Surface bad entries now rather than on the first detection.
    try:
        config.spec_entries()
    except SpecInvalid as exc:
        raise ConfigInvalid(str(exc)) from exc
    logger.debug("config_loaded", path=path, spec=config.spec, lsp_ignore=config.lsp_ignore)
    return config
