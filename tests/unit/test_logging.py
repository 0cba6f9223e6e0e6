"""Tests for projroot.core.logging — structlog setup."""

from __future__ import annotations

import logging
from pathlib import PurePosixPath, PureWindowsPath

from projroot.core.logging import _path_processor, configure_logging


def test_path_values_rendered_with_forward_slashes() -> None:
    event = {
        "event": "root_detected",
        "root": PureWindowsPath("C:/repo/src"),
        "paths": [PurePosixPath("/a/b"), "plain"],
        "buffer": 3,
    }
    out = _path_processor(None, "info", event)
    assert out["root"] == "C:/repo/src"
    assert out["paths"] == ["/a/b", "plain"]
    assert out["buffer"] == 3


def test_configure_logging_sets_root_level() -> None:
    configure_logging(level="debug", json_output=False)
    assert logging.getLogger().level == logging.DEBUG
    configure_logging(level="WARNING")
    assert logging.getLogger().level == logging.WARNING
    assert len(logging.getLogger().handlers) == 1
