"""Tests for projroot.core.models — spec entries."""

from __future__ import annotations

import pytest

from projroot.core.errors import SpecInvalid
from projroot.core.models import (
    DEFAULT_SPEC,
    CustomFn,
    DetectorName,
    NamedDetector,
    PatternList,
    parse_spec,
    parse_spec_entry,
)


def _fixed_root(buffer: object) -> list[str]:
    return ["/fixed"]


class TestParseSpecEntry:
    def test_detector_names(self) -> None:
        assert parse_spec_entry("lsp") == NamedDetector(DetectorName.LSP)
        assert parse_spec_entry("cwd") == NamedDetector(DetectorName.CWD)
        assert parse_spec_entry(DetectorName.CWD) == NamedDetector(DetectorName.CWD)

    def test_other_string_is_single_pattern(self) -> None:
        assert parse_spec_entry("package.json") == PatternList(("package.json",))

    def test_list_is_pattern_list(self) -> None:
        assert parse_spec_entry([".git", "lua"]) == PatternList((".git", "lua"))
        assert parse_spec_entry(("*.mod",)) == PatternList(("*.mod",))

    def test_callable_is_custom(self) -> None:
        entry = parse_spec_entry(_fixed_root)
        assert isinstance(entry, CustomFn)
        assert entry.fn is _fixed_root

    def test_variants_pass_through(self) -> None:
        entry = PatternList((".hg",))
        assert parse_spec_entry(entry) is entry

    @pytest.mark.parametrize("raw", ["", [], ["ok", ""], [".git", 3], "pattern", 42, None])
    def test_rejects_unusable_entries(self, raw: object) -> None:
        with pytest.raises(SpecInvalid):
            parse_spec_entry(raw)


def test_parse_spec_keeps_order() -> None:
    assert parse_spec(["lsp", [".git", "lua"], "cwd"]) == DEFAULT_SPEC


def test_labels() -> None:
    assert NamedDetector(DetectorName.LSP).label == "lsp"
    assert PatternList((".git", "lua")).label == "{.git, lua}"
    assert CustomFn(_fixed_root).label == "_fixed_root"
