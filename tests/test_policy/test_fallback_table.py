"""Tests for fallback synthesis."""

import json

import pytest

from html2uitk.errors import PolicyError
from html2uitk.policy.fallbacks import SHADOW_COLOR, default_fallbacks, load_fallbacks


@pytest.fixture
def table():
    return default_fallbacks()


# ---------------------------------------------------------------------------
# Bundled entries
# ---------------------------------------------------------------------------


class TestBundledFallbacks:
    def test_display_flex(self, table):
        assert table.synthesize("display", "flex") == [
            ("flex-direction", "row"),
            ("align-items", "stretch"),
            ("justify-content", "flex-start"),
        ]

    def test_display_none_identity(self, table):
        assert table.synthesize("display", "none") == [("display", "none")]

    def test_display_block_has_no_substitute(self, table):
        assert table.synthesize("display", "block") == []

    def test_text_align_map(self, table):
        assert table.synthesize("text-align", "center") == [("-unity-text-align", "middle-center")]
        assert table.synthesize("text-align", "Right") == [("-unity-text-align", "middle-right")]

    def test_text_align_unmapped(self, table):
        assert table.synthesize("text-align", "inherit") == []

    def test_opacity_passthrough(self, table):
        assert table.synthesize("opacity", "0.5") == [("opacity", "0.5")]

    def test_font_weight(self, table):
        assert table.synthesize("font-weight", "700") == [("-unity-font-style", "bold")]
        assert table.synthesize("font-weight", "normal") == [("-unity-font-style", "normal")]

    def test_font_style(self, table):
        assert table.synthesize("font-style", "oblique") == [("-unity-font-style", "italic")]

    def test_flex_flow(self, table):
        assert table.synthesize("flex-flow", "column wrap") == [("flex-direction", "column")]
        assert table.synthesize("flex-flow", "row nowrap") == [("flex-direction", "row")]

    def test_inset_expands_edges(self, table):
        assert table.synthesize("inset", "1px 2px") == [
            ("top", "1px"),
            ("right", "2px"),
            ("bottom", "1px"),
            ("left", "2px"),
        ]

    def test_unknown_property(self, table):
        assert table.synthesize("z-index", "3") == []
        assert "z-index" not in table
        assert "DISPLAY" in table


# ---------------------------------------------------------------------------
# Shadow transform
# ---------------------------------------------------------------------------


class TestShadow:
    def test_offsets_and_fixed_color(self, table):
        result = table.synthesize("box-shadow", "0 2px 4px rgba(0, 0, 0, 0.2)")
        assert result == [("text-shadow", f"0px 2px 4px {SHADOW_COLOR}")]

    def test_first_shadow_only(self, table):
        result = table.synthesize("box-shadow", "1px 1px red, 5px 5px blue")
        assert result == [("text-shadow", f"1px 1px {SHADOW_COLOR}")]

    def test_em_offsets(self, table):
        result = table.synthesize("box-shadow", "0.5em 1em 2em 3em black")
        assert result == [("text-shadow", f"8px 16px 32px {SHADOW_COLOR}")]

    def test_none_is_skipped(self, table):
        assert table.synthesize("box-shadow", "none") == []

    def test_no_leading_number(self, table):
        assert table.synthesize("box-shadow", "inset 1px 1px red") == []


# ---------------------------------------------------------------------------
# Loading custom tables
# ---------------------------------------------------------------------------


class TestLoadFallbacks:
    def test_custom_table(self, tmp_path):
        path = tmp_path / "fallbacks.json"
        path.write_text(
            json.dumps(
                {"float": [{"when": {"equals": "left"}, "emit": [{"property": "align-self", "value": "flex-start"}]}]}
            ),
            encoding="utf-8",
        )
        table = load_fallbacks(path)
        assert table.synthesize("float", "LEFT") == [("align-self", "flex-start")]
        assert table.synthesize("float", "right") == []

    def test_value_placeholder(self, tmp_path):
        path = tmp_path / "fallbacks.json"
        path.write_text(
            json.dumps({"gap": [{"emit": [{"property": "margin", "value": "$value"}]}]}),
            encoding="utf-8",
        )
        assert load_fallbacks(path).synthesize("gap", "4px") == [("margin", "4px")]

    def test_substitute_needs_exactly_one_source(self, tmp_path):
        path = tmp_path / "fallbacks.json"
        path.write_text(
            json.dumps({"gap": [{"emit": [{"property": "margin", "value": "1px", "transform": "shadow"}]}]}),
            encoding="utf-8",
        )
        with pytest.raises(PolicyError, match="exactly one"):
            load_fallbacks(path)

    def test_unknown_transform(self, tmp_path):
        path = tmp_path / "fallbacks.json"
        path.write_text(
            json.dumps({"gap": [{"emit": [{"property": "margin", "transform": "spin"}]}]}),
            encoding="utf-8",
        )
        with pytest.raises(PolicyError, match="unknown transform"):
            load_fallbacks(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "fallbacks.json"
        path.write_text("nope", encoding="utf-8")
        with pytest.raises(PolicyError):
            load_fallbacks(path)
