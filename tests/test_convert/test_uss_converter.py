"""Tests for the CSS -> USS conversion engine."""

import logging
import re

import pytest

from html2uitk.config import AssetConfig, ConverterConfig
from html2uitk.convert.engine import UssConverter
from html2uitk.model.diagnostic import Severity
from html2uitk.policy.fallbacks import load_fallbacks
from html2uitk.policy.support import PropertySupport, TranslationPolicy, load_policy
from html2uitk.uss.parser import parse_stylesheet


@pytest.fixture(scope="module")
def converter():
    config = ConverterConfig(assets={"Roboto": AssetConfig(path="Assets/Fonts/Roboto.ttf")})
    return UssConverter(load_policy(), config=config)


# ---------------------------------------------------------------------------
# Output format
# ---------------------------------------------------------------------------


class TestOutputFormat:
    def test_single_rule(self, converter):
        assert converter.convert(".a { color: red; }") == ".a {\n    color: red;\n}\n"

    def test_rules_in_source_order(self, converter):
        out = converter.convert(".b { color: red; } .a { width: 10px; }")
        assert out == ".b {\n    color: red;\n}\n.a {\n    width: 10px;\n}\n"

    def test_selector_list_joined(self, converter):
        out = converter.convert("div, p:hover { color: red; }")
        assert out.startswith("VisualElement, Label:hover {\n")

    def test_body_becomes_root(self, converter):
        assert converter.convert("body { color: red; }") == ":root {\n    color: red;\n}\n"

    def test_important_not_emitted(self, converter):
        assert converter.convert(".a { color: red !important; }") == ".a {\n    color: red;\n}\n"

    def test_empty_input(self, converter):
        assert converter.convert("") == ""


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


class TestDeclarations:
    def test_em_converted(self, converter):
        assert "    font-size: 32px;\n" in converter.convert(".a { font-size: 2em; }")

    def test_background_renamed(self, converter):
        assert "    background-color: #fff;\n" in converter.convert(".a { background: #fff; }")

    def test_font_family_resolved_with_definition(self, converter):
        out = converter.convert(".a { font-family: 'Roboto', sans-serif; }")
        assert out == (
            ".a {\n"
            "    -unity-font: Assets/Fonts/Roboto.ttf;\n"
            "    -unity-font-definition: Assets/Fonts/Roboto.ttf;\n"
            "}\n"
        )

    def test_unresolved_font_omitted(self, converter):
        result = converter.convert_with_report(".a { font-family: Arial; color: red; }")
        assert result.text == ".a {\n    color: red;\n}\n"
        assert result.unsupported == ()

    def test_custom_property_verbatim(self, converter):
        out = converter.convert(":root { --Accent-Color: .5em; }")
        assert out == ":root {\n    --Accent-Color: .5em;\n}\n"

    def test_unknown_property_reported(self, converter):
        result = converter.convert_with_report(".a { float: left; color: red; }")
        assert result.text == ".a {\n    color: red;\n}\n"
        assert result.unsupported == ("float",)

    def test_fallback_substitutes(self, converter):
        out = converter.convert(".row { display: flex; text-align: center; }")
        assert out == (
            ".row {\n"
            "    flex-direction: row;\n"
            "    align-items: stretch;\n"
            "    justify-content: flex-start;\n"
            "    -unity-text-align: middle-center;\n"
            "}\n"
        )

    def test_identity_fallback(self, converter):
        assert converter.convert(".h { display: none; }") == ".h {\n    display: none;\n}\n"

    def test_non_native_without_substitute(self, converter):
        result = converter.convert_with_report(".a { z-index: 2; display: block; color: red; }")
        assert result.text == ".a {\n    color: red;\n}\n"
        assert result.not_implemented == ("z-index", "display")

    def test_shadow_approximation(self, converter):
        out = converter.convert(".card { box-shadow: 0 .125em 4px #000; }")
        assert "    text-shadow: 0px 2px 4px rgba(0, 0, 0, 0.4);\n" in out

    def test_fallback_target_must_be_native(self):
        policy = TranslationPolicy(
            properties={
                "color": PropertySupport(native=True),
                "opacity": PropertySupport(native=False),
                "display": PropertySupport(native=False),
            }
        )
        converter = UssConverter(policy, fallbacks=load_fallbacks())
        result = converter.convert_with_report(".a { opacity: .5; display: flex; color: red; }")
        assert result.text == ".a {\n    opacity: 0.5;\n    color: red;\n}\n"
        assert result.not_implemented == ("display",)


# ---------------------------------------------------------------------------
# Dropped rules
# ---------------------------------------------------------------------------


class TestDroppedRules:
    def test_pseudo_element_rule_dropped(self, converter):
        result = converter.convert_with_report("p::before { color: red; } .a { color: blue; }")
        assert result.text == ".a {\n    color: blue;\n}\n"
        assert result.dropped_rules == ("p::before",)

    def test_one_rejected_selector_keeps_the_rest(self, converter):
        out = converter.convert("p::before, .a { color: red; }")
        assert out == ".a {\n    color: red;\n}\n"

    def test_breaking_selector_drops_whole_rule(self, converter):
        result = converter.convert_with_report("h1 + p, .a { color: red; }")
        assert result.text == ""
        assert result.dropped_rules == ("h1 + p, .a",)

    def test_all_unsupported_rule_dropped_siblings_kept(self, converter):
        css = ".a { color: red; } .b { float: left; clear: both; } .c { width: 1px; }"
        result = converter.convert_with_report(css)
        assert result.text == ".a {\n    color: red;\n}\n.c {\n    width: 1px;\n}\n"
        assert result.dropped_rules == (".b",)
        assert result.unsupported == ("float", "clear")

    def test_stray_closing_brace_drops_following_rule(self, converter):
        result = converter.convert_with_report(".a { color: red; } } .b { color: blue; }")
        assert result.text == ".a {\n    color: red;\n}\n"
        assert result.dropped_rules == ("} .b",)

    def test_stray_semicolon_drops_rule(self, converter):
        assert converter.convert("; .c { color: red; }") == ""

    def test_unparseable_selector_rejected_alone(self, converter):
        result = converter.convert_with_report("a$b, .ok { color: red; }")
        assert result.text == ".ok {\n    color: red;\n}\n"

    def test_block_value_dropped_siblings_kept(self, converter):
        out = converter.convert(".a { color: {red}; width: 1px; }")
        assert out == ".a {\n    width: 1px;\n}\n"

    @pytest.mark.parametrize(
        "css",
        [
            ".a { color: red; .b { color",
            "{ color: red; }",
            ".a { color: red } .b { : ; }",
            "@media { .x { color: red; } } .y { color: red;",
            ".a, { color: red; }",
            "div[ { color: red; }",
            ".a { color: {red}; width: 1px; }",
            ".a { color: red; } } .b { color: blue; }",
            "; .c { color: red; }",
            "}}}{{{",
        ],
    )
    def test_malformed_input_gives_well_formed_output(self, converter, css):
        text = converter.convert(css)
        assert re.fullmatch(r"(?:[^{};\n]+ \{\n(?:    [^{};\n]+;\n)+\}\n)*", text)


# ---------------------------------------------------------------------------
# Diagnostics and reporting
# ---------------------------------------------------------------------------


class TestDiagnostics:
    def test_codes_and_severities(self, converter):
        result = converter.convert_with_report(
            "p::after { color: red; } .a { float: left; z-index: 1; color: red; }"
        )
        codes = {d.code: d.severity for d in result.diagnostics}
        assert codes == {
            "rule-dropped": Severity.INFO,
            "unsupported-property": Severity.WARNING,
            "not-implemented": Severity.INFO,
        }
        assert [d.code for d in result.warnings] == ["unsupported-property"]

    def test_dropped_rule_carries_selector(self, converter):
        result = converter.convert_with_report("p::after { color: red; }")
        assert result.diagnostics[0].selector == "p::after"

    def test_summary_lines(self, converter):
        result = converter.convert_with_report("p::after { color: red; } .a { float: left; z-index: 1; color: red; }")
        assert result.summary_lines() == [
            "- Empty/invalid ruleset discarded: p::after",
            "- UI Toolkit doesn't support: float",
            "- Not implemented yet: z-index",
        ]

    def test_diagnostics_logged(self, converter, caplog):
        with caplog.at_level(logging.INFO, logger="html2uitk.convert.engine"):
            converter.convert(".b { float: left; }")
        messages = [r.getMessage() for r in caplog.records]
        assert any("Empty/invalid ruleset discarded: .b" in m for m in messages)
        assert any("UI Toolkit doesn't support: float" in m for m in messages)

    def test_diagnostics_do_not_change_text(self, converter):
        css = ".a { color: red; float: left; }"
        assert converter.convert(css) == converter.convert_with_report(css).text


# ---------------------------------------------------------------------------
# Stability
# ---------------------------------------------------------------------------


class TestStability:
    def test_converting_output_again_is_unchanged(self, converter):
        css = """
        body { color: red; }
        div.card:hover { margin: .5em 1rem; width: 50vw; border-radius: 4px 2px; }
        .t { font-family: Roboto; text-align: right; }
        """
        once = converter.convert(css)
        assert converter.convert(once) == once

    def test_converter_is_reusable(self, converter):
        first = converter.convert_with_report(".a { float: left; color: red; }")
        second = converter.convert_with_report(".b { color: blue; }")
        assert first.unsupported == ("float",)
        assert second.unsupported == ()

    def test_convert_stylesheet(self, converter):
        result = converter.convert_stylesheet(parse_stylesheet("span { color: red; }"))
        assert result.text == "Label {\n    color: red;\n}\n"

    def test_default_tables(self):
        assert UssConverter().convert("p { color: red; }") == "Label {\n    color: red;\n}\n"


class TestRepeatedProperties:
    def test_substitute_and_explicit_property_merge(self, converter):
        out = converter.convert(".a { display: flex; flex-direction: column; }")
        assert out == (
            ".a {\n"
            "    flex-direction: column;\n"
            "    align-items: stretch;\n"
            "    justify-content: flex-start;\n"
            "}\n"
        )
