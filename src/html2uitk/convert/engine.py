"""Conversion engine: CSS text -> USS text.

Each rule is handled on its own, in source order:

1. selectors are filtered and rewritten (:mod:`html2uitk.convert.selectors`);
2. each declaration is renamed, checked against the translation policy and
   either translated, replaced by fallback substitutes, or reported;
3. the rule is written out, or dropped when nothing survived.

The engine never raises on stylesheet content.  Whatever cannot be
represented ends up in the :class:`ConversionResult` diagnostics and in the
log instead of the output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from html2uitk.config import ConverterConfig
from html2uitk.convert.selectors import rewrite_selector
from html2uitk.convert.values import translate_value
from html2uitk.model.diagnostic import Diagnostic, Severity
from html2uitk.policy.fallbacks import FallbackTable, default_fallbacks
from html2uitk.policy.support import TranslationPolicy, load_policy
from html2uitk.uss.model import Declaration, Rule, Stylesheet
from html2uitk.uss.parser import parse_stylesheet

__all__ = ["ConversionResult", "UssConverter", "PROPERTY_RENAMES"]

logger = logging.getLogger(__name__)

PROPERTY_RENAMES = {
    "background": "background-color",
    "font-family": "-unity-font",
}

INDENT = "    "


@dataclass(frozen=True)
class ConversionResult:
    """USS text plus everything that was left out of it."""

    text: str
    diagnostics: tuple[Diagnostic, ...] = ()
    unsupported: tuple[str, ...] = ()
    not_implemented: tuple[str, ...] = ()
    dropped_rules: tuple[str, ...] = ()

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_warning]

    def summary_lines(self) -> list[str]:
        """Operator-facing report, one line per dropped rule plus the totals."""
        lines = [f"- Empty/invalid ruleset discarded: {s}" for s in self.dropped_rules]
        if self.unsupported:
            lines.append(f"- UI Toolkit doesn't support: {', '.join(self.unsupported)}")
        if self.not_implemented:
            lines.append(f"- Not implemented yet: {', '.join(self.not_implemented)}")
        return lines


@dataclass
class _Report:
    """Mutable collector for a single conversion run."""

    diagnostics: list[Diagnostic] = field(default_factory=list)
    unsupported: dict[str, None] = field(default_factory=dict)
    not_implemented: dict[str, None] = field(default_factory=dict)
    dropped_rules: list[str] = field(default_factory=list)

    def drop_rule(self, selector: str, reason: str) -> None:
        logger.info("Empty/invalid ruleset discarded: %s (%s)", selector, reason)
        self.dropped_rules.append(selector)
        self.diagnostics.append(
            Diagnostic(
                code="rule-dropped",
                severity=Severity.INFO,
                message=f"Empty/invalid ruleset discarded: {reason}",
                selector=selector,
            )
        )

    def finish(self, text: str) -> ConversionResult:
        unsupported = tuple(self.unsupported)
        not_implemented = tuple(self.not_implemented)
        if unsupported:
            logger.warning("UI Toolkit doesn't support: %s", ", ".join(unsupported))
            self.diagnostics.append(
                Diagnostic(
                    code="unsupported-property",
                    severity=Severity.WARNING,
                    message=f"UI Toolkit doesn't support: {', '.join(unsupported)}",
                    properties=unsupported,
                )
            )
        if not_implemented:
            logger.info("Not implemented yet: %s", ", ".join(not_implemented))
            self.diagnostics.append(
                Diagnostic(
                    code="not-implemented",
                    severity=Severity.INFO,
                    message=f"Not implemented yet: {', '.join(not_implemented)}",
                    properties=not_implemented,
                )
            )
        return ConversionResult(
            text=text,
            diagnostics=tuple(self.diagnostics),
            unsupported=unsupported,
            not_implemented=not_implemented,
            dropped_rules=tuple(self.dropped_rules),
        )


class UssConverter:
    """Translate CSS stylesheets into Unity Style Sheets.

    A converter only holds read-only tables, so one instance can serve many
    conversions (also from several threads).

    Args:
        policy: Property support and breaking selectors.  Defaults to the
            bundled tables.
        config: Asset table used to resolve fonts.
        fallbacks: Substitutes for non-native properties.  Defaults to the
            bundled table.
    """

    def __init__(
        self,
        policy: TranslationPolicy | None = None,
        config: ConverterConfig | None = None,
        fallbacks: FallbackTable | None = None,
    ) -> None:
        self.policy = policy if policy is not None else load_policy()
        self.config = config if config is not None else ConverterConfig()
        self.fallbacks = fallbacks if fallbacks is not None else default_fallbacks()

    def convert(self, css: str) -> str:
        return self.convert_with_report(css).text

    def convert_with_report(self, css: str) -> ConversionResult:
        return self.convert_stylesheet(parse_stylesheet(css))

    def convert_stylesheet(self, stylesheet: Stylesheet) -> ConversionResult:
        report = _Report()
        blocks = []
        for rule in stylesheet.rules:
            block = self._convert_rule(rule, report)
            if block is not None:
                blocks.append(block)
        return report.finish("".join(blocks))

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def _convert_rule(self, rule: Rule, report: _Report) -> str | None:
        original = ", ".join(s.raw for s in rule.selectors)

        selectors: list[str] = []
        reasons: list[str] = []
        for selector in rule.selectors:
            outcome = rewrite_selector(selector, self.policy)
            if outcome.breaking:
                report.drop_rule(original, outcome.reason or "breaking selector")
                return None
            if outcome.accepted:
                selectors.append(outcome.text)
            elif outcome.reason:
                reasons.append(outcome.reason)
        if not selectors:
            report.drop_rule(original, "; ".join(reasons) or "no usable selector")
            return None

        # A property emitted twice keeps its first position and its last value.
        emitted: dict[str, str] = {}
        for declaration in rule.declarations:
            for prop, value in self._convert_declaration(declaration, report):
                emitted[prop] = value
        if not emitted:
            report.drop_rule(original, "no supported declarations")
            return None

        body = "".join(f"{INDENT}{prop}: {value};\n" for prop, value in emitted.items())
        return f"{', '.join(selectors)} {{\n{body}}}\n"

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _convert_declaration(
        self, declaration: Declaration, report: _Report
    ) -> list[tuple[str, str]]:
        if declaration.is_custom_property:
            return [(declaration.property, declaration.text)]

        prop = PROPERTY_RENAMES.get(declaration.property.lower(), declaration.property.lower())
        value = declaration.text

        if not self.policy.is_known(prop):
            report.unsupported.setdefault(prop)
            return []

        if not self.policy.is_native(prop):
            emitted = self._synthesize(prop, value)
            if not emitted:
                report.not_implemented.setdefault(prop)
            return emitted

        translated = translate_value(prop, value, self.config)
        if not translated.strip():
            return []
        emitted = [(prop, translated)]
        if prop == "-unity-font":
            emitted.append(("-unity-font-definition", translated))
        return emitted

    def _synthesize(self, prop: str, value: str) -> list[tuple[str, str]]:
        emitted = []
        for target, substitute in self.fallbacks.synthesize(prop, value):
            if target.lower() != prop and not self.policy.is_native(target):
                logger.debug("Fallback %s -> %s skipped: target not native", prop, target)
                continue
            translated = translate_value(target, substitute, self.config)
            if translated.strip():
                emitted.append((target, translated))
        return emitted
