"""Pull the stylesheets embedded in an HTML document out into plain CSS."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from bs4 import BeautifulSoup

__all__ = ["ExtractedCss", "StyleBlock", "extract_css", "EXTRACTED_HEADER"]

EXTRACTED_HEADER = "/* Extracted CSS from HTML file */"
INLINE_CLASS_PREFIX = "inline-style-"

_HTML_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_CDATA_RE = re.compile(r"<!\[CDATA\[(.*?)\]\]>", re.DOTALL)


@dataclass(frozen=True)
class StyleBlock:
    css: str
    media: str | None = None
    origin: str = "<style>"


@dataclass
class ExtractedCss:
    blocks: list[StyleBlock] = field(default_factory=list)

    @property
    def has_css(self) -> bool:
        return bool(self.blocks)

    def combined(self) -> str:
        """All blocks in document order, media blocks wrapped in ``@media``."""
        parts = [EXTRACTED_HEADER, ""]
        for block in self.blocks:
            if block.media and block.media.strip():
                parts.append(f"@media {block.media.strip()} {{")
                parts.append(block.css)
                parts.append("}")
            else:
                parts.append(block.css)
            parts.append("")
        return "\n".join(parts)


def _clean(css: str) -> str:
    css = _HTML_COMMENT_RE.sub("", css)
    css = _CDATA_RE.sub(r"\1", css)
    return css.strip()


def extract_css(html: str, include_inline: bool = True) -> ExtractedCss:
    """Collect ``<style>`` blocks and, optionally, inline ``style`` attributes.

    Inline styles become ``.inline-style-N`` rules, numbered from 1 in
    document order, gathered in one trailing block.
    """
    soup = BeautifulSoup(html, "html.parser")
    extracted = ExtractedCss()

    for tag in soup.find_all("style"):
        css = _clean(tag.string or "")
        if css:
            media = tag.get("media")
            extracted.blocks.append(StyleBlock(css=css, media=media or None))

    if include_inline:
        rules = []
        for tag in soup.find_all(style=True):
            style = tag["style"].strip()
            if style:
                rules.append(f".{INLINE_CLASS_PREFIX}{len(rules) + 1} {{ {style} }}")
        if rules:
            extracted.blocks.append(
                StyleBlock(css="\n".join(rules), origin="inline style attributes")
            )

    return extracted
