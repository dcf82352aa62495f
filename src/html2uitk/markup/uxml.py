"""HTML -> UXML document conversion.

The HTML is parsed with BeautifulSoup's ``html.parser`` and the ``<body>``
(or, without one, the whole document) is walked recursively.  Elements are
renamed through :mod:`html2uitk.markup.tags`; text ends up in ``text``
attributes because UXML labels and buttons do not take text children.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from html2uitk.config import ConverterConfig
from html2uitk.markup.tags import ui_tag_for_element

__all__ = ["UXML_HEADER", "UXML_FOOTER", "UxmlConverter", "escape_xml"]

logger = logging.getLogger(__name__)

UXML_HEADER = (
    '<ui:UXML xmlns:ui="UnityEngine.UIElements" xmlns:uie="UnityEditor.UIElements"'
    ' editor-extension-mode="False">'
)
UXML_FOOTER = "</ui:UXML>"

LABEL = "ui:Label"
BUTTON = "ui:Button"
TEXT_FIELD = "ui:TextField"
VISUAL_ELEMENT = "ui:VisualElement"

DROPPED_TAGS = frozenset({"script", "style", "head", "meta", "link", "title"})

DROPPED_ATTRIBUTES = frozenset({
    "onclick", "onchange", "onload", "type", "min", "max", "step", "src", "href",
    "action", "method",
})

RENAMED_ATTRIBUTES = {
    "id": "name",
    "placeholder": "placeholder-text",
}

_XML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)


def escape_xml(value: str) -> str:
    for raw, escaped in _XML_ESCAPES:
        value = value.replace(raw, escaped)
    return value


def _collapse(text: str) -> str:
    return " ".join(text.split())


def _attribute_value(value) -> str:
    # bs4 hands multi-valued attributes (class, rel...) back as lists.
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return "" if value is None else str(value)


class UxmlConverter:
    """Convert HTML markup to a UXML document."""

    def __init__(self, config: ConverterConfig | None = None) -> None:
        self.config = config if config is not None else ConverterConfig()

    def convert(self, html: str) -> str:
        soup = BeautifulSoup(html, "html.parser")
        root: Tag = soup.body or soup.html or soup

        lines = [UXML_HEADER]
        for child in root.children:
            lines.extend(self._convert_node(child, parent_tag=None, depth=1))
        lines.append(UXML_FOOTER)
        return "\n".join(lines) + "\n"

    def _convert_node(self, node: PageElement, parent_tag: str | None, depth: int) -> list[str]:
        if isinstance(node, Tag):
            return self._convert_element(node, depth)
        if isinstance(node, PreformattedString):
            # Comments, doctypes, CDATA and processing instructions.
            return []
        if isinstance(node, NavigableString):
            return self._convert_text(str(node), parent_tag, depth)
        return []

    def _convert_text(self, text: str, parent_tag: str | None, depth: int) -> list[str]:
        if not text.strip():
            return []
        indent = "\t" * depth
        if parent_tag == VISUAL_ELEMENT:
            return [f'{indent}<{LABEL} text="{escape_xml(text.strip())}"/>']
        return [f"{indent}{escape_xml(text.strip())}"]

    def _convert_element(self, element: Tag, depth: int) -> list[str]:
        name = element.name.lower()
        if name in DROPPED_TAGS:
            return []

        ui_tag = ui_tag_for_element(name, _attribute_value(element.get("type")) or None) or name
        attributes: list[tuple[str, str]] = []

        if ui_tag in (LABEL, BUTTON):
            text = _collapse(element.get_text())
            if not text:
                logger.debug("Skipping empty <%s> (%s)", name, ui_tag)
                return []
            if ui_tag == LABEL and self.config.options.uppercase:
                text = text.upper()
            attributes.append(("text", text))

        for attr_name, attr_value in element.attrs.items():
            lowered = attr_name.lower()
            if lowered in DROPPED_ATTRIBUTES:
                continue
            attributes.append((RENAMED_ATTRIBUTES.get(lowered, attr_name), _attribute_value(attr_value)))

        focusable = self.config.options.focusable
        if ui_tag == TEXT_FIELD and focusable is not None:
            attributes.append(("focusable", "true" if focusable else "false"))

        indent = "\t" * depth
        opening = "<" + ui_tag + "".join(f' {k}="{escape_xml(v)}"' for k, v in attributes)

        if ui_tag in (LABEL, BUTTON):
            return [f"{indent}{opening}/>"]

        children: list[str] = []
        for child in element.children:
            children.extend(self._convert_node(child, parent_tag=ui_tag, depth=depth + 1))
        if not children:
            return [f"{indent}{opening}/>"]
        return [f"{indent}{opening}>", *children, f"{indent}</{ui_tag}>"]
