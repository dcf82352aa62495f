"""HTML element -> UXML element table.

Keys are HTML tag names, or ``input[type="..."]`` composites for typed
inputs.  Lookups are case-insensitive.
"""

from __future__ import annotations

from types import MappingProxyType

__all__ = ["HTML_TO_UI", "UI_NAMESPACE", "ui_tag_for_selector", "ui_tag_for_element"]

UI_NAMESPACE = "ui:"

_LABEL_TAGS = (
    "p", "span", "text", "h1", "h2", "h3", "h4", "h5", "h6", "label", "strong",
    "b", "em", "i", "small", "mark", "abbr", "cite", "code", "q", "time",
)

_CONTAINER_TAGS = (
    "div", "section", "article", "header", "footer", "main", "nav", "aside",
    "ul", "ol", "li", "form",
)

_INPUT_TYPES = {
    "text": "ui:TextField",
    "number": "ui:IntegerField",
    "password": "ui:TextField",
    "email": "ui:TextField",
    "checkbox": "ui:Toggle",
    "radio": "ui:RadioButton",
    "range": "ui:Slider",
    "file": "ui:TextField",
}


def _build_table() -> dict[str, str]:
    table = {tag: "ui:Label" for tag in _LABEL_TAGS}
    table.update({tag: "ui:VisualElement" for tag in _CONTAINER_TAGS})
    table["button"] = "ui:Button"
    table["input"] = "ui:TextField"
    for input_type, ui_tag in _INPUT_TYPES.items():
        table[f'input[type="{input_type}"]'] = ui_tag
    return table


HTML_TO_UI = MappingProxyType(_build_table())


def ui_tag_for_selector(selector: str) -> str | None:
    """Look up a bare tag or ``input[type="..."]`` composite."""
    return HTML_TO_UI.get(selector.strip().lower())


def ui_tag_for_element(tag_name: str, type_attribute: str | None = None) -> str | None:
    """Map an HTML element to its UXML tag; typed inputs win over plain ``input``."""
    tag = tag_name.lower()
    if tag == "input" and type_attribute:
        mapped = HTML_TO_UI.get(f'input[type="{type_attribute.strip().lower()}"]')
        if mapped is not None:
            return mapped
    return HTML_TO_UI.get(tag)
