from html2uitk.markup.extract import ExtractedCss, StyleBlock, extract_css
from html2uitk.markup.tags import HTML_TO_UI, ui_tag_for_element, ui_tag_for_selector
from html2uitk.markup.uxml import UxmlConverter

__all__ = [
    "ExtractedCss",
    "StyleBlock",
    "extract_css",
    "HTML_TO_UI",
    "ui_tag_for_element",
    "ui_tag_for_selector",
    "UxmlConverter",
]
