from html2uitk.convert.engine import ConversionResult, UssConverter
from html2uitk.convert.selectors import SelectorOutcome, rewrite_selector
from html2uitk.convert.values import translate_value

__all__ = [
    "ConversionResult",
    "UssConverter",
    "SelectorOutcome",
    "rewrite_selector",
    "translate_value",
]
