from html2uitk.uss.classifier import classify, create_fragment
from html2uitk.uss.model import (
    Declaration,
    Rule,
    SegmentType,
    Selector,
    SelectorSegment,
    Stylesheet,
    ValueFragment,
    ValueKind,
    VariableDefinition,
    VariableType,
)
from html2uitk.uss.parser import parse_stylesheet, parse_stylesheet_file
from html2uitk.uss.tokenizer import tokenize_selector
from html2uitk.uss.variables import load_variables

__all__ = [
    "classify",
    "create_fragment",
    "tokenize_selector",
    "parse_stylesheet",
    "parse_stylesheet_file",
    "load_variables",
    "Declaration",
    "Rule",
    "SegmentType",
    "Selector",
    "SelectorSegment",
    "Stylesheet",
    "ValueFragment",
    "ValueKind",
    "VariableDefinition",
    "VariableType",
]
