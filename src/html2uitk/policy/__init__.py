from html2uitk.policy.fallbacks import (
    FallbackRule,
    FallbackSubstitute,
    FallbackTable,
    default_fallbacks,
    load_fallbacks,
)
from html2uitk.policy.support import (
    SUPPORTED_PSEUDO_CLASSES,
    UNSUPPORTED_PSEUDO_CLASSES,
    UNSUPPORTED_PSEUDO_ELEMENTS,
    PropertySupport,
    TranslationPolicy,
    load_breaking_selectors,
    load_policy,
    load_property_table,
)

__all__ = [
    "FallbackRule",
    "FallbackSubstitute",
    "FallbackTable",
    "default_fallbacks",
    "load_fallbacks",
    "SUPPORTED_PSEUDO_CLASSES",
    "UNSUPPORTED_PSEUDO_CLASSES",
    "UNSUPPORTED_PSEUDO_ELEMENTS",
    "PropertySupport",
    "TranslationPolicy",
    "load_breaking_selectors",
    "load_policy",
    "load_property_table",
]
