"""html2uitk - translate HTML/CSS into Unity UI Toolkit UXML/USS."""

__version__ = "0.3.0"

from html2uitk.config import ConverterConfig, load_config  # noqa: E402
from html2uitk.convert import ConversionResult, UssConverter  # noqa: E402
from html2uitk.errors import (  # noqa: E402
    ConfigError,
    Html2UitkError,
    MetadataError,
    PolicyError,
)
from html2uitk.markup import UxmlConverter, extract_css  # noqa: E402
from html2uitk.policy import TranslationPolicy, load_fallbacks, load_policy  # noqa: E402
from html2uitk.uss import parse_stylesheet  # noqa: E402

__all__ = [
    "__version__",
    "ConverterConfig",
    "load_config",
    "ConversionResult",
    "UssConverter",
    "ConfigError",
    "Html2UitkError",
    "MetadataError",
    "PolicyError",
    "UxmlConverter",
    "extract_css",
    "TranslationPolicy",
    "load_fallbacks",
    "load_policy",
    "parse_stylesheet",
]
