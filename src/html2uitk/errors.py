"""Error hierarchy for html2uitk.

Only the loaders for collaborator inputs (configuration, policy tables,
variable metadata) raise.  Stylesheet content never does: malformed CSS
degrades to dropped declarations and rules instead.
"""

from __future__ import annotations

from pathlib import Path


class Html2UitkError(Exception):
    """Base error for all html2uitk errors."""

    def __init__(
        self, message: str, *, path: str | Path | None = None, cause: Exception | None = None
    ) -> None:
        self.path = str(path) if path is not None else None
        self.cause = cause
        if self.path:
            message = f"{message} ({self.path})"
        super().__init__(message)


class ConfigError(Html2UitkError):
    """The conversion configuration file is missing or malformed."""


class PolicyError(Html2UitkError):
    """A property-support or breaking-selector table could not be loaded."""


class MetadataError(Html2UitkError):
    """USS variable metadata could not be loaded."""
