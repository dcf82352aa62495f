"""Diagnostic model: operator-facing messages produced during conversion."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    """Severity level for a diagnostic message."""

    WARNING = "WARNING"
    INFO = "INFO"


@dataclass(frozen=True)
class Diagnostic:
    """A single finding about a stylesheet being converted.

    Attributes:
        code: Identifier for the check that produced this diagnostic
            (``rule-dropped``, ``unsupported-property``, ``not-implemented``).
        severity: How serious the issue is.
        message: Human-readable description.
        selector: The selector text involved, if applicable.
        properties: The property names involved, if applicable.
    """

    code: str
    severity: Severity
    message: str
    selector: str | None = None
    properties: tuple[str, ...] = ()

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def __str__(self) -> str:
        location = f" [selector={self.selector}]" if self.selector else ""
        return f"{self.severity.value}{location}: {self.message}"
