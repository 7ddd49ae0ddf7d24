"""Enumerations and errors shared by the interval-aware time picker."""
from __future__ import annotations

from enum import Enum


class DisplayMode(str, Enum):
    """How the widget presents minutes: a clock face or a step spinner."""

    CLOCK = "clock"
    SPINNER = "spinner"


class InputSource(str, Enum):
    TEXT_ENTRY = "text_entry"
    DIRECT_MANIPULATION = "direct_manipulation"


class Outcome(str, Enum):
    """Result of feeding a raw change into the corrector."""

    ACCEPTED = "accepted"
    DEFERRED = "deferred"
    CORRECTED = "corrected"
    # the dialog is already closed
    IGNORED = "ignored"


class DialogState(str, Enum):
    OPEN = "open"
    CLOSED_CONFIRMED = "closed_confirmed"
    CLOSED_CANCELLED = "closed_cancelled"

    @property
    def is_closed(self) -> bool:
        return self is not DialogState.OPEN


class ConfigError(ValueError):
    """Raised when a picker is configured with an unusable interval."""


class RawValueError(ValueError):
    """Raised when the widget reports a value outside its domain."""


def normalize_display(value: DisplayMode | str | None) -> DisplayMode:
    """Coerce stored or user-supplied display names into ``DisplayMode``."""
    if isinstance(value, DisplayMode):
        return value
    try:
        return DisplayMode(str(value or "").strip().lower())
    except ValueError as exc:
        raise ConfigError(f"Unsupported display mode: {value!r}") from exc


__all__ = [
    "ConfigError",
    "DialogState",
    "DisplayMode",
    "InputSource",
    "Outcome",
    "RawValueError",
    "normalize_display",
]
