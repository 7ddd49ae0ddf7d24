"""Minute/step arithmetic and label helpers for interval pickers."""
from __future__ import annotations

from typing import List, Optional, Tuple

MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24


def round_half_away(numerator: int, denominator: int) -> int:
    """Round ``numerator / denominator`` to the nearest integer, ties away from zero.

    Works on integers only so that ``2.5`` steps always becomes ``3`` and never
    drifts through float representation or banker's rounding.
    """

    if denominator <= 0:
        raise ValueError("denominator must be positive")
    sign = -1 if numerator < 0 else 1
    quotient, remainder = divmod(abs(numerator), denominator)
    if remainder * 2 >= denominator:
        quotient += 1
    return sign * quotient


def snap_steps(value: int, *, step: int) -> int:
    """Return the number of whole ``step`` units nearest to ``value``."""
    return round_half_away(value, step)


def snap_minutes(value: int, *, step: int) -> int:
    """Snap ``value`` to the nearest multiple of ``step`` minutes."""

    if step <= 0:
        return value
    return snap_steps(value, step=step) * step


def minute_slots(interval: int) -> int:
    """Number of selectable minute slots in one hour for ``interval``."""
    return -(-MINUTES_PER_HOUR // interval)


def minute_labels(interval: int) -> List[str]:
    """Zero-padded labels for every slot, e.g. ``["00", "05", ..., "55"]``."""
    return [f"{minute:02d}" for minute in range(0, MINUTES_PER_HOUR, interval)]


def hour_label(hour: int, *, is_24_hour: bool) -> str:
    if is_24_hour:
        return f"{hour:02d}"
    suffix = "AM" if hour < 12 else "PM"
    display = hour % 12 or 12
    return f"{display} {suffix}"


def carry_minutes(hour: int, minute: int) -> Tuple[int, int]:
    """Fold a minute overflow (``minute >= 60``) into the hour, wrapping at midnight."""

    extra_hours, minute = divmod(minute, MINUTES_PER_HOUR)
    return (hour + extra_hours) % HOURS_PER_DAY, minute


def parse_minute_text(value: str | None) -> Optional[int]:
    """Parse a typed minute (``"7"``, ``"07"``); ``None`` when not a valid minute yet."""

    if value is None:
        return None
    text = value.strip()
    if not text or not text.isdigit() or len(text) > 2:
        return None
    minute = int(text)
    if minute >= MINUTES_PER_HOUR:
        return None
    return minute


__all__ = [
    "HOURS_PER_DAY",
    "MINUTES_PER_HOUR",
    "carry_minutes",
    "hour_label",
    "minute_labels",
    "minute_slots",
    "parse_minute_text",
    "round_half_away",
    "snap_minutes",
    "snap_steps",
]
