"""Value objects exchanged between the picker corrector and its host."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TimeSet:
    """Confirmed time delivered to the host; ``minute`` is interval-aligned."""

    hour: int
    minute: int


@dataclass(frozen=True)
class PendingCorrection:
    """A deferred snap waiting on the scheduler.

    ``value`` is in the widget's own domain (step index for spinners, minute
    for clocks); ``generation`` ties the job to the change that created it.
    """

    hour: int
    value: int
    generation: int


__all__ = ["TimeSet", "PendingCorrection"]
