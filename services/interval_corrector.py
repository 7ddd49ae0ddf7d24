"""Minute-interval correction for time picker dialogs.

The widget reports raw minute values: a step index when it renders a spinner
and a literal minute when it renders a clock. ``IntervalCorrector`` turns those
into real minutes, snaps anything that does not sit on the configured interval
and makes sure the host only ever hears about aligned times.

Text typed into the clock's keyboard field is snapped after a short delay so
the correction does not fight the user mid-keystroke. Only the latest such
correction may fire: each change bumps a generation counter and a job whose
generation is stale does nothing.
"""
from __future__ import annotations

import functools
import threading
from typing import Callable, List, Optional, Protocol

from core.picker import (
    ConfigError,
    DialogState,
    DisplayMode,
    InputSource,
    Outcome,
    RawValueError,
    normalize_display,
)
from core.settings import PICKER
from helpers.datetime_utils import (
    HOURS_PER_DAY,
    MINUTES_PER_HOUR,
    carry_minutes,
    minute_labels,
    minute_slots,
    snap_minutes,
    snap_steps,
)
from helpers.log import ensure_logger
from models.time_set import PendingCorrection, TimeSet
from services.scheduler import Handle, ManualScheduler, Scheduler


class TimeWidget(Protocol):
    """What the corrector needs from the underlying picker widget."""

    def set_time(self, hour: int, value: int) -> None:
        """Move the widget to ``hour`` and ``value`` (index or minute, per display)."""

    def show_accepted(self, hour: int, minute: int) -> None:
        """Record an aligned (hour, real minute) pair as the displayed state."""

    def set_minute_range(self, minimum: int, maximum: int, labels: List[str]) -> None: ...

    def move_caret_to_end(self) -> None: ...


TimeSetListener = Callable[[TimeSet], None]


def _locked(method):
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self.lock:
            return method(self, *args, **kwargs)

    return wrapper


class IntervalCorrector:
    """Keeps one picker dialog's minutes on the configured interval.

    Transitions take ``self.lock``, so widget callbacks arriving on worker
    threads and deferred corrections firing on the event loop never
    interleave.

    ``scheduler`` runs deferred corrections. When omitted a
    ``ManualScheduler`` is created and exposed as ``self.scheduler``; the
    caller must ``advance`` it for typed input to be snapped before confirm.
    """

    def __init__(
        self,
        display_mode: DisplayMode | str,
        interval: int,
        is_24_hour: bool = True,
        *,
        widget: Optional[TimeWidget] = None,
        scheduler: Optional[Scheduler] = None,
        on_time_set: Optional[TimeSetListener] = None,
        delay_ms: Optional[int] = None,
    ):
        if isinstance(interval, bool) or not isinstance(interval, int):
            raise ConfigError(f"Minute interval must be an integer, got {interval!r}")
        if interval <= 0 or interval > 59:
            raise ConfigError(f"Minute interval must be within 1..59, got {interval}")
        self.logger = ensure_logger("picker.corrector")
        self.display_mode = normalize_display(display_mode)
        self.interval = interval
        self.is_24_hour = bool(is_24_hour)
        self.widget = widget
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.on_time_set = on_time_set
        self.delay_ms = PICKER.correction_delay_ms if delay_ms is None else delay_ms
        self.steps = minute_slots(interval)
        self.labels = minute_labels(interval)
        self.state = DialogState.OPEN

        self._generation = 0
        self._pending: Optional[PendingCorrection] = None
        self._handle: Optional[Handle] = None
        self.lock = threading.RLock()

        if MINUTES_PER_HOUR % interval:
            self.logger.warning(
                "Minute interval %s does not divide an hour; last slot is %s",
                interval,
                self.labels[-1],
            )

    @classmethod
    def configure(
        cls,
        display_mode: DisplayMode | str,
        interval: int,
        is_24_hour: bool = True,
        **collaborators,
    ) -> "IntervalCorrector":
        return cls(display_mode, interval, is_24_hour, **collaborators)

    # ------------------------------------------------------------------
    # value translation

    @property
    def pending(self) -> Optional[PendingCorrection]:
        return self._pending

    def to_real_minutes(self, raw_value: int) -> int:
        if self.display_mode is DisplayMode.SPINNER:
            return raw_value * self.interval
        return raw_value

    def is_aligned(self, real_minute: int) -> bool:
        return real_minute % self.interval == 0

    def snap(self, real_minute: int) -> int:
        """Nearest aligned value, in the widget's domain.

        Spinners get a step index back, clocks get a minute.
        """
        if self.display_mode is DisplayMode.SPINNER:
            return snap_steps(real_minute, step=self.interval)
        return snap_minutes(real_minute, step=self.interval)

    def snapped_minutes(self, real_minute: int) -> int:
        """``snap`` expressed in minutes regardless of display mode."""
        return snap_minutes(real_minute, step=self.interval)

    # ------------------------------------------------------------------
    # transitions

    @_locked
    def on_attach(self, initial_minute: int, hour: int = 0) -> int:
        """Prepare the widget once it is visible and snap the starting minute."""
        self._check_hour(hour)
        self._check_minute(initial_minute)
        if self.display_mode is DisplayMode.SPINNER and self.widget is not None:
            self.widget.set_minute_range(0, self.steps - 1, list(self.labels))
        value = self.snap(initial_minute)
        self._apply(hour, value)
        return value

    @_locked
    def on_value_changed(self, hour: int, raw_value: int, source: InputSource) -> Outcome:
        if self.state.is_closed:
            self.logger.debug("Ignoring change %s:%s after close", hour, raw_value)
            return Outcome.IGNORED
        self._check_hour(hour)
        self._check_raw(raw_value)
        real = self.to_real_minutes(raw_value)
        self.cancel_pending()

        if self.is_aligned(real):
            if self.widget is not None:
                self.widget.show_accepted(hour, real)
            return Outcome.ACCEPTED

        snapped = self.snap(real)
        if source is InputSource.TEXT_ENTRY:
            self._schedule(hour, snapped)
            self.logger.debug("Deferred correction %s -> %s", real, snapped)
            return Outcome.DEFERRED

        self._apply(hour, snapped)
        self.logger.debug("Corrected %s -> %s", real, snapped)
        return Outcome.CORRECTED

    @_locked
    def update_time(self, hour: int, minute: int) -> Optional[int]:
        """Programmatically show ``hour:minute``, snapped onto the interval."""
        if self.state.is_closed:
            self.logger.debug("Ignoring update_time after close")
            return None
        self._check_hour(hour)
        self._check_minute(minute)
        self.cancel_pending()
        value = self.snap(minute)
        self._apply(hour, value)
        return value

    @_locked
    def on_confirm(self, hour: int, raw_value: int, source: InputSource) -> Optional[TimeSet]:
        if self.state.is_closed:
            self.logger.debug("Ignoring confirm after close")
            return None
        self._check_hour(hour)
        self._check_raw(raw_value)
        # clicking OK blurs the text field, so typed input still awaiting its
        # snap is recognised by the pending job rather than by focus
        typed = source is InputSource.TEXT_ENTRY or self._pending is not None
        self.cancel_pending()

        real = self.to_real_minutes(raw_value)
        minute = real
        if typed and not self.is_aligned(real):
            minute = self.snapped_minutes(real)
        hour, minute = self._fold(hour, minute)

        event = TimeSet(hour=hour, minute=minute)
        self.state = DialogState.CLOSED_CONFIRMED
        self.logger.info("Time set to %02d:%02d (interval %s)", hour, minute, self.interval)
        if self.on_time_set is not None:
            self.on_time_set(event)
        return event

    @_locked
    def on_cancel(self) -> None:
        if self.state.is_closed:
            return
        self.cancel_pending()
        self.state = DialogState.CLOSED_CANCELLED
        self.logger.info("Time picker cancelled")

    @_locked
    def cancel_pending(self) -> None:
        """Invalidate any scheduled correction; safe to call with nothing pending."""
        self._generation += 1
        handle, self._handle = self._handle, None
        self._pending = None
        if handle is not None:
            handle.cancel()

    # ------------------------------------------------------------------
    # internals

    def _schedule(self, hour: int, value: int) -> None:
        pending = PendingCorrection(hour=hour, value=value, generation=self._generation)
        self._pending = pending
        self._handle = self.scheduler.call_later(self.delay_ms / 1000.0, lambda: self._fire(pending))

    @_locked
    def _fire(self, pending: PendingCorrection) -> None:
        if pending.generation != self._generation or self.state.is_closed:
            return
        self._pending = None
        self._handle = None
        self._apply(pending.hour, pending.value)
        if self.widget is not None:
            self.widget.move_caret_to_end()

    def _apply(self, hour: int, value: int) -> None:
        if self.widget is None:
            return
        if self.display_mode is DisplayMode.SPINNER:
            hour, minute = self._fold(hour, value * self.interval)
            value = minute // self.interval
        else:
            hour, value = self._fold(hour, value)
        self.widget.set_time(hour, value)

    def _fold(self, hour: int, minute: int) -> tuple[int, int]:
        """Bring a snapped minute that ran past the hour back onto the dial.

        When the interval divides the hour the overflow rolls into the next
        hour; otherwise the last slot of the current hour is kept.
        """
        if minute < MINUTES_PER_HOUR:
            return hour, minute
        if MINUTES_PER_HOUR % self.interval == 0:
            return carry_minutes(hour, minute)
        return hour, (self.steps - 1) * self.interval

    def _check_hour(self, hour: int) -> None:
        if not 0 <= hour < HOURS_PER_DAY:
            raise RawValueError(f"Hour out of range: {hour}")

    def _check_minute(self, minute: int) -> None:
        if not 0 <= minute < MINUTES_PER_HOUR:
            raise RawValueError(f"Minute out of range: {minute}")

    def _check_raw(self, raw_value: int) -> None:
        upper = self.steps if self.display_mode is DisplayMode.SPINNER else MINUTES_PER_HOUR
        if not 0 <= raw_value < upper:
            raise RawValueError(
                f"Raw minute {raw_value} outside 0..{upper - 1} for {self.display_mode.value} display"
            )


__all__ = ["IntervalCorrector", "TimeSetListener", "TimeWidget"]
