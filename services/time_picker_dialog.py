from __future__ import annotations

from typing import Callable, Optional, Protocol

from core.picker import DialogState, DisplayMode, InputSource, Outcome, normalize_display
from helpers.log import ensure_logger
from models.time_set import TimeSet
from services.interval_corrector import IntervalCorrector, TimeSetListener, TimeWidget
from services.platform_quirks import (
    PlatformInfo,
    SpinnerDelegateWidget,
    forwards_dismiss,
    select_spinner_fixer,
)
from services.scheduler import Scheduler


class PickerWidget(TimeWidget, SpinnerDelegateWidget, Protocol):
    """Full widget surface used by the dialog host."""

    def current_hour(self) -> int: ...

    def current_minute(self) -> int:
        """Raw minute as the widget holds it (index for spinners)."""

    def text_input_active(self) -> bool: ...


class IntervalTimePickerDialog:
    def __init__(
        self,
        widget: PickerWidget,
        on_time_set: Optional[TimeSetListener],
        hour: int,
        minute: int,
        interval: int,
        is_24_hour: bool,
        display: DisplayMode | str,
        *,
        platform: Optional[PlatformInfo] = None,
        scheduler: Optional[Scheduler] = None,
        on_stop: Optional[Callable[[], None]] = None,
        delay_ms: Optional[int] = None,
    ):
        self.logger = ensure_logger("picker.dialog")
        self.widget = widget
        self.platform = platform or PlatformInfo()
        self.display = normalize_display(display)
        self.on_stop = on_stop
        self.corrector = IntervalCorrector.configure(
            self.display,
            interval,
            is_24_hour,
            widget=widget,
            scheduler=scheduler,
            on_time_set=on_time_set,
            delay_ms=delay_ms,
        )
        self._fix_spinner(hour, minute, is_24_hour)

    @property
    def state(self) -> DialogState:
        return self.corrector.state

    def _fix_spinner(self, hour: int, minute: int, is_24_hour: bool) -> None:
        fixer = select_spinner_fixer(self.platform, self.display)
        try:
            if fixer.apply(self.widget, hour, minute, is_24_hour):
                self.logger.info("Spinner delegate restored on API %s", self.platform.api_level)
        except Exception:
            # cosmetic only; interval correction does not depend on it
            self.logger.warning(
                "Spinner style fix failed on API %s", self.platform.api_level, exc_info=True
            )

    def _source(self) -> InputSource:
        if self.widget.text_input_active():
            return InputSource.TEXT_ENTRY
        return InputSource.DIRECT_MANIPULATION

    def attach(self) -> int:
        return self.corrector.on_attach(self.widget.current_minute(), self.widget.current_hour())

    def time_changed(self, hour: int, raw_minute: int) -> Outcome:
        return self.corrector.on_value_changed(hour, raw_minute, self._source())

    def update_time(self, hour: int, minute: int) -> Optional[int]:
        return self.corrector.update_time(hour, minute)

    def positive_clicked(self) -> Optional[TimeSet]:
        return self.corrector.on_confirm(
            self.widget.current_hour(),
            self.widget.current_minute(),
            self._source(),
        )

    def negative_clicked(self) -> None:
        self.corrector.on_cancel()

    def stop(self) -> bool:
        """Dialog is going away; returns True when the dismiss notification was forwarded."""
        if not forwards_dismiss(self.platform):
            self.logger.debug("Dismiss notification suppressed on API %s", self.platform.api_level)
            return False
        if self.on_stop is not None:
            self.on_stop()
        return True


__all__ = ["IntervalTimePickerDialog", "PickerWidget"]
