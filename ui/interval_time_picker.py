# ui/interval_time_picker.py
from __future__ import annotations

from typing import Callable, List, Optional

import flet as ft

from core.picker import DialogState, DisplayMode, normalize_display
from core.settings import UI
from helpers.datetime_utils import MINUTES_PER_HOUR, hour_label, parse_minute_text
from models.time_set import TimeSet
from services.platform_quirks import PlatformInfo
from services.scheduler import AsyncioScheduler
from services.time_picker_dialog import IntervalTimePickerDialog
from ui.dialogs import close_alert_dialog, open_alert_dialog


class FletTimeWidget:
    """Picker widget built from flet controls.

    Spinner display: hour and minute dropdowns, the minute keyed by step index
    once the range is set. Clock display: a minute slider for dragging and a
    text field for typing.
    """

    def __init__(
        self,
        *,
        hour: int,
        minute: int,
        display: DisplayMode | str,
        is_24_hour: bool = True,
        page: ft.Page | None = None,
    ):
        self.page = page
        self.display = normalize_display(display)
        self.is_24_hour = is_24_hour
        self.on_change: Optional[Callable[[int, int], object]] = None

        self._hour = hour
        self._minute = minute
        self._text_focused = False
        self._spinner_delegate = self.display is DisplayMode.SPINNER

        self.hour_dd = ft.Dropdown(
            label="Hour",
            width=UI.hour_dropdown_width,
            value=str(hour),
            options=[ft.dropdown.Option(str(h), hour_label(h, is_24_hour=is_24_hour)) for h in range(24)],
            on_change=self._hour_changed,
        )
        self.accepted_text = ft.Text("", size=12, color=ft.Colors.ON_SURFACE_VARIANT)
        self.minute_dd: ft.Dropdown | None = None
        self.minute_slider: ft.Slider | None = None
        self.minute_tf: ft.TextField | None = None
        self._build_minute_controls()
        self.view = ft.Column(
            [ft.Row(self._minute_row(), spacing=12), self.accepted_text],
            tight=True,
            width=UI.dialog_width,
        )

    # ---------- build ----------
    def _build_minute_controls(self):
        if self._spinner_delegate:
            self.minute_dd = ft.Dropdown(
                label="Minute",
                width=UI.minute_dropdown_width,
                value=str(self._minute),
                options=[ft.dropdown.Option(str(m), f"{m:02d}") for m in range(MINUTES_PER_HOUR)],
                on_change=self._minute_picked,
            )
            self.minute_slider = None
            self.minute_tf = None
            return
        self.minute_dd = None
        self.minute_slider = ft.Slider(
            min=0,
            max=MINUTES_PER_HOUR - 1,
            divisions=MINUTES_PER_HOUR - 1,
            value=self._minute,
            label="{value}",
            expand=True,
            on_change=self._slider_moved,
        )
        self.minute_tf = ft.TextField(
            label="Minute",
            value=f"{self._minute:02d}",
            width=UI.minute_field_width,
            keyboard_type=ft.KeyboardType.NUMBER,
            max_length=2,
            on_change=self._text_changed,
            on_focus=self._text_focus,
            on_blur=self._text_blur,
        )

    def _minute_row(self) -> List[ft.Control]:
        if self.minute_dd is not None:
            return [self.hour_dd, self.minute_dd]
        return [self.hour_dd, self.minute_tf, self.minute_slider]

    def _refresh(self):
        if self.page is not None:
            self.page.update()

    # ---------- events from controls ----------
    def _emit(self):
        if self.on_change is not None:
            self.on_change(self._hour, self._minute)

    def _hour_changed(self, e: ft.ControlEvent):
        if e.control.value is None:
            return
        self._hour = int(e.control.value)
        self._emit()

    def _minute_picked(self, e: ft.ControlEvent):
        if e.control.value is None:
            return
        self._minute = int(e.control.value)
        self._emit()

    def _slider_moved(self, e: ft.ControlEvent):
        self._minute = int(round(float(e.control.value)))
        if self.minute_tf is not None:
            self.minute_tf.value = f"{self._minute:02d}"
        self._emit()

    def _text_changed(self, e: ft.ControlEvent):
        # partial input such as "" or "7x" waits for the next keystroke
        minute = parse_minute_text(e.control.value)
        if minute is None:
            return
        self._minute = minute
        if self.minute_slider is not None:
            self.minute_slider.value = minute
        self._emit()

    def _text_focus(self, e: ft.ControlEvent):
        self._text_focused = True

    def _text_blur(self, e: ft.ControlEvent):
        self._text_focused = False

    # ---------- widget surface used by the dialog ----------
    def current_hour(self) -> int:
        return self._hour

    def current_minute(self) -> int:
        return self._minute

    def text_input_active(self) -> bool:
        return self._text_focused

    def set_time(self, hour: int, value: int) -> None:
        self._hour = hour
        self._minute = value
        self.hour_dd.value = str(hour)
        if self.minute_dd is not None:
            self.minute_dd.value = str(value)
        if self.minute_slider is not None:
            self.minute_slider.value = value
        if self.minute_tf is not None:
            self.minute_tf.value = f"{value:02d}"
        self._refresh()

    def show_accepted(self, hour: int, minute: int) -> None:
        self.accepted_text.value = f"{hour_label(hour, is_24_hour=self.is_24_hour)} : {minute:02d}"
        self._refresh()

    def set_minute_range(self, minimum: int, maximum: int, labels: List[str]) -> None:
        if self.minute_dd is None:
            return
        self.minute_dd.options = [
            ft.dropdown.Option(str(index), labels[index - minimum]) for index in range(minimum, maximum + 1)
        ]
        self._refresh()

    def move_caret_to_end(self) -> None:
        if self.minute_tf is not None and self.page is not None:
            self.minute_tf.focus()

    def has_spinner_delegate(self) -> bool:
        return self._spinner_delegate

    def use_spinner_delegate(self, hour: int, minute: int, is_24_hour: bool) -> None:
        self._spinner_delegate = True
        self.is_24_hour = is_24_hour
        self._hour = hour
        self._minute = minute
        self._build_minute_controls()
        self.view.controls[0].controls = self._minute_row()
        self.set_time(hour, minute)


def open_interval_time_picker(
    page: ft.Page,
    *,
    hour: int,
    minute: int,
    interval: int,
    display: DisplayMode | str,
    is_24_hour: bool = True,
    on_time_set: Callable[[TimeSet], None] | None = None,
    platform: PlatformInfo | None = None,
    title: str = "Select time",
) -> IntervalTimePickerDialog:
    widget = FletTimeWidget(hour=hour, minute=minute, display=display, is_24_hour=is_24_hour, page=page)
    dialog = IntervalTimePickerDialog(
        widget,
        on_time_set,
        hour,
        minute,
        interval,
        is_24_hour,
        display,
        platform=platform,
        scheduler=AsyncioScheduler(page.loop),
    )
    widget.on_change = dialog.time_changed
    holder: dict = {}

    def _ok(e):
        dialog.positive_clicked()
        close_alert_dialog(page, holder.get("dlg"))

    def _cancel(e):
        dialog.negative_clicked()
        close_alert_dialog(page, holder.get("dlg"))

    def _dismissed(e):
        # tapping outside / Escape closes without a choice
        if dialog.state is DialogState.OPEN:
            dialog.negative_clicked()
        dialog.stop()

    holder["dlg"] = open_alert_dialog(
        page,
        title=title,
        content=widget.view,
        actions=[
            ft.TextButton("Cancel", on_click=_cancel),
            ft.FilledButton("OK", on_click=_ok),
        ],
        on_dismiss=_dismissed,
    )
    dialog.attach()
    return dialog


__all__ = ["FletTimeWidget", "open_interval_time_picker"]
