from pathlib import Path
import logging
import sys

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.picker import DialogState, DisplayMode, Outcome
from core.settings import PLATFORM
from models.time_set import TimeSet
from services.platform_quirks import (
    DelegateSwapSpinnerStyleFixer,
    NoopSpinnerStyleFixer,
    PlatformInfo,
    forwards_dismiss,
    select_spinner_fixer,
)
from services.scheduler import ManualScheduler
from services.time_picker_dialog import IntervalTimePickerDialog

from fakes import FakeWidget


def make_dialog(widget, *, display=DisplayMode.CLOCK, interval=5, api_level=34, on_stop=None):
    events = []
    scheduler = ManualScheduler()
    dialog = IntervalTimePickerDialog(
        widget,
        events.append,
        widget.hour,
        widget.minute,
        interval,
        True,
        display,
        platform=PlatformInfo(api_level),
        scheduler=scheduler,
        on_stop=on_stop,
    )
    return dialog, events, scheduler


def test_forwards_dismiss_only_after_legacy_releases():
    assert not forwards_dismiss(PlatformInfo(16))
    assert not forwards_dismiss(PlatformInfo(PLATFORM.legacy_dismiss_max_api))
    assert forwards_dismiss(PlatformInfo(PLATFORM.legacy_dismiss_max_api + 1))
    assert forwards_dismiss(PlatformInfo(34))


def test_stop_is_version_gated():
    stops = []
    legacy, _, _ = make_dialog(FakeWidget(), api_level=19, on_stop=lambda: stops.append("legacy"))
    modern, _, _ = make_dialog(FakeWidget(), api_level=21, on_stop=lambda: stops.append("modern"))

    assert legacy.stop() is False
    assert modern.stop() is True
    assert stops == ["modern"]


def test_select_spinner_fixer_only_for_affected_release():
    assert isinstance(select_spinner_fixer(PlatformInfo(24), DisplayMode.SPINNER), DelegateSwapSpinnerStyleFixer)
    assert isinstance(select_spinner_fixer(PlatformInfo(24), DisplayMode.CLOCK), NoopSpinnerStyleFixer)
    assert isinstance(select_spinner_fixer(PlatformInfo(25), DisplayMode.SPINNER), NoopSpinnerStyleFixer)


def test_spinner_delegate_swapped_on_affected_release():
    widget = FakeWidget(9, 30, spinner_delegate=False)
    make_dialog(widget, display=DisplayMode.SPINNER, api_level=24)
    assert widget.delegate_swaps == [(9, 30, True)]


def test_spinner_delegate_left_alone_elsewhere():
    widget = FakeWidget(9, 30, spinner_delegate=False)
    make_dialog(widget, display=DisplayMode.SPINNER, api_level=26)
    assert widget.delegate_swaps == []


def test_failed_spinner_fix_is_logged_and_not_fatal(caplog):
    class BrokenWidget(FakeWidget):
        def use_spinner_delegate(self, hour, minute, is_24_hour):
            raise RuntimeError("no delegate field")

    widget = BrokenWidget(9, 17, spinner_delegate=False)
    with caplog.at_level(logging.WARNING, logger="picker.dialog"):
        dialog, events, _ = make_dialog(widget, display=DisplayMode.SPINNER, api_level=24)

    assert "Spinner style fix failed" in caplog.text
    dialog.attach()
    assert widget.minute_range[1] == 11
    assert dialog.time_changed(9, 3) is Outcome.ACCEPTED


def test_attach_reads_widget_state():
    widget = FakeWidget(14, 18)
    dialog, _, _ = make_dialog(widget)
    assert dialog.attach() == 20
    assert widget.applied == [(14, 20)]


def test_time_changed_uses_widget_input_source():
    widget = FakeWidget(10, 0, text_mode=True)
    dialog, _, scheduler = make_dialog(widget)
    assert dialog.time_changed(10, 18) is Outcome.DEFERRED
    widget.text_mode = False
    assert dialog.time_changed(10, 18) is Outcome.CORRECTED
    scheduler.advance(1)
    assert widget.applied == [(10, 20)]


def test_positive_click_reports_snapped_text_entry():
    widget = FakeWidget(23, 0, text_mode=True)
    dialog, events, _ = make_dialog(widget)
    widget.minute = 18
    dialog.positive_clicked()
    assert events == [TimeSet(23, 20)]
    assert dialog.state is DialogState.CLOSED_CONFIRMED


def test_negative_click_emits_nothing():
    widget = FakeWidget(7, 12, text_mode=True)
    dialog, events, scheduler = make_dialog(widget)
    dialog.time_changed(7, 12)
    dialog.negative_clicked()
    scheduler.advance(1)
    assert events == []
    assert widget.applied == []
    assert dialog.state is DialogState.CLOSED_CANCELLED


def test_update_time_snaps():
    widget = FakeWidget(7, 0)
    dialog, _, _ = make_dialog(widget, interval=15)
    assert dialog.update_time(7, 38) == 45
    assert widget.applied[-1] == (7, 45)
