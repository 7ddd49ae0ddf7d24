"""Version-specific workarounds for the native time picker."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from core.picker import DisplayMode
from core.settings import PLATFORM


@dataclass(frozen=True)
class PlatformInfo:
    api_level: int = field(default=PLATFORM.default_api_level)


def forwards_dismiss(platform: PlatformInfo) -> bool:
    """Whether the dismiss notification may reach the base dialog.

    Legacy releases invoke the time-set listener from the base dismiss path, so
    it has to be swallowed there.
    """
    return platform.api_level > PLATFORM.legacy_dismiss_max_api


class SpinnerDelegateWidget(Protocol):
    def has_spinner_delegate(self) -> bool: ...

    def use_spinner_delegate(self, hour: int, minute: int, is_24_hour: bool) -> None: ...


class SpinnerStyleFixer(Protocol):
    def apply(self, widget: SpinnerDelegateWidget, hour: int, minute: int, is_24_hour: bool) -> bool:
        """Patch ``widget``; return True when something was changed."""


class NoopSpinnerStyleFixer:
    def apply(self, widget: SpinnerDelegateWidget, hour: int, minute: int, is_24_hour: bool) -> bool:
        return False


class DelegateSwapSpinnerStyleFixer:
    """Replaces a clock delegate that was built despite spinner mode being requested."""

    def apply(self, widget: SpinnerDelegateWidget, hour: int, minute: int, is_24_hour: bool) -> bool:
        if widget.has_spinner_delegate():
            return False
        widget.use_spinner_delegate(hour, minute, is_24_hour)
        return True


def select_spinner_fixer(platform: PlatformInfo, display: DisplayMode) -> SpinnerStyleFixer:
    if platform.api_level == PLATFORM.spinner_bug_api and display is DisplayMode.SPINNER:
        return DelegateSwapSpinnerStyleFixer()
    return NoopSpinnerStyleFixer()


__all__ = [
    "DelegateSwapSpinnerStyleFixer",
    "NoopSpinnerStyleFixer",
    "PlatformInfo",
    "SpinnerDelegateWidget",
    "SpinnerStyleFixer",
    "forwards_dismiss",
    "select_spinner_fixer",
]
