"""Centralized application configuration."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional
import os
import sys


def get_default_data_dir(
    app_name: str,
    *,
    platform: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    home: Optional[Path] = None,
) -> Path:
    """Return an OS-specific user data directory for ``app_name``."""

    platform_id = (platform or sys.platform).lower()
    environ = dict(env or os.environ)
    home_dir = Path(home or Path.home())
    sanitized = app_name.strip() or "app"
    sanitized = sanitized.replace("/", "-").replace("\\", "-")

    if platform_id.startswith("win"):
        base = Path(environ.get("APPDATA") or home_dir / "AppData" / "Roaming")
    elif platform_id == "darwin":
        base = Path(environ.get("APPDATA") or home_dir / "Library" / "Application Support")
    else:
        base = Path(environ.get("XDG_DATA_HOME") or home_dir / ".local" / "share")

    return (base.expanduser() / sanitized)


APP_NAME = "IntervalPicker"


DATA_DIR = get_default_data_dir(APP_NAME)
LOG_DIR = DATA_DIR / "logs"

for _dir in (DATA_DIR, LOG_DIR):
    _dir.mkdir(parents=True, exist_ok=True)


CONFIG_PATH = DATA_DIR / "config.json"
LOG_PATH = LOG_DIR / "picker.log"


@dataclass(frozen=True)
class LogSettings:
    # DEBUG also records every accepted, deferred and corrected change
    level: str = os.environ.get("INTERVAL_PICKER_LOG_LEVEL", "INFO").upper()
    max_bytes: int = 1_000_000
    backup_count: int = 3


LOGGING = LogSettings()


@dataclass(frozen=True)
class PickerSettings:
    # delay before a misaligned text entry is snapped
    correction_delay_ms: int = 500
    default_interval: int = 5
    default_display: str = "clock"
    default_is_24_hour: bool = True


PICKER = PickerSettings()


@dataclass(frozen=True)
class PlatformSettings:
    # API 16-19 call the time-set listener on dismiss (issue 34833)
    legacy_dismiss_max_api: int = 19
    # API 24 ignores the spinner mode and builds a clock delegate
    spinner_bug_api: int = 24
    default_api_level: int = 34


PLATFORM = PlatformSettings()


@dataclass(frozen=True)
class UISettings:
    app_title: str = APP_NAME
    theme_mode: str = "system"
    color_scheme_seed: str = "#4F46E5"
    window_min_width: int = 420
    window_min_height: int = 360
    dialog_width: int = 360
    hour_dropdown_width: int = 120
    minute_dropdown_width: int = 110
    minute_field_width: int = 90


UI = UISettings()


__all__ = [
    "APP_NAME",
    "DATA_DIR",
    "LOG_DIR",
    "CONFIG_PATH",
    "LOG_PATH",
    "LOGGING",
    "PICKER",
    "PLATFORM",
    "UI",
    "get_default_data_dir",
]
