"""Simple JSON-backed configuration store."""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from core.picker import ConfigError, normalize_display
from core.settings import CONFIG_PATH, PICKER


@dataclass
class AppConfig:
    """Picker preferences persisted to ``config.json``."""

    minute_interval: int = PICKER.default_interval
    display: str = PICKER.default_display
    is_24_hour: bool = PICKER.default_is_24_hour
    api_level: Optional[int] = None
    last_hour: Optional[int] = None
    last_minute: Optional[int] = None


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def _load_raw(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def _int_or(value: Any, default: Optional[int], *, low: int, high: int) -> Optional[int]:
    if isinstance(value, bool):
        return default
    try:
        ivalue = int(value)
    except (TypeError, ValueError):
        return default
    return ivalue if low <= ivalue <= high else default


def _display_or_default(value: Any) -> str:
    try:
        return normalize_display(value).value
    except ConfigError:
        return PICKER.default_display


def load_config(path: Optional[Path] = None) -> AppConfig:
    target = path or CONFIG_PATH
    data = _load_raw(target)
    return AppConfig(
        minute_interval=_int_or(data.get("minute_interval"), PICKER.default_interval, low=1, high=59),
        display=_display_or_default(data.get("display")),
        is_24_hour=bool(data.get("is_24_hour", PICKER.default_is_24_hour)),
        api_level=_int_or(data.get("api_level"), None, low=1, high=1000),
        last_hour=_int_or(data.get("last_hour"), None, low=0, high=23),
        last_minute=_int_or(data.get("last_minute"), None, low=0, high=59),
    )


def save_config(config: AppConfig, path: Optional[Path] = None) -> None:
    target = path or CONFIG_PATH
    _ensure_parent(target)
    payload = json.dumps(asdict(config), ensure_ascii=False, indent=2, sort_keys=True)
    tmp = target.with_suffix(".tmp")
    try:
        tmp.write_text(payload, encoding="utf-8")
        tmp.replace(target)
    finally:
        if tmp.exists():
            try:
                tmp.unlink()
            except OSError:
                pass


def update_config(path: Optional[Path] = None, **changes: Any) -> AppConfig:
    target = path or CONFIG_PATH
    cfg = load_config(target)
    for key, value in changes.items():
        if hasattr(cfg, key):
            setattr(cfg, key, value)
    save_config(cfg, target)
    return cfg


__all__ = ["AppConfig", "load_config", "save_config", "update_config"]
