from pathlib import Path
import json
import sys

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from core import settings
from core.picker import ConfigError, DisplayMode, normalize_display
from storage.config import AppConfig, load_config, save_config, update_config


def test_linux_data_dir_with_xdg():
    env = {"XDG_DATA_HOME": "/tmp/xdg"}
    result = settings.get_default_data_dir(
        settings.APP_NAME,
        platform="linux",
        env=env,
        home=Path("/home/test"),
    )
    assert result == Path("/tmp/xdg") / settings.APP_NAME


def test_linux_data_dir_default_home():
    result = settings.get_default_data_dir(
        settings.APP_NAME,
        platform="linux",
        env={},
        home=Path("/home/test"),
    )
    assert result == Path("/home/test/.local/share") / settings.APP_NAME


def test_macos_data_dir():
    result = settings.get_default_data_dir(
        settings.APP_NAME,
        platform="darwin",
        env={},
        home=Path("/Users/test"),
    )
    expected = Path("/Users/test/Library/Application Support") / settings.APP_NAME
    assert result == expected


def test_windows_data_dir_appdata():
    env = {"APPDATA": "C:/Users/test/AppData/Roaming"}
    result = settings.get_default_data_dir(
        settings.APP_NAME,
        platform="win32",
        env=env,
        home=Path("C:/Users/test"),
    )
    expected = Path(env["APPDATA"]) / settings.APP_NAME
    assert result == expected


def test_runtime_paths_inside_data_dir():
    assert settings.CONFIG_PATH.parent == settings.DATA_DIR
    assert settings.LOG_PATH.parent == settings.LOG_DIR
    assert settings.LOG_DIR.parent == settings.DATA_DIR


def test_picker_defaults():
    assert settings.PICKER.correction_delay_ms == 500
    assert settings.PLATFORM.legacy_dismiss_max_api == 19
    assert settings.PLATFORM.spinner_bug_api == 24


def test_normalize_display():
    assert normalize_display("Spinner") is DisplayMode.SPINNER
    assert normalize_display(DisplayMode.CLOCK) is DisplayMode.CLOCK
    with pytest.raises(ConfigError):
        normalize_display("wheel")


def test_load_config_missing_file_gives_defaults(tmp_path):
    cfg = load_config(tmp_path / "config.json")
    assert cfg == AppConfig()


def test_config_roundtrip_and_update(tmp_path):
    path = tmp_path / "nested" / "config.json"
    save_config(AppConfig(minute_interval=15, display="spinner", is_24_hour=False), path)
    cfg = update_config(path, last_hour=23, last_minute=20, unknown="ignored")

    assert cfg.minute_interval == 15
    assert cfg.display == "spinner"
    assert cfg.is_24_hour is False
    assert (cfg.last_hour, cfg.last_minute) == (23, 20)
    assert load_config(path) == cfg
    assert not path.with_suffix(".tmp").exists()


def test_load_config_falls_back_on_bad_values(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"minute_interval": 0, "display": "wheel", "last_hour": 99, "last_minute": "12"}),
        encoding="utf-8",
    )
    cfg = load_config(path)
    assert cfg.minute_interval == settings.PICKER.default_interval
    assert cfg.display == settings.PICKER.default_display
    assert cfg.last_hour is None
    assert cfg.last_minute == 12


def test_load_config_ignores_corrupt_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_config(path) == AppConfig()
