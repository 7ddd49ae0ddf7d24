# picker/main.py
import os, sys
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
import flet as ft

from core.settings import APP_NAME, UI
from models.time_set import TimeSet
from services.platform_quirks import PlatformInfo
from storage.config import load_config, update_config
from ui.interval_time_picker import open_interval_time_picker


def main(page: ft.Page):
    page.title = UI.app_title
    page.theme_mode = UI.theme_mode
    page.theme = ft.Theme(color_scheme_seed=UI.color_scheme_seed)
    page.appbar = ft.AppBar(title=ft.Text(APP_NAME), center_title=False)
    page.window_min_width = UI.window_min_width
    page.window_min_height = UI.window_min_height

    cfg = load_config()
    platform = PlatformInfo(cfg.api_level) if cfg.api_level else PlatformInfo()
    start_hour = cfg.last_hour if cfg.last_hour is not None else 12
    start_minute = cfg.last_minute if cfg.last_minute is not None else 0

    result = ft.Text(f"{start_hour:02d}:{start_minute:02d}", size=32)
    interval_dd = ft.Dropdown(
        label="Interval, min",
        width=140,
        value=str(cfg.minute_interval),
        options=[ft.dropdown.Option(str(i)) for i in (1, 5, 10, 15, 20, 30)],
    )
    display_dd = ft.Dropdown(
        label="Display",
        width=140,
        value=cfg.display,
        options=[ft.dropdown.Option("clock", "Clock"), ft.dropdown.Option("spinner", "Spinner")],
    )
    h24_cb = ft.Checkbox(label="24-hour", value=cfg.is_24_hour)

    def on_time_set(event: TimeSet):
        result.value = f"{event.hour:02d}:{event.minute:02d}"
        update_config(last_hour=event.hour, last_minute=event.minute)
        page.update()

    def open_picker(e):
        interval = int(interval_dd.value)
        update_config(minute_interval=interval, display=display_dd.value, is_24_hour=bool(h24_cb.value))
        hour, minute = (int(part) for part in result.value.split(":"))
        open_interval_time_picker(
            page,
            hour=hour,
            minute=minute,
            interval=interval,
            display=display_dd.value,
            is_24_hour=bool(h24_cb.value),
            on_time_set=on_time_set,
            platform=platform,
        )

    page.add(
        ft.Column(
            [
                ft.Row([interval_dd, display_dd, h24_cb], spacing=12),
                result,
                ft.FilledButton("Pick time", icon=ft.Icons.SCHEDULE, on_click=open_picker),
            ],
            spacing=16,
        )
    )


ft.app(target=main)
