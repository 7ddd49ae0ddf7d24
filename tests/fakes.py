"""Recording stand-in for the native picker widget."""
from __future__ import annotations

from typing import List, Optional, Tuple


class FakeWidget:
    def __init__(self, hour: int = 0, minute: int = 0, *, text_mode: bool = False, spinner_delegate: bool = True):
        self.hour = hour
        self.minute = minute
        self.text_mode = text_mode
        self.spinner_delegate = spinner_delegate
        self.applied: List[Tuple[int, int]] = []
        self.accepted: List[Tuple[int, int]] = []
        self.minute_range: Optional[Tuple[int, int, List[str]]] = None
        self.caret_moves = 0
        self.delegate_swaps: List[Tuple[int, int, bool]] = []

    def set_time(self, hour, value):
        self.hour = hour
        self.minute = value
        self.applied.append((hour, value))

    def show_accepted(self, hour, minute):
        self.accepted.append((hour, minute))

    def set_minute_range(self, minimum, maximum, labels):
        self.minute_range = (minimum, maximum, labels)

    def move_caret_to_end(self):
        self.caret_moves += 1

    def current_hour(self):
        return self.hour

    def current_minute(self):
        return self.minute

    def text_input_active(self):
        return self.text_mode

    def has_spinner_delegate(self):
        return self.spinner_delegate

    def use_spinner_delegate(self, hour, minute, is_24_hour):
        self.spinner_delegate = True
        self.delegate_swaps.append((hour, minute, is_24_hour))
