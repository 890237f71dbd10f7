"""Data models used by the UI."""

from __future__ import annotations

from dataclasses import dataclass

from schulte.core.config import PALETTE_NAMES


@dataclass
class Preferences:
    """Look-and-feel choices. Kept for the running app only."""

    click_color: str = "green"
    show_colors: bool = True
    dark_mode: bool = False

    def __post_init__(self) -> None:
        if self.click_color not in PALETTE_NAMES:
            raise ValueError(f"Unknown click color: {self.click_color!r}")
