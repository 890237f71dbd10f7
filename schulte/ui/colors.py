"""Theme colors and the consumed-cell color lookup."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from schulte.ui.models import Preferences


class LightColors:
    """Light theme palette."""

    BG = "#f4f6f8"
    PANEL = "#ffffff"
    BORDER = "#d7dde3"
    CELL_BG = "#ffffff"
    CELL_HOVER = "#eef2f6"
    TEXT_PRIMARY = "#1f2933"
    TEXT_MUTED = "#64748b"
    ACCENT = "#0f766e"
    ERROR = "#ef4444"


class DarkColors:
    """Dark theme palette."""

    BG = "#111418"
    PANEL = "#1c2127"
    BORDER = "#2f3740"
    CELL_BG = "#252b33"
    CELL_HOVER = "#2e3640"
    TEXT_PRIMARY = "#e5e7eb"
    TEXT_MUTED = "#9ca3af"
    ACCENT = "#2dd4bf"
    ERROR = "#dc2626"


# name -> (cell background, cell text) in light mode
CLICK_PALETTE: Dict[str, Tuple[str, str]] = {
    "green": ("#6ee7b7b4", "#065f46"),
    "blue": ("#93c4fdab", "#1e3a8a"),
    "purple": ("#c3b5fdaf", "#4c1d95"),
    "pink": ("#f9a8d4a6", "#831843"),
    "yellow": ("#fddf479c", "#713f12"),
    "orange": ("#fdbb74a1", "#7c2d12"),
}

DARK_MODE_TEXT = "#ffffff"
LIGHT_MODE_GRAY = ("#cacacaea", "#6e6e6eff")
DARK_MODE_GRAY = ("#414141ff", "#aaaaaaff")

# (palette name, or None for neutral gray; dark mode) -> (background, foreground)
_CELL_COLORS: Dict[Tuple[Optional[str], bool], Tuple[str, str]] = {
    **{(name, False): pair for name, pair in CLICK_PALETTE.items()},
    **{(name, True): (pair[0], DARK_MODE_TEXT) for name, pair in CLICK_PALETTE.items()},
    (None, False): LIGHT_MODE_GRAY,
    (None, True): DARK_MODE_GRAY,
}


def theme_for(dark_mode: bool) -> type:
    return DarkColors if dark_mode else LightColors


def consumed_cell_colors(prefs: Preferences) -> Tuple[str, str]:
    """Return (background, foreground) for a correctly clicked cell."""
    key = (prefs.click_color if prefs.show_colors else None, prefs.dark_mode)
    return _CELL_COLORS[key]


def to_qss(color: str) -> str:
    """Convert a CSS ``#RRGGBBAA`` color to a Qt stylesheet ``rgba()``.

    ``#RRGGBB`` and anything unparseable are returned unchanged.
    """
    try:
        c = color.strip()
        if not c.startswith("#") or len(c) != 9:
            return color
        r, g, b, a = (int(c[i:i + 2], 16) for i in (1, 3, 5, 7))
        return f"rgba({r}, {g}, {b}, {a})"
    except ValueError:
        return color
