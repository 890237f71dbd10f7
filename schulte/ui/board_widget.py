"""Schulte table grid: one button per number."""

from __future__ import annotations

from typing import Callable, Dict, Optional, Sequence

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import QGridLayout, QPushButton, QSizePolicy, QWidget

from schulte.core.session import Session
from schulte.ui.colors import consumed_cell_colors, theme_for, to_qss
from schulte.ui.models import Preferences


def _cell_font_px(grid_size: int) -> int:
    return max(16, 40 - grid_size * 4)


def _cell_style(background: str, foreground: str, border: str, font_px: int) -> str:
    return f"""
        QPushButton {{
            background: {to_qss(background)};
            color: {to_qss(foreground)};
            border: 1px solid {border};
            border-radius: 10px;
            font-size: {font_px}px;
            font-weight: 800;
        }}
    """


class SchulteBoardWidget(QWidget):
    """Square grid of number cells.

    Consumed cells are disabled and tinted; a wrong click turns the cell red
    for ``error_flash_ms`` and then restores it.
    """

    def __init__(
        self,
        on_cell_clicked: Callable[[int], None],
        error_flash_ms: int = 500,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._on_cell_clicked = on_cell_clicked
        self._error_flash_ms = error_flash_ms
        self._cells: Dict[int, QPushButton] = {}
        self._flashing: set[int] = set()
        self._board: tuple[int, ...] = ()
        self._grid_size = 0
        self._session: Optional[Session] = None
        self._prefs = Preferences()
        self._render_key: Optional[tuple] = None

        self._layout = QGridLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._layout.setSpacing(8)
        self.setMinimumSize(320, 320)

    def cell(self, value: int) -> Optional[QPushButton]:
        return self._cells.get(value)

    def render(self, session: Session, prefs: Preferences) -> None:
        """Sync cells with *session*, rebuilding the grid when the board changed."""
        self._session = session
        self._prefs = prefs
        rebuilt = session.board != self._board or session.grid_size != self._grid_size
        if rebuilt:
            self._rebuild(session.board, session.grid_size)
        elif not session.consumed and self._flashing:
            # New round on an identical shuffle: drop flashes left from the last one.
            self._flashing.clear()
            self._render_key = None
        # Timer ticks arrive every few ms; skip restyling when nothing visible changed.
        render_key = (session.consumed, prefs.click_color, prefs.show_colors, prefs.dark_mode)
        if not rebuilt and render_key == self._render_key:
            return
        self._render_key = render_key
        for value in self._cells:
            self._style_cell(value)

    def flash_error(self, value: int) -> None:
        button = self._cells.get(value)
        if button is None:
            return
        self._flashing.add(value)
        self._style_cell(value)
        QTimer.singleShot(self._error_flash_ms, lambda: self._clear_error(value, button))

    def _clear_error(self, value: int, button: QPushButton) -> None:
        # The board may have been rebuilt while the flash was showing.
        if self._cells.get(value) is not button:
            return
        self._flashing.discard(value)
        self._style_cell(value)

    def _rebuild(self, board: Sequence[int], grid_size: int) -> None:
        while self._layout.count():
            item = self._layout.takeAt(0)
            w = item.widget()
            if w is not None:
                w.setParent(None)
                w.deleteLater()
        self._cells = {}
        self._flashing = set()
        self._board = tuple(board)
        self._grid_size = grid_size

        for index, value in enumerate(self._board):
            button = QPushButton(str(value))
            button.setCursor(Qt.PointingHandCursor)
            button.setFocusPolicy(Qt.NoFocus)
            button.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
            button.clicked.connect(lambda _checked=False, v=value: self._on_cell_clicked(v))
            row, col = divmod(index, grid_size)
            self._layout.addWidget(button, row, col)
            self._cells[value] = button
        for i in range(grid_size):
            self._layout.setRowStretch(i, 1)
            self._layout.setColumnStretch(i, 1)

    def _style_cell(self, value: int) -> None:
        button = self._cells[value]
        theme = theme_for(self._prefs.dark_mode)
        font_px = _cell_font_px(self._grid_size)
        consumed = self._session is not None and self._session.is_consumed(value)
        if consumed:
            background, foreground = consumed_cell_colors(self._prefs)
        elif value in self._flashing:
            background, foreground = theme.ERROR, "#ffffff"
        else:
            background, foreground = theme.CELL_BG, theme.TEXT_PRIMARY
        button.setEnabled(not consumed)
        button.setStyleSheet(_cell_style(background, foreground, theme.BORDER, font_px))
