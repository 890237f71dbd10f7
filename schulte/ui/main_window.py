from __future__ import annotations

from typing import Dict, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QButtonGroup,
    QCheckBox,
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from schulte.core.config import GameConfig
from schulte.core.game import GameController, GameUpdate
from schulte.core.session import GameState, start_button_label, target_label
from schulte.core.timer import format_best, format_time
from schulte.ui.board_widget import SchulteBoardWidget
from schulte.ui.colors import CLICK_PALETTE, theme_for, to_qss
from schulte.ui.models import Preferences


class MainWindow(QMainWindow):
    """Single-screen game window: controls and readouts on top, the table below.

    The window never changes game state itself; it forwards user input to the
    :class:`GameController` and redraws from each :class:`GameUpdate`.
    """

    def __init__(self, controller: GameController, config: GameConfig) -> None:
        super().__init__()
        self._controller = controller
        self._config = config
        self._prefs = Preferences(click_color=config.click_color)
        self._last_update: Optional[GameUpdate] = None

        self._size_buttons: Dict[int, QPushButton] = {}
        self._color_buttons: Dict[str, QPushButton] = {}
        self._board_widget: Optional[SchulteBoardWidget] = None
        self._target_label: Optional[QLabel] = None
        self._timer_label: Optional[QLabel] = None
        self._best_label: Optional[QLabel] = None
        self._status_label: Optional[QLabel] = None
        self._start_button: Optional[QPushButton] = None
        self._dark_mode_button: Optional[QPushButton] = None
        self._show_colors_checkbox: Optional[QCheckBox] = None
        self._panel: Optional[QFrame] = None

        self.setWindowTitle("Schulte Table")
        self._build_ui()
        self._apply_theme()
        self._controller.subscribe(self._on_update)

    def _build_ui(self) -> None:
        root = QWidget()
        root.setObjectName("root")
        outer = QVBoxLayout(root)
        outer.setContentsMargins(24, 24, 24, 24)
        outer.setSpacing(16)

        self._panel = QFrame()
        self._panel.setObjectName("panel")
        panel_layout = QVBoxLayout(self._panel)
        panel_layout.setContentsMargins(18, 16, 18, 16)
        panel_layout.setSpacing(12)

        title = QLabel("Schulte Table")
        title.setObjectName("title")
        panel_layout.addWidget(title)

        # Grid size selector
        size_row = QHBoxLayout()
        size_row.addWidget(self._muted_label("Grid"))
        size_group = QButtonGroup(self)
        size_group.setExclusive(True)
        for size in self._config.grid_sizes:
            btn = QPushButton(f"{size}×{size}")
            btn.setObjectName("sizeButton")
            btn.setCheckable(True)
            btn.setChecked(size == self._controller.session.grid_size)
            btn.setCursor(Qt.PointingHandCursor)
            btn.clicked.connect(lambda _checked=False, s=size: self._on_size_selected(s))
            size_group.addButton(btn)
            size_row.addWidget(btn)
            self._size_buttons[size] = btn
        size_row.addStretch(1)
        panel_layout.addLayout(size_row)

        # Click color choices, show-colors checkbox and theme toggle
        color_row = QHBoxLayout()
        color_row.addWidget(self._muted_label("Color"))
        color_group = QButtonGroup(self)
        color_group.setExclusive(True)
        for name, (background, _foreground) in CLICK_PALETTE.items():
            btn = QPushButton("")
            btn.setToolTip(name.capitalize())
            btn.setCheckable(True)
            btn.setChecked(name == self._prefs.click_color)
            btn.setFixedSize(28, 28)
            btn.setCursor(Qt.PointingHandCursor)
            btn.setStyleSheet(
                f"""
                QPushButton {{ background: {to_qss(background)}; border: 2px solid transparent; border-radius: 14px; }}
                QPushButton:checked {{ border-color: #1f2933; }}
                """
            )
            btn.clicked.connect(lambda _checked=False, n=name: self._on_color_selected(n))
            color_group.addButton(btn)
            color_row.addWidget(btn)
            self._color_buttons[name] = btn

        self._show_colors_checkbox = QCheckBox("Show colors")
        self._show_colors_checkbox.setChecked(self._prefs.show_colors)
        self._show_colors_checkbox.toggled.connect(self._on_show_colors_toggled)
        color_row.addSpacing(12)
        color_row.addWidget(self._show_colors_checkbox)
        color_row.addStretch(1)

        self._dark_mode_button = QPushButton("Dark mode")
        self._dark_mode_button.setObjectName("secondaryButton")
        self._dark_mode_button.setCheckable(True)
        self._dark_mode_button.setCursor(Qt.PointingHandCursor)
        self._dark_mode_button.toggled.connect(self._on_dark_mode_toggled)
        color_row.addWidget(self._dark_mode_button)
        panel_layout.addLayout(color_row)

        # Readouts
        stats_row = QHBoxLayout()
        stats_row.setSpacing(24)
        self._target_label = self._big_value("1")
        self._timer_label = self._big_value(format_time(0))
        self._best_label = self._big_value(format_best(None))
        for header, value in (("Find", self._target_label), ("Time", self._timer_label), ("Best", self._best_label)):
            col = QVBoxLayout()
            col.setSpacing(2)
            col.addWidget(self._muted_label(header))
            col.addWidget(value)
            stats_row.addLayout(col)
        stats_row.addStretch(1)
        self._status_label = QLabel("")
        self._status_label.setObjectName("status")
        stats_row.addWidget(self._status_label, 0, Qt.AlignVCenter)
        panel_layout.addLayout(stats_row)

        # Actions
        action_row = QHBoxLayout()
        self._start_button = QPushButton(start_button_label(GameState.READY))
        self._start_button.setObjectName("primaryButton")
        self._start_button.setCursor(Qt.PointingHandCursor)
        self._start_button.clicked.connect(lambda _checked=False: self._controller.start())
        clear_best = QPushButton("Reset best")
        clear_best.setObjectName("secondaryButton")
        clear_best.setCursor(Qt.PointingHandCursor)
        clear_best.clicked.connect(lambda _checked=False: self._controller.clear_best())
        action_row.addWidget(self._start_button)
        action_row.addWidget(clear_best)
        action_row.addStretch(1)
        panel_layout.addLayout(action_row)

        outer.addWidget(self._panel)

        self._board_widget = SchulteBoardWidget(
            on_cell_clicked=self._controller.click,
            error_flash_ms=self._config.error_flash_ms,
        )
        outer.addWidget(self._board_widget, 1)

        self.setCentralWidget(root)
        self.resize(560, 760)

    def _muted_label(self, text: str) -> QLabel:
        lbl = QLabel(text)
        lbl.setObjectName("muted")
        return lbl

    def _big_value(self, text: str) -> QLabel:
        lbl = QLabel(text)
        lbl.setObjectName("bigValue")
        return lbl

    def _on_update(self, update: GameUpdate) -> None:
        self._last_update = update
        session = update.session
        if self._target_label is not None:
            self._target_label.setText(target_label(session))
        if self._timer_label is not None:
            self._timer_label.setText(format_time(session.elapsed_ms))
        if self._best_label is not None:
            self._best_label.setText(format_best(update.best_ms))
        if self._start_button is not None:
            self._start_button.setText(start_button_label(session.game_state))
        if self._status_label is not None:
            self._status_label.setText("New best!" if update.new_best else "")
        if self._board_widget is not None:
            self._board_widget.render(session, self._prefs)
            if update.flashed is not None:
                self._board_widget.flash_error(update.flashed)

    def _on_size_selected(self, size: int) -> None:
        self._controller.change_grid_size(size)

    def _on_color_selected(self, name: str) -> None:
        self._prefs.click_color = name
        self._refresh_board()

    def _on_show_colors_toggled(self, checked: bool) -> None:
        self._prefs.show_colors = checked
        self._refresh_board()

    def _on_dark_mode_toggled(self, checked: bool) -> None:
        self._prefs.dark_mode = checked
        if self._dark_mode_button is not None:
            self._dark_mode_button.setText("Light mode" if checked else "Dark mode")
        self._apply_theme()

    def _apply_theme(self) -> None:
        """Restyle the window for the current light/dark preference."""
        theme = theme_for(self._prefs.dark_mode)
        self.setStyleSheet(f"""
            QWidget#root {{ background: {theme.BG}; }}
            QFrame#panel {{
                background: {theme.PANEL};
                border: 1px solid {theme.BORDER};
                border-radius: 16px;
            }}
            QLabel {{ color: {theme.TEXT_PRIMARY}; }}
            QLabel#title {{ font-size: 22px; font-weight: 900; }}
            QLabel#muted {{ color: {theme.TEXT_MUTED}; font-size: 12px; font-weight: 700; }}
            QLabel#bigValue {{ font-size: 26px; font-weight: 900; font-family: monospace; }}
            QLabel#status {{ color: {theme.ACCENT}; font-size: 14px; font-weight: 800; }}
            QCheckBox {{ color: {theme.TEXT_PRIMARY}; }}
            QPushButton#sizeButton, QPushButton#secondaryButton {{
                background: {theme.CELL_BG};
                color: {theme.TEXT_PRIMARY};
                border: 1px solid {theme.BORDER};
                border-radius: 10px;
                padding: 6px 12px;
                font-weight: 700;
            }}
            QPushButton#sizeButton:checked {{
                background: {theme.ACCENT};
                color: #ffffff;
                border-color: {theme.ACCENT};
            }}
            QPushButton#primaryButton {{
                background: {theme.ACCENT};
                color: #ffffff;
                border: none;
                border-radius: 10px;
                padding: 8px 20px;
                font-weight: 800;
            }}
        """)
        self._refresh_board()

    def _refresh_board(self) -> None:
        if self._last_update is not None and self._board_widget is not None:
            self._board_widget.render(self._last_update.session, self._prefs)

    def closeEvent(self, event: QCloseEvent) -> None:
        """Stop the live timer when closing the app."""
        self._controller.shutdown()
        super().closeEvent(event)
