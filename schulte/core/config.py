from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import yaml

from schulte.core.board import MIN_GRID_SIZE
from schulte.core.scores import DEFAULT_DATA_DIR, SCORES_FILE_NAME
from schulte.core.timer import TICK_INTERVAL_MS

DATA_DIR_ENV = "SCHULTE_DATA_DIR"
DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parent.parent / "data" / "settings.yaml"
PALETTE_NAMES = ("green", "blue", "purple", "pink", "yellow", "orange")


@dataclass(frozen=True)
class GameConfig:
    grid_sizes: Tuple[int, ...] = (3, 4, 5, 6)
    default_grid_size: int = 3
    tick_interval_ms: int = TICK_INTERVAL_MS
    error_flash_ms: int = 500
    click_color: str = "green"
    data_dir: Path = DEFAULT_DATA_DIR

    @property
    def scores_path(self) -> Path:
        return self.data_dir / SCORES_FILE_NAME


def load_config(path: Optional[Path] = None) -> GameConfig:
    """Read settings YAML and return a validated GameConfig.

    ``SCHULTE_DATA_DIR`` overrides the ``data_dir`` entry.
    """
    settings_path = Path(path) if path is not None else DEFAULT_SETTINGS_PATH
    if not settings_path.exists():
        raise FileNotFoundError(f"Settings file not found: {settings_path}")
    raw = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"{settings_path.name}: expected a YAML mapping")

    defaults = GameConfig()
    grid_sizes = raw.get("grid_sizes", list(defaults.grid_sizes))
    if not isinstance(grid_sizes, list) or not grid_sizes:
        raise ValueError(f"{settings_path.name}: 'grid_sizes' must be a non-empty list")
    sizes = tuple(_positive_int(settings_path, "grid_sizes", s) for s in grid_sizes)
    if any(s < MIN_GRID_SIZE for s in sizes):
        raise ValueError(f"{settings_path.name}: grid sizes must be at least {MIN_GRID_SIZE}")
    if len(set(sizes)) != len(sizes):
        raise ValueError(f"{settings_path.name}: 'grid_sizes' contains duplicates")

    default_size = _positive_int(settings_path, "default_grid_size", raw.get("default_grid_size", sizes[0]))
    if default_size not in sizes:
        raise ValueError(f"{settings_path.name}: 'default_grid_size' {default_size} is not one of {list(sizes)}")

    click_color = str(raw.get("click_color", defaults.click_color)).strip().lower()
    if click_color not in PALETTE_NAMES:
        raise ValueError(f"{settings_path.name}: unknown 'click_color' {click_color!r}")

    env_dir = os.environ.get(DATA_DIR_ENV)
    if env_dir:
        data_dir = Path(env_dir).expanduser()
    elif raw.get("data_dir"):
        data_dir = Path(str(raw["data_dir"])).expanduser()
    else:
        data_dir = defaults.data_dir

    return GameConfig(
        grid_sizes=sizes,
        default_grid_size=default_size,
        tick_interval_ms=_positive_int(settings_path, "tick_interval_ms", raw.get("tick_interval_ms", defaults.tick_interval_ms)),
        error_flash_ms=_positive_int(settings_path, "error_flash_ms", raw.get("error_flash_ms", defaults.error_flash_ms)),
        click_color=click_color,
        data_dir=data_dir,
    )


def _positive_int(settings_path: Path, name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{settings_path.name}: '{name}' must be a positive integer, got {value!r}")
    return value
