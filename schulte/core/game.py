"""Game controller: runs session transitions and carries out their effects."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from schulte.core.scores import HighScoreStore
from schulte.core.session import (
    CellClicked,
    Event,
    FlashError,
    GameState,
    GridSizeChanged,
    LoadHighScore,
    RecordResult,
    Session,
    StartPressed,
    StartTimer,
    StopTimer,
    Tick,
    new_session,
    transition,
)
from schulte.core.timer import TICK_INTERVAL_MS, Ticker

logger = logging.getLogger(__name__)


def monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


@dataclass(frozen=True)
class GameUpdate:
    """Snapshot handed to subscribers after every event."""

    session: Session
    best_ms: Optional[int]
    flashed: Optional[int] = None
    new_best: bool = False


Listener = Callable[[GameUpdate], None]


class GameController:
    """Owns the current session, the single timer handle and the score store.

    Every event goes through :func:`schulte.core.session.transition`; the
    controller only executes the effects it returns and notifies listeners.
    """

    def __init__(
        self,
        score_store: HighScoreStore,
        ticker: Ticker,
        grid_size: int = 3,
        tick_interval_ms: int = TICK_INTERVAL_MS,
        clock: Callable[[], int] = monotonic_ms,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._store = score_store
        self._ticker = ticker
        self._tick_interval_ms = tick_interval_ms
        self._clock = clock
        self._rng = rng
        self._listeners: List[Listener] = []
        self._session = new_session(grid_size, rng)
        self._best_ms = self._store.load(grid_size)
        self._last_new_best = False

    @property
    def session(self) -> Session:
        return self._session

    @property
    def best_ms(self) -> Optional[int]:
        """Best recorded time for the current grid size."""
        return self._best_ms

    @property
    def last_new_best(self) -> bool:
        """True when the most recent finish set a record."""
        return self._last_new_best

    @property
    def timer_running(self) -> bool:
        return self._ticker.is_active()

    def is_finished(self) -> bool:
        return self._session.game_state is GameState.FINISHED

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)
        listener(GameUpdate(self._session, self._best_ms, new_best=self._last_new_best))

    def start(self) -> None:
        """Start a new round on a fresh board (also Reset / Play Again)."""
        self.dispatch(StartPressed(self._clock()))
        logger.info("Started %dx%d game", self._session.grid_size, self._session.grid_size)

    def click(self, value: int) -> None:
        self.dispatch(CellClicked(value, self._clock()))

    def change_grid_size(self, grid_size: int) -> None:
        self.dispatch(GridSizeChanged(grid_size))
        logger.info("Grid size changed to %dx%d", grid_size, grid_size)

    def tick(self) -> None:
        self.dispatch(Tick(self._clock()))

    def clear_best(self) -> None:
        """Forget the record for the current grid size."""
        self._store.clear(self._session.grid_size)
        self._best_ms = None
        self._last_new_best = False
        self._notify(GameUpdate(self._session, None))

    def dispatch(self, event: Event) -> None:
        result = transition(self._session, event, self._rng)
        self._session = result.session
        flashed: Optional[int] = None
        if isinstance(event, (StartPressed, GridSizeChanged)):
            self._last_new_best = False
        for effect in result.effects:
            if isinstance(effect, StartTimer):
                self._ticker.start(self._tick_interval_ms, self.tick)
            elif isinstance(effect, StopTimer):
                self._ticker.stop()
            elif isinstance(effect, FlashError):
                flashed = effect.value
            elif isinstance(effect, RecordResult):
                self._record(effect)
            elif isinstance(effect, LoadHighScore):
                self._best_ms = self._store.load(effect.grid_size)
        self._notify(GameUpdate(self._session, self._best_ms, flashed, self._last_new_best))

    def shutdown(self) -> None:
        """Cancel the periodic timer (e.g. when the window closes)."""
        self._ticker.stop()

    def _record(self, effect: RecordResult) -> None:
        self._last_new_best = self._store.save(effect.grid_size, effect.elapsed_ms)
        self._best_ms = self._store.load(effect.grid_size)
        logger.info(
            "Finished %dx%d in %d ms%s",
            effect.grid_size,
            effect.grid_size,
            effect.elapsed_ms,
            " (new best)" if self._last_new_best else "",
        )

    def _notify(self, update: GameUpdate) -> None:
        for listener in list(self._listeners):
            listener(update)
