from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import FrozenSet, Optional, Tuple, Union

from schulte.core.board import generate_board

COMPLETION_MARKER = "✓"


class GameState(str, Enum):
    READY = "ready"
    PLAYING = "playing"
    FINISHED = "finished"


_START_BUTTON_LABELS = {
    GameState.READY: "Start Game",
    GameState.PLAYING: "Reset",
    GameState.FINISHED: "Play Again",
}


@dataclass(frozen=True)
class Session:
    """One Schulte table round: the board plus the player's progress through it."""

    grid_size: int
    board: Tuple[int, ...]
    game_state: GameState = GameState.READY
    current_target: int = 1
    started_at_ms: Optional[int] = None
    elapsed_ms: int = 0
    consumed: FrozenSet[int] = field(default_factory=frozenset)

    @property
    def max_number(self) -> int:
        """Largest number on the board (grid_size²)."""
        return self.grid_size * self.grid_size

    @property
    def is_timing(self) -> bool:
        """True between the first correct click and the finish."""
        return self.game_state is GameState.PLAYING and self.started_at_ms is not None

    def is_consumed(self, value: int) -> bool:
        return value in self.consumed


# -- events ----------------------------------------------------------------


@dataclass(frozen=True)
class StartPressed:
    now_ms: int = 0


@dataclass(frozen=True)
class CellClicked:
    value: int
    now_ms: int


@dataclass(frozen=True)
class GridSizeChanged:
    grid_size: int


@dataclass(frozen=True)
class Tick:
    now_ms: int


Event = Union[StartPressed, CellClicked, GridSizeChanged, Tick]


# -- effects ---------------------------------------------------------------


@dataclass(frozen=True)
class StartTimer:
    pass


@dataclass(frozen=True)
class StopTimer:
    pass


@dataclass(frozen=True)
class FlashError:
    value: int


@dataclass(frozen=True)
class RecordResult:
    grid_size: int
    elapsed_ms: int


@dataclass(frozen=True)
class LoadHighScore:
    grid_size: int


Effect = Union[StartTimer, StopTimer, FlashError, RecordResult, LoadHighScore]


@dataclass(frozen=True)
class Transition:
    """Result of applying one event: the next session and the side effects to run."""

    session: Session
    effects: Tuple[Effect, ...] = ()


def new_session(grid_size: int, rng: Optional[random.Random] = None) -> Session:
    """Create a ``ready`` session with a freshly shuffled board."""
    return Session(grid_size=grid_size, board=tuple(generate_board(grid_size, rng)))


def transition(session: Session, event: Event, rng: Optional[random.Random] = None) -> Transition:
    """Apply *event* to *session*. Pure: timing comes from the event, effects are returned."""
    if isinstance(event, StartPressed):
        fresh = replace(new_session(session.grid_size, rng), game_state=GameState.PLAYING)
        return Transition(fresh, (StopTimer(), LoadHighScore(session.grid_size)))

    if isinstance(event, GridSizeChanged):
        return Transition(
            new_session(event.grid_size, rng),
            (StopTimer(), LoadHighScore(event.grid_size)),
        )

    if isinstance(event, Tick):
        if not session.is_timing:
            return Transition(session)
        return Transition(replace(session, elapsed_ms=max(0, event.now_ms - session.started_at_ms)))

    if isinstance(event, CellClicked):
        return _click(session, event)

    raise TypeError(f"Unknown event: {event!r}")


def _click(session: Session, event: CellClicked) -> Transition:
    if session.game_state is not GameState.PLAYING:
        return Transition(session)
    value = event.value
    if value in session.consumed or not 1 <= value <= session.max_number:
        return Transition(session)
    if value != session.current_target:
        return Transition(session, (FlashError(value),))

    effects: list = []
    started_at = session.started_at_ms
    if session.current_target == 1:
        started_at = event.now_ms
        effects.append(StartTimer())

    next_target = session.current_target + 1
    elapsed = max(0, event.now_ms - started_at)
    updated = replace(
        session,
        current_target=next_target,
        started_at_ms=started_at,
        elapsed_ms=elapsed,
        consumed=session.consumed | {value},
    )
    if next_target > session.max_number:
        updated = replace(updated, game_state=GameState.FINISHED)
        effects.append(StopTimer())
        effects.append(RecordResult(session.grid_size, elapsed))
    return Transition(updated, tuple(effects))


def start_button_label(state: GameState) -> str:
    return _START_BUTTON_LABELS[state]


def target_label(session: Session) -> str:
    """Text for the target readout: the next number, or the completion marker."""
    if session.game_state is GameState.FINISHED:
        return COMPLETION_MARKER
    return str(session.current_target)
