"""Tests for schulte.core.game – controller, timer handle and score effects."""

from __future__ import annotations

import random
from pathlib import Path
from typing import Callable, List, Optional

import pytest

from schulte.core.game import GameController, GameUpdate
from schulte.core.scores import HighScoreStore
from schulte.core.session import COMPLETION_MARKER, GameState, target_label


# ---------------------------------------------------------------------------
# Fakes and fixtures
# ---------------------------------------------------------------------------

class FakeTicker:
    """Records start/stop calls; ``fire`` stands in for a QTimer timeout."""

    def __init__(self) -> None:
        self.callback: Optional[Callable[[], None]] = None
        self.interval_ms: Optional[int] = None
        self.starts = 0
        self.stops = 0

    def start(self, interval_ms: int, callback: Callable[[], None]) -> None:
        self.stop()
        self.starts += 1
        self.interval_ms = interval_ms
        self.callback = callback

    def stop(self) -> None:
        self.stops += 1
        self.callback = None

    def is_active(self) -> bool:
        return self.callback is not None

    def fire(self) -> None:
        assert self.callback is not None, "ticker is not running"
        self.callback()


class FakeClock:
    def __init__(self, now_ms: int = 0) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


@pytest.fixture()
def store(tmp_path: Path) -> HighScoreStore:
    return HighScoreStore(tmp_path / "high_scores.json")


@pytest.fixture()
def ticker() -> FakeTicker:
    return FakeTicker()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(10_000)


@pytest.fixture()
def controller(store: HighScoreStore, ticker: FakeTicker, clock: FakeClock) -> GameController:
    return GameController(store, ticker, grid_size=3, clock=clock, rng=random.Random(5))


def _solve(controller: GameController, clock: FakeClock, step_ms: int = 100) -> None:
    for value in range(1, controller.session.max_number + 1):
        controller.click(value)
        clock.advance(step_ms)


# ---------------------------------------------------------------------------
# Construction and subscription
# ---------------------------------------------------------------------------

class TestSetup:
    def test_starts_ready(self, controller: GameController):
        assert controller.session.game_state is GameState.READY
        assert controller.session.grid_size == 3
        assert controller.best_ms is None

    def test_loads_existing_best(self, store: HighScoreStore, ticker: FakeTicker, clock: FakeClock):
        store.save(3, 4321)
        c = GameController(store, ticker, grid_size=3, clock=clock)
        assert c.best_ms == 4321

    def test_subscribe_gets_current_snapshot(self, controller: GameController):
        updates: List[GameUpdate] = []
        controller.subscribe(updates.append)
        assert len(updates) == 1
        assert updates[0].session is controller.session

    def test_listeners_notified_per_event(self, controller: GameController):
        updates: List[GameUpdate] = []
        controller.subscribe(updates.append)
        controller.start()
        controller.click(1)
        assert len(updates) == 3


# ---------------------------------------------------------------------------
# Full game scenario
# ---------------------------------------------------------------------------

class TestPlayThrough:
    def test_ascending_clicks_finish(self, controller: GameController, clock: FakeClock):
        controller.start()
        _solve(controller, clock)
        assert controller.session.game_state is GameState.FINISHED
        assert target_label(controller.session) == COMPLETION_MARKER
        assert controller.is_finished()

    def test_records_new_best(self, controller: GameController, store: HighScoreStore, clock: FakeClock):
        controller.start()
        _solve(controller, clock, step_ms=100)
        # First click at t0, last click 8 steps later.
        assert controller.session.elapsed_ms == 800
        assert store.load(3) == 800
        assert controller.best_ms == 800
        assert controller.last_new_best is True

    def test_slower_run_keeps_best(self, controller: GameController, store: HighScoreStore, clock: FakeClock):
        controller.start()
        _solve(controller, clock, step_ms=100)
        controller.start()
        _solve(controller, clock, step_ms=200)
        assert store.load(3) == 800
        assert controller.last_new_best is False

    def test_study_time_not_counted(self, controller: GameController, clock: FakeClock):
        controller.start()
        clock.advance(60_000)
        _solve(controller, clock, step_ms=50)
        assert controller.session.elapsed_ms == 400

    def test_wrong_click_reported_to_listeners(self, controller: GameController):
        updates: List[GameUpdate] = []
        controller.subscribe(updates.append)
        controller.start()
        controller.click(4)
        assert updates[-1].flashed == 4
        assert controller.session.current_target == 1

    def test_new_best_flag_cleared_on_restart(self, controller: GameController, clock: FakeClock):
        controller.start()
        _solve(controller, clock)
        assert controller.last_new_best is True
        controller.start()
        assert controller.last_new_best is False


# ---------------------------------------------------------------------------
# Timer handle ownership
# ---------------------------------------------------------------------------

class TestTimerHandle:
    def test_not_running_before_first_click(self, controller: GameController, ticker: FakeTicker):
        controller.start()
        assert not controller.timer_running

    def test_first_correct_click_starts_ticker(self, controller: GameController, ticker: FakeTicker):
        controller.start()
        controller.click(1)
        assert controller.timer_running
        assert ticker.interval_ms == 10
        assert ticker.starts == 1

    def test_tick_updates_display_time(self, controller: GameController, ticker: FakeTicker, clock: FakeClock):
        controller.start()
        controller.click(1)
        clock.advance(1230)
        ticker.fire()
        assert controller.session.elapsed_ms == 1230
        assert controller.session.current_target == 2

    def test_no_ticker_after_finish(self, controller: GameController, clock: FakeClock):
        controller.start()
        _solve(controller, clock)
        assert not controller.timer_running

    def test_reset_cancels_ticker(self, controller: GameController, clock: FakeClock):
        controller.start()
        controller.click(1)
        controller.start()
        assert not controller.timer_running
        assert controller.session.elapsed_ms == 0

    def test_single_handle_across_restarts(self, controller: GameController, ticker: FakeTicker):
        for _ in range(3):
            controller.start()
            controller.click(1)
        assert ticker.starts == 3
        assert controller.timer_running

    def test_shutdown_stops(self, controller: GameController):
        controller.start()
        controller.click(1)
        controller.shutdown()
        assert not controller.timer_running


# ---------------------------------------------------------------------------
# Grid size changes
# ---------------------------------------------------------------------------

class TestGridSizeChange:
    def test_mid_game_change_resets(self, controller: GameController, store: HighScoreStore):
        store.save(4, 7777)
        controller.start()
        controller.click(1)
        old_board = controller.session.board
        controller.change_grid_size(4)
        assert controller.session.game_state is GameState.READY
        assert controller.session.grid_size == 4
        assert len(controller.session.board) == 16
        assert controller.session.board != old_board
        assert not controller.timer_running
        assert controller.best_ms == 7777

    def test_change_to_size_without_record(self, controller: GameController, store: HighScoreStore, clock: FakeClock):
        controller.start()
        _solve(controller, clock)
        assert controller.best_ms is not None
        controller.change_grid_size(5)
        assert controller.best_ms is None

    def test_records_do_not_cross_sizes(self, controller: GameController, store: HighScoreStore, clock: FakeClock):
        controller.change_grid_size(2)
        controller.start()
        _solve(controller, clock)
        assert store.load(2) is not None
        assert store.load(3) is None


# ---------------------------------------------------------------------------
# Reset best
# ---------------------------------------------------------------------------

class TestClearBest:
    def test_clears_current_size(self, controller: GameController, store: HighScoreStore, clock: FakeClock):
        store.save(4, 1000)
        controller.start()
        _solve(controller, clock)
        controller.clear_best()
        assert controller.best_ms is None
        assert store.load(3) is None
        assert store.load(4) == 1000

    def test_notifies_listeners(self, controller: GameController):
        updates: List[GameUpdate] = []
        controller.subscribe(updates.append)
        controller.clear_best()
        assert updates[-1].best_ms is None


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

class TestLogging:
    def test_new_best_logged_once(self, controller: GameController, clock: FakeClock, caplog: pytest.LogCaptureFixture):
        controller.start()
        with caplog.at_level("INFO"):
            _solve(controller, clock)
        finished = [r for r in caplog.records if "ms" in r.getMessage() and r.levelname == "INFO"]
        assert len(finished) == 1
        assert finished[0].name == "schulte.core.game"
        assert "(new best)" in finished[0].getMessage()
