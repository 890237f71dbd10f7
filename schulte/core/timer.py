"""Timer cadence, the ticker handle contract and time formatting."""

from __future__ import annotations

from typing import Callable, Protocol

TICK_INTERVAL_MS = 10
NO_RECORD = "--:--"


class Ticker(Protocol):
    """A cancelable periodic callback.

    ``start`` replaces any callback that is already running and ``stop`` is
    safe to call on an idle ticker.
    """

    def start(self, interval_ms: int, callback: Callable[[], None]) -> None:
        ...

    def stop(self) -> None:
        ...

    def is_active(self) -> bool:
        ...


def format_time(ms: int) -> str:
    """Format a millisecond duration as ``MM:SS.HH``. Minutes are not wrapped."""
    ms = max(0, int(ms))
    minutes, rest = divmod(ms, 60_000)
    seconds, rest = divmod(rest, 1000)
    hundredths = rest // 10
    return f"{minutes:02d}:{seconds:02d}.{hundredths:02d}"


def format_best(ms: int | None) -> str:
    """Format a stored best time, or the placeholder when there is none."""
    if ms is None:
        return NO_RECORD
    return format_time(ms)
