"""
Scheduler — single logical tick source for the whole engine.

Every periodic activity (clock display, slewing, photometer and
spectrometer integrations) subscribes a Ticker with its own interval.
Time only moves when advance(dt) is called, so tests drive a virtual
clock and the runner feeds it wall-clock deltas.

Ordering:
    Due ticks fire in time order; ticks due at the same instant fire in
    subscription order. A cancelled ticker never fires again, including
    later in the same advance() call.
"""

from __future__ import annotations
import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

# Float slack when comparing due times (intervals such as 12.5 ms accumulate error)
_EPS = 1e-9


class Ticker:
    """Handle for a periodic subscription"""

    def __init__(self, scheduler: "Scheduler", interval: float,
                 callback: Callable[[], None], name: str, seq: int):
        self._scheduler = scheduler
        self.interval = interval
        self.callback = callback
        self.name = name
        self.seq = seq
        self.next_due = scheduler.now + interval
        self.active = True

    def cancel(self):
        """Stop the ticker immediately."""
        if self.active:
            self.active = False
            self._scheduler._remove(self)

    def reschedule(self, interval: float):
        """Change the period; the next tick is one new interval from now."""
        _check_interval(interval)
        self.interval = interval
        self.next_due = self._scheduler.now + interval

    def __repr__(self) -> str:
        state = "active" if self.active else "cancelled"
        return f"Ticker({self.name!r}, every {self.interval}s, {state})"


def _check_interval(interval: float):
    if interval <= 0:
        raise ValueError(f"Ticker interval must be positive, got {interval}")


class Scheduler:
    """
    Virtual-time scheduler.

    Parameters
    ----------
    start : initial virtual time in seconds
    """

    def __init__(self, start: float = 0.0):
        self._now = float(start)
        self._tickers: List[Ticker] = []
        self._seq = 0

    @property
    def now(self) -> float:
        return self._now

    @property
    def tickers(self) -> List[Ticker]:
        return list(self._tickers)

    def every(self, interval: float, callback: Callable[[], None],
              name: str = "") -> Ticker:
        """Subscribe callback to run every interval seconds."""
        _check_interval(interval)
        self._seq += 1
        ticker = Ticker(self, interval, callback, name or f"ticker-{self._seq}", self._seq)
        self._tickers.append(ticker)
        return ticker

    def _remove(self, ticker: Ticker):
        if ticker in self._tickers:
            self._tickers.remove(ticker)

    def _next_due(self, until: float) -> Optional[Ticker]:
        due = [t for t in self._tickers if t.active and t.next_due <= until + _EPS]
        if not due:
            return None
        return min(due, key=lambda t: (t.next_due, t.seq))

    def advance(self, dt: float) -> int:
        """
        Move virtual time forward by dt seconds, firing every due tick.
        Returns the number of ticks fired.
        """
        if dt < 0:
            raise ValueError("Cannot advance time backwards")

        end = self._now + dt
        fired = 0
        while True:
            ticker = self._next_due(end)
            if ticker is None:
                break
            self._now = max(self._now, ticker.next_due)
            # Set before the callback so reschedule() inside it wins
            ticker.next_due += ticker.interval
            ticker.callback()
            fired += 1

        self._now = end
        return fired
