"""simulation/ticks.py — Discrete tick scheduler.

Real time is scaled by the speed multiplier and poured into an
accumulator; every full ``interval`` in it is one due tick.  The
scheduler never runs simulation code itself: ``advance()`` returns how
many ticks are due and the caller runs them in order:

    due = ticks.advance(dt)
    for _ in range(due):
        run_one_tick()

Manual ``tick()`` is always available, running or not, and advances
exactly one tick without touching the accumulator.
"""

from __future__ import annotations

from core.constants import MAX_CATCHUP_TICKS


class TickService:

    def __init__(self, interval_seconds: float = 1.0) -> None:
        self.interval = interval_seconds if interval_seconds > 0 else 1.0
        self.current_tick: int = 0
        self.accumulator: float = 0.0
        self._speed: float = 1.0
        self._running: bool = False

    # ── Control ──────────────────────────────────────────────────────

    @property
    def running(self) -> bool:
        return self._running

    def set_running(self, running: bool) -> None:
        self._running = running

    @property
    def speed_multiplier(self) -> float:
        return self._speed

    def set_speed(self, multiplier: float) -> None:
        """Change pacing.  The accumulator is left as is."""
        if multiplier < 0:
            raise ValueError(f"speed multiplier must be >= 0, got {multiplier}")
        self._speed = multiplier

    def reset_tick(self, tick: int = 0) -> None:
        self.current_tick = tick
        self.accumulator = 0.0

    # ── Advancing ────────────────────────────────────────────────────

    def advance(self, elapsed_seconds: float) -> int:
        """Accumulate real time; return the number of ticks now due.

        ``current_tick`` is not touched here; the caller runs each due
        tick through ``tick()``.  The accumulator is capped at
        ``MAX_CATCHUP_TICKS`` intervals so a long stall can't burst.
        """
        if not self._running or elapsed_seconds <= 0:
            return 0
        self.accumulator += elapsed_seconds * self._speed
        cap = self.interval * MAX_CATCHUP_TICKS
        if self.accumulator > cap:
            self.accumulator = cap

        due = 0
        while self.accumulator >= self.interval:
            self.accumulator -= self.interval
            due += 1
        return due

    def tick(self) -> int:
        """Advance exactly one tick.  Returns the new tick number."""
        self.current_tick += 1
        return self.current_tick
