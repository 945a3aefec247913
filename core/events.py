"""core/events.py — Outbound engine notifications.

The engine never calls into renderers or UI.  It appends plain event
records to an ``EventQueue`` and collaborators pull them once per
frame::

    for event in controller.events.drain():
        if isinstance(event, StormOccurred):
            flash_storm(event.tick)

Design rules:
  - Events are plain dataclasses — no behaviour.
  - ``emit()`` is O(1) (just appends).
  - ``drain()`` hands back everything queued, in FIFO order, and empties
    the queue.  Nothing is acknowledged.
  - The queue is bounded; when nobody drains it the oldest events drop.
"""

from __future__ import annotations
from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Any


# ═══════════════════════════════════════════════════════════════════
#  Event definitions
# ═══════════════════════════════════════════════════════════════════

@dataclass
class RunStarted:
    seed: int
    loaded: bool = False
    tick: int = 0


@dataclass
class StateChanged:
    previous: str
    current: str


@dataclass
class TickAdvanced:
    tick: int
    harvested: dict[str, float] | None = None


@dataclass
class StormOccurred:
    """A storm hit at ``tick`` and washed away ``loss`` of one resource."""
    tick: int
    resource_id: str
    loss: float


@dataclass
class UpgradePurchased:
    upgrade_id: str
    tick: int


@dataclass
class EscapeAttempted:
    tick: int
    progress: float


# ═══════════════════════════════════════════════════════════════════
#  Queue
# ═══════════════════════════════════════════════════════════════════

class EventQueue:
    """Fire-and-forget, pull-based event queue."""

    def __init__(self, max_pending: int = 1000):
        self._queue: deque[Any] = deque(maxlen=max_pending)
        self._stats: dict[str, int] = defaultdict(int)

    def emit(self, event) -> None:
        self._stats[type(event).__name__] += 1
        self._queue.append(event)

    def drain(self) -> list[Any]:
        """Return and remove all pending events, oldest first."""
        events = list(self._queue)
        self._queue.clear()
        return events

    def clear(self) -> None:
        self._queue.clear()

    def stats(self) -> dict[str, int]:
        """Return cumulative event counts by type."""
        return dict(self._stats)

    def pending_count(self) -> int:
        return len(self._queue)

    def __repr__(self) -> str:
        return f"EventQueue(pending={len(self._queue)})"
