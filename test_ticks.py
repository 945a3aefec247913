"""test_ticks.py — Tick pacing, autosave cadence, storms and the event queue.

Tests:
1. TickService accumulates real time into due ticks
2. AutoSaveService writes every N ticks and survives failures
3. StormHazard rolls deterministically and never drives amounts negative
4. EventQueue drains in FIFO order and stays bounded

Run: python test_ticks.py
"""
from __future__ import annotations
import sys, traceback

from components import ResourceDefinition, StormConfig
from core.events import EventQueue, StormOccurred, TickAdvanced
from simulation.autosave import AutoSaveService
from simulation.hazards import StormHazard
from simulation.ledger import ResourceStore
from simulation.rng import SeededRng
from simulation.ticks import TickService


# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")

def fail(label: str, detail: str = ""):
    global _failed
    _failed += 1
    msg = f"  [FAIL] {label}"
    if detail:
        msg += f" — {detail}"
    print(msg)

def check(cond: bool, label: str, detail: str = ""):
    if cond:
        ok(label)
    else:
        fail(label, detail)
        raise AssertionError(f"{label} {detail}".strip())


class FakeSave:
    """Records every snapshot handed to it; optionally blows up."""

    def __init__(self, explode: bool = False):
        self.explode = explode
        self.written: list = []

    def save(self, data) -> bool:
        if self.explode:
            raise OSError("disk on fire")
        self.written.append(data)
        return True


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 1:  TICK SERVICE
# ═══════════════════════════════════════════════════════════════════════

def test_tick_service_pacing():
    print("\n=== 1a: Pacing ===")
    ticks = TickService(1.0)
    check(ticks.advance(5.0) == 0, "1a-1: stopped service owes nothing")
    check(ticks.accumulator == 0.0, "1a-2: stopped service does not accumulate")

    ticks.set_running(True)
    check(ticks.advance(0.5) == 0, "1a-3: half an interval is not a tick")
    check(ticks.advance(0.6) == 1, "1a-4: crossing the interval yields one tick")
    check(abs(ticks.accumulator - 0.1) < 1e-9, "1a-5: remainder kept",
          f"acc={ticks.accumulator}")
    check(ticks.current_tick == 0, "1a-6: advance does not run ticks itself")

    ticks.reset_tick()
    check(ticks.advance(100.0) == 5, "1a-7: catch-up capped after a stall")
    check(ticks.advance(-1.0) == 0, "1a-8: negative elapsed ignored")


def test_tick_service_speed_and_manual():
    print("\n=== 1b: Speed + manual tick ===")
    ticks = TickService(1.0)
    ticks.set_running(True)
    ticks.set_speed(2.0)
    check(ticks.advance(1.0) == 2, "1b-1: 2x speed doubles due ticks")

    ticks.advance(0.25)
    ticks.set_speed(4.0)
    check(ticks.accumulator == 0.5, "1b-2: speed change keeps the accumulator")

    ticks.set_running(False)
    check(ticks.tick() == 1 and ticks.tick() == 2, "1b-3: manual tick works while stopped")
    check(ticks.accumulator == 0.5, "1b-4: manual tick leaves the accumulator")

    try:
        ticks.set_speed(-1.0)
    except ValueError:
        ok("1b-5: negative speed raises ValueError")
    else:
        check(False, "1b-5: negative speed raises ValueError")

    check(TickService(0.0).interval == 1.0, "1b-6: non-positive interval falls back to 1s")


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 2:  AUTOSAVE
# ═══════════════════════════════════════════════════════════════════════

def test_autosave_cadence():
    print("\n=== 2a: Cadence ===")
    save = FakeSave()
    counter = iter(range(100))
    auto = AutoSaveService()
    auto.initialize(save, lambda: next(counter), every_n=3)

    results = [auto.on_tick() for _ in range(7)]
    check(results == [False, False, True, False, False, True, False],
          "2a-1: saves on every third tick", f"{results}")
    check(save.written == [0, 1], "2a-2: a fresh snapshot per save")
    check(auto.ticks_since_save == 1, "2a-3: counter reset after a save")

    check(auto.force_save(), "2a-4: force_save writes immediately")
    check(auto.ticks_since_save == 1, "2a-5: force_save leaves the counter")
    check(auto.saves_written == 3, "2a-6: saves counted")

    auto.initialize(save, lambda: None, every_n=0)
    check(auto.every_n == 1, "2a-7: cadence clamped to at least 1")
    check(auto.on_tick(), "2a-8: cadence 1 saves every tick")


def test_autosave_failures_are_contained():
    print("\n=== 2b: Failures ===")
    auto = AutoSaveService()
    check(not auto.force_save(), "2b-1: uninitialised service saves nothing")

    auto.initialize(FakeSave(explode=True), lambda: "snapshot", every_n=1)
    check(auto.on_tick() is False, "2b-2: gateway error reported as False")

    def broken_collect():
        raise RuntimeError("collect failed")

    good = FakeSave()
    auto.initialize(good, broken_collect, every_n=1)
    check(auto.on_tick() is False and good.written == [],
          "2b-3: collect error reported as False")
    check(auto.on_tick() is False, "2b-4: later cycles still run")


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 3:  STORMS
# ═══════════════════════════════════════════════════════════════════════

def _storm_store() -> ResourceStore:
    store = ResourceStore()
    store.initialize((
        ResourceDefinition("resource.food", starting_amount=3.0, max_amount=100.0),
        ResourceDefinition("resource.wood", starting_amount=3.0, max_amount=100.0),
    ))
    return store


def test_storm_hazard():
    print("\n=== 3: StormHazard ===")
    store = _storm_store()
    calm = StormHazard(StormConfig(chance=0.0), SeededRng(1))
    check(all(calm.roll(store, t) is None for t in range(50)), "3-1: chance 0 never storms")

    storm = StormHazard(StormConfig(chance=1.0, min_loss=1.0, max_loss=5.0), SeededRng(9))
    hits = [storm.roll(store, t) for t in range(1, 61)]
    check(all(isinstance(h, StormOccurred) for h in hits), "3-2: chance 1 storms every tick")
    check([h.tick for h in hits] == list(range(1, 61)), "3-3: storm carries its tick")
    check(store.get("resource.food") == 0.0 and store.get("resource.wood") == 0.0,
          "3-4: repeated storms floor amounts at zero")
    check(all(h.loss >= 0.0 for h in hits), "3-5: reported loss never negative")

    a = StormHazard(StormConfig(chance=0.5), SeededRng(77))
    b = StormHazard(StormConfig(chance=0.5), SeededRng(77))
    sa, sb = _storm_store(), _storm_store()
    ra = [a.roll(sa, t) for t in range(30)]
    rb = [b.roll(sb, t) for t in range(30)]
    check(ra == rb, "3-6: same seed replays the same storms")


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 4:  EVENT QUEUE
# ═══════════════════════════════════════════════════════════════════════

def test_event_queue():
    print("\n=== 4: EventQueue ===")
    q = EventQueue(max_pending=3)
    for t in range(1, 6):
        q.emit(TickAdvanced(tick=t))
    check(q.pending_count() == 3, "4-1: queue bounded")
    check([e.tick for e in q.drain()] == [3, 4, 5], "4-2: oldest dropped, rest drained FIFO")
    check(q.pending_count() == 0, "4-3: nothing pending after drain")
    check(q.drain() == [], "4-4: drain empties the queue")
    check(q.stats() == {"TickAdvanced": 5}, "4-5: stats count every emit")


# ═══════════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [
        ("Pacing", test_tick_service_pacing),
        ("Speed", test_tick_service_speed_and_manual),
        ("Autosave cadence", test_autosave_cadence),
        ("Autosave failures", test_autosave_failures_are_contained),
        ("Storms", test_storm_hazard),
        ("Event queue", test_event_queue),
    ]
    for name, fn in sections:
        try:
            fn()
        except AssertionError:
            pass
        except Exception:
            _failed += 1
            print(f"\n  [CRASH] {name} — unhandled exception:")
            traceback.print_exc()

    print(f"\n{'=' * 60}")
    print(f"  Tick Tests: {_passed} passed, {_failed} failed")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
