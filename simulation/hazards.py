"""simulation/hazards.py — Global per-tick hazards.

A storm rolls once per tick.  When it hits, one defined resource
(picked uniformly) loses a random amount, floored at zero.  Runs after
income and gathering, so it always sees the post-income ledger.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from components import StormConfig
from core.events import StormOccurred
from simulation.rng import SeededRng

if TYPE_CHECKING:
    from simulation.ledger import ResourceStore


class StormHazard:

    def __init__(self, config: StormConfig, rng: SeededRng) -> None:
        self.config = config
        self.rng = rng

    def roll(self, store: "ResourceStore", tick: int) -> StormOccurred | None:
        if self.config.chance <= 0 or not self.rng.next_bool(self.config.chance):
            return None
        ids = store.resource_ids
        resource_id = ids[self.rng.next_int(0, len(ids))]
        wanted = self.rng.next_float(self.config.min_loss, self.config.max_loss)
        lost = store.lose(resource_id, wanted)
        print(f"[HAZARD] Storm at tick {tick}: -{lost:.1f} {resource_id}")
        return StormOccurred(tick=tick, resource_id=resource_id, loss=lost)
