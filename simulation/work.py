"""simulation/work.py — Castaway gathering.

Each tick the castaway works the nearest non-empty node of every
resource type within ``gather_radius`` cells of the spawn point.
Linear scan; node counts are small.  Ties go to whichever node comes
first in the node list.

Depleted nodes stay in the list at 0 and never regenerate.
"""

from __future__ import annotations
import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from simulation.island import IslandGrid
    from simulation.ledger import ResourceStore


class WorkAssignment:

    def __init__(self, gather_radius: float = 8.0) -> None:
        self.gather_radius = gather_radius
        self._grid: IslandGrid | None = None
        self._store: ResourceStore | None = None
        # resource_id -> node index worked on the last tick
        self.last_targets: dict[str, int] = {}

    def initialize(self, grid: "IslandGrid", store: "ResourceStore") -> None:
        self._grid = grid
        self._store = store
        self.last_targets = {}

    def nearest_nodes(self) -> dict[str, int]:
        """Index of the nearest harvestable node per resource id."""
        if self._grid is None:
            return {}
        sx = self._grid.spawn_x
        sy = self._grid.spawn_y
        best: dict[str, tuple[float, int]] = {}
        for i, node in enumerate(self._grid.nodes):
            if node.empty:
                continue
            dist = math.hypot(node.x - sx, node.y - sy)
            if dist > self.gather_radius:
                continue
            current = best.get(node.resource_id)
            if current is None or dist < current[0]:
                best[node.resource_id] = (dist, i)
        return {rid: i for rid, (_, i) in best.items()}

    def on_tick(self) -> dict[str, float]:
        """Harvest one tick's yield.  Returns {resource_id: harvested}."""
        if self._grid is None or self._store is None:
            return {}
        harvested: dict[str, float] = {}
        self.last_targets = self.nearest_nodes()
        for rid, idx in self.last_targets.items():
            node = self._grid.nodes[idx]
            yield_ = self._store.get_base_gather_rate(rid) * self._store.get_gather_multiplier(rid)
            actual = min(yield_, node.amount)
            node.amount -= actual
            self._store.add(rid, actual)
            harvested[rid] = actual
        return harvested
