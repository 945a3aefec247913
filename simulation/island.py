"""simulation/island.py — Runtime view over a generated island.

Terrain is shared read-only with the ``WorldData`` record.  Nodes are
deep-copied on construction: harvesting only ever touches the live
copy, and ``export_nodes()`` hands out another copy when a save needs
to persist the current amounts.
"""

from __future__ import annotations

from components import ResourceNode, TerrainType, WorldData


class IslandGrid:

    def __init__(self, world: WorldData) -> None:
        self.width = world.width
        self.height = world.height
        self.spawn_x = world.spawn_x
        self.spawn_y = world.spawn_y
        self._terrain = world.terrain
        self.nodes: list[ResourceNode] = [n.copy() for n in world.nodes]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_terrain(self, x: int, y: int) -> TerrainType:
        if not self.in_bounds(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")
        return TerrainType(self._terrain[y * self.width + x])

    def export_nodes(self) -> list[ResourceNode]:
        return [n.copy() for n in self.nodes]

    def remaining(self, resource_id: str) -> float:
        """Total amount left in live nodes of one resource type."""
        return sum(n.amount for n in self.nodes if n.resource_id == resource_id)

    def __repr__(self) -> str:
        return f"IslandGrid({self.width}x{self.height}, nodes={len(self.nodes)})"
