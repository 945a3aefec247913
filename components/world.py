"""components.world — Generated island records.

``WorldData`` is the immutable generation record for one run.  The
live, depletable node list lives on ``IslandGrid`` instead (see
``simulation/island.py``), so these objects are never edited in place
once the generator returns them.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import IntEnum


class TerrainType(IntEnum):
    """Terrain cell classes.  Values are what the save file stores."""
    OCEAN = 0
    BEACH = 1
    CLEARING = 2
    FOREST = 3
    ROCKY = 4


@dataclass
class ResourceNode:
    """A depletable deposit of one resource type on the grid."""
    resource_id: str
    x: int
    y: int
    amount: float
    max_amount: float

    def copy(self) -> "ResourceNode":
        return replace(self)

    @property
    def empty(self) -> bool:
        return self.amount <= 0.0


@dataclass(frozen=True)
class WorldData:
    """Seeded island layout.

    ``terrain`` is flat and row-major: ``terrain[y * width + x]``.
    """
    seed: int
    width: int
    height: int
    spawn_x: int
    spawn_y: int
    terrain: tuple[TerrainType, ...] = ()
    nodes: tuple[ResourceNode, ...] = ()
    biome_id: str = "biome.tropical"

    def with_nodes(self, nodes) -> "WorldData":
        """Return a copy of this record carrying *nodes* (deep-copied)."""
        return replace(self, nodes=tuple(n.copy() for n in nodes))


@dataclass(frozen=True)
class IslandConfig:
    """Generation parameters (the ``[island]`` table of run.toml)."""
    width: int = 20
    height: int = 20
    resource_density: float = 0.15
