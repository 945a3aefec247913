"""simulation/worldgen.py — Seeded island generator.

Terrain comes from radial distance to the grid centre, warped by
Perlin noise so the coastline isn't a perfect circle.  Inside the
beach ring a second read of the same noise picks rocky / forest /
clearing.  Resource nodes are then scattered over the terrain from an
independent RNG stream.

    gen = IslandGenerator(IslandConfig(width=20, height=20))
    world = gen.generate(seed=42)

Same seed + same config ⇒ identical terrain and identical nodes.
"""

from __future__ import annotations
import math

from noise import pnoise2

from components import IslandConfig, ResourceNode, TerrainType, WorldData
from core.constants import (
    BIOME_TROPICAL, NOISE_FREQUENCY, NOISE_DISTANCE_WARP,
    OCEAN_THRESHOLD, BEACH_THRESHOLD, ROCKY_NOISE, FOREST_NOISE,
    NODE_SEED_SALT, NODE_MIN_START, NODE_MAX_AMOUNT,
    RESOURCE_FOOD, RESOURCE_WOOD, RESOURCE_SCRAP,
)
from simulation.rng import SeededRng


TERRAIN_RESOURCE: dict[TerrainType, str] = {
    TerrainType.FOREST: RESOURCE_WOOD,
    TerrainType.BEACH: RESOURCE_FOOD,
    TerrainType.ROCKY: RESOURCE_SCRAP,
}


def perlin01(x: float, y: float) -> float:
    """2D Perlin noise remapped from roughly [-0.7, 0.7] into [0, 1]."""
    return min(1.0, max(0.0, 0.5 + pnoise2(x, y)))


def noise_offsets(seed: int) -> tuple[float, float]:
    """Low- and high-order slices of the seed, so nearby seeds still
    shift the noise field visibly."""
    return (seed % 1000) / 10.0, (seed // 1000 % 1000) / 10.0


def classify(effective_dist: float, noise_val: float) -> TerrainType:
    if effective_dist > OCEAN_THRESHOLD:
        return TerrainType.OCEAN
    if effective_dist > BEACH_THRESHOLD:
        return TerrainType.BEACH
    if noise_val > ROCKY_NOISE:
        return TerrainType.ROCKY
    if noise_val > FOREST_NOISE:
        return TerrainType.FOREST
    return TerrainType.CLEARING


class IslandGenerator:
    """Builds ``WorldData`` from a seed and an ``IslandConfig``."""

    def __init__(self, config: IslandConfig) -> None:
        if config.width <= 0 or config.height <= 0:
            raise ValueError(f"island size must be positive, got "
                             f"{config.width}x{config.height}")
        if not 0.0 <= config.resource_density <= 1.0:
            raise ValueError(f"resource_density must be in [0, 1], got "
                             f"{config.resource_density}")
        self.config = config

    def generate(self, seed: int) -> WorldData:
        w = self.config.width
        h = self.config.height
        terrain = self._terrain(seed, w, h)
        nodes = self._place_nodes(seed, terrain, w, h)

        world = WorldData(
            seed=seed,
            width=w,
            height=h,
            spawn_x=w // 2,
            spawn_y=h // 2,
            terrain=tuple(terrain),
            nodes=tuple(nodes),
            biome_id=BIOME_TROPICAL,
        )
        print(f"[WORLDGEN] Island generated: seed={seed}, size={w}x{h}, "
              f"nodes={len(nodes)}")
        return world

    # ── Terrain ──────────────────────────────────────────────────────

    def _terrain(self, seed: int, w: int, h: int) -> list[TerrainType]:
        off_x, off_y = noise_offsets(seed)
        cx = w * 0.5
        cy = h * 0.5
        max_dist = min(cx, cy)

        cells: list[TerrainType] = []
        for y in range(h):
            for x in range(w):
                dx = (x - cx) / max_dist
                dy = (y - cy) / max_dist
                dist = math.sqrt(dx * dx + dy * dy)
                n = perlin01(x * NOISE_FREQUENCY + off_x,
                             y * NOISE_FREQUENCY + off_y)
                effective = dist - (n - 0.5) * NOISE_DISTANCE_WARP
                cells.append(classify(effective, n))
        return cells

    # ── Nodes ────────────────────────────────────────────────────────

    def _place_nodes(self, seed: int, terrain: list[TerrainType],
                     w: int, h: int) -> list[ResourceNode]:
        # Independent stream so terrain tweaks don't reshuffle nodes
        rng = SeededRng(seed ^ NODE_SEED_SALT)
        density = self.config.resource_density
        nodes: list[ResourceNode] = []
        for y in range(h):
            for x in range(w):
                resource_id = TERRAIN_RESOURCE.get(terrain[y * w + x])
                if resource_id is None:
                    continue
                if not rng.next_bool(density):
                    continue
                nodes.append(ResourceNode(
                    resource_id=resource_id,
                    x=x,
                    y=y,
                    amount=rng.next_float(NODE_MIN_START, NODE_MAX_AMOUNT),
                    max_amount=NODE_MAX_AMOUNT,
                ))
        return nodes
