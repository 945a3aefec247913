"""core/constants.py — Shared constants used across the codebase.

Centralises magic numbers so there's exactly one place to change them.

Units
-----
All distances are measured in **grid cells** (integer coordinates,
flat Euclidean metric).  Game time is measured in **ticks**; real time
in seconds.  ``TickConfig.interval_seconds`` converts between the two
at 1× speed.

Ids
---
Resources, upgrades, biomes and the player use ``"category.name"``
string ids so they stay stable across schema versions.
"""

# ── Persistence ─────────────────────────────────────────────────────
SCHEMA_VERSION = 1
DEFAULT_SAVE_NAME = "save.json"

# ── Resource ids ────────────────────────────────────────────────────
RESOURCE_FOOD = "resource.food"
RESOURCE_WOOD = "resource.wood"
RESOURCE_SCRAP = "resource.scrap"

BIOME_TROPICAL = "biome.tropical"

# ── World generation ────────────────────────────────────────────────
NOISE_FREQUENCY = 0.3
# Scale of the noise perturbation on radial distance
NOISE_DISTANCE_WARP = 0.3
OCEAN_THRESHOLD = 1.0
BEACH_THRESHOLD = 0.75
ROCKY_NOISE = 0.65
FOREST_NOISE = 0.40

# Node placement uses its own stream: seed ^ NODE_SEED_SALT
NODE_SEED_SALT = 0xBEEF
NODE_MIN_START = 20.0
NODE_MAX_AMOUNT = 50.0

# Storm hazard stream: seed ^ STORM_SEED_SALT ^ tick
STORM_SEED_SALT = 0x5707

# ── Tick scheduler ──────────────────────────────────────────────────
# Accumulator is capped at this many intervals after a long stall
MAX_CATCHUP_TICKS = 5

# ── Render (debug view only) ────────────────────────────────────────
CELL_SIZE = 24

# Terrain palette: TerrainType value → colour
TERRAIN_COLORS = {
    0: (30, 80, 180),      # ocean
    1: (230, 210, 130),    # beach
    2: (150, 200, 100),    # clearing
    3: (34, 120, 34),      # forest
    4: (120, 100, 80),     # rocky
}
SPAWN_COLOR = (255, 255, 0)
NODE_COLORS = {
    RESOURCE_WOOD: (140, 90, 40),
    RESOURCE_FOOD: (255, 60, 60),
    RESOURCE_SCRAP: (200, 200, 210),
}
