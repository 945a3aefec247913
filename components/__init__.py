"""components — Plain data records, organised by domain.

Submodules
----------
world        TerrainType, ResourceNode, WorldData, IslandConfig
definitions  ResourceDefinition, UpgradeDefinition, UpgradeEffect, EffectKind
config       RunConfig, TickConfig, StormConfig, EscapeConfig, GameData
run          GameState, PlayerData, RunData, SaveData

All public names are re-exported here so callers can write
``from components import WorldData``.
"""

# ── World ────────────────────────────────────────────────────────────
from components.world import TerrainType, ResourceNode, WorldData, IslandConfig

# ── Definitions ──────────────────────────────────────────────────────
from components.definitions import (
    ResourceDefinition, UpgradeDefinition, UpgradeEffect, EffectKind,
)

# ── Configuration ────────────────────────────────────────────────────
from components.config import (
    RunConfig, TickConfig, StormConfig, EscapeConfig, GameData,
)

# ── Run state ────────────────────────────────────────────────────────
from components.run import GameState, PlayerData, RunData, SaveData

__all__ = [
    # world
    "TerrainType", "ResourceNode", "WorldData", "IslandConfig",
    # definitions
    "ResourceDefinition", "UpgradeDefinition", "UpgradeEffect", "EffectKind",
    # config
    "RunConfig", "TickConfig", "StormConfig", "EscapeConfig", "GameData",
    # run
    "GameState", "PlayerData", "RunData", "SaveData",
]
