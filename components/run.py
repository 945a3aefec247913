"""components.run — Persistent run state and the game state enum."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from components.world import WorldData


class GameState(Enum):
    BOOT = "boot"
    RUNNING = "running"
    PAUSE = "pause"
    WON = "won"
    GAME_OVER = "game_over"
    EXIT = "exit"


@dataclass
class PlayerData:
    # Ids are "category.name" strings, stable across schema versions
    player_id: str = "player.default"
    resources: dict[str, float] = field(default_factory=dict)
    # 0..1, reaching 1 triggers the Won state
    escape_progress: float = 0.0
    # Purchased upgrade ids, in purchase order
    upgrades: list[str] = field(default_factory=list)


@dataclass
class RunData:
    """The unit of persistence."""
    tick: int
    player: PlayerData
    world: WorldData


@dataclass
class SaveData:
    run: RunData
    schema_version: int = 1
