"""components.config — Run configuration (data/run.toml)."""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from components.definitions import ResourceDefinition, UpgradeDefinition
from components.world import IslandConfig


@dataclass(frozen=True)
class TickConfig:
    interval_seconds: float = 1.0
    autosave_every_n_ticks: int = 10
    speed_multipliers: tuple[float, ...] = (1.0, 2.0, 4.0)


@dataclass(frozen=True)
class StormConfig:
    """Per-tick storm hazard.  ``chance`` of 0 disables storms."""
    chance: float = 0.02
    min_loss: float = 1.0
    max_loss: float = 5.0


@dataclass(frozen=True)
class EscapeConfig:
    cost: Mapping[str, float] = field(default_factory=lambda: {
        "resource.wood": 20.0,
        "resource.food": 10.0,
        "resource.scrap": 5.0,
    })
    progress_per_attempt: float = 0.1

    def __post_init__(self):
        object.__setattr__(self, "cost", MappingProxyType(dict(self.cost)))


@dataclass(frozen=True)
class RunConfig:
    island: IslandConfig = field(default_factory=IslandConfig)
    tick: TickConfig = field(default_factory=TickConfig)
    # resource_id -> starting amount for a new run
    starting_amounts: Mapping[str, float] = field(default_factory=lambda: {
        "resource.food": 10.0,
        "resource.wood": 5.0,
        "resource.scrap": 0.0,
    })
    gather_radius: float = 8.0
    storm: StormConfig = field(default_factory=StormConfig)
    escape: EscapeConfig = field(default_factory=EscapeConfig)
    save_path: Path = Path("saves") / "save.json"
    # Fixed seed for new runs; None means derive one from the clock
    seed: int | None = None

    def __post_init__(self):
        object.__setattr__(self, "starting_amounts",
                           MappingProxyType(dict(self.starting_amounts)))


@dataclass(frozen=True)
class GameData:
    """Everything loaded from data/ — passed to RunController."""
    config: RunConfig
    resources: tuple[ResourceDefinition, ...]
    upgrades: tuple[UpgradeDefinition, ...] = ()
