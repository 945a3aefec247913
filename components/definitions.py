"""components.definitions — Immutable resource and upgrade tables.

Built once by ``core.data`` at bootstrap and shared read-only by the
ledger, work assignment and upgrade manager.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class ResourceDefinition:
    resource_id: str
    display_name: str = "Unknown"
    starting_amount: float = 0.0
    max_amount: float = 999.0
    base_income_per_tick: float = 0.0
    decay_per_tick: float = 0.0
    # Gathered per tick from a node, before multipliers
    gather_rate_per_tick: float = 1.0
    # Informational; worldgen caps nodes at NODE_MAX_AMOUNT
    node_max_amount: float = 50.0


class EffectKind(Enum):
    GATHER_MULTIPLIER = "gather_multiplier"
    INCOME = "income"
    NONE = "none"


@dataclass(frozen=True)
class UpgradeEffect:
    """Resolved upgrade effect.

    ``GATHER_MULTIPLIER`` sets the target's gather multiplier to
    ``value``; ``INCOME`` adds ``value`` to the target's per-tick income;
    ``NONE`` is a narrative/cosmetic upgrade with no mechanical effect.
    """
    kind: EffectKind = EffectKind.NONE
    target_resource_id: str = ""
    value: float = 0.0

    @classmethod
    def none(cls) -> "UpgradeEffect":
        return cls()


@dataclass(frozen=True)
class UpgradeDefinition:
    upgrade_id: str
    display_name: str = "Unknown Upgrade"
    description: str = ""
    # resource_id -> amount (each >= 0)
    cost: Mapping[str, float] = field(default_factory=dict)
    effect: UpgradeEffect = field(default_factory=UpgradeEffect)
    # Raw effect_type string as written in the data file
    effect_type: str = ""

    def __post_init__(self):
        object.__setattr__(self, "cost", MappingProxyType(dict(self.cost)))

    def cost_items(self) -> list[tuple[str, float]]:
        """Nonzero cost components in table order."""
        return [(rid, amt) for rid, amt in self.cost.items() if amt > 0]
