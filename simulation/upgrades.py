"""simulation/upgrades.py — Upgrade purchases and effects.

``UpgradeManager.try_buy`` is all-or-nothing: every cost component is
checked before anything is spent, so a failed purchase never leaves
the ledger partly charged.

On load, ``initialize(..., already_owned=ids)`` re-applies each owned
upgrade's effect in stored order without charging for it again.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Iterable

from components import EffectKind, UpgradeDefinition

if TYPE_CHECKING:
    from simulation.ledger import ResourceStore
    from simulation.work import WorkAssignment


class UpgradeManager:

    def __init__(self) -> None:
        self._defs: dict[str, UpgradeDefinition] = {}
        self._purchased: list[str] = []
        self._store: ResourceStore | None = None
        self._work: WorkAssignment | None = None

    # ── Setup ────────────────────────────────────────────────────────

    def initialize(self, store: "ResourceStore", work: "WorkAssignment",
                   upgrades: Iterable[UpgradeDefinition],
                   already_owned: Iterable[str] | None = None) -> None:
        self._store = store
        self._work = work
        self._defs = {u.upgrade_id: u for u in upgrades}
        self._purchased = []
        for upgrade_id in already_owned or ():
            self._restore(upgrade_id)

    # ── Queries ──────────────────────────────────────────────────────

    @property
    def purchased_count(self) -> int:
        return len(self._purchased)

    @property
    def purchased_ids(self) -> list[str]:
        return list(self._purchased)

    @property
    def definitions(self) -> list[UpgradeDefinition]:
        return list(self._defs.values())

    def get(self, upgrade_id: str) -> UpgradeDefinition | None:
        return self._defs.get(upgrade_id)

    def is_owned(self, upgrade_id: str) -> bool:
        return upgrade_id in self._purchased

    def can_buy(self, upgrade_id: str) -> bool:
        udef = self._defs.get(upgrade_id)
        if udef is None or self.is_owned(upgrade_id) or self._store is None:
            return False
        return self._store.can_afford(udef.cost)

    # ── Purchase ─────────────────────────────────────────────────────

    def try_buy(self, upgrade_id: str) -> bool:
        if self._store is None:
            return False
        if self.is_owned(upgrade_id):
            print(f"[SIM] Upgrade already owned: {upgrade_id}")
            return False
        udef = self._defs.get(upgrade_id)
        if udef is None:
            print(f"[SIM] WARNING: unknown upgrade: {upgrade_id}")
            return False

        # Check every component first so a shortfall spends nothing
        if not self._store.can_afford(udef.cost):
            return False
        for rid, amount in udef.cost_items():
            self._store.try_spend(rid, amount)

        self._apply(udef)
        self._purchased.append(upgrade_id)
        print(f"[SIM] Upgrade purchased: {upgrade_id}")
        return True

    # ── Internals ────────────────────────────────────────────────────

    def _restore(self, upgrade_id: str) -> None:
        udef = self._defs.get(upgrade_id)
        if udef is None:
            print(f"[SIM] WARNING: saved upgrade '{upgrade_id}' no longer exists — skipped")
            return
        if upgrade_id in self._purchased:
            return
        self._apply(udef)
        self._purchased.append(upgrade_id)

    def _apply(self, udef: UpgradeDefinition) -> None:
        effect = udef.effect
        if effect.kind is EffectKind.GATHER_MULTIPLIER:
            self._store.set_gather_multiplier(effect.target_resource_id, effect.value)
        elif effect.kind is EffectKind.INCOME:
            self._store.add_income_bonus(effect.target_resource_id, effect.value)
        # EffectKind.NONE: cosmetic, nothing to apply
