"""simulation/ledger.py — Live resource amounts.

``ResourceStore`` tracks, per resource id:

    amount        clamped to [0, max_amount] after every operation
    income bonus  additive, from upgrades
    gather mult   multiplicative, from upgrades (default 1.0)

Each tick ``on_tick()`` applies ``base_income + bonus - decay``.
``try_spend()`` is the only spend path and is all-or-nothing.

Unknown ids are not errors: reads return 0 / defaults, writes are
no-ops, and the first miss per id is logged as a warning.
"""

from __future__ import annotations
from typing import Iterable, Mapping

from components import ResourceDefinition


class ResourceStore:

    def __init__(self) -> None:
        self._defs: dict[str, ResourceDefinition] = {}
        self._amounts: dict[str, float] = {}
        self._income_bonus: dict[str, float] = {}
        self._gather_mult: dict[str, float] = {}
        self._warned: set[str] = set()

    # ── Initialisation ───────────────────────────────────────────────

    def initialize(self, defs: Iterable[ResourceDefinition],
                   initial_amounts: Mapping[str, float] | None = None) -> None:
        defs = tuple(defs)
        if not defs:
            raise ValueError("ResourceStore needs at least one resource definition")
        self._defs = {d.resource_id: d for d in defs}
        self._amounts.clear()
        self._income_bonus.clear()
        self._gather_mult.clear()
        self._warned.clear()

        for d in defs:
            start = d.starting_amount
            if initial_amounts is not None and d.resource_id in initial_amounts:
                start = initial_amounts[d.resource_id]
            self._amounts[d.resource_id] = _clamp(float(start), 0.0, d.max_amount)
            self._income_bonus[d.resource_id] = 0.0
            self._gather_mult[d.resource_id] = 1.0

    @property
    def resource_ids(self) -> list[str]:
        return list(self._defs)

    def definition(self, resource_id: str) -> ResourceDefinition | None:
        return self._defs.get(resource_id)

    # ── Tick ─────────────────────────────────────────────────────────

    def on_tick(self) -> None:
        for rid, d in self._defs.items():
            delta = d.base_income_per_tick + self._income_bonus[rid] - d.decay_per_tick
            self._amounts[rid] = _clamp(self._amounts[rid] + delta, 0.0, d.max_amount)

    # ── Amounts ──────────────────────────────────────────────────────

    def get(self, resource_id: str) -> float:
        return self._amounts.get(resource_id, 0.0)

    def get_max(self, resource_id: str) -> float:
        d = self._defs.get(resource_id)
        return d.max_amount if d else 0.0

    def add(self, resource_id: str, amount: float) -> None:
        if not self._known(resource_id):
            return
        d = self._defs[resource_id]
        self._amounts[resource_id] = _clamp(self._amounts[resource_id] + amount,
                                            0.0, d.max_amount)

    def lose(self, resource_id: str, amount: float) -> float:
        """Remove up to *amount*, stopping at zero.  Returns what was lost."""
        if not self._known(resource_id) or amount <= 0:
            return 0.0
        actual = min(amount, self._amounts[resource_id])
        self._amounts[resource_id] -= actual
        return actual

    def try_spend(self, resource_id: str, amount: float) -> bool:
        if not self._known(resource_id):
            return False
        if amount < 0 or self._amounts[resource_id] < amount:
            return False
        self._amounts[resource_id] -= amount
        return True

    def can_afford(self, cost: Mapping[str, float]) -> bool:
        """True when every nonzero component of *cost* is covered."""
        for rid, amount in cost.items():
            if amount <= 0:
                continue
            if not self._known(rid) or self._amounts[rid] < amount:
                return False
        return True

    def snapshot(self) -> dict[str, float]:
        """Current amounts, for flushing into ``PlayerData``."""
        return dict(self._amounts)

    # ── Upgrade hooks ────────────────────────────────────────────────

    def add_income_bonus(self, resource_id: str, bonus: float) -> None:
        if self._known(resource_id):
            self._income_bonus[resource_id] += bonus

    def get_income_bonus(self, resource_id: str) -> float:
        return self._income_bonus.get(resource_id, 0.0)

    def set_gather_multiplier(self, resource_id: str, mult: float) -> None:
        if self._known(resource_id):
            self._gather_mult[resource_id] = mult

    def get_gather_multiplier(self, resource_id: str) -> float:
        return self._gather_mult.get(resource_id, 1.0)

    def get_base_gather_rate(self, resource_id: str) -> float:
        d = self._defs.get(resource_id)
        return d.gather_rate_per_tick if d else 1.0

    # ── Internals ────────────────────────────────────────────────────

    def _known(self, resource_id: str) -> bool:
        if resource_id in self._defs:
            return True
        if resource_id not in self._warned:
            self._warned.add(resource_id)
            print(f"[SIM] WARNING: unknown resource id '{resource_id}' ignored")
        return False

    def __repr__(self) -> str:
        parts = ", ".join(f"{k}={v:.1f}" for k, v in self._amounts.items())
        return f"ResourceStore({parts})"


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(value, hi))
