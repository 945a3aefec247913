"""
core/data.py — TOML → definition tables

Reads the data files and builds the immutable tables the simulation
runs on.  Nothing here mutates a definition after it is built.

    data/resources.toml   one table per resource   → ResourceDefinition
    data/upgrades.toml    one table per upgrade    → UpgradeDefinition
    data/run.toml         run / island / tick knobs → RunConfig

Usage:
    game_data = load_game_data("data")
    controller = RunController(game_data, JsonSave(game_data.config.save_path))

Configuration errors (empty tables, duplicate ids, unknown cost or
effect targets, bad sizes) raise ``ValueError`` immediately; they are
not recoverable mid-run.
"""

from __future__ import annotations
try:
    import tomllib
except ModuleNotFoundError:  # Python < 3.11
    import tomli as tomllib
from dataclasses import fields
from pathlib import Path

from components import (
    ResourceDefinition, UpgradeDefinition, UpgradeEffect, EffectKind,
    RunConfig, TickConfig, StormConfig, EscapeConfig, IslandConfig, GameData,
)
from core.constants import RESOURCE_FOOD, RESOURCE_WOOD, RESOURCE_SCRAP


# effect_type string → (kind, fixed target or None to read effect_target)
EFFECT_TYPES: dict[str, tuple[EffectKind, str | None]] = {
    "gather_multiplier": (EffectKind.GATHER_MULTIPLIER, None),
    "food_income": (EffectKind.INCOME, RESOURCE_FOOD),
    "wood_income": (EffectKind.INCOME, RESOURCE_WOOD),
    "scrap_income": (EffectKind.INCOME, RESOURCE_SCRAP),
}


def read_toml(path: str | Path) -> dict:
    path = Path(path)
    with open(path, "rb") as f:
        return tomllib.load(f)


# ── Resources ────────────────────────────────────────────────────────

def parse_resources(data: dict) -> tuple[ResourceDefinition, ...]:
    """Build resource definitions from a parsed resources.toml.

    Each top-level table is one resource.  The table key is used as the
    id unless the table sets ``resource_id`` itself::

        ["resource.wood"]
        display_name = "Wood"
        starting_amount = 5
    """
    defs: list[ResourceDefinition] = []
    seen: set[str] = set()
    for key, section in data.items():
        if not isinstance(section, dict):
            continue
        kwargs = _filter_fields(ResourceDefinition, section)
        kwargs.setdefault("resource_id", key)
        rdef = ResourceDefinition(**kwargs)
        if rdef.resource_id in seen:
            raise ValueError(f"duplicate resource id '{rdef.resource_id}'")
        if rdef.max_amount < 0:
            raise ValueError(f"{rdef.resource_id}: max_amount must be >= 0")
        seen.add(rdef.resource_id)
        defs.append(rdef)
    if not defs:
        raise ValueError("resource definition table is empty")
    return tuple(defs)


# ── Upgrades ─────────────────────────────────────────────────────────

def resolve_effect(upgrade_id: str, effect_type: str, value: float,
                   target: str, resource_ids: set[str]) -> UpgradeEffect:
    """Turn a raw ``effect_type`` string into a closed ``UpgradeEffect``.

    An empty type is a cosmetic upgrade.  An unrecognised type is
    logged and treated the same way, so the upgrade can still be bought.
    """
    if not effect_type:
        return UpgradeEffect.none()
    entry = EFFECT_TYPES.get(effect_type)
    if entry is None:
        print(f"[CONFIG] WARNING: unknown effect type '{effect_type}' "
              f"on upgrade {upgrade_id} — treated as no effect")
        return UpgradeEffect.none()
    kind, fixed_target = entry
    resolved = fixed_target or target
    if resolved not in resource_ids:
        raise ValueError(f"{upgrade_id}: effect target '{resolved}' "
                         f"is not a defined resource")
    return UpgradeEffect(kind=kind, target_resource_id=resolved,
                         value=float(value))


def parse_upgrades(data: dict,
                   resource_ids: set[str]) -> tuple[UpgradeDefinition, ...]:
    """Build upgrade definitions from a parsed upgrades.toml.

        ["upgrade.axe"]
        display_name = "Stone Axe"
        effect_type = "gather_multiplier"
        effect_value = 2.0
        effect_target = "resource.wood"

        ["upgrade.axe".cost]
        "resource.wood" = 10
    """
    defs: list[UpgradeDefinition] = []
    seen: set[str] = set()
    for key, section in data.items():
        if not isinstance(section, dict):
            continue
        upgrade_id = section.get("upgrade_id", key)
        if upgrade_id in seen:
            raise ValueError(f"duplicate upgrade id '{upgrade_id}'")
        cost = {str(k): float(v) for k, v in section.get("cost", {}).items()}
        for rid, amount in cost.items():
            if rid not in resource_ids:
                raise ValueError(f"{upgrade_id}: cost uses unknown resource '{rid}'")
            if amount < 0:
                raise ValueError(f"{upgrade_id}: cost for '{rid}' is negative")
        effect_type = str(section.get("effect_type", ""))
        effect = resolve_effect(
            upgrade_id, effect_type,
            section.get("effect_value", 0.0),
            str(section.get("effect_target", "")),
            resource_ids,
        )
        defs.append(UpgradeDefinition(
            upgrade_id=upgrade_id,
            display_name=section.get("display_name", "Unknown Upgrade"),
            description=section.get("description", ""),
            cost=cost,
            effect=effect,
            effect_type=effect_type,
        ))
        seen.add(upgrade_id)
    return tuple(defs)


# ── Run config ───────────────────────────────────────────────────────

def parse_run_config(data: dict, base_dir: Path | None = None) -> RunConfig:
    """Build a ``RunConfig`` from a parsed run.toml.  Missing tables keep
    their defaults."""
    island = IslandConfig(**_filter_fields(IslandConfig, data.get("island", {})))
    if island.width <= 0 or island.height <= 0:
        raise ValueError(f"island size must be positive, got "
                         f"{island.width}x{island.height}")
    if not 0.0 <= island.resource_density <= 1.0:
        raise ValueError("island.resource_density must be in [0, 1]")

    tick_raw = dict(data.get("tick", {}))
    if "speed_multipliers" in tick_raw:
        tick_raw["speed_multipliers"] = tuple(float(m) for m in tick_raw["speed_multipliers"])
    tick = TickConfig(**_filter_fields(TickConfig, tick_raw))
    if not tick.speed_multipliers:
        raise ValueError("tick.speed_multipliers must not be empty")

    storm = StormConfig(**_filter_fields(StormConfig, data.get("storm", {})))
    if storm.min_loss > storm.max_loss:
        raise ValueError("storm.min_loss must not exceed storm.max_loss")

    escape_raw = data.get("escape", {})
    escape_kwargs = _filter_fields(EscapeConfig, escape_raw)
    if "cost" in escape_kwargs:
        escape_kwargs["cost"] = {str(k): float(v) for k, v in escape_kwargs["cost"].items()}
    escape = EscapeConfig(**escape_kwargs)

    kwargs: dict = dict(island=island, tick=tick, storm=storm, escape=escape)
    if "start" in data:
        kwargs["starting_amounts"] = {str(k): float(v) for k, v in data["start"].items()}
    work = data.get("work", {})
    if "gather_radius" in work:
        kwargs["gather_radius"] = float(work["gather_radius"])
    save = data.get("save", {})
    if "path" in save:
        path = Path(save["path"])
        if base_dir is not None and not path.is_absolute():
            path = base_dir / path
        kwargs["save_path"] = path
    if "seed" in data.get("run", {}):
        kwargs["seed"] = int(data["run"]["seed"])
    return RunConfig(**kwargs)


def load_game_data(data_dir: str | Path = "data",
                   base_dir: str | Path | None = None) -> GameData:
    """Load resources.toml, upgrades.toml and run.toml from *data_dir*.

    Relative save paths in run.toml resolve against *base_dir* (defaults
    to the current working directory).
    """
    data_dir = Path(data_dir)
    resources = parse_resources(read_toml(data_dir / "resources.toml"))
    resource_ids = {d.resource_id for d in resources}

    upgrades_path = data_dir / "upgrades.toml"
    upgrades = (parse_upgrades(read_toml(upgrades_path), resource_ids)
                if upgrades_path.exists() else ())

    run_path = data_dir / "run.toml"
    raw_run = read_toml(run_path) if run_path.exists() else {}
    config = parse_run_config(raw_run, Path(base_dir) if base_dir else None)
    for rid in config.escape.cost:
        if rid not in resource_ids:
            raise ValueError(f"escape cost uses unknown resource '{rid}'")

    print(f"[CONFIG] Loaded {len(resources)} resources, {len(upgrades)} "
          f"upgrades from {data_dir}")
    return GameData(config=config, resources=resources, upgrades=upgrades)


def _filter_fields(cls: type, kwargs: dict) -> dict:
    """Keep only keys that are dataclass fields of *cls*."""
    valid = {f.name for f in fields(cls)}
    return {k: v for k, v in kwargs.items() if k in valid}
