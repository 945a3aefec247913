"""core/save.py — Run persistence (single JSON save slot).

The save file holds one document::

    {
      "schema_version": 1,
      "run": {
        "tick": 120,
        "player": {"player_id", "resources", "escape_progress", "upgrades"},
        "world":  {"seed", "biome_id", "width", "height",
                   "spawn_x", "spawn_y", "terrain": [...], "nodes": [...]}
      }
    }

Terrain is stored as the flat row-major list of ``TerrainType`` ints.
Nodes are the live amounts at the moment of saving (flushed by the
controller), so a reload continues from the same depletion state.

Nothing in here raises to the caller:
  - ``save()`` returns False on I/O failure; the run continues unsaved.
    The document is written to a sibling ``.tmp`` file and swapped in,
    so the previous save survives a failed write.
  - ``load()`` returns None for a missing, empty, unparsable or
    structurally invalid file.  A document without world terrain
    predates the world-generation schema and counts as invalid.
"""

from __future__ import annotations
import json
import math
import os
from pathlib import Path
from typing import Any

from components import (
    PlayerData, ResourceNode, RunData, SaveData, TerrainType, WorldData,
)
from core.constants import SCHEMA_VERSION, DEFAULT_SAVE_NAME


SAVES_DIR = Path("saves")


class JsonSave:
    """Single-slot JSON save at a fixed path."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else SAVES_DIR / DEFAULT_SAVE_NAME

    def save(self, data: SaveData) -> bool:
        # Written beside the slot, then swapped in, so a failed write
        # leaves the previous save intact
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            text = json.dumps(save_to_dict(data), indent=2)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp, self.path)
        except (OSError, TypeError, ValueError) as ex:
            print(f"[SAVE] Save failed: {ex}")
            _discard(tmp)
            return False
        print(f"[SAVE] Saved tick {data.run.tick} to {self.path}")
        return True

    def load(self) -> SaveData | None:
        if not self.has_save():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as ex:
            print(f"[SAVE] Load failed ({ex}) — starting fresh.")
            return None
        if not text.strip():
            print("[SAVE] WARNING: save file was empty — starting fresh.")
            return None

        try:
            doc = json.loads(text)
        except ValueError as ex:
            print(f"[SAVE] Load failed ({ex}) — starting fresh.")
            return None

        problem = validate_save_dict(doc)
        if problem:
            print(f"[SAVE] WARNING: invalid save ({problem}) — starting fresh.")
            return None

        try:
            data = save_from_dict(doc)
        except (KeyError, TypeError, ValueError, AttributeError) as ex:
            print(f"[SAVE] WARNING: invalid save ({ex!r}) — starting fresh.")
            return None
        print(f"[SAVE] Loaded save v{data.schema_version} from {self.path}")
        return data

    def has_save(self) -> bool:
        return self.path.is_file()

    def delete_save(self) -> None:
        if not self.path.exists():
            return
        if _discard(self.path):
            print("[SAVE] Save file deleted.")


def _discard(path: Path) -> bool:
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as ex:
        print(f"[SAVE] WARNING: could not remove {path}: {ex}")
        return False
    return True


# ── Validation ───────────────────────────────────────────────────────

def validate_save_dict(doc: Any) -> str | None:
    """Return a description of the first structural problem, or None."""
    if not isinstance(doc, dict):
        return "document is not an object"
    version = doc.get("schema_version", SCHEMA_VERSION)
    if not isinstance(version, int) or version > SCHEMA_VERSION:
        return f"unsupported schema version {version!r}"
    run = doc.get("run")
    if not isinstance(run, dict):
        return "missing run"
    player = run.get("player")
    if not isinstance(player, dict):
        return "missing run.player"
    if not isinstance(player.get("resources", {}), dict):
        return "run.player.resources is not an object"
    if not isinstance(player.get("upgrades", []), list):
        return "run.player.upgrades is not a list"
    world = run.get("world")
    if not isinstance(world, dict):
        return "missing run.world"
    terrain = world.get("terrain")
    if not isinstance(terrain, list) or not terrain:
        return "missing run.world.terrain"
    width = world.get("width")
    height = world.get("height")
    if not isinstance(width, int) or not isinstance(height, int) or width <= 0 or height <= 0:
        return "bad world dimensions"
    if len(terrain) != width * height:
        return f"terrain has {len(terrain)} cells, expected {width * height}"
    nodes = world.get("nodes", [])
    if not isinstance(nodes, list):
        return "run.world.nodes is not a list"
    if not all(isinstance(n, dict) for n in nodes):
        return "run.world.nodes holds a non-object entry"
    return None


# ── (De)serialisation ────────────────────────────────────────────────

def save_to_dict(data: SaveData) -> dict[str, Any]:
    run = data.run
    world = run.world
    return {
        "schema_version": data.schema_version,
        "run": {
            "tick": run.tick,
            "player": {
                "player_id": run.player.player_id,
                "resources": {k: float(v) for k, v in run.player.resources.items()},
                "escape_progress": float(run.player.escape_progress),
                "upgrades": list(run.player.upgrades),
            },
            "world": {
                "seed": world.seed,
                "biome_id": world.biome_id,
                "width": world.width,
                "height": world.height,
                "spawn_x": world.spawn_x,
                "spawn_y": world.spawn_y,
                "terrain": [int(t) for t in world.terrain],
                "nodes": [
                    {
                        "resource_id": n.resource_id,
                        "x": n.x,
                        "y": n.y,
                        "amount": float(n.amount),
                        "max_amount": float(n.max_amount),
                    }
                    for n in world.nodes
                ],
            },
        },
    }


def save_from_dict(doc: dict[str, Any]) -> SaveData:
    """Build ``SaveData`` from a validated document.

    Raises KeyError / TypeError / ValueError on malformed fields.  Node
    amounts are clamped to [0, max_amount] and escape progress to [0, 1].
    """
    run = doc["run"]
    p = run["player"]
    w = run["world"]
    player = PlayerData(
        player_id=str(p.get("player_id", "player.default")),
        resources={str(k): float(v) for k, v in p.get("resources", {}).items()},
        escape_progress=_clamp(_finite(p.get("escape_progress", 0.0)), 0.0, 1.0),
        upgrades=[str(u) for u in p.get("upgrades", [])],
    )
    nodes = tuple(_node_from_dict(n) for n in w.get("nodes", []))
    world = WorldData(
        seed=int(w["seed"]),
        width=int(w["width"]),
        height=int(w["height"]),
        spawn_x=int(w["spawn_x"]),
        spawn_y=int(w["spawn_y"]),
        terrain=tuple(TerrainType(int(t)) for t in w["terrain"]),
        nodes=nodes,
        biome_id=str(w.get("biome_id", "biome.tropical")),
    )
    return SaveData(
        run=RunData(tick=int(run.get("tick", 0)), player=player, world=world),
        schema_version=int(doc.get("schema_version", SCHEMA_VERSION)),
    )


def _node_from_dict(n: dict[str, Any]) -> ResourceNode:
    max_amount = max(0.0, _finite(n["max_amount"]))
    return ResourceNode(
        resource_id=str(n["resource_id"]),
        x=int(n["x"]),
        y=int(n["y"]),
        amount=_clamp(_finite(n["amount"]), 0.0, max_amount),
        max_amount=max_amount,
    )


def _finite(value: Any) -> float:
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"non-finite number {value!r}")
    return number


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(value, hi))
