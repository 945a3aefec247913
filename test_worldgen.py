"""test_worldgen.py — Seeded RNG, island generation and the live grid.

Tests:
1. SeededRng streams are reproducible and respect their bounds
2. Same seed + config ⇒ identical terrain and nodes
3. Terrain layout and node placement rules
4. Invalid generation config fails fast
5. IslandGrid owns an independent node copy

Run: python test_worldgen.py
"""
from __future__ import annotations
import sys, traceback

from components import IslandConfig, ResourceNode, TerrainType, WorldData
from core.constants import NODE_MAX_AMOUNT, NODE_MIN_START
from simulation.island import IslandGrid
from simulation.rng import SeededRng
from simulation.worldgen import IslandGenerator, TERRAIN_RESOURCE, classify


# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")

def fail(label: str, detail: str = ""):
    global _failed
    _failed += 1
    msg = f"  [FAIL] {label}"
    if detail:
        msg += f" — {detail}"
    print(msg)

def check(cond: bool, label: str, detail: str = ""):
    if cond:
        ok(label)
    else:
        fail(label, detail)
        raise AssertionError(f"{label} {detail}".strip())


CONFIG = IslandConfig(width=20, height=20, resource_density=0.15)


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 1:  SEEDED RNG
# ═══════════════════════════════════════════════════════════════════════

def test_rng_streams():
    print("\n=== 1: SeededRng ===")
    a = SeededRng(7)
    b = SeededRng(7)
    seq_a = [(a.next_int(0, 100), a.next_float(1.0, 2.0), a.next_bool()) for _ in range(50)]
    seq_b = [(b.next_int(0, 100), b.next_float(1.0, 2.0), b.next_bool()) for _ in range(50)]
    check(seq_a == seq_b, "1a: same seed gives the same sequence")

    c = SeededRng(8)
    seq_c = [(c.next_int(0, 100), c.next_float(1.0, 2.0), c.next_bool()) for _ in range(50)]
    check(seq_a != seq_c, "1b: different seed gives a different sequence")

    rng = SeededRng(1)
    ints = [rng.next_int(3, 6) for _ in range(200)]
    check(min(ints) >= 3 and max(ints) <= 5, "1c: next_int max is exclusive",
          f"range={min(ints)}..{max(ints)}")
    floats = [rng.next_float(20.0, 50.0) for _ in range(200)]
    check(all(20.0 <= f < 50.0 for f in floats), "1d: next_float stays in [min, max)")
    check(rng.next_int(5, 5) == 5, "1e: empty int range returns min")
    check(not any(rng.next_bool(0.0) for _ in range(100)), "1f: p=0 never true")
    check(all(rng.next_bool(1.0) for _ in range(100)), "1g: p=1 always true")


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 2:  DETERMINISM
# ═══════════════════════════════════════════════════════════════════════

def test_generation_is_deterministic():
    print("\n=== 2: Generation determinism ===")
    first = IslandGenerator(CONFIG).generate(42)
    second = IslandGenerator(CONFIG).generate(42)

    check(first.terrain == second.terrain, "2a: identical terrain for seed 42")
    check(len(first.nodes) == len(second.nodes), "2b: same node count",
          f"{len(first.nodes)} vs {len(second.nodes)}")
    same = all(
        (a.resource_id, a.x, a.y, a.amount, a.max_amount)
        == (b.resource_id, b.x, b.y, b.amount, b.max_amount)
        for a, b in zip(first.nodes, second.nodes)
    )
    check(same, "2c: identical node sequence (id, x, y, amount)")

    other = IslandGenerator(CONFIG).generate(1337)
    check(other.nodes != first.nodes or other.terrain != first.terrain,
          "2d: a different seed gives a different island")


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 3:  LAYOUT RULES
# ═══════════════════════════════════════════════════════════════════════

def test_layout_rules():
    print("\n=== 3: Terrain + node placement ===")
    world = IslandGenerator(CONFIG).generate(42)
    w, h = world.width, world.height

    check(len(world.terrain) == w * h, "3a: terrain is flat width*height")
    check((world.spawn_x, world.spawn_y) == (10, 10), "3b: spawn at grid centre",
          f"spawn=({world.spawn_x}, {world.spawn_y})")
    corners = [world.terrain[0], world.terrain[w - 1],
               world.terrain[(h - 1) * w], world.terrain[h * w - 1]]
    check(all(t == TerrainType.OCEAN for t in corners), "3c: corners are ocean")
    check(world.biome_id == "biome.tropical", "3d: biome id set")

    for node in world.nodes:
        terrain = world.terrain[node.y * w + node.x]
        if TERRAIN_RESOURCE.get(terrain) != node.resource_id:
            check(False, "3e: node resource matches its terrain",
                  f"{node.resource_id} on {terrain.name}")
        if not (NODE_MIN_START <= node.amount <= NODE_MAX_AMOUNT):
            check(False, "3f: node amount in [20, 50]", f"amount={node.amount}")
    ok("3e: every node resource matches its terrain")
    ok("3f: every node amount in [20, 50]")
    check(all(n.max_amount == NODE_MAX_AMOUNT for n in world.nodes), "3g: node max is 50")

    empty = IslandGenerator(IslandConfig(20, 20, 0.0)).generate(42)
    check(len(empty.nodes) == 0, "3h: density 0 places no nodes")

    full = IslandGenerator(IslandConfig(20, 20, 1.0)).generate(42)
    mapped = sum(1 for t in full.terrain if t in TERRAIN_RESOURCE)
    check(len(full.nodes) == mapped, "3i: density 1 fills every resource cell",
          f"nodes={len(full.nodes)} mapped={mapped}")

    check(classify(1.2, 0.9) == TerrainType.OCEAN, "3j: far cells are ocean")
    check(classify(0.8, 0.9) == TerrainType.BEACH, "3k: ring cells are beach")
    check(classify(0.1, 0.7) == TerrainType.ROCKY, "3l: high noise inland is rocky")
    check(classify(0.1, 0.5) == TerrainType.FOREST, "3m: mid noise inland is forest")
    check(classify(0.1, 0.2) == TerrainType.CLEARING, "3n: low noise inland is clearing")


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 4:  INVALID CONFIG
# ═══════════════════════════════════════════════════════════════════════

def test_invalid_config_fails_fast():
    print("\n=== 4: Invalid config ===")
    for label, cfg in [
        ("4a: zero width", IslandConfig(0, 20, 0.1)),
        ("4b: negative height", IslandConfig(20, -3, 0.1)),
        ("4c: density above 1", IslandConfig(20, 20, 1.5)),
    ]:
        try:
            IslandGenerator(cfg)
        except ValueError:
            ok(f"{label} raises ValueError")
        else:
            check(False, f"{label} raises ValueError", "no exception")


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 5:  ISLAND GRID
# ═══════════════════════════════════════════════════════════════════════

def test_island_grid_owns_its_nodes():
    print("\n=== 5: IslandGrid ===")
    world = WorldData(
        seed=1, width=3, height=2, spawn_x=1, spawn_y=1,
        terrain=(TerrainType.OCEAN, TerrainType.BEACH, TerrainType.FOREST,
                 TerrainType.ROCKY, TerrainType.CLEARING, TerrainType.OCEAN),
        nodes=(ResourceNode("resource.wood", 2, 0, 30.0, 50.0),),
    )
    grid = IslandGrid(world)

    check(grid.get_terrain(2, 0) == TerrainType.FOREST, "5a: row-major lookup (2, 0)")
    check(grid.get_terrain(0, 1) == TerrainType.ROCKY, "5b: row-major lookup (0, 1)")
    check(grid.in_bounds(2, 1) and not grid.in_bounds(3, 0) and not grid.in_bounds(0, -1),
          "5c: in_bounds is a range check")
    try:
        grid.get_terrain(5, 5)
    except IndexError:
        ok("5d: out-of-bounds lookup raises IndexError")
    else:
        check(False, "5d: out-of-bounds lookup raises IndexError")

    grid.nodes[0].amount = 0.0
    check(world.nodes[0].amount == 30.0, "5e: depleting the live copy leaves the record alone")

    exported = grid.export_nodes()
    exported[0].amount = 99.0
    check(grid.nodes[0].amount == 0.0, "5f: exported nodes are independent copies")
    check(grid.remaining("resource.wood") == 0.0, "5g: remaining() sums live amounts")


# ═══════════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [
        ("SeededRng", test_rng_streams),
        ("Determinism", test_generation_is_deterministic),
        ("Layout", test_layout_rules),
        ("Invalid config", test_invalid_config_fails_fast),
        ("IslandGrid", test_island_grid_owns_its_nodes),
    ]
    for name, fn in sections:
        try:
            fn()
        except AssertionError:
            pass
        except Exception:
            _failed += 1
            print(f"\n  [CRASH] {name} — unhandled exception:")
            traceback.print_exc()

    print(f"\n{'=' * 60}")
    print(f"  Worldgen Tests: {_passed} passed, {_failed} failed")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
