"""simulation/snapshot.py — Human-readable state dump (F6 / --dump)."""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from simulation.run import RunController


def dump_state(controller: "RunController", node_limit: int = 10) -> list[str]:
    lines = [
        f"state={controller.state.name} tick={controller.current_tick} "
        f"seed={controller.seed} speed={controller.speed_multiplier}x",
        f"escape={controller.escape_progress:.0%} "
        f"upgrades={controller.upgrade_count} "
        f"owned={controller.upgrades.purchased_ids} "
        f"events_pending={controller.events.pending_count()}",
    ]
    store = controller.store
    for rid in store.resource_ids:
        lines.append(
            f"{rid:<16} {store.get(rid):8.2f} / {store.get_max(rid):<7.1f} "
            f"bonus={store.get_income_bonus(rid):+.2f} "
            f"mult={store.get_gather_multiplier(rid):.2f}"
        )

    island = controller.island
    if island is None:
        lines.append("(no island)")
        return lines

    targets = controller.work.nearest_nodes()
    lines.append(f"island {island.width}x{island.height} spawn=({island.spawn_x}, "
                 f"{island.spawn_y}) nodes={len(island.nodes)} "
                 f"radius={controller.work.gather_radius}")
    for rid, idx in sorted(targets.items()):
        node = island.nodes[idx]
        lines.append(f"  working {rid} node #{idx} at ({node.x}, {node.y}) "
                     f"{node.amount:.1f}/{node.max_amount:.0f}")
    shown = 0
    for idx, node in enumerate(island.nodes):
        if shown >= node_limit:
            lines.append(f"  ... {len(island.nodes) - shown} more")
            break
        lines.append(f"  #{idx:<3} {node.resource_id:<16} ({node.x:>2}, {node.y:>2}) "
                     f"{node.amount:5.1f}")
        shown += 1
    return lines
