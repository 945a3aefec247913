"""
main.py — Bootstrap

1. Load data files → GameData
2. Create the save gateway and the RunController
3. Resume the saved run or generate a new island
4. Run the pygame shell (or tick headless with --headless)

    python main.py
    python main.py --headless --ticks 200 --seed 42 --dump
"""

from __future__ import annotations
import argparse
from pathlib import Path

from core.data import load_game_data
from core.save import JsonSave
from simulation.run import RunController


def main():
    ap = argparse.ArgumentParser(description="Castaway idle-survival simulation")
    ap.add_argument("--data", default="data", help="directory holding the .toml data files")
    ap.add_argument("--save", default=None, help="override the save file path")
    ap.add_argument("--seed", type=int, default=None, help="seed for a fresh island")
    ap.add_argument("--new", action="store_true", help="ignore any save and start fresh")
    ap.add_argument("--headless", action="store_true", help="run without a window")
    ap.add_argument("--ticks", type=int, default=100, help="ticks to simulate when headless")
    ap.add_argument("--dump", action="store_true", help="print a state dump when done")
    args = ap.parse_args()

    game_data = load_game_data(args.data)
    save_path = Path(args.save) if args.save else game_data.config.save_path
    controller = RunController(game_data, JsonSave(save_path))

    if args.new or args.seed is not None:
        controller.start_new_run(seed=args.seed)
    else:
        controller.start()

    if args.headless:
        for _ in range(max(0, args.ticks)):
            controller.tick()
        controller.events.clear()
        if args.dump:
            controller.dump_state()
        controller.teardown()
        return

    from core.app import App
    from scenes.island_scene import IslandScene

    app = App(controller, title="Castaway", width=960, height=640)
    app.push_scene(IslandScene())
    app.run()


if __name__ == "__main__":
    main()
