"""simulation/run.py — Run orchestration and the game state machine.

``RunController`` owns the run state and wires every service together.
It is built explicitly and handed to collaborators (scene, HUD, CLI);
there is no global instance.

    controller = RunController(load_game_data("data"), JsonSave(path))
    controller.start()                 # load the save, or start fresh
    while not controller.exit_requested:
        controller.update(dt)          # drives the tick scheduler
        for event in controller.events.drain():
            ...
    controller.teardown()

State machine::

    BOOT ──start/load──▶ RUNNING ◀──▶ PAUSE
                           │  │          │
                           │  └──────────┴──▶ WON / GAME_OVER  (forced save)
                           └────────────────▶ EXIT             (forced save)

WON and GAME_OVER are terminal until ``start_new_run()``.  GAME_OVER is
only ever entered through an explicit call.

Every tick runs, in this order: ledger income/decay → gathering →
storm hazard → autosave.  The hazard sees post-income amounts and the
autosave sees post-hazard amounts.
"""

from __future__ import annotations
import time
from typing import Callable

from components import GameData, GameState, PlayerData, RunData, SaveData
from core.constants import SCHEMA_VERSION, STORM_SEED_SALT
from core.events import (
    EventQueue, EscapeAttempted, RunStarted, StateChanged, TickAdvanced,
    UpgradePurchased,
)
from core.save import JsonSave
from simulation.autosave import AutoSaveService
from simulation.hazards import StormHazard
from simulation.island import IslandGrid
from simulation.ledger import ResourceStore
from simulation.rng import SeededRng
from simulation.snapshot import dump_state
from simulation.ticks import TickService
from simulation.upgrades import UpgradeManager
from simulation.work import WorkAssignment
from simulation.worldgen import IslandGenerator


# Legal targets per state.  Starting a run resets to BOOT first.
TRANSITIONS: dict[GameState, set[GameState]] = {
    GameState.BOOT: {GameState.RUNNING, GameState.EXIT},
    GameState.RUNNING: {GameState.PAUSE, GameState.WON,
                        GameState.GAME_OVER, GameState.EXIT},
    GameState.PAUSE: {GameState.RUNNING, GameState.WON,
                      GameState.GAME_OVER, GameState.EXIT},
    GameState.WON: {GameState.EXIT},
    GameState.GAME_OVER: {GameState.EXIT},
    GameState.EXIT: set(),
}

# States in which a run is live and player actions are accepted
ACTIVE_STATES = (GameState.RUNNING, GameState.PAUSE)


def clock_seed() -> int:
    return int(time.time() * 1000) & 0x7FFFFFFF


class RunController:

    def __init__(self, game_data: GameData, save: JsonSave | None = None,
                 seed_source: Callable[[], int] | None = None) -> None:
        if not game_data.resources:
            raise ValueError("RunController needs at least one resource definition")
        self.data = game_data
        self.config = game_data.config
        self.save = save if save is not None else JsonSave(self.config.save_path)
        self._seed_source = seed_source or clock_seed

        self.ticks = TickService(self.config.tick.interval_seconds)
        self.store = ResourceStore()
        self.work = WorkAssignment(self.config.gather_radius)
        self.upgrades = UpgradeManager()
        self.autosave = AutoSaveService()
        self.events = EventQueue()
        self.hazard: StormHazard | None = None

        self._state = GameState.BOOT
        self._run: RunData | None = None
        self._island: IslandGrid | None = None
        self._in_tick = False
        self.exit_requested = False
        self.verbose_ticks = False

        print("[CORE] RunController created.")

    # ── Run management ───────────────────────────────────────────────

    def start(self) -> None:
        """Resume the saved run if there is one, otherwise start fresh."""
        if self.save.has_save():
            self.load_game()
        else:
            self.start_new_run()

    def start_new_run(self, seed: int | None = None) -> None:
        if seed is None:
            seed = self.config.seed if self.config.seed is not None else self._seed_source()

        world = IslandGenerator(self.config.island).generate(seed)
        player = PlayerData(resources=dict(self.config.starting_amounts))
        self._run = RunData(tick=0, player=player, world=world)

        self._bootstrap(new_run=True)
        self._state = GameState.BOOT
        self.transition_to(GameState.RUNNING)
        self.events.emit(RunStarted(seed=seed, loaded=False, tick=0))

    def load_game(self) -> bool:
        """Load the save slot.  A missing or invalid save falls back to a
        new run (and an invalid file is deleted).  Returns True when a
        save was actually loaded."""
        data = self.save.load()
        if data is None:
            if self.save.has_save():
                print("[CORE] Discarding unusable save file.")
                self.save.delete_save()
            self.start_new_run()
            return False

        self._run = data.run
        self._bootstrap(new_run=False)
        self._state = GameState.BOOT
        self.transition_to(GameState.RUNNING)
        self.events.emit(RunStarted(seed=data.run.world.seed, loaded=True,
                                    tick=data.run.tick))
        return True

    def teardown(self) -> None:
        """Process shutdown: make sure a live run is saved."""
        if self._state is not GameState.EXIT:
            self.transition_to(GameState.EXIT)

    # ── State machine ────────────────────────────────────────────────

    def transition_to(self, next_state: GameState) -> bool:
        current = self._state
        if next_state is current:
            return True
        if next_state not in TRANSITIONS[current]:
            print(f"[CORE] WARNING: illegal transition {current.name} -> {next_state.name}")
            return False
        if next_state is GameState.RUNNING and self._run is None:
            print("[CORE] WARNING: cannot run without a run loaded")
            return False

        print(f"[CORE] State: {current.name} -> {next_state.name}")
        self._state = next_state

        if next_state is GameState.RUNNING:
            self.ticks.set_running(True)
        elif next_state is GameState.PAUSE:
            self.ticks.set_running(False)
        elif next_state in (GameState.WON, GameState.GAME_OVER):
            self.ticks.set_running(False)
            self.autosave.force_save()
        elif next_state is GameState.EXIT:
            self.ticks.set_running(False)
            if self._run is not None and current in ACTIVE_STATES:
                self.autosave.force_save()
            self.exit_requested = True

        self.events.emit(StateChanged(previous=current.value, current=next_state.value))
        return True

    def toggle_pause(self) -> bool:
        if self._state is GameState.RUNNING:
            return self.transition_to(GameState.PAUSE)
        if self._state is GameState.PAUSE:
            return self.transition_to(GameState.RUNNING)
        return False

    def trigger_game_over(self) -> bool:
        """External game-over hook.  The engine never decides this itself."""
        return self.transition_to(GameState.GAME_OVER)

    # ── Ticking ──────────────────────────────────────────────────────

    def update(self, dt: float) -> int:
        """Feed real time to the scheduler and run every due tick.
        Returns how many ticks ran."""
        if self._state is not GameState.RUNNING:
            return 0
        due = self.ticks.advance(dt)
        ran = 0
        for _ in range(due):
            if self._state is not GameState.RUNNING:
                break
            self._step()
            ran += 1
        return ran

    def tick(self) -> bool:
        """Manual single step (dev key / button).  Works while paused."""
        if self._run is None or self._state not in ACTIVE_STATES:
            return False
        self._step()
        return True

    def _step(self) -> None:
        if self._in_tick:
            raise RuntimeError("tick requested from inside a tick")
        self._in_tick = True
        try:
            n = self.ticks.tick()
            self._run.tick = n
            self.store.on_tick()
            harvested = self.work.on_tick()
            storm = self.hazard.roll(self.store, n) if self.hazard else None
            if storm is not None:
                self.events.emit(storm)
            self.events.emit(TickAdvanced(tick=n, harvested=harvested))
            if self.verbose_ticks:
                print(f"[SIM] Tick {n}")
            self.autosave.on_tick()
        finally:
            self._in_tick = False

    def set_speed(self, index: int) -> bool:
        mults = self.config.tick.speed_multipliers
        if not 0 <= index < len(mults):
            print(f"[CORE] WARNING: no speed preset {index}")
            return False
        self.ticks.set_speed(mults[index])
        print(f"[CORE] Speed set to {mults[index]}x")
        return True

    # ── Player actions ───────────────────────────────────────────────

    def try_buy_upgrade(self, upgrade_id: str) -> bool:
        if self._state not in ACTIVE_STATES:
            return False
        if not self.upgrades.try_buy(upgrade_id):
            return False
        self.events.emit(UpgradePurchased(upgrade_id=upgrade_id, tick=self.current_tick))
        return True

    def try_escape(self) -> bool:
        """Spend the escape bundle for one step of escape progress.
        Reaching 1.0 wins the run."""
        if self._state not in ACTIVE_STATES:
            return False
        escape = self.config.escape
        if not self.store.can_afford(escape.cost):
            return False
        for rid, amount in escape.cost.items():
            if amount > 0:
                self.store.try_spend(rid, amount)

        player = self._run.player
        player.escape_progress = min(1.0, round(player.escape_progress
                                                + escape.progress_per_attempt, 6))
        print(f"[SIM] Escape attempt: progress {player.escape_progress:.0%}")
        self.events.emit(EscapeAttempted(tick=self.current_tick,
                                         progress=player.escape_progress))
        if player.escape_progress >= 1.0:
            self.transition_to(GameState.WON)
        return True

    # ── Persistence ──────────────────────────────────────────────────

    def build_save_data(self) -> SaveData:
        """Flush live state into the run record and wrap it for saving."""
        run = self._run
        run.player.resources = self.store.snapshot()
        run.player.upgrades = self.upgrades.purchased_ids
        run.world = run.world.with_nodes(self._island.nodes)
        return SaveData(run=run, schema_version=SCHEMA_VERSION)

    def force_save(self) -> bool:
        if self._run is None:
            return False
        return self.autosave.force_save()

    # ── Read-only state ──────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def current_tick(self) -> int:
        return self.ticks.current_tick

    @property
    def escape_progress(self) -> float:
        return self._run.player.escape_progress if self._run else 0.0

    @property
    def seed(self) -> int:
        return self._run.world.seed if self._run else 0

    @property
    def speed_multiplier(self) -> float:
        return self.ticks.speed_multiplier

    @property
    def upgrade_count(self) -> int:
        return self.upgrades.purchased_count

    @property
    def island(self) -> IslandGrid | None:
        return self._island

    @property
    def run(self) -> RunData | None:
        return self._run

    def get_resource(self, resource_id: str) -> float:
        return self.store.get(resource_id)

    def is_upgrade_owned(self, upgrade_id: str) -> bool:
        return self.upgrades.is_owned(upgrade_id)

    def dump_state(self) -> list[str]:
        lines = dump_state(self)
        for line in lines:
            print(f"[DUMP] {line}")
        return lines

    # ── Internals ────────────────────────────────────────────────────

    def _bootstrap(self, new_run: bool) -> None:
        run = self._run
        self._island = IslandGrid(run.world)
        self.store.initialize(self.data.resources, run.player.resources)
        self.work.initialize(self._island, self.store)
        self.upgrades.initialize(self.store, self.work, self.data.upgrades,
                                 None if new_run else run.player.upgrades)
        self.autosave.initialize(self.save, self.build_save_data,
                                 self.config.tick.autosave_every_n_ticks)
        self.ticks.reset_tick(run.tick)
        # Offset by tick so a reload doesn't replay the same storms
        self.hazard = StormHazard(
            self.config.storm,
            SeededRng(run.world.seed ^ STORM_SEED_SALT ^ run.tick),
        )
        self.exit_requested = False
        kind = "new" if new_run else "loaded"
        print(f"[CORE] Bootstrapped {kind} run: seed={run.world.seed}, "
              f"tick={run.tick}, upgrades={self.upgrades.purchased_count}")
