"""simulation — The idle-survival simulation engine.

Everything here is headless: no pygame, no file formats beyond what
``core.save`` handles.  Collaborators talk to ``RunController`` only.

Modules
-------
rng         — SeededRng, deterministic random streams
worldgen    — IslandGenerator, seeded terrain + node placement
island      — IslandGrid, terrain lookup + live node copy
ledger      — ResourceStore, amounts / income / decay / multipliers
work        — WorkAssignment, nearest-node gathering
upgrades    — UpgradeManager, atomic purchase + effect application
ticks       — TickService, fixed-interval accumulator
autosave    — AutoSaveService, save every N ticks
hazards     — StormHazard, per-tick resource loss
snapshot    — developer state dump
run         — RunController, state machine + per-tick orchestration
"""
