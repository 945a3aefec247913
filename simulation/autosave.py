"""simulation/autosave.py — Save every N ticks, or on demand.

``collect`` builds a fresh ``SaveData`` snapshot each time so the
ledger is flushed right before it is written.  Failures are logged and
swallowed here; the tick loop must keep going and the next cycle
retries.
"""

from __future__ import annotations
import traceback
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from components import SaveData
    from core.save import JsonSave


class AutoSaveService:

    def __init__(self) -> None:
        self._save: JsonSave | None = None
        self._collect: Callable[[], SaveData] | None = None
        self.every_n: int = 10
        self.ticks_since_save: int = 0
        self.saves_written: int = 0

    def initialize(self, save: "JsonSave", collect: Callable[[], "SaveData"],
                   every_n: int) -> None:
        self._save = save
        self._collect = collect
        self.every_n = max(1, int(every_n))
        self.ticks_since_save = 0

    def on_tick(self) -> bool:
        """Count one tick; save when the threshold is reached."""
        self.ticks_since_save += 1
        if self.ticks_since_save < self.every_n:
            return False
        self.ticks_since_save = 0
        return self.force_save()

    def force_save(self) -> bool:
        if self._save is None or self._collect is None:
            return False
        try:
            written = self._save.save(self._collect())
        except Exception as exc:
            print(f"[SAVE] Autosave failed: {exc}")
            traceback.print_exc()
            return False
        if written:
            self.saves_written += 1
        return written
