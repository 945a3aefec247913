"""
scenes/island_scene.py — Island debug view + dev HUD

Draws the terrain grid, live resource nodes and the spawn marker, with
a text HUD in the corner.  Everything shown is read from the
controller; every key maps to a controller command.

Keys:
    1 / 2 / 3   speed presets          F5   manual tick
    F6          dump state to console  Esc  pause / resume
    U           buy selected upgrade   Tab  select next upgrade
    E           escape attempt         G    toggle grid
    N           new island             `    toggle HUD
"""

from __future__ import annotations
import pygame

from core.app import App
from core.constants import CELL_SIZE, TERRAIN_COLORS, SPAWN_COLOR, NODE_COLORS
from core.events import StormOccurred, UpgradePurchased, EscapeAttempted
from core.scene import Scene
from components import GameState


STORM_FLASH_SECONDS = 0.6
MESSAGE_SECONDS = 3.0


class IslandScene(Scene):
    def __init__(self):
        self.show_grid = True
        self.show_hud = True
        self.selected_upgrade = 0
        self.storm_flash = 0.0
        self.message = ""
        self.message_timer = 0.0

    # -- Input --

    def handle_event(self, event: pygame.event.Event, app: App):
        if event.type != pygame.KEYDOWN:
            return
        ctl = app.controller
        key = event.key

        if key in (pygame.K_1, pygame.K_2, pygame.K_3):
            ctl.set_speed(key - pygame.K_1)
        elif key == pygame.K_F5:
            ctl.tick()
        elif key == pygame.K_F6:
            ctl.dump_state()
        elif key == pygame.K_ESCAPE:
            ctl.toggle_pause()
        elif key == pygame.K_TAB:
            count = len(ctl.upgrades.definitions)
            if count:
                self.selected_upgrade = (self.selected_upgrade + 1) % count
        elif key == pygame.K_u:
            upgrade = self._selected(ctl)
            if upgrade and not ctl.try_buy_upgrade(upgrade.upgrade_id):
                self._say(f"Can't buy {upgrade.display_name}")
        elif key == pygame.K_e:
            if not ctl.try_escape():
                self._say("Not enough supplies for an escape attempt")
        elif key == pygame.K_g:
            self.show_grid = not self.show_grid
        elif key == pygame.K_BACKQUOTE:
            self.show_hud = not self.show_hud
        elif key == pygame.K_n:
            ctl.start_new_run()

    # -- Update --

    def update(self, dt: float, app: App):
        for event in app.controller.events.drain():
            if isinstance(event, StormOccurred):
                self.storm_flash = STORM_FLASH_SECONDS
                self._say(f"Storm! Lost {event.loss:.1f} {event.resource_id}")
            elif isinstance(event, UpgradePurchased):
                self._say(f"Bought {event.upgrade_id}")
            elif isinstance(event, EscapeAttempted):
                self._say(f"Raft progress {event.progress:.0%}")
        self.storm_flash = max(0.0, self.storm_flash - dt)
        self.message_timer = max(0.0, self.message_timer - dt)

    def _say(self, text: str):
        self.message = text
        self.message_timer = MESSAGE_SECONDS

    def _selected(self, ctl):
        defs = ctl.upgrades.definitions
        if not defs:
            return None
        return defs[self.selected_upgrade % len(defs)]

    # -- Draw --

    def draw(self, surface: pygame.Surface, app: App):
        surface.fill((10, 20, 40))
        ctl = app.controller
        island = ctl.island

        if island is not None and self.show_grid:
            ox = surface.get_width() - island.width * CELL_SIZE - 16
            oy = 16
            for y in range(island.height):
                for x in range(island.width):
                    color = TERRAIN_COLORS.get(int(island.get_terrain(x, y)), (0, 0, 0))
                    pygame.draw.rect(surface, color, (ox + x * CELL_SIZE, oy + y * CELL_SIZE,
                                                      CELL_SIZE - 1, CELL_SIZE - 1))
            radius_px = int(ctl.work.gather_radius * CELL_SIZE)
            centre = (ox + island.spawn_x * CELL_SIZE + CELL_SIZE // 2,
                      oy + island.spawn_y * CELL_SIZE + CELL_SIZE // 2)
            pygame.draw.circle(surface, (255, 255, 255), centre, radius_px, 1)
            pygame.draw.rect(surface, SPAWN_COLOR, (ox + island.spawn_x * CELL_SIZE,
                                                    oy + island.spawn_y * CELL_SIZE,
                                                    CELL_SIZE - 1, CELL_SIZE - 1))
            dot = max(2, CELL_SIZE // 3)
            off = (CELL_SIZE - dot) // 2
            for node in island.nodes:
                if node.empty:
                    continue
                pygame.draw.rect(surface, NODE_COLORS.get(node.resource_id, (255, 60, 60)),
                                 (ox + node.x * CELL_SIZE + off, oy + node.y * CELL_SIZE + off,
                                  dot, dot))

        if self.storm_flash > 0:
            veil = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
            veil.fill((200, 200, 255, int(90 * self.storm_flash / STORM_FLASH_SECONDS)))
            surface.blit(veil, (0, 0))

        if self.show_hud:
            self._draw_hud(surface, app)

    def _draw_hud(self, surface: pygame.Surface, app: App):
        ctl = app.controller
        lines = [
            "DEV HUD  [` to toggle]",
            f"State:    {ctl.state.name}",
            f"Tick:     {ctl.current_tick}",
            f"Seed:     {ctl.seed}",
            f"Speed:    {ctl.speed_multiplier}x  [1/2/3]",
            f"Escape:   {ctl.escape_progress:.0%}  [E]",
            f"Upgrades: {ctl.upgrade_count}",
            "",
        ]
        for rid in ctl.store.resource_ids:
            d = ctl.store.definition(rid)
            name = d.display_name if d else rid
            lines.append(f"{name + ':':<10}{ctl.get_resource(rid):7.1f}")
        lines.append("")
        upgrade = self._selected(ctl)
        if upgrade is not None:
            cost = ", ".join(f"{amt:g} {rid.split('.')[-1]}" for rid, amt in upgrade.cost_items())
            if ctl.is_upgrade_owned(upgrade.upgrade_id):
                status = " (owned)"
            elif ctl.upgrades.can_buy(upgrade.upgrade_id):
                status = " (affordable)"
            else:
                status = ""
            lines.append(f"[Tab/U] {upgrade.display_name}{status}")
            lines.append(f"        {cost or 'free'}")
            lines.append(f"        effect: {upgrade.effect_type or 'cosmetic'}")
        if ctl.state is GameState.WON:
            lines.append("")
            lines.append("RESCUED!  [N] new island")
        elif ctl.state is GameState.GAME_OVER:
            lines.append("")
            lines.append("GAME OVER  [N] new island")
        elif ctl.state is GameState.PAUSE:
            lines.append("")
            lines.append("PAUSED  [Esc]")

        y = 12
        for line in lines:
            if line:
                app.draw_text_bg(surface, line, 12, y)
            y += 18
        if self.message_timer > 0:
            app.draw_text_bg(surface, self.message, 12, surface.get_height() - 28,
                             color=(255, 230, 120))
