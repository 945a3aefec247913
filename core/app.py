"""
core/app.py — Pygame application shell

Handles the window, main loop, and scene stack.  The simulation lives
in ``RunController``; the app only feeds it frame time and forwards
quit requests.

    app = App(controller, title="Castaway", width=960, height=640)
    app.push_scene(IslandScene())
    app.run()
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import pygame

from components import GameState
from core.scene import Scene

if TYPE_CHECKING:
    from simulation.run import RunController


class App:
    def __init__(self, controller: "RunController", title: str = "Castaway",
                 width: int = 960, height: int = 640):
        pygame.init()
        self.controller = controller
        self.screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption(title)
        self.clock = pygame.time.Clock()
        self.running = True
        self.fps = 60
        self.dt = 0.0

        # Scene stack, only the top scene is active
        self._scenes: list[Scene] = []

        self.font = pygame.font.SysFont("monospace", 14)
        self.font_sm = pygame.font.SysFont("monospace", 11)
        self.font_lg = pygame.font.SysFont("monospace", 18)

    # -- Scene management --

    @property
    def scene(self) -> Scene | None:
        return self._scenes[-1] if self._scenes else None

    def push_scene(self, scene: Scene):
        if self._scenes:
            self._scenes[-1].on_exit(self)
        self._scenes.append(scene)
        scene.on_enter(self)

    def pop_scene(self):
        if self._scenes:
            self._scenes[-1].on_exit(self)
            self._scenes.pop()
        if self._scenes:
            self._scenes[-1].on_enter(self)

    # -- Main loop --

    def run(self):
        while self.running:
            self.dt = self.clock.tick(self.fps) / 1000.0

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.controller.transition_to(GameState.EXIT)
                elif self.scene:
                    self.scene.handle_event(event, self)

            self.controller.update(self.dt)

            if self.scene:
                self.scene.update(self.dt, self)
                self.scene.draw(self.screen, self)
            pygame.display.flip()

            if self.controller.exit_requested:
                self.running = False

        self.controller.teardown()
        pygame.quit()

    # -- Convenience --

    def draw_text(self, surface: pygame.Surface, text: str, x: int, y: int,
                  color=(255, 255, 255), font=None):
        """Quick text draw. Returns the rect for layout chaining."""
        f = font or self.font
        img = f.render(text, True, color)
        return surface.blit(img, (x, y))

    def draw_text_bg(self, surface: pygame.Surface, text: str, x: int, y: int,
                     color=(255, 255, 255), bg=(0, 0, 0, 160), font=None,
                     pad: int = 2):
        """Draw text with a semi-transparent background box."""
        f = font or self.font
        img = f.render(text, True, color)
        w, h = img.get_size()
        bg_surf = pygame.Surface((w + pad * 2, h + pad * 2), pygame.SRCALPHA)
        bg_surf.fill(bg)
        surface.blit(bg_surf, (x - pad, y - pad))
        return surface.blit(img, (x, y))
