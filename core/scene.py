"""
core/scene.py — Scene interface

Every screen is a Scene.  The app holds a stack of them; only the top
scene gets events and draw calls.  Scenes read controller state and
issue controller commands; they never change simulation data directly.

    class MyScene(Scene):
        def handle_event(self, event, app):
            if event.type == pygame.KEYDOWN and event.key == pygame.K_F5:
                app.controller.tick()

        def draw(self, surface, app):
            app.draw_text(surface, f"tick {app.controller.current_tick}", 8, 8)
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pygame
    from core.app import App


class Scene:
    def on_enter(self, app: App):
        """Called when this scene becomes active (pushed or revealed)."""
        pass

    def on_exit(self, app: App):
        """Called when this scene is removed or covered."""
        pass

    def handle_event(self, event: pygame.event.Event, app: App):
        """Process a single pygame event."""
        pass

    def update(self, dt: float, app: App):
        """Per-frame bookkeeping.  The controller has already ticked."""
        pass

    def draw(self, surface: pygame.Surface, app: App):
        """Draw to the screen surface."""
        pass
