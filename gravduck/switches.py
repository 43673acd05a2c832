"""Rotating gravity switches that turn the pull a quarter turn."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import pygame

from .core import PLAYER_SIZE, Gravity, SwitchSpec

ROTATION_SPEED = 5.0
SWITCH_DRAW_SIZE = 48
TOUCH_RADIUS = 10

_HALF = SWITCH_DRAW_SIZE // 2

_NEXT_GRAVITY = {
    Gravity.UP: Gravity.RIGHT,
    Gravity.LEFT: Gravity.UP,
    Gravity.RIGHT: Gravity.DOWN,
    Gravity.DOWN: Gravity.LEFT,
}


def _placed(button: SwitchSpec) -> bool:
    return not (button.x == 0 and button.y == 0)


class SwitchRing:
    """The switches of a level, their spin and which one was touched last."""

    def __init__(self, audio: Any) -> None:
        self.audio = audio
        self.buttons: list[SwitchSpec] = []
        self.angle = 0.0
        self._latched: set[int] = set()

    def load(self, specs: Iterable[SwitchSpec]) -> None:
        """Replace the switches with those of a level."""
        self.buttons = list(specs)

    def advance(self) -> None:
        """Spin the switches on by one frame."""
        self.angle += ROTATION_SPEED
        if self.angle >= 360.0:
            self.angle -= 360.0

    def check_collision(self, player: Any) -> bool:
        """Turn the player's gravity on touching a switch; return whether it did."""
        px = int(player.x) + PLAYER_SIZE // 2
        py = int(player.y) + PLAYER_SIZE // 2
        if player.can_touch:
            self._latched.clear()
        touched = False
        index = 0
        for button in self.buttons:
            if not _placed(button):
                continue
            dx = px - int(button.x + _HALF)
            dy = py - int(button.y + _HALF)
            if (dx * dx + dy * dy) ** 0.5 < TOUCH_RADIUS:
                if index in self._latched:
                    continue
                touched = True
                player.gravity = _NEXT_GRAVITY[Gravity(player.gravity)]
                if player.can_touch:
                    player.can_touch = False
                self._latched = {index}
            index += 1
        if touched:
            self.audio.play_once("touch")
        return touched

    def draw(self, surface: pygame.Surface, image: pygame.Surface) -> int:
        """Draw every placed switch at the current angle; return how many."""
        if image.get_size() != (SWITCH_DRAW_SIZE, SWITCH_DRAW_SIZE):
            image = pygame.transform.scale(image, (SWITCH_DRAW_SIZE, SWITCH_DRAW_SIZE))
        rotated = pygame.transform.rotate(image, -self.angle)
        drawn = 0
        for button in self.buttons:
            if not _placed(button):
                continue
            rect = rotated.get_rect(center=(int(button.x) + _HALF, int(button.y) + _HALF))
            surface.blit(rotated, rect)
            drawn += 1
        return drawn