"""The player: movement under switchable gravity, collisions and animation."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from typing import Any

import pygame

from .core import (
    HEIGHT,
    MAX_VELOCITY,
    MAX_X_NO_PADDING,
    MAX_Y_NO_PADDING,
    PLAYER_SIZE,
    PLAYER_SPEED,
    TILE_SIZE,
    WIDTH,
    CollisionGrid,
    Gravity,
    Tile,
)

GRAVITY = 0.38
FALL_SPEED = 4
FALL_DEPTH = 16
FRAME_DELAY_MOVE = 40
SPAWN_TICKS_PER_FRAME = 4
SPAWN_LAST_FRAME = 6
RUN_CYCLE = 7
STAND_FRAME = 7
SPRITE_SIZE = 32

_HALF = PLAYER_SIZE // 2

# Gravity after pressing space: the pull reverses along its axis.
_REVERSED = {
    Gravity.DOWN: Gravity.UP,
    Gravity.LEFT: Gravity.RIGHT,
    Gravity.UP: Gravity.DOWN,
    Gravity.RIGHT: Gravity.LEFT,
}


class _Fall(enum.IntEnum):
    """Which way the player sinks after hitting a trap."""

    NONE = 0
    LEFT = 3
    LEFT_LOW = 4
    FLOOR = 6
    CEILING = 7
    RIGHT = 9


def _tile(value: float) -> int:
    return int(value / TILE_SIZE)


class Player:
    """The duck: position, velocity, gravity and animation state.

    ``sprites`` passed to the drawing methods is a mapping with the keys
    ``"run"`` and ``"spawn"`` (indexed ``[gravity][facing][frame]``) and
    ``"death"`` (a single image).
    """

    def __init__(self, grid: CollisionGrid, audio: Any) -> None:
        self.grid = grid
        self.audio = audio
        self.start_x = 0.0
        self.start_y = 0.0
        self.x = 0.0
        self.y = 0.0
        self.vx = 0.0
        self.vy = 0.0
        self.gravity = Gravity.DOWN
        self.egg_x = 0.0
        self.egg_y = 0.0
        self.egg_gravity = 0
        self._left = False
        self._right = False
        self._up = False
        self._down = False
        self.on_ground = False
        self.current_frame = 0
        self.frame_delay = 0
        self.pick = False
        self.picked = False
        self.facing = 1
        self.frame_move = 0
        self.fall_distance = 0
        self.trap = _Fall.NONE
        self.gravity_inverted = False
        self.can_touch = False
        self.can_inv = False
        self.falling = False
        self.died = False
        self.spawning = True
        self._last_frame_time = 0

    @property
    def position(self) -> tuple[float, float]:
        return self.x, self.y

    @property
    def alive(self) -> bool:
        return not self.died

    def place(self, x: float, y: float, gravity: int) -> None:
        """Set the start position of a level.

        The player always starts with gravity pulling down; ``gravity`` is
        accepted as it appears in level files.
        """
        self.start_x = float(x)
        self.start_y = float(y)
        self.x = float(x)
        self.y = float(y)
        self.gravity = Gravity.DOWN

    def set_egg(self, x: float, y: float, gravity: int) -> None:
        """Set the pixel position of the egg and the gravity it needs."""
        self.egg_x = float(x)
        self.egg_y = float(y)
        self.egg_gravity = int(gravity)

    def step(self) -> None:
        """Apply gravity and held keys to the velocity, then move."""
        g = self.gravity
        if g in (Gravity.DOWN, Gravity.UP):
            self.vx = 0.0
            if g == Gravity.DOWN:
                self.vy = min(self.vy + GRAVITY, MAX_VELOCITY)
            else:
                self.vy = max(self.vy - GRAVITY, -MAX_VELOCITY)
            if self._left:
                self.vx -= PLAYER_SPEED
            elif self._right:
                self.vx += PLAYER_SPEED
        else:
            self.vy = 0.0
            if g == Gravity.RIGHT:
                self.vx = min(self.vx + GRAVITY, MAX_VELOCITY)
            else:
                self.vx = max(self.vx - GRAVITY, -MAX_VELOCITY)
            if self._up:
                self.vy -= PLAYER_SPEED
            elif self._down:
                self.vy += PLAYER_SPEED
        self.check_collision()

    def _egg_reachable(self) -> bool:
        g, e = int(self.gravity), self.egg_gravity
        return g == e or {g, e} == {int(Gravity.LEFT), int(Gravity.RIGHT)}

    def _check_egg(self, col: int, row: int) -> None:
        # The destination cell is addressed column first, as the map stores it.
        if self.grid[col, row] == Tile.DEST and self._egg_reachable():
            self.pick = True

    def _sink(self) -> None:
        if self.fall_distance == 0:
            self.audio.play_once("dead")
        sinking = self.fall_distance < FALL_DEPTH
        vertical = self.trap in (_Fall.FLOOR, _Fall.CEILING)
        if sinking and self.gravity_inverted and vertical:
            self.y -= FALL_SPEED
        elif sinking and self.gravity in (Gravity.RIGHT, Gravity.DOWN) and vertical:
            self.y += FALL_SPEED
        elif sinking and self.trap in (_Fall.LEFT, _Fall.LEFT_LOW):
            self.x -= FALL_SPEED
        elif sinking and self.trap == _Fall.RIGHT:
            self.x += FALL_SPEED
        else:
            self.gravity_inverted = False
            self.died = True
            return
        self.fall_distance += FALL_SPEED

    def _trapped(self, kind: _Fall) -> None:
        self.falling = True
        self.trap = kind

    def check_collision(self) -> None:
        """Resolve walls, traps, the egg and the screen edge, then move."""
        if self.falling:
            self._sink()
            return
        grid = self.grid

        x1 = _tile(self.x + self.vx)
        x2 = _tile(self.x + self.vx + PLAYER_SIZE - 1)
        y1 = _tile(self.y)
        y2 = _tile(self.y + PLAYER_SIZE - 1)
        y1_p = _tile(self.y + 4)
        x1_p = _tile(self.x + self.vx + 4)
        x2_p = _tile(self.x + self.vx + _HALF + 4)
        y2_p = _tile(self.y + _HALF + 4)

        if self.x + SPRITE_SIZE > WIDTH or self.y + SPRITE_SIZE > HEIGHT or self.x < 0 or self.y < 0:
            self._trapped(_Fall.LEFT)
        self._check_egg(x2, y1)
        if x1 >= 0 and x2 < MAX_X_NO_PADDING and y1 >= 0 and y2 < MAX_Y_NO_PADDING:
            if self.vx > 0 and (grid[y1_p, x2] != Tile.NOTHING or grid[y2_p, x2] != Tile.NOTHING):
                self.can_inv = self.can_touch = True
                self.x = x2 * TILE_SIZE - PLAYER_SIZE
                self.vx = 0.0
                if (
                    grid[y1_p, x2_p] == Tile.TRAP
                    or grid[y2_p, x2_p] == Tile.TRAP
                    or (grid[y1_p, x2] == Tile.TRAP and grid[y2_p, x2] == Tile.TRAP)
                ):
                    self._trapped(_Fall.RIGHT)
            elif self.vx < 0 and (grid[y1, x1] != Tile.NOTHING or grid[y2, x1] != Tile.NOTHING):
                self.can_inv = self.can_touch = True
                self.x = (x1 + 1) * TILE_SIZE
                self.vx = 0.0
                if grid[y2_p, x1] == Tile.TRAP and grid[y1_p, x1] == Tile.TRAP:
                    self._trapped(_Fall.LEFT)
                if grid[y1, x1_p] == Tile.TRAP:
                    self._trapped(_Fall.LEFT)
                if grid[y2, x1_p] == Tile.TRAP:
                    self._trapped(_Fall.LEFT_LOW)

        x1 = _tile(self.x)
        x2 = _tile(self.x + PLAYER_SIZE - 1)
        y1 = _tile(self.y + self.vy)
        y2 = _tile(self.y + self.vy + PLAYER_SIZE + 1)
        x2_p = _tile(self.x + _HALF + 5)
        y2_p = _tile(self.y + self.vy + PLAYER_SIZE)
        y1_p = _tile(self.y + self.vy - 1)
        x1_p = _tile(self.x + 4)

        self._check_egg(x2, y1)
        if x1 >= 0 and x2 < MAX_X_NO_PADDING and y1 >= 0 and y2 < MAX_Y_NO_PADDING:
            if self.vy > 0 and (grid[y2, x1] != Tile.NOTHING or grid[y2, x2] != Tile.NOTHING):
                self.can_inv = self.can_touch = True
                self.y = y2 * TILE_SIZE - PLAYER_SIZE
                self.vy = 0.0
                self.on_ground = True
                if grid[y2_p, x2_p] == Tile.TRAP:
                    self._trapped(_Fall.FLOOR)
            elif self.vy < 0 and (grid[y1, x1] != Tile.NOTHING or grid[y1, x2] != Tile.NOTHING):
                self.can_inv = self.can_touch = True
                self.y = (y1 + 1) * TILE_SIZE
                self.vy = 0.0
                if grid[y1_p, x1_p] == Tile.TRAP and grid[y1_p, x2_p] == Tile.TRAP:
                    self._trapped(_Fall.CEILING)
            else:
                self.on_ground = False

        self.x += self.vx
        self.y += self.vy
        if self.pick:
            self.audio.play_once("pick")

    def _hold(self, *, left=False, right=False, up=False, down=False) -> None:
        self._left, self._right, self._up, self._down = left, right, up, down

    def handle_key(self, key: int, pressed: bool) -> None:
        """React to an arrow key or space being pressed or released."""
        if pressed:
            if key == pygame.K_RIGHT:
                self._hold(right=True)
                self.facing = 1
            elif key == pygame.K_LEFT:
                self._hold(left=True)
                self.facing = 0
            elif key == pygame.K_UP:
                self._hold(up=True)
                self.facing = 0
            elif key == pygame.K_DOWN:
                self._hold(down=True)
                self.facing = 1
            elif key == pygame.K_SPACE and self.can_inv:
                self.gravity = _REVERSED[Gravity(self.gravity)]
                self.audio.play_once("fly")
                self.can_inv = False
            return
        if key == pygame.K_RIGHT:
            self._right = False
            self.vx = 0.0
        elif key == pygame.K_LEFT:
            self._left = False
            self.vx = 0.0
        elif key == pygame.K_UP:
            self._up = False
            self.vy = 0.0
        elif key == pygame.K_DOWN:
            self._down = False
            self.vy = 0.0
        else:
            return
        self.frame_move = 0

    def reset(self) -> None:
        """Return to the start of the level."""
        self.x = self.start_x
        self.y = self.start_y
        self.frame_move = 0
        self.facing = 1
        self.falling = False
        self.fall_distance = 0
        self.current_frame = 0
        self.gravity = Gravity.DOWN
        self.frame_delay = 0
        self.vx = 0.0
        self.vy = 0.0
        self.gravity_inverted = False
        self._left = False
        self._right = False
        self.on_ground = False
        self.picked = False
        self.died = False

    def advance_spawn(self) -> None:
        """Move the spawn animation on by one tick."""
        if not self.spawning:
            return
        self.frame_delay += 1
        if self.frame_delay >= SPAWN_TICKS_PER_FRAME:
            self.current_frame += 1
            self.frame_delay = 0
            if self.current_frame > SPAWN_LAST_FRAME:
                self.spawning = False

    def _moving(self) -> bool:
        return self._left or self._right or self._up or self._down

    def show(self, surface: pygame.Surface, sprites: Mapping[str, Any], now: int) -> pygame.Surface:
        """Draw the player at ``now`` milliseconds; return the image drawn."""
        if self._moving():
            if now - self._last_frame_time > FRAME_DELAY_MOVE:
                self.frame_move = (self.frame_move + 1) % RUN_CYCLE
                self._last_frame_time = now
        else:
            self.frame_move = 0
        g = int(self.gravity)
        if self.died:
            image = sprites["death"]
        elif self.frame_move == 0:
            image = sprites["spawn"][g][self.facing][STAND_FRAME]
        else:
            image = sprites["run"][g][self.facing][self.frame_move - 1]
        surface.blit(image, (int(self.x), int(self.y)))
        return image

    def draw_spawn(self, surface: pygame.Surface, sprites: Mapping[str, Any]) -> pygame.Surface | None:
        """Draw the current appearing frame while spawning."""
        if not self.spawning:
            return None
        image = sprites["spawn"][int(self.gravity)][self.facing][self.current_frame]
        surface.blit(image, (int(self.x), int(self.y)))
        return image

    def draw_despawn(self, surface: pygame.Surface, sprites: Mapping[str, Any]) -> pygame.Surface | None:
        """Draw the current vanishing frame while spawning after the pick."""
        if not self.spawning:
            return None
        frame = max(0, 5 - self.current_frame)
        image = sprites["spawn"][int(self.gravity)][self.facing][frame]
        surface.blit(image, (int(self.x), int(self.y)))
        return image