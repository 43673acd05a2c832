"""Shared constants, enumerations and the collision grid."""

from __future__ import annotations

import enum
from dataclasses import dataclass

WIDTH = 640
HEIGHT = 480
INTERVAL = 25
MAX_X = 24
MAX_Y = 19
MAX_X_NO_PADDING = 22
MAX_Y_NO_PADDING = 17
RADIAN = 57.2958
MAX_VELOCITY = 13.0
MENU_BG_MAX_OFFSET = 128
PLAYER_SIZE = 30
PLAYER_SIZE_HALF = 16
TILE_SIZE = 32
TILE_SIZE_HALF = 16
PLAYER_SPEED = 5.5
PLAY_SIZE_TRAP = 28
TILE_MAX = 44
SWITCH_MAX = 10
SWITCH_SIZE = 20
ANIMATION_FRAMES_SPAWN = 7
TARGET_FPS = 100
FRAME_DELAY = 1000 // TARGET_FPS

# Source rectangles (x, y, w, h) of the player frames in the sprite sheet:
# the first six are the run cycle, the remaining eight the spawn animation.
PLAYER_FRAMES = (
    (0, 0, 32, 32),
    (32, 0, 32, 32),
    (64, 0, 32, 32),
    (96, 0, 32, 32),
    (128, 0, 32, 32),
    (160, 0, 32, 32),
    (192, 0, 32, 32),
    (0, 32, 32, 32),
    (32, 32, 32, 32),
    (64, 32, 32, 32),
    (96, 32, 32, 32),
    (128, 32, 32, 32),
    (160, 32, 32, 32),
    (192, 32, 32, 32),
)

# Source rectangles of the egg sheet: egg, hidden egg, then four pick frames.
EGG_FRAMES = (
    (0, 0, 32, 32),
    (0, 32, 32, 32),
    (32, 0, 64, 64),
    (96, 0, 64, 64),
    (160, 0, 64, 64),
    (224, 0, 64, 64),
)

_TRAP_TILES_START = 40


class GameState(enum.IntEnum):
    """Top-level state of the game loop."""

    MENU = 0
    TRANSITION_OUT = 1
    LOADING = 2
    TRANSITION_IN = 3
    PLAYING = 4


class Tile(enum.IntEnum):
    """What a cell of the collision grid does to the player."""

    WALL = 0
    NOTHING = 1
    TRAP = 2
    DEST = 3


class Gravity(enum.IntEnum):
    """Direction in which gravity pulls the player."""

    UP = 0
    LEFT = 1
    DOWN = 2
    RIGHT = 3


@dataclass
class SwitchSpec:
    """A gravity switch as read from a level file."""

    x: float
    y: float
    gravity: float


def tile_collision(index: int) -> Tile:
    """Return the collision kind of a tile-sheet index; -1 is an empty cell."""
    if index == -1:
        return Tile.NOTHING
    if not 0 <= index < TILE_MAX:
        raise ValueError(f"tile index {index} outside 0..{TILE_MAX - 1}")
    return Tile.TRAP if index >= _TRAP_TILES_START else Tile.WALL


class CollisionGrid:
    """Collision map of MAX_Y rows by MAX_X columns, stored row-major.

    Cells are addressed as ``grid[row, col]``. The pair resolves to a
    row-major offset, so a column past the end of a row reads into the
    next row. Offsets outside the grid read as walls.
    """

    rows = MAX_Y
    cols = MAX_X

    def __init__(self) -> None:
        self._cells = [Tile.WALL] * (self.rows * self.cols)

    def _offset(self, key: tuple[int, int]) -> int:
        row, col = key
        return int(row) * self.cols + int(col)

    def __getitem__(self, key: tuple[int, int]) -> Tile:
        offset = self._offset(key)
        if 0 <= offset < len(self._cells):
            return self._cells[offset]
        return Tile.WALL

    def __setitem__(self, key: tuple[int, int], value: int) -> None:
        offset = self._offset(key)
        if not 0 <= offset < len(self._cells):
            raise IndexError(f"cell {key} outside the collision grid")
        self._cells[offset] = Tile(value)

    def clear(self) -> None:
        """Set every cell back to a wall."""
        self._cells = [Tile.WALL] * (self.rows * self.cols)