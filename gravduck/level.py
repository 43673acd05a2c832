"""Level files, the tile map and the egg that ends a level."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pygame

from .core import (
    EGG_FRAMES,
    MAX_X_NO_PADDING,
    MAX_Y_NO_PADDING,
    TILE_MAX,
    TILE_SIZE,
    CollisionGrid,
    SwitchSpec,
    Tile,
    tile_collision,
)
from .images import crop, rotate_180, rotate_left

ROWS = MAX_Y_NO_PADDING - 2
COLS = MAX_X_NO_PADDING - 2
SHEET_COLUMNS = 11
PICK_TICKS_PER_FRAME = 4
PICK_LAST_FRAME = 4
PICK_OFFSET = 16


@dataclass
class LevelData:
    """Everything a level file holds."""

    start_x: float
    start_y: float
    start_gravity: float
    egg_col: float
    egg_row: float
    egg_gravity: float
    tiles: list[list[int]]
    switches: list[SwitchSpec] = field(default_factory=list)


def _take(tokens: Iterator[str], what: str) -> str:
    try:
        return next(tokens)
    except StopIteration:
        raise ValueError(f"level data ends before the {what}") from None


def _number(tokens: Iterator[str], what: str) -> float:
    token = _take(tokens, what)
    try:
        return float(token)
    except ValueError:
        raise ValueError(f"bad {what}: {token!r}") from None


def _tile_index(tokens: Iterator[str]) -> int:
    token = _take(tokens, "tile map")
    try:
        index = int(token)
    except ValueError:
        raise ValueError(f"bad tile index: {token!r}") from None
    if not -1 <= index < TILE_MAX:
        raise ValueError(f"tile index {index} outside -1..{TILE_MAX - 1}")
    return index


def parse_level(text: str) -> LevelData:
    """Parse the whitespace-separated contents of a level file.

    The file holds the start position in pixels and its gravity, the egg's
    column, row and gravity, the tile map row by row, the number of
    switches and then the x, y and gravity of each switch.
    """
    tokens = iter(text.split())
    header = [
        _number(tokens, name)
        for name in ("start x", "start y", "start gravity", "egg column", "egg row", "egg gravity")
    ]
    tiles = [[_tile_index(tokens) for _ in range(COLS)] for _ in range(ROWS)]
    count = _number(tokens, "switch count")
    if count < 0:
        raise ValueError(f"negative switch count: {count}")
    switches = [
        SwitchSpec(
            _number(tokens, "switch x"),
            _number(tokens, "switch y"),
            _number(tokens, "switch gravity"),
        )
        for _ in range(int(count))
    ]
    return LevelData(*header, tiles=tiles, switches=switches)


class GameMap:
    """The tiles of the current level, the egg and its pick animation."""

    def __init__(self, grid: CollisionGrid) -> None:
        self.grid = grid
        self.tiles: list[list[int]] = [[-1] * COLS for _ in range(ROWS)]
        self.tile_images: list[pygame.Surface] = []
        self.egg_frames: dict[int, tuple[pygame.Surface, pygame.Surface]] = {}
        self.pick_frames: list[pygame.Surface] = []
        self.current_frame = 0
        self.frame_delay = 0
        self.egg_gravity = 2
        self.egg_x = 0
        self.egg_y = 0
        self.dest_col = 0
        self.dest_row = 0
        self.player_placed = False

    def load(
        self, level: int, player: Any, switches: Any, maps_dir: str | Path = "Maps"
    ) -> LevelData:
        """Read a level file and hand its contents to the player and switches.

        The player is placed at the start only once until :meth:`reset`.
        """
        path = Path(maps_dir) / f"{level}.txt"
        data = parse_level(path.read_text())
        if not self.player_placed:
            player.place(data.start_x, data.start_y, data.start_gravity)
            self.player_placed = True
        self.egg_gravity = int(data.egg_gravity)
        self.dest_col = int(data.egg_col)
        self.dest_row = int(data.egg_row)
        self.egg_x = int(data.egg_col * TILE_SIZE)
        self.egg_y = int(data.egg_row * TILE_SIZE)
        player.set_egg(data.egg_col * TILE_SIZE, data.egg_row * TILE_SIZE, data.egg_gravity)
        self.tiles = [list(row) for row in data.tiles]
        switches.load(data.switches)
        return data

    def build_collision(self) -> None:
        """Fill the collision grid from the tiles and mark the egg's cell."""
        for r, row in enumerate(self.tiles):
            for c, index in enumerate(row):
                self.grid[r, c] = tile_collision(index)
        try:
            self.grid[self.dest_col, self.dest_row] = Tile.DEST
        except IndexError:
            # The egg's cell lies past the grid; nothing can be marked there.
            pass

    def update_pick(self, player: Any) -> None:
        """Advance the pick animation; when it ends the pick has succeeded."""
        if not player.pick:
            return
        self.frame_delay += 1
        if self.frame_delay >= PICK_TICKS_PER_FRAME:
            self.current_frame += 1
            self.frame_delay = 0
            if self.current_frame > PICK_LAST_FRAME:
                player.pick = False
                player.picked = True
                self.current_frame = 0

    def reset(self) -> None:
        """Forget the placement of the player and restart the animation."""
        self.player_placed = False
        self.frame_delay = 0
        self.current_frame = 0

    def load_tiles(self, image: pygame.Surface) -> list[pygame.Surface]:
        """Cut the tile sheet into its tiles."""
        self.tile_images = [
            crop(
                image,
                (i % SHEET_COLUMNS) * TILE_SIZE,
                (i // SHEET_COLUMNS) * TILE_SIZE,
                TILE_SIZE,
                TILE_SIZE,
            )
            for i in range(TILE_MAX)
        ]
        return self.tile_images

    def load_egg_frames(self, image: pygame.Surface) -> None:
        """Cut the egg sheet into the egg, the hidden egg and the pick frames."""
        egg, hidden = (crop(image, *rect) for rect in EGG_FRAMES[:2])
        self.pick_frames = [crop(image, *rect) for rect in EGG_FRAMES[2:]]
        self.egg_frames = {
            0: (rotate_180(egg), rotate_180(hidden)),
            1: (rotate_left(egg), rotate_left(hidden)),
            2: (egg, hidden),
        }

    def draw(self, surface: pygame.Surface) -> int:
        """Draw every non-empty tile; return how many were drawn."""
        if not self.tile_images:
            raise RuntimeError("tile images have not been loaded")
        drawn = 0
        for r, row in enumerate(self.tiles):
            for c, index in enumerate(row):
                if index == -1:
                    continue
                surface.blit(self.tile_images[index], (c * TILE_SIZE, r * TILE_SIZE))
                drawn += 1
        return drawn

    def draw_egg(self, surface: pygame.Surface, visible: bool) -> pygame.Surface | None:
        """Draw the egg, or its hidden form; return the image drawn."""
        frames = self.egg_frames.get(self.egg_gravity)
        if frames is None:
            return None
        image = frames[0] if visible else frames[1]
        surface.blit(image, (self.egg_x, self.egg_y))
        return image

    def draw_pick(self, surface: pygame.Surface, player: Any) -> pygame.Surface | None:
        """Draw the current pick frame while the egg is being picked."""
        if not player.pick or self.current_frame >= len(self.pick_frames):
            return None
        image = self.pick_frames[self.current_frame]
        surface.blit(image, (self.egg_x - PICK_OFFSET, self.egg_y - PICK_OFFSET))
        return image