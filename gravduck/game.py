"""The game loop: menu, playing a level and moving between levels."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

import pygame

from .audio import Audio
from .core import HEIGHT, PLAYER_FRAMES, WIDTH, CollisionGrid, GameState
from .images import build_orientations, crop
from .level import GameMap
from .player import Player
from .switches import SwitchRing
from .window import Window

TITLE = "Gravity Duck"
FPS = 40
FRAME_MS = 1000 // FPS
LAST_LEVEL = 15
RUN_FRAMES = 6

TILES_IMAGE = "res/image/Game/Tiles.png"
PLAYER_IMAGE = "res/image/Game/Player.png"
SWITCH_IMAGE = "res/image/Game/Switch.png"
DEATH_IMAGE = "res/image/Game/Death.png"
EGG_IMAGE = "res/image/Game/Egg.png"
GAME_BACKGROUND = "res/image/Game/BG.png"
MENU_BACKGROUND = "res/image/Menu/BG.png"
MENU_IMAGE = "res/image/Menu/Main.png"
MAPS_DIR = "Maps"
PASSED_TEXT = "Passed!"


def level_label(level: int) -> str:
    """Return the level caption shown in the corner, e.g. ``Level: 03``."""
    number = str(level)
    return "Level: " + ("0" + number if level < 10 else number)


def _by_orientation(frames: Sequence) -> list:
    return [[[frame[g][facing] for frame in frames] for facing in range(2)] for g in range(4)]


class Game:
    """The whole game: window, level, player, switches and state."""

    def __init__(self, root: str | Path = ".") -> None:
        self.root = Path(root)
        self.window = Window(TITLE, WIDTH, HEIGHT, self.root)
        self.grid = CollisionGrid()
        self.audio = Audio(self.root)
        self.player = Player(self.grid, self.audio)
        self.switches = SwitchRing(self.audio)
        self.map = GameMap(self.grid)
        self._images: dict[str, pygame.Surface] = {}

        self.map.load_tiles(self.window.load_image(TILES_IMAGE))
        sheet = self.window.load_image(PLAYER_IMAGE)
        oriented = [build_orientations(crop(sheet, *rect)) for rect in PLAYER_FRAMES]
        self.sprites = {
            "run": _by_orientation(oriented[:RUN_FRAMES]),
            "spawn": _by_orientation(oriented[RUN_FRAMES:]),
            "death": self.window.load_image(DEATH_IMAGE),
        }
        self.switch_image = self.window.load_image(SWITCH_IMAGE)
        self.map.load_egg_frames(self.window.load_image(EGG_IMAGE))

        self.state = GameState.MENU
        self.level = 1
        self.running = True
        self._cheat = False

    def _image(self, path: str) -> pygame.Surface:
        image = self._images.get(path)
        if image is None:
            image = self._images[path] = self.window.load_image(path)
        return image

    def handle_event(self, event: pygame.event.Event) -> None:
        """React to one input event."""
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN and self.state == GameState.MENU:
            if event.key == pygame.K_RETURN:
                self.state = GameState.PLAYING
                self.window.fade_out()
        elif event.type in (pygame.KEYDOWN, pygame.KEYUP) and self.state == GameState.PLAYING:
            if event.key == pygame.K_d:
                self._cheat = True
            elif event.key == pygame.K_ESCAPE:
                self.state = GameState.MENU
                self.level = 1
                self.player.reset()
                self.map.reset()
                self.window.fade_out()
            else:
                self.player.handle_key(event.key, event.type == pygame.KEYDOWN)

    def _play(self) -> bool:
        window, player, gmap = self.window, self.player, self.map
        window.blit(self._image(GAME_BACKGROUND), None)
        gmap.load(self.level, player, self.switches, self.root / MAPS_DIR)
        gmap.build_collision()
        gmap.draw(window.surface)
        gmap.draw_egg(window.surface, False)
        self.switches.advance()
        self.switches.draw(window.surface, self.switch_image)
        window.draw_text(level_label(self.level), 12, 0, 0)
        if player.pick:
            window.draw_text(PASSED_TEXT, 64, (320 - 64) // 2, (240 - 64) // 2)
            gmap.update_pick(player)
            gmap.draw_pick(window.surface, player)
            player.spawning = True
            if player.picked:
                self.level = min(self.level + 1, LAST_LEVEL)
                player.reset()
                gmap.reset()
                window.fade_out()
                return False
        else:
            gmap.update_pick(player)
            gmap.draw_egg(window.surface, True)

        if player.spawning and not player.pick:
            player.advance_spawn()
            player.draw_spawn(window.surface, self.sprites)
        elif player.spawning:
            player.advance_spawn()
            player.draw_despawn(window.surface, self.sprites)
        else:
            player.step()
            player.show(window.surface, self.sprites, pygame.time.get_ticks())
            self.switches.check_collision(player)
        return True

    def tick(self) -> bool:
        """Update and draw one frame; return False when a level was just passed."""
        self.window.clear()
        if self._cheat:
            self.player.pick = True
            self._cheat = False
        if self.state == GameState.MENU:
            self.window.background.advance()
            self.window.draw_background(self._image(MENU_BACKGROUND))
            self.window.blit(self._image(MENU_IMAGE), None)
        if self.state == GameState.PLAYING and not self._play():
            return False
        if not self.player.alive:
            self.player.spawning = True
            self.player.reset()
            self.window.fade_out()
        self.window.present()
        return True

    def run(self) -> None:
        """Run frames until the window is closed."""
        while self.running:
            start = pygame.time.get_ticks()
            for event in pygame.event.get():
                self.handle_event(event)
            if not self.tick():
                continue
            elapsed = pygame.time.get_ticks() - start
            if elapsed < FRAME_MS:
                pygame.time.delay(FRAME_MS - elapsed)


def main(argv: Sequence[str] | None = None) -> int:
    """Start the game."""
    parser = argparse.ArgumentParser(prog="gravduck", description="Play Gravity Duck.")
    parser.add_argument("--root", default=".", help="directory holding res/ and Maps/")
    args = parser.parse_args(argv)
    pygame.init()
    try:
        pygame.mixer.init(22050, -16, 2, 4096)
    except pygame.error:
        print("Failed to initialize audio!", file=sys.stderr)
        pygame.quit()
        return 1
    try:
        game = Game(args.root)
        game.audio.play_loop("bgr")
        game.run()
    finally:
        pygame.quit()
    return 0