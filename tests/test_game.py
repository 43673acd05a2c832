import pygame
import pytest

from gravduck.core import GameState
from gravduck.game import LAST_LEVEL, Game, level_label, main

ROWS, COLS = 15, 20

IMAGES = {
    "res/image/Game/Tiles.png": (352, 128),
    "res/image/Game/Player.png": (224, 64),
    "res/image/Game/Egg.png": (288, 64),
    "res/image/Game/Switch.png": (48, 48),
    "res/image/Game/Death.png": (32, 32),
    "res/image/Game/BG.png": (640, 480),
    "res/image/Menu/BG.png": (640, 480),
    "res/image/Menu/Main.png": (640, 480),
}


def level_text():
    rows = [["0"] * COLS] + [["0"] + ["-1"] * (COLS - 2) + ["0"] for _ in range(ROWS - 2)] + [["0"] * COLS]
    lines = ["64 400 2", "10 13 2"] + [" ".join(r) for r in rows] + ["1", "100 200 0"]
    return "\n".join(lines)


def write_resources(root):
    for rel, size in IMAGES.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        surface = pygame.Surface(size)
        surface.fill((40, 80, 120))
        pygame.image.save(surface, str(path))
    maps = root / "Maps"
    maps.mkdir()
    for level in (1, 2, LAST_LEVEL):
        (maps / f"{level}.txt").write_text(level_text())


@pytest.fixture
def game(tmp_path, monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    write_resources(tmp_path)
    g = Game(tmp_path)
    g.window.fade_delay_ms = 0
    yield g
    pygame.quit()


def key(kind, code):
    return pygame.event.Event(kind, key=code)


def start(game):
    game.handle_event(key(pygame.KEYDOWN, pygame.K_RETURN))


def test_level_label():
    assert level_label(3) == "Level: 03"
    assert level_label(12) == "Level: 12"


def test_main_help_exits():
    with pytest.raises(SystemExit) as info:
        main(["--help"])
    assert info.value.code == 0


def test_return_starts_playing(game):
    assert game.state == GameState.MENU
    start(game)
    assert game.state == GameState.PLAYING


def test_escape_returns_to_menu(game):
    start(game)
    game.level = 5
    game.handle_event(key(pygame.KEYDOWN, pygame.K_ESCAPE))
    assert game.state == GameState.MENU
    assert game.level == 1


def test_quit_stops(game):
    game.handle_event(pygame.event.Event(pygame.QUIT))
    assert game.running is False


def test_menu_tick_scrolls(game):
    assert game.tick() is True
    assert game.window.background.x == -1


def test_playing_tick_places_player(game):
    start(game)
    assert game.tick() is True
    assert (game.player.x, game.player.y) == (64.0, 400.0)
    assert game.map.player_placed is True


def test_arrow_key_reaches_player(game):
    start(game)
    game.handle_event(key(pygame.KEYDOWN, pygame.K_LEFT))
    assert game.player.facing == 0


def test_cheat_passes_level(game):
    start(game)
    game.handle_event(key(pygame.KEYDOWN, pygame.K_d))
    passed = False
    for _ in range(200):
        if not game.tick():
            passed = True
            break
    assert passed
    assert game.level == 2
    assert game.player.picked is False


def test_level_capped_at_last(game):
    start(game)
    game.level = LAST_LEVEL
    game.handle_event(key(pygame.KEYDOWN, pygame.K_d))
    passed = any(not game.tick() for _ in range(200))
    assert passed
    assert game.level == LAST_LEVEL


def test_death_respawns(game):
    start(game)
    game.tick()
    game.player.spawning = False
    game.player.died = True
    game.tick()
    assert game.player.alive is True
    assert game.player.spawning is True