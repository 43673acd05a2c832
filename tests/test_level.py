import pygame
import pytest

from gravduck.core import TILE_MAX, TILE_SIZE, CollisionGrid, SwitchSpec, Tile
from gravduck.level import COLS, ROWS, GameMap, LevelData, parse_level
from gravduck.player import Player
from gravduck.switches import SwitchRing


class FakeAudio:
    def __init__(self):
        self.played = []

    def play_once(self, kind):
        self.played.append(kind)
        return False


def level_text(start=(64, 400), egg=(10, 13, 2), switches=((100, 200, 0),), tiles=None):
    if tiles is None:
        tiles = [["0"] * COLS] + [["0"] + ["-1"] * (COLS - 2) + ["0"] for _ in range(ROWS - 2)] + [["0"] * COLS]
    lines = [f"{start[0]} {start[1]} 2", " ".join(str(v) for v in egg)]
    lines += [" ".join(row) for row in tiles]
    lines.append(str(len(switches)))
    lines += [" ".join(str(v) for v in s) for s in switches]
    return "\n".join(lines)


@pytest.fixture
def parts():
    grid = CollisionGrid()
    audio = FakeAudio()
    return grid, Player(grid, audio), SwitchRing(audio), GameMap(grid)


def test_parse_level_reads_all_fields():
    data = parse_level(level_text())
    assert isinstance(data, LevelData)
    assert (data.start_x, data.start_y) == (64.0, 400.0)
    assert (data.egg_col, data.egg_row, data.egg_gravity) == (10.0, 13.0, 2.0)
    assert len(data.tiles) == ROWS
    assert all(len(row) == COLS for row in data.tiles)
    assert data.tiles[0][0] == 0
    assert data.tiles[5][5] == -1
    assert data.switches == [SwitchSpec(100.0, 200.0, 0.0)]


def test_parse_level_truncated_raises():
    text = level_text()
    with pytest.raises(ValueError):
        parse_level(text[: len(text) // 2])


def test_parse_level_tile_out_of_range():
    tiles = [["0"] * COLS for _ in range(ROWS)]
    tiles[3][3] = str(TILE_MAX)
    with pytest.raises(ValueError):
        parse_level(level_text(tiles=tiles))


def test_parse_level_bad_tile_token():
    tiles = [["0"] * COLS for _ in range(ROWS)]
    tiles[1][1] = "x"
    with pytest.raises(ValueError):
        parse_level(level_text(tiles=tiles))


def test_load_places_player_once_until_reset(tmp_path, parts):
    _, player, switches, gm = parts
    (tmp_path / "1.txt").write_text(level_text())
    gm.load(1, player, switches, tmp_path)
    assert (player.x, player.y) == (64.0, 400.0)
    player.x = 5.0
    gm.load(1, player, switches, tmp_path)
    assert player.x == 5.0
    gm.reset()
    gm.load(1, player, switches, tmp_path)
    assert player.x == 64.0


def test_load_hands_egg_and_switches(tmp_path, parts):
    _, player, switches, gm = parts
    (tmp_path / "3.txt").write_text(level_text(switches=((7, 8, 1), (9, 10, 2))))
    gm.load(3, player, switches, tmp_path)
    assert switches.buttons == [SwitchSpec(7.0, 8.0, 1.0), SwitchSpec(9.0, 10.0, 2.0)]
    assert (player.egg_x, player.egg_y) == (gm.egg_x, gm.egg_y)
    assert (gm.dest_col, gm.dest_row) == (10, 13)
    assert player.egg_gravity == gm.egg_gravity == 2


def test_load_missing_file(tmp_path, parts):
    _, player, switches, gm = parts
    with pytest.raises(FileNotFoundError):
        gm.load(42, player, switches, tmp_path)


def test_build_collision(parts):
    grid, _, _, gm = parts
    gm.tiles = [[-1] * COLS for _ in range(ROWS)]
    gm.tiles[0][0] = 0
    gm.tiles[1][1] = 40
    gm.dest_col, gm.dest_row = 3, 2
    gm.build_collision()
    assert grid[0, 0] == Tile.WALL
    assert grid[1, 1] == Tile.TRAP
    assert grid[2, 2] == Tile.NOTHING
    assert grid[3, 2] == Tile.DEST


def test_update_pick_finishes(parts):
    _, player, _, gm = parts
    player.pick = True
    ticks = 0
    while not player.picked and ticks < 200:
        gm.update_pick(player)
        ticks += 1
    assert player.picked is True
    assert player.pick is False
    assert gm.current_frame == 0


def test_update_pick_idle_without_pick(parts):
    _, player, _, gm = parts
    gm.update_pick(player)
    assert (gm.frame_delay, gm.current_frame) == (0, 0)


def test_load_tiles_cuts_sheet():
    sheet = pygame.Surface((11 * TILE_SIZE, 4 * TILE_SIZE))
    for i in range(TILE_MAX):
        rect = pygame.Rect((i % 11) * TILE_SIZE, (i // 11) * TILE_SIZE, TILE_SIZE, TILE_SIZE)
        sheet.fill((i, 0, 0), rect)
    gm = GameMap(CollisionGrid())
    tiles = gm.load_tiles(sheet)
    assert len(tiles) == TILE_MAX
    assert [t.get_at((5, 5))[0] for t in tiles] == list(range(TILE_MAX))
    assert all(t.get_size() == (TILE_SIZE, TILE_SIZE) for t in tiles)


def test_draw_counts_tiles():
    gm = GameMap(CollisionGrid())
    gm.load_tiles(pygame.Surface((11 * TILE_SIZE, 4 * TILE_SIZE)))
    gm.tiles = [[-1] * COLS for _ in range(ROWS)]
    gm.tiles[0][0] = 1
    gm.tiles[2][3] = 5
    surface = pygame.Surface((640, 480))
    assert gm.draw(surface) == 2


def test_draw_without_tiles_raises():
    with pytest.raises(RuntimeError):
        GameMap(CollisionGrid()).draw(pygame.Surface((640, 480)))


def test_egg_frames_visible_and_hidden():
    sheet = pygame.Surface((288, 64))
    sheet.fill((255, 0, 0), pygame.Rect(0, 0, 32, 32))
    sheet.fill((0, 0, 255), pygame.Rect(0, 32, 32, 32))
    gm = GameMap(CollisionGrid())
    gm.load_egg_frames(sheet)
    surface = pygame.Surface((640, 480))
    shown = gm.draw_egg(surface, True)
    hidden = gm.draw_egg(surface, False)
    assert shown.get_at((16, 16))[:3] == (255, 0, 0)
    assert hidden.get_at((16, 16))[:3] == (0, 0, 255)
    assert len(gm.pick_frames) == 4
    gm.egg_gravity = 3
    assert gm.draw_egg(surface, True) is None


def test_draw_pick_only_while_picking(parts):
    _, player, _, gm = parts
    gm.load_egg_frames(pygame.Surface((288, 64)))
    surface = pygame.Surface((640, 480))
    assert gm.draw_pick(surface, player) is None
    player.pick = True
    assert gm.draw_pick(surface, player) is gm.pick_frames[0]