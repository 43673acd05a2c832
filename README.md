# gravduck

A small tile-based puzzle platformer. A duck walks on the floor, walls and
ceiling of each level; it cannot jump, but it can turn gravity around. Reach
the egg while gravity pulls the right way and the level is passed. Spikes, or
leaving the screen, end the attempt and send the duck back to the start of the
level. There are 15 levels; passing the last one replays it.

## Installing

```
pip install .
```

This pulls in `pygame`, which draws the window and plays the sound.

## Running

```
gravduck [--root DIR]
```

`--root` names the game directory (default: the current directory). It must
be laid out like this:

```
Maps/1.txt ... Maps/15.txt
res/image/Game/   Player.png, Death.png, Egg.png, Tiles.png, Switch.png, BG.png
res/image/Menu/   BG.png, Main.png
res/audio/        Background.mp3, Dead.wav, Switch.wav, Pick_Egg.wav, Touch_Switch.wav
res/font/         Pixel Emulator.otf
```

A missing image stops the game with `FileNotFoundError`. A missing sound file
is simply not played, and a missing font falls back to pygame's default font.
If the audio mixer cannot be started at all, the command prints
`Failed to initialize audio!` and exits with status 1.

## Controls

| Key         | Action                                             |
|-------------|----------------------------------------------------|
| Enter       | start from the menu                                |
| Arrow keys  | walk along the current floor                       |
| Space       | reverse gravity (only after touching a surface)    |
| Escape      | back to the menu, progress reset to level 1        |
| D           | collect the egg at once, passing the level         |

Spinning switch rings turn gravity a quarter turn when the centre of the duck
comes within 10 pixels of the centre of a ring.

## Level files

Each `Maps/<n>.txt` is a whitespace-separated list of numbers:

1. the duck's start x and y in pixels, and a start gravity (the duck always
   starts with gravity pulling down);
2. the egg's column and row, and the gravity the duck must have to collect it
   (`0` up, `1` left, `2` down, `3` right; left and right count as the same);
3. 15 rows of 20 tile indices: `-1` for empty space, `0` to `39` for walls,
   `40` to `43` for spikes;
4. the number of switch rings, then for each ring its x and y in pixels and a
   gravity value. A ring at `0 0` is ignored.

To check a level file from Python:

```python
from pathlib import Path
from gravduck.level import parse_level

data = parse_level(Path("Maps/1.txt").read_text())
print(data.start_x, data.start_y, data.egg_col, data.egg_row, len(data.switches))
```

`parse_level` returns a `LevelData` and raises `ValueError` when the file ends
early, holds something that is not a number, a tile index outside `-1..43`, or
a negative switch count. `gravduck.core.tile_collision` gives the collision
kind (`Tile.WALL`, `Tile.NOTHING`, `Tile.TRAP`) of a tile index.

## What it does not do

The package holds the game code only. It ships no level files, images, sounds
or font; the game runs only against a game directory that provides them as
shown above. It keeps no saved progress: every start begins at level 1.

## Tests

```
pip install .[test]
pytest
```