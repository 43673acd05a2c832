"""Sound effects and background music."""

from __future__ import annotations

from pathlib import Path

import pygame

EFFECTS = {
    "dead": "res/audio/Dead.wav",
    "fly": "res/audio/Switch.wav",
    "pick": "res/audio/Pick_Egg.wav",
    "touch": "res/audio/Touch_Switch.wav",
}

MUSIC = {
    "bgr": "res/audio/Background.mp3",
}


def sound_path(kind: str) -> str:
    """Return the resource path, relative to the game root, of a sound."""
    try:
        return EFFECTS[kind]
    except KeyError:
        pass
    try:
        return MUSIC[kind]
    except KeyError:
        raise ValueError(f"unknown sound: {kind!r}") from None


class Audio:
    """Plays the game's sounds; stays silent when no mixer is available."""

    def __init__(self, root: str | Path = ".") -> None:
        self.root = Path(root)
        self._effects: dict[str, pygame.mixer.Sound] = {}

    def play_once(self, kind: str) -> bool:
        """Play a sound effect once. Return whether it was started."""
        if kind not in EFFECTS:
            raise ValueError(f"unknown sound effect: {kind!r}")
        if not pygame.mixer.get_init():
            return False
        sound = self._effects.get(kind)
        if sound is None:
            try:
                sound = pygame.mixer.Sound(str(self.root / EFFECTS[kind]))
            except (pygame.error, OSError):
                return False
            self._effects[kind] = sound
        sound.play()
        return True

    def play_loop(self, kind: str) -> bool:
        """Play a music track forever. Return whether it was started."""
        if kind not in MUSIC:
            raise ValueError(f"unknown music track: {kind!r}")
        if not pygame.mixer.get_init():
            return False
        try:
            pygame.mixer.music.load(str(self.root / MUSIC[kind]))
        except (pygame.error, OSError):
            return False
        pygame.mixer.music.play(-1)
        return True