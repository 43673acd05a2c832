"""The game window: drawing, scrolling background, text and fades."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pygame

from .core import HEIGHT, WIDTH

SCROLL_SPEED = 1
FADE_SPEED = 5
FADE_DELAY_MS = 10
FONT_PATH = "res/font/Pixel Emulator.otf"
TEXT_COLOR = (255, 255, 255)


class ScrollingBackground:
    """Horizontal offset of a background that scrolls left and wraps."""

    def __init__(self) -> None:
        self.x = 0

    def advance(self) -> None:
        """Scroll one step to the left, wrapping after a full screen."""
        self.x -= SCROLL_SPEED
        if self.x <= -WIDTH:
            self.x = 0

    def offsets(self) -> tuple[int, int]:
        """Return the x positions of the two copies of the background."""
        return self.x, self.x + WIDTH


class Window:
    """A display window with the drawing operations the game needs."""

    def __init__(self, title: str, width: int, height: int, root: str | Path = ".") -> None:
        pygame.display.init()
        pygame.font.init()
        self.root = Path(root)
        self.width = width
        self.height = height
        self.surface = pygame.display.set_mode((width, height))
        pygame.display.set_caption(title)
        self.background = ScrollingBackground()
        self.fade_delay_ms = FADE_DELAY_MS
        self._fonts: dict[int, pygame.font.Font] = {}

    def load_image(self, path: str | Path) -> pygame.Surface:
        """Load an image relative to the game root."""
        full = self.root / path
        if not full.is_file():
            raise FileNotFoundError(f"image not found: {full}")
        return pygame.image.load(str(full)).convert_alpha()

    def clear(self) -> None:
        """Fill the window with black."""
        self.surface.fill((0, 0, 0))

    def blit(self, image: pygame.Surface, dest: Any = None) -> pygame.Rect:
        """Draw an image; with no destination it is stretched over the window.

        ``dest`` is either a position ``(x, y)`` or a rectangle, to whose
        size the image is scaled.
        """
        if dest is None:
            rect = self.surface.get_rect()
        elif len(dest) == 4:
            rect = pygame.Rect(dest)
        else:
            rect = pygame.Rect(dest[0], dest[1], *image.get_size())
        if image.get_size() != rect.size:
            image = pygame.transform.scale(image, rect.size)
        self.surface.blit(image, rect)
        return rect

    def draw_background(self, image: pygame.Surface) -> None:
        """Draw the background twice, side by side, at the scroll offset."""
        size = (WIDTH, HEIGHT)
        if image.get_size() != size:
            image = pygame.transform.scale(image, size)
        for x in self.background.offsets():
            self.surface.blit(image, (x, 0))

    def _font(self, size: int) -> pygame.font.Font:
        font = self._fonts.get(size)
        if font is None:
            path = self.root / FONT_PATH
            font = pygame.font.Font(str(path) if path.is_file() else None, size)
            self._fonts[size] = font
        return font

    def draw_text(self, message: str, size: int, x: int, y: int) -> pygame.Rect:
        """Draw white text with its top-left corner at ``(x, y)``."""
        rendered = self._font(size).render(message, False, TEXT_COLOR)
        rect = rendered.get_rect(topleft=(x, y))
        self.surface.blit(rendered, rect)
        return rect

    def fade_out(self) -> int:
        """Darken the screen step by step; return the number of steps."""
        overlay = pygame.Surface(self.surface.get_size(), pygame.SRCALPHA)
        alpha = 0
        steps = 0
        while alpha < 255:
            overlay.fill((0, 0, 0, alpha))
            self.surface.blit(overlay, (0, 0))
            pygame.display.flip()
            pygame.time.delay(self.fade_delay_ms)
            alpha = min(alpha + FADE_SPEED, 255)
            steps += 1
        return steps

    def present(self) -> None:
        """Show what has been drawn."""
        pygame.display.flip()