"""Cropping, rotating and flipping of sprite images."""

from __future__ import annotations

import pygame


def crop(surface: pygame.Surface, x: int, y: int, w: int, h: int) -> pygame.Surface:
    """Return a new transparent-backed surface holding a region of ``surface``."""
    target = pygame.Surface((w, h), pygame.SRCALPHA)
    target.fill((0, 0, 0, 0))
    target.blit(surface, (0, 0), pygame.Rect(x, y, w, h))
    return target


def rotate_left(surface: pygame.Surface) -> pygame.Surface:
    """Rotate a quarter turn anticlockwise."""
    return pygame.transform.rotate(surface, 90)


def rotate_180(surface: pygame.Surface) -> pygame.Surface:
    """Rotate a half turn."""
    return pygame.transform.rotate(surface, 180)


def flip_horizontal(surface: pygame.Surface) -> pygame.Surface:
    """Mirror left to right."""
    return pygame.transform.flip(surface, True, False)


def flip_vertical(surface: pygame.Surface) -> pygame.Surface:
    """Mirror top to bottom."""
    return pygame.transform.flip(surface, False, True)


def build_orientations(frame: pygame.Surface) -> tuple[tuple[pygame.Surface, pygame.Surface], ...]:
    """Return a frame in every gravity and facing, indexed ``[gravity][facing]``.

    ``frame`` is the sprite standing on the floor (gravity down) facing right.
    """
    down_right = frame
    right_left = rotate_left(frame)
    up_left = rotate_180(frame)
    left_right = rotate_180(right_left)
    up_right = flip_horizontal(up_left)
    left_left = flip_vertical(left_right)
    down_left = flip_horizontal(down_right)
    right_right = flip_vertical(right_left)
    return (
        (up_left, up_right),
        (left_left, left_right),
        (down_left, down_right),
        (right_left, right_right),
    )