from __future__ import annotations

import random
from typing import Optional, Tuple

import pygame

from collision import Box

# Keeps the player in the lower part of the window so more road is visible ahead.
LOOKAHEAD_TILES = 3
SHAKE_INTENSITY = 20.0


def camera_target(player_x: float, player_y: float, tile_size: int) -> Tuple[float, float]:
    """Return desired camera (x, y) target: the world point at the window center."""
    return player_x, player_y + tile_size * LOOKAHEAD_TILES


def update_camera(
    camera: pygame.Vector2,
    player_x: float,
    player_y: float,
    tile_size: int,
    shake: float = 0.0,
    rng: Optional[random.Random] = None,
) -> None:
    """Follow the player, jittered by the current camera shake."""
    target_x, target_y = camera_target(player_x, player_y, tile_size)
    camera.update(target_x, target_y)
    if shake > 0:
        r = rng or random
        intensity = shake * SHAKE_INTENSITY
        camera.x += (r.random() - 0.5) * intensity
        camera.y += (r.random() - 0.5) * intensity


def world_to_screen(
    x: float, y: float, camera: pygame.Vector2, window_w: int, window_h: int
) -> Tuple[int, int]:
    """Convert a world point to screen pixels; world +y (forward) points up."""
    sx = int(round(x - camera.x + window_w / 2))
    sy = int(round(window_h / 2 - (y - camera.y)))
    return sx, sy


def box_to_screen(box: Box, camera: pygame.Vector2, window_w: int, window_h: int) -> pygame.Rect:
    left, top = world_to_screen(box.left, box.top, camera, window_w, window_h)
    right, bottom = world_to_screen(box.right, box.bottom, camera, window_w, window_h)
    return pygame.Rect(left, top, max(1, right - left), max(1, bottom - top))


def visible_row_bounds(
    camera: pygame.Vector2, window_h: int, tile_size: int
) -> Tuple[int, int]:
    """Return (first_row, last_row) intersecting the viewport."""
    half = window_h / 2
    first = int((camera.y - half) // tile_size) - 1
    last = int((camera.y + half) // tile_size) + 1
    return first, last
