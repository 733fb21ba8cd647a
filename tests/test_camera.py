import random

import pygame
import pytest

from camera import LOOKAHEAD_TILES, SHAKE_INTENSITY, box_to_screen, update_camera, visible_row_bounds, world_to_screen
from collision import Box


def test_forward_is_up_on_screen():
    cam = pygame.Vector2(0, 0)
    assert world_to_screen(0, 0, cam, 800, 600) == (400, 300)
    assert world_to_screen(0, 42, cam, 800, 600) == (400, 258)
    assert world_to_screen(-42, 0, cam, 800, 600) == (358, 300)


def test_camera_leads_the_player():
    cam = pygame.Vector2()
    update_camera(cam, 10.0, 84.0, 42)
    assert cam.x == pytest.approx(10.0)
    assert cam.y == pytest.approx(84.0 + 42 * LOOKAHEAD_TILES)


def test_shake_offsets_stay_within_intensity():
    rng = random.Random(5)
    for _ in range(50):
        cam = pygame.Vector2()
        update_camera(cam, 0.0, 0.0, 42, shake=1.0, rng=rng)
        assert abs(cam.x) <= SHAKE_INTENSITY / 2
        assert abs(cam.y - 42 * LOOKAHEAD_TILES) <= SHAKE_INTENSITY / 2


def test_box_to_screen():
    rect = box_to_screen(Box(-10, 10, -5, 5), pygame.Vector2(0, 0), 100, 100)
    assert rect == pygame.Rect(40, 45, 20, 10)


def test_visible_rows_cover_viewport():
    first, last = visible_row_bounds(pygame.Vector2(0, 420), 600, 42)
    assert first <= (420 - 300) // 42
    assert last >= (420 + 300) // 42
