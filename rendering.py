from __future__ import annotations

from typing import List, Optional, Sequence

import pygame

from camera import box_to_screen, visible_row_bounds, world_to_screen
from collision import Box, player_box, vehicle_box
from game_types import Color, GameStatus, RowKind
from models import TREE_HEIGHT_UNITS, ForestRow, GameConfig, LaneRow, Row
from simulation import GameSnapshot, Simulation
from traffic import VehicleActor

GRASS_PRIMARY: Color = (186, 244, 85)
GRASS_SECONDARY: Color = (153, 200, 70)
ROAD_PRIMARY: Color = (69, 74, 89)
ROAD_SECONDARY: Color = (57, 61, 73)
TREE_FOLIAGE: Color = (122, 162, 29)
TREE_TRUNK: Color = (77, 41, 38)
TRUCK_CARGO: Color = (180, 198, 252)
CAR_WINDOW: Color = (255, 255, 255)
PLAYER_BELLY: Color = (210, 180, 140)


def draw_row_ground(
    surf: pygame.Surface,
    row: Optional[Row],
    row_index: int,
    cfg: GameConfig,
    camera: pygame.Vector2,
    window_w: int,
    window_h: int,
) -> None:
    """Draw one row strip: the playable span in the primary shade, the rest darker."""
    ts = cfg.board.tile_size
    is_road = isinstance(row, LaneRow)
    primary = ROAD_PRIMARY if is_road else GRASS_PRIMARY
    secondary = ROAD_SECONDARY if is_road else GRASS_SECONDARY

    _, top = world_to_screen(0, row_index * ts + ts / 2, camera, window_w, window_h)
    pygame.draw.rect(surf, secondary, pygame.Rect(0, top, window_w, ts + 1))

    span = Box(
        left=(cfg.board.min_tile_index - 0.5) * ts,
        right=(cfg.board.max_tile_index + 0.5) * ts,
        bottom=row_index * ts - ts / 2,
        top=row_index * ts + ts / 2,
    )
    pygame.draw.rect(surf, primary, box_to_screen(span, camera, window_w, window_h))


def draw_forest(
    surf: pygame.Surface,
    row: ForestRow,
    row_index: int,
    cfg: GameConfig,
    camera: pygame.Vector2,
    window_w: int,
    window_h: int,
) -> None:
    ts = cfg.board.tile_size
    for tree in row.trees:
        cx, cy = world_to_screen(tree.tile_index * ts, row_index * ts, camera, window_w, window_h)
        # Taller trees get a wider crown in the top-down view.
        radius = int(ts * 0.25 + TREE_HEIGHT_UNITS[tree.height] * 0.15)
        pygame.draw.circle(surf, TREE_TRUNK, (cx, cy), max(3, ts // 6))
        pygame.draw.circle(surf, TREE_FOLIAGE, (cx, cy), radius, width=0)
        pygame.draw.circle(surf, TREE_TRUNK, (cx, cy), radius, width=2)


def draw_vehicle(
    surf: pygame.Surface,
    actor: VehicleActor,
    cfg: GameConfig,
    camera: pygame.Vector2,
    window_w: int,
    window_h: int,
) -> None:
    box = vehicle_box(actor, cfg.vehicles, cfg.board.tile_size)
    rect = box_to_screen(box, camera, window_w, window_h)
    if actor.kind == RowKind.TRUCK:
        # Cargo box behind a colored cab at the front.
        cab_w = rect.w * 3 // 10
        pygame.draw.rect(surf, TRUCK_CARGO, rect, border_radius=4)
        cab = pygame.Rect(rect.right - cab_w if actor.direction else rect.left, rect.y, cab_w, rect.h)
        pygame.draw.rect(surf, actor.color, cab, border_radius=4)
    else:
        pygame.draw.rect(surf, actor.color, rect, border_radius=6)
        window = rect.inflate(-rect.w // 2, -rect.h // 3)
        window.x += -rect.w // 10 if actor.direction else rect.w // 10
        pygame.draw.rect(surf, CAR_WINDOW, window, border_radius=3)


def draw_player(
    surf: pygame.Surface,
    snap: GameSnapshot,
    cfg: GameConfig,
    camera: pygame.Vector2,
    window_w: int,
    window_h: int,
) -> None:
    """Draw the player, scaled up slightly mid-hop."""
    p = cfg.player
    box = player_box(pygame.Vector2(snap.player_x, snap.player_y), p.width, p.depth, p.forward_offset)
    rect = box_to_screen(box, camera, window_w, window_h)
    lift = int(snap.hop_height - cfg.player.base_height)
    rect = rect.inflate(lift, lift)
    pygame.draw.rect(surf, cfg.player.color, rect, border_radius=5)
    pygame.draw.rect(surf, PLAYER_BELLY, rect.inflate(-rect.w // 2, -rect.h // 2), border_radius=3)


def draw_hud(surf: pygame.Surface, hud_font: pygame.font.Font, snap: GameSnapshot) -> None:
    """Draw HUD text."""
    bar_height = hud_font.get_height() + 12
    bar = pygame.Surface((surf.get_width(), bar_height), pygame.SRCALPHA)
    bar.fill((0, 0, 0, 200))
    surf.blit(bar, (0, 0))

    txt = (
        f"Score: {snap.score} | Level: {snap.level} | Best: {snap.high_score} "
        "| Arrows/WASD: move | Space: pause | Q: quit"
    )
    surf.blit(hud_font.render(txt, True, (255, 255, 255)), (12, 6))


def draw_message_overlay(
    surf: pygame.Surface,
    lines: Sequence[str],
    title_font: pygame.font.Font,
    body_font: pygame.font.Font,
    window_w: int,
    window_h: int,
) -> None:
    """Dim the screen and draw centered text lines (first line as title)."""
    if not lines:
        return

    dim = pygame.Surface((window_w, window_h), pygame.SRCALPHA)
    dim.fill((0, 0, 0, 170))
    surf.blit(dim, (0, 0))

    rendered: List[pygame.Surface] = [title_font.render(lines[0], True, (255, 255, 255))]
    rendered += [body_font.render(line, True, (255, 255, 255)) for line in lines[1:]]
    total_h = sum(s.get_height() + 8 for s in rendered)
    cursor_y = (window_h - total_h) // 2
    for s in rendered:
        rect = s.get_rect()
        rect.centerx = window_w // 2
        rect.top = cursor_y
        surf.blit(s, rect.topleft)
        cursor_y += s.get_height() + 8


def game_over_lines(snap: GameSnapshot) -> List[str]:
    """Overlay text for a finished run; a run that set the best score says so."""
    new_best = snap.score > 0 and snap.score == snap.high_score
    title = "NEW HIGH SCORE!" if new_best else "GAME OVER"
    return [title, f"Score: {snap.score}   Best: {snap.high_score}", "Press R to retry"]


class GameRenderer:
    """Top-down renderer for the board, traffic, player and overlays."""

    DECORATIVE_ROWS = 8  # grass rows drawn behind the start

    def __init__(self, window_w: int, window_h: int, bg: Color = (18, 20, 28)) -> None:
        self.window_w = window_w
        self.window_h = window_h
        self.bg = bg
        self.hud_font = pygame.font.SysFont("monospace", 18)
        self.title_font = pygame.font.SysFont("monospace", 40, bold=True)
        self.body_font = pygame.font.SysFont("monospace", 22)

    def render_frame(self, screen: pygame.Surface, sim: Simulation, camera: pygame.Vector2) -> None:
        """Render and present a full frame."""
        cfg = sim.cfg
        snap = sim.snapshot()
        w, h = self.window_w, self.window_h
        screen.fill(self.bg)

        first, last = visible_row_bounds(camera, h, cfg.board.tile_size)
        first = max(first, -self.DECORATIVE_ROWS)
        for row_index in range(last, first - 1, -1):
            row = sim.board.row_at(row_index)
            draw_row_ground(screen, row, row_index, cfg, camera, w, h)
            if isinstance(row, ForestRow):
                draw_forest(screen, row, row_index, cfg, camera, w, h)

        # Culling by distance is cosmetic; every vehicle is still simulated and checked.
        visible = sim.traffic.near_row(snap.player_row, cfg.vehicles.visibility_distance)
        for actor in visible:
            if first <= actor.row_index <= last:
                draw_vehicle(screen, actor, cfg, camera, w, h)

        draw_player(screen, snap, cfg, camera, w, h)
        draw_hud(screen, self.hud_font, snap)

        if snap.status == GameStatus.PAUSED:
            draw_message_overlay(
                screen, ["PAUSED", "Press Space to resume"], self.title_font, self.body_font, w, h
            )
        elif snap.status == GameStatus.OVER:
            draw_message_overlay(
                screen,
                game_over_lines(snap),
                self.title_font,
                self.body_font,
                w,
                h,
            )
        pygame.display.flip()
