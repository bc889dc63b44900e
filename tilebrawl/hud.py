"""Heads-up display: health bars and the tile ownership bar."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import pygame

HEALTH_BAR_WIDTH = 200.0
HEALTH_BAR_HEIGHT = 20.0
HEALTH_BAR_PADDING = 20.0
HEALTH_TEXT_OFFSET_Y = 5.0
HEALTH_TEXT_SIZE = 16
OWNERSHIP_BAR_WIDTH = 300.0
OWNERSHIP_BAR_HEIGHT = 20.0
OWNERSHIP_BAR_PADDING_TOP = 20.0
OWNERSHIP_TEXT_SIZE = 14
LABEL_MARGIN = 10.0
FULL_HEALTH = 100.0

PANEL_COLOR = (100, 100, 100, 200)
OUTLINE_COLOR = (0, 0, 0)
OUTLINE_THICKNESS = 2
GREEN = (0, 255, 0)
RED = (255, 0, 0)
WHITE = (255, 255, 255)
PLAYER1_COLOR = (0, 0, 255)
PLAYER2_COLOR = (0, 255, 255)

Rect = Tuple[float, float, float, float]
Point = Tuple[float, float]
FontFace = Callable[[int], pygame.font.Font]


@dataclass(frozen=True)
class HudLayout:
    """Positions and sizes of every HUD element, as (x, y, w, h) rectangles."""

    health_background1: Rect
    health_green1: Rect
    health_red1: Rect
    health_label1: Point
    health_background2: Rect
    health_green2: Rect
    health_red2: Rect
    health_label2: Point
    ownership_background: Rect
    ownership_bar1: Rect
    ownership_bar2: Rect
    percent_text1: str
    percent_center1: Point
    percent_text2: str
    percent_center2: Point


def _clamp(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def _health_bar(x: float, health: float):
    fraction = _clamp(health / FULL_HEALTH)
    y = HEALTH_BAR_PADDING
    green_width = HEALTH_BAR_WIDTH * fraction
    background = (x, y, HEALTH_BAR_WIDTH, HEALTH_BAR_HEIGHT)
    green = (x, y, green_width, HEALTH_BAR_HEIGHT)
    red = (x + green_width, y, HEALTH_BAR_WIDTH * (1.0 - fraction), HEALTH_BAR_HEIGHT)
    label = (x + HEALTH_BAR_WIDTH / 2.0, y + HEALTH_BAR_HEIGHT + HEALTH_TEXT_OFFSET_Y)
    return background, green, red, label


def compute_layout(window_width, window_height, health1, health2, owned1, owned2, total_tiles) -> HudLayout:
    """Lay out the HUD for a window and the players' state."""
    bg1, green1, red1, label1 = _health_bar(HEALTH_BAR_PADDING, health1)
    bg2, green2, red2, label2 = _health_bar(
        window_width - HEALTH_BAR_WIDTH - HEALTH_BAR_PADDING, health2
    )

    ox = window_width / 2.0 - OWNERSHIP_BAR_WIDTH / 2.0
    oy = OWNERSHIP_BAR_PADDING_TOP
    share1 = _clamp(owned1 / total_tiles) if total_tiles > 0 else 0.0
    share2 = _clamp(owned2 / total_tiles) if total_tiles > 0 else 0.0
    width1 = OWNERSHIP_BAR_WIDTH * share1
    width2 = OWNERSHIP_BAR_WIDTH * share2
    bar1 = (ox, oy, width1, OWNERSHIP_BAR_HEIGHT)
    bar2 = (ox + OWNERSHIP_BAR_WIDTH - width2, oy, width2, OWNERSHIP_BAR_HEIGHT)
    middle = oy + OWNERSHIP_BAR_HEIGHT / 2.0

    return HudLayout(
        health_background1=bg1,
        health_green1=green1,
        health_red1=red1,
        health_label1=label1,
        health_background2=bg2,
        health_green2=green2,
        health_red2=red2,
        health_label2=label2,
        ownership_background=(ox, oy, OWNERSHIP_BAR_WIDTH, OWNERSHIP_BAR_HEIGHT),
        ownership_bar1=bar1,
        ownership_bar2=bar2,
        percent_text1=f"{int(share1 * 100)}%",
        percent_center1=(bar1[0] + width1 / 2.0, middle),
        percent_text2=f"{int(share2 * 100)}%",
        percent_center2=(bar2[0] - width2 / 2.0, middle),
    )


def _to_rect(rect: Rect) -> pygame.Rect:
    return pygame.Rect(round(rect[0]), round(rect[1]), round(rect[2]), round(rect[3]))


def _fill(surface: pygame.Surface, rect: Rect, color) -> None:
    r = _to_rect(rect)
    if r.width > 0 and r.height > 0:
        pygame.draw.rect(surface, color, r)


def _panel(surface: pygame.Surface, rect: Rect) -> None:
    r = _to_rect(rect)
    if r.width > 0 and r.height > 0:
        panel = pygame.Surface(r.size, pygame.SRCALPHA)
        panel.fill(PANEL_COLOR)
        surface.blit(panel, r.topleft)
    grow = 2 * OUTLINE_THICKNESS
    pygame.draw.rect(surface, OUTLINE_COLOR, r.inflate(grow, grow), width=OUTLINE_THICKNESS)


class Hud:
    """Draws both players' health and their share of the arena."""

    def __init__(self, font: Optional[FontFace] = None) -> None:
        if not pygame.font.get_init():
            pygame.font.init()
        face = font or (lambda size: pygame.font.Font(None, size))
        self._percent_font = face(OWNERSHIP_TEXT_SIZE)
        health_font = face(HEALTH_TEXT_SIZE)
        self._health_labels = (
            health_font.render("P1 HEALTH", True, WHITE),
            health_font.render("P2 HEALTH", True, WHITE),
        )
        self.layout: Optional[HudLayout] = None
        self.percent_labels: Tuple[str, str] = ("", "")

    def update(self, window_width, window_height, player1, player2, arena) -> None:
        """Recompute the layout from the players and the arena."""
        counts = arena.player_tile_counts()
        layout = compute_layout(
            window_width,
            window_height,
            player1.health,
            player2.health,
            counts.get(player1.player_id, 0),
            counts.get(player2.player_id, 0),
            arena.grid_size * arena.grid_size,
        )
        self.layout = layout
        self.percent_labels = (
            self._fitting(layout.percent_text1, layout.ownership_bar1[2]),
            self._fitting(layout.percent_text2, layout.ownership_bar2[2]),
        )

    def _fitting(self, text: str, bar_width: float) -> str:
        text_width = self._percent_font.size(text)[0]
        return text if bar_width > text_width + LABEL_MARGIN else ""

    def draw(self, surface: pygame.Surface) -> None:
        """Draw the HUD as laid out by the last update."""
        layout = self.layout
        if layout is None:
            raise RuntimeError("update() must be called before draw()")
        bars = (
            (layout.health_background1, layout.health_red1, layout.health_green1, layout.health_label1),
            (layout.health_background2, layout.health_red2, layout.health_green2, layout.health_label2),
        )
        for (background, red, green, label), image in zip(bars, self._health_labels):
            _panel(surface, background)
            _fill(surface, red, RED)
            _fill(surface, green, GREEN)
            surface.blit(image, image.get_rect(midtop=(round(label[0]), round(label[1]))))

        _panel(surface, layout.ownership_background)
        _fill(surface, layout.ownership_bar1, PLAYER1_COLOR)
        _fill(surface, layout.ownership_bar2, PLAYER2_COLOR)
        centers = (layout.percent_center1, layout.percent_center2)
        for text, center in zip(self.percent_labels, centers):
            if text:
                image = self._percent_font.render(text, True, WHITE)
                surface.blit(image, image.get_rect(center=(round(center[0]), round(center[1]))))