"""The split-screen match: input handling, the frame step and the main loop."""

from __future__ import annotations

import argparse
import math
import random
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pygame

from tilebrawl.arena import Arena
from tilebrawl.balloon import AttackBalloon
from tilebrawl.hud import Hud
from tilebrawl.player import Player, PlayerPool
from tilebrawl.resources import ResourceError, font_manager, texture_manager
from tilebrawl.rules import (
    PAINT_RADIUS,
    SPAWN_COOLDOWN,
    Outcome,
    check_win_condition,
    process_tile_interaction,
    resolve_balloons,
    spawn_balloon,
)
from tilebrawl.tiles import Clock, Tile, TimeSource

ZOOM_SPEED = 0.9
MIN_ZOOM_FACTOR = 0.5
MAX_ZOOM_FACTOR = 1.0
DIVIDING_LINE_WIDTH = 4
FRAME_RATE = 60
WINDOW_TITLE = "Battle Arena (Split Screen)"
FALLBACK_WINDOW_SIZE = (1280, 720)
BACKGROUND = (255, 255, 255)
LINE_COLOR = (0, 0, 0)
PLAYER1_COLOR = (0, 0, 255)
PLAYER2_COLOR = (0, 255, 255)

WIN_MESSAGES = {
    Outcome.PLAYER1: "Player 1 Wins!",
    Outcome.PLAYER2: "Player 2 Wins!",
    Outcome.DRAW: "Draw - Both Eliminated",
}


@dataclass
class SplitView:
    """A camera onto the world for one half of the window."""

    base_size: Tuple[float, float] = (640.0, 720.0)
    center: pygame.Vector2 = field(default_factory=pygame.Vector2)
    zoom_factor: float = 1.0

    @property
    def size(self) -> Tuple[float, float]:
        """World-space width and height shown by the view."""
        return (self.base_size[0] * self.zoom_factor, self.base_size[1] * self.zoom_factor)

    def zoom_in(self) -> None:
        """Show less of the world, down to the minimum zoom."""
        if self.zoom_factor > MIN_ZOOM_FACTOR:
            self.zoom_factor *= ZOOM_SPEED

    def zoom_out(self) -> None:
        """Show more of the world, up to the default zoom."""
        if self.zoom_factor < MAX_ZOOM_FACTOR:
            self.zoom_factor /= ZOOM_SPEED

    def reset(self) -> None:
        """Return to the default zoom."""
        self.zoom_factor = 1.0


class GameEngine:
    """Runs a match between two players on one arena."""

    def __init__(
        self,
        arena: Arena,
        player1: Player,
        player2: Player,
        clock: Optional[TimeSource] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.arena = arena
        self.player1 = player1
        self.player2 = player2
        self._time_source = clock or time.monotonic
        self.rng = rng or random.Random()
        self.spawn_clock = Clock(self._time_source)
        self.balloons: List[AttackBalloon] = []
        self.view1 = SplitView(center=pygame.Vector2(player1.position))
        self.view2 = SplitView(center=pygame.Vector2(player2.position))
        self.game_ended = False
        self.win_message = ""
        self.running = True
        self.hud_font = None

    @property
    def players(self) -> Tuple[Player, Player]:
        return (self.player1, self.player2)

    def handle_key(self, key: int, pressed: bool) -> None:
        """React to a key going down or up."""
        if not pressed:
            if not self.game_ended:
                for player in self.players:
                    player.set_key(key, False)
            return

        if not self.game_ended:
            for player in self.players:
                player.set_key(key, True)
            if key == pygame.K_z:
                self.view1.zoom_in()
            elif key == pygame.K_x:
                self.view1.zoom_out()
            elif key == pygame.K_o:
                self.view2.zoom_in()
            elif key == pygame.K_p:
                self.view2.zoom_out()
            elif key == pygame.K_e:
                self._try_spawn(self.player1, self.player2)
            elif key == pygame.K_RSHIFT:
                self._try_spawn(self.player2, self.player1)
            elif key == pygame.K_SPACE:
                self._paint(self.player1)
            elif key == pygame.K_RCTRL:
                self._paint(self.player2)

        if key == pygame.K_ESCAPE:
            self.running = False
        if self.game_ended and key == pygame.K_RETURN:
            for view, player in ((self.view1, self.player1), (self.view2, self.player2)):
                view.reset()
                view.center = pygame.Vector2(player.position)

    def _try_spawn(self, owner: Player, target: Player) -> None:
        if self.spawn_clock.elapsed() >= SPAWN_COOLDOWN and not owner.is_eliminated:
            self.balloons.append(spawn_balloon(owner, target, self._time_source))
            self.spawn_clock.restart()

    def _paint(self, player: Player) -> None:
        if not player.is_eliminated:
            player.paint_nearby_tiles(self.arena.grid, PAINT_RADIUS)

    def step(self, dt: float) -> Outcome:
        """Advance the match by dt seconds and report its state."""
        if not self.game_ended:
            world = self.arena.world_size
            for player in self.players:
                if not player.is_eliminated:
                    player.update_position(dt, world)
            for balloon in self.balloons:
                balloon.update(dt)
            for player in self.players:
                if not player.is_eliminated:
                    process_tile_interaction(player, self.arena.grid, self.rng)
            self.balloons = resolve_balloons(self.balloons)

        self._follow_players()

        outcome = check_win_condition(self.player1, self.player2, self.arena)
        if outcome is not Outcome.ONGOING:
            self.game_ended = True
            self.win_message = WIN_MESSAGES[outcome]
        return outcome

    def _follow_players(self) -> None:
        world = self.arena.world_size
        if not self.player1.is_eliminated:
            self.view1.center = pygame.Vector2(self.player1.position)
        else:
            self.view1.center = pygame.Vector2(world / 4.0, world / 2.0)
        if not self.player2.is_eliminated:
            self.view2.center = pygame.Vector2(self.player2.position)
        else:
            self.view2.center = pygame.Vector2(world * 3.0 / 4.0, world / 2.0)

    def _layout(self, width: int, height: int) -> Tuple[pygame.Rect, pygame.Rect]:
        half = width // 2
        self.view1.base_size = (width / 2.0, float(height))
        self.view2.base_size = (width / 2.0, float(height))
        return pygame.Rect(0, 0, half, height), pygame.Rect(half, 0, width - half, height)

    def _render_view(self, screen: pygame.Surface, view: SplitView, viewport: pygame.Rect, viewer: Player) -> None:
        width, height = view.size
        world = pygame.Surface((max(1, round(width)), max(1, round(height))))
        world.fill(BACKGROUND)
        left = view.center.x - width / 2.0
        top = view.center.y - height / 2.0
        offset = (-left, -top)

        size = Tile.size()
        grid = self.arena.grid
        first_col = max(0, math.floor(left / size) - 1)
        last_col = min(self.arena.grid_size - 1, math.ceil((left + width) / size) + 1)
        first_row = max(0, math.floor(top / size) - 1)
        last_row = min(self.arena.grid_size - 1, math.ceil((top + height) / size) + 1)
        for row in grid[first_row:last_row + 1]:
            for tile in row[first_col:last_col + 1]:
                tile.draw(world, viewer.player_id, offset)

        for player in self.players:
            player.draw(world, offset)
        for balloon in self.balloons:
            balloon.draw(world, offset)

        screen.blit(pygame.transform.scale(world, viewport.size), viewport.topleft)

    def _draw_frame(self, screen: pygame.Surface, hud: Hud, viewports) -> None:
        left_port, right_port = viewports
        self._render_view(screen, self.view1, left_port, self.player1)
        self._render_view(screen, self.view2, right_port, self.player2)
        width, height = screen.get_size()
        line = pygame.Rect(round(width / 2.0 - DIVIDING_LINE_WIDTH / 2.0), 0, DIVIDING_LINE_WIDTH, height)
        pygame.draw.rect(screen, LINE_COLOR, line)
        hud.update(width, height, self.player1, self.player2, self.arena)
        hud.draw(screen)

    def run(self, screen: pygame.Surface) -> Outcome:
        """Play until a player wins or the window is closed."""
        viewports = self._layout(*screen.get_size())
        hud = Hud(self.hud_font)
        ticker = pygame.time.Clock()
        self.running = True
        outcome = Outcome.ONGOING
        ticker.tick()
        while self.running:
            dt = ticker.tick(FRAME_RATE) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.KEYDOWN:
                    self.handle_key(event.key, True)
                elif event.type == pygame.KEYUP:
                    self.handle_key(event.key, False)

            outcome = self.step(dt)
            screen.fill(BACKGROUND)
            if outcome is Outcome.ONGOING:
                self._draw_frame(screen, hud, viewports)
            else:
                print(self.win_message)
                self.running = False
            pygame.display.flip()
        return outcome


def _window_size() -> Tuple[int, int]:
    try:
        sizes = pygame.display.get_desktop_sizes()
    except (AttributeError, pygame.error):
        sizes = []
    if sizes and sizes[0][0] > 0 and sizes[0][1] > 0:
        return tuple(sizes[0])
    return FALLBACK_WINDOW_SIZE


def _load_textures(assets: Path):
    textures = texture_manager()
    try:
        return (
            textures.get(assets / "sprite_tile2.jpg"),
            textures.get(assets / "hero.png"),
            textures.get(assets / "base_character.png"),
        )
    except ResourceError as exc:
        print(exc, file=sys.stderr)
        return None, None, None


def _load_font(assets: Path):
    try:
        return font_manager().get(assets / "Font.ttf")
    except ResourceError as exc:
        print(exc, file=sys.stderr)
        return None


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open the game window and play one match."""
    parser = argparse.ArgumentParser(prog="tilebrawl", description="Two-player split-screen tile battle.")
    parser.add_argument("--assets", type=Path, default=Path("..") / "Assets", help="directory holding the game assets")
    args = parser.parse_args(argv)

    pygame.init()
    try:
        screen = pygame.display.set_mode(_window_size())
        pygame.display.set_caption(WINDOW_TITLE)
        tile_texture, texture1, texture2 = _load_textures(args.assets)
        font = _load_font(args.assets)

        arena = Arena.get_instance(tile_texture)
        size = Tile.size()
        world = arena.world_size
        pool = PlayerPool(2)
        player1 = pool.acquire(1, PLAYER1_COLOR, (size * 2.0, size * 2.0), True, texture1)
        player2 = pool.acquire(2, PLAYER2_COLOR, (world - size * 2.0, world - size * 2.0), False, texture2)

        engine = GameEngine(arena, player1, player2)
        engine.hud_font = font
        engine.run(screen)

        pool.release(player1)
        pool.release(player2)
    finally:
        pygame.quit()
    return 0