"""Players: movement, animation, health and tile painting."""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import pygame

from tilebrawl.arena import Arena
from tilebrawl.balloon import AttackBalloon
from tilebrawl.tiles import Clock, Tile, TimeSource


class AnimationDirection(enum.Enum):
    """The eight directions a player sprite can face."""

    DOWN = 0
    DOWN_RIGHT = 1
    RIGHT = 2
    UP_RIGHT = 3
    UP = 4
    UP_LEFT = 5
    LEFT = 6
    DOWN_LEFT = 7


@dataclass(frozen=True)
class Controls:
    """The four movement keys of one player."""

    left: int
    right: int
    up: int
    down: int

    @property
    def keys(self) -> tuple:
        return (self.left, self.right, self.up, self.down)

    def direction(self, pressed: Dict[int, bool]) -> pygame.Vector2:
        """Unnormalised input direction for the given key states."""
        result = pygame.Vector2()
        if pressed.get(self.left, False):
            result.x -= 1.0
        if pressed.get(self.right, False):
            result.x += 1.0
        if pressed.get(self.up, False):
            result.y -= 1.0
        if pressed.get(self.down, False):
            result.y += 1.0
        return result


WASD = Controls(pygame.K_a, pygame.K_d, pygame.K_w, pygame.K_s)
ARROWS = Controls(pygame.K_LEFT, pygame.K_RIGHT, pygame.K_UP, pygame.K_DOWN)

FRAME_SIZE = 128


def _frame(row: int, col: int) -> pygame.Rect:
    return pygame.Rect(col * FRAME_SIZE, row * FRAME_SIZE, FRAME_SIZE, FRAME_SIZE)


_D = AnimationDirection
_FRAMES: Dict[AnimationDirection, List[pygame.Rect]] = {
    _D.DOWN: [_frame(0, 0), _frame(0, 1), _frame(0, 2), _frame(0, 3)],
    _D.DOWN_RIGHT: [_frame(0, 4), _frame(0, 5), _frame(0, 6), _frame(0, 7)],
    _D.RIGHT: [_frame(0, 8), _frame(1, 0), _frame(1, 1), _frame(1, 2)],
    _D.UP_RIGHT: [_frame(1, 7), _frame(1, 8), _frame(2, 0), _frame(2, 1)],
    _D.UP: [_frame(1, 3), _frame(1, 4), _frame(1, 5), _frame(1, 6)],
}
_FRAMES[_D.DOWN_LEFT] = _FRAMES[_D.DOWN_RIGHT]
_FRAMES[_D.LEFT] = _FRAMES[_D.RIGHT]
_FRAMES[_D.UP_LEFT] = _FRAMES[_D.UP_RIGHT]

# (sign of x, sign of y) -> (direction, facing left)
_DIRECTION_BY_SIGN = {
    (1, 0): (_D.RIGHT, False),
    (1, -1): (_D.UP_RIGHT, False),
    (0, -1): (_D.UP, False),
    (-1, -1): (_D.UP_LEFT, True),
    (-1, 0): (_D.LEFT, True),
    (-1, 1): (_D.DOWN_LEFT, True),
    (0, 1): (_D.DOWN, False),
    (1, 1): (_D.DOWN_RIGHT, False),
}

_FACING_VECTOR = {
    _D.DOWN: (0.0, 1.0),
    _D.DOWN_RIGHT: (1.0, 1.0),
    _D.RIGHT: (1.0, 0.0),
    _D.UP_RIGHT: (1.0, -1.0),
    _D.UP: (0.0, -1.0),
    _D.UP_LEFT: (-1.0, -1.0),
    _D.LEFT: (-1.0, 0.0),
    _D.DOWN_LEFT: (-1.0, 1.0),
}


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


class Player:
    """One of the fighters in the arena."""

    MAX_HEALTH = 100
    SPEED = 250.0
    DEFAULT_STUCK_FACTOR = 0.2
    DAMAGE_TICK_RATE = 1.0
    DAMAGE_PER_TICK = 1
    PAINT_COOLDOWN = 3.0
    ANIMATION_FRAME_TIME = 1.0 / 10.0

    def __init__(
        self,
        player_id: int,
        color,
        start: Sequence[float],
        wasd: bool,
        texture: Optional[pygame.Surface] = None,
        clock: Optional[TimeSource] = None,
    ) -> None:
        self.player_id = player_id
        self.color = color
        self.position = pygame.Vector2(start)
        self.texture = texture
        self.wasd = wasd
        self.health = self.MAX_HEALTH
        self.velocity = pygame.Vector2()
        self.is_eliminated = False
        self.is_stuck = False
        self.stuck_speed_factor = self.DEFAULT_STUCK_FACTOR
        self.is_on_damage_tile = False
        self.took_initial_damage = False
        self.last_grid_position = (-1, -1)
        self.current_frame = 0
        self.animation_direction = AnimationDirection.DOWN
        self.is_moving = False
        self.facing_left = False
        self.in_use = False
        self.tile_size = 4 * Tile.size()
        self.visual_size = self.tile_size / 2.0
        self.radius = self.visual_size / 2.0
        self._keys: Dict[int, bool] = {key: False for key in self.controls.keys}
        self._use_time_source(clock or time.monotonic)

    def _use_time_source(self, time_source: TimeSource) -> None:
        self._damage_tick = Clock(time_source)
        self._animation = Clock(time_source)
        self._paint_cooldown = Clock(time_source)

    @property
    def controls(self) -> Controls:
        return WASD if self.wasd else ARROWS

    @property
    def damage_tick_rate(self) -> float:
        return self.DAMAGE_TICK_RATE

    @property
    def current_frame_rect(self) -> pygame.Rect:
        """Sprite-sheet rectangle of the frame being shown."""
        return _FRAMES[self.animation_direction][self.current_frame]

    def take_balloon_damage(self) -> None:
        damage = AttackBalloon.damage()
        if self.health <= damage:
            self.health = 0
            self.is_eliminated = True
        else:
            self.health -= damage

    def take_tile_damage(self, value: float) -> None:
        if value > self.health:
            self.health = 0
            self.is_eliminated = True
        else:
            self.health = int(self.health - value)

    def set_key(self, key: int, pressed: bool) -> None:
        self._keys[key] = pressed

    def actual_speed(self) -> float:
        return self.SPEED * self.stuck_speed_factor if self.is_stuck else self.SPEED

    def update_position(self, dt: float, world_size: Optional[float] = None) -> None:
        """Move according to the pressed keys, staying inside the world."""
        if world_size is None:
            world_size = Arena.GRID_SIZE * Tile.size()
        direction = self.controls.direction(self._keys)
        length = direction.length()
        if length > 0.0:
            self.velocity = direction / length * self.actual_speed()
        else:
            self.velocity = pygame.Vector2()
        self._determine_direction(self.velocity if length > 0.0 else direction)

        self.position += self.velocity * dt
        half = self.visual_size / 2.0
        limit = world_size - half
        self.position.x = min(max(self.position.x, half), limit)
        self.position.y = min(max(self.position.y, half), limit)
        self._update_animation()

    def _determine_direction(self, velocity: pygame.Vector2) -> None:
        if velocity.x == 0 and velocity.y == 0:
            self.is_moving = False
            return
        self.is_moving = True
        self.animation_direction, self.facing_left = _DIRECTION_BY_SIGN[
            (_sign(velocity.x), _sign(velocity.y))
        ]

    def _update_animation(self) -> None:
        if not self.is_moving:
            self.current_frame = 0
            self._animation.restart()
        elif self._animation.elapsed() >= self.ANIMATION_FRAME_TIME:
            frames = _FRAMES[self.animation_direction]
            self.current_frame = (self.current_frame + 1) % len(frames)
            self._animation.restart()

    def draw(self, surface: pygame.Surface, offset: Sequence[float] = (0, 0)) -> None:
        """Draw the player unless eliminated."""
        if self.is_eliminated:
            return
        cx = self.position.x + offset[0]
        cy = self.position.y + offset[1]
        if self.texture is not None:
            rect = self.current_frame_rect.clip(self.texture.get_rect())
            if rect.width and rect.height:
                side = round(self.tile_size)
                image = pygame.transform.scale(self.texture.subsurface(rect), (side, side))
                if self.facing_left:
                    image = pygame.transform.flip(image, True, False)
                surface.blit(image, image.get_rect(center=(round(cx), round(cy))))
                return
        pygame.draw.circle(surface, self.color, (cx, cy), self.radius)

    def bounds(self) -> tuple:
        """(left, top, width, height) of the player's collision box."""
        half = self.visual_size / 2.0
        return (
            self.position.x - half,
            self.position.y - half,
            self.visual_size,
            self.visual_size,
        )

    def launch_direction(self) -> pygame.Vector2:
        """Unit vector a balloon is fired along."""
        speed = self.velocity.length()
        if speed > 0.1:
            return self.velocity / speed
        direction = pygame.Vector2(_FACING_VECTOR[self.animation_direction])
        if direction.length() > 0.001:
            return direction.normalize()
        return pygame.Vector2(0.0, 1.0)

    def paint_nearby_tiles(self, grid, radius_factor: float) -> bool:
        """Claim tiles whose centres lie near the player; False while on cooldown."""
        if self._paint_cooldown.elapsed() < self.PAINT_COOLDOWN:
            return False
        size = Tile.size()
        center = self.position
        world_radius = radius_factor * self.visual_size
        min_x = max(0, int((center.x - world_radius) / size))
        max_x = min(len(grid[0]) - 1, int((center.x + world_radius) / size))
        min_y = max(0, int((center.y - world_radius) / size))
        max_y = min(len(grid) - 1, int((center.y + world_radius) / size))
        half = pygame.Vector2(size / 2.0, size / 2.0)
        for row in grid[min_y:max_y + 1]:
            for tile in row[min_x:max_x + 1]:
                if (tile.position + half).distance_squared_to(center) <= world_radius * world_radius:
                    tile.claim(self.player_id, self.color)
        self._paint_cooldown.restart()
        return True

    def heal(self, value: float) -> None:
        self.health = min(self.MAX_HEALTH, self.health + int(value))

    def set_stuck(self, stuck: bool, factor: float) -> None:
        self.is_stuck = stuck
        self.stuck_speed_factor = factor

    def teleport(self, position: Sequence[float]) -> None:
        """Move to a new place, leaving any tile effects behind."""
        self.position = pygame.Vector2(position)
        self.set_on_damage_tile(False)
        self.set_stuck(False, self.DEFAULT_STUCK_FACTOR)
        self.took_initial_damage = False
        self.last_grid_position = (-1, -1)

    def set_on_damage_tile(self, on_tile: bool) -> None:
        self.is_on_damage_tile = on_tile
        if not on_tile:
            self.took_initial_damage = False

    def _lose_tick(self) -> None:
        if self.health <= self.DAMAGE_PER_TICK:
            self.health = 0
            self.is_eliminated = True
        else:
            self.health -= self.DAMAGE_PER_TICK

    def take_initial_damage(self) -> None:
        """Damage on entering a damage tile, once per stay."""
        if not self.took_initial_damage and self.health > 0:
            self._lose_tick()
            self.took_initial_damage = True

    def take_continuous_damage(self) -> None:
        if self.health > 0:
            self._lose_tick()

    def damage_elapsed(self) -> float:
        """Seconds since the damage tick clock was restarted."""
        return self._damage_tick.elapsed()

    def restart_damage_tick(self) -> None:
        self._damage_tick.restart()

    def reset_health_and_state(self) -> None:
        """Restore full health and clear movement and tile effects."""
        self.health = self.MAX_HEALTH
        self.is_eliminated = False
        self.is_stuck = False
        self.is_on_damage_tile = False
        self.took_initial_damage = False
        self.last_grid_position = (-1, -1)
        self.velocity = pygame.Vector2()
        self.current_frame = 0
        self.animation_direction = AnimationDirection.DOWN
        self.is_moving = False
        self.facing_left = False
        self._update_animation()

    def _reset_for_reuse(self) -> None:
        self.reset_health_and_state()
        self._keys = {key: False for key in (*self._keys, *self.controls.keys)}
        self._paint_cooldown.restart()
        self._damage_tick.restart()


class PlayerPool:
    """Hands out a limited number of reusable players."""

    def __init__(self, max_players: int = 2) -> None:
        self.max_players = max_players
        self.active: List[Player] = []
        self._free: List[Player] = []

    def acquire(
        self,
        player_id: int,
        color,
        start: Sequence[float],
        wasd: bool,
        texture: Optional[pygame.Surface] = None,
        clock: Optional[TimeSource] = None,
    ) -> Player:
        """A fresh or recycled player; RuntimeError when all are in use."""
        if len(self.active) >= self.max_players:
            raise RuntimeError("player pool exhausted")
        if self._free:
            player = self._free.pop()
            if clock is not None:
                player._use_time_source(clock)
        else:
            player = Player(player_id, color, start, wasd, texture, clock)
        player.player_id = player_id
        player.color = color
        player.position = pygame.Vector2(start)
        player.wasd = wasd
        player.texture = texture
        player.in_use = True
        player._reset_for_reuse()
        self.active.append(player)
        return player

    def release(self, player: Player) -> None:
        """Return a player to the pool; players not in use are ignored."""
        if player is None or not player.in_use:
            return
        self.active = [p for p in self.active if p is not player]
        player.in_use = False
        player._reset_for_reuse()
        self._free.append(player)