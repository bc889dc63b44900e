"""Arena floor tiles and their special effects."""

from __future__ import annotations

import enum
import time
from typing import Callable, Optional, Sequence

import pygame

TimeSource = Callable[[], float]

OUTLINE_THICKNESS = 1.0
OUTLINE_COLOR = (0, 0, 0)


class TileSpecialType(enum.Enum):
    """The special effect a tile has on players standing on it."""

    NONE = 0
    STICKY = 1
    DAMAGE = 2
    HEALING = 3
    TELEPORTER = 4
    SUPER = 5


class Clock:
    """Measures seconds elapsed since creation or the last restart."""

    def __init__(self, time_source: Optional[TimeSource] = None) -> None:
        self._now = time_source or time.monotonic
        self._start = self._now()

    def elapsed(self) -> float:
        """Seconds since the clock was started."""
        return self._now() - self._start

    def restart(self) -> float:
        """Restart the clock and return the time that had elapsed."""
        now = self._now()
        elapsed = now - self._start
        self._start = now
        return elapsed


_TYPE_COLORS = {
    TileSpecialType.NONE: (255, 255, 255),
    TileSpecialType.STICKY: (255, 255, 0),
    TileSpecialType.DAMAGE: (255, 0, 0),
    TileSpecialType.HEALING: (0, 255, 0),
    TileSpecialType.TELEPORTER: (255, 0, 255),
    TileSpecialType.SUPER: (128, 0, 128),
}


class Tile:
    """A square of the arena floor that players can claim."""

    SIZE = 20.0
    KIND = TileSpecialType.NONE

    def __init__(
        self,
        x: float,
        y: float,
        special_type: Optional[TileSpecialType] = None,
        texture: Optional[pygame.Surface] = None,
        clock: Optional[TimeSource] = None,
    ) -> None:
        self.position = pygame.Vector2(x, y)
        self.special_type = self.KIND if special_type is None else special_type
        self.texture = texture
        self.owner = -1
        self.owner_color = self.type_color(self.special_type)
        self._time_source = clock or time.monotonic
        self._scaled: Optional[pygame.Surface] = None
        self._tinted: dict = {}

    @staticmethod
    def type_color(special_type: TileSpecialType):
        """The colour that marks a tile of the given type."""
        try:
            return _TYPE_COLORS[special_type]
        except (KeyError, TypeError):
            raise ValueError(f"invalid special type: {special_type!r}") from None

    @staticmethod
    def size() -> float:
        """Side length of every tile in world units."""
        return Tile.SIZE

    def bounds(self) -> tuple:
        """(left, top, width, height) of the tile, outline included."""
        t = OUTLINE_THICKNESS
        return (
            self.position.x - t,
            self.position.y - t,
            self.SIZE + 2 * t,
            self.SIZE + 2 * t,
        )

    def claim(self, player_id: int, color) -> None:
        """Give the tile to a player, painting it in their colour."""
        self.owner = player_id
        self.owner_color = color

    def display_color(self, viewing_player_id: int):
        """Colour of the tile as seen by the given player."""
        if self.owner == -1:
            return self.type_color(self.special_type)
        if viewing_player_id == self.owner and self.special_type is not TileSpecialType.NONE:
            return self.type_color(self.special_type)
        return self.owner_color

    def draw(self, surface: pygame.Surface, viewing_player_id: int, offset: Sequence[float] = (0, 0)) -> None:
        """Draw the tile; world position plus offset gives the screen position."""
        color = self.display_color(viewing_player_id)
        left = self.position.x + offset[0]
        top = self.position.y + offset[1]
        if self.texture is not None:
            surface.blit(self._tinted_texture(color), (round(left), round(top)))
            return
        side = round(self.SIZE)
        rect = pygame.Rect(round(left), round(top), side, side)
        pygame.draw.rect(surface, color, rect)
        grow = round(2 * OUTLINE_THICKNESS)
        pygame.draw.rect(surface, OUTLINE_COLOR, rect.inflate(grow, grow), width=round(OUTLINE_THICKNESS))

    def _tinted_texture(self, color) -> pygame.Surface:
        tint = pygame.Color(color)
        key = tuple(tint)
        cached = self._tinted.get(key)
        if cached is None:
            if self._scaled is None:
                side = round(self.SIZE)
                self._scaled = pygame.transform.scale(self.texture, (side, side))
            cached = self._scaled.copy()
            cached.fill(tint, special_flags=pygame.BLEND_RGB_MULT)
            self._tinted[key] = cached
        return cached


class DamageTile(Tile):
    """A tile that hurts players standing on it."""

    KIND = TileSpecialType.DAMAGE
    DAMAGE_AMOUNT = 5.0
    DAMAGE_COOLDOWN = 1.0

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._damage_clock = Clock(self._time_source)

    @staticmethod
    def damage_amount() -> float:
        return DamageTile.DAMAGE_AMOUNT

    def try_apply_damage(self) -> bool:
        """True, restarting the cooldown, once the cooldown has passed."""
        if self._damage_clock.elapsed() >= self.DAMAGE_COOLDOWN:
            self._damage_clock.restart()
            return True
        return False


class HealingTile(Tile):
    """A tile that heals the player who owns it."""

    KIND = TileSpecialType.HEALING
    HEAL_AMOUNT = 5.0
    HEALING_COOLDOWN = 0.5

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._healing_clock = Clock(self._time_source)

    @staticmethod
    def heal_amount() -> float:
        return HealingTile.HEAL_AMOUNT

    def try_apply_heal(self) -> bool:
        """True, restarting the cooldown, once the cooldown has passed."""
        if self._healing_clock.elapsed() >= self.HEALING_COOLDOWN:
            self._healing_clock.restart()
            return True
        return False


class StickyTile(Tile):
    """A tile that slows players down."""

    KIND = TileSpecialType.STICKY
    SLOW_DOWN = 0.4

    def slow_factor(self) -> float:
        return StickyTile.SLOW_DOWN


class SuperTile(StickyTile, DamageTile):
    """A tile that both slows and hurts."""

    KIND = TileSpecialType.SUPER
    SLOW_DOWN_FACTOR = 0.2

    def data(self) -> tuple:
        """(slow factor, damage amount) applied by this tile."""
        return SuperTile.SLOW_DOWN_FACTOR, DamageTile.damage_amount()


class TeleporterTile(Tile):
    """A tile that moves players to a random place."""

    KIND = TileSpecialType.TELEPORTER