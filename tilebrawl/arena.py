"""The square arena made of randomly chosen tiles."""

from __future__ import annotations

import random
from collections import Counter
from dataclasses import dataclass
from typing import Optional, Sequence

import pygame

from tilebrawl.tiles import (
    DamageTile,
    HealingTile,
    StickyTile,
    SuperTile,
    TeleporterTile,
    Tile,
    TileSpecialType,
)


@dataclass(frozen=True)
class TileOdds:
    """Probability of each special tile type per grid cell."""

    teleporter: float = 0.005
    damage: float = 0.02
    sticky: float = 0.02
    healing: float = 0.005
    super_tile: float = 0.002


TEXTURED_ODDS = TileOdds()
PLAIN_ODDS = TileOdds(super_tile=0.01)

_TILE_CLASSES = {
    TileSpecialType.NONE: Tile,
    TileSpecialType.TELEPORTER: TeleporterTile,
    TileSpecialType.DAMAGE: DamageTile,
    TileSpecialType.STICKY: StickyTile,
    TileSpecialType.HEALING: HealingTile,
    TileSpecialType.SUPER: SuperTile,
}


def choose_tile_type(roll: float, odds: TileOdds) -> TileSpecialType:
    """Map a roll in [0, 1) to a tile type using cumulative odds."""
    threshold = 0.0
    for kind, chance in (
        (TileSpecialType.TELEPORTER, odds.teleporter),
        (TileSpecialType.DAMAGE, odds.damage),
        (TileSpecialType.STICKY, odds.sticky),
        (TileSpecialType.HEALING, odds.healing),
        (TileSpecialType.SUPER, odds.super_tile),
    ):
        threshold += chance
        if roll < threshold:
            return kind
    return TileSpecialType.NONE


class Arena:
    """A square grid of tiles, indexed as grid[row][column]."""

    GRID_SIZE = 100
    _instance: Optional["Arena"] = None

    def __init__(
        self,
        texture: Optional[pygame.Surface] = None,
        rng: Optional[random.Random] = None,
        grid_size: int = GRID_SIZE,
    ) -> None:
        if grid_size < 1:
            raise ValueError("grid size must be positive")
        rng = rng or random.Random()
        self.texture = texture
        self.grid_size = grid_size
        self.odds = TEXTURED_ODDS if texture is not None else PLAIN_ODDS
        size = Tile.size()
        self.grid = [
            [
                _TILE_CLASSES[choose_tile_type(rng.random(), self.odds)](
                    col * size, row * size, texture=texture
                )
                for col in range(grid_size)
            ]
            for row in range(grid_size)
        ]

    @classmethod
    def get_instance(cls, texture: Optional[pygame.Surface] = None) -> "Arena":
        """The shared arena, created on first use."""
        if cls._instance is None:
            cls._instance = cls(texture)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Forget the shared arena so the next call builds a new one."""
        cls._instance = None

    @property
    def world_size(self) -> float:
        """Side length of the arena in world units."""
        return self.grid_size * Tile.size()

    def player_tile_counts(self) -> dict:
        """Number of tiles owned by each player id, by ascending id."""
        counts = Counter(
            tile.owner for row in self.grid for tile in row if tile.owner != -1
        )
        return dict(sorted(counts.items()))

    def draw(self, surface: pygame.Surface, viewing_player_id: int, offset: Sequence[float] = (0, 0)) -> None:
        """Draw every tile as seen by the given player."""
        for row in self.grid:
            for tile in row:
                tile.draw(surface, viewing_player_id, offset)