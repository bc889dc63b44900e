"""Game rules: tile effects, balloon hits and the win condition."""

from __future__ import annotations

import enum
import random
from typing import Iterable, List, Optional

from tilebrawl.balloon import AttackBalloon
from tilebrawl.tiles import Tile, TileSpecialType, TimeSource

INITIAL_LAUNCH_FORCE = 1500.0
SPAWN_OFFSET_DISTANCE = 30.0
SPAWN_COOLDOWN = 1.0
PAINT_RADIUS = 3
HEALING_PER_VISIT = 2

_default_rng = random.Random()


class Outcome(enum.Enum):
    """State of the match after a frame."""

    ONGOING = -1
    DRAW = 0
    PLAYER1 = 1
    PLAYER2 = 2


def _damage_over_time(player, entered: bool, first_hit) -> None:
    player.set_on_damage_tile(True)
    if entered:
        first_hit()
        player.restart_damage_tick()
    elif player.damage_elapsed() >= player.damage_tick_rate:
        player.take_continuous_damage()
        player.restart_damage_tick()


def process_tile_interaction(player, grid, rng: Optional[random.Random] = None) -> Optional[Tile]:
    """Apply the effects of the tiles under the player.

    Returns the first special tile the player was found on, if any.
    """
    rng = rng if rng is not None else _default_rng
    grid_size = len(grid)
    size = Tile.size()
    left, top, width, height = player.bounds()
    right, bottom = left + width, top + height

    min_x = max(0, int(left / size))
    max_x = min(grid_size - 1, int(right / size))
    min_y = max(0, int(top / size))
    max_y = min(grid_size - 1, int(bottom / size))

    player.set_stuck(False, 1.0)
    player.set_on_damage_tile(False)

    current: Optional[Tile] = None
    for y, row in enumerate(grid[min_y:max_y + 1], start=min_y):
        for x, tile in enumerate(row[min_x:max_x + 1], start=min_x):
            tl, tt, tw, th = tile.bounds()
            if not (left < tl + tw and right > tl and top < tt + th and bottom > tt):
                continue
            index = (x, y)
            entered = player.last_grid_position != index
            kind = tile.special_type

            if kind is TileSpecialType.STICKY:
                player.set_stuck(True, tile.slow_factor())
                current = current or tile
            elif kind is TileSpecialType.DAMAGE:
                current = current or tile
                _damage_over_time(player, entered, player.take_initial_damage)
            elif kind is TileSpecialType.TELEPORTER:
                current = current or tile
                if entered:
                    new_x = rng.randint(0, grid_size - 1)
                    new_y = rng.randint(0, grid_size - 1)
                    player.teleport((new_x * size + size / 2.0, new_y * size + size / 2.0))
            elif kind is TileSpecialType.HEALING:
                current = current or tile
                if tile.owner == player.player_id and entered:
                    player.heal(HEALING_PER_VISIT)
            elif kind is TileSpecialType.SUPER:
                slow, damage = tile.data()
                player.set_stuck(True, slow)
                current = current or tile
                _damage_over_time(player, entered, lambda: player.take_tile_damage(damage))

            if current is not None:
                player.last_grid_position = index
        if current is not None:
            break

    if current is None and player.is_on_damage_tile:
        player.set_on_damage_tile(False)
    return current


def check_win_condition(player1, player2, arena) -> Outcome:
    """Decide the match by tile majority first, then by health."""
    counts = arena.player_tile_counts()
    owned1 = counts.get(player1.player_id, 0)
    owned2 = counts.get(player2.player_id, 0)
    total = arena.grid_size * arena.grid_size

    if total > 0:
        threshold = total // 2 + 1
        if owned1 >= threshold:
            return Outcome.PLAYER1
        if owned2 >= threshold:
            return Outcome.PLAYER2

    if player1.health == 0 and player2.health > 0:
        return Outcome.PLAYER2
    if player2.health == 0 and player1.health > 0:
        return Outcome.PLAYER1
    if player1.health == 0 and player2.health == 0:
        return Outcome.DRAW
    return Outcome.ONGOING


def balloon_hits_target(balloon: AttackBalloon) -> bool:
    """True if the balloon touches its target, which then takes the damage."""
    target = balloon.target
    if target is None or target.is_eliminated:
        return False
    if balloon.owner_id == target.player_id:
        return False
    reach = balloon.radius + target.radius
    if balloon.position.distance_squared_to(target.position) < reach * reach:
        target.take_balloon_damage()
        return True
    return False


def resolve_balloons(balloons: Iterable[AttackBalloon]) -> List[AttackBalloon]:
    """Apply hits and return the balloons that are still flying."""
    survivors = []
    for balloon in balloons:
        hit = balloon_hits_target(balloon)
        if not (hit or balloon.is_expired()):
            survivors.append(balloon)
    return survivors


def spawn_balloon(owner, target, clock: Optional[TimeSource] = None) -> AttackBalloon:
    """Fire a balloon from in front of owner, homing in on target."""
    direction = owner.launch_direction()
    start = owner.position + direction * SPAWN_OFFSET_DISTANCE
    balloon = AttackBalloon(owner.color, start, owner.player_id, clock)
    balloon.target = target
    balloon.launch(direction * INITIAL_LAUNCH_FORCE)
    return balloon