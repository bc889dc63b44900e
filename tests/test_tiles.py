import pygame
import pytest

from tilebrawl.tiles import (
    Clock,
    DamageTile,
    HealingTile,
    StickyTile,
    SuperTile,
    TeleporterTile,
    Tile,
    TileSpecialType,
)


class FakeTime:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def rgb(surface, point):
    return tuple(surface.get_at(point))[:3]


def test_clock_elapsed_and_restart():
    fake = FakeTime()
    clock = Clock(fake)
    fake.now = 2.5
    assert clock.elapsed() == pytest.approx(2.5)
    assert clock.restart() == pytest.approx(2.5)
    assert clock.elapsed() == pytest.approx(0.0)
    fake.now = 3.0
    assert clock.elapsed() == pytest.approx(0.5)


def test_super_tile_color_is_pinned():
    assert Tile.type_color(TileSpecialType.SUPER) == (128, 0, 128)


def test_type_colors_are_distinct():
    colors = {Tile.type_color(kind) for kind in TileSpecialType}
    assert len(colors) == len(TileSpecialType)


def test_type_color_rejects_unknown():
    with pytest.raises(ValueError):
        Tile.type_color(7)


def test_size_and_bounds_include_outline():
    tile = Tile(40.0, 60.0)
    left, top, width, height = tile.bounds()
    assert Tile.size() == 20.0
    assert left < tile.position.x and top < tile.position.y
    assert left + width > tile.position.x + Tile.size()
    assert width == height


def test_subclass_kinds():
    assert Tile(0, 0).special_type is TileSpecialType.NONE
    assert DamageTile(0, 0).special_type is TileSpecialType.DAMAGE
    assert HealingTile(0, 0).special_type is TileSpecialType.HEALING
    assert StickyTile(0, 0).special_type is TileSpecialType.STICKY
    assert SuperTile(0, 0).special_type is TileSpecialType.SUPER
    assert TeleporterTile(0, 0).special_type is TileSpecialType.TELEPORTER


def test_claim_sets_owner():
    tile = Tile(0, 0)
    assert tile.owner == -1
    tile.claim(3, (0, 0, 255))
    assert tile.owner == 3
    assert tile.owner_color == (0, 0, 255)


def test_display_color_rules():
    plain = Tile(0, 0)
    special = DamageTile(0, 0)
    assert plain.display_color(1) == Tile.type_color(TileSpecialType.NONE)
    assert special.display_color(1) == Tile.type_color(TileSpecialType.DAMAGE)
    plain.claim(1, (0, 0, 255))
    special.claim(1, (0, 0, 255))
    assert plain.display_color(1) == (0, 0, 255)
    assert special.display_color(1) == Tile.type_color(TileSpecialType.DAMAGE)
    assert special.display_color(2) == (0, 0, 255)


def test_damage_tile_cooldown():
    fake = FakeTime()
    tile = DamageTile(0, 0, clock=fake)
    fake.now = 0.9
    assert tile.try_apply_damage() is False
    fake.now = DamageTile.DAMAGE_COOLDOWN
    assert tile.try_apply_damage() is True
    assert tile.try_apply_damage() is False
    assert DamageTile.damage_amount() == 5


def test_healing_tile_cooldown():
    fake = FakeTime()
    tile = HealingTile(0, 0, clock=fake)
    fake.now = 0.4
    assert tile.try_apply_heal() is False
    fake.now = HealingTile.HEALING_COOLDOWN
    assert tile.try_apply_heal() is True
    assert tile.try_apply_heal() is False
    assert HealingTile.heal_amount() == 5


def test_sticky_and_super_values():
    assert StickyTile(0, 0).slow_factor() == 0.4
    tile = SuperTile(0, 0)
    assert tile.data() == (0.2, DamageTile.damage_amount())
    assert isinstance(tile, StickyTile) and isinstance(tile, DamageTile)


def test_super_tile_has_damage_cooldown():
    fake = FakeTime()
    tile = SuperTile(0, 0, clock=fake)
    assert tile.try_apply_damage() is False
    fake.now = 1.0
    assert tile.try_apply_damage() is True


def test_draw_plain_tile_with_outline():
    surface = pygame.Surface((40, 40))
    surface.fill((10, 10, 10))
    tile = Tile(10, 10)
    tile.draw(surface, 1)
    assert rgb(surface, (15, 15)) == Tile.type_color(TileSpecialType.NONE)
    assert rgb(surface, (9, 9)) == (0, 0, 0)
    assert rgb(surface, (35, 35)) == (10, 10, 10)


def test_draw_with_offset():
    surface = pygame.Surface((40, 40))
    surface.fill((10, 10, 10))
    tile = StickyTile(0, 0)
    tile.draw(surface, 1, (10, 10))
    assert rgb(surface, (15, 15)) == Tile.type_color(TileSpecialType.STICKY)
    assert rgb(surface, (5, 5)) == (10, 10, 10)


def test_draw_textured_tile_is_tinted():
    texture = pygame.Surface((4, 4))
    texture.fill((255, 255, 255))
    surface = pygame.Surface((30, 30))
    tile = DamageTile(0, 0, texture=texture)
    tile.draw(surface, 2)
    assert rgb(surface, (5, 5)) == Tile.type_color(TileSpecialType.DAMAGE)
    tile.claim(1, (0, 0, 255))
    tile.draw(surface, 2)
    assert rgb(surface, (5, 5)) == (0, 0, 255)