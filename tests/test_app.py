import random

import pygame
import pytest

from tilebrawl.app import (
    MAX_ZOOM_FACTOR,
    MIN_ZOOM_FACTOR,
    WIN_MESSAGES,
    ZOOM_SPEED,
    GameEngine,
    SplitView,
)
from tilebrawl.arena import Arena
from tilebrawl.balloon import AttackBalloon
from tilebrawl.player import Player
from tilebrawl.rules import Outcome
from tilebrawl.tiles import Tile


class FakeTime:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def _plain_arena(grid_size=10):
    arena = Arena(rng=random.Random(0), grid_size=grid_size)
    size = Tile.size()
    arena.grid = [
        [Tile(col * size, row * size) for col in range(grid_size)]
        for row in range(grid_size)
    ]
    return arena


@pytest.fixture
def fake_time():
    return FakeTime()


@pytest.fixture
def engine(fake_time):
    arena = _plain_arena()
    p1 = Player(1, (0, 0, 255), (40, 40), True, None, fake_time)
    p2 = Player(2, (0, 255, 255), (160, 160), False, None, fake_time)
    return GameEngine(arena, p1, p2, fake_time, random.Random(1))


def test_zoom_in_scales_view_size():
    view = SplitView(base_size=(100.0, 200.0))
    view.zoom_in()
    assert view.zoom_factor == pytest.approx(ZOOM_SPEED)
    assert view.size == pytest.approx((100.0 * ZOOM_SPEED, 200.0 * ZOOM_SPEED))


def test_zoom_in_stops_at_minimum():
    view = SplitView()
    for _ in range(50):
        view.zoom_in()
    assert view.zoom_factor <= MIN_ZOOM_FACTOR
    assert view.zoom_factor > MIN_ZOOM_FACTOR * ZOOM_SPEED


def test_zoom_out_does_not_exceed_default():
    view = SplitView()
    view.zoom_out()
    assert view.zoom_factor == MAX_ZOOM_FACTOR


def test_zoom_round_trip_and_reset():
    view = SplitView()
    view.zoom_in()
    view.zoom_out()
    assert view.zoom_factor == pytest.approx(1.0)
    view.zoom_in()
    view.zoom_in()
    view.reset()
    assert view.zoom_factor == 1.0


def test_zoom_keys_control_each_view(engine):
    engine.handle_key(pygame.K_z, True)
    assert engine.view1.zoom_factor == pytest.approx(ZOOM_SPEED)
    assert engine.view2.zoom_factor == 1.0
    engine.handle_key(pygame.K_o, True)
    assert engine.view2.zoom_factor == pytest.approx(ZOOM_SPEED)


def test_spawn_respects_cooldown(engine, fake_time):
    engine.handle_key(pygame.K_e, True)
    assert engine.balloons == []
    fake_time.now = 1.0
    engine.handle_key(pygame.K_e, True)
    assert len(engine.balloons) == 1
    balloon = engine.balloons[0]
    assert balloon.owner_id == 1
    assert balloon.target is engine.player2
    engine.handle_key(pygame.K_RSHIFT, True)
    assert len(engine.balloons) == 1


def test_player2_spawn_targets_player1(engine, fake_time):
    fake_time.now = 2.0
    engine.handle_key(pygame.K_RSHIFT, True)
    assert len(engine.balloons) == 1
    assert engine.balloons[0].target is engine.player1
    assert engine.balloons[0].owner_id == 2


def test_movement_follows_keys(engine):
    start_x = engine.player1.position.x
    engine.handle_key(pygame.K_d, True)
    engine.step(0.1)
    moved_x = engine.player1.position.x
    assert moved_x > start_x
    engine.handle_key(pygame.K_d, False)
    engine.step(0.1)
    assert engine.player1.position.x == moved_x


def test_paint_claims_tiles_after_cooldown(engine, fake_time):
    engine.handle_key(pygame.K_SPACE, True)
    assert engine.arena.player_tile_counts() == {}
    fake_time.now = 3.0
    engine.handle_key(pygame.K_SPACE, True)
    counts = engine.arena.player_tile_counts()
    assert counts.get(1, 0) > 0
    assert 2 not in counts


def test_step_ongoing_by_default(engine):
    assert engine.step(0.016) is Outcome.ONGOING
    assert engine.game_ended is False
    assert engine.win_message == ""


def test_step_reports_player1_win(engine):
    engine.player2.health = 0
    assert engine.step(0.016) is Outcome.PLAYER1
    assert engine.game_ended is True
    assert engine.win_message == "Player 1 Wins!"


def test_step_reports_draw(engine):
    engine.player1.health = 0
    engine.player2.health = 0
    assert engine.step(0.016) is Outcome.DRAW
    assert engine.win_message == WIN_MESSAGES[Outcome.DRAW]


def test_keys_ignored_after_game_ended(engine):
    engine.player1.health = 0
    engine.step(0.016)
    start = pygame.Vector2(engine.player2.position)
    engine.handle_key(pygame.K_RIGHT, True)
    engine.step(0.5)
    assert engine.player2.position == start


def test_enter_resets_zoom_after_game_ended(engine):
    engine.handle_key(pygame.K_z, True)
    engine.player2.health = 0
    engine.step(0.016)
    engine.handle_key(pygame.K_RETURN, True)
    assert engine.view1.zoom_factor == 1.0
    assert engine.view1.center == engine.player1.position


def test_escape_stops_running(engine):
    engine.handle_key(pygame.K_ESCAPE, True)
    assert engine.running is False


def test_balloon_hit_damages_target(engine, fake_time):
    balloon = AttackBalloon((0, 0, 255), engine.player2.position, 1, fake_time)
    balloon.target = engine.player2
    engine.balloons.append(balloon)
    engine.step(0.016)
    assert engine.balloons == []
    assert engine.player2.health == Player.MAX_HEALTH - AttackBalloon.DAMAGE


def test_views_follow_players(engine):
    engine.handle_key(pygame.K_s, True)
    engine.step(0.1)
    assert engine.view1.center == engine.player1.position
    assert engine.view2.center == engine.player2.position


def test_view_of_eliminated_player_is_fixed(engine):
    engine.player1.is_eliminated = True
    engine.step(0.016)
    world = engine.arena.world_size
    assert engine.view1.center == pygame.Vector2(world / 4.0, world / 2.0)
    assert engine.view2.center == engine.player2.position