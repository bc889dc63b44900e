from dataclasses import dataclass

import pygame
import pytest

from tilebrawl.balloon import AttackBalloon


class FakeTime:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@dataclass
class Target:
    position: tuple
    is_eliminated: bool = False


def test_damage_value():
    assert AttackBalloon.damage() == 10


def test_new_balloon_fields():
    balloon = AttackBalloon((255, 0, 0), (3, 4), 1)
    assert tuple(balloon.position) == (3, 4)
    assert balloon.owner_id == 1
    assert balloon.target is None
    assert balloon.radius == AttackBalloon.RADIUS


def test_expiry():
    fake = FakeTime()
    balloon = AttackBalloon((255, 0, 0), (0, 0), 1, clock=fake)
    fake.now = AttackBalloon.LIFESPAN - 0.1
    assert balloon.is_expired() is False
    fake.now = AttackBalloon.LIFESPAN
    assert balloon.is_expired() is True


def test_launch_restarts_lifetime():
    fake = FakeTime()
    balloon = AttackBalloon((255, 0, 0), (0, 0), 1, clock=fake)
    fake.now = 10.0
    balloon.launch((1, 0))
    fake.now = 20.0
    assert balloon.is_expired() is False


def test_fast_launch_without_target_is_capped():
    fake = FakeTime()
    balloon = AttackBalloon((255, 0, 0), (100, 100), 1, clock=fake)
    balloon.launch((1500, 0))
    balloon.update(0.1)
    assert balloon.position.x == pytest.approx(100 + AttackBalloon.MAX_SPEED * 0.1)
    assert balloon.position.y == pytest.approx(100)


def test_slow_launch_without_target_stays():
    fake = FakeTime()
    balloon = AttackBalloon((255, 0, 0), (100, 100), 1, clock=fake)
    balloon.launch((200, 0))
    balloon.update(0.1)
    assert tuple(balloon.position) == (100, 100)
    assert balloon.velocity.length() == 0


def test_homes_in_after_launch_phase():
    fake = FakeTime()
    balloon = AttackBalloon((255, 0, 0), (0, 0), 1, clock=fake)
    balloon.target = Target((100, 0))
    balloon.launch((0, 300))
    fake.now = 1.0
    balloon.update(0.1)
    assert tuple(balloon.position) == pytest.approx((AttackBalloon.TRACKING_SPEED * 0.1, 0.0))


def test_launch_velocity_combines_with_tracking():
    fake = FakeTime()
    balloon = AttackBalloon((255, 0, 0), (0, 0), 1, clock=fake)
    balloon.target = Target((0, -500))
    balloon.launch((100, 0))
    balloon.update(0.1)
    assert tuple(balloon.position) == pytest.approx((100 * 0.1, -AttackBalloon.TRACKING_SPEED * 0.1))


def test_eliminated_target_is_ignored():
    fake = FakeTime()
    balloon = AttackBalloon((255, 0, 0), (5, 5), 1, clock=fake)
    balloon.target = Target((100, 0), is_eliminated=True)
    balloon.launch((0, 300))
    fake.now = 1.0
    balloon.update(0.1)
    assert tuple(balloon.position) == (5, 5)


def test_speed_never_exceeds_max():
    fake = FakeTime()
    balloon = AttackBalloon((255, 0, 0), (0, 0), 1, clock=fake)
    balloon.target = Target((1000, 1000))
    balloon.launch((5000, 5000))
    for step in range(10):
        fake.now = step * 0.05
        balloon.update(0.05)
        assert balloon.velocity.length() <= AttackBalloon.MAX_SPEED + 1e-6


def test_draw_circle():
    surface = pygame.Surface((40, 40))
    balloon = AttackBalloon((255, 0, 0), (20, 20), 1)
    balloon.draw(surface)
    assert tuple(surface.get_at((20, 20)))[:3] == (255, 0, 0)
    other = pygame.Surface((40, 40))
    shifted = AttackBalloon((0, 255, 0), (10, 10), 1)
    shifted.draw(other, (15, 15))
    assert tuple(other.get_at((25, 25)))[:3] == (0, 255, 0)
    assert tuple(other.get_at((10, 10)))[:3] == (0, 0, 0)