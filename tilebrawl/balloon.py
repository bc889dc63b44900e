"""Homing attack balloons fired by players."""

from __future__ import annotations

from typing import Optional, Sequence

import pygame

from tilebrawl.tiles import Clock, TimeSource


class AttackBalloon:
    """A balloon that is launched, then homes in on its target.

    The target is any object with ``position`` and ``is_eliminated``.
    """

    DAMAGE = 10
    LIFESPAN = 12.0
    RADIUS = 8.0
    TRACKING_SPEED = 250.0
    MAX_SPEED = 700.0
    INITIAL_LAUNCH_DURATION = 0.5

    def __init__(self, color, start: Sequence[float], owner_id: int, clock: Optional[TimeSource] = None) -> None:
        self.color = color
        self.position = pygame.Vector2(start)
        self.owner_id = owner_id
        self.target = None
        self.radius = self.RADIUS
        self.velocity = pygame.Vector2()
        self._initial_velocity = pygame.Vector2()
        self._lifetime = Clock(clock)

    @staticmethod
    def damage() -> int:
        return AttackBalloon.DAMAGE

    def launch(self, initial_velocity: Sequence[float]) -> None:
        """Give the balloon its launch velocity and start its lifetime."""
        self._initial_velocity = pygame.Vector2(initial_velocity)
        self.velocity = pygame.Vector2(initial_velocity)
        self._lifetime.restart()

    def update(self, dt: float) -> None:
        """Advance the balloon by dt seconds."""
        tracking = pygame.Vector2()
        target = self.target
        if target is not None and not target.is_eliminated:
            to_target = pygame.Vector2(target.position) - self.position
            distance = to_target.length()
            if distance != 0:
                tracking = to_target / distance * self.TRACKING_SPEED

        elapsed = self._lifetime.elapsed()
        attenuation = 0.0
        if elapsed < self.INITIAL_LAUNCH_DURATION:
            attenuation = (1.0 - elapsed / self.INITIAL_LAUNCH_DURATION) ** 1.5

        velocity = self._initial_velocity * attenuation + tracking
        speed = velocity.length()
        if speed > self.MAX_SPEED:
            velocity = velocity / speed * self.MAX_SPEED
        elif (attenuation == 0.0 and speed < 1.0) or target is None:
            velocity = pygame.Vector2()

        self.velocity = velocity
        self.position += velocity * dt

    def is_expired(self) -> bool:
        return self._lifetime.elapsed() >= self.LIFESPAN

    def draw(self, surface: pygame.Surface, offset: Sequence[float] = (0, 0)) -> None:
        center = (self.position.x + offset[0], self.position.y + offset[1])
        pygame.draw.circle(surface, self.color, center, self.radius)