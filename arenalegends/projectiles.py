"""Projectiles fired by ranged units and towers."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from arenalegends.geometry import Point, find_angle

if TYPE_CHECKING:
    from arenalegends.units import Army, Battlefield

COLLISION_RADIUS = 25


class Bullet:
    """A homing projectile that damages its target on contact."""

    def __init__(
        self,
        world: Battlefield,
        image: str,
        speed: float,
        damage: float,
        position: Point,
        size: Point,
        target: Army,
        is_range: bool = False,
    ) -> None:
        self.world = world
        self.image = image
        self.speed = speed
        self.damage = damage
        self.position = Point(position.x, position.y)
        self.size = Point(size.x, size.y)
        self.target = target
        self.is_range = is_range
        self.collision_radius = COLLISION_RADIUS
        self.rotation = 0.0
        self.velocity = Point()
        self._aim()

    def _aim(self) -> None:
        self.rotation = find_angle(self.position, self.target.position)
        self.velocity = Point(
            math.cos(self.rotation) * self.speed,
            -math.sin(self.rotation) * self.speed,
        )

    def update(self, delta_time: float) -> None:
        """Fly towards the target and hit it once close enough."""
        self.position = self.position + self.velocity * delta_time
        self._aim()
        if (self.position - self.target.position).magnitude() <= self.collision_radius:
            self.target.damaged(self.damage, self.is_range)
            self.world.delete_weapon(self)