"""Projectiles and the manager that owns them."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Dict, Iterator, List

from slimefield.vecmath import (
    Matrix,
    Vec3,
    identity,
    multiply,
    rotation_axis,
)

_PROVISIONAL_UP = Vec3(0.001, 1.0, 0.0)


class Projectile(ABC):
    """A projectile that registers itself with its manager."""

    def __init__(self, manager: ProjectileManager) -> None:
        self.position = Vec3()
        self.direction = Vec3(0.0, 0.0, 1.0)
        self.scale = Vec3(1.0, 1.0, 1.0)
        self.transform: Matrix = identity()
        self.radius = 0.5
        self.manager = manager
        manager.register(self)

    @abstractmethod
    def update(self, elapsed_time: float) -> None:
        """Advance the projectile by ``elapsed_time`` seconds."""

    def update_transform(self) -> None:
        """Build the transform facing ``direction`` and renormalise it."""
        front = self.direction.normalized()
        up = _PROVISIONAL_UP.normalized()
        right = up.cross(front).normalized()
        up = front.cross(right)
        sx, sy, sz = self.scale
        p = self.position
        self.transform = (
            (right.x * sx, right.y * sx, right.z * sx, 0.0),
            (up.x * sy, up.y * sy, up.z * sy, 0.0),
            (front.x * sz, front.y * sz, front.z * sz, 0.0),
            (p.x, p.y, p.z, 1.0),
        )
        self.direction = front

    def destroy(self) -> None:
        """Ask the manager to drop this projectile after its update."""
        self.manager.remove(self)


class ProjectileStraight(Projectile):
    """Flies in a straight line until its life runs out."""

    def __init__(
        self,
        manager: ProjectileManager,
        *,
        speed: float = 10.0,
        life_timer: float = 3.0,
    ) -> None:
        super().__init__(manager)
        self.scale = Vec3(3.0, 3.0, 3.0)
        self.speed = speed
        self.life_timer = life_timer

    def update(self, elapsed_time: float) -> None:
        self.life_timer -= elapsed_time
        if self.life_timer <= 0:
            self.destroy()
        self.position = self.position + self.direction * (self.speed * elapsed_time)
        self.update_transform()

    def launch(self, direction: Vec3, position: Vec3) -> None:
        self.direction = direction
        self.position = position


class ProjectileHoming(Projectile):
    """Flies forward while turning towards a target point."""

    def __init__(
        self,
        manager: ProjectileManager,
        *,
        move_speed: float = 10.0,
        turn_speed: float = math.radians(180),
        life_timer: float = 3.0,
    ) -> None:
        super().__init__(manager)
        self.scale = Vec3(3.0, 3.0, 3.0)
        self.move_speed = move_speed
        self.turn_speed = turn_speed
        self.life_timer = life_timer
        self.target = Vec3()

    def update(self, elapsed_time: float) -> None:
        self.life_timer -= elapsed_time
        if self.life_timer <= 0:
            self.destroy()

        self.position = self.position + self.direction * (self.move_speed * elapsed_time)
        self._turn_towards_target(self.turn_speed * elapsed_time)
        self.update_transform()

    def _turn_towards_target(self, turn_speed: float) -> None:
        to_target = self.target - self.position
        if to_target.length_sq() <= 0.00001:
            return
        to_target = to_target.normalized()
        dot = self.direction.dot(to_target)
        rot = min(1.0 - dot, turn_speed)
        if abs(rot) <= 0.00001:
            return
        axis = self.direction.cross(to_target).normalized()
        self.transform = multiply(self.transform, rotation_axis(axis, rot))
        row = self.transform[2]
        self.direction = Vec3(row[0], row[1], row[2]).normalized()

    def launch(self, direction: Vec3, position: Vec3, target: Vec3) -> None:
        self.direction = direction
        self.position = position
        self.target = target
        self.update_transform()


class ProjectileManager:
    """Owns projectiles and removes destroyed ones after each update."""

    def __init__(self) -> None:
        self._projectiles: List[Projectile] = []
        self._removes: Dict[int, Projectile] = {}

    def register(self, projectile: Projectile) -> None:
        self._projectiles.append(projectile)

    def remove(self, projectile: Projectile) -> None:
        self._removes[id(projectile)] = projectile

    def update(self, elapsed_time: float) -> None:
        for projectile in tuple(self._projectiles):
            projectile.update(elapsed_time)
        for projectile in self._removes.values():
            if projectile in self._projectiles:
                self._projectiles.remove(projectile)
        self._removes.clear()

    def clear(self) -> None:
        self._projectiles.clear()

    def __len__(self) -> int:
        return len(self._projectiles)

    def __iter__(self) -> Iterator[Projectile]:
        return iter(self._projectiles)

    def __getitem__(self, index: int) -> Projectile:
        return self._projectiles[index]