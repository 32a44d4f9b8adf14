"""Enemies, the slime's behaviour states and the manager that owns them."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional

from slimefield.character import Character
from slimefield.collision import intersect_cylinder_vs_cylinder
from slimefield.projectile import ProjectileManager, ProjectileStraight
from slimefield.vecmath import Vec3, random_range


@dataclass(eq=False)
class Enemy(Character):
    """A character owned by an :class:`EnemyManager`."""

    manager: Optional[EnemyManager] = field(default=None, repr=False)

    def update(self, elapsed_time: float) -> None:
        """Advance physics, invincibility and the world matrix by one frame."""
        self.update_velocity(elapsed_time)
        self.update_invincible_timer(elapsed_time)
        self.update_transform()

    def destroy(self) -> None:
        """Ask the owning manager to drop this enemy after its update."""
        if self.manager is None:
            raise RuntimeError("enemy is not registered with a manager")
        self.manager.remove(self)


class EnemyManager:
    """Updates enemies, removes destroyed ones and keeps them apart."""

    def __init__(self) -> None:
        self._enemies: List[Enemy] = []
        self._removes: Dict[int, Enemy] = {}

    def register(self, enemy: Enemy) -> None:
        enemy.manager = self
        self._enemies.append(enemy)

    def remove(self, enemy: Enemy) -> None:
        self._removes[id(enemy)] = enemy

    def update(self, elapsed_time: float) -> None:
        for enemy in tuple(self._enemies):
            enemy.update(elapsed_time)
        for enemy in self._removes.values():
            if enemy in self._enemies:
                self._enemies.remove(enemy)
        self._removes.clear()
        self._collide_enemies()

    def _collide_enemies(self) -> None:
        for i, first in enumerate(self._enemies):
            for second in self._enemies[i + 1:]:
                pushed = intersect_cylinder_vs_cylinder(
                    first.position,
                    first.radius,
                    first.height,
                    second.position,
                    second.radius,
                    second.height,
                )
                if pushed is not None:
                    second.position = pushed

    def clear(self) -> None:
        self._enemies.clear()

    def __len__(self) -> int:
        return len(self._enemies)

    def __iter__(self) -> Iterator[Enemy]:
        return iter(self._enemies)

    def __getitem__(self, index: int) -> Enemy:
        return self._enemies[index]


class SlimeState(Enum):
    WANDER = "wander"
    IDLE = "idle"
    ATTACK = "attack"


@dataclass(eq=False)
class EnemySlime(Enemy):
    """A slime that wanders its territory and shoots at a nearby player."""

    scale: Vec3 = field(default_factory=lambda: Vec3(0.01, 0.01, 0.01))
    radius: float = 0.5
    height: float = 1.0
    player: Optional[Character] = field(default=None, repr=False)
    rng: Optional[random.Random] = field(default=None, repr=False)
    state: SlimeState = SlimeState.WANDER
    target_position: Vec3 = field(default_factory=Vec3)
    territory_origin: Vec3 = field(default_factory=Vec3)
    territory_range: float = 10.0
    move_speed: float = 2.0
    turn_speed: float = math.radians(360)
    state_timer: float = 0.0
    search_range: float = 5.0
    projectile_manager: ProjectileManager = field(default_factory=ProjectileManager, repr=False)

    def __post_init__(self) -> None:
        self._set_wander_state()

    def update(self, elapsed_time: float) -> None:
        if self.state is SlimeState.WANDER:
            self._update_wander_state(elapsed_time)
        elif self.state is SlimeState.IDLE:
            self._update_idle_state(elapsed_time)
        else:
            self._update_attack_state(elapsed_time)

        self.update_velocity(elapsed_time)
        self.projectile_manager.update(elapsed_time)
        self.update_invincible_timer(elapsed_time)
        self.update_transform()

    def on_dead(self) -> None:
        self.destroy()

    def set_territory(self, origin: Vec3, territory_range: float) -> None:
        self.territory_origin = origin
        self.territory_range = territory_range

    def search_player(self) -> bool:
        """True if the player is within search range and in front."""
        if self.player is None:
            return False
        player_position = self.player.position
        vx = player_position.x - self.position.x
        vz = player_position.z - self.position.z
        dist = math.sqrt(vx * vx + vz * vz)
        if dist >= self.search_range or dist == 0.0:
            return False
        vx /= dist
        vz /= dist
        dot = math.sin(self.angle.y) * vx + math.cos(self.angle.y) * vz
        return dot > 0.0

    def _set_random_target_position(self) -> None:
        theta = random_range(-math.pi, math.pi, self.rng)
        distance = random_range(0.0, self.territory_range, self.rng)
        origin = self.territory_origin
        self.target_position = Vec3(
            origin.x + math.sin(theta) * distance,
            origin.y,
            origin.z + math.cos(theta) * distance,
        )

    def _move_to_target(self, elapsed_time: float, move_speed_rate: float, turn_speed_rate: float) -> None:
        vx = self.target_position.x - self.position.x
        vz = self.target_position.z - self.position.z
        dist = math.sqrt(vx * vx + vz * vz)
        if dist > 0.0:
            vx /= dist
            vz /= dist
        self.move(elapsed_time, vx, vz, self.move_speed * move_speed_rate)
        self.turn(elapsed_time, vx, vz, self.turn_speed * turn_speed_rate)

    def _set_wander_state(self) -> None:
        self.state = SlimeState.WANDER
        self._set_random_target_position()

    def _update_wander_state(self, elapsed_time: float) -> None:
        vx = self.target_position.x - self.position.x
        vz = self.target_position.z - self.position.z
        dist = math.sqrt(vx * vx + vz * vz)
        if dist < self.radius * self.radius:
            self._set_idle_state()
        self._move_to_target(elapsed_time, 1.0, 1.0)
        if self.search_player():
            self._set_attack_state()

    def _set_idle_state(self) -> None:
        self.state = SlimeState.IDLE
        self.state_timer = random_range(3.0, 5.0, self.rng)

    def _update_idle_state(self, elapsed_time: float) -> None:
        self.state_timer -= elapsed_time
        if self.state_timer < 0.0:
            self._set_wander_state()
        if self.search_player():
            self._set_attack_state()

    def _set_attack_state(self) -> None:
        self.state = SlimeState.ATTACK
        self.state_timer = 0.0

    def _update_attack_state(self, elapsed_time: float) -> None:
        if self.player is not None:
            self.target_position = self.player.position
        self._move_to_target(elapsed_time, 0.0, 1.0)

        self.state_timer -= elapsed_time
        if self.state_timer < 0.0:
            direction = Vec3(math.sin(self.angle.y), 0.0, math.cos(self.angle.y))
            origin = Vec3(self.position.x, self.position.y + self.height * 0.5, self.position.z)
            ProjectileStraight(self.projectile_manager).launch(direction, origin)
            self.state_timer = 2.0

        if not self.search_player():
            self._set_idle_state()