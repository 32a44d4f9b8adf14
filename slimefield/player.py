"""The player character: input handling, shooting and collision with enemies."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntFlag
from typing import Callable, Optional

from slimefield.camera import Camera
from slimefield.character import Character
from slimefield.collision import (
    intersect_cylinder_vs_cylinder,
    intersect_ray_vs_cylinder,
    intersect_sphere_vs_cylinder,
)
from slimefield.enemy import EnemyManager, EnemySlime
from slimefield.projectile import ProjectileHoming, ProjectileManager, ProjectileStraight
from slimefield.vecmath import Vec3

RAY_HEIGHT = 0.3
RAY_LENGTH = 1000.0
KNOCKBACK_POWER = 10.0
STOMP_NORMAL_Y = 0.8


class Button(IntFlag):
    """Game pad buttons."""

    A = 1
    B = 2
    X = 4
    Y = 8


@dataclass(frozen=True)
class PadState:
    """One frame of game pad input: left stick and buttons pressed this frame."""

    axis_lx: float = 0.0
    axis_ly: float = 0.0
    button_down: Button = Button(0)


def _xz_unit(v: Vec3) -> tuple:
    length = math.sqrt(v.x * v.x + v.z * v.z)
    if length > 0.0:
        return v.x / length, v.z / length
    return v.x, v.z


@dataclass(eq=False)
class Player(Character):
    """The character steered by the game pad and the camera."""

    camera: Camera = field(default_factory=Camera, repr=False)
    enemies: EnemyManager = field(default_factory=EnemyManager, repr=False)
    scale: Vec3 = field(default_factory=lambda: Vec3(0.05, 0.05, 0.05))
    move_speed: float = 5.0
    turn_speed: float = math.radians(720)
    jump_speed: float = 12.0
    jump_count: int = 0
    jump_limit: int = 2
    projectile_manager: ProjectileManager = field(default_factory=ProjectileManager, repr=False)
    hit_callback: Optional[Callable[[Vec3], None]] = field(default=None, repr=False)
    has_ray_hit: bool = False
    ray_hit_point: Vec3 = field(default_factory=Vec3)

    def update(self, elapsed_time: float, pad: PadState) -> None:
        """Advance the player by one frame with the given input."""
        self._input_move(elapsed_time, pad)
        self._sync_angle_with_camera()
        self.input_jump(pad)
        self._input_projectile(pad)
        self.update_velocity(elapsed_time)
        self.projectile_manager.update(elapsed_time)
        self._collide_with_enemies()
        self._raycast_to_slimes()
        self._collide_projectiles_with_enemies()
        self.update_transform()

    def get_move_vec(self, pad: PadState) -> Vec3:
        """Movement direction on the XZ plane from the stick and the camera."""
        right_x, right_z = _xz_unit(self.camera.right)
        front_x, front_z = _xz_unit(self.camera.front)
        ax, ay = pad.axis_lx, pad.axis_ly
        return Vec3(right_x * ax + front_x * ay, 0.0, right_z * ax + front_z * ay)

    def input_jump(self, pad: PadState) -> None:
        """Jump on button A, up to ``jump_limit`` times before landing."""
        if pad.button_down & Button.A and self.jump_count < self.jump_limit:
            self.jump_count += 1
            self.jump(self.jump_speed)

    def on_landing(self) -> None:
        self.jump_count = 0

    def _input_move(self, elapsed_time: float, pad: PadState) -> None:
        move_vec = self.get_move_vec(pad)
        self.move(elapsed_time, move_vec.x, move_vec.z, self.move_speed)
        self.turn(elapsed_time, move_vec.x, move_vec.z, self.turn_speed)

    def _sync_angle_with_camera(self) -> None:
        front = self.camera.front
        self.angle = Vec3(self.angle.x, math.atan2(front.x, front.z), self.angle.z)

    def _launch_origin(self) -> tuple:
        direction = Vec3(math.sin(self.angle.y), 0.0, math.cos(self.angle.y))
        origin = Vec3(self.position.x, self.position.y + self.height * 0.5, self.position.z)
        return direction, origin

    def _input_projectile(self, pad: PadState) -> None:
        if pad.button_down & Button.X:
            direction, origin = self._launch_origin()
            ProjectileStraight(self.projectile_manager).launch(direction, origin)

        if pad.button_down & Button.Y:
            direction, origin = self._launch_origin()
            target = origin + direction * 1000.0
            nearest = math.inf
            for enemy in self.enemies:
                dist_sq = (self.position - enemy.position).length_sq()
                if dist_sq < nearest:
                    nearest = dist_sq
                    target = enemy.position + Vec3(0.0, enemy.height * 0.5, 0.0)
            ProjectileHoming(self.projectile_manager).launch(direction, origin, target)

    def _collide_with_enemies(self) -> None:
        for enemy in self.enemies:
            pushed = intersect_cylinder_vs_cylinder(
                self.position,
                self.radius,
                self.height,
                enemy.position,
                enemy.radius,
                enemy.height,
            )
            if pushed is None:
                continue
            normal = (self.position - enemy.position).normalized()
            if normal.y > STOMP_NORMAL_Y:
                self.jump(self.jump_speed * 0.5)
            else:
                enemy.position = pushed

    def _collide_projectiles_with_enemies(self) -> None:
        for projectile in tuple(self.projectile_manager):
            for enemy in tuple(self.enemies):
                hit = intersect_sphere_vs_cylinder(
                    projectile.position,
                    projectile.radius,
                    enemy.position,
                    enemy.radius,
                    enemy.height,
                )
                if hit is None or not enemy.apply_damage(1, 0.5):
                    continue
                vx = enemy.position.x - projectile.position.x
                vz = enemy.position.z - projectile.position.z
                length = math.sqrt(vx * vx + vz * vz)
                if length > 0.0:
                    vx, vz = vx / length, vz / length
                else:
                    vx = vz = 0.0
                enemy.add_impulse(
                    Vec3(vx * KNOCKBACK_POWER, KNOCKBACK_POWER * 0.5, vz * KNOCKBACK_POWER)
                )
                if self.hit_callback is not None:
                    self.hit_callback(enemy.position + Vec3(0.0, enemy.height * 0.5, 0.0))
                projectile.destroy()

    def _raycast_to_slimes(self) -> None:
        origin = self.position + Vec3(0.0, RAY_HEIGHT, 0.0)
        direction = self.camera.front.normalized()
        closest = math.inf
        closest_point = Vec3()
        for enemy in self.enemies:
            if not isinstance(enemy, EnemySlime):
                continue
            hit = intersect_ray_vs_cylinder(
                origin, direction, enemy.position, enemy.radius, enemy.height
            )
            if hit is not None and hit.distance < closest:
                closest = hit.distance
                closest_point = hit.point
        self.has_ray_hit = not math.isinf(closest)
        self.ray_hit_point = closest_point