"""Physical character: movement, gravity, turning and health."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from slimefield.vecmath import (
    Matrix,
    Vec3,
    identity,
    multiply,
    rotation_roll_pitch_yaw,
    scaling,
    translation,
)


@dataclass(eq=False)
class Character:
    """A cylinder-shaped body moving on the ground plane y = 0."""

    position: Vec3 = field(default_factory=Vec3)
    angle: Vec3 = field(default_factory=Vec3)
    scale: Vec3 = field(default_factory=lambda: Vec3(1.0, 1.0, 1.0))
    transform: Matrix = field(default_factory=identity)
    radius: float = 0.5
    gravity: float = -30.0
    velocity: Vec3 = field(default_factory=Vec3)
    is_ground: bool = False
    height: float = 2.0
    health: int = 5
    invincible_timer: float = 1.0
    friction: float = 15.0
    acceleration: float = 50.0
    max_move_speed: float = 5.0
    move_vec_x: float = 0.0
    move_vec_z: float = 0.0
    air_control: float = 0.3

    def update_transform(self) -> None:
        """Rebuild the world matrix from scale, rotation and position."""
        s = scaling(self.scale.x, self.scale.y, self.scale.z)
        r = rotation_roll_pitch_yaw(self.angle.x, self.angle.y, self.angle.z)
        t = translation(self.position.x, self.position.y, self.position.z)
        self.transform = multiply(multiply(s, r), t)

    def add_impulse(self, impulse: Vec3) -> None:
        self.velocity = self.velocity + impulse

    def apply_damage(self, damage: int, invincible_time: float) -> bool:
        """Take damage; return True if health changed."""
        if damage == 0:
            return False
        if self.health <= 0:
            return False
        if self.invincible_timer >= 0:
            return False

        self.invincible_timer = invincible_time
        self.health -= damage
        if self.health <= 0:
            self.on_dead()
        else:
            self.on_damaged()
        return True

    def move(self, elapsed_time: float, vx: float, vz: float, speed: float) -> None:
        """Request movement along (vx, vz) for the next velocity update."""
        self.move_vec_x = vx
        self.move_vec_z = vz
        self.max_move_speed = speed

    def turn(self, elapsed_time: float, vx: float, vz: float, speed: float) -> None:
        """Turn the yaw towards the direction (vx, vz)."""
        speed *= elapsed_time
        length = math.sqrt(vx * vx + vz * vz)
        if length < 0.001:
            return
        vx /= length
        vz /= length

        front_x = math.sin(self.angle.y)
        front_z = math.cos(self.angle.y)
        dot = front_x * vx + front_z * vz
        rot = min(1.0 - dot, speed)
        cross = front_z * vx - front_x * vz

        yaw = self.angle.y - rot if cross < 0 else self.angle.y + rot
        self.angle = Vec3(self.angle.x, yaw, self.angle.z)

    def jump(self, speed: float) -> None:
        self.velocity = Vec3(self.velocity.x, speed, self.velocity.z)

    def update_velocity(self, elapsed_time: float) -> None:
        """Apply gravity, friction and acceleration, then move."""
        self._update_vertical_velocity(elapsed_time)
        self._update_horizontal_velocity(elapsed_time)
        self._update_vertical_move(elapsed_time)
        self._update_horizontal_move(elapsed_time)

    def update_invincible_timer(self, elapsed_time: float) -> None:
        if self.invincible_timer > 0.0:
            self.invincible_timer -= elapsed_time

    def on_landing(self) -> None:
        """Called when the character touches the ground."""

    def on_damaged(self) -> None:
        """Called after damage that leaves the character alive."""

    def on_dead(self) -> None:
        """Called when damage brings health to zero or below."""

    def _update_vertical_velocity(self, elapsed_time: float) -> None:
        v = self.velocity
        self.velocity = Vec3(v.x, v.y + self.gravity * elapsed_time, v.z)

    def _update_vertical_move(self, elapsed_time: float) -> None:
        p = self.position
        y = p.y + self.velocity.y * elapsed_time
        if y < 0.0:
            y = 0.0
            if not self.is_ground:
                self.on_landing()
            self.is_ground = True
            self.velocity = Vec3(self.velocity.x, 0.0, self.velocity.z)
        else:
            self.is_ground = False
        self.position = Vec3(p.x, y, p.z)

    def _update_horizontal_velocity(self, elapsed_time: float) -> None:
        vx, vz = self.velocity.x, self.velocity.z
        length = math.sqrt(vx * vx + vz * vz)
        if length > 0.0:
            friction = self.friction * elapsed_time
            if not self.is_ground:
                friction *= self.air_control
            if length > friction:
                vx -= vx / length * friction
                vz -= vz / length * friction
            else:
                vx = vz = 0.0

        if length <= self.max_move_speed:
            move_length = math.sqrt(self.move_vec_x ** 2 + self.move_vec_z ** 2)
            if move_length > 0.0:
                acceleration = self.acceleration * elapsed_time
                if not self.is_ground:
                    acceleration *= self.air_control
                vx += self.move_vec_x * acceleration
                vz += self.move_vec_z * acceleration
                new_length = math.sqrt(vx * vx + vz * vz)
                if new_length > self.max_move_speed:
                    vx = vx / new_length * self.max_move_speed
                    vz = vz / new_length * self.max_move_speed

        self.velocity = Vec3(vx, self.velocity.y, vz)
        self.move_vec_x = 0.0
        self.move_vec_z = 0.0

    def _update_horizontal_move(self, elapsed_time: float) -> None:
        p, v = self.position, self.velocity
        self.position = Vec3(p.x + v.x * elapsed_time, p.y, p.z + v.z * elapsed_time)