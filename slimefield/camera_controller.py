"""Mouse-look camera that orbits closely behind a target."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Optional

from slimefield.camera import Camera
from slimefield.vecmath import Matrix, Vec3, identity, rotation_roll_pitch_yaw

SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 720
WORLD_UP = Vec3(0.0, 1.0, 0.0)


@dataclass
class VirtualCursor:
    """Mouse cursor with a position and a show counter.

    The cursor is shown while ``show_count`` is zero or more.
    """

    x: int = SCREEN_WIDTH // 2
    y: int = SCREEN_HEIGHT // 2
    show_count: int = 0

    @property
    def visible(self) -> bool:
        return self.show_count >= 0

    def set_visible(self, visible: bool) -> None:
        """Reset the counter and force the cursor shown or hidden."""
        self.show_count = 1 if visible else -1


@dataclass
class CameraController:
    """Turns mouse movement into camera angles and places the camera."""

    camera: Camera = field(default_factory=Camera)
    cursor: Optional[VirtualCursor] = None
    target: Vec3 = field(default_factory=Vec3)
    angle: Vec3 = field(default_factory=Vec3)
    transform: Matrix = field(default_factory=identity)
    roll_speed: float = math.radians(90)
    range: float = 0.1
    max_angle_x: float = math.radians(45)
    min_angle_x: float = math.radians(-60)
    screen_width: float = float(SCREEN_WIDTH)
    screen_height: float = float(SCREEN_HEIGHT)
    sensitivity: float = 0.005
    show_cursor: bool = False
    _state: int = field(default=0, init=False, repr=False)
    _prev_toggle: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        self.center_x = int(self.screen_width / 2)
        self.center_y = int(self.screen_height / 2)
        if self.cursor is None:
            self.cursor = VirtualCursor(self.center_x, self.center_y)

    def set_target(self, target: Vec3) -> None:
        self.target = target

    def set_cursor_visibility(self, visible: bool) -> None:
        self.cursor.set_visible(visible)

    def update(self, elapsed_time: float, toggle_key_down: bool = False) -> None:
        """Advance one frame; ``toggle_key_down`` is the cursor toggle key state."""
        if self._state == 0:
            self.set_cursor_visibility(self.show_cursor)
            self._state = 1

        if toggle_key_down and not self._prev_toggle:
            self.show_cursor = not self.show_cursor
            self.set_cursor_visibility(self.show_cursor)
        self._prev_toggle = toggle_key_down

        if not self.show_cursor:
            self._look_with_mouse()

        row = self.transform[2]
        front = Vec3(row[0], row[1], row[2])
        eye = self.target - front * self.range
        self.camera.set_look_at(eye, self.target, WORLD_UP)

    def _look_with_mouse(self) -> None:
        ax = float(self.cursor.x - self.center_x)
        ay = float(self.cursor.y - self.center_y)

        pitch = self.angle.x + ay * self.sensitivity
        yaw = self.angle.y + ax * self.sensitivity

        pitch = min(max(pitch, self.min_angle_x), self.max_angle_x)
        if yaw < -math.pi:
            yaw += 2.0 * math.pi
        if yaw > math.pi:
            yaw -= 2.0 * math.pi

        self.angle = replace(self.angle, x=pitch, y=yaw)
        self.cursor.x, self.cursor.y = self.center_x, self.center_y
        self.transform = rotation_roll_pitch_yaw(self.angle.x, self.angle.y, self.angle.z)

    def finalize(self) -> None:
        """Give the cursor back to the user."""
        self.show_cursor = True
        self.set_cursor_visibility(self.show_cursor)