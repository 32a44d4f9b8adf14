"""Camera holding view and projection matrices."""

from __future__ import annotations

from dataclasses import dataclass, field

from slimefield.vecmath import Matrix, Vec3, identity, look_at_lh, perspective_fov_lh


@dataclass
class Camera:
    """A camera with its view basis and projection."""

    view: Matrix = field(default_factory=identity)
    projection: Matrix = field(default_factory=identity)
    eye: Vec3 = field(default_factory=Vec3)
    focus: Vec3 = field(default_factory=Vec3)
    up: Vec3 = field(default_factory=Vec3)
    front: Vec3 = field(default_factory=Vec3)
    right: Vec3 = field(default_factory=Vec3)

    def set_look_at(self, eye: Vec3, focus: Vec3, up: Vec3) -> None:
        """Point the camera from ``eye`` at ``focus``."""
        view = look_at_lh(eye, focus, up)
        self.view = view
        self.right = Vec3(view[0][0], view[1][0], view[2][0])
        self.up = Vec3(view[0][1], view[1][1], view[2][1])
        self.front = Vec3(view[0][2], view[1][2], view[2][2])
        self.eye = eye
        self.focus = focus

    def set_perspective_fov(self, fov_y: float, aspect: float, near_z: float, far_z: float) -> None:
        """Set a perspective projection from field of view, aspect and clip range."""
        self.projection = perspective_fov_lh(fov_y, aspect, near_z, far_z)