"""Intersection tests between rays, spheres and Y-aligned cylinders."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from slimefield.vecmath import Vec3

FLT_EPSILON = 1.1920928955078125e-07


@dataclass(frozen=True)
class RayHit:
    """Where a ray struck and how far along it."""

    point: Vec3
    distance: float


def intersect_ray_vs_cylinder(
    ray_origin: Vec3,
    ray_direction: Vec3,
    cylinder_position: Vec3,
    cylinder_radius: float,
    cylinder_height: float,
) -> Optional[RayHit]:
    """Nearest hit of a ray on a cylinder standing on ``cylinder_position``.

    ``ray_direction`` is expected to be normalised.
    """
    min_y = cylinder_position.y
    max_y = cylinder_position.y + cylinder_height
    radius_sq = cylinder_radius * cylinder_radius
    closest = math.inf

    rel = ray_origin - cylinder_position
    dx, dz = ray_direction.x, ray_direction.z
    a = dx * dx + dz * dz
    b = 2.0 * (rel.x * dx + rel.z * dz)
    c = rel.x * rel.x + rel.z * rel.z - radius_sq

    if a > FLT_EPSILON:
        discriminant = b * b - 4 * a * c
        if discriminant >= 0:
            root = math.sqrt(discriminant)
            for t in ((-b - root) / (2.0 * a), (-b + root) / (2.0 * a)):
                if 0.0 < t < closest:
                    hit_y = (ray_origin + ray_direction * t).y
                    if min_y <= hit_y <= max_y:
                        closest = t

    dy = ray_direction.y
    if abs(dy) > FLT_EPSILON:
        for plane_y in (max_y, min_y):
            t = (plane_y - ray_origin.y) / dy
            if 0.0 < t < closest:
                point = ray_origin + ray_direction * t
                ox = point.x - cylinder_position.x
                oz = point.z - cylinder_position.z
                if ox * ox + oz * oz <= radius_sq:
                    closest = t

    if math.isinf(closest):
        return None
    return RayHit(ray_origin + ray_direction * closest, closest)


def intersect_sphere_vs_sphere(
    position_a: Vec3, radius_a: float, position_b: Vec3, radius_b: float
) -> Optional[Vec3]:
    """Position B pushed out of sphere A, or None if they do not touch."""
    offset = position_b - position_a
    reach = radius_a + radius_b
    if offset.length_sq() > reach * reach:
        return None
    return position_a + offset.normalized() * reach


def _push_out_xz(origin: Vec3, target: Vec3, reach: float) -> Optional[Vec3]:
    vx = target.x - origin.x
    vz = target.z - origin.z
    dist = math.sqrt(vx * vx + vz * vz)
    if dist > reach:
        return None
    if dist == 0.0:
        # Coincident axes give no direction; the result is undefined.
        ux = uz = math.nan
    else:
        ux, uz = vx / dist, vz / dist
    return Vec3(origin.x + reach * ux, target.y, origin.z + reach * uz)


def intersect_cylinder_vs_cylinder(
    position_a: Vec3,
    radius_a: float,
    height_a: float,
    position_b: Vec3,
    radius_b: float,
    height_b: float,
) -> Optional[Vec3]:
    """Position B pushed out of cylinder A on the XZ plane, or None."""
    if position_a.y > position_b.y + height_b:
        return None
    if position_a.y + height_a < position_b.y:
        return None
    return _push_out_xz(position_a, position_b, radius_a + radius_b)


def intersect_sphere_vs_cylinder(
    sphere_position: Vec3,
    sphere_radius: float,
    cylinder_position: Vec3,
    cylinder_radius: float,
    cylinder_height: float,
) -> Optional[Vec3]:
    """Cylinder position pushed out of the sphere on the XZ plane, or None."""
    if sphere_position.y - sphere_radius > cylinder_position.y + cylinder_height:
        return None
    if sphere_position.y + sphere_radius < cylinder_position.y:
        return None
    return _push_out_xz(sphere_position, cylinder_position, sphere_radius + cylinder_radius)