import math

import pytest

from slimefield.projectile import (
    Projectile,
    ProjectileHoming,
    ProjectileManager,
    ProjectileStraight,
)
from slimefield.vecmath import Vec3


def test_construction_registers():
    manager = ProjectileManager()
    p = ProjectileStraight(manager)
    assert len(manager) == 1
    assert manager[0] is p
    assert list(manager) == [p]


def test_base_is_abstract():
    with pytest.raises(TypeError):
        Projectile(ProjectileManager())


def test_straight_moves_along_direction():
    manager = ProjectileManager()
    p = ProjectileStraight(manager, speed=10.0)
    p.launch(Vec3(1.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0))
    manager.update(0.5)
    assert p.position.x == pytest.approx(10.0 * 0.5)
    assert p.position.y == pytest.approx(1.0)
    assert p.position.z == pytest.approx(0.0)
    assert p.transform[3] == pytest.approx((p.position.x, 1.0, 0.0, 1.0))


def test_straight_expires():
    manager = ProjectileManager()
    p = ProjectileStraight(manager, life_timer=1.0)
    manager.update(0.6)
    assert len(manager) == 1
    manager.update(0.6)
    assert len(manager) == 0
    assert p not in list(manager)


def test_destroy_removes_after_update():
    manager = ProjectileManager()
    a = ProjectileStraight(manager)
    b = ProjectileStraight(manager)
    a.destroy()
    a.destroy()
    assert len(manager) == 2
    manager.update(0.01)
    assert list(manager) == [b]


def test_clear_empties():
    manager = ProjectileManager()
    ProjectileStraight(manager)
    ProjectileHoming(manager)
    manager.clear()
    assert len(manager) == 0


def test_update_transform_normalises_direction():
    manager = ProjectileManager()
    p = ProjectileStraight(manager)
    p.direction = Vec3(0.0, 0.0, 2.0)
    p.position = Vec3(4.0, 5.0, 6.0)
    p.update_transform()
    assert p.direction.length() == pytest.approx(1.0)
    assert p.direction.z == pytest.approx(1.0)
    front_row = Vec3(*p.transform[2][:3])
    assert front_row.length() == pytest.approx(p.scale.z)
    assert p.transform[3] == pytest.approx((4.0, 5.0, 6.0, 1.0))


def test_update_transform_rows_are_orthogonal():
    manager = ProjectileManager()
    p = ProjectileStraight(manager)
    p.direction = Vec3(1.0, 0.5, -2.0)
    p.update_transform()
    right = Vec3(*p.transform[0][:3])
    up = Vec3(*p.transform[1][:3])
    front = Vec3(*p.transform[2][:3])
    assert right.dot(up) == pytest.approx(0.0, abs=1e-9)
    assert right.dot(front) == pytest.approx(0.0, abs=1e-9)
    assert up.dot(front) == pytest.approx(0.0, abs=1e-9)


def test_homing_turns_towards_target():
    manager = ProjectileManager()
    p = ProjectileHoming(manager, move_speed=1.0, turn_speed=math.radians(180))
    target = Vec3(10.0, 0.0, 0.0)
    p.launch(Vec3(0.0, 0.0, 1.0), Vec3(), target)
    before = p.direction.dot((target - p.position).normalized())
    manager.update(0.1)
    after = p.direction.dot((target - p.position).normalized())
    assert after > before
    assert p.direction.length() == pytest.approx(1.0)
    assert p.direction.x > 0.0


def test_homing_straight_ahead_keeps_direction():
    manager = ProjectileManager()
    p = ProjectileHoming(manager, move_speed=1.0)
    p.launch(Vec3(0.0, 0.0, 1.0), Vec3(), Vec3(0.0, 0.0, 50.0))
    manager.update(0.1)
    assert p.direction.x == pytest.approx(0.0, abs=1e-9)
    assert p.direction.z == pytest.approx(1.0)


def test_homing_expires():
    manager = ProjectileManager()
    p = ProjectileHoming(manager, life_timer=0.05)
    p.launch(Vec3(0.0, 0.0, 1.0), Vec3(), Vec3(0.0, 0.0, 50.0))
    manager.update(0.1)
    assert len(manager) == 0