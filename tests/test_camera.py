import itertools
import math

import pytest

from slimefield.camera import Camera
from slimefield.vecmath import Vec3, identity, multiply, perspective_fov_lh, translation


def flat(m):
    return list(itertools.chain.from_iterable(m))


EYE = Vec3(0, 10, -10)
FOCUS = Vec3(0, 0, 0)
UP = Vec3(0, 1, 0)


def test_new_camera_has_identity_matrices():
    camera = Camera()
    assert camera.view == identity()
    assert camera.projection == identity()


def test_look_at_stores_eye_and_focus():
    camera = Camera()
    camera.set_look_at(EYE, FOCUS, UP)
    assert camera.eye == EYE
    assert camera.focus == FOCUS


def test_front_points_at_focus():
    camera = Camera()
    camera.set_look_at(EYE, FOCUS, UP)
    expected = (FOCUS - EYE).normalized()
    assert list(camera.front) == pytest.approx(list(expected))


def test_basis_is_orthonormal():
    camera = Camera()
    camera.set_look_at(Vec3(3, 2, -7), Vec3(-1, 0.5, 4), UP)
    basis = [camera.right, camera.up, camera.front]
    for v in basis:
        assert v.length() == pytest.approx(1.0)
    for a, b in itertools.combinations(basis, 2):
        assert a.dot(b) == pytest.approx(0.0, abs=1e-12)


def test_right_is_x_axis_when_looking_along_yz_plane():
    camera = Camera()
    camera.set_look_at(EYE, FOCUS, UP)
    assert list(camera.right) == pytest.approx([1.0, 0.0, 0.0])


def test_view_maps_eye_to_origin():
    camera = Camera()
    camera.set_look_at(EYE, FOCUS, UP)
    mapped = multiply(translation(*EYE), camera.view)[3]
    assert list(mapped[:3]) == pytest.approx([0.0, 0.0, 0.0], abs=1e-12)


def test_perspective_stores_projection():
    camera = Camera()
    camera.set_perspective_fov(math.radians(45), 1280 / 720, 0.1, 1000.0)
    assert flat(camera.projection) == pytest.approx(
        flat(perspective_fov_lh(math.radians(45), 1280 / 720, 0.1, 1000.0))
    )


def test_perspective_rejects_zero_near():
    with pytest.raises(ValueError):
        Camera().set_perspective_fov(math.radians(45), 1.0, 0.0, 10.0)


def test_look_at_rejects_same_points():
    with pytest.raises(ValueError):
        Camera().set_look_at(EYE, EYE, UP)