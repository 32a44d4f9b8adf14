import math

import pytest

from slimefield.camera import Camera
from slimefield.camera_controller import CameraController, VirtualCursor
from slimefield.vecmath import Vec3


def make():
    camera = Camera()
    cursor = VirtualCursor(640, 360)
    controller = CameraController(camera=camera, cursor=cursor)
    return controller, camera, cursor


def test_cursor_set_visible_counts():
    cursor = VirtualCursor()
    cursor.set_visible(False)
    assert cursor.show_count == -1
    assert cursor.visible is False
    cursor.set_visible(True)
    assert cursor.show_count == 1
    assert cursor.visible is True


def test_first_update_hides_cursor():
    controller, _, cursor = make()
    controller.update(0.016)
    assert cursor.visible is False


def test_mouse_moves_yaw_and_recenters():
    controller, _, cursor = make()
    cursor.x = 740
    controller.update(0.016)
    assert controller.angle.y == pytest.approx(100 * controller.sensitivity)
    assert (cursor.x, cursor.y) == (controller.center_x, controller.center_y)


def test_pitch_is_clamped_both_ways():
    controller, _, cursor = make()
    cursor.y = 360 + 10000
    controller.update(0.016)
    assert controller.angle.x == pytest.approx(controller.max_angle_x)
    cursor.y = 360 - 100000
    controller.update(0.016)
    assert controller.angle.x == pytest.approx(controller.min_angle_x)


def test_yaw_wraps_into_range():
    controller, _, cursor = make()
    cursor.x = 640 + int(math.pi / controller.sensitivity) + 20
    controller.update(0.016)
    assert -math.pi <= controller.angle.y <= math.pi
    assert controller.angle.y < 0


def test_eye_behind_target():
    controller, camera, _ = make()
    target = Vec3(1.0, 2.0, 3.0)
    controller.set_target(target)
    controller.update(0.016)
    assert camera.focus == target
    assert camera.eye.x == pytest.approx(1.0)
    assert camera.eye.y == pytest.approx(2.0)
    assert camera.eye.z == pytest.approx(3.0 - controller.range)


def test_camera_front_consistent_with_eye():
    controller, camera, cursor = make()
    cursor.x = 900
    controller.set_target(Vec3(0.0, 1.0, 0.0))
    controller.update(0.016)
    assert camera.front.length() == pytest.approx(1.0)
    assert camera.front.y == pytest.approx(0.0, abs=1e-9)
    expected = controller.target - camera.front * controller.range
    assert camera.eye.x == pytest.approx(expected.x)
    assert camera.eye.z == pytest.approx(expected.z)


def test_toggle_key_edge_detection():
    controller, _, cursor = make()
    controller.update(0.016, True)
    assert controller.show_cursor is True
    assert cursor.visible is True

    cursor.x = 900
    controller.update(0.016, True)
    assert controller.show_cursor is True
    assert controller.angle.y == 0.0
    assert cursor.x == 900

    controller.update(0.016, False)
    controller.update(0.016, True)
    assert controller.show_cursor is False
    assert cursor.visible is False


def test_finalize_shows_cursor():
    controller, _, cursor = make()
    controller.update(0.016)
    controller.finalize()
    assert controller.show_cursor is True
    assert cursor.show_count == 1


def test_set_cursor_visibility_delegates():
    controller, _, cursor = make()
    controller.set_cursor_visibility(False)
    assert cursor.show_count == -1