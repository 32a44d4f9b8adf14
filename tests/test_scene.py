import time

import pytest

from slimefield.scene import Scene, SceneLoading, SceneManager


class RecordingScene(Scene):
    def __init__(self, fail: bool = False) -> None:
        super().__init__()
        self.fail = fail
        self.calls = []

    def initialize(self) -> None:
        self.calls.append("initialize")
        if self.fail:
            raise OSError("missing asset")

    def finalize(self) -> None:
        self.calls.append("finalize")

    def update(self, elapsed_time: float) -> None:
        self.calls.append(("update", elapsed_time))

    def render(self) -> None:
        self.calls.append("render")

    def draw_gui(self) -> None:
        self.calls.append("draw_gui")


def _wait_ready(scene: Scene, timeout: float = 5.0) -> None:
    deadline = time.monotonic() + timeout
    while not scene.ready and time.monotonic() < deadline:
        time.sleep(0.001)


def test_change_scene_takes_effect_on_update():
    manager = SceneManager()
    scene = RecordingScene()
    manager.change_scene(scene)
    assert scene.calls == []
    manager.update(0.5)
    assert scene.calls == ["initialize", ("update", 0.5)]
    assert manager.current_scene is scene


def test_switching_finalizes_old_scene():
    manager = SceneManager()
    first, second = RecordingScene(), RecordingScene()
    manager.change_scene(first)
    manager.update(0.0)
    manager.change_scene(second)
    manager.update(0.0)
    assert first.calls[-1] == "finalize"
    assert manager.current_scene is second


def test_ready_scene_is_not_initialized_again():
    manager = SceneManager()
    scene = RecordingScene()
    scene.set_ready()
    manager.change_scene(scene)
    manager.update(0.1)
    assert scene.calls == [("update", 0.1)]


def test_render_and_gui_delegate_to_current_scene():
    manager = SceneManager()
    scene = RecordingScene()
    manager.change_scene(scene)
    manager.update(0.0)
    manager.render()
    manager.draw_gui()
    assert scene.calls[-2:] == ["render", "draw_gui"]


def test_clear_finalizes_and_empties():
    manager = SceneManager()
    scene = RecordingScene()
    manager.change_scene(scene)
    manager.update(0.0)
    manager.clear()
    assert scene.calls[-1] == "finalize"
    assert manager.current_scene is None


def test_empty_manager_does_nothing():
    manager = SceneManager()
    manager.update(0.0)
    manager.render()
    assert manager.current_scene is None


def test_set_ready_marks_scene_ready():
    scene = Scene()
    assert scene.ready is False
    scene.set_ready()
    assert scene.ready is True


def test_loading_scene_spins_icon():
    loading = SceneLoading(RecordingScene(), SceneManager())
    loading.update(0.5)
    assert loading.angle == pytest.approx(90.0)


def test_loading_error_is_raised_in_update():
    loading = SceneLoading(RecordingScene(fail=True), SceneManager())
    loading.initialize()
    loading.finalize()
    with pytest.raises(OSError, match="missing asset"):
        loading.update(0.0)
    assert loading.next_scene.ready is False