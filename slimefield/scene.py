"""Scenes, the manager that switches between them and a loading scene."""

from __future__ import annotations

import threading
from typing import Optional

LOADING_ICON_SPEED = 180.0


class Scene:
    """A game screen; subclasses override the stages they need."""

    def __init__(self) -> None:
        self._ready = threading.Event()
        self.frames_rendered = 0
        self.gui_frames_drawn = 0

    @property
    def ready(self) -> bool:
        """True once the scene has been initialised in the background."""
        return self._ready.is_set()

    def set_ready(self) -> None:
        self._ready.set()

    def initialize(self) -> None:
        """Acquire the scene's resources."""

    def finalize(self) -> None:
        """Release the scene's resources."""

    def update(self, elapsed_time: float) -> None:
        """Advance the scene by ``elapsed_time`` seconds."""

    def render(self) -> None:
        """Draw the scene; the base class counts the frames drawn."""
        self.frames_rendered += 1

    def draw_gui(self) -> None:
        """Draw the scene's interface; the base class counts the frames drawn."""
        self.gui_frames_drawn += 1


class SceneManager:
    """Runs one scene at a time and switches at the start of an update."""

    def __init__(self) -> None:
        self.current_scene: Optional[Scene] = None
        self.next_scene: Optional[Scene] = None

    def update(self, elapsed_time: float) -> None:
        if self.next_scene is not None:
            self.clear()
            self.current_scene = self.next_scene
            self.next_scene = None
            if not self.current_scene.ready:
                self.current_scene.initialize()

        if self.current_scene is not None:
            self.current_scene.update(elapsed_time)

    def render(self) -> None:
        if self.current_scene is not None:
            self.current_scene.render()

    def draw_gui(self) -> None:
        if self.current_scene is not None:
            self.current_scene.draw_gui()

    def clear(self) -> None:
        """Finalise and drop the current scene."""
        if self.current_scene is not None:
            self.current_scene.finalize()
            self.current_scene = None

    def change_scene(self, scene: Scene) -> None:
        """Switch to ``scene`` on the next update."""
        self.next_scene = scene


class SceneLoading(Scene):
    """Initialises another scene on a worker thread, then switches to it."""

    def __init__(self, next_scene: Scene, manager: SceneManager) -> None:
        super().__init__()
        self.next_scene: Optional[Scene] = next_scene
        self.manager = manager
        self.angle = 0.0
        self._thread: Optional[threading.Thread] = None
        self._error: Optional[BaseException] = None

    def initialize(self) -> None:
        self._thread = threading.Thread(target=self._load, daemon=True)
        self._thread.start()

    def finalize(self) -> None:
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def update(self, elapsed_time: float) -> None:
        """Spin the icon and hand over once the next scene is ready.

        An error raised while loading is raised here.
        """
        self.angle += LOADING_ICON_SPEED * elapsed_time
        if self._error is not None:
            error, self._error = self._error, None
            raise error
        if self.next_scene is not None and self.next_scene.ready:
            self.manager.change_scene(self.next_scene)
            self.next_scene = None

    def _load(self) -> None:
        scene = self.next_scene
        try:
            scene.initialize()
        except Exception as exc:  # handed to the main thread in update()
            self._error = exc
            return
        scene.set_ready()