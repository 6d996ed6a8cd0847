"""Render loop and selection state.

The loop is an explicit state machine (idle -> running -> idle). Each tick
while running advances the animation phase by a fixed step and redraws the
whole frame from current state. Time comes from an injectable clock so tests
can drive it deterministically.
"""

from __future__ import annotations

import enum
import logging
import time
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

SelectionListener = Callable[[str | None], None]


class Selection:
    """Selected and hovered entity ids.

    select() notifies listeners exactly once per actual change; re-selecting
    the current id, or selecting an id that does not exist, does nothing.
    """

    def __init__(self, exists: Callable[[str], bool] | None = None) -> None:
        self._exists = exists
        self.selected_id: str | None = None
        self.hovered_id: str | None = None
        self._listeners: list[SelectionListener] = []

    def subscribe(self, listener: SelectionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def select(self, entity_id: str | None) -> bool:
        if entity_id is not None and self._exists is not None and not self._exists(entity_id):
            return False
        if entity_id == self.selected_id:
            return False
        self.selected_id = entity_id
        logger.debug("Selection changed: %s", entity_id)
        for listener in list(self._listeners):
            listener(entity_id)
        return True

    def set_hover(self, entity_id: str | None) -> bool:
        if entity_id == self.hovered_id:
            return False
        self.hovered_id = entity_id
        return True

    def clear(self) -> None:
        self.select(None)
        self.set_hover(None)


class LoopState(str, enum.Enum):
    IDLE = "idle"
    RUNNING = "running"


class RenderLoop(Generic[T]):
    """Drives `render(phase)` once per tick while running."""

    def __init__(
        self,
        render: Callable[[float], T],
        phase_step: float = 0.05,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._render = render
        self.phase_step = phase_step
        self.clock = clock
        self.state = LoopState.IDLE
        self.animation_phase = 0.0
        self.elapsed = 0.0
        self.frames = 0
        self._last_tick: float | None = None

    @property
    def running(self) -> bool:
        return self.state is LoopState.RUNNING

    def start(self) -> None:
        if self.running:
            return
        self.state = LoopState.RUNNING
        self._last_tick = self.clock()
        logger.info("Render loop started")

    def stop(self) -> None:
        if not self.running:
            return
        self.state = LoopState.IDLE
        self._last_tick = None
        logger.info("Render loop stopped after %d frames", self.frames)

    def tick(self, delta_time: float | None = None) -> T | None:
        """Advance one frame; a no-op returning None while idle."""
        if not self.running:
            return None
        now = self.clock()
        if delta_time is None:
            delta_time = now - self._last_tick if self._last_tick is not None else 0.0
        self._last_tick = now
        self.elapsed += max(0.0, delta_time)
        self.animation_phase += self.phase_step
        self.frames += 1
        return self._render(self.animation_phase)

    def redraw(self) -> T:
        """Render at the current phase without advancing it."""
        return self._render(self.animation_phase)
