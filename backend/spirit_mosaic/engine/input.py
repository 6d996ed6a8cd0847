"""Platform-neutral pointer input.

A host shell converts its own events (HTTP calls, GUI callbacks) into
PointerEvent values and feeds them to an InputController, which drives the
viewport, hit tester and selection.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Callable

from spirit_mosaic.engine.hit_test import HitTarget, HitTester
from spirit_mosaic.engine.render_loop import Selection
from spirit_mosaic.engine.viewport import Viewport


class PointerKind(str, enum.Enum):
    DOWN = "pointer-down"
    MOVE = "pointer-move"
    UP = "pointer-up"
    WHEEL = "wheel"


@dataclass(frozen=True)
class PointerEvent:
    kind: PointerKind
    x: float
    y: float
    delta_y: float = 0.0


class InputController:
    """Pointer-down picks and starts a drag; move pans while dragging, else hovers."""

    def __init__(
        self,
        viewport: Viewport,
        selection: Selection,
        targets: Callable[[], Sequence[HitTarget]],
    ) -> None:
        self.viewport = viewport
        self.selection = selection
        self.hit_tester = HitTester(viewport)
        self._targets = targets
        self.dragging = False
        self._last: tuple[float, float] | None = None

    def handle(self, event: PointerEvent) -> None:
        if event.kind is PointerKind.DOWN:
            self._down(event)
        elif event.kind is PointerKind.MOVE:
            self._move(event)
        elif event.kind is PointerKind.UP:
            self._up()
        elif event.kind is PointerKind.WHEEL:
            self.viewport.wheel(event.delta_y, event.x, event.y)

    def _down(self, event: PointerEvent) -> None:
        self.dragging = True
        self._last = (event.x, event.y)
        # Empty space deselects
        self.selection.select(self.hit_tester.pick((event.x, event.y), self._targets()))

    def _move(self, event: PointerEvent) -> None:
        if self.dragging and self._last is not None:
            self.viewport.pan(event.x - self._last[0], event.y - self._last[1])
            self._last = (event.x, event.y)
            return
        self.selection.set_hover(self.hit_tester.hover((event.x, event.y), self._targets()))

    def _up(self) -> None:
        self.dragging = False
        self._last = None
