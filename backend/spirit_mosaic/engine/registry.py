"""Mode registry: colour and display modes are plain functions registered via decorator.

Usage:
    @color_mode("category", description="Primary category palette")
    def by_category(entity: Entity, config: MosaicConfig) -> RGB:
        ...

The dispatch table is built once at import time; draw code looks a mode up
once per frame, never per entity.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable

from spirit_mosaic.engine.errors import UnknownModeError

logger = logging.getLogger(__name__)


class ModeKind(str, enum.Enum):
    COLOR = "color"
    DISPLAY = "display"


@dataclass
class ModeSpec:
    name: str
    kind: ModeKind
    fn: Callable[..., Any]
    description: str = ""


class ModeRegistry:
    """Registry of colour and display modes, keyed by (kind, name)."""

    def __init__(self) -> None:
        self._modes: dict[tuple[ModeKind, str], ModeSpec] = {}

    def register(self, spec: ModeSpec) -> None:
        key = (spec.kind, spec.name)
        if key in self._modes:
            raise ValueError(f"Duplicate {spec.kind.value} mode: {spec.name}")
        self._modes[key] = spec
        logger.debug("Registered %s mode %s", spec.kind.value, spec.name)

    def get(self, kind: ModeKind, name: str) -> ModeSpec:
        try:
            return self._modes[(kind, name)]
        except KeyError:
            logger.warning("Unknown %s mode requested: %r", kind.value, name)
            raise UnknownModeError(kind.value, name) from None

    def names(self, kind: ModeKind) -> list[str]:
        return sorted(name for k, name in self._modes if k == kind)

    def has(self, kind: ModeKind, name: str) -> bool:
        return (kind, name) in self._modes

    @property
    def count(self) -> int:
        return len(self._modes)


# Module-level singleton
_registry = ModeRegistry()


def get_registry() -> ModeRegistry:
    return _registry


def _mode(kind: ModeKind, name: str, description: str):
    def decorator(fn: Callable[..., Any]):
        _registry.register(ModeSpec(name=name, kind=kind, fn=fn, description=description))
        return fn

    return decorator


def color_mode(name: str, *, description: str = ""):
    """Decorator to register a colour mode: fn(entity, config) -> (r, g, b)."""
    return _mode(ModeKind.COLOR, name, description)


def display_mode(name: str, *, description: str = ""):
    """Decorator to register a display mode: fn(frame_ctx) -> None (appends primitives)."""
    return _mode(ModeKind.DISPLAY, name, description)
