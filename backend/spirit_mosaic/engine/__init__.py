"""Spirit Mosaic scene engine."""

from spirit_mosaic.engine.config import MosaicConfig
from spirit_mosaic.engine.registry import ModeKind, color_mode, display_mode, get_registry
from spirit_mosaic.engine.render_loop import RenderLoop, Selection
from spirit_mosaic.engine.viewport import Viewport

__all__ = [
    "MosaicConfig",
    "ModeKind",
    "color_mode",
    "display_mode",
    "get_registry",
    "RenderLoop",
    "Selection",
    "Viewport",
]
