"""Engine configuration: layout, visual and interaction constants."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class MosaicConfig:
    """Tunables for pattern, layout, visuals, viewport and hit testing."""

    # World size (normalized positions are scaled by these)
    canvas_width: float = 1000.0
    canvas_height: float = 800.0

    # Pattern generator
    outline_subdivisions: int = 5
    grid_spacing: float = 0.02
    grid_jitter: float = 0.004  # ± per axis

    # Layout assigner
    min_distance: float = 0.02
    max_placement_attempts: int = 10
    base_spread: float = 0.25  # half-width of the x spread
    share_spread: float = 0.2  # extra half-width at 100% population share
    sampler_jitter: float = 0.03
    selective_columns: int = 4
    specialist_band_fraction: float = 0.4
    super_connector_overflow: float = 0.5  # band heights beyond each edge
    default_band: tuple[float, float] = (0.4, 0.6)

    # Thread visuals
    min_thickness: float = 1.0
    max_thickness: float = 4.0
    reference_event_count: int = 20
    thread_spacing: float = 15.0
    months: int = 8

    # Tiles
    tile_size: float = 15.0
    selected_scale: float = 1.5
    hovered_scale: float = 1.2
    intensity_cap: int = 10

    # Viewport
    min_zoom: float = 0.2
    max_zoom: float = 5.0
    default_zoom: float = 1.0
    zoom_step: float = 1.2  # zoom-in / zoom-out buttons
    wheel_step: float = 0.1  # factor 1 ± step per wheel notch

    # Hit testing
    bbox_padding_factor: float = 5.0
    pick_threshold_factor: float = 3.0
    curve_steps: int = 10

    # Animation
    phase_step: float = 0.05
    connection_zoom_cutoff: float = 2.0  # mosaic mode draws faint links below this zoom
