"""Math helpers: lerp, clamp, range remapping. No engine imports."""

from __future__ import annotations


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def remap(
    value: float, in_lo: float, in_hi: float, out_lo: float, out_hi: float,
) -> float:
    """Map value from [in_lo, in_hi] onto [out_lo, out_hi] (no clamping).

    A zero-width input range maps everything to out_lo.
    """
    span = in_hi - in_lo
    if span == 0:
        return out_lo
    return out_lo + (value - in_lo) * (out_hi - out_lo) / span


def rgb_to_hex(rgb: tuple[int, int, int]) -> str:
    r, g, b = (int(clamp(c, 0, 255)) for c in rgb)
    return f"#{r:02x}{g:02x}{b:02x}"
