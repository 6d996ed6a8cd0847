"""Write SVG markup from element dicts."""

from __future__ import annotations

from typing import Any
from xml.sax.saxutils import escape, quoteattr

_RESERVED = ("tag", "children", "text")


def serialize_element(elem: dict[str, Any], indent: int = 1) -> list[str]:
    """One element (and its children) as SVG lines.

    `text` becomes character content; `children` nests further element dicts.
    """
    pad = "  " * indent
    tag = elem.get("tag", "path")
    attrs = {k: v for k, v in elem.items() if k not in _RESERVED}
    attr_str = "".join(f" {k}={quoteattr(str(v))}" for k, v in attrs.items())

    children = elem.get("children") or []
    text = elem.get("text")
    if text is not None:
        return [f"{pad}<{tag}{attr_str}>{escape(str(text))}</{tag}>"]
    if not children:
        return [f"{pad}<{tag}{attr_str} />"]

    lines = [f"{pad}<{tag}{attr_str}>"]
    for child in children:
        lines.extend(serialize_element(child, indent + 1))
    lines.append(f"{pad}</{tag}>")
    return lines


def serialize_svg(
    elements: list[dict[str, Any]],
    canvas_w: float = 1000.0,
    canvas_h: float = 800.0,
    title: str = "",
    description: str = "",
    background: str | None = None,
) -> str:
    """Generate standalone SVG markup from element definitions."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg viewBox="0 0 {canvas_w:g} {canvas_h:g}" width="{canvas_w:g}" height="{canvas_h:g}"'
        f' xmlns="http://www.w3.org/2000/svg" role="img">',
    ]

    if title:
        lines.append(f"  <title>{escape(title)}</title>")
    if description:
        lines.append(f"  <desc>{escape(description)}</desc>")
    if background:
        lines.append(f'  <rect width="100%" height="100%" fill={quoteattr(background)} />')

    for elem in elements:
        lines.extend(serialize_element(elem))

    lines.append("</svg>")
    return "\n".join(lines)
