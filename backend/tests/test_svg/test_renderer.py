"""Tests for SVG serialization and frame rendering."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from spirit_mosaic.engine.config import MosaicConfig
from spirit_mosaic.engine.layout import Position
from spirit_mosaic.engine.scene import Frame, build_frame
from spirit_mosaic.engine.viewport import ViewportState
from spirit_mosaic.svg.renderer import render_svg, viewport_transform
from spirit_mosaic.svg.serializer import serialize_element, serialize_svg

SVG_NS = "{http://www.w3.org/2000/svg}"


def test_serialize_escapes_text_and_attributes():
    lines = serialize_element({"tag": "text", "x": "1", "data-note": 'a "b" <c>', "text": "R&D <lab>"})
    assert lines == ['  <text x="1" data-note=\'a "b" &lt;c&gt;\'>R&amp;D &lt;lab&gt;</text>']


def test_serialize_nested_children():
    svg = serialize_svg(
        [{"tag": "g", "id": "grp", "children": [{"tag": "circle", "cx": "1", "cy": "2", "r": "3"}]}],
        canvas_w=10,
        canvas_h=20,
        title="t",
    )
    root = ET.fromstring(svg.split("\n", 1)[1])
    assert root.get("viewBox") == "0 0 10 20"
    group = root.find(f"{SVG_NS}g")
    assert group is not None
    assert group.find(f"{SVG_NS}circle").get("r") == "3"
    assert root.find(f"{SVG_NS}title").text == "t"


def test_empty_frame_renders():
    frame = Frame("mosaic", "category", ViewportState(), 1000.0, 800.0)
    root = ET.fromstring(render_svg(frame).split("\n", 1)[1])
    world = root.find(f"{SVG_NS}g")
    assert world.get("id") == "world"
    assert list(world) == []


def test_frame_has_transform_and_overlay(sample_entities):
    positions = {e.id: Position(0.1 * (i + 1), 0.5) for i, e in enumerate(sample_entities)}
    frame = build_frame(
        "evolution",
        "style",
        entities=sample_entities,
        positions=positions,
        config=MosaicConfig(),
        view=ViewportState(pan_x=12.5, pan_y=-4.0, zoom=2.0),
    )
    svg = render_svg(frame)
    root = ET.fromstring(svg.split("\n", 1)[1])
    world = root.find(f"{SVG_NS}g")
    assert world.get("transform") == "translate(12.50 -4.00) scale(2.0000)"
    assert len(world.findall(f"{SVG_NS}rect")) == len(sample_entities)
    # Month label is outside the transformed group
    labels = [t.text for t in root.findall(f"{SVG_NS}text")]
    assert labels == ["Month: May"]


def test_viewport_transform_format():
    frame = Frame("mosaic", "category", ViewportState(1, 2, 0.5), 100.0, 100.0)
    assert viewport_transform(frame) == "translate(1.00 2.00) scale(0.5000)"
