"""
Tests for slide object assembly.
"""

import pytest

from img2ppt.config import LayoutConfig
from img2ppt.errors import InvalidDimensions
from img2ppt.layout import assemble_layout, build_slide, reconstruct, compute_canvas
from img2ppt.models import (
    TextElement,
    CanvasSpec,
    BackgroundObject,
    PlainTextBox,
    ContainerBox,
)


CANVAS = CanvasSpec(width=10, height=5.625)


def test_empty_elements_give_background_only():
    objects = build_slide([], CANVAS, "bg.png")

    assert len(objects) == 1
    background = objects[0]
    assert isinstance(background, BackgroundObject)
    assert background.image_ref == "bg.png"
    assert (background.box.x, background.box.y) == (0, 0)
    assert (background.box.w, background.box.h) == (10, 5.625)


def test_objects_follow_input_order():
    elements = [
        TextElement(text="first", region=[500, 500, 600, 600], has_container=True),
        TextElement(text="second", region=[0, 0, 100, 100]),
        TextElement(text="third", region=[510, 510, 590, 590]),
    ]
    objects = build_slide(elements, CANVAS, "bg.png")

    assert [obj.kind for obj in objects] == ["background", "container", "text", "text"]
    assert [obj.style.text for obj in objects[1:]] == ["first", "second", "third"]


def test_end_to_end_container_scenario():
    """One bold, two-line container element on a 1600x900 image."""
    element = TextElement.model_validate(
        {
            "text": "Hello\nWorld",
            "box_2d": [100, 100, 300, 400],
            "textColor": "#222",
            "hasContainer": True,
            "containerColor": "#FFF",
            "containerOpacity": 1.0,
            "fontWeight": "bold",
            "fontStyle": "normal",
            "alignment": "center",
            "fontSize": 30,
        }
    )

    layout = reconstruct([element], 1600, 900, "bg.png")

    assert layout.canvas.width == 10
    assert layout.canvas.height == pytest.approx(5.625)
    assert len(layout.objects) == 2

    box = layout.objects[1]
    assert isinstance(box, ContainerBox)

    # Raw projection is x=1.0, y=0.5625, w=3.0, h=1.125; container inflates it
    assert box.box.x < 1.0 and box.box.y < 0.5625
    assert box.box.w > 3.0 and box.box.h > 1.125
    assert box.box.h == pytest.approx(1.2375)

    assert box.fill.color == "FFFFFF"
    assert box.fill.transparency == 0

    # 2 lines, container fill ratio, bold shrink
    expected = 1.2375 * 72 / 2 * 0.70 * 0.95
    assert box.style.font_size == pytest.approx(expected)
    assert box.style.font_size >= 9
    assert box.style.bold is True
    assert box.style.alignment == "center"
    assert box.style.color == "222222"


def test_degenerate_region_is_clamped_by_default(capsys):
    elements = [
        TextElement(text="flat", region=[300, 100, 300, 400]),
        TextElement(text="fine", region=[400, 100, 500, 400]),
    ]
    objects = build_slide(elements, CANVAS, "bg.png")

    assert len(objects) == 3
    flat = objects[1]
    assert isinstance(flat, PlainTextBox)
    assert flat.box.h > 0
    assert flat.style.font_size == 9.0
    assert "Clamped degenerate region" in capsys.readouterr().out


def test_degenerate_region_dropped_in_strict_mode():
    elements = [
        TextElement(text="flat", region=[300, 100, 300, 400]),
        TextElement(text="fine", region=[400, 100, 500, 400]),
    ]
    objects = build_slide(elements, CANVAS, "bg.png", LayoutConfig(strict_regions=True))

    assert len(objects) == 2
    assert objects[1].style.text == "fine"


def test_build_slide_is_deterministic():
    elements = [
        TextElement(text="A\nB", region=[10, 20, 200, 500], has_container=True, container_opacity=0.4),
        TextElement(text="C", region=[600, 100, 700, 900], stroke_color="#000"),
    ]
    assert build_slide(elements, CANVAS, "bg.png") == build_slide(elements, CANVAS, "bg.png")


def test_reconstruct_invalid_dimensions():
    with pytest.raises(InvalidDimensions):
        reconstruct([], 0, 100, "bg.png")


def test_reconstruct_metadata():
    layout = reconstruct([], 1024, 768, "bg.png", index=3, source="slides/s3.png")
    assert layout.index == 3
    assert layout.source == "slides/s3.png"
    assert layout.canvas == compute_canvas(1024, 768)


def test_reconstruct_matches_assemble_on_own_canvas():
    elements = [TextElement(text="Same", region=[100, 100, 300, 400], has_container=True)]
    canvas = compute_canvas(1600, 900)

    assert reconstruct(elements, 1600, 900, "bg.png", index=2) == assemble_layout(
        elements, canvas, "bg.png", index=2
    )


def test_assemble_layout_uses_given_canvas():
    """A shared slide size overrides the image's own aspect ratio."""
    canvas = CanvasSpec(width=10, height=10)
    layout = assemble_layout([TextElement(text="Wide", region=[0, 0, 500, 500])], canvas, "bg.png", source="a.png")

    assert layout.canvas == canvas
    assert layout.background.box.h == 10
    assert layout.source == "a.png"
    assert len(layout.text_objects) == 1
