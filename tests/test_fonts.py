"""
Tests for font size estimation.
"""

import pytest

from img2ppt.config import LayoutConfig
from img2ppt.layout.fonts import estimate_font_size, font_face_for
from img2ppt.models import TextElement


def make_element(text="Title", container=False, weight="normal") -> TextElement:
    return TextElement(
        text=text,
        region=[0, 0, 100, 100],
        has_container=container,
        font_weight=weight,
    )


def test_raw_text_size():
    # 1 inch box, 1 line: 72pt * 0.85
    assert estimate_font_size(make_element(), 1.0) == pytest.approx(61.2)


def test_container_uses_lower_fill_ratio():
    # 1 inch box, 1 line: 72pt * 0.70
    assert estimate_font_size(make_element(container=True), 1.0) == pytest.approx(50.4)


def test_bold_shrinks_size():
    normal = estimate_font_size(make_element(), 1.0)
    bold = estimate_font_size(make_element(weight="bold"), 1.0)
    assert bold == pytest.approx(normal * 0.95)
    assert bold <= normal


def test_size_divides_by_line_count():
    one = estimate_font_size(make_element("a"), 2.0)
    two = estimate_font_size(make_element("a\nb"), 2.0)
    four = estimate_font_size(make_element("a\nb\nc\nd"), 2.0)

    assert two == pytest.approx(one / 2)
    assert one > two > four


def test_size_increases_with_box_height():
    element = make_element("a\nb")
    sizes = [estimate_font_size(element, h) for h in (0.5, 1.0, 2.0, 4.0)]
    assert sizes == sorted(sizes)
    assert len(set(sizes)) == len(sizes)


def test_size_is_clamped_to_minimum():
    assert estimate_font_size(make_element(), 0.01) == 9.0
    assert estimate_font_size(make_element("\n".join("abcdefghij")), 0.5) == 9.0


def test_minimum_is_configurable():
    config = LayoutConfig(min_font_size=12)
    assert estimate_font_size(make_element(), 0.05, config) == 12


def test_no_maximum():
    assert estimate_font_size(make_element(), 20.0) == pytest.approx(20 * 72 * 0.85)


def test_font_size_hint_is_ignored():
    plain = make_element()
    hinted = TextElement(text="Title", region=[0, 0, 100, 100], fontSize=900)
    assert estimate_font_size(plain, 1.0) == estimate_font_size(hinted, 1.0)


@pytest.mark.parametrize(
    "family,face",
    [
        ("serif", "Times New Roman"),
        ("sans-serif", "Arial"),
        ("monospace", "Courier New"),
        ("handwriting", "Segoe Print"),
        (None, "Arial"),
        ("fantasy", "Arial"),
    ],
)
def test_font_face_for(family, face):
    assert font_face_for(family) == face
