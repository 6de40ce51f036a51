"""
PPTX renderer using python-pptx.

Converts reconstructed SlideLayouts into editable PowerPoint slides.
"""

from pathlib import Path
from typing import List, Optional

from pptx import Presentation
from pptx.util import Inches, Pt
from pptx.enum.text import PP_PARAGRAPH_ALIGNMENT, MSO_ANCHOR, MSO_AUTO_SIZE
from pptx.enum.shapes import MSO_SHAPE
from pptx.dml.color import RGBColor
from pptx.oxml.ns import qn
from pptx.oxml.xmlchemy import OxmlElement

from img2ppt.models import (
    SlideLayout,
    CanvasSpec,
    BackgroundObject,
    PlainTextBox,
    ContainerBox,
    TextStyle,
    Shadow,
)

ALIGNMENT_MAP = {
    "left": PP_PARAGRAPH_ALIGNMENT.LEFT,
    "center": PP_PARAGRAPH_ALIGNMENT.CENTER,
    "right": PP_PARAGRAPH_ALIGNMENT.RIGHT,
}

ANCHOR_MAP = {
    "top": MSO_ANCHOR.TOP,
    "middle": MSO_ANCHOR.MIDDLE,
    "bottom": MSO_ANCHOR.BOTTOM,
}

# Blank slide layout in the default template
BLANK_LAYOUT_INDEX = 6


def _set_color_alpha(clr, alpha01: float) -> None:
    """Replace alpha modifiers on a color element. alpha01: 1 = fully opaque."""
    for tag in ("a:alpha", "a:alphaMod", "a:alphaOff"):
        el = clr.find(qn(tag))
        if el is not None:
            clr.remove(el)

    a = min(1.0, max(0.0, alpha01))
    if a >= 1.0:
        return

    # a:alpha val is 0..100000 (percent * 1000)
    ael = OxmlElement("a:alpha")
    ael.set("val", str(int(round(a * 100000))))
    clr.append(ael)


def _set_fill_alpha(shape, alpha01: float) -> None:
    """Set opacity of a shape's solid fill via DrawingML."""
    solid = shape._element.spPr.find(qn("a:solidFill"))
    if solid is None:
        return
    clr = solid.find(qn("a:srgbClr"))
    if clr is not None:
        _set_color_alpha(clr, alpha01)


def _set_line_alpha(shape, alpha01: float) -> None:
    """Set opacity of a shape's solid outline via DrawingML."""
    ln = shape._element.spPr.find(qn("a:ln"))
    if ln is None:
        return
    solid = ln.find(qn("a:solidFill"))
    if solid is None:
        return
    clr = solid.find(qn("a:srgbClr"))
    if clr is not None:
        _set_color_alpha(clr, alpha01)


def _set_outer_shadow(shape, shadow: Shadow) -> None:
    """Attach an outer drop shadow (a:effectLst/a:outerShdw) to a shape."""
    spPr = shape._element.spPr

    effect_lst = spPr.find(qn("a:effectLst"))
    if effect_lst is not None:
        spPr.remove(effect_lst)
    effect_lst = OxmlElement("a:effectLst")

    # effectLst must follow a:ln in spPr
    ln = spPr.find(qn("a:ln"))
    if ln is not None:
        ln.addnext(effect_lst)
    else:
        spPr.append(effect_lst)

    outer = OxmlElement("a:outerShdw")
    outer.set("blurRad", str(int(Pt(shadow.blur))))
    outer.set("dist", str(int(Pt(shadow.offset))))
    # Direction in 60000ths of a degree
    outer.set("dir", str(int(round(shadow.angle * 60000))))
    outer.set("algn", "tl")
    outer.set("rotWithShape", "0")

    clr = OxmlElement("a:srgbClr")
    clr.set("val", shadow.color)
    outer.append(clr)
    _set_color_alpha(clr, shadow.opacity)

    effect_lst.append(outer)


def _set_run_outline(run, color: str, width_pt: float) -> None:
    """Outline the glyphs of a run (a:rPr/a:ln)."""
    rPr = run._r.get_or_add_rPr()
    existing = rPr.find(qn("a:ln"))
    if existing is not None:
        rPr.remove(existing)

    ln = OxmlElement("a:ln")
    ln.set("w", str(int(Pt(width_pt))))
    solid = OxmlElement("a:solidFill")
    clr = OxmlElement("a:srgbClr")
    clr.set("val", color)
    solid.append(clr)
    ln.append(solid)

    # a:ln is the first child of a:rPr
    rPr.insert(0, ln)


class PPTXRenderer:
    """
    Render SlideLayouts into a PowerPoint presentation using python-pptx.

    Features:
    - Full-slide background pictures
    - Editable text boxes with resolved font, size and color
    - Rounded container shapes with fill opacity, border and drop shadow
    - Glyph outlines
    """

    def render(
        self,
        layouts: List[SlideLayout],
        output_path: Path,
        images_dir: Path,
        canvas: Optional[CanvasSpec] = None,
    ) -> Path:
        """
        Render all slides to a PPTX file.

        Args:
            layouts: Reconstructed layouts, one per slide
            output_path: Path to save the PPTX file
            images_dir: Directory that relative image references resolve against
            canvas: Shared slide size (default: first layout's canvas)

        Returns:
            Path to the generated PPTX file
        """
        if canvas is None:
            if not layouts:
                raise ValueError("Cannot infer slide size: no layouts and no canvas given")
            canvas = layouts[0].canvas

        prs = Presentation()
        prs.slide_width = Inches(canvas.width)
        prs.slide_height = Inches(canvas.height)

        print(f"[PPTX] Slide dimensions: {canvas.width:.2f}\" x {canvas.height:.2f}\"")
        print(f"[PPTX] Rendering {len(layouts)} slides")

        for i, layout in enumerate(layouts):
            print(
                f"[PPTX] Rendering slide {i + 1}/{len(layouts)} ({len(layout.text_objects)} text objects)"
            )
            slide = prs.slides.add_slide(prs.slide_layouts[BLANK_LAYOUT_INDEX])

            # Objects are already in paint order
            for obj in layout.objects:
                if isinstance(obj, BackgroundObject):
                    self._render_background(obj, slide, Path(images_dir))
                elif isinstance(obj, ContainerBox):
                    self._render_container(obj, slide)
                elif isinstance(obj, PlainTextBox):
                    self._render_text(obj, slide)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        prs.save(str(output_path))

        print(f"[PPTX] Saved presentation to {output_path}")
        return output_path

    def _render_background(self, obj: BackgroundObject, slide, images_dir: Path) -> None:
        """Render the background picture stretched over the full slide."""
        # Absolute references are kept as-is by the join
        image_path = images_dir / obj.image_ref
        if not image_path.exists():
            print(f"[PPTX] Warning: Background image not found: {image_path}")
            return

        slide.shapes.add_picture(
            str(image_path),
            Inches(obj.box.x),
            Inches(obj.box.y),
            width=Inches(obj.box.w),
            height=Inches(obj.box.h),
        )

    def _render_text(self, obj: PlainTextBox, slide) -> None:
        """Render a plain text box (no fill, no border)."""
        textbox = slide.shapes.add_textbox(
            Inches(obj.box.x), Inches(obj.box.y), Inches(obj.box.w), Inches(obj.box.h)
        )
        self._fill_text_frame(textbox.text_frame, obj.style)

    def _render_container(self, obj: ContainerBox, slide) -> None:
        """Render text inside a filled rounded rectangle."""
        box = obj.box
        shape = slide.shapes.add_shape(
            MSO_SHAPE.ROUNDED_RECTANGLE,
            Inches(box.x),
            Inches(box.y),
            Inches(box.w),
            Inches(box.h),
        )

        # Corner adjustment is a fraction of the shorter side, capped at 0.5
        shorter = min(box.w, box.h)
        if shorter > 0:
            shape.adjustments[0] = min(0.5, obj.corner_radius / shorter)

        shape.fill.solid()
        shape.fill.fore_color.rgb = RGBColor.from_string(obj.fill.color)
        _set_fill_alpha(shape, 1.0 - obj.fill.transparency / 100.0)

        shape.line.color.rgb = RGBColor.from_string(obj.border.color)
        shape.line.width = Pt(obj.border.width)
        _set_line_alpha(shape, 1.0 - obj.border.transparency / 100.0)

        _set_outer_shadow(shape, obj.shadow)

        self._fill_text_frame(shape.text_frame, obj.style)

    def _fill_text_frame(self, text_frame, style: TextStyle) -> None:
        """Write one paragraph per line with the resolved style."""
        text_frame.clear()
        text_frame.word_wrap = True
        text_frame.auto_size = MSO_AUTO_SIZE.NONE
        text_frame.vertical_anchor = ANCHOR_MAP[style.vertical_anchor]

        margin = Pt(style.margin)
        text_frame.margin_left = margin
        text_frame.margin_right = margin
        text_frame.margin_top = margin
        text_frame.margin_bottom = margin

        for i, line in enumerate(style.text.split("\n")):
            p = text_frame.paragraphs[0] if i == 0 else text_frame.add_paragraph()
            p.alignment = ALIGNMENT_MAP[style.alignment]

            run = p.add_run()
            run.text = line
            run.font.size = Pt(style.font_size)
            run.font.name = style.font_face
            run.font.bold = style.bold
            run.font.italic = style.italic
            run.font.color.rgb = RGBColor.from_string(style.color)

            if style.outline:
                _set_run_outline(run, style.outline.color, style.outline.width)
