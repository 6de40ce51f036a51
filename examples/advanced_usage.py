"""
Advanced usage examples for img2ppt.

Shows how to:
- Re-render saved detections with different layout settings
- Tune the layout engine
- Use the layout engine on its own
- Track progress
"""

import json
from pathlib import Path

from img2ppt import Img2PPTPipeline, LayoutConfig, TextElement
from img2ppt.detectors import ReplayDetector
from img2ppt.layout import reconstruct


def example_replay_detections():
    """Re-render a previous run without calling Gemini again."""
    print("\n[Example 1] Replay saved detections")

    # Detections and cleaned backgrounds from an earlier run
    pipeline = Img2PPTPipeline(
        detector=ReplayDetector(Path("output/slides/assets")),
        layout_config=LayoutConfig(padding_fraction=0.03),
    )

    result = pipeline.process(
        image_paths=sorted(Path("examples/slides").glob("*.png")),
        output_dir=Path("output/slides_tight"),
    )

    print(f"✓ PPTX: {result['pptx']}")


def example_custom_layout():
    """Snap near-white/near-black colors and raise the minimum font size."""
    print("\n[Example 2] Custom layout settings")

    config = LayoutConfig(
        snap_colors=True,  # FAFAFA -> FFFFFF, 0B0B0B -> 000000
        min_font_size=12,  # Nothing smaller than 12pt
        strict_regions=True,  # Drop elements with empty boxes
    )

    pipeline = Img2PPTPipeline(layout_config=config, clean_background=False)

    result = pipeline.process(
        image_paths=[Path("examples/slides/slide1.png")],
        output_dir=Path("output/slide1_custom"),
    )

    print(f"✓ PPTX: {result['pptx']}")


def example_layout_engine():
    """Reconstruct one slide from hand-written detections, no API calls."""
    print("\n[Example 3] Layout engine only")

    elements = [
        TextElement.model_validate(
            {
                "text": "Quarterly Review\nQ3 2024",
                "box_2d": [80, 100, 260, 900],
                "textColor": "#1A1A1A",
                "hasContainer": True,
                "containerColor": "#FFFFFF",
                "containerOpacity": 0.9,
                "fontWeight": "bold",
                "alignment": "center",
            }
        ),
    ]

    layout = reconstruct(elements, 1920, 1080, "background.png")
    print(json.dumps(layout.to_dict(), indent=2))


def example_progress():
    """Report progress while processing a batch."""
    print("\n[Example 4] Progress reporting")

    def on_progress(percent: float, message: str):
        print(f"  [{percent:5.1f}%] {message}")

    pipeline = Img2PPTPipeline(max_concurrency=5)
    result = pipeline.process(
        image_paths=sorted(Path("examples/slides").glob("*.png")),
        progress_callback=on_progress,
    )

    print(f"✓ PPTX: {result['pptx']}")


if __name__ == "__main__":
    # Run examples
    # example_replay_detections()
    # example_custom_layout()
    # example_progress()
    example_layout_engine()
