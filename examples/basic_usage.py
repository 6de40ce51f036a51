"""
Basic usage example for img2ppt.

This example shows how to convert a folder of slide screenshots to an
editable PPTX using the Python API.
"""

from pathlib import Path
from img2ppt import Img2PPTPipeline


def main():
    # Initialize pipeline with default settings (Gemini detector)
    pipeline = Img2PPTPipeline(
        clean_background=True,  # Erase text from backgrounds (one extra API call per image)
        max_concurrency=3,  # Images analyzed at once
        save_intermediate=True,  # Save detections and layout JSON
        debug=False,  # Disable debug mode
    )

    # Slides are ordered by file name
    image_paths = sorted(Path("examples/slides").glob("*.png"))
    output_dir = Path("output/slides")

    result = pipeline.process(image_paths=image_paths, output_dir=output_dir)

    print("\n✓ Conversion complete!")
    print(f"  PPTX: {result['pptx']}")
    print(f"  Layout JSON: {result['layout']}")

    for job in result["jobs"]:
        if not job.is_completed:
            print(f"  ✗ {job.source.name}: {job.error}")


if __name__ == "__main__":
    main()
