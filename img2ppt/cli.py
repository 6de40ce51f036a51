"""
Command-line interface for img2ppt.
"""

import sys
import argparse
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from img2ppt import __version__
from img2ppt.config import LayoutConfig
from img2ppt.pipeline import Img2PPTPipeline


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="img2ppt",
        description="img2ppt: Convert slide images into an editable PPTX",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert screenshots with Gemini
  img2ppt slide1.png slide2.png

  # Keep the original images as backgrounds (faster, one API call per image)
  img2ppt slides/*.png --no-clean-background

  # Re-render saved detections with tighter container padding
  img2ppt slides/*.png --from-detections output/slide1/assets --padding 0.03

  # Specify output file
  img2ppt slides/*.png -o deck.pptx

Environment Variables:
  GEMINI_API_KEY           API key for Gemini (API_KEY is also accepted)
  IMG2PPT_ANALYSIS_MODEL   Model for text detection (default: gemini-2.5-flash)
  IMG2PPT_IMAGE_MODEL      Model for background cleaning (default: gemini-2.5-flash-image)
        """,
    )

    parser.add_argument(
        "images",
        nargs="*",
        type=Path,
        help="Slide images, in slide order",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"img2ppt {__version__}",
    )

    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Output PPTX path (default: <output-dir>/<first_image>.pptx)",
    )

    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Output directory (default: ./output/<first_image>)",
    )

    parser.add_argument(
        "--concurrency",
        type=int,
        default=3,
        help="Images processed at once (default: 3)",
    )

    parser.add_argument(
        "--no-clean-background",
        action="store_true",
        help="Use the original images as backgrounds instead of text-free versions",
    )

    parser.add_argument(
        "--from-detections",
        type=Path,
        metavar="DIR",
        help="Reuse detections saved in an assets directory instead of calling Gemini",
    )

    parser.add_argument(
        "--snap-colors",
        action="store_true",
        help="Snap near-white and near-black colors to pure white/black",
    )

    parser.add_argument(
        "--padding",
        type=float,
        default=None,
        help="Container padding as a fraction of box size (default: 0.05, must be above 0.025)",
    )

    parser.add_argument(
        "--min-font-size",
        type=float,
        default=None,
        help="Minimum font size in points (default: 9)",
    )

    parser.add_argument(
        "--no-intermediate",
        action="store_true",
        help="Don't save detections and layout JSON",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print tracebacks for failed images",
    )

    return parser


def layout_config_from_args(args: argparse.Namespace) -> LayoutConfig:
    overrides = {"snap_colors": args.snap_colors}
    if args.padding is not None:
        overrides["padding_fraction"] = args.padding
    if args.min_font_size is not None:
        overrides["min_font_size"] = args.min_font_size
    return LayoutConfig(**overrides)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    load_dotenv()  # Load .env file if present

    parser = build_parser()
    args = parser.parse_args(argv)

    # Validate input
    if not args.images:
        parser.print_help()
        return 1

    missing = [p for p in args.images if not p.exists()]
    if missing:
        for path in missing:
            print(f"Error: Input file not found: {path}", file=sys.stderr)
        return 1

    try:
        layout_config = layout_config_from_args(args)

        detector = None
        if args.from_detections:
            from img2ppt.detectors.replay import ReplayDetector

            detector = ReplayDetector(args.from_detections)

        pipeline = Img2PPTPipeline(
            detector=detector,
            layout_config=layout_config,
            clean_background=not args.no_clean_background,
            max_concurrency=args.concurrency,
            save_intermediate=not args.no_intermediate,
            debug=args.debug,
        )

        result = pipeline.process(
            image_paths=args.images,
            output_dir=args.output_dir,
            output_path=args.output,
        )

        return 0 if result["pptx"] else 1

    except KeyboardInterrupt:
        print("\n\nInterrupted by user", file=sys.stderr)
        return 130

    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        if args.debug:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
