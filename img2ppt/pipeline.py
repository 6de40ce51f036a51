"""
Main orchestration pipeline for img2ppt.

Coordinates detection, background cleaning, layout reconstruction and PPTX
generation for a batch of slide images.
"""

import json
from concurrent.futures import ThreadPoolExecutor, Future, as_completed
from pathlib import Path
from typing import Optional, List, Callable, Sequence, Tuple

from img2ppt.config import LayoutConfig
from img2ppt.detectors.base import BaseDetector
from img2ppt.detectors.replay import elements_path, background_path
from img2ppt.layout import assemble_layout, compute_canvas
from img2ppt.models import ImageJob, SourceImage, SlideLayout, CanvasSpec
from img2ppt.renderers import PPTXRenderer


class Img2PPTPipeline:
    """
    End-to-end pipeline for converting slide images to editable PPTX.

    Pipeline stages:
    1. Detection: text elements + text-free background, per image, in parallel
    2. Layout: reconstruct slide objects on a shared canvas
    3. PPTX Rendering: generate editable PowerPoint

    Each image is an independent unit of work. A failure in one image marks
    that image as errored and never blocks its siblings.
    """

    def __init__(
        self,
        detector: Optional[BaseDetector] = None,
        layout_config: Optional[LayoutConfig] = None,
        clean_background: bool = True,
        max_concurrency: int = 3,
        save_intermediate: bool = True,
        debug: bool = False,
    ):
        """
        Initialize pipeline.

        Args:
            detector: Detection adapter (default: GeminiDetector)
            layout_config: Layout tunables (default: LayoutConfig())
            clean_background: Ask the detector for a text-free background
            max_concurrency: Number of images processed at once
            save_intermediate: Save detections and layout JSON
            debug: Print tracebacks for failed images
        """
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}")

        if detector is None:
            # google-genai is only needed for live detection
            from img2ppt.detectors.gemini import GeminiDetector

            detector = GeminiDetector()

        self.detector = detector
        self.layout_config = layout_config or LayoutConfig()
        self.clean_background = clean_background
        self.max_concurrency = max_concurrency
        self.save_intermediate = save_intermediate
        self.debug = debug
        self.renderer = PPTXRenderer()

    def process(
        self,
        image_paths: Sequence[Path],
        output_dir: Optional[Path] = None,
        output_path: Optional[Path] = None,
        progress_callback: Optional[Callable[[float, str], None]] = None,
    ) -> dict:
        """
        Process a batch of slide images through the full pipeline.

        Args:
            image_paths: Slide images, in slide order
            output_dir: Output directory (default: ./output/<first_image_name>)
            output_path: PPTX path (default: <output_dir>/<first_image_name>.pptx)
            progress_callback: Called with (percent, phase message)

        Returns:
            Dictionary with:
            {
                "pptx": Path to PPTX file (None if no image succeeded),
                "layout": Path to layout JSON (if enabled),
                "assets": Directory with backgrounds and detections,
                "jobs": List of ImageJob records, in input order
            }
        """
        image_paths = [Path(p) for p in image_paths]
        if not image_paths:
            raise ValueError("No input images given")

        name = image_paths[0].stem
        if output_dir is None:
            output_dir = Path("output") / name
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        assets_dir = output_dir / "assets"
        assets_dir.mkdir(exist_ok=True)

        if output_path is None:
            output_path = output_dir / f"{name}.pptx"

        print(f"\n{'='*60}")
        print(f"img2ppt Pipeline")
        print(f"{'='*60}")
        print(f"Images: {len(image_paths)}")
        print(f"Output: {output_dir}")
        print(f"Detector: {self.detector.name}")
        print(f"Background cleaning: {self.clean_background}")
        print(f"Concurrency: {self.max_concurrency}")
        print(f"{'='*60}\n")

        # Stage 1: Detection
        print(f"[Stage 1/3] Detection ({len(image_paths)} images)")
        jobs = self.analyze(image_paths, assets_dir, progress_callback=progress_callback)

        # Stage 2: Layout
        if progress_callback:
            progress_callback(90.0, "Reconstructing layouts")
        print(f"\n[Stage 2/3] Layout reconstruction")
        canvas, layouts = self.build_layouts(jobs)

        failed = [job for job in jobs if not job.is_completed]
        for job in failed:
            print(f"[Pipeline] ✗ {job.source.name}: {job.error}")

        layout_path = None
        if self.save_intermediate and layouts:
            layout_path = output_dir / f"{name}.layout.json"
            with open(layout_path, "w", encoding="utf-8") as f:
                json.dump([layout.to_dict() for layout in layouts], f, indent=2, ensure_ascii=False)
            print(f"[Stage 2/3] Saved layouts to {layout_path}")

        # Stage 3: Render PPTX
        pptx_path = None
        if layouts:
            if progress_callback:
                progress_callback(95.0, "Rendering PPTX")
            print(f"\n[Stage 3/3] Rendering PPTX")
            pptx_path = self.renderer.render(layouts, Path(output_path), assets_dir, canvas=canvas)
        else:
            print(f"\n[Stage 3/3] Warning: No images were converted, skipping PPTX")

        if progress_callback:
            progress_callback(100.0, "Done")

        # Summary
        print(f"\n{'='*60}")
        print(f"✓ Pipeline Complete ({len(layouts)}/{len(jobs)} slides)")
        print(f"{'='*60}")
        print(f"PPTX: {pptx_path}")
        if layout_path:
            print(f"Layout JSON: {layout_path}")
        print(f"{'='*60}\n")

        return {
            "pptx": pptx_path,
            "layout": layout_path,
            "assets": assets_dir,
            "jobs": jobs,
        }

    def analyze(
        self,
        image_paths: Sequence[Path],
        assets_dir: Path,
        progress_callback: Optional[Callable[[float, str], None]] = None,
    ) -> List[ImageJob]:
        """
        Run detection for every image with a bounded worker window.

        Returns:
            One ImageJob per input, in input order
        """
        image_paths = [Path(p) for p in image_paths]
        assets_dir = Path(assets_dir)
        assets_dir.mkdir(parents=True, exist_ok=True)

        # Artifacts are keyed by file stem
        stems = [p.stem for p in image_paths]
        duplicates = sorted({s for s in stems if stems.count(s) > 1})
        if duplicates:
            raise ValueError(f"Input images must have unique names, duplicates: {duplicates}")

        jobs = [ImageJob(index=i, source=path) for i, path in enumerate(image_paths)]
        results: List[Optional[ImageJob]] = [None] * len(jobs)
        total = len(jobs)

        # Each image runs up to two calls at once (detect + clean)
        with ThreadPoolExecutor(
            max_workers=self.max_concurrency, thread_name_prefix="img2ppt-image"
        ) as image_pool, ThreadPoolExecutor(
            max_workers=self.max_concurrency * 2, thread_name_prefix="img2ppt-call"
        ) as call_pool:
            futures = {
                image_pool.submit(self._analyze_one, job, assets_dir, call_pool): job.index
                for job in jobs
            }

            done = 0
            for future in as_completed(futures):
                index = futures[future]
                results[index] = future.result()
                done += 1
                if progress_callback:
                    progress_callback(
                        80.0 * done / total,
                        f"Analyzed {done}/{total}: {jobs[index].source.name}",
                    )

        return results

    def _analyze_one(self, job: ImageJob, assets_dir: Path, call_pool: ThreadPoolExecutor) -> ImageJob:
        """Detect one image. Never raises: failures are recorded on the job."""
        print(f"  → Processing image {job.index + 1}: {job.source.name}")
        clean_future: Optional[Future] = None

        try:
            image = SourceImage.from_path(job.source)
            # Reject bad dimensions before spending API calls
            compute_canvas(image.width_px, image.height_px, self.layout_config)

            detect_future = call_pool.submit(self.detector.detect, image)
            if self.clean_background:
                clean_future = call_pool.submit(self.detector.clean_background, image)

            elements = detect_future.result()
            background_ref, fallback = self._resolve_background(image, clean_future, assets_dir)

            if self.save_intermediate:
                with open(elements_path(assets_dir, image), "w", encoding="utf-8") as f:
                    json.dump(
                        [el.model_dump(mode="json", by_alias=True) for el in elements],
                        f,
                        indent=2,
                        ensure_ascii=False,
                    )

            return job.model_copy(
                update={
                    "status": "completed",
                    "width_px": image.width_px,
                    "height_px": image.height_px,
                    "elements": elements,
                    "background_ref": background_ref,
                    "background_fallback": fallback,
                }
            )

        except Exception as e:
            if clean_future is not None:
                clean_future.cancel()
            print(f"[Pipeline] Error processing {job.source.name}: {e}")
            if self.debug:
                import traceback

                traceback.print_exc()
            return job.model_copy(update={"status": "error", "error": str(e) or type(e).__name__})

    def _resolve_background(
        self, image: SourceImage, clean_future: Optional[Future], assets_dir: Path
    ) -> Tuple[str, bool]:
        """
        Pick the background for an image.

        Returns:
            (image reference, True if the original image is used as fallback)
        """
        fallback_ref = str(image.path.resolve())
        if clean_future is None:
            return fallback_ref, True

        try:
            data = clean_future.result()
        except Exception as e:
            print(f"[Pipeline] Warning: Background cleaning failed for {image.path.name}, using original: {e}")
            return fallback_ref, True

        path = background_path(assets_dir, image)
        path.write_bytes(data)
        return path.name, False

    def build_layouts(self, jobs: Sequence[ImageJob]) -> Tuple[Optional[CanvasSpec], List[SlideLayout]]:
        """
        Reconstruct layouts for completed jobs on one shared canvas.

        The presentation has a single slide size, taken from the first
        completed image; every slide is projected onto it.

        Returns:
            (shared canvas or None, layouts in input order)
        """
        completed = [job for job in jobs if job.is_completed]
        if not completed:
            return None, []

        first = completed[0]
        canvas = compute_canvas(first.width_px, first.height_px, self.layout_config)

        layouts = []
        for job in completed:
            ratio = job.width_px / job.height_px
            if abs(ratio - canvas.aspect_ratio) > 0.01:
                print(
                    f"[Pipeline] Warning: {job.source.name} aspect ratio {ratio:.3f} differs from "
                    f"slide size {canvas.aspect_ratio:.3f}; content will be stretched"
                )

            layout = assemble_layout(
                job.elements,
                canvas,
                job.background_ref,
                self.layout_config,
                index=job.index,
                source=str(job.source),
            )
            layouts.append(layout)
            print(f"[Layout] {job.source.name}: {len(layout.text_objects)} text objects")

        return canvas, layouts
