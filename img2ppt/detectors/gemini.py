"""
Gemini vision integration.

Uses one model call to detect text elements (structured JSON output) and an
image generation call to erase the text from the slide.
"""

import os
import json
from typing import Optional, List, Any

from google import genai
from google.genai import types
from pydantic import ValidationError

from img2ppt.detectors.base import BaseDetector
from img2ppt.errors import DetectionError, BackgroundCleaningError
from img2ppt.models import SourceImage, TextElement


class GeminiDetector(BaseDetector):
    """
    Detect slide text and clean backgrounds with Google Gemini.

    Gemini provides:
    - Text grouping by visual container (boxes, stickers, bubbles)
    - Exact text, container and outline colors
    - Font weight, style and family estimates
    - Generative inpainting for text-free backgrounds
    """

    DEFAULT_ANALYSIS_MODEL = "gemini-2.5-flash"
    DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"

    SYSTEM_INSTRUCTION = """You are an expert Presentation Layout Engine. Your goal is to analyze an image (which will be a slide in a presentation) and extract ALL text elements to reconstruct an editable PowerPoint with HIGH FIDELITY.

CRITICAL INSTRUCTIONS:

1. VISUAL GROUPING (Strict):
   - If multiple lines of text appear inside the SAME visual container (like a white box, a sticker, a speech bubble, or a button), YOU MUST GROUP THEM into a single object.
   - If a Title and a Subtitle share the same background area, group them.
   - Use newlines (\\n) to separate lines.

2. CONTAINER DETECTION & COLORS:
   - hasContainer: Is the text inside a shape/box that overlays the background image?
   - containerColor: The EXACT Hex color of that box (e.g., #FFFFFF, #FFFDD0).
   - containerOpacity: Estimate opacity. 1.0 = solid, 0.5 = see-through, 0.0 = transparent.
   - textColor: The EXACT Hex color of the letters.
   - strokeColor: If text has a visible outline/border (common in memes/subtitles), return that Hex color.

3. FONT STYLING (Precision):
   - fontWeight: Is the font Thick/Bold? Return 'bold'. Otherwise 'normal'.
   - fontStyle: Is the font Slanted/Italic? Return 'italic'. Otherwise 'normal'.
   - fontFamily: Match the vibe (serif, sans-serif, monospace, handwriting).

4. BOUNDING BOXES:
   - The box_2d must encompass the ENTIRE container if hasContainer=true.

Return an array of these elements."""

    ANALYSIS_PROMPT = (
        "Analyze this slide. Group text in containers. "
        "Identify exact colors, bold/italic styles, and container opacity."
    )

    CLEANING_PROMPT = (
        "Remove ALL text from this slide. Keep the background pattern, logos, diagrams, "
        "and illustrations exactly as they are. Do not change the art style. "
        "Just erase the letters."
    )

    RESPONSE_SCHEMA = types.Schema(
        type=types.Type.ARRAY,
        items=types.Schema(
            type=types.Type.OBJECT,
            properties={
                "text": types.Schema(type=types.Type.STRING),
                "box_2d": types.Schema(
                    type=types.Type.ARRAY,
                    items=types.Schema(type=types.Type.INTEGER),
                    description="ymin, xmin, ymax, xmax (0-1000 scale)",
                ),
                "textColor": types.Schema(type=types.Type.STRING, description="Hex color code of the text"),
                "hasContainer": types.Schema(
                    type=types.Type.BOOLEAN, description="True if text is inside a visual box/shape"
                ),
                "containerColor": types.Schema(
                    type=types.Type.STRING,
                    description="Hex color of the container if hasContainer is true",
                    nullable=True,
                ),
                "containerOpacity": types.Schema(
                    type=types.Type.NUMBER, description="Opacity from 0.0 to 1.0", nullable=True
                ),
                "strokeColor": types.Schema(
                    type=types.Type.STRING, description="Hex color of text outline if exists", nullable=True
                ),
                "fontSize": types.Schema(type=types.Type.INTEGER),
                "fontFamily": types.Schema(
                    type=types.Type.STRING, enum=["serif", "sans-serif", "monospace", "handwriting"]
                ),
                "fontWeight": types.Schema(type=types.Type.STRING, enum=["bold", "normal"]),
                "fontStyle": types.Schema(type=types.Type.STRING, enum=["italic", "normal"]),
                "isTitle": types.Schema(type=types.Type.BOOLEAN),
                "alignment": types.Schema(type=types.Type.STRING, enum=["left", "center", "right"]),
            },
            required=[
                "text",
                "box_2d",
                "textColor",
                "hasContainer",
                "fontSize",
                "alignment",
                "fontWeight",
                "fontStyle",
            ],
        ),
    )

    def __init__(
        self,
        api_key: Optional[str] = None,
        analysis_model: Optional[str] = None,
        image_model: Optional[str] = None,
        temperature: float = 0.1,
        client: Optional[Any] = None,
    ):
        super().__init__()
        self.name = "gemini"
        self.api_key = api_key or os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
        self.analysis_model = analysis_model or os.getenv(
            "IMG2PPT_ANALYSIS_MODEL", self.DEFAULT_ANALYSIS_MODEL
        )
        self.image_model = image_model or os.getenv("IMG2PPT_IMAGE_MODEL", self.DEFAULT_IMAGE_MODEL)
        self.temperature = temperature

        if client is None:
            if not self.api_key:
                raise ValueError(
                    "Gemini API key required. Set GEMINI_API_KEY env var or pass api_key parameter."
                )
            client = genai.Client(api_key=self.api_key)
        self.client = client

    def detect(self, image: SourceImage) -> List[TextElement]:
        """
        Detect text elements with a structured-output Gemini call.

        Elements that fail validation are dropped one by one; the rest of
        the slide is kept.
        """
        print(f"[Gemini] Analyzing {image.path.name} ({image.width_px}x{image.height_px}px)")

        try:
            response = self.client.models.generate_content(
                model=self.analysis_model,
                contents=[
                    types.Part.from_bytes(data=image.data, mime_type=image.mime_type),
                    self.ANALYSIS_PROMPT,
                ],
                config=types.GenerateContentConfig(
                    system_instruction=self.SYSTEM_INSTRUCTION,
                    response_mime_type="application/json",
                    response_schema=self.RESPONSE_SCHEMA,
                    temperature=self.temperature,
                ),
            )
        except Exception as e:
            raise DetectionError(f"Gemini analysis failed for {image.path.name}: {e}") from e

        response_text = getattr(response, "text", None)
        if not response_text:
            raise DetectionError(f"Empty response from Gemini for {image.path.name}")

        elements = self.parse_elements(response_text)
        print(f"[Gemini] Detected {len(elements)} text elements in {image.path.name}")
        return elements

    @staticmethod
    def parse_elements(response_text: str) -> List[TextElement]:
        """
        Parse a JSON detection response into TextElements.

        Raises:
            DetectionError: If the response is not a JSON array of elements
        """
        response_text = response_text.strip()
        if response_text.startswith("```json"):
            response_text = response_text[7:]
        if response_text.startswith("```"):
            response_text = response_text[3:]
        if response_text.endswith("```"):
            response_text = response_text[:-3]

        try:
            data = json.loads(response_text)
        except json.JSONDecodeError as e:
            raise DetectionError(f"Invalid JSON from Gemini: {e}") from e

        if isinstance(data, dict):
            data = data.get("elements", [])
        if not isinstance(data, list):
            raise DetectionError(f"Expected a list of elements, got {type(data).__name__}")

        elements = []
        for i, item in enumerate(data):
            try:
                elements.append(TextElement.model_validate(item))
            except ValidationError as e:
                print(f"[Gemini] Warning: Skipping element {i}: {e.error_count()} validation error(s)")
        return elements

    def clean_background(self, image: SourceImage) -> bytes:
        """Erase all text with the image model, keeping the source aspect ratio."""
        aspect_ratio = image.target_aspect_ratio
        print(f"[Gemini] Cleaning background of {image.path.name} (aspect {aspect_ratio})")

        try:
            response = self.client.models.generate_content(
                model=self.image_model,
                contents=[
                    types.Part.from_bytes(data=image.data, mime_type=image.mime_type),
                    self.CLEANING_PROMPT,
                ],
                config=types.GenerateContentConfig(
                    image_config=types.ImageConfig(aspect_ratio=aspect_ratio),
                ),
            )
        except Exception as e:
            raise BackgroundCleaningError(
                f"Gemini text removal failed for {image.path.name}: {e}"
            ) from e

        for candidate in response.candidates or []:
            content = getattr(candidate, "content", None)
            for part in getattr(content, "parts", None) or []:
                inline_data = getattr(part, "inline_data", None)
                if inline_data is not None and inline_data.data:
                    return inline_data.data

        raise BackgroundCleaningError(f"No image generated for background cleaning of {image.path.name}")
