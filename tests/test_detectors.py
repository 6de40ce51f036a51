"""
Tests for the Gemini and replay detectors.
"""

import json
from pathlib import Path
from types import SimpleNamespace

import pytest

from img2ppt.detectors import ReplayDetector
from img2ppt.detectors.gemini import GeminiDetector
from img2ppt.errors import DetectionError, BackgroundCleaningError
from img2ppt.models import SourceImage

from tests.conftest import png_bytes


def source_image(name="slide.png", width=160, height=90) -> SourceImage:
    return SourceImage(
        path=Path(name), data=png_bytes(width, height), mime_type="image/png", width_px=width, height_px=height
    )


class FakeModels:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def generate_content(self, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error:
            raise self.error
        return self.response


def make_detector(response=None, error=None) -> GeminiDetector:
    client = SimpleNamespace(models=FakeModels(response, error))
    return GeminiDetector(client=client, analysis_model="analysis", image_model="image")


def image_response(*parts):
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=list(parts)))])


ELEMENTS_JSON = json.dumps(
    [
        {
            "text": "Title",
            "box_2d": [50, 100, 150, 900],
            "textColor": "#000000",
            "hasContainer": False,
            "fontSize": 40,
            "alignment": "center",
            "fontWeight": "bold",
            "fontStyle": "normal",
        },
        {"text": "", "box_2d": [0, 0, 10, 10]},
        {"text": "No box"},
    ]
)


# --- Gemini ---


def test_missing_api_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    with pytest.raises(ValueError, match="GEMINI_API_KEY"):
        GeminiDetector()


def test_model_overrides_from_env(monkeypatch):
    monkeypatch.setenv("IMG2PPT_ANALYSIS_MODEL", "custom-analysis")
    monkeypatch.setenv("IMG2PPT_IMAGE_MODEL", "custom-image")
    detector = GeminiDetector(client=SimpleNamespace(models=FakeModels()))

    assert detector.analysis_model == "custom-analysis"
    assert detector.image_model == "custom-image"
    assert detector.name == "gemini"


def test_detect_drops_invalid_elements():
    detector = make_detector(SimpleNamespace(text=ELEMENTS_JSON))
    elements = detector.detect(source_image())

    assert len(elements) == 1
    assert elements[0].text == "Title"
    assert elements[0].is_bold

    call = detector.client.models.calls[0]
    assert call["model"] == "analysis"
    assert call["config"].response_mime_type == "application/json"
    assert call["contents"][1] == GeminiDetector.ANALYSIS_PROMPT


def test_detect_wraps_api_errors():
    detector = make_detector(error=RuntimeError("quota exceeded"))
    with pytest.raises(DetectionError, match="quota exceeded"):
        detector.detect(source_image())


def test_detect_empty_response():
    detector = make_detector(SimpleNamespace(text=""))
    with pytest.raises(DetectionError):
        detector.detect(source_image())


def test_parse_elements_strips_code_fences():
    text = "```json\n" + ELEMENTS_JSON + "\n```"
    assert [el.text for el in GeminiDetector.parse_elements(text)] == ["Title"]


def test_parse_elements_accepts_wrapped_list():
    text = json.dumps({"elements": json.loads(ELEMENTS_JSON)})
    assert len(GeminiDetector.parse_elements(text)) == 1


@pytest.mark.parametrize("text", ["not json", '"a string"', "42"])
def test_parse_elements_rejects_non_lists(text):
    with pytest.raises(DetectionError):
        GeminiDetector.parse_elements(text)


def test_clean_background_returns_first_image():
    response = image_response(
        SimpleNamespace(inline_data=None, text="Here you go"),
        SimpleNamespace(inline_data=SimpleNamespace(data=b"PNGDATA")),
    )
    detector = make_detector(response)

    assert detector.clean_background(source_image(width=1600, height=900)) == b"PNGDATA"

    call = detector.client.models.calls[0]
    assert call["model"] == "image"
    assert call["config"].image_config.aspect_ratio == "16:9"


def test_clean_background_without_image():
    detector = make_detector(image_response(SimpleNamespace(inline_data=None)))
    with pytest.raises(BackgroundCleaningError):
        detector.clean_background(source_image())


def test_clean_background_wraps_api_errors():
    detector = make_detector(error=RuntimeError("safety block"))
    with pytest.raises(BackgroundCleaningError):
        detector.clean_background(source_image())


def test_cleaning_error_is_detection_error():
    assert issubclass(BackgroundCleaningError, DetectionError)


# --- Replay ---


def test_replay_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        ReplayDetector(tmp_path / "nope")


def test_replay_detect(tmp_path):
    data = json.loads(ELEMENTS_JSON)[:1]
    (tmp_path / "slide.elements.json").write_text(json.dumps(data), encoding="utf-8")

    elements = ReplayDetector(tmp_path).detect(source_image())

    assert len(elements) == 1
    assert elements[0].region.to_box_2d() == [50, 100, 150, 900]


def test_replay_missing_detections(tmp_path):
    with pytest.raises(DetectionError):
        ReplayDetector(tmp_path).detect(source_image())


def test_replay_corrupt_detections(tmp_path):
    (tmp_path / "slide.elements.json").write_text("[{\"text\": \"x\"}]", encoding="utf-8")
    with pytest.raises(DetectionError):
        ReplayDetector(tmp_path).detect(source_image())


def test_replay_background(tmp_path):
    detector = ReplayDetector(tmp_path)
    with pytest.raises(BackgroundCleaningError):
        detector.clean_background(source_image())

    (tmp_path / "slide.background.png").write_bytes(b"saved")
    assert detector.clean_background(source_image()) == b"saved"


def test_parse_elements_keeps_elements_with_odd_styles():
    """A bad color or opacity is cosmetic and never costs the element."""
    text = json.dumps(
        [
            {"text": "Keep me", "box_2d": [100, 100, 200, 400], "textColor": 16777215, "hasContainer": False},
            {"text": "Me too", "box_2d": [300, 100, 400, 400], "hasContainer": True, "containerOpacity": "solid"},
        ]
    )
    elements = GeminiDetector.parse_elements(text)

    assert [el.text for el in elements] == ["Keep me", "Me too"]
    assert elements[0].text_color == "16777215"
    assert elements[1].container_opacity is None


def test_replay_tolerates_odd_styles(tmp_path):
    data = [{"text": "Kept", "box_2d": [0, 0, 100, 100], "strokeColor": ["#000"], "containerOpacity": {}}]
    (tmp_path / "slide.elements.json").write_text(json.dumps(data), encoding="utf-8")

    elements = ReplayDetector(tmp_path).detect(source_image())

    assert len(elements) == 1
    assert elements[0].container_opacity is None
