"""Tests for the OCR session lifetime and the Tesseract adapter. No tesseract binary needed."""

import io

import pytest
from PIL import Image

from labelscan.errors import TextExtractionFailed
from labelscan.services.ocr.engine import OcrEngine, OcrSession, TesseractOcrEngine


class FakeEngine(OcrEngine):
    name = "fake"
    instances: list["FakeEngine"] = []

    def __init__(self, text: str = "Ingredients: Sugar, Water, Red 40. Nutrition facts", confidence: float = 0.9):
        self.text = text
        self.confidence = confidence
        self.closed = False
        FakeEngine.instances.append(self)

    def recognize(self, image: bytes) -> tuple[str, float]:
        return self.text, self.confidence

    def close(self) -> None:
        self.closed = True


class BrokenEngine(OcrEngine):
    name = "broken"

    def recognize(self, image: bytes) -> tuple[str, float]:
        raise RuntimeError("engine crashed")


def _png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (20, 10), "white").save(buf, format="PNG")
    return buf.getvalue()


def test_session_owns_engine_lifetime():
    session = OcrSession(engine_factory=FakeEngine)
    assert not session.is_open
    with session as ocr:
        assert ocr.is_open
        result = ocr.extract(b"image")
        engine = FakeEngine.instances[-1]
        assert not engine.closed
    assert engine.closed
    assert not session.is_open
    assert result.ingredients == ["Sugar", "Water", "Red 40"]
    assert result.confidence == 0.9
    assert result.text.startswith("Ingredients:")


def test_extract_on_closed_session_fails():
    session = OcrSession(engine_factory=FakeEngine)
    with pytest.raises(TextExtractionFailed):
        session.extract(b"image")


def test_empty_image_fails():
    with OcrSession(engine_factory=FakeEngine) as ocr:
        with pytest.raises(TextExtractionFailed):
            ocr.extract(b"")


def test_engine_errors_are_wrapped():
    with OcrSession(engine_factory=BrokenEngine) as ocr:
        with pytest.raises(TextExtractionFailed) as exc_info:
            ocr.extract(b"image")
    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_blank_text_gives_no_ingredients():
    with OcrSession(engine_factory=lambda: FakeEngine(text="   ", confidence=0.1)) as ocr:
        result = ocr.extract(b"image")
    assert result.ingredients == []
    assert result.text == ""


def test_tesseract_engine_groups_lines_and_scales_confidence(monkeypatch):
    calls = {}

    def fake_image_to_data(img, lang, config, output_type):
        calls["lang"] = lang
        calls["config"] = config
        return {
            "text": ["", "Ingredients:", "Sugar,", "Salt"],
            "conf": ["-1", "90", "80", "70"],
            "block_num": [1, 1, 1, 1],
            "par_num": [1, 1, 1, 1],
            "line_num": [0, 1, 1, 2],
        }

    monkeypatch.setattr("labelscan.services.ocr.engine.pytesseract.image_to_data", fake_image_to_data)
    engine = TesseractOcrEngine(language="eng", char_whitelist="abc ")
    text, confidence = engine.recognize(_png_bytes())
    assert text == "Ingredients: Sugar,\nSalt"
    assert confidence == pytest.approx(0.8)
    assert calls["lang"] == "eng"
    assert calls["config"] == '-c tessedit_char_whitelist="abc "'


def test_tesseract_engine_rejects_non_image():
    with OcrSession(engine_factory=TesseractOcrEngine) as ocr:
        with pytest.raises(TextExtractionFailed):
            ocr.extract(b"definitely not an image")
