"""
OCR for label photos.

An OcrSession owns one engine for the duration of a scan and closes it on exit;
there is no process-wide worker. Engines only turn image bytes into text and a
0-1 confidence; splitting into ingredients happens in label_parser.
"""

import io
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import pytesseract
from PIL import Image

from labelscan.config import settings
from labelscan.errors import TextExtractionFailed
from labelscan.logging import get_logger
from labelscan.services.parsing.label_parser import extract_ingredient_candidates
from labelscan.utils.timing import time_span

logger = get_logger(__name__)


@dataclass(frozen=True)
class OcrResult:
    text: str
    confidence: float
    ingredients: List[str] = field(default_factory=list)


class OcrEngine:
    name = "base"

    def recognize(self, image: bytes) -> tuple[str, float]:
        raise NotImplementedError

    def close(self) -> None:
        pass


class TesseractOcrEngine(OcrEngine):
    name = "tesseract"

    def __init__(self, language: Optional[str] = None, char_whitelist: Optional[str] = None) -> None:
        self.language = language or settings.ocr_language
        self.char_whitelist = char_whitelist if char_whitelist is not None else settings.ocr_char_whitelist

    def _config(self) -> str:
        if not self.char_whitelist:
            return ""
        return f'-c tessedit_char_whitelist="{self.char_whitelist}"'

    def recognize(self, image: bytes) -> tuple[str, float]:
        with Image.open(io.BytesIO(image)) as img:
            data = pytesseract.image_to_data(
                img,
                lang=self.language,
                config=self._config(),
                output_type=pytesseract.Output.DICT,
            )
        lines: dict[tuple, list[str]] = {}
        confidences: list[float] = []
        for i, word in enumerate(data.get("text", [])):
            word = (word or "").strip()
            conf = float(data["conf"][i])
            if not word or conf < 0:
                continue
            line_key = (data["block_num"][i], data["par_num"][i], data["line_num"][i])
            lines.setdefault(line_key, []).append(word)
            confidences.append(conf)
        text = "\n".join(" ".join(words) for words in lines.values())
        confidence = sum(confidences) / len(confidences) / 100.0 if confidences else 0.0
        return text, max(0.0, min(1.0, confidence))


class OcrSession:
    """
    Scoped OCR resource:

        with OcrSession() as ocr:
            result = ocr.extract(image_bytes)
    """

    def __init__(self, engine_factory: Callable[[], OcrEngine] = TesseractOcrEngine) -> None:
        self._engine_factory = engine_factory
        self._engine: Optional[OcrEngine] = None

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def open(self) -> "OcrSession":
        if self._engine is None:
            self._engine = self._engine_factory()
            logger.info("ocr.session.open engine=%s", self._engine.name)
        return self

    def close(self) -> None:
        if self._engine is not None:
            engine, self._engine = self._engine, None
            engine.close()
            logger.info("ocr.session.close engine=%s", engine.name)

    def __enter__(self) -> "OcrSession":
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def extract(self, image: bytes) -> OcrResult:
        if self._engine is None:
            raise TextExtractionFailed("OCR session is not open")
        if not image:
            raise TextExtractionFailed("Empty image upload")
        with time_span("ocr.extract", engine=self._engine.name, bytes=len(image)) as span:
            try:
                text, confidence = self._engine.recognize(image)
            except TextExtractionFailed:
                raise
            except Exception as e:
                logger.warning("ocr.failed engine=%s error=%s", self._engine.name, e)
                raise TextExtractionFailed("Failed to extract text from image") from e
            text = (text or "").strip()
            ingredients = extract_ingredient_candidates(text)
            span.add(confidence=f"{confidence:.2f}", ingredients=len(ingredients))
        logger.debug("ocr.text raw=%s", text)
        return OcrResult(text=text, confidence=confidence, ingredients=ingredients)
