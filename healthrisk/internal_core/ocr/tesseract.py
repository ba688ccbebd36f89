from __future__ import annotations

import logging
from pathlib import Path

import pytesseract
from PIL import Image, UnidentifiedImageError

from .base import ExtractionError, OCRProvider

logger = logging.getLogger(__name__)


class TesseractOCRProvider(OCRProvider):
    def __init__(
        self,
        *,
        language: str = "eng",
        tesseract_cmd: str = "",
        timeout_sec: float = 30.0,
    ) -> None:
        self._language = language or "eng"
        self._timeout_sec = timeout_sec
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    def extract_text(self, image_path: str) -> str:
        path = Path(image_path)
        if not path.exists():
            raise ExtractionError("image_missing", f"image not found: {image_path}", self.name())

        try:
            with Image.open(path) as image:
                image.load()
                text = pytesseract.image_to_string(
                    image,
                    lang=self._language,
                    timeout=self._timeout_sec,
                )
        except UnidentifiedImageError as exc:
            raise ExtractionError("image_unreadable", str(exc), self.name()) from exc
        except pytesseract.TesseractNotFoundError as exc:
            raise ExtractionError("tesseract_missing", str(exc), self.name()) from exc
        except pytesseract.TesseractError as exc:
            raise ExtractionError("tesseract_failed", str(exc), self.name()) from exc
        except RuntimeError as exc:
            # pytesseract reports timeouts as a bare RuntimeError.
            raise ExtractionError("tesseract_timeout", str(exc), self.name()) from exc

        logger.debug("tesseract extracted %d chars from %s", len(text or ""), path.name)
        return text or ""

    def name(self) -> str:
        return "tesseract"
