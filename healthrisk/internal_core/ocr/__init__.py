from __future__ import annotations

from healthrisk.internal_core.config import ProfilerConfig

from .base import ExtractionError, OCRProvider
from .mock import MockOCRProvider
from .tesseract import TesseractOCRProvider

_SUPPORTED_PROVIDERS = {"tesseract", "mock"}


def build_ocr_provider(cfg: ProfilerConfig) -> OCRProvider:
    provider_name = (cfg.PROFILER_OCR_PROVIDER or "").strip().lower()
    if provider_name == "mock":
        return MockOCRProvider()
    if provider_name == "tesseract":
        return TesseractOCRProvider(
            language=cfg.PROFILER_OCR_LANGUAGE,
            tesseract_cmd=cfg.PROFILER_TESSERACT_CMD,
            timeout_sec=cfg.PROFILER_OCR_TIMEOUT_SEC,
        )
    raise ValueError(
        f"Unsupported OCR provider: {provider_name!r}; expected one of {sorted(_SUPPORTED_PROVIDERS)}"
    )


__all__ = [
    "ExtractionError",
    "MockOCRProvider",
    "OCRProvider",
    "TesseractOCRProvider",
    "build_ocr_provider",
]
