from __future__ import annotations

from .base import OCRProvider

DEFAULT_MOCK_TEXT = "Age: 42\nSmoker: true\nExercise: rarely\nDiet: high sugar\n"


class MockOCRProvider(OCRProvider):
    def __init__(self, text: str = DEFAULT_MOCK_TEXT) -> None:
        self._text = text
        self.calls: list[str] = []

    def extract_text(self, image_path: str) -> str:
        self.calls.append(image_path)
        return self._text

    def name(self) -> str:
        return "mock"
