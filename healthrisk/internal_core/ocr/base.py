from __future__ import annotations

from abc import ABC, abstractmethod


class ExtractionError(RuntimeError):
    def __init__(self, code: str, message: str, provider_name: str):
        super().__init__(message)
        self.code = code
        self.message = message
        self.provider_name = provider_name


class OCRProvider(ABC):
    @abstractmethod
    def extract_text(self, image_path: str) -> str: ...

    @abstractmethod
    def name(self) -> str: ...
