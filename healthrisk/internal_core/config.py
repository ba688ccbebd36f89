from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


def _project_root() -> Path:
    # healthrisk/internal_core/config.py -> healthrisk -> project
    return Path(__file__).resolve().parents[2]


def _getenv_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return default if value is None else value


def _getenv_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return int(value)


def _getenv_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return float(value)


@dataclass(frozen=True)
class ProfilerConfig:
    PROFILER_HOST: str
    PORT: int
    PROFILER_UPLOAD_DIR: str
    PROFILER_MAX_UPLOAD_BYTES: int
    PROFILER_OCR_PROVIDER: str
    PROFILER_OCR_LANGUAGE: str
    PROFILER_TESSERACT_CMD: str
    PROFILER_OCR_TIMEOUT_SEC: float
    PROFILER_LOG_LEVEL: str

    def upload_dir_path(self, repo_root: Path | None = None) -> Path:
        base = repo_root if repo_root is not None else _project_root()
        return (base / self.PROFILER_UPLOAD_DIR).expanduser().resolve()


def load_config() -> ProfilerConfig:
    return ProfilerConfig(
        PROFILER_HOST=_getenv_str("PROFILER_HOST", "0.0.0.0"),
        PORT=_getenv_int("PORT", 3000),
        PROFILER_UPLOAD_DIR=_getenv_str("PROFILER_UPLOAD_DIR", "uploads"),
        PROFILER_MAX_UPLOAD_BYTES=_getenv_int("PROFILER_MAX_UPLOAD_BYTES", 10 * 1024 * 1024),
        PROFILER_OCR_PROVIDER=_getenv_str("PROFILER_OCR_PROVIDER", "tesseract").strip().lower(),
        PROFILER_OCR_LANGUAGE=_getenv_str("PROFILER_OCR_LANGUAGE", "eng"),
        PROFILER_TESSERACT_CMD=_getenv_str("PROFILER_TESSERACT_CMD", ""),
        PROFILER_OCR_TIMEOUT_SEC=_getenv_float("PROFILER_OCR_TIMEOUT_SEC", 30.0),
        PROFILER_LOG_LEVEL=_getenv_str("PROFILER_LOG_LEVEL", "INFO"),
    )
