from __future__ import annotations

"""
HTTP surface for the healthrisk profiler.

Design intent:
- Keep API orchestration thin and typed.
- Delegate scoring to survey/risk modules and text extraction to OCR providers.
- Map domain and boundary failures to stable, client-facing payloads.
"""

import json
import logging
from pathlib import Path
from typing import Any, Literal
from uuid import uuid4

from fastapi import FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.datastructures import UploadFile

from healthrisk.internal_core import ProfilerConfig, load_config
from healthrisk.internal_core.ocr import ExtractionError, OCRProvider, build_ocr_provider
from healthrisk.risk.assessment import RiskAssessment, assess
from healthrisk.survey.models import RawInput
from healthrisk.survey.normalizer import IncompleteProfileError
from healthrisk.survey.text_fields import parse_survey_text

PROFILER_PATH = "/api/health-risk/profiler"
IMAGE_FIELD_NAME = "image"


class MissingUploadError(RuntimeError):
    """Raised when a multipart request carries no usable image file."""


class ProfileResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    answer: dict[str, Any] = Field(default_factory=dict)
    missing_fields: list[str] = Field(default_factory=list, alias="missingFields")
    confidence: float = Field(ge=0.0, le=1.0)
    factors: list[str] = Field(default_factory=list)
    risk_level: Literal["Low Risk", "Moderate Risk", "High Risk"]
    score: int = Field(ge=0)
    rationale: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    status: Literal["ok"] = "ok"


app = FastAPI(title="healthrisk profiler service")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(IncompleteProfileError)
async def incomplete_profile_handler(request: Request, exc: IncompleteProfileError) -> JSONResponse:
    logger.warning(
        "rejected incomplete profile path=%s missing=%s",
        request.url.path,
        ",".join(exc.missing_fields),
    )
    return JSONResponse(
        status_code=400,
        content={"status": "incomplete Profile", "reason": "More than 50% fields missing"},
    )


@app.exception_handler(MissingUploadError)
async def missing_upload_handler(request: Request, exc: MissingUploadError) -> JSONResponse:
    logger.info("multipart request without image path=%s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"message": "No file uploaded"})


@app.exception_handler(ExtractionError)
async def extraction_error_handler(request: Request, exc: ExtractionError) -> JSONResponse:
    logger.error(
        "ocr failed path=%s provider=%s code=%s: %s",
        request.url.path,
        exc.provider_name,
        exc.code,
        exc.message,
    )
    return JSONResponse(
        status_code=500,
        content={"message": "Error processing image", "error": exc.message},
    )


def _get_config() -> ProfilerConfig:
    existing = getattr(app.state, "config", None)
    if isinstance(existing, ProfilerConfig):
        return existing
    created = load_config()
    setattr(app.state, "config", created)
    return created


def _get_ocr_provider() -> OCRProvider:
    existing = getattr(app.state, "ocr_provider", None)
    if existing is not None:
        return existing
    created = build_ocr_provider(_get_config())
    setattr(app.state, "ocr_provider", created)
    return created


def _get_upload_dir() -> Path:
    configured = getattr(app.state, "upload_dir", None)
    if configured:
        resolved = Path(str(configured)).expanduser().resolve()
    else:
        resolved = _get_config().upload_dir_path()
    resolved.mkdir(parents=True, exist_ok=True)
    return resolved


def _get_max_upload_bytes() -> int:
    configured = getattr(app.state, "max_upload_bytes", None)
    if configured is not None:
        return int(configured)
    return _get_config().PROFILER_MAX_UPLOAD_BYTES


def _sanitize_image_filename_stem(filename: str) -> str:
    raw_stem = Path(str(filename or "image")).stem.strip()
    if not raw_stem:
        raw_stem = "image"
    safe = "".join(ch if (ch.isalnum() or ch in {"_", "-"}) else "_" for ch in raw_stem)
    safe = safe.strip("_")
    return (safe or "image")[:64]


def _store_upload(filename: str, payload: bytes) -> Path:
    suffix = Path(Path(str(filename or "")).name).suffix.lower()
    output_name = f"{_sanitize_image_filename_stem(filename)}_{uuid4().hex[:10]}{suffix}"
    output_path = _get_upload_dir() / output_name
    output_path.write_bytes(payload)
    return output_path


async def _read_json_survey(request: Request) -> RawInput:
    body = await request.body()
    if not body.strip():
        return {}
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid JSON body: {exc}") from exc
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object.")
    return payload


async def _read_form_survey(request: Request) -> RawInput:
    async with request.form() as form:
        return {key: value for key, value in form.items() if isinstance(value, str)}


async def _read_image_survey(request: Request) -> RawInput:
    async with request.form() as form:
        upload = form.get(IMAGE_FIELD_NAME)
        if not isinstance(upload, UploadFile):
            raise MissingUploadError(f"form field '{IMAGE_FIELD_NAME}' is not a file")
        payload = await upload.read()
        filename = upload.filename or "image"

    if not payload:
        raise MissingUploadError("uploaded image is empty")

    max_bytes = _get_max_upload_bytes()
    if len(payload) > max_bytes:
        raise HTTPException(status_code=413, detail=f"Uploaded image exceeds {max_bytes} byte limit.")

    image_path = _store_upload(filename, payload)
    provider = _get_ocr_provider()
    try:
        text = await run_in_threadpool(provider.extract_text, str(image_path))
    except ExtractionError:
        raise
    except Exception as exc:
        logger.exception("unexpected ocr failure provider=%s", provider.name())
        raise ExtractionError("ocr_failed", str(exc), provider.name()) from exc

    fields = parse_survey_text(text)
    logger.debug(
        "ocr produced %d survey fields from %s via %s",
        len(fields),
        image_path.name,
        provider.name(),
    )
    return fields


def _to_response(assessment: RiskAssessment) -> ProfileResponse:
    return ProfileResponse(
        answer=assessment.answer.supplied(),
        missing_fields=assessment.missing_fields,
        confidence=assessment.confidence,
        factors=assessment.factors,
        risk_level=assessment.risk_level,
        score=assessment.score,
        rationale=assessment.rationale,
        recommendations=assessment.recommendations,
    )


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.api_route(PROFILER_PATH, methods=["GET", "POST"], response_model=ProfileResponse)
async def profile_health_risk(request: Request) -> ProfileResponse:
    content_type = str(request.headers.get("content-type", "")).lower()
    if content_type.startswith("multipart/form-data"):
        source = "image"
        raw = await _read_image_survey(request)
    elif content_type.startswith("application/x-www-form-urlencoded"):
        source = "form"
        raw = await _read_form_survey(request)
    else:
        source = "json"
        raw = await _read_json_survey(request)

    assessment = assess(raw)
    logger.info(
        "assessed profile source=%s score=%d risk_level=%s missing=%d",
        source,
        assessment.score,
        assessment.risk_level,
        len(assessment.missing_fields),
    )
    return _to_response(assessment)
