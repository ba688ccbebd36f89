from pathlib import Path

from fastapi.testclient import TestClient

from healthrisk.api.main import PROFILER_PATH, app
from healthrisk.internal_core.ocr import MockOCRProvider


def _clear_injected_state() -> None:
    for name in ("ocr_provider", "upload_dir", "max_upload_bytes"):
        if hasattr(app.state, name):
            delattr(app.state, name)


def test_healthz() -> None:
    client = TestClient(app)
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_profiler_json_high_risk_payload_shape() -> None:
    client = TestClient(app)
    response = client.post(
        PROFILER_PATH,
        json={"smoker": True, "exercise": "never", "diet": "high sugar", "age": 30},
    )
    assert response.status_code == 200
    assert response.json() == {
        "answer": {"age": 30, "smoker": True, "exercise": "never", "diet": "high sugar"},
        "missingFields": [],
        "confidence": 1.0,
        "factors": ["smoking", "low exercise", "poor diet"],
        "risk_level": "High Risk",
        "score": 100,
        "rationale": ["smoking", "low activity", "high sugar diet"],
        "recommendations": ["Quit Smoking", "Walk 30 mins daily", "Reduce sugar"],
        "status": "ok",
    }


def test_profiler_json_low_risk() -> None:
    client = TestClient(app)
    response = client.post(
        PROFILER_PATH,
        json={"smoker": False, "exercise": "regularly", "diet": "balanced", "age": 25},
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["score"] == 0
    assert payload["factors"] == []
    assert payload["risk_level"] == "Low Risk"
    assert payload["confidence"] == 1.0


def test_profiler_json_one_missing_field_reports_it() -> None:
    client = TestClient(app)
    response = client.post(PROFILER_PATH, json={"smoker": "true", "exercise": "rarely", "age": "50"})
    assert response.status_code == 200
    payload = response.json()
    assert payload["missingFields"] == ["diet"]
    assert payload["confidence"] == 0.75
    assert payload["answer"] == {"age": 50, "smoker": True, "exercise": "rarely"}
    assert payload["score"] == 65
    assert payload["risk_level"] == "Moderate Risk"


def test_profiler_accepts_get_with_json_body() -> None:
    client = TestClient(app)
    response = client.request(
        "GET",
        PROFILER_PATH,
        json={"smoker": False, "exercise": "never", "diet": "balanced", "age": 44},
    )
    assert response.status_code == 200
    assert response.json()["factors"] == ["low exercise"]


def test_profiler_image_upload_runs_ocr_and_scores(tmp_path) -> None:
    provider = MockOCRProvider("SURVEY\nAge: 58\nSmoker: true\nExercise: Never\nDiet: High Sugar\n")
    app.state.ocr_provider = provider
    app.state.upload_dir = str(tmp_path)
    client = TestClient(app)
    try:
        response = client.post(
            PROFILER_PATH,
            files={"image": ("paper survey.png", b"\x89PNG fake bytes", "image/png")},
        )
    finally:
        _clear_injected_state()

    assert response.status_code == 200
    payload = response.json()
    assert payload["answer"] == {"age": 58, "smoker": True, "exercise": "never", "diet": "high sugar"}
    assert payload["score"] == 100
    assert payload["risk_level"] == "High Risk"

    assert len(provider.calls) == 1
    saved = Path(provider.calls[0])
    assert saved.parent == tmp_path.resolve()
    assert saved.name.startswith("paper_survey_")
    assert saved.suffix == ".png"
    assert saved.read_bytes() == b"\x89PNG fake bytes"


def test_profiler_image_with_sparse_text_hits_guardrail(tmp_path) -> None:
    app.state.ocr_provider = MockOCRProvider("Smoker: true\nrandom scribble")
    app.state.upload_dir = str(tmp_path)
    client = TestClient(app)
    try:
        response = client.post(
            PROFILER_PATH,
            files={"image": ("survey.jpg", b"jpeg bytes", "image/jpeg")},
        )
    finally:
        _clear_injected_state()

    assert response.status_code == 400
    assert response.json() == {"status": "incomplete Profile", "reason": "More than 50% fields missing"}


def test_profiler_urlencoded_form_is_scored() -> None:
    client = TestClient(app)
    response = client.post(
        PROFILER_PATH,
        data={"age": "30", "smoker": "true", "exercise": "never", "diet": "high sugar"},
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["answer"] == {"age": 30, "smoker": True, "exercise": "never", "diet": "high sugar"}
    assert payload["score"] == 100
    assert payload["risk_level"] == "High Risk"


def test_profiler_urlencoded_sparse_form_hits_guardrail() -> None:
    client = TestClient(app)
    response = client.post(PROFILER_PATH, data={"smoker": "true"})
    assert response.status_code == 400
    assert response.json()["status"] == "incomplete Profile"


def test_profiler_json_oversized_age_is_scored_without_age() -> None:
    client = TestClient(app)
    response = client.post(
        PROFILER_PATH,
        json={"age": "1" * 5000, "smoker": "true", "exercise": "never", "diet": "x"},
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["answer"]["age"] is None
    assert payload["missingFields"] == []
    assert payload["score"] == 65


def test_profiler_image_with_oversized_age_is_scored(tmp_path) -> None:
    app.state.ocr_provider = MockOCRProvider("Age: " + "1" * 5000 + "\nSmoker: true\nExercise: never\nDiet: x\n")
    app.state.upload_dir = str(tmp_path)
    client = TestClient(app)
    try:
        response = client.post(
            PROFILER_PATH,
            files={"image": ("survey.png", b"png bytes", "image/png")},
        )
    finally:
        _clear_injected_state()

    assert response.status_code == 200
    assert response.json()["answer"]["age"] is None
