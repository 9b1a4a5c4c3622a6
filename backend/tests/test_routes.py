"""
Task Evaluator Backend — HTTP Endpoint Tests
=============================================

What:  Request/response contracts of every route, through the full app
       (middleware, exception handlers, dependency wiring).
How:   `test_client` overrides Gemini, OCR and the database session; see
       conftest.py.
"""

import pytest
from sqlalchemy import func, select

from taskeval.exceptions import LLMServiceError, OCRServiceError
from taskeval.models.summary import Summary
from replies import CODE_REPLY, TEXT_REPLY


async def _count_summaries(db_sessionmaker) -> int:
    async with db_sessionmaker() as session:
        return (await session.execute(select(func.count()).select_from(Summary))).scalar_one()


class TestSummarize:

    @pytest.mark.asyncio
    async def test_summarize_persists_record(self, test_client, fake_generator, db_sessionmaker):
        fake_generator.reply = "Hi."

        response = await test_client.post("/api/summarize", json={"text": "hello"})

        assert response.status_code == 200
        body = response.json()
        assert body["inputText"] == "hello"
        assert body["outputText"] == "Hi."
        assert isinstance(body["id"], int)
        assert body["createdAt"]
        assert await _count_summaries(db_sessionmaker) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{}, {"text": ""}, {"text": None}])
    async def test_missing_text(self, test_client, fake_generator, db_sessionmaker, payload):
        response = await test_client.post("/api/summarize", json=payload)

        assert response.status_code == 400
        assert response.json()["error"] == "Text is required"
        assert fake_generator.prompts == []
        assert await _count_summaries(db_sessionmaker) == 0

    @pytest.mark.asyncio
    async def test_generator_failure(self, test_client, fake_generator, db_sessionmaker):
        fake_generator.reply = LLMServiceError(message="quota exceeded")

        response = await test_client.post("/api/summarize", json={"text": "hello"})

        assert response.status_code == 500
        assert response.json()["error"] == "Something went wrong"
        assert await _count_summaries(db_sessionmaker) == 0


class TestAnalyze:

    @pytest.mark.asyncio
    async def test_text_analysis(self, test_client, fake_generator):
        fake_generator.reply = TEXT_REPLY

        response = await test_client.post(
            "/api/analyze",
            json={
                "text": "The committee met on Tuesday.",
                "options": {"criteria": "writing", "maxScore": 100, "focusAreas": ["tone"]},
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["score"] == 75
        assert body["category"] == "Persuasive essay"
        assert body["strengths"][0] == "Strong opening"
        assert "correctedCode" not in body
        assert "codeIssues" not in body
        assert "Pay special attention to: tone." in fake_generator.prompts[0]

    @pytest.mark.asyncio
    async def test_code_analysis(self, test_client, fake_generator):
        fake_generator.reply = CODE_REPLY

        response = await test_client.post(
            "/api/analyze",
            json={"text": "def add(a, b):\n    return a - b"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["correctedCode"] == "def add(a, b):\n    return a + b"
        assert body["optimizedCode"] == "add = lambda a, b: a + b"
        assert body["codeIssues"][0] == {
            "type": "logic",
            "line": 2,
            "description": "Wrong operator",
            "severity": "high",
            "suggestion": "Use + instead of -",
        }
        assert "line" not in body["codeIssues"][1]

    @pytest.mark.asyncio
    async def test_score_respects_max_score(self, test_client, fake_generator):
        fake_generator.reply = "SCORE: 150"

        response = await test_client.post(
            "/api/analyze", json={"text": "Plain words here.", "options": {"maxScore": 100}}
        )

        assert response.json()["score"] == 100

    @pytest.mark.asyncio
    async def test_missing_text(self, test_client, fake_generator):
        response = await test_client.post("/api/analyze", json={})

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to analyze text: Input text cannot be empty"
        assert fake_generator.prompts == []

    @pytest.mark.asyncio
    async def test_generator_failure(self, test_client, fake_generator):
        fake_generator.reply = LLMServiceError(message="No response received from Gemini")

        response = await test_client.post("/api/analyze", json={"text": "Some prose."})

        assert response.status_code == 500
        assert response.json()["error"] == (
            "Failed to analyze text: No response received from Gemini"
        )

    @pytest.mark.asyncio
    async def test_unknown_criteria_is_rejected(self, test_client, fake_generator):
        response = await test_client.post(
            "/api/analyze", json={"text": "x", "options": {"criteria": "poetry"}}
        )

        assert response.status_code == 422
        assert fake_generator.prompts == []


class TestAnalyzeImage:

    @pytest.mark.asyncio
    async def test_extracts_text(self, test_client, fake_ocr):
        fake_ocr.text = "Hello from a screenshot"

        response = await test_client.post(
            "/api/analyze-image",
            files={"image": ("shot.png", b"\x89PNG fake bytes", "image/png")},
        )

        assert response.status_code == 200
        assert response.json() == {
            "feedback": "Screenshot analysis complete.",
            "extractedText": "Hello from a screenshot",
        }
        assert fake_ocr.extracted == [b"\x89PNG fake bytes"]

    @pytest.mark.asyncio
    async def test_no_image(self, test_client, fake_ocr):
        response = await test_client.post("/api/analyze-image", data={"note": "no file"})

        assert response.status_code == 400
        assert response.json()["error"] == "No image uploaded"
        assert fake_ocr.validated == []
        assert fake_ocr.extracted == []

    @pytest.mark.asyncio
    async def test_ocr_failure(self, test_client, fake_ocr):
        fake_ocr.error = OCRServiceError()

        response = await test_client.post(
            "/api/analyze-image",
            files={"image": ("shot.png", b"garbage", "image/png")},
        )

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to analyze image"


class TestHealthAndMiddleware:

    @pytest.mark.asyncio
    async def test_healthy(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["gemini"] == "available"
        assert body["ocr"] == "available"

    @pytest.mark.asyncio
    async def test_degraded_without_gemini(self, test_client, fake_generator):
        fake_generator.healthy = False

        body = (await test_client.get("/health")).json()

        assert body["status"] == "degraded"
        assert body["gemini"] == "unavailable"

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get("/health", headers={"X-Request-ID": "abc12345"})
        assert response.headers["X-Request-ID"] == "abc12345"

    @pytest.mark.asyncio
    async def test_error_body_carries_request_id(self, test_client):
        response = await test_client.post(
            "/api/summarize", json={}, headers={"X-Request-ID": "req-42"}
        )
        assert response.json() == {"error": "Text is required", "request_id": "req-42"}


class TestRequestBodies:

    @pytest.mark.asyncio
    async def test_summarize_without_body(self, test_client, fake_generator, db_sessionmaker):
        response = await test_client.post("/api/summarize")

        assert response.status_code == 400
        assert response.json()["error"] == "Text is required"
        assert fake_generator.prompts == []
        assert await _count_summaries(db_sessionmaker) == 0

    @pytest.mark.asyncio
    async def test_analyze_without_body(self, test_client, fake_generator):
        response = await test_client.post("/api/analyze")

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to analyze text: Input text cannot be empty"
        assert fake_generator.prompts == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/api/summarize", "/api/analyze"])
    async def test_form_body_gets_error_shape(self, test_client, fake_generator, path):
        response = await test_client.post(path, data={"text": "hello"})

        assert response.status_code == 422
        body = response.json()
        assert body["error"].startswith("Invalid request")
        assert "detail" not in body
        assert fake_generator.prompts == []

    @pytest.mark.asyncio
    async def test_unknown_enum_gets_error_shape(self, test_client):
        response = await test_client.post(
            "/api/analyze",
            json={"text": "x", "options": {"analysisType": "rewrite"}},
            headers={"X-Request-ID": "enum-check"},
        )

        assert response.status_code == 422
        body = response.json()
        assert "analysisType" in body["error"]
        assert body["request_id"] == "enum-check"
