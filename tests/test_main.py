"""Tests for FastAPI main application."""

from collections.abc import Callable, Iterator
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from devfolio_api.config import Settings
from devfolio_api.gemini_client import GeminiRateLimitError, LLMResponse
from devfolio_api.generators import PARSE_WARNING, UPSTREAM_WARNING
from devfolio_api.main import SPARSE_ROADMAP_WARNING, UPSTREAM_ROADMAP_WARNING, app

ROADMAP_BODY = {
    "projectTitle": "Recipe Planner",
    "description": "Plan weekly meals and shopping lists",
    "skills": ["React", "FastAPI"],
    "timeline": "3 months",
}


@pytest.fixture
def client() -> Iterator[TestClient]:
    """Create test client."""
    with TestClient(app) as client:
        yield client


def _patch_generate(**kwargs: object):
    return patch("devfolio_api.gemini_client.GeminiClient.generate", new=AsyncMock(**kwargs))


class TestHealthEndpoint:
    """Tests for health check endpoint."""

    def test_health_check(self, client: TestClient) -> None:
        """Test basic health check in mock mode."""
        response = client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["geminiConfigured"] is False
        assert data["mockMode"] is True
        assert "version" in data

    def test_health_check_api_prefix(self, client: TestClient) -> None:
        response = client.get("/api/health")
        assert response.status_code == 200
        assert "status" in response.json()

    def test_degraded_without_key_or_mock(
        self, client: TestClient, mock_settings: Callable[..., Settings]
    ) -> None:
        """Test that a keyless, non-mock deployment reports degraded."""
        mock_settings(mock_gemini="false", gemini_api_key="")
        assert client.get("/health").json()["status"] == "degraded"

    def test_trace_id_header(self, client: TestClient) -> None:
        """Test that the trace ID is echoed or generated."""
        response = client.get("/health", headers={"X-Trace-ID": "abc123"})
        assert response.headers["X-Trace-ID"] == "abc123"
        assert len(client.get("/health").headers["X-Trace-ID"]) == 32

    def test_metrics_endpoint(self, client: TestClient) -> None:
        client.get("/health")
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "http_requests_total" in response.text or "http_request" in response.text


class TestProjectRoadmapEndpoint:
    """Tests for the project roadmap endpoint."""

    def test_mock_answer_is_parsed(self, client: TestClient) -> None:
        """Test the full path with the canned mock answer."""
        response = client.post("/api/ai/project-roadmap", json=ROADMAP_BODY)
        assert response.status_code == 200

        data = response.json()
        assert data["success"] is True
        assert data["roadmapOverview"].startswith("This roadmap takes the project")
        assert "warning" not in data
        items = data["roadmapItems"]
        assert len(items) == 20
        assert items[0] == {
            "name": "Planning & Setup Phase",
            "description": "Milestone for Planning & Setup Phase (Weeks 1-1)",
            "category": "milestone",
            "dueDate": items[0]["dueDate"],
            "completed": False,
        }
        assert all(item["dueDate"].endswith("Z") for item in items)
        assert all(item["category"] in ("milestone", "task") for item in items)

    def test_upstream_failure_returns_default(self, client: TestClient) -> None:
        """Test that a service error still answers 200 with a default roadmap."""
        with _patch_generate(side_effect=GeminiRateLimitError("Rate limit exceeded")):
            response = client.post("/api/ai/project-roadmap", json=ROADMAP_BODY)

        assert response.status_code == 200
        data = response.json()
        assert data["warning"] == UPSTREAM_ROADMAP_WARNING
        assert data["roadmapOverview"] == "Roadmap for Recipe Planner"
        assert len(data["roadmapItems"]) == 16
        assert data["roadmapItems"][0]["name"] == "Planning Phase"
        assert "Recipe Planner" in data["roadmapItems"][0]["description"]

    def test_missing_key_without_mock_returns_default(
        self, client: TestClient, mock_settings: Callable[..., Settings]
    ) -> None:
        """Test the unconfigured deployment path."""
        mock_settings(mock_gemini="false", gemini_api_key="")
        response = client.post("/api/ai/project-roadmap", json=ROADMAP_BODY)

        assert response.status_code == 200
        assert response.json()["warning"] == UPSTREAM_ROADMAP_WARNING

    def test_blank_answer_returns_default(self, client: TestClient) -> None:
        """Test that an unusable answer falls back with a warning."""
        with _patch_generate(return_value=LLMResponse(content="\n  \n", tokens_used=1)):
            response = client.post("/api/ai/project-roadmap", json=ROADMAP_BODY)

        data = response.json()
        assert response.status_code == 200
        assert data["warning"] == SPARSE_ROADMAP_WARNING
        assert data["roadmapOverview"] == "Roadmap for Recipe Planner"
        assert len(data["roadmapItems"]) == 16

    def test_item_ceiling(self, client: TestClient) -> None:
        """Test that a verbose answer is cut to 24 items."""
        phases = [
            "Planning & Setup Phase",
            "Core Development Phase",
            "Feature Implementation Phase",
            "Testing & Refinement Phase",
        ]
        text = "Overview.\n\n" + "\n".join(
            phase + "\n" + "\n".join(f"- Job {p}-{t}: details" for t in range(8))
            for p, phase in enumerate(phases)
        )
        with _patch_generate(return_value=LLMResponse(content=text, tokens_used=100)):
            response = client.post("/api/ai/project-roadmap", json=ROADMAP_BODY)

        data = response.json()
        assert len(data["roadmapItems"]) == 24
        assert data["roadmapOverview"] == "Overview."

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"projectTitle": "", "description": "x"},
            {"projectTitle": "x"},
        ],
    )
    def test_validation_errors(self, client: TestClient, body: dict) -> None:
        response = client.post("/api/ai/project-roadmap", json=body)
        assert response.status_code == 422


class TestGeneratedContentEndpoints:
    """Tests for the JSON-answer endpoints."""

    def test_project_ideas_mock_falls_back(self, client: TestClient) -> None:
        """The mock answer is prose, so the static ideas are served."""
        response = client.post(
            "/api/ai/project-ideas",
            json={"skills": ["React", "Node.js"], "interests": ["Music"], "experience": "beginner"},
        )
        assert response.status_code == 200
        data = response.json()
        assert len(data["projectIdeas"]) == 5
        assert data["warning"] == PARSE_WARNING
        assert "learningOutcomes" in data["projectIdeas"][0]

    def test_project_ideas_success(self, client: TestClient) -> None:
        answer = '[{"title": "Setlist Builder", "technologies": ["React"], "estimatedTime": "2 weeks"}]'
        with _patch_generate(return_value=LLMResponse(content=answer, tokens_used=10)):
            response = client.post("/api/ai/project-ideas", json={"skills": ["React"], "interests": ["Music"]})

        data = response.json()
        assert data["message"] == "Project ideas generated successfully"
        assert "warning" not in data
        assert data["projectIdeas"][0]["title"] == "Setlist Builder"

    def test_project_ideas_validation(self, client: TestClient) -> None:
        response = client.post("/api/ai/project-ideas", json={"skills": [], "interests": ["Music"]})
        assert response.status_code == 422

    def test_tech_roadmap(self, client: TestClient) -> None:
        with _patch_generate(side_effect=GeminiRateLimitError("slow down")):
            response = client.post(
                "/api/roadmap/generate",
                json={"technology": "Kotlin", "goalLevel": "intermediate", "timeframe": "1 month"},
            )

        assert response.status_code == 200
        data = response.json()
        assert data["warning"] == UPSTREAM_WARNING
        assert len(data["roadmap"]["weeks"]) == 4
        assert "advancedTopics" in data["roadmap"]

    def test_resume_draft(self, client: TestClient) -> None:
        answer = '```json\n{"summary": "Data engineer.", "projects": [{"title": "ETL", "github": "x"}]}\n```'
        with _patch_generate(return_value=LLMResponse(content=answer, tokens_used=10)):
            response = client.post(
                "/api/ai/resume-draft",
                json={"name": "Ada", "email": "ada@example.com", "skills": ["SQL"], "bio": "Pipelines"},
            )

        data = response.json()
        assert response.status_code == 200
        assert data["resume"]["summary"] == "Data engineer."
        assert data["resume"]["projects"][0]["title"] == "ETL"


class TestFreeTextEndpoints:
    """Tests for endpoints that return the model's text verbatim."""

    def test_analyze_resume_mock(self, client: TestClient) -> None:
        response = client.post("/api/ai/analyze-resume", json={"resumeText": "Ada Lovelace. Analyst."})
        assert response.status_code == 200
        assert "mock" in response.json()["analysis"].lower()

    def test_career_recommendations(self, client: TestClient) -> None:
        with _patch_generate(return_value=LLMResponse(content="Become a staff engineer.", tokens_used=5)):
            response = client.post(
                "/api/ai/career-recommendations",
                json={"currentRole": "Developer", "skills": ["Python"], "interests": ["ML"]},
            )
        assert response.status_code == 200
        assert response.json() == {"recommendations": "Become a staff engineer."}

    def test_unconfigured_service_is_503(
        self, client: TestClient, mock_settings: Callable[..., Settings]
    ) -> None:
        mock_settings(mock_gemini="false", gemini_api_key="")
        response = client.post("/api/ai/analyze-resume", json={"resumeText": "text"})
        assert response.status_code == 503

    def test_upstream_error_is_502(self, client: TestClient) -> None:
        with _patch_generate(side_effect=GeminiRateLimitError("Rate limit exceeded")):
            response = client.post(
                "/api/ai/career-recommendations", json={"skills": ["Python"]}
            )
        assert response.status_code == 502
        assert "Rate limit exceeded" in response.json()["detail"]

    def test_empty_resume_is_422(self, client: TestClient) -> None:
        response = client.post("/api/ai/analyze-resume", json={"resumeText": ""})
        assert response.status_code == 422
