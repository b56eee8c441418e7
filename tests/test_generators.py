"""Tests for the JSON-answer generators."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from devfolio_api.gemini_client import GeminiError, GeminiRateLimitError, LLMResponse
from devfolio_api.generators import (
    PARSE_WARNING,
    UPSTREAM_WARNING,
    generate_project_ideas,
    generate_resume_draft,
    generate_tech_roadmap,
)


def _client(content: str | None = None, error: Exception | None = None) -> MagicMock:
    client = MagicMock()
    client.model = "gemini-test"
    if error is not None:
        client.generate = AsyncMock(side_effect=error)
    else:
        client.generate = AsyncMock(return_value=LLMResponse(content=content or "", tokens_used=42))
    return client


class TestProjectIdeas:
    """Tests for generate_project_ideas."""

    @pytest.mark.asyncio
    async def test_parses_fenced_array(self) -> None:
        """Test the happy path with a fenced JSON array."""
        ideas = [
            {
                "title": "Recipe Planner",
                "description": "Plan meals.",
                "technologies": ["React"],
                "learningOutcomes": ["State"],
                "estimatedTime": "3 weeks",
            }
        ]
        client = _client("```json\n" + json.dumps(ideas) + "\n```")

        result, warning = await generate_project_ideas(client, ["React"], ["Food"])

        assert warning is None
        assert len(result) == 1
        assert result[0].title == "Recipe Planner"
        assert result[0].learning_outcomes == ["State"]
        client.generate.assert_awaited_once()
        assert "React" in client.generate.call_args.args[0]

    @pytest.mark.asyncio
    async def test_upstream_error_falls_back(self) -> None:
        """Test that a service failure returns the static ideas."""
        client = _client(error=GeminiRateLimitError("slow down"))

        result, warning = await generate_project_ideas(client, ["Django", "PostgreSQL"], ["Health"])

        assert warning == UPSTREAM_WARNING
        assert len(result) == 5
        assert "Django" in result[1].technologies

    @pytest.mark.asyncio
    async def test_unparseable_answer_falls_back(self) -> None:
        """Test prose without JSON."""
        result, warning = await generate_project_ideas(_client("I cannot help with that."), ["Go"], ["CLI"])
        assert warning == PARSE_WARNING
        assert len(result) == 5

    @pytest.mark.asyncio
    async def test_schema_mismatch_falls_back(self) -> None:
        """Test JSON that does not fit the idea schema."""
        result, warning = await generate_project_ideas(_client('[{"title": ""}]'), ["Go"], ["CLI"])
        assert warning == PARSE_WARNING
        assert len(result) == 5

    @pytest.mark.asyncio
    async def test_empty_array_falls_back(self) -> None:
        result, warning = await generate_project_ideas(_client("[]"), ["Go"], ["CLI"])
        assert warning == PARSE_WARNING
        assert len(result) == 5


class TestTechRoadmap:
    """Tests for generate_tech_roadmap."""

    @pytest.mark.asyncio
    async def test_parses_object(self) -> None:
        """Test the happy path."""
        payload = {
            "overview": "Learn Rust",
            "weeks": [{"week": 1, "focus": "Ownership", "milestones": ["Borrow checker"]}],
            "advancedTopics": ["Async"],
        }
        roadmap, warning = await generate_tech_roadmap(_client(json.dumps(payload)), "Rust", "beginner", "1 month")

        assert warning is None
        assert roadmap.overview == "Learn Rust"
        assert roadmap.weeks[0].focus == "Ownership"
        assert roadmap.advanced_topics == ["Async"]

    @pytest.mark.asyncio
    async def test_upstream_error_falls_back(self) -> None:
        """Test the fallback plan length follows the timeframe."""
        roadmap, warning = await generate_tech_roadmap(
            _client(error=GeminiError("boom")), "Rust", "beginner", "1 month"
        )

        assert warning == UPSTREAM_WARNING
        assert len(roadmap.weeks) == 4
        assert roadmap.weeks[0].focus == "Fundamentals"
        assert roadmap.overview == "A learning roadmap for Rust to reach beginner level in 1 month."

    @pytest.mark.asyncio
    async def test_fallback_is_capped_at_twelve_weeks(self) -> None:
        roadmap, _ = await generate_tech_roadmap(_client("nope"), "Rust", "expert", "6 months")
        assert len(roadmap.weeks) == 12
        assert roadmap.weeks[-1].focus == "Advanced topics"

    @pytest.mark.asyncio
    async def test_missing_weeks_falls_back(self) -> None:
        """Test an object without the required weeks."""
        roadmap, warning = await generate_tech_roadmap(_client('{"overview": "x"}'), "Rust")
        assert warning == PARSE_WARNING
        assert len(roadmap.weeks) == 12


class TestResumeDraft:
    """Tests for generate_resume_draft."""

    @pytest.mark.asyncio
    async def test_parses_object(self) -> None:
        payload = {
            "summary": "Backend engineer.",
            "experience": [{"company": "Acme", "position": "Dev", "startDate": "2020-01", "bullets": ["Built it"]}],
        }
        draft, warning = await generate_resume_draft(
            _client(json.dumps(payload)), "Ada", "ada@example.com", ["Python"], "Builds things"
        )

        assert warning is None
        assert draft.summary == "Backend engineer."
        assert draft.experience[0].start_date == "2020-01"

    @pytest.mark.asyncio
    async def test_defaults_fill_prompt(self) -> None:
        """Test that blank profile fields are replaced in the prompt."""
        client = _client('{"summary": "x"}')
        await generate_resume_draft(client, "", "", [], "")

        prompt = client.generate.call_args.args[0]
        assert "Full Name: John Doe" in prompt
        assert "Email: example@email.com" in prompt

    @pytest.mark.asyncio
    async def test_upstream_error_falls_back(self) -> None:
        draft, warning = await generate_resume_draft(_client(error=GeminiError("down")), "Ada", "", ["Python"], "")

        assert warning == UPSTREAM_WARNING
        assert "Python" in draft.summary
        assert len(draft.experience) == 2

    @pytest.mark.asyncio
    async def test_missing_summary_falls_back(self) -> None:
        draft, warning = await generate_resume_draft(_client('{"experience": []}'), "Ada", "", [], "")
        assert warning == PARSE_WARNING
        assert draft.summary.startswith("Experienced professional with skills in JavaScript, React, Node.js")
