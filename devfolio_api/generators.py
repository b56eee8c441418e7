"""AI-assisted content that the model returns as JSON.

Each generator returns ``(payload, warning)``. An upstream failure, an answer
without recoverable JSON, or JSON that does not fit the schema all produce the
static fallback and a warning; none of them raise.
"""

import structlog
from pydantic import ValidationError

from devfolio_api.fallbacks import default_project_ideas, default_resume, default_tech_roadmap
from devfolio_api.gemini_client import GeminiClient, GeminiError
from devfolio_api.json_extract import JSONExtractionError, extract_json_payload
from devfolio_api.models import ProjectIdea, ResumeDraft, TechRoadmap
from devfolio_api.observability import log_llm_request, log_llm_response
from devfolio_api.prompts import (
    build_project_ideas_prompt,
    build_resume_draft_prompt,
    build_tech_roadmap_prompt,
)

logger = structlog.get_logger()

UPSTREAM_WARNING = "Using fallback content due to API limitations"
PARSE_WARNING = "Using fallback content because the AI response could not be parsed"


async def _generate_text(client: GeminiClient, operation: str, prompt: str) -> str:
    request_log = log_llm_request(model=client.model, operation=operation, prompt=prompt)
    try:
        response = await client.generate(prompt)
    except GeminiError as e:
        log_llm_response(request_log, error=str(e))
        raise
    log_llm_response(
        request_log,
        tokens_total=response.tokens_used,
        finish_reason=response.finish_reason or "unknown",
    )
    return response.content


async def generate_project_ideas(
    client: GeminiClient,
    skills: list[str],
    interests: list[str],
    experience: str = "intermediate",
) -> tuple[list[ProjectIdea], str | None]:
    """Five project ideas tailored to ``skills`` and ``interests``."""
    prompt = build_project_ideas_prompt(skills, interests, experience)
    try:
        text = await _generate_text(client, "project_ideas", prompt)
    except GeminiError as e:
        logger.error("Error generating project ideas", error=str(e))
        return _default_ideas(skills), UPSTREAM_WARNING

    try:
        payload = extract_json_payload(text, expect=list)
        ideas = [ProjectIdea.model_validate(entry) for entry in payload]
    except (JSONExtractionError, ValidationError) as e:
        logger.warning("Project ideas response unusable", error=str(e))
        return _default_ideas(skills), PARSE_WARNING

    if not ideas:
        return _default_ideas(skills), PARSE_WARNING
    return ideas, None


def _default_ideas(skills: list[str]) -> list[ProjectIdea]:
    return [ProjectIdea.model_validate(idea) for idea in default_project_ideas(skills)]


async def generate_tech_roadmap(
    client: GeminiClient,
    technology: str,
    goal_level: str = "beginner",
    timeframe: str = "3 months",
) -> tuple[TechRoadmap, str | None]:
    """A week-by-week learning roadmap for ``technology``."""
    fallback = TechRoadmap.model_validate(default_tech_roadmap(technology, goal_level, timeframe))
    prompt = build_tech_roadmap_prompt(technology, goal_level, timeframe)
    try:
        text = await _generate_text(client, "tech_roadmap", prompt)
    except GeminiError as e:
        logger.error("Error generating tech roadmap", error=str(e))
        return fallback, UPSTREAM_WARNING

    try:
        roadmap = TechRoadmap.model_validate(extract_json_payload(text, expect=dict))
    except (JSONExtractionError, ValidationError) as e:
        logger.warning("Tech roadmap response unusable", error=str(e))
        return fallback, PARSE_WARNING
    return roadmap, None


async def generate_resume_draft(
    client: GeminiClient,
    name: str,
    email: str,
    skills: list[str],
    bio: str,
) -> tuple[ResumeDraft, str | None]:
    """A resume draft built from profile data."""
    fallback = ResumeDraft.model_validate(default_resume(skills))
    prompt = build_resume_draft_prompt(
        name or "John Doe",
        email or "example@email.com",
        skills,
        bio or "Experienced developer with a passion for technology",
    )
    try:
        text = await _generate_text(client, "resume_draft", prompt)
    except GeminiError as e:
        logger.error("Error generating resume draft", error=str(e))
        return fallback, UPSTREAM_WARNING

    try:
        draft = ResumeDraft.model_validate(extract_json_payload(text, expect=dict))
    except (JSONExtractionError, ValidationError) as e:
        logger.warning("Resume draft response unusable", error=str(e))
        return fallback, PARSE_WARNING
    return draft, None
