"""FastAPI application entrypoint for the DevFolio API."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from devfolio_api import __version__
from devfolio_api.config import get_settings
from devfolio_api.gemini_client import (
    GeminiAuthError,
    GeminiError,
    close_gemini_client,
    get_gemini_client,
)
from devfolio_api.generators import (
    generate_project_ideas,
    generate_resume_draft,
    generate_tech_roadmap,
)
from devfolio_api.models import (
    CareerRecommendationsRequest,
    CareerRecommendationsResponse,
    HealthResponse,
    ProjectIdeasRequest,
    ProjectIdeasResponse,
    ProjectRoadmapRequest,
    ProjectRoadmapResponse,
    ResumeAnalysisRequest,
    ResumeAnalysisResponse,
    ResumeDraftRequest,
    ResumeDraftResponse,
    RoadmapItemResponse,
    TechRoadmapRequest,
    TechRoadmapResponse,
)
from devfolio_api.normalizer import normalize_items
from devfolio_api.observability import (
    generate_trace_id,
    log_llm_request,
    log_llm_response,
    record_roadmap_outcome,
    set_trace_id,
)
from devfolio_api.prompts import (
    build_career_recommendations_prompt,
    build_project_roadmap_prompt,
    build_resume_analysis_prompt,
)
from devfolio_api.roadmap_defaults import DefaultRoadmapGenerator
from devfolio_api.roadmap_parser import RoadmapTextParser, extract_overview
from devfolio_api.roadmap_types import RoadmapConfig, RoadmapItem

settings = get_settings()

logging.basicConfig(format="%(message)s", level=settings.log_level)

# Configure structlog
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

UPSTREAM_ROADMAP_WARNING = "Generated using default template due to API issues"
SPARSE_ROADMAP_WARNING = "Generated using default template because the AI response could not be parsed"

# Rate limiter
limiter = Limiter(key_func=get_remote_address)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting DevFolio API", version=__version__)

    try:
        await get_gemini_client()
        logger.info("Gemini client initialized")
    except Exception as e:
        logger.warning("Failed to initialize Gemini client", error=str(e))

    yield

    logger.info("Shutting down DevFolio API")
    await close_gemini_client()


app = FastAPI(
    title="DevFolio API",
    description="Developer portfolio and career tracking API with AI-assisted content",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def trace_id_middleware(request: Request, call_next):
    """Add trace ID to every request for log correlation."""
    trace_id = request.headers.get("X-Trace-ID", generate_trace_id())
    set_trace_id(trace_id)

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(trace_id=trace_id)

    response = await call_next(request)
    response.headers["X-Trace-ID"] = trace_id
    return response


app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

Instrumentator().instrument(app).expose(app)


# =============================================================================
# Health Endpoints
# =============================================================================


@app.get("/health", response_model=HealthResponse)
@app.get("/api/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report service status and whether text generation is available."""
    current = get_settings()
    configured = bool(current.gemini_api_key)
    return HealthResponse(
        status="healthy" if configured or current.mock_gemini else "degraded",
        gemini_configured=configured,
        mock_mode=current.mock_gemini and not configured,
        version=__version__,
    )


# =============================================================================
# Project Roadmap
# =============================================================================


def _roadmap_response(
    items: list[RoadmapItem],
    overview: str,
    config: RoadmapConfig,
    warning: str | None = None,
    fallback_reason: str | None = None,
) -> ProjectRoadmapResponse:
    normalized = normalize_items(items, now=config.now(), log=config.logger)
    record_roadmap_outcome(len(normalized), fallback_reason)
    return ProjectRoadmapResponse(
        roadmap_overview=overview,
        roadmap_items=[RoadmapItemResponse.model_validate(item) for item in normalized],
        warning=warning,
    )


@app.post(
    "/api/ai/project-roadmap",
    response_model=ProjectRoadmapResponse,
    response_model_exclude_none=True,
)
@limiter.limit(f"{settings.rate_limit_per_minute}/minute")
async def project_roadmap(request: Request, roadmap_request: ProjectRoadmapRequest) -> ProjectRoadmapResponse:
    """
    Generate a phased roadmap for a project.

    - **projectTitle**: Project title (required)
    - **description**: What the project is about (required)
    - **skills**: Technologies to build it with
    - **timeline**: "1 month", "3 months" or "6 months"

    Upstream or parsing failures still answer 200, with a default roadmap and a
    **warning** field.
    """
    config = get_settings().roadmap_config()
    title = roadmap_request.project_title
    timeline = roadmap_request.timeline or get_settings().default_timeframe

    logger.info("Project roadmap request", project_title=title, timeline=timeline)

    client = await get_gemini_client()
    prompt = build_project_roadmap_prompt(title, roadmap_request.description, roadmap_request.skills, timeline)
    request_log = log_llm_request(model=client.model, operation="project_roadmap", prompt=prompt)

    try:
        response = await client.generate(prompt)
    except GeminiError as e:
        log_llm_response(request_log, error=str(e))
        logger.error("Failed to generate roadmap", project_title=title, error=str(e))
        items = DefaultRoadmapGenerator(config).generate(timeline, title)
        return _roadmap_response(
            items,
            f"Roadmap for {title}",
            config,
            warning=UPSTREAM_ROADMAP_WARNING,
            fallback_reason="upstream_error",
        )

    log_llm_response(
        request_log,
        tokens_total=response.tokens_used,
        finish_reason=response.finish_reason or "unknown",
    )
    logger.info("Successfully received roadmap response", project_title=title)

    result = RoadmapTextParser(config).parse_detailed(response.content, timeline, title)
    if result.used_default:
        return _roadmap_response(
            result.items,
            f"Roadmap for {title}",
            config,
            warning=SPARSE_ROADMAP_WARNING,
            fallback_reason=result.reason,
        )
    return _roadmap_response(result.items, extract_overview(response.content), config)


# =============================================================================
# JSON-answer generators
# =============================================================================


@app.post("/api/ai/project-ideas", response_model=ProjectIdeasResponse, response_model_exclude_none=True)
@limiter.limit(f"{settings.rate_limit_per_minute}/minute")
async def project_ideas(request: Request, ideas_request: ProjectIdeasRequest) -> ProjectIdeasResponse:
    """Generate five project ideas from skills and interests."""
    client = await get_gemini_client()
    ideas, warning = await generate_project_ideas(
        client,
        ideas_request.skills,
        ideas_request.interests,
        ideas_request.experience,
    )
    message = (
        "Default project ideas generated (API unavailable)"
        if warning
        else "Project ideas generated successfully"
    )
    return ProjectIdeasResponse(project_ideas=ideas, message=message, warning=warning)


@app.post("/api/roadmap/generate", response_model=TechRoadmapResponse, response_model_exclude_none=True)
@limiter.limit(f"{settings.rate_limit_per_minute}/minute")
async def tech_roadmap(request: Request, tech_request: TechRoadmapRequest) -> TechRoadmapResponse:
    """Generate a week-by-week learning roadmap for a technology."""
    client = await get_gemini_client()
    roadmap, warning = await generate_tech_roadmap(
        client,
        tech_request.technology,
        tech_request.goal_level,
        tech_request.timeframe,
    )
    message = (
        "Default roadmap generated (API unavailable)"
        if warning
        else "Technology roadmap generated successfully"
    )
    return TechRoadmapResponse(roadmap=roadmap, message=message, warning=warning)


@app.post("/api/ai/resume-draft", response_model=ResumeDraftResponse, response_model_exclude_none=True)
@limiter.limit(f"{settings.rate_limit_per_minute}/minute")
async def resume_draft(request: Request, draft_request: ResumeDraftRequest) -> ResumeDraftResponse:
    """Generate resume content from profile data."""
    client = await get_gemini_client()
    draft, warning = await generate_resume_draft(
        client,
        draft_request.name,
        draft_request.email,
        draft_request.skills,
        draft_request.bio,
    )
    message = "Default resume generated (API unavailable)" if warning else "Resume generated successfully"
    return ResumeDraftResponse(resume=draft, message=message, warning=warning)


# =============================================================================
# Free-text endpoints
# =============================================================================


async def _generate_free_text(operation: str, prompt: str) -> str:
    """Run a prompt whose answer is returned verbatim; errors become HTTP errors."""
    client = await get_gemini_client()
    request_log = log_llm_request(model=client.model, operation=operation, prompt=prompt)
    try:
        response = await client.generate(prompt)
    except GeminiAuthError as e:
        log_llm_response(request_log, error=str(e))
        raise HTTPException(
            status_code=503,
            detail="AI service not configured. Please contact the administrator.",
        ) from e
    except GeminiError as e:
        log_llm_response(request_log, error=str(e))
        raise HTTPException(status_code=502, detail=f"AI service error: {str(e)}") from e

    log_llm_response(
        request_log,
        tokens_total=response.tokens_used,
        finish_reason=response.finish_reason or "unknown",
    )
    return response.content


@app.post("/api/ai/analyze-resume", response_model=ResumeAnalysisResponse)
@limiter.limit(f"{settings.rate_limit_per_minute}/minute")
async def analyze_resume(request: Request, analysis_request: ResumeAnalysisRequest) -> ResumeAnalysisResponse:
    """Feedback on a plain-text resume."""
    logger.info("Resume analysis request", resume_chars=len(analysis_request.resume_text))
    analysis = await _generate_free_text(
        "analyze_resume",
        build_resume_analysis_prompt(analysis_request.resume_text),
    )
    return ResumeAnalysisResponse(analysis=analysis)


@app.post("/api/ai/career-recommendations", response_model=CareerRecommendationsResponse)
@limiter.limit(f"{settings.rate_limit_per_minute}/minute")
async def career_recommendations(
    request: Request, career_request: CareerRecommendationsRequest
) -> CareerRecommendationsResponse:
    """Career path suggestions for a profile."""
    recommendations = await _generate_free_text(
        "career_recommendations",
        build_career_recommendations_prompt(
            career_request.current_role,
            career_request.skills,
            career_request.experience,
            career_request.interests,
        ),
    )
    return CareerRecommendationsResponse(recommendations=recommendations)


# =============================================================================
# Entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "devfolio_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
    )
