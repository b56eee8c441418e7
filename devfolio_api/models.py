"""Pydantic models for API requests and responses.

Wire format uses camelCase keys; Python code uses snake_case attributes.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


# =============================================================================
# Project Roadmap Models
# =============================================================================


class ProjectRoadmapRequest(CamelModel):
    """Request body for the project roadmap endpoint."""

    project_title: str = Field(..., min_length=1, max_length=200, description="Project title")
    description: str = Field(..., min_length=1, max_length=5000, description="Project description")
    skills: list[str] = Field(default_factory=list, description="Skills/technologies to use")
    timeline: str = Field(default="3 months", max_length=50, description="e.g. '1 month', '6 months'")


class RoadmapItemResponse(CamelModel):
    """A normalized roadmap item."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(default="", max_length=500)
    category: Literal["milestone", "task"] = "task"
    due_date: str = Field(..., description="ISO-8601 UTC timestamp")
    completed: bool = False


class ProjectRoadmapResponse(CamelModel):
    """Project roadmap with an overview and bounded item list."""

    success: bool = True
    roadmap_overview: str
    roadmap_items: list[RoadmapItemResponse]
    warning: str | None = Field(default=None, description="Set when a default roadmap was used")


# =============================================================================
# Project Ideas Models
# =============================================================================


class ProjectIdeasRequest(CamelModel):
    """Request body for project idea generation."""

    skills: list[str] = Field(..., min_length=1, description="Developer skills")
    interests: list[str] = Field(..., min_length=1, description="Areas of interest")
    experience: str = Field(default="intermediate", max_length=50)


class ProjectIdea(CamelModel):
    """A single generated project idea."""

    title: str = Field(..., min_length=1)
    description: str = ""
    technologies: list[str] = Field(default_factory=list)
    learning_outcomes: list[str] = Field(default_factory=list)
    estimated_time: str = ""


class ProjectIdeasResponse(CamelModel):
    """Generated project ideas."""

    project_ideas: list[ProjectIdea]
    message: str
    warning: str | None = None


# =============================================================================
# Learning Roadmap Models
# =============================================================================


class TechRoadmapRequest(CamelModel):
    """Request body for a technology learning roadmap."""

    technology: str = Field(..., min_length=1, max_length=100)
    goal_level: str = Field(default="beginner", max_length=50)
    timeframe: str = Field(default="3 months", max_length=50)


class LearningResource(CamelModel):
    type: str = "documentation"
    title: str = ""
    url: str = ""


class PracticeProject(CamelModel):
    title: str = ""
    description: str = ""


class LearningWeek(CamelModel):
    """One week of a learning roadmap."""

    week: int = Field(..., ge=1, le=52)
    focus: str = ""
    resources: list[LearningResource] = Field(default_factory=list)
    projects: list[PracticeProject] = Field(default_factory=list)
    milestones: list[str] = Field(default_factory=list)


class TechRoadmap(CamelModel):
    """A week-by-week learning plan."""

    overview: str = ""
    prerequisites: list[str] = Field(default_factory=list)
    weeks: list[LearningWeek] = Field(..., min_length=1)
    advanced_topics: list[str] = Field(default_factory=list)


class TechRoadmapResponse(CamelModel):
    roadmap: TechRoadmap
    message: str
    warning: str | None = None


# =============================================================================
# Resume Models
# =============================================================================


class ResumeDraftRequest(CamelModel):
    """Profile data a resume draft is generated from."""

    name: str = Field(default="", max_length=100)
    email: str = Field(default="", max_length=200)
    skills: list[str] = Field(default_factory=list)
    bio: str = Field(default="", max_length=2000)


class ResumeExperience(CamelModel):
    company: str = ""
    position: str = ""
    start_date: str = ""
    end_date: str = ""
    description: str = ""
    bullets: list[str] = Field(default_factory=list)


class ResumeEducation(CamelModel):
    institution: str = ""
    degree: str = ""
    field: str = ""
    start_date: str = ""
    end_date: str = ""
    gpa: str = ""


class ResumeProject(CamelModel):
    title: str = ""
    description: str = ""
    technologies: list[str] = Field(default_factory=list)
    url: str = ""
    github: str = ""


class ResumeDraft(CamelModel):
    """Structured resume content."""

    summary: str = Field(..., min_length=1)
    experience: list[ResumeExperience] = Field(default_factory=list)
    education: list[ResumeEducation] = Field(default_factory=list)
    projects: list[ResumeProject] = Field(default_factory=list)


class ResumeDraftResponse(CamelModel):
    resume: ResumeDraft
    message: str
    warning: str | None = None


class ResumeAnalysisRequest(CamelModel):
    resume_text: str = Field(..., min_length=1, max_length=20000, description="Plain-text resume")


class ResumeAnalysisResponse(CamelModel):
    analysis: str


# =============================================================================
# Career Models
# =============================================================================


class CareerRecommendationsRequest(CamelModel):
    current_role: str = Field(default="", max_length=100)
    skills: list[str] = Field(..., min_length=1)
    experience: str = Field(default="", max_length=2000)
    interests: list[str] = Field(default_factory=list)


class CareerRecommendationsResponse(CamelModel):
    recommendations: str


# =============================================================================
# Health API Models
# =============================================================================


class HealthResponse(CamelModel):
    """Response for health check endpoint."""

    status: Literal["healthy", "degraded"] = Field(..., description="Service status")
    gemini_configured: bool = Field(..., description="Whether a Gemini API key is set")
    mock_mode: bool = Field(..., description="Whether canned answers are served")
    version: str = Field(..., description="API version")
