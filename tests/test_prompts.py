"""Tests for prompt builders."""

from devfolio_api.prompts import (
    build_career_recommendations_prompt,
    build_project_ideas_prompt,
    build_project_roadmap_prompt,
    build_resume_analysis_prompt,
    build_resume_draft_prompt,
    build_tech_roadmap_prompt,
)


class TestProjectRoadmapPrompt:
    """Tests for the project roadmap prompt."""

    def test_names_canonical_phases_with_weeks(self) -> None:
        """Test the headers the phase locator looks for."""
        prompt = build_project_roadmap_prompt("Blog", "A blog", ["Python"], "3 months")

        assert "1. Planning & Setup Phase (Week 1-1)" in prompt
        assert "2. Core Development Phase (Week 2-6)" in prompt
        assert "3. Feature Implementation Phase (Week 7-9)" in prompt
        assert "4. Testing & Refinement Phase (Week 10-12)" in prompt
        assert "approximately 12 weeks" in prompt

    def test_six_months(self) -> None:
        prompt = build_project_roadmap_prompt("Blog", "A blog", [], "6 months")
        assert "4. Testing & Refinement Phase (Week 20-24)" in prompt
        assert "Required Skills: Not specified" in prompt

    def test_missing_timeline(self) -> None:
        prompt = build_project_roadmap_prompt("Blog", "A blog", None, None)
        assert "Timeline: 3 months" in prompt

    def test_skills_are_joined(self) -> None:
        prompt = build_project_roadmap_prompt("Blog", "A blog", ["Python", " ", "FastAPI "], "1 month")
        assert "Required Skills: Python, FastAPI" in prompt


class TestOtherPrompts:
    """Tests for the remaining prompt builders."""

    def test_project_ideas(self) -> None:
        prompt = build_project_ideas_prompt(["Go"], [], "senior")
        assert "for a senior developer" in prompt
        assert "Skills: Go" in prompt
        assert "Interests: Web Development" in prompt
        assert '"learningOutcomes"' in prompt

    def test_tech_roadmap(self) -> None:
        prompt = build_tech_roadmap_prompt("Rust", "advanced", "6 months")
        assert "mastering Rust in 6 months to reach advanced level" in prompt
        assert '"advancedTopics"' in prompt

    def test_resume_draft(self) -> None:
        prompt = build_resume_draft_prompt("Ada", "ada@example.com", ["Python"], "Engineer")
        assert "Full Name: Ada" in prompt
        assert "Skills: Python" in prompt

    def test_resume_analysis(self) -> None:
        assert "My resume text" in build_resume_analysis_prompt("My resume text")

    def test_career_recommendations(self) -> None:
        prompt = build_career_recommendations_prompt("", ["SQL"], "", None)
        assert "Current Role: Not specified" in prompt
        assert "Skills: SQL" in prompt
        assert "Interests: Not specified" in prompt
