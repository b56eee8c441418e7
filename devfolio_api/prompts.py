"""Prompt builders for the generative-text service.

The project roadmap prompt names the four canonical phases verbatim; the
phase locator looks for exactly those headers first.
"""

from devfolio_api.timeline import phase_week_ranges, weeks_for_timeframe


def _join(values: list[str] | None, default: str) -> str:
    cleaned = [v.strip() for v in values or [] if v and v.strip()]
    return ", ".join(cleaned) if cleaned else default


def build_project_roadmap_prompt(
    project_title: str,
    description: str,
    skills: list[str] | None,
    timeline: str | None,
) -> str:
    """Prompt for a phased project roadmap."""
    timeline = timeline or "3 months"
    weeks = weeks_for_timeframe(timeline)
    phase_lines = "\n".join(
        f"{i}. {phase.name} (Week {phase.start_week}-{phase.end_week})"
        for i, phase in enumerate(phase_week_ranges(weeks), start=1)
    )

    return f"""Create a HIGHLY DETAILED and PRACTICAL project roadmap for:
Project Title: {project_title}
Description: {description}
Required Skills: {_join(skills, "Not specified")}
Timeline: {timeline} (approximately {weeks} weeks)

IMPORTANT REQUIREMENTS:
1. The roadmap must be REALISTIC and ACTIONABLE
2. Tasks must be SPECIFIC and MEASURABLE
3. Include EXACT technologies from the skills list
4. Provide CLEAR milestones with completion criteria
5. Ensure tasks build logically on each other
6. Include testing and quality assurance tasks
7. Account for potential challenges and mitigation strategies

Structure the roadmap with these EXACT phases:
{phase_lines}

For EACH phase:
1. Start with a clear MILESTONE that marks completion of the phase
2. List 4-6 specific TASKS, one per line, written as "Task name: description"
3. For each task, include:
   - Estimated duration (in days)
   - Required skills/technologies
   - Completion criteria
   - Dependencies on other tasks (if any)

Additional sections to include:
1. Key challenges and mitigation strategies
2. Learning outcomes and skill development
3. Success metrics and evaluation criteria

Begin with a one-paragraph overview followed by a blank line.
Format the response with clear section headers, numbered lists for tasks, and specific timeframes.
IMPORTANT: Make the roadmap HIGHLY SPECIFIC to this exact project - avoid generic tasks that could apply to any project."""


def build_project_ideas_prompt(
    skills: list[str] | None,
    interests: list[str] | None,
    experience: str = "intermediate",
) -> str:
    """Prompt for five project ideas returned as a JSON array."""
    return f"""Generate 5 UNIQUE and HIGHLY PERSONALIZED project ideas for a {experience} developer with the following profile:
Skills: {_join(skills, "JavaScript, React, Node.js")}
Interests: {_join(interests, "Web Development")}

IMPORTANT REQUIREMENTS:
1. Each project MUST directly utilize the specific skills listed above
2. Projects should align with the stated interests
3. NO generic projects - each must be tailored to the exact skills and interests
4. Vary the complexity and scope across the 5 projects
5. Include at least one innovative or cutting-edge project idea
6. Suggest projects that would stand out in a portfolio

Format the response as a JSON array with the following structure:
[
  {{
    "title": "Project title",
    "description": "Detailed description (3-4 sentences)",
    "technologies": ["Tech1", "Tech2", "Tech3"],
    "learningOutcomes": ["Outcome1", "Outcome2", "Outcome3", "Outcome4"],
    "estimatedTime": "X weeks/months"
  }}
]

IMPORTANT: The response must be a valid, parseable JSON array exactly matching this structure."""


def build_tech_roadmap_prompt(technology: str, goal_level: str, timeframe: str) -> str:
    """Prompt for a week-by-week learning roadmap returned as a JSON object."""
    return f"""Create a detailed learning roadmap for mastering {technology} in {timeframe} to reach {goal_level} level.

Include:
1. A week-by-week breakdown
2. Specific resources to learn from (courses, documentation, books)
3. Practice projects to build at each stage
4. Milestones and checkpoints to evaluate progress

Format the response as a JSON object with the following structure:
{{
  "overview": "Brief overview of the learning path",
  "prerequisites": ["Prereq1", "Prereq2"],
  "weeks": [
    {{
      "week": 1,
      "focus": "Getting started with...",
      "resources": [
        {{"type": "course", "title": "Resource title", "url": "https://example.com"}}
      ],
      "projects": [
        {{"title": "Project title", "description": "Brief description..."}}
      ],
      "milestones": ["Milestone1", "Milestone2"]
    }}
  ],
  "advancedTopics": ["Topic1", "Topic2"]
}}

IMPORTANT:
1. The response must be a valid, parseable JSON object exactly matching this structure.
2. Do not include any additional text before or after the JSON.
3. All URLs should be valid (use placeholder URLs like example.com if needed)."""


def build_resume_draft_prompt(name: str, email: str, skills: list[str] | None, bio: str) -> str:
    """Prompt for a resume draft returned as a JSON object."""
    return f"""Generate a professional resume for a person with the following profile:

Full Name: {name}
Email: {email}
Skills: {_join(skills, "Web Development, JavaScript, React")}
Bio: {bio}

Generate a professional summary paragraph, 2-3 experience entries with 3-5 bullets each,
1-2 education entries and 2-3 projects that showcase the skills.

Format the response as a valid JSON object with the following structure:
{{
  "summary": "Professional summary...",
  "experience": [
    {{"company": "Company name", "position": "Position title", "startDate": "YYYY-MM",
      "endDate": "YYYY-MM or Present", "description": "Job description...",
      "bullets": ["Bullet 1", "Bullet 2", "Bullet 3"]}}
  ],
  "education": [
    {{"institution": "University name", "degree": "Degree title", "field": "Field of study",
      "startDate": "YYYY-MM", "endDate": "YYYY-MM", "gpa": "3.8/4.0"}}
  ],
  "projects": [
    {{"title": "Project title", "description": "Project description",
      "technologies": ["Tech1", "Tech2"], "url": "https://project-url.com",
      "github": "https://github.com/username/project"}}
  ]
}}

IMPORTANT: The response must be a valid, parseable JSON object exactly matching this structure."""


def build_resume_analysis_prompt(resume_text: str) -> str:
    """Prompt for free-text resume feedback."""
    return f"""Analyze this resume and provide detailed feedback:
{resume_text}

Please provide:
1. Strengths
2. Areas for improvement
3. Missing key skills
4. Formatting suggestions
5. Action items to enhance the resume"""


def build_career_recommendations_prompt(
    current_role: str,
    skills: list[str] | None,
    experience: str,
    interests: list[str] | None,
) -> str:
    """Prompt for free-text career recommendations."""
    return f"""Provide career recommendations for a professional with:
Current Role: {current_role or "Not specified"}
Skills: {_join(skills, "Not specified")}
Experience: {experience or "Not specified"}
Interests: {_join(interests, "Not specified")}

Please provide:
1. Potential career paths
2. Required skills for each path
3. Learning resources
4. Timeline for transition
5. Salary expectations
6. Job market outlook"""
