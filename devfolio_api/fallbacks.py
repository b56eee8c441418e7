"""Static content served when a JSON-answer generation cannot be used."""

from typing import Any

from devfolio_api.timeline import weeks_for_timeframe

DEFAULT_SKILLS = ["JavaScript", "React", "Node.js", "HTML/CSS"]

_FRONTEND = ("React", "Vue", "Angular", "JavaScript", "TypeScript", "HTML", "CSS", "Tailwind", "Bootstrap")
_BACKEND = ("Node", "Express", "Django", "Flask", "FastAPI", "PHP", "Laravel", "Spring", "Java", "Python", ".NET", "C#")
_DATABASE = ("SQL", "Postgres", "MySQL", "MongoDB", "Firebase", "Supabase", "DynamoDB", "Redis")

MAX_LEARNING_WEEKS = 12


def _matching(skills: list[str], keywords: tuple[str, ...]) -> list[str]:
    return [s for s in skills if any(k.lower() in s.lower() for k in keywords)]


def _or_default(techs: list[str], default: list[str]) -> list[str]:
    return techs if techs else default


def default_project_ideas(skills: list[str] | None = None) -> list[dict[str, Any]]:
    """Five portfolio project ideas, using the caller's skills where they fit."""
    skills = [s.strip() for s in skills or [] if s and s.strip()]
    frontend = _matching(skills, _FRONTEND)
    backend = _matching(skills, _BACKEND)
    database = _matching(skills, _DATABASE)
    full_stack = frontend[:2] + backend[:2] + database[:1]

    return [
        {
            "title": "Interactive Portfolio & Project Showcase",
            "description": (
                "A dynamic portfolio website with interactive project showcases, skill "
                "visualizations, and a blog section. Implement modern animations, dark/light "
                "mode, and a contact form with validation."
            ),
            "technologies": _or_default(frontend[:3], ["React", "Tailwind CSS", "Framer Motion"]),
            "learningOutcomes": [
                "Advanced UI/UX design",
                "Animation techniques",
                "Responsive layouts",
                "Performance optimization",
                "SEO best practices",
            ],
            "estimatedTime": "3-4 weeks",
        },
        {
            "title": "AI-Enhanced Productivity Dashboard",
            "description": (
                "A productivity system with task management, time tracking, and AI-powered "
                "insights. Features include priority suggestions, productivity analytics, and "
                "calendar integration."
            ),
            "technologies": _or_default(full_stack, ["React", "Node.js", "MongoDB", "Express", "Chart.js"]),
            "learningOutcomes": [
                "Full-stack architecture",
                "Data visualization",
                "AI integration",
                "State management",
                "User authentication",
            ],
            "estimatedTime": "2-3 months",
        },
        {
            "title": "Community-Driven Learning Platform",
            "description": (
                "A platform where users create, share, and follow learning paths. Includes "
                "progress tracking, resource recommendations, and community discussions with "
                "upvoting."
            ),
            "technologies": _or_default(full_stack, ["React", "Redux", "Node.js", "PostgreSQL"]),
            "learningOutcomes": [
                "Complex database relationships",
                "User-generated content management",
                "Community features",
                "Recommendation algorithms",
                "Content moderation",
            ],
            "estimatedTime": "3-4 months",
        },
        {
            "title": "Real-time Collaborative Workspace",
            "description": (
                "A collaborative workspace with real-time document editing, team chat, file "
                "sharing, and project management tools."
            ),
            "technologies": frontend[:2] + backend[:2] + ["Socket.io", "WebRTC"],
            "learningOutcomes": [
                "Real-time data synchronization",
                "WebRTC implementation",
                "Collaborative editing algorithms",
                "Scalable architecture",
                "Security best practices",
            ],
            "estimatedTime": "3-5 months",
        },
        {
            "title": "Personalized Health & Fitness Tracker",
            "description": (
                "A health tracking application with customizable workout plans, nutrition "
                "logging, progress visualization, goal setting, and achievement badges."
            ),
            "technologies": full_stack + ["Chart.js"],
            "learningOutcomes": [
                "Mobile-first design",
                "Health data visualization",
                "Personalization algorithms",
                "Gamification techniques",
                "Local storage optimization",
            ],
            "estimatedTime": "2-3 months",
        },
    ]


def default_tech_roadmap(
    technology: str = "Programming",
    goal_level: str = "intermediate",
    timeframe: str = "3 months",
) -> dict[str, Any]:
    """A placeholder week-by-week learning plan, capped at twelve weeks."""
    slug = technology.lower().replace(" ", "-")
    weeks = []
    for week in range(1, min(weeks_for_timeframe(timeframe), MAX_LEARNING_WEEKS) + 1):
        if week <= 4:
            focus = "Fundamentals"
        elif week <= 8:
            focus = "Intermediate concepts"
        else:
            focus = "Advanced topics"
        weeks.append(
            {
                "week": week,
                "focus": focus,
                "resources": [
                    {
                        "type": "documentation",
                        "title": f"{technology} Documentation",
                        "url": f"https://example.com/{slug}/docs",
                    },
                    {
                        "type": "tutorial",
                        "title": f"{technology} Tutorial - Week {week}",
                        "url": f"https://example.com/{slug}/tutorial",
                    },
                ],
                "projects": [
                    {
                        "title": f"Practice Project {week}",
                        "description": f"A simple project to practice {technology} concepts from week {week}",
                    }
                ],
                "milestones": [f"Understand key concepts from week {week}", "Complete the practice project"],
            }
        )

    return {
        "overview": f"A learning roadmap for {technology} to reach {goal_level} level in {timeframe}.",
        "prerequisites": ["Basic programming knowledge", "Familiarity with development tools"],
        "weeks": weeks,
        "advancedTopics": [f"Advanced {technology} patterns", "Performance optimization", "Best practices"],
    }


def default_resume(skills: list[str] | None = None) -> dict[str, Any]:
    """A generic resume draft built around the first few skills."""
    skills = [s.strip() for s in skills or [] if s and s.strip()] or DEFAULT_SKILLS

    return {
        "summary": (
            f"Experienced professional with skills in {', '.join(skills[:3])}. Committed to "
            "delivering high-quality results and continuously improving technical capabilities. "
            "Seeking opportunities to apply expertise in challenging projects."
        ),
        "experience": [
            {
                "company": "Tech Solutions Inc.",
                "position": "Senior Developer",
                "startDate": "2020-01",
                "endDate": "Present",
                "description": "Lead developer for web applications and services",
                "bullets": [
                    "Developed and maintained multiple web applications using modern frameworks",
                    "Collaborated with cross-functional teams to deliver projects on schedule",
                    "Implemented best practices for code quality and performance optimization",
                ],
            },
            {
                "company": "Digital Innovations LLC",
                "position": "Web Developer",
                "startDate": "2017-06",
                "endDate": "2019-12",
                "description": "Full-stack development for client projects",
                "bullets": [
                    "Built responsive websites and applications for diverse clients",
                    "Worked with agile development methodologies to meet project milestones",
                    "Maintained and enhanced existing codebases to improve functionality",
                ],
            },
        ],
        "education": [
            {
                "institution": "University of Technology",
                "degree": "Bachelor of Science",
                "field": "Computer Science",
                "startDate": "2013-09",
                "endDate": "2017-05",
                "gpa": "3.7/4.0",
            }
        ],
        "projects": [
            {
                "title": "E-commerce Platform",
                "description": (
                    "A full-featured online shopping platform with user authentication, "
                    "product catalog, and payment processing"
                ),
                "technologies": skills[:4],
                "url": "https://project-example.com",
                "github": "https://github.com/username/ecommerce",
            },
            {
                "title": "Task Management System",
                "description": "A productivity application to create, organize, and track tasks and projects",
                "technologies": skills[:3],
                "url": "https://tasks-example.com",
                "github": "https://github.com/username/tasks",
            },
        ],
    }
