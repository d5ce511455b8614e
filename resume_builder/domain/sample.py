"""Sample draft loaded by the "load sample" action."""

from __future__ import annotations

from .schema import EducationEntry, ExperienceEntry, ProjectEntry, ResumeDraft


def sample_draft() -> ResumeDraft:
    """A filled-in draft. Entry ids are fresh on every call."""
    return ResumeDraft(
        name="Shreenivas Nayakawadi",
        email="shreenivas@example.com",
        phone="+91-90000-00000",
        location="Bengaluru, India",
        summary="Frontend engineer focused on clean, measurable product UX.",
        education=[
            EducationEntry(school="KodNest Academy", degree="B.Tech CSE", year="2026"),
        ],
        experience=[
            ExperienceEntry(
                company="Acme Labs",
                role="Frontend Intern",
                duration="2025",
                bullet="Improved dashboard load speed by 32% for 500+ daily users.",
            ),
        ],
        projects=[
            ProjectEntry(
                title="Placement Platform",
                description="Built modular prep workflow UI and reduced task completion time by 28%.",
                tech_stack=["React", "TypeScript"],
            ),
            ProjectEntry(
                title="Resume Analyzer",
                description="Implemented deterministic checks that lifted profile completeness to 90%.",
                tech_stack=["Node.js"],
            ),
        ],
        technical_skills=["React", "TypeScript", "CSS", "Node.js", "HTML", "REST APIs"],
        soft_skills=["Communication"],
        tools_technologies=["Git", "Jest"],
        github="https://github.com/shreenivas-nayakawadi",
        linkedin="https://linkedin.com/in/shreenivas",
    )
