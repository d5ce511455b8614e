"""Canonical resume draft schema.

Attributes are snake_case; the persisted JSON uses the camelCase aliases that
earlier builds of the product wrote (``techStack``, ``technicalSkills``...).
Every list section holds at least one entry in memory. Blank entries are legal;
blankness only matters to scoring and rendering.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def new_entry_id() -> str:
    """Opaque, process-unique identity token for a list entry."""
    return uuid.uuid4().hex


class _DraftModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EducationEntry(_DraftModel):
    id: str = Field(default_factory=new_entry_id)
    school: str = ""
    degree: str = ""
    year: str = ""


class ExperienceEntry(_DraftModel):
    id: str = Field(default_factory=new_entry_id)
    company: str = ""
    role: str = ""
    duration: str = ""
    bullet: str = ""


class ProjectEntry(_DraftModel):
    id: str = Field(default_factory=new_entry_id)
    title: str = ""
    description: str = ""
    tech_stack: List[str] = Field(default_factory=list)
    live_url: str = ""
    github_url: str = ""


class ResumeDraft(_DraftModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    summary: str = ""
    education: List[EducationEntry] = Field(default_factory=lambda: [EducationEntry()])
    experience: List[ExperienceEntry] = Field(default_factory=lambda: [ExperienceEntry()])
    projects: List[ProjectEntry] = Field(default_factory=lambda: [ProjectEntry()])
    technical_skills: List[str] = Field(default_factory=list)
    soft_skills: List[str] = Field(default_factory=list)
    tools_technologies: List[str] = Field(default_factory=list)
    github: str = ""
    linkedin: str = ""

    def to_storage(self) -> Dict[str, Any]:
        """JSON-ready dict in the persisted (camelCase) shape."""
        return self.model_dump(by_alias=True)


# Section name -> entry model. Order is the on-screen order of the editor.
SECTION_MODELS = {
    "education": EducationEntry,
    "experience": ExperienceEntry,
    "projects": ProjectEntry,
}

IDENTITY_FIELDS = ("name", "email", "phone", "location", "summary")
LINK_FIELDS = ("github", "linkedin")
SKILL_CATEGORIES = ("technical_skills", "soft_skills", "tools_technologies")


def empty_draft() -> ResumeDraft:
    """A fresh draft: blank scalars and one blank entry per list section."""
    return ResumeDraft()
