"""Pure renderers: plain-text export and structured preview sections.

Both renderers apply the same inclusion rules. Name and contact always appear
(``-`` stands in for a blank value); every other section is omitted entirely
when its filtered content is empty.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ..contracts import DEFAULT_TEMPLATE, TEMPLATE_OPTIONS, Column, SectionKind, TemplateName
from .content import (
    flattened_skills,
    non_empty_education,
    non_empty_experience,
    non_empty_projects,
)
from .schema import ResumeDraft

PLACEHOLDER = "-"
FIELD_SEPARATOR = " | "
PROJECT_FALLBACK_TITLE = "Project"

# Template -> sections moved out of the main column. Placement only; a template
# never changes which sections are emitted.
TEMPLATE_LAYOUTS: Dict[str, Dict[str, Column]] = {
    "Classic": {},
    "Modern": {"skills": "sidebar", "links": "sidebar"},
    "Minimal": {},
}


@dataclass
class RenderItem:
    heading: str
    details: List[str] = field(default_factory=list)


@dataclass
class RenderSection:
    kind: SectionKind
    title: str
    items: List[RenderItem] = field(default_factory=list)
    column: Column = "main"


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


def coerce_template(value: object) -> TemplateName:
    """Known template names pass through; anything else becomes the default."""
    for option in TEMPLATE_OPTIONS:
        if value == option:
            return option
    return DEFAULT_TEMPLATE


def template_style_hint(template: object) -> str:
    """Style class the presentation layer applies to the preview paper."""
    return f"template-{coerce_template(template).lower()}"


# ---------------------------------------------------------------------------
# Shared line builders
# ---------------------------------------------------------------------------


def _join_present(values: Iterable[str], separator: str = FIELD_SEPARATOR) -> str:
    return separator.join(value.strip() for value in values if value.strip())


def contact_line(draft: ResumeDraft) -> str:
    return _join_present((draft.email, draft.phone, draft.location))


def _profile_links(draft: ResumeDraft) -> List[str]:
    return [value.strip() for value in (draft.github, draft.linkedin) if value.strip()]


def _education_items(draft: ResumeDraft) -> List[RenderItem]:
    return [
        RenderItem(heading=_join_present((entry.school, entry.degree, entry.year)))
        for entry in non_empty_education(draft)
    ]


def _experience_items(draft: ResumeDraft) -> List[RenderItem]:
    items = []
    for entry in non_empty_experience(draft):
        details = [entry.bullet.strip()] if entry.bullet.strip() else []
        items.append(RenderItem(heading=_join_present((entry.company, entry.role, entry.duration)), details=details))
    return items


def _project_items(draft: ResumeDraft, fallback_title: Optional[str]) -> List[RenderItem]:
    items = []
    for entry in non_empty_projects(draft):
        details = []
        if entry.description.strip():
            details.append(entry.description.strip())
        if entry.tech_stack:
            details.append(f"Tech: {', '.join(entry.tech_stack)}")
        links = _join_present((entry.live_url, entry.github_url))
        if links:
            details.append(links)
        heading = entry.title.strip() or (fallback_title or "")
        items.append(RenderItem(heading=heading, details=details))
    return items


def _bullet_line(text: str) -> str:
    return f"- {text}"


# ---------------------------------------------------------------------------
# Plain text
# ---------------------------------------------------------------------------


def to_plain_text(draft: ResumeDraft) -> str:
    """Canonical text export. Byte-for-byte deterministic for a given draft."""
    lines: List[str] = []

    lines.extend(["Name", draft.name.strip() or PLACEHOLDER, ""])
    lines.extend(["Contact", contact_line(draft) or PLACEHOLDER, ""])

    if draft.summary.strip():
        lines.extend(["Summary", draft.summary.strip(), ""])

    for title, items in (
        ("Education", _education_items(draft)),
        ("Experience", _experience_items(draft)),
        ("Projects", _project_items(draft, PROJECT_FALLBACK_TITLE)),
    ):
        if not items:
            continue
        lines.append(title)
        for item in items:
            lines.append(_bullet_line(item.heading))
            lines.extend(f"  {detail}" for detail in item.details)
        lines.append("")

    skills = flattened_skills(draft)
    if skills:
        lines.extend(["Skills", ", ".join(skills), ""])

    links = _profile_links(draft)
    if links:
        lines.append("Links")
        lines.extend(links)

    return "\n".join(lines).strip()


# ---------------------------------------------------------------------------
# Structured sections
# ---------------------------------------------------------------------------


def to_structured_sections(draft: ResumeDraft, template: object = DEFAULT_TEMPLATE) -> List[RenderSection]:
    """Section descriptors for the visual preview, placed per *template*."""
    layout = TEMPLATE_LAYOUTS[coerce_template(template)]
    sections: List[RenderSection] = [
        RenderSection(
            kind="header",
            title="Header",
            items=[
                RenderItem(
                    heading=draft.name.strip() or PLACEHOLDER,
                    details=[contact_line(draft) or PLACEHOLDER],
                )
            ],
        )
    ]

    if draft.summary.strip():
        sections.append(RenderSection(kind="summary", title="Summary", items=[RenderItem(heading=draft.summary.strip())]))

    education = _education_items(draft)
    if education:
        sections.append(RenderSection(kind="education", title="Education", items=education))

    experience = _experience_items(draft)
    if experience:
        sections.append(RenderSection(kind="experience", title="Experience", items=experience))

    projects = _project_items(draft, fallback_title=None)
    if projects:
        sections.append(RenderSection(kind="projects", title="Projects", items=projects))

    skill_groups = [
        RenderItem(heading=label, details=list(values))
        for label, values in (
            ("Technical", draft.technical_skills),
            ("Soft Skills", draft.soft_skills),
            ("Tools & Technologies", draft.tools_technologies),
        )
        if values
    ]
    if skill_groups:
        sections.append(RenderSection(kind="skills", title="Skills", items=skill_groups))

    links = _profile_links(draft)
    if links:
        sections.append(RenderSection(kind="links", title="Links", items=[RenderItem(heading=link) for link in links]))

    for section in sections:
        section.column = layout.get(section.kind, "main")
    return sections


def split_columns(sections: List[RenderSection]) -> Dict[Column, List[RenderSection]]:
    """Group sections by column, keeping their relative order."""
    columns: Dict[Column, List[RenderSection]] = {"main": [], "sidebar": []}
    for section in sections:
        columns[section.column].append(section)
    return columns
