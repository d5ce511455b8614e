"""Derived content: non-empty section views, flattened skills, text signals.

All functions are pure; filtering never removes entries from the draft itself.
"""

from __future__ import annotations

import re
from typing import List

from .schema import EducationEntry, ExperienceEntry, ProjectEntry, ResumeDraft

ACTION_VERBS = (
    "Built",
    "Developed",
    "Designed",
    "Implemented",
    "Led",
    "Improved",
    "Created",
    "Optimized",
    "Automated",
)

_ACTION_VERB_RE = re.compile(r"^(?:%s)\b" % "|".join(ACTION_VERBS), re.IGNORECASE)
_NUMERIC_IMPACT_RE = re.compile(r"[0-9%xk]", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Non-empty section views
# ---------------------------------------------------------------------------


def is_blank(text: str) -> bool:
    return not text.strip()


def education_has_content(entry: EducationEntry) -> bool:
    return any(not is_blank(value) for value in (entry.school, entry.degree, entry.year))


def experience_has_content(entry: ExperienceEntry) -> bool:
    return any(not is_blank(value) for value in (entry.company, entry.role, entry.duration, entry.bullet))


def project_has_content(entry: ProjectEntry) -> bool:
    if entry.tech_stack:
        return True
    return any(
        not is_blank(value) for value in (entry.title, entry.description, entry.live_url, entry.github_url)
    )


def non_empty_education(draft: ResumeDraft) -> List[EducationEntry]:
    return [entry for entry in draft.education if education_has_content(entry)]


def non_empty_experience(draft: ResumeDraft) -> List[ExperienceEntry]:
    return [entry for entry in draft.experience if experience_has_content(entry)]


def non_empty_projects(draft: ResumeDraft) -> List[ProjectEntry]:
    return [entry for entry in draft.projects if project_has_content(entry)]


# ---------------------------------------------------------------------------
# Skills
# ---------------------------------------------------------------------------


def flattened_skills(draft: ResumeDraft) -> List[str]:
    """Technical, then soft, then tools. Order and duplicates preserved."""
    return [*draft.technical_skills, *draft.soft_skills, *draft.tools_technologies]


# ---------------------------------------------------------------------------
# Text signals
# ---------------------------------------------------------------------------


def count_words(text: str) -> int:
    return len(text.split())


def has_numeric_impact(text: str) -> bool:
    """True when the text carries a digit, ``%``, or an ``x``/``k`` idiom."""
    return bool(_NUMERIC_IMPACT_RE.search(text.strip()))


def starts_with_action_verb(text: str) -> bool:
    """True for blank text, else whether it opens with one of :data:`ACTION_VERBS`."""
    cleaned = text.strip()
    if not cleaned:
        return True
    return bool(_ACTION_VERB_RE.match(cleaned))


def bullet_guidance(text: str) -> List[str]:
    """Inline hints for a bullet or description. Blank text gets none."""
    guidance: List[str] = []
    if is_blank(text):
        return guidance
    if not starts_with_action_verb(text):
        guidance.append("Start with a strong action verb.")
    if not has_numeric_impact(text):
        guidance.append("Add measurable impact (numbers).")
    return guidance


def should_warn_incomplete(draft: ResumeDraft) -> bool:
    """Print/copy warning: no name, or neither a project nor an experience entry."""
    if is_blank(draft.name):
        return True
    return not (non_empty_projects(draft) or non_empty_experience(draft))
