"""Turn untrusted persisted JSON into a canonical :class:`ResumeDraft`.

``normalize_draft`` never raises. Anything it cannot use is replaced with the
field's default, and every list section comes back with at least one entry.

Migrations handled here so downstream code only sees the canonical shape:

- experience entries without ``bullet`` get ``bullet = ""``;
- simple project entries (title/description only) get an empty tech stack and links;
- ``techStack`` and the skill categories accept a comma-joined string as well as a
  list of strings;
- duplicate entry ids within a section are reassigned after the first;
- the legacy single ``skills`` field fills ``technicalSkills`` when all three
  categorized lists are empty. It never merges with non-empty categories.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Set, Type, TypeVar

from pydantic import BaseModel

from .schema import (
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
    ResumeDraft,
    new_entry_id,
)

logger = logging.getLogger(__name__)

EntryT = TypeVar("EntryT", bound=BaseModel)


def normalize_draft(raw: Any) -> ResumeDraft:
    """Coerce *raw* (decoded JSON, possibly ``None`` or garbage) into a draft."""
    if not isinstance(raw, Mapping):
        if raw is not None:
            logger.debug("Draft payload is %s, not an object; using defaults", type(raw).__name__)
        return ResumeDraft()

    technical = _string_list(raw.get("technicalSkills"))
    soft = _string_list(raw.get("softSkills"))
    tools = _string_list(raw.get("toolsTechnologies"))
    legacy_skills = _string_list(raw.get("skills"))
    if not (technical or soft or tools) and legacy_skills:
        logger.debug("Migrating %d legacy skills into technicalSkills", len(legacy_skills))
        technical = legacy_skills

    return ResumeDraft(
        name=_safe_string(raw.get("name")),
        email=_safe_string(raw.get("email")),
        phone=_safe_string(raw.get("phone")),
        location=_safe_string(raw.get("location")),
        summary=_safe_string(raw.get("summary")),
        education=_entries(raw.get("education"), EducationEntry, _education),
        experience=_entries(raw.get("experience"), ExperienceEntry, _experience),
        projects=_entries(raw.get("projects"), ProjectEntry, _project),
        technical_skills=technical,
        soft_skills=soft,
        tools_technologies=tools,
        github=_safe_string(raw.get("github")),
        linkedin=_safe_string(raw.get("linkedin")),
    )


def split_comma_list(value: str) -> List[str]:
    """Split comma-separated input, trimming items and dropping blanks."""
    return [item.strip() for item in value.split(",") if item.strip()]


# ---------------------------------------------------------------------------
# Private coercion helpers
# ---------------------------------------------------------------------------


def _safe_string(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _string_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return split_comma_list(value)
    if isinstance(value, list):
        return [item.strip() for item in value if isinstance(item, str) and item.strip()]
    return []


def _entry_id(item: Mapping[str, Any]) -> str:
    return _safe_string(item.get("id")) or new_entry_id()


def _education(item: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "id": _entry_id(item),
        "school": _safe_string(item.get("school")),
        "degree": _safe_string(item.get("degree")),
        "year": _safe_string(item.get("year")),
    }


def _experience(item: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "id": _entry_id(item),
        "company": _safe_string(item.get("company")),
        "role": _safe_string(item.get("role")),
        "duration": _safe_string(item.get("duration")),
        "bullet": _safe_string(item.get("bullet")),
    }


def _project(item: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "id": _entry_id(item),
        "title": _safe_string(item.get("title")),
        "description": _safe_string(item.get("description")),
        "tech_stack": _string_list(item.get("techStack")),
        "live_url": _safe_string(item.get("liveUrl")),
        "github_url": _safe_string(item.get("githubUrl")),
    }


def _entries(
    value: Any,
    model: Type[EntryT],
    coerce: Callable[[Mapping[str, Any]], Dict[str, Any]],
) -> List[EntryT]:
    items: List[EntryT] = []
    seen: Set[str] = set()
    if isinstance(value, list):
        for item in value:
            if not isinstance(item, Mapping):
                continue
            entry = model(**coerce(item))
            if entry.id in seen:
                logger.debug("Reassigning duplicate %s id %s", model.__name__, entry.id)
                entry.id = new_entry_id()
            seen.add(entry.id)
            items.append(entry)
    if not items:
        return [model()]
    return items
