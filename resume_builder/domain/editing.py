"""Field-level edits on a live draft.

These mutate the draft in place (the editing session owns it) and keep the
"at least one entry per list section" invariant. Unknown sections, fields or
entry ids raise :class:`BuilderError`.
"""

from __future__ import annotations

from typing import List, Union

from pydantic import BaseModel

from ..errors import BuilderError
from .normalizer import split_comma_list
from .schema import IDENTITY_FIELDS, LINK_FIELDS, SECTION_MODELS, SKILL_CATEGORIES, ResumeDraft

SKILL_CATEGORY_ALIASES = {
    "technical": "technical_skills",
    "soft": "soft_skills",
    "tools": "tools_technologies",
}


def set_field(draft: ResumeDraft, field_name: str, value: str) -> None:
    """Set an identity or profile-link scalar."""
    if field_name not in IDENTITY_FIELDS + LINK_FIELDS:
        raise BuilderError(
            "UNKNOWN_FIELD",
            f"Unknown draft field '{field_name}'",
            {"allowed": list(IDENTITY_FIELDS + LINK_FIELDS)},
        )
    setattr(draft, field_name, value)


def add_entry(draft: ResumeDraft, section: str) -> BaseModel:
    """Append a blank entry to *section* and return it."""
    entries = _section_entries(draft, section)
    entry = SECTION_MODELS[section]()
    entries.append(entry)
    return entry


def update_entry(
    draft: ResumeDraft,
    section: str,
    entry_id: str,
    field_name: str,
    value: Union[str, List[str]],
) -> BaseModel:
    """Set one field of the entry identified by *entry_id*.

    *field_name* may be the attribute name or its persisted alias
    (``tech_stack`` / ``techStack``). The tech stack accepts comma-separated text.
    """
    entry = _find_entry(draft, section, entry_id)
    attribute = _resolve_entry_field(entry, field_name)
    if attribute == "id":
        raise BuilderError("READ_ONLY_FIELD", "Entry ids cannot be edited", {"section": section})
    if attribute == "tech_stack":
        value = split_comma_list(value) if isinstance(value, str) else [v.strip() for v in value if v.strip()]
    elif not isinstance(value, str):
        raise BuilderError("INVALID_VALUE", f"Field '{field_name}' expects text", {"section": section})
    setattr(entry, attribute, value)
    return entry


def remove_entry(draft: ResumeDraft, section: str, entry_id: str) -> None:
    """Remove an entry; removing the last one leaves a fresh blank entry."""
    entries = _section_entries(draft, section)
    entry = _find_entry(draft, section, entry_id)
    entries.remove(entry)
    if not entries:
        entries.append(SECTION_MODELS[section]())


def set_skills(draft: ResumeDraft, category: str, text: str) -> List[str]:
    """Replace one skill category from comma-separated input."""
    attribute = SKILL_CATEGORY_ALIASES.get(category, category)
    if attribute not in SKILL_CATEGORIES:
        raise BuilderError(
            "UNKNOWN_SKILL_CATEGORY",
            f"Unknown skill category '{category}'",
            {"allowed": sorted(SKILL_CATEGORY_ALIASES)},
        )
    skills = split_comma_list(text)
    setattr(draft, attribute, skills)
    return skills


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _section_entries(draft: ResumeDraft, section: str) -> list:
    if section not in SECTION_MODELS:
        raise BuilderError(
            "UNKNOWN_SECTION",
            f"Unknown section '{section}'",
            {"allowed": list(SECTION_MODELS)},
        )
    return getattr(draft, section)


def _find_entry(draft: ResumeDraft, section: str, entry_id: str) -> BaseModel:
    for entry in _section_entries(draft, section):
        if entry.id == entry_id:
            return entry
    raise BuilderError(
        "UNKNOWN_ENTRY",
        f"No {section} entry with id '{entry_id}'",
        {"section": section, "entry_id": entry_id},
    )


def _resolve_entry_field(entry: BaseModel, field_name: str) -> str:
    for attribute, info in type(entry).model_fields.items():
        if field_name in (attribute, info.alias):
            return attribute
    raise BuilderError(
        "UNKNOWN_FIELD",
        f"Unknown field '{field_name}' for {type(entry).__name__}",
        {"allowed": [name for name in type(entry).model_fields if name != "id"]},
    )
