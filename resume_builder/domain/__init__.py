"""Resume Builder Domain - Pure logic for the resume draft.

This package contains pure functions with no store or UI dependencies.
Persistence is handled by the session layer; this package operates on drafts.
"""

from .ats_scorer import ATS_CHECKLIST, AtsResult, ChecklistItem, format_ats_report, score_draft, top_improvements
from .content import (
    ACTION_VERBS,
    bullet_guidance,
    count_words,
    flattened_skills,
    has_numeric_impact,
    non_empty_education,
    non_empty_experience,
    non_empty_projects,
    should_warn_incomplete,
    starts_with_action_verb,
)
from .editing import add_entry, remove_entry, set_field, set_skills, update_entry
from .normalizer import normalize_draft, split_comma_list
from .renderers import (
    RenderItem,
    RenderSection,
    coerce_template,
    split_columns,
    template_style_hint,
    to_plain_text,
    to_structured_sections,
)
from .sample import sample_draft
from .schema import EducationEntry, ExperienceEntry, ProjectEntry, ResumeDraft, empty_draft, new_entry_id

__all__ = [
    # Schema
    "ResumeDraft",
    "EducationEntry",
    "ExperienceEntry",
    "ProjectEntry",
    "empty_draft",
    "new_entry_id",
    "sample_draft",
    # Normalizer
    "normalize_draft",
    "split_comma_list",
    # Derived content
    "ACTION_VERBS",
    "non_empty_education",
    "non_empty_experience",
    "non_empty_projects",
    "flattened_skills",
    "count_words",
    "has_numeric_impact",
    "starts_with_action_verb",
    "bullet_guidance",
    "should_warn_incomplete",
    # Scorer
    "score_draft",
    "top_improvements",
    "ATS_CHECKLIST",
    "AtsResult",
    "ChecklistItem",
    "format_ats_report",
    # Renderers
    "to_plain_text",
    "to_structured_sections",
    "RenderSection",
    "RenderItem",
    "split_columns",
    "coerce_template",
    "template_style_hint",
    # Editing
    "set_field",
    "add_entry",
    "update_entry",
    "remove_entry",
    "set_skills",
]
