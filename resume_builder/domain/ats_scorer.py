"""Pure domain logic for resume readiness scoring.

The score is a closed checklist of weighted boolean checks over a draft. There
is no partial credit: a check either awards its full weight or contributes a
suggestion naming what is missing and what it is worth.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Tuple

from .content import (
    count_words,
    flattened_skills,
    is_blank,
    non_empty_education,
    non_empty_experience,
    non_empty_projects,
    starts_with_action_verb,
)
from .schema import ResumeDraft

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MIN_SUMMARY_WORDS = 40
MIN_SKILLS = 6
TOP_IMPROVEMENTS_LIMIT = 3


@dataclass(frozen=True)
class ChecklistItem:
    """One weighted check. ``passes`` must be pure."""

    key: str
    weight: int
    suggestion: str
    passes: Callable[[ResumeDraft], bool]


@dataclass
class AtsResult:
    """Score in [0, 100] plus suggestions in checklist order."""

    score: int
    suggestions: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)


def _has_impact_bullet(draft: ResumeDraft) -> bool:
    return any(not is_blank(entry.bullet) for entry in non_empty_experience(draft))


def _has_action_verb_summary(draft: ResumeDraft) -> bool:
    # Unlike inline guidance, a blank summary does not pass here.
    return not is_blank(draft.summary) and starts_with_action_verb(draft.summary)


# Order matters: suggestions (and the top-improvements view) follow it.
ATS_CHECKLIST: Tuple[ChecklistItem, ...] = (
    ChecklistItem("name", 10, "Add your full name.", lambda d: not is_blank(d.name)),
    ChecklistItem("email", 10, "Add an email address.", lambda d: not is_blank(d.email)),
    ChecklistItem(
        "summary",
        15,
        f"Write a stronger summary (at least {MIN_SUMMARY_WORDS} words).",
        lambda d: count_words(d.summary) >= MIN_SUMMARY_WORDS,
    ),
    ChecklistItem(
        "experience_impact",
        15,
        "Add an experience entry with an impact bullet.",
        _has_impact_bullet,
    ),
    ChecklistItem(
        "education",
        10,
        "Add at least 1 education entry.",
        lambda d: bool(non_empty_education(d)),
    ),
    ChecklistItem(
        "skills",
        10,
        f"Add more skills (target {MIN_SKILLS}+).",
        lambda d: len(flattened_skills(d)) >= MIN_SKILLS,
    ),
    ChecklistItem(
        "projects",
        10,
        "Add at least 1 project.",
        lambda d: bool(non_empty_projects(d)),
    ),
    ChecklistItem("phone", 5, "Add a phone number.", lambda d: not is_blank(d.phone)),
    ChecklistItem(
        "profile_links",
        10,
        "Add a GitHub or LinkedIn link.",
        lambda d: not is_blank(d.github) or not is_blank(d.linkedin),
    ),
    ChecklistItem(
        "action_verb_summary",
        5,
        "Start your summary with a strong action verb.",
        _has_action_verb_summary,
    ),
)

CHECKLIST_TOTAL = sum(item.weight for item in ATS_CHECKLIST)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def score_draft(draft: ResumeDraft) -> AtsResult:
    """Score *draft* against :data:`ATS_CHECKLIST`.

    Returns an :class:`AtsResult`; one suggestion per failed check, each
    suffixed with the points it is worth.
    """
    score = 0
    suggestions: List[str] = []
    failed: List[str] = []

    for item in ATS_CHECKLIST:
        if item.passes(draft):
            score += item.weight
        else:
            failed.append(item.key)
            suggestions.append(_with_points(item))

    return AtsResult(score=max(0, min(100, score)), suggestions=suggestions, failed=failed)


def top_improvements(result: AtsResult, limit: int = TOP_IMPROVEMENTS_LIMIT) -> List[str]:
    """First *limit* suggestions, in checklist order (not re-sorted by weight)."""
    return result.suggestions[:limit]


# ---------------------------------------------------------------------------
# Formatting report (pure string output)
# ---------------------------------------------------------------------------


def format_ats_report(result: AtsResult) -> str:
    """Render an :class:`AtsResult` as a human-readable report."""
    grade = _score_to_grade(result.score)
    bar = _score_bar(result.score)

    lines = [f"## Readiness Score: {result.score}/100 {grade}", bar]

    if result.suggestions:
        lines.append("")
        lines.append("### Suggestions")
        for i, s in enumerate(result.suggestions, 1):
            lines.append(f"{i}. {s}")

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _with_points(item: ChecklistItem) -> str:
    return f"{item.suggestion} (+{item.weight} points)"


def _score_to_grade(score: int) -> str:
    if score >= 90:
        return "Excellent"
    elif score >= 75:
        return "Good"
    elif score >= 60:
        return "Fair"
    else:
        return "Needs Work"


def _score_bar(score: int, width: int = 20) -> str:
    filled = round(score / 100 * width)
    return f"[{'=' * filled}{' ' * (width - filled)}]"
