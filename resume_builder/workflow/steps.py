"""Static stage table for the guided build track."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class BuildStep:
    ordinal: int
    identifier: str
    title: str
    subtitle: str
    prompt_text: str

    @property
    def slug(self) -> str:
        return self.identifier.rsplit("/", 1)[-1]


BUILD_STEPS: Tuple[BuildStep, ...] = (
    BuildStep(
        1,
        "/rb/01-problem",
        "Problem",
        "Define the candidate pain points and product intent.",
        "Document the resume building problems this SaaS solves and list non-goals for MVP.",
    ),
    BuildStep(
        2,
        "/rb/02-market",
        "Market",
        "Frame ICP, alternatives, and value proposition.",
        "Map target users, alternatives, and why this product wins now.",
    ),
    BuildStep(
        3,
        "/rb/03-architecture",
        "Architecture",
        "Choose major systems and platform boundaries.",
        "Propose architecture blocks, data flow, and external integrations.",
    ),
    BuildStep(
        4,
        "/rb/04-hld",
        "High-Level Design",
        "Lay out component-level responsibilities.",
        "Create HLD with modules, ownership, and request/response boundaries.",
    ),
    BuildStep(
        5,
        "/rb/05-lld",
        "Low-Level Design",
        "Define implementation details and contracts.",
        "Break the design into APIs, schemas, validations, and failure handling.",
    ),
    BuildStep(
        6,
        "/rb/06-build",
        "Build",
        "Implement features according to approved design docs.",
        "Implement iteratively and capture artifact evidence for each milestone.",
    ),
    BuildStep(
        7,
        "/rb/07-test",
        "Test",
        "Validate quality, reliability, and edge behavior.",
        "Run verification and break tests, then capture pass/fail evidence.",
    ),
    BuildStep(
        8,
        "/rb/08-ship",
        "Ship",
        "Prepare launch package and release handoff.",
        "Finalize release checklist and deployment notes for submission.",
    ),
)


def step_by_ordinal(ordinal: int, steps: Tuple[BuildStep, ...] = BUILD_STEPS) -> Optional[BuildStep]:
    for step in steps:
        if step.ordinal == ordinal:
            return step
    return None


def step_for_route(route: str, steps: Tuple[BuildStep, ...] = BUILD_STEPS) -> Optional[BuildStep]:
    """Match a full identifier (``/rb/03-architecture``) or its slug."""
    cleaned = route.strip().rstrip("/")
    if not cleaned:
        return None
    for step in steps:
        if cleaned in (step.identifier, step.slug):
            return step
    return None
