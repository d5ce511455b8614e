"""Global pytest fixtures for deterministic test environment."""

from __future__ import annotations

import itertools

import pytest

from resume_builder.domain import EducationEntry, ExperienceEntry, ProjectEntry, ResumeDraft
from resume_builder.storage import InMemoryKeyValueStore

_SUMMARY_WORDS = (
    "Built resilient backend services and data pipelines for analytics teams while mentoring engineers"
).split()


@pytest.fixture(autouse=True)
def _isolate_runtime_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear local runtime env that can leak into tests on developer machines."""
    for key in (
        "RESUME_BUILDER_STORAGE_PATH",
        "RESUME_BUILDER_TEMPLATE",
        "RESUME_BUILDER_VERBOSE",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def memory_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def fixed_clock():
    """Deterministic, strictly increasing ISO timestamps."""
    counter = itertools.count(1)
    return lambda: f"2026-01-01T00:00:{next(counter):02d}Z"


@pytest.fixture
def full_draft() -> ResumeDraft:
    """A draft that passes every readiness check."""
    return ResumeDraft(
        name="Ada Lovelace",
        email="ada@x.io",
        phone="+44 20 7946 0000",
        location="London",
        # 60 words, opening with an action verb.
        summary=" ".join((_SUMMARY_WORDS * 5)[:60]),
        education=[EducationEntry(id="edu-1", school="University of London", degree="Mathematics", year="1835")],
        experience=[
            ExperienceEntry(
                id="exp-1",
                company="Analytical Engines Ltd",
                role="Engineer",
                duration="1842-1843",
                bullet="Improved throughput by 40%",
            )
        ],
        projects=[
            ProjectEntry(
                id="proj-1",
                title="Note G",
                description="Designed the first published algorithm.",
                tech_stack=["Analytical Engine"],
                github_url="https://github.com/ada/note-g",
            )
        ],
        technical_skills=["Mathematics", "Algorithms", "Python"],
        soft_skills=["Writing", "Collaboration"],
        tools_technologies=["Difference Engine"],
        github="https://github.com/ada",
        linkedin="https://linkedin.com/in/ada",
    )


@pytest.fixture
def blank_draft() -> ResumeDraft:
    return ResumeDraft()
