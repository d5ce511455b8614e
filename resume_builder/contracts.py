"""Shared constants/types for persisted state and presentation contracts."""

from __future__ import annotations

from typing import Final, Literal, TypeAlias

TemplateName: TypeAlias = Literal["Classic", "Modern", "Minimal"]
SectionKind: TypeAlias = Literal["header", "summary", "education", "experience", "projects", "skills", "links"]
Column: TypeAlias = Literal["main", "sidebar"]
WorkflowStatus: TypeAlias = Literal["Not Started", "In Progress", "Shipped"]

# Store keys. Values match the blobs written by earlier builds of the product.
RESUME_STORAGE_KEY: Final[str] = "resumeBuilderData"
TEMPLATE_STORAGE_KEY: Final[str] = "resumeBuilderTemplate"
PROOF_LINKS_KEY: Final[str] = "rb_proof_links"
ARTIFACT_KEY_PREFIX: Final[str] = "rb_step"

TEMPLATE_OPTIONS: Final[tuple[TemplateName, ...]] = ("Classic", "Modern", "Minimal")
DEFAULT_TEMPLATE: Final[TemplateName] = "Classic"

PROOF_ROUTE: Final[str] = "/rb/proof"
SUBMISSION_HEADER: Final[str] = "Resume Builder - Build Track Final Submission"
INCOMPLETE_WARNING: Final[str] = "Your resume may look incomplete."


def artifact_key(stage_ordinal: int) -> str:
    """Store key for a stage's committed artifact."""
    return f"{ARTIFACT_KEY_PREFIX}_{stage_ordinal}_artifact"
