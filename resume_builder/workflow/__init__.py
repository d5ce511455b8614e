"""Guided build track: stage table, artifact store, gating state machine."""

from .artifacts import ArtifactOutcome, ArtifactStore, StepArtifact, can_commit, parse_artifact, utc_now_iso
from .state_machine import Destination, WorkflowStateMachine
from .steps import BUILD_STEPS, BuildStep, step_by_ordinal, step_for_route
from .submission import SubmissionLinks, SubmissionLinksStore, format_submission_summary, parse_links

__all__ = [
    "BUILD_STEPS",
    "BuildStep",
    "step_by_ordinal",
    "step_for_route",
    "ArtifactOutcome",
    "ArtifactStore",
    "StepArtifact",
    "can_commit",
    "parse_artifact",
    "utc_now_iso",
    "Destination",
    "WorkflowStateMachine",
    "SubmissionLinks",
    "SubmissionLinksStore",
    "format_submission_summary",
    "parse_links",
]
