"""Stage gating: unlock prefix, navigation resolution, and commit legality.

Stage ``k`` is unlocked iff stages ``1..k-1`` all carry a committed artifact.
The first incomplete stage ``f`` is the single pointer every redirect targets;
once no stage is incomplete the terminal proof state becomes reachable.
Re-committing an earlier stage never reopens later ones.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Literal, Optional, Tuple

from ..contracts import PROOF_ROUTE, WorkflowStatus
from .artifacts import ArtifactOutcome, ArtifactStore, StepArtifact
from .steps import BuildStep, step_by_ordinal, step_for_route

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Destination:
    """Where navigation lands. ``redirected`` marks a request that was rewritten."""

    kind: Literal["stage", "proof"]
    ordinal: Optional[int] = None
    route: str = PROOF_ROUTE
    redirected: bool = False

    @property
    def is_proof(self) -> bool:
        return self.kind == "proof"


class WorkflowStateMachine:
    def __init__(self, artifacts: ArtifactStore) -> None:
        self.artifacts = artifacts
        self.steps: Tuple[BuildStep, ...] = artifacts.steps

    # -- queries -------------------------------------------------------------

    def first_incomplete(self) -> Optional[int]:
        """Lowest ordinal without a committed artifact, or ``None`` when all are done."""
        for step in self.steps:
            if not self.artifacts.is_committed(step.ordinal):
                return step.ordinal
        return None

    def is_complete(self) -> bool:
        return self.first_incomplete() is None

    def unlock_threshold(self) -> int:
        """Highest unlocked ordinal: ``f``, or ``N`` once everything is committed."""
        first = self.first_incomplete()
        return len(self.steps) if first is None else first

    def unlock_frontier(self) -> int:
        """Highest ordinal of the fully committed prefix (``f - 1``, or ``N``)."""
        first = self.first_incomplete()
        return len(self.steps) if first is None else first - 1

    def unlocked_ordinals(self) -> List[int]:
        threshold = self.unlock_threshold()
        return [step.ordinal for step in self.steps if step.ordinal <= threshold]

    def is_unlocked(self, ordinal: int) -> bool:
        return step_by_ordinal(ordinal, self.steps) is not None and ordinal <= self.unlock_threshold()

    def completed_count(self) -> int:
        return sum(1 for step in self.steps if self.artifacts.is_committed(step.ordinal))

    def status(self) -> WorkflowStatus:
        completed = self.completed_count()
        if completed == 0:
            return "Not Started"
        if completed == len(self.steps):
            return "Shipped"
        return "In Progress"

    def stage_statuses(self) -> List[Tuple[BuildStep, bool]]:
        return [(step, self.artifacts.is_committed(step.ordinal)) for step in self.steps]

    # -- navigation ----------------------------------------------------------

    def resolve_stage(self, ordinal: int) -> Destination:
        """Where a request for stage *ordinal* actually lands.

        Ordinals past the last stage behave like any locked stage: they land on
        the first incomplete stage, or on the proof state once all are done.
        Ordinals below 1 land on stage 1.
        """
        if ordinal > self.steps[-1].ordinal:
            logger.debug("Stage %s is past the last stage", ordinal)
            destination = self.resolve_proof()
            return replace(destination, redirected=True)

        step = step_by_ordinal(ordinal, self.steps)
        if step is None:
            logger.debug("Unknown stage %s, sending to stage 1", ordinal)
            return self._stage(self.steps[0], redirected=True)

        first = self.first_incomplete()
        if first is not None and ordinal > first:
            logger.debug("Stage %s is locked, redirecting to stage %s", ordinal, first)
            return self._stage(self._step(first), redirected=True)
        return self._stage(step)

    def resolve_proof(self) -> Destination:
        first = self.first_incomplete()
        if first is not None:
            logger.debug("Proof requested with stage %s pending, redirecting", first)
            return self._stage(self._step(first), redirected=True)
        return Destination(kind="proof")

    def resolve_route(self, route: str) -> Destination:
        """Resolve a route-like identifier (full path or slug)."""
        cleaned = route.strip().rstrip("/")
        if cleaned in (PROOF_ROUTE, PROOF_ROUTE.rsplit("/", 1)[-1]):
            return self.resolve_proof()
        step = step_for_route(cleaned, self.steps)
        if step is None:
            return self._stage(self.steps[0], redirected=True)
        return self.resolve_stage(step.ordinal)

    def next_destination(self, ordinal: int) -> Optional[Destination]:
        """Next stop after *ordinal*; only available once that stage is committed."""
        if not self.artifacts.is_committed(ordinal):
            return None
        following = step_by_ordinal(ordinal + 1, self.steps)
        if following is None:
            return self.resolve_proof()
        return self.resolve_stage(following.ordinal)

    def previous_destination(self, ordinal: int) -> Optional[Destination]:
        previous = step_by_ordinal(ordinal - 1, self.steps)
        return self._stage(previous) if previous is not None else None

    # -- commands ------------------------------------------------------------

    def commit(
        self,
        ordinal: int,
        notes: str = "",
        outcome: ArtifactOutcome = ArtifactOutcome.UNSET,
        attachment_name: str = "",
    ) -> Optional[StepArtifact]:
        """Commit evidence for an unlocked stage. Locked or empty commits are no-ops."""
        if not self.is_unlocked(ordinal):
            logger.debug("Ignoring commit for locked stage %s", ordinal)
            return None
        return self.artifacts.commit(ordinal, notes=notes, outcome=outcome, attachment_name=attachment_name)

    @staticmethod
    def _stage(step: BuildStep, redirected: bool = False) -> Destination:
        return Destination(kind="stage", ordinal=step.ordinal, route=step.identifier, redirected=redirected)

    def _step(self, ordinal: int) -> BuildStep:
        step = step_by_ordinal(ordinal, self.steps)
        if step is None:
            raise KeyError(f"No stage with ordinal {ordinal}")
        return step
