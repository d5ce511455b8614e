"""Per-stage evidence records and the store that holds them."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..contracts import artifact_key
from ..storage import KeyValueStore, read_json, write_json
from .steps import BUILD_STEPS, BuildStep

logger = logging.getLogger(__name__)


def utc_now_iso() -> str:
    """Return current UTC time in ISO-8601 format."""
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


class ArtifactOutcome(str, Enum):
    UNSET = ""
    POSITIVE = "worked"
    NEGATIVE = "error"


class StepArtifact(BaseModel):
    """Evidence for one stage. Without ``committed_at`` the stage is incomplete."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    notes: str = ""
    outcome: ArtifactOutcome = ArtifactOutcome.UNSET
    attachment_name: str = ""
    committed_at: Optional[str] = None

    @property
    def is_committed(self) -> bool:
        return bool(self.committed_at)

    def to_storage(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


def can_commit(notes: str, outcome: ArtifactOutcome, attachment_name: str) -> bool:
    """The commit action is enabled once any of the three inputs is filled in."""
    return bool(notes.strip()) or outcome != ArtifactOutcome.UNSET or bool(attachment_name)


def parse_artifact(raw: Any) -> Optional[StepArtifact]:
    """Read a stored artifact; unusable payloads read as "no artifact".

    Records written by earlier builds used ``status``, ``screenshotName`` and
    ``uploadedAt``; those keys are accepted as fallbacks.
    """
    if not isinstance(raw, dict):
        return None

    def pick(key: str, legacy: str) -> Any:
        return raw[key] if key in raw else raw.get(legacy)

    outcome_raw = pick("outcome", "status")
    try:
        outcome = ArtifactOutcome(outcome_raw)
    except (TypeError, ValueError):
        outcome = ArtifactOutcome.UNSET

    notes = raw.get("notes")
    attachment = pick("attachmentName", "screenshotName")
    committed_at = pick("committedAt", "uploadedAt")
    return StepArtifact(
        notes=notes if isinstance(notes, str) else "",
        outcome=outcome,
        attachment_name=attachment if isinstance(attachment, str) else "",
        committed_at=committed_at if isinstance(committed_at, str) and committed_at else None,
    )


class ArtifactStore:
    """One artifact slot per stage, mirrored to the key-value store.

    The in-memory map is authoritative for the session. Each commit replaces
    the whole record; a failed store write is logged and does not roll back.
    """

    def __init__(
        self,
        store: KeyValueStore,
        steps: Tuple[BuildStep, ...] = BUILD_STEPS,
        clock: Callable[[], str] = utc_now_iso,
    ) -> None:
        self._store = store
        self.steps = steps
        self._clock = clock
        self._artifacts: Dict[int, Optional[StepArtifact]] = {
            step.ordinal: parse_artifact(read_json(store, artifact_key(step.ordinal))) for step in steps
        }

    def get(self, ordinal: int) -> Optional[StepArtifact]:
        return self._artifacts.get(ordinal)

    def all(self) -> Dict[int, Optional[StepArtifact]]:
        return dict(self._artifacts)

    def is_committed(self, ordinal: int) -> bool:
        artifact = self._artifacts.get(ordinal)
        return artifact is not None and artifact.is_committed

    def commit(
        self,
        ordinal: int,
        notes: str = "",
        outcome: ArtifactOutcome = ArtifactOutcome.UNSET,
        attachment_name: str = "",
    ) -> Optional[StepArtifact]:
        """Stamp and store a new artifact for *ordinal*.

        Returns ``None`` without touching anything when the inputs are all
        empty or the ordinal is not part of the stage table.
        """
        if ordinal not in self._artifacts:
            logger.debug("Ignoring commit for unknown stage %s", ordinal)
            return None
        if not can_commit(notes, outcome, attachment_name):
            logger.debug("Ignoring empty commit for stage %s", ordinal)
            return None

        artifact = StepArtifact(
            notes=notes,
            outcome=outcome,
            attachment_name=attachment_name,
            committed_at=self._clock(),
        )
        self._artifacts[ordinal] = artifact
        try:
            write_json(self._store, artifact_key(ordinal), artifact.to_storage())
        except OSError as e:
            logger.warning("Failed to persist artifact for stage %s: %s", ordinal, e)
        logger.info("Committed artifact for stage %s", ordinal)
        return artifact

    def reload(self) -> None:
        """Re-read every slot from the store."""
        for step in self.steps:
            self._artifacts[step.ordinal] = parse_artifact(read_json(self._store, artifact_key(step.ordinal)))
