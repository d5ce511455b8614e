"""Submission links and the final submission summary payload."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..contracts import PROOF_LINKS_KEY, SUBMISSION_HEADER
from ..errors import BuilderError
from ..storage import KeyValueStore, read_json, write_json
from .steps import BuildStep

logger = logging.getLogger(__name__)

# Attribute -> (label in the summary, key used by earlier builds).
LINK_FIELDS: Dict[str, Tuple[str, str]] = {
    "primary_build_link": ("Build", "lovable"),
    "source_repo_link": ("GitHub", "github"),
    "deployed_link": ("Deploy", "deploy"),
}


class SubmissionLinks(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    primary_build_link: str = ""
    source_repo_link: str = ""
    deployed_link: str = ""


def parse_links(raw: Any) -> SubmissionLinks:
    if not isinstance(raw, dict):
        return SubmissionLinks()
    values: Dict[str, str] = {}
    for attribute, (_, legacy_key) in LINK_FIELDS.items():
        value = raw.get(to_camel(attribute), raw.get(legacy_key))
        values[attribute] = value if isinstance(value, str) else ""
    return SubmissionLinks(**values)


class SubmissionLinksStore:
    """Links persist on every single-field edit, independently of artifacts."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store
        self.links = parse_links(read_json(store, PROOF_LINKS_KEY))

    def update(self, field_name: str, value: str) -> SubmissionLinks:
        if field_name not in LINK_FIELDS:
            raise BuilderError(
                "UNKNOWN_FIELD",
                f"Unknown submission link '{field_name}'",
                {"allowed": list(LINK_FIELDS)},
            )
        self.links = self.links.model_copy(update={field_name: value})
        try:
            write_json(self._store, PROOF_LINKS_KEY, self.links.model_dump(by_alias=True))
        except OSError as e:
            logger.warning("Failed to persist submission links: %s", e)
        return self.links


def format_submission_summary(
    stage_statuses: Iterable[Tuple[BuildStep, bool]],
    links: Optional[SubmissionLinks] = None,
) -> str:
    """Literal payload for the "copy final submission" action."""
    links = links or SubmissionLinks()
    lines = [SUBMISSION_HEADER]
    for step, complete in stage_statuses:
        lines.append(f"Stage {step.ordinal} ({step.title}): {'Complete' if complete else 'Pending'}")
    for attribute, (label, _) in LINK_FIELDS.items():
        lines.append(f"{label}: {getattr(links, attribute) or 'N/A'}")
    return "\n".join(lines)
