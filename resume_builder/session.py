"""Editing session - binds the live draft and template choice to a store."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from pydantic import BaseModel

from .contracts import (
    DEFAULT_TEMPLATE,
    INCOMPLETE_WARNING,
    RESUME_STORAGE_KEY,
    TEMPLATE_OPTIONS,
    TEMPLATE_STORAGE_KEY,
    TemplateName,
)
from .domain import (
    AtsResult,
    RenderSection,
    ResumeDraft,
    add_entry,
    coerce_template,
    normalize_draft,
    remove_entry,
    sample_draft,
    score_draft,
    set_field,
    set_skills,
    should_warn_incomplete,
    to_plain_text,
    to_structured_sections,
    top_improvements,
    update_entry,
)
from .errors import BuilderError
from .storage import KeyValueStore, read_json, write_json

logger = logging.getLogger(__name__)


@dataclass
class ExportPayload:
    """Text handed to clipboard/print, plus the warning shown alongside it."""

    text: str
    warning: Optional[str] = None


def read_template(store: KeyValueStore, default: str = DEFAULT_TEMPLATE) -> TemplateName:
    """Stored template choice; bare strings from earlier builds are accepted."""
    raw = store.get(TEMPLATE_STORAGE_KEY)
    if raw is None:
        return coerce_template(default)
    try:
        value = json.loads(raw)
    except (ValueError, RecursionError):
        value = raw
    return coerce_template(value)


class BuilderSession:
    """The single mutator of a draft.

    Every edit is applied in memory first and then mirrored to the store. A
    failing store is logged and otherwise ignored; the in-memory draft stays
    the source of truth for the session.
    """

    def __init__(self, store: KeyValueStore, default_template: str = DEFAULT_TEMPLATE) -> None:
        self.store = store
        self.default_template = default_template
        self.draft: ResumeDraft = normalize_draft(read_json(store, RESUME_STORAGE_KEY))
        self.template: TemplateName = read_template(store, default_template)

    # -- persistence ---------------------------------------------------------

    def save(self) -> None:
        try:
            write_json(self.store, RESUME_STORAGE_KEY, self.draft.to_storage())
        except OSError as e:
            logger.warning("Failed to persist draft: %s", e)

    def reload(self) -> ResumeDraft:
        self.draft = normalize_draft(read_json(self.store, RESUME_STORAGE_KEY))
        self.template = read_template(self.store, self.default_template)
        return self.draft

    # -- edits ---------------------------------------------------------------

    def set_field(self, field_name: str, value: str) -> None:
        set_field(self.draft, field_name, value)
        self.save()

    def add_entry(self, section: str) -> BaseModel:
        entry = add_entry(self.draft, section)
        self.save()
        return entry

    def update_entry(self, section: str, entry_id: str, field_name: str, value: Union[str, List[str]]) -> BaseModel:
        entry = update_entry(self.draft, section, entry_id, field_name, value)
        self.save()
        return entry

    def remove_entry(self, section: str, entry_id: str) -> None:
        remove_entry(self.draft, section, entry_id)
        self.save()

    def set_skills(self, category: str, text: str) -> List[str]:
        skills = set_skills(self.draft, category, text)
        self.save()
        return skills

    def load_sample(self) -> ResumeDraft:
        self.draft = sample_draft()
        self.save()
        return self.draft

    def clear(self) -> ResumeDraft:
        self.draft = ResumeDraft()
        try:
            self.store.remove(RESUME_STORAGE_KEY)
        except OSError as e:
            logger.warning("Failed to remove stored draft: %s", e)
        return self.draft

    def set_template(self, template: str) -> TemplateName:
        if template not in TEMPLATE_OPTIONS:
            raise BuilderError(
                "UNKNOWN_TEMPLATE",
                f"Unknown template '{template}'",
                {"allowed": list(TEMPLATE_OPTIONS)},
            )
        self.template = coerce_template(template)
        try:
            write_json(self.store, TEMPLATE_STORAGE_KEY, self.template)
        except OSError as e:
            logger.warning("Failed to persist template choice: %s", e)
        return self.template

    # -- projections ---------------------------------------------------------

    def score(self) -> AtsResult:
        return score_draft(self.draft)

    def top_improvements(self) -> List[str]:
        return top_improvements(self.score())

    def sections(self) -> List[RenderSection]:
        return to_structured_sections(self.draft, self.template)

    def export_text(self) -> ExportPayload:
        """Plain-text export for copy/print; warns (but proceeds) on a thin draft."""
        warning = INCOMPLETE_WARNING if should_warn_incomplete(self.draft) else None
        return ExportPayload(text=to_plain_text(self.draft), warning=warning)
