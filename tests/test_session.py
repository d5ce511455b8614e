"""Tests for the editing session and its persistence."""

import json

import pytest

from resume_builder.contracts import INCOMPLETE_WARNING, RESUME_STORAGE_KEY, TEMPLATE_STORAGE_KEY
from resume_builder.errors import BuilderError
from resume_builder.session import BuilderSession, read_template
from resume_builder.storage import InMemoryKeyValueStore


class FailingStore(InMemoryKeyValueStore):
    def set(self, key, value):
        raise OSError("read-only")

    def remove(self, key):
        raise OSError("read-only")


class TestLoad:
    def test_empty_store_gives_blank_draft(self, memory_store):
        session = BuilderSession(memory_store)
        assert session.draft.name == ""
        assert session.template == "Classic"

    def test_legacy_payload_is_normalized(self):
        raw = {"name": "Ada", "skills": "Python, SQL", "experience": [{"company": "Acme"}]}
        session = BuilderSession(InMemoryKeyValueStore({RESUME_STORAGE_KEY: json.dumps(raw)}))
        assert session.draft.technical_skills == ["Python", "SQL"]
        assert session.draft.experience[0].bullet == ""

    def test_corrupt_payload_gives_blank_draft(self):
        session = BuilderSession(InMemoryKeyValueStore({RESUME_STORAGE_KEY: "not json"}))
        assert session.draft.name == ""
        assert len(session.draft.projects) == 1

    def test_deeply_nested_payload_gives_blank_draft(self):
        nested = "[" * 100000 + "]" * 100000
        store = InMemoryKeyValueStore({RESUME_STORAGE_KEY: nested, TEMPLATE_STORAGE_KEY: nested})
        session = BuilderSession(store)
        assert session.draft.name == ""
        assert session.template == "Classic"

    def test_default_template_from_config(self, memory_store):
        assert BuilderSession(memory_store, default_template="Minimal").template == "Minimal"


class TestEdits:
    def test_every_edit_is_persisted(self, memory_store):
        session = BuilderSession(memory_store)
        session.set_field("name", "Ada")
        entry = session.add_entry("projects")
        session.update_entry("projects", entry.id, "title", "Note G")
        session.set_skills("tools", "Git, Make")

        reopened = BuilderSession(memory_store)
        assert reopened.draft.name == "Ada"
        assert reopened.draft.projects[-1].title == "Note G"
        assert reopened.draft.tools_technologies == ["Git", "Make"]

    def test_remove_entry_persists(self, memory_store):
        session = BuilderSession(memory_store)
        entry_id = session.draft.education[0].id
        session.remove_entry("education", entry_id)
        stored = json.loads(memory_store.get(RESUME_STORAGE_KEY))
        assert len(stored["education"]) == 1
        assert stored["education"][0]["id"] != entry_id

    def test_load_sample(self, memory_store):
        session = BuilderSession(memory_store)
        session.load_sample()
        assert session.score().score == 80
        assert BuilderSession(memory_store).draft.name == session.draft.name

    def test_clear_removes_stored_draft(self, memory_store):
        session = BuilderSession(memory_store)
        session.load_sample()
        session.clear()
        assert memory_store.get(RESUME_STORAGE_KEY) is None
        assert session.draft.name == ""

    def test_edit_errors_propagate(self, memory_store):
        with pytest.raises(BuilderError):
            BuilderSession(memory_store).set_field("hobbies", "chess")

    def test_store_failure_keeps_edit_in_memory(self, caplog):
        session = BuilderSession(FailingStore())
        session.set_field("name", "Ada")
        session.clear()
        assert session.draft.name == ""
        assert "Failed to persist draft" in caplog.text
        assert "Failed to remove stored draft" in caplog.text


class TestTemplate:
    def test_set_template_persists_json_string(self, memory_store):
        BuilderSession(memory_store).set_template("Modern")
        assert memory_store.get(TEMPLATE_STORAGE_KEY) == '"Modern"'
        assert BuilderSession(memory_store).template == "Modern"

    def test_unknown_template_rejected(self, memory_store):
        with pytest.raises(BuilderError) as exc:
            BuilderSession(memory_store).set_template("Fancy")
        assert exc.value.code == "UNKNOWN_TEMPLATE"

    @pytest.mark.parametrize(
        "stored,expected",
        [("Minimal", "Minimal"), ('"Modern"', "Modern"), ('"Fancy"', "Classic"), ("42", "Classic")],
    )
    def test_read_template_accepts_bare_and_json(self, stored, expected):
        assert read_template(InMemoryKeyValueStore({TEMPLATE_STORAGE_KEY: stored})) == expected

    def test_template_changes_sidebar_only(self, memory_store, full_draft):
        session = BuilderSession(memory_store)
        session.draft = full_draft
        classic = [(s.kind, s.items) for s in session.sections()]
        session.set_template("Modern")
        assert [(s.kind, s.items) for s in session.sections()] == classic
        assert {s.kind for s in session.sections() if s.column == "sidebar"} == {"skills", "links"}


class TestExport:
    def test_blank_draft_warns_but_exports(self, memory_store):
        payload = BuilderSession(memory_store).export_text()
        assert payload.warning == INCOMPLETE_WARNING
        assert payload.text == "Name\n-\n\nContact\n-"

    def test_full_draft_has_no_warning(self, memory_store, full_draft):
        session = BuilderSession(memory_store)
        session.draft = full_draft
        payload = session.export_text()
        assert payload.warning is None
        assert payload.text.startswith("Name\nAda Lovelace")

    def test_top_improvements(self, memory_store):
        assert BuilderSession(memory_store).top_improvements() == [
            "Add your full name. (+10 points)",
            "Add an email address. (+10 points)",
            "Write a stronger summary (at least 40 words). (+15 points)",
        ]
