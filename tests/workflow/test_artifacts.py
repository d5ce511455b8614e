"""Tests for stage artifacts and their store."""

import json

import pytest

from resume_builder.contracts import artifact_key
from resume_builder.storage import InMemoryKeyValueStore
from resume_builder.workflow import ArtifactOutcome, ArtifactStore, StepArtifact, can_commit, parse_artifact


class FailingStore(InMemoryKeyValueStore):
    def set(self, key, value):
        raise OSError("disk full")


class TestCanCommit:
    @pytest.mark.parametrize(
        "notes,outcome,attachment,expected",
        [
            ("", ArtifactOutcome.UNSET, "", False),
            ("   ", ArtifactOutcome.UNSET, "", False),
            ("done", ArtifactOutcome.UNSET, "", True),
            ("", ArtifactOutcome.NEGATIVE, "", True),
            ("", ArtifactOutcome.UNSET, "shot.png", True),
        ],
    )
    def test_any_input_enables_commit(self, notes, outcome, attachment, expected):
        assert can_commit(notes, outcome, attachment) is expected


class TestParseArtifact:
    @pytest.mark.parametrize("raw", [None, "x", 3, ["a"]])
    def test_non_object_is_absent(self, raw):
        assert parse_artifact(raw) is None

    def test_current_keys(self):
        artifact = parse_artifact(
            {"notes": "n", "outcome": "worked", "attachmentName": "a.png", "committedAt": "2026-01-01T00:00:00Z"}
        )
        assert artifact == StepArtifact(
            notes="n",
            outcome=ArtifactOutcome.POSITIVE,
            attachment_name="a.png",
            committed_at="2026-01-01T00:00:00Z",
        )
        assert artifact.is_committed

    def test_legacy_keys(self):
        artifact = parse_artifact({"status": "error", "screenshotName": "s.png", "uploadedAt": "2025-05-05T10:00:00Z"})
        assert artifact.outcome is ArtifactOutcome.NEGATIVE
        assert artifact.attachment_name == "s.png"
        assert artifact.committed_at == "2025-05-05T10:00:00Z"

    def test_without_timestamp_is_not_committed(self):
        artifact = parse_artifact({"notes": "draft"})
        assert artifact is not None
        assert not artifact.is_committed

    def test_unknown_outcome_reads_as_unset(self):
        assert parse_artifact({"outcome": "maybe"}).outcome is ArtifactOutcome.UNSET
        assert parse_artifact({"outcome": ["worked"]}).outcome is ArtifactOutcome.UNSET


class TestArtifactStore:
    def test_commit_stamps_and_persists(self, memory_store, fixed_clock):
        store = ArtifactStore(memory_store, clock=fixed_clock)
        artifact = store.commit(1, notes="Problem statement")
        assert artifact.committed_at == "2026-01-01T00:00:01Z"
        assert store.is_committed(1)
        persisted = json.loads(memory_store.get(artifact_key(1)))
        assert persisted == {
            "notes": "Problem statement",
            "outcome": "",
            "attachmentName": "",
            "committedAt": "2026-01-01T00:00:01Z",
        }

    def test_empty_commit_is_a_noop(self, memory_store):
        store = ArtifactStore(memory_store)
        assert store.commit(1, notes="  ") is None
        assert not store.is_committed(1)
        assert memory_store.get(artifact_key(1)) is None

    def test_unknown_stage_is_a_noop(self, memory_store):
        assert ArtifactStore(memory_store).commit(99, notes="x") is None
        assert len(memory_store) == 0

    def test_recommit_replaces_record(self, memory_store, fixed_clock):
        store = ArtifactStore(memory_store, clock=fixed_clock)
        store.commit(2, attachment_name="first.png")
        store.commit(2, outcome=ArtifactOutcome.POSITIVE)
        artifact = store.get(2)
        assert artifact.attachment_name == ""
        assert artifact.outcome is ArtifactOutcome.POSITIVE
        assert artifact.committed_at == "2026-01-01T00:00:02Z"

    def test_loads_existing_records(self, memory_store, fixed_clock):
        ArtifactStore(memory_store, clock=fixed_clock).commit(1, notes="a")
        reopened = ArtifactStore(memory_store)
        assert reopened.is_committed(1)
        assert not reopened.is_committed(2)

    def test_corrupt_record_reads_as_absent(self):
        store = ArtifactStore(InMemoryKeyValueStore({artifact_key(1): "{not json"}))
        assert store.get(1) is None

    def test_write_failure_keeps_memory_state(self, caplog):
        store = ArtifactStore(FailingStore())
        artifact = store.commit(1, notes="n")
        assert artifact is not None
        assert store.is_committed(1)
        assert "Failed to persist artifact" in caplog.text

    def test_reload_picks_up_external_changes(self, memory_store):
        store = ArtifactStore(memory_store)
        memory_store.set(artifact_key(3), json.dumps({"uploadedAt": "2026-02-02T00:00:00Z"}))
        assert not store.is_committed(3)
        store.reload()
        assert store.is_committed(3)
