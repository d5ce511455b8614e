"""Tests for stage gating and navigation."""

import json
import random

import pytest

from resume_builder.contracts import PROOF_ROUTE, artifact_key
from resume_builder.workflow import BUILD_STEPS, ArtifactOutcome, ArtifactStore, WorkflowStateMachine

N = len(BUILD_STEPS)


@pytest.fixture
def machine(memory_store, fixed_clock):
    return WorkflowStateMachine(ArtifactStore(memory_store, clock=fixed_clock))


def _commit_through(machine, last):
    for ordinal in range(1, last + 1):
        assert machine.commit(ordinal, notes=f"stage {ordinal}") is not None


class TestQueries:
    def test_fresh_state(self, machine):
        assert machine.first_incomplete() == 1
        assert machine.unlock_threshold() == 1
        assert machine.unlock_frontier() == 0
        assert machine.unlocked_ordinals() == [1]
        assert machine.status() == "Not Started"
        assert not machine.is_complete()

    def test_partial_progress(self, machine):
        _commit_through(machine, 3)
        assert machine.first_incomplete() == 4
        assert machine.unlocked_ordinals() == [1, 2, 3, 4]
        assert machine.unlock_frontier() == 3
        assert machine.completed_count() == 3
        assert machine.status() == "In Progress"

    def test_all_committed(self, machine):
        _commit_through(machine, N)
        assert machine.first_incomplete() is None
        assert machine.unlock_threshold() == N
        assert machine.unlock_frontier() == N
        assert machine.status() == "Shipped"
        assert machine.is_complete()

    def test_missing_stage_lookup_raises(self, machine):
        with pytest.raises(KeyError):
            machine._step(N + 1)

    def test_stage_statuses(self, machine):
        _commit_through(machine, 2)
        statuses = [(step.ordinal, done) for step, done in machine.stage_statuses()]
        assert statuses[:3] == [(1, True), (2, True), (3, False)]
        assert len(statuses) == N

    def test_gap_from_an_earlier_build(self, memory_store):
        # Stage 3 committed while stage 2 is missing.
        for ordinal in (1, 3):
            memory_store.set(artifact_key(ordinal), json.dumps({"committedAt": "2026-01-01T00:00:00Z"}))
        machine = WorkflowStateMachine(ArtifactStore(memory_store))
        assert machine.first_incomplete() == 2
        assert machine.unlocked_ordinals() == [1, 2]
        assert machine.completed_count() == 2
        assert machine.resolve_stage(3).ordinal == 2


class TestNavigation:
    def test_locked_stage_redirects_to_first_incomplete(self, machine):
        machine.commit(1, notes="done")
        destination = machine.resolve_stage(3)
        assert destination.ordinal == 2
        assert destination.route == "/rb/02-market"
        assert destination.redirected

    def test_unlocked_stage_is_not_redirected(self, machine):
        machine.commit(1, notes="done")
        for ordinal in (1, 2):
            destination = machine.resolve_stage(ordinal)
            assert destination.ordinal == ordinal
            assert not destination.redirected

    @pytest.mark.parametrize("ordinal", [0, -1])
    def test_ordinal_below_one_goes_to_stage_one(self, machine, ordinal):
        _commit_through(machine, 4)
        destination = machine.resolve_stage(ordinal)
        assert destination.ordinal == 1
        assert destination.redirected

    @pytest.mark.parametrize("ordinal", [N + 1, 42])
    def test_ordinal_past_last_stage_goes_to_first_incomplete(self, machine, ordinal):
        _commit_through(machine, 2)
        destination = machine.resolve_stage(ordinal)
        assert destination.ordinal == 3
        assert destination.redirected

    def test_ordinal_past_last_stage_when_complete_is_proof(self, machine):
        _commit_through(machine, N)
        destination = machine.resolve_stage(N + 1)
        assert destination.is_proof
        assert destination.redirected

    def test_proof_redirects_until_complete(self, machine):
        _commit_through(machine, N - 1)
        destination = machine.resolve_proof()
        assert not destination.is_proof
        assert destination.ordinal == N
        machine.commit(N, outcome=ArtifactOutcome.POSITIVE)
        assert machine.resolve_proof().is_proof

    @pytest.mark.parametrize("route", ["/rb/03-architecture", "03-architecture", "/rb/03-architecture/"])
    def test_resolve_route_forms(self, machine, route):
        _commit_through(machine, 2)
        destination = machine.resolve_route(route)
        assert destination.ordinal == 3
        assert not destination.redirected

    @pytest.mark.parametrize("route", [PROOF_ROUTE, "proof"])
    def test_resolve_proof_route(self, machine, route):
        _commit_through(machine, N)
        assert machine.resolve_route(route).is_proof

    def test_unknown_route(self, machine):
        destination = machine.resolve_route("/rb/99-party")
        assert destination.ordinal == 1
        assert destination.redirected

    def test_next_requires_commit(self, machine):
        assert machine.next_destination(1) is None
        machine.commit(1, notes="done")
        following = machine.next_destination(1)
        assert following.ordinal == 2
        assert not following.redirected

    def test_next_after_last_stage_is_proof(self, machine):
        _commit_through(machine, N)
        assert machine.next_destination(N).is_proof

    def test_previous(self, machine):
        assert machine.previous_destination(1) is None
        assert machine.previous_destination(3).ordinal == 2


class TestCommitGating:
    def test_locked_commit_is_a_noop(self, machine):
        assert machine.commit(3, notes="too early") is None
        assert not machine.artifacts.is_committed(3)

    def test_recommit_does_not_reopen_or_relock(self, machine):
        _commit_through(machine, 3)
        machine.commit(1, notes="revised")
        assert machine.unlock_threshold() == 4
        assert machine.completed_count() == 3

    @pytest.mark.parametrize("seed", range(25))
    def test_unlocked_set_is_always_a_prefix(self, memory_store, seed):
        rng = random.Random(seed)
        machine = WorkflowStateMachine(ArtifactStore(memory_store))
        for _ in range(40):
            ordinal = rng.randint(0, N + 1)
            notes = rng.choice(["", "evidence"])
            machine.commit(ordinal, notes=notes)

            threshold = machine.unlock_threshold()
            assert machine.unlocked_ordinals() == list(range(1, threshold + 1))
            committed = [o for o in range(1, N + 1) if machine.artifacts.is_committed(o)]
            assert committed == list(range(1, len(committed) + 1))
            for k in range(0, N + 2):
                assert machine.resolve_stage(k).redirected is not (1 <= k <= threshold)
