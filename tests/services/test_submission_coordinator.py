# -*- coding: utf-8 -*-
"""
Tests for the Submission Coordinator.

Tests cover:
- Incomplete aggregates never reach the backend
- Remote failures keep persisted data
- Success clears the whole flow
- Structured validation errors
"""

from dataclasses import dataclass
from typing import Any, Dict

import pytest

from repositories.form_persistence import step_key, draft_key
from services.exceptions import ApiException, NetworkException
from services.wizard.flow_definition import FlowDefinition, StepSpec
from services.wizard.flows import PROPERTY_CREATION_FLOW, ROOM_CREATION_FLOW
from services.wizard.submission_coordinator import SubmissionCoordinator, SubmissionOutcome

FLOW = PROPERTY_CREATION_FLOW.key


@dataclass(frozen=True)
class SingleSlotSubmission:
    step1: Dict[str, Any]

    def to_dict(self) -> dict:
        return {"step1": self.step1}


AGGREGATE = {
    "step1": {"name": "Kos Mawar", "totalRooms": 10, "availableRooms": 10},
    "step2": {"location": {"fullAddress": "Jl. Mawar 12"}},
    "step3": {"images": {"buildingPhotos": ["a.jpg"], "sharedFacilitiesPhotos": [], "floorPlanPhotos": []}},
    "step4": {"facilities": [{"id": "wifi", "name": "WiFi", "category": "property"}],
              "rules": [{"id": "jam_malam", "name": "Jam malam"}]},
}


@pytest.fixture
def stored(persistence):
    """Persist all four property steps plus the pointer."""
    for n in range(1, 5):
        persistence.save(step_key(FLOW, n), {"n": n})
    persistence.save(draft_key(FLOW, 1), {"name": "Ko"})
    persistence.save_current_step(FLOW, 3)
    return persistence


def coordinator_for(backend, persistence, **kwargs):
    return SubmissionCoordinator(PROPERTY_CREATION_FLOW, backend, persistence, **kwargs)


class TestIncomplete:
    """Test local precondition failures."""

    def test_missing_step_rejected_locally(self, backend, stored):
        aggregate = {k: v for k, v in AGGREGATE.items() if k != "step4"}

        result = coordinator_for(backend, stored).submit(aggregate)

        assert result.outcome == SubmissionOutcome.INCOMPLETE
        assert result.missing_steps == ["step4"]
        assert "step4" in result.message
        assert "Fasilitas & Peraturan" in result.message
        assert backend.calls == []
        for n in range(1, 5):
            assert stored.load(step_key(FLOW, n)).data == {"n": n}

    def test_storage_diagnosis_is_opt_in(self, backend, stored):
        aggregate = {"step1": AGGREGATE["step1"]}

        plain = coordinator_for(backend, stored).submit(aggregate)
        diagnosed = coordinator_for(backend, stored, diagnose_storage=True).submit(aggregate)

        assert plain.stored_data_detected is False
        assert diagnosed.stored_data_detected is True
        assert "penyimpanan" in diagnosed.message
        assert "step4 (Fasilitas & Peraturan)" in diagnosed.message
        assert diagnosed.missing_steps == ["step2", "step3", "step4"]

    def test_storage_diagnosis_only_checks_missing_steps(self, backend, persistence):
        for n in range(1, 4):
            persistence.save(step_key(FLOW, n), {"n": n})
        aggregate = {k: v for k, v in AGGREGATE.items() if k != "step4"}

        result = coordinator_for(backend, persistence, diagnose_storage=True).submit(aggregate)

        assert result.stored_data_detected is False
        assert result.missing_steps == ["step4"]
        assert "step4 (Fasilitas & Peraturan)" in result.message
        assert "penyimpanan" not in result.message

    def test_submission_type_mismatch_is_local_failure(self, backend, persistence):
        flow = FlowDefinition(
            key="single-slot",
            steps=(StepSpec("first", "flow.property.step.basic_data"),
                   StepSpec("second", "flow.property.step.location")),
            submission_type=SingleSlotSubmission,
        )

        result = SubmissionCoordinator(flow, backend, persistence).submit({"step1": {}, "step2": {}})

        assert result.outcome == SubmissionOutcome.INCOMPLETE
        assert isinstance(result.error, TypeError)
        assert backend.calls == []

    def test_missing_extra_field(self, backend, persistence):
        coordinator = SubmissionCoordinator(ROOM_CREATION_FLOW, backend, persistence)

        result = coordinator.submit({f"step{i}": {} for i in range(1, 5)})

        assert result.outcome == SubmissionOutcome.INCOMPLETE
        assert backend.calls == []


class TestRemoteFailure:
    """Test backend failures."""

    def test_network_error_keeps_snapshots(self, backend_factory, stored):
        backend = backend_factory(error=NetworkException("down", original_error=ConnectionError("refused")))

        result = coordinator_for(backend, stored).submit(AGGREGATE)

        assert result.outcome == SubmissionOutcome.REMOTE_FAILURE
        assert isinstance(result.error, NetworkException)
        assert result.message
        assert len(backend.calls) == 1
        for n in range(1, 5):
            assert stored.load(step_key(FLOW, n)).data == {"n": n}
        assert stored.load_current_step(FLOW) == 3

    def test_structured_details_are_surfaced(self, backend_factory, stored):
        error = ApiException("Validation failed", status_code=400, response_data={
            "error": "Validation failed",
            "details": [
                {"path": ["step1", "name"], "message": "Required"},
                {"path": ["step2", "location", "latitude"], "message": "Expected number"},
            ],
        })
        backend = backend_factory(error=error)

        result = coordinator_for(backend, stored).submit(AGGREGATE)

        assert result.field_errors == [
            "• step1.name: Required",
            "• step2.location.latitude: Expected number",
        ]
        assert "step1.name: Required" in result.message

    def test_success_false_response_is_failure(self, backend_factory, stored):
        backend = backend_factory(response={"success": False, "error": "Gagal membuat properti"})

        result = coordinator_for(backend, stored).submit(AGGREGATE)

        assert result.outcome == SubmissionOutcome.REMOTE_FAILURE
        assert result.message == "Gagal membuat properti"
        assert stored.has(step_key(FLOW, 1))

    def test_unexpected_error_is_reported(self, backend_factory, stored):
        backend = backend_factory(error=RuntimeError("boom"))

        result = coordinator_for(backend, stored).submit(AGGREGATE)

        assert result.outcome == SubmissionOutcome.REMOTE_FAILURE
        assert result.field_errors == []


class TestSuccess:
    """Test successful submission."""

    def test_success_clears_flow(self, backend, stored):
        stored.save("room-creation-step-1", {"other": "flow"})

        result = coordinator_for(backend, stored).submit(AGGREGATE)

        assert result.success
        assert result.response == backend.response
        assert backend.calls == [AGGREGATE]
        for n in range(1, 5):
            assert stored.load(step_key(FLOW, n)) is None
        assert stored.load(draft_key(FLOW, 1)) is None
        assert stored.load_current_step(FLOW) is None
        assert stored.has("room-creation-step-1")

    def test_room_body_includes_property_id(self, backend, persistence):
        coordinator = SubmissionCoordinator(ROOM_CREATION_FLOW, backend, persistence)

        result = coordinator.submit({f"step{i}": {"i": i} for i in range(1, 5)}, {"property_id": "p-7"})

        assert result.success
        assert backend.calls[0]["propertyId"] == "p-7"
