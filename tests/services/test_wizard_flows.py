# -*- coding: utf-8 -*-
"""
Tests for the wizard flow declarations.

Tests cover:
- Step metadata and key schema
- Payload shaping of the property creation flow
- Stale data upgrades
- Typed submission building
"""

import pytest

from models.submissions import (
    PropertyCreationSubmission, RoomCreationSubmission, RoomTypeCreationSubmission
)
from services.exceptions import IncompleteAggregateError
from services.wizard.flow_definition import PersistPolicy
from services.wizard.flows import (
    FLOWS, PROPERTY_CREATION_FLOW, ROOM_CREATION_FLOW, ROOM_TYPE_CREATION_FLOW,
    get_flow, make_backend
)
from services.wizard.flows.property_creation import slugify


class TestFlowCatalogue:
    """Test flow metadata."""

    def test_flows_registered(self):
        assert set(FLOWS) == {"property-creation", "room-creation", "room-type-creation"}
        assert get_flow("room-creation") is ROOM_CREATION_FLOW
        with pytest.raises(ValueError):
            get_flow("unknown")

    def test_step_counts(self):
        assert PROPERTY_CREATION_FLOW.step_count == 4
        assert ROOM_CREATION_FLOW.step_count == 4
        assert ROOM_TYPE_CREATION_FLOW.step_count == 5

    def test_property_persist_policies(self):
        policies = [step.persist_policy for step in PROPERTY_CREATION_FLOW.steps]
        assert policies == [
            PersistPolicy.VALID_WITH_DRAFT,
            PersistPolicy.ALWAYS,
            PersistPolicy.VALID_ONLY,
            PersistPolicy.VALID_ONLY,
        ]

    def test_titles_are_translated(self):
        assert PROPERTY_CREATION_FLOW.step_title(0) == "Data Dasar"
        assert ROOM_CREATION_FLOW.step_title(2) == "Harga"


class TestPropertyShaping:
    """Test property creation payload shaping."""

    def test_basic_data_falls_back_to_total_rooms(self):
        payload = PROPERTY_CREATION_FLOW.shape(0, {
            "name": "Kos Mawar", "totalRooms": 12, "availableRooms": 0, "extra": "dropped"
        })

        assert payload["availableRooms"] == 12
        assert "extra" not in payload

    def test_location_is_nested(self):
        payload = PROPERTY_CREATION_FLOW.shape(1, {"fullAddress": "Jl. Mawar 12", "latitude": -7.9})

        assert payload["location"]["fullAddress"] == "Jl. Mawar 12"
        assert payload["location"]["latitude"] == -7.9
        assert payload["location"]["provinceName"] is None

    def test_images_default_to_empty_lists(self):
        payload = PROPERTY_CREATION_FLOW.shape(2, {"buildingPhotos": ["a.jpg"]})

        assert payload == {"images": {
            "buildingPhotos": ["a.jpg"],
            "sharedFacilitiesPhotos": [],
            "floorPlanPhotos": [],
        }}

    def test_facilities_and_rules_resolve_names(self):
        payload = PROPERTY_CREATION_FLOW.shape(3, {
            "propertyFacilities": ["wifi"],
            "parkingFacilities": ["parkir_motor"],
            "customFacilities": ["Kolam Renang"],
            "rules": ["jam_malam", "unknown_rule"],
            "customRules": ["Tidak Boleh Berisik"],
        })

        assert payload["facilities"] == [
            {"id": "wifi", "name": "WiFi / Internet", "category": "property"},
            {"id": "parkir_motor", "name": "Parkir motor", "category": "parking"},
            {"id": "kolam_renang", "name": "Kolam Renang", "category": "property"},
        ]
        assert payload["rules"][1] == {"id": "unknown_rule", "name": "unknown_rule"}
        assert payload["rules"][2]["id"] == "tidak_boleh_berisik"

    def test_empty_facilities_get_defaults(self):
        payload = PROPERTY_CREATION_FLOW.shape(3, {})

        assert payload["facilities"] == [
            {"id": "basic_facility", "name": "Fasilitas Dasar", "category": "property"}
        ]
        assert payload["rules"] == [{"id": "basic_rule", "name": "Peraturan Dasar"}]

    def test_slugify(self):
        assert slugify("  Dapur  Bersih ") == "dapur_bersih"


class TestRoomFlows:
    """Test room flow shaping and upgrades."""

    def test_known_deposit_is_kept(self):
        data = {"depositPercentage": "30_PERCENT"}

        assert ROOM_CREATION_FLOW.shape(2, data) == data
        assert ROOM_CREATION_FLOW.upgrade(2, data) == data

    def test_unknown_deposit_is_dropped(self):
        assert ROOM_CREATION_FLOW.upgrade(2, {"depositPercentage": "FULL", "monthlyPrice": 1}) == {
            "monthlyPrice": 1
        }

    def test_non_dict_payload_is_discarded(self):
        assert ROOM_CREATION_FLOW.upgrade(0, "legacy") is None

    def test_room_type_body_is_flat(self):
        submission = ROOM_TYPE_CREATION_FLOW.build_submission(
            {
                "step1": {"roomType": "Deluxe", "totalRooms": 3},
                "step2": {"size": "3x4"},
                "step3": {"images": ["r.jpg"]},
                "step4": {"facilities": ["ac"]},
                "step5": {"monthlyPrice": 1200000},
            },
            {"property_id": "p-1"},
        )

        assert isinstance(submission, RoomTypeCreationSubmission)
        assert submission.to_dict() == {
            "roomType": "Deluxe", "totalRooms": 3, "size": "3x4",
            "images": ["r.jpg"], "facilities": ["ac"], "monthlyPrice": 1200000,
        }


class TestBuildSubmission:
    """Test typed submission building."""

    def test_complete_aggregate(self):
        aggregate = {f"step{i}": {"n": i} for i in range(1, 5)}

        submission = PROPERTY_CREATION_FLOW.build_submission(aggregate)

        assert isinstance(submission, PropertyCreationSubmission)
        assert submission.to_dict() == aggregate

    def test_missing_slot_raises(self):
        aggregate = {"step1": {}, "step2": {}, "step3": {}}

        with pytest.raises(IncompleteAggregateError) as info:
            PROPERTY_CREATION_FLOW.build_submission(aggregate)

        assert info.value.missing_slots == ["step4"]
        assert info.value.flow_key == "property-creation"

    def test_room_submission_requires_property_id(self):
        aggregate = {f"step{i}": {} for i in range(1, 5)}

        with pytest.raises(ValueError):
            ROOM_CREATION_FLOW.build_submission(aggregate)

        submission = ROOM_CREATION_FLOW.build_submission(aggregate, {"property_id": "p-9"})
        assert isinstance(submission, RoomCreationSubmission)
        assert submission.to_dict()["propertyId"] == "p-9"

    def test_describe_slots(self):
        assert PROPERTY_CREATION_FLOW.describe_slots(["step4"]) == "step4 (Fasilitas & Peraturan)"


class TestMakeBackend:
    """Test binding flows to API client methods."""

    class Client:
        def __init__(self):
            self.calls = []

        def create_property(self, payload):
            self.calls.append(("property", payload))

        def create_rooms(self, payload):
            self.calls.append(("rooms", payload))

        def create_room_type(self, property_id, payload):
            self.calls.append(("room_type", property_id, payload))

    def test_room_type_backend_binds_property(self):
        client = self.Client()

        make_backend(ROOM_TYPE_CREATION_FLOW, client, property_id="p-1")({"a": 1})
        make_backend(PROPERTY_CREATION_FLOW, client)({"b": 2})

        assert client.calls == [("room_type", "p-1", {"a": 1}), ("property", {"b": 2})]

    def test_room_type_backend_needs_property(self):
        with pytest.raises(ValueError):
            make_backend(ROOM_TYPE_CREATION_FLOW, self.Client())
