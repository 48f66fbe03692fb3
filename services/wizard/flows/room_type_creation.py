# -*- coding: utf-8 -*-
"""Room type creation flow for an existing property."""

from models.submissions import RoomTypeCreationSubmission
from services.wizard.flow_definition import FlowDefinition, PersistPolicy, StepSpec

FLOW_KEY = "room-type-creation"

ROOM_TYPE_CREATION_FLOW = FlowDefinition(
    key=FLOW_KEY,
    steps=(
        StepSpec(
            "room-type-info",
            "flow.room_type.step.info",
            "flow.room_type.step.info.description",
            PersistPolicy.VALID_WITH_DRAFT,
        ),
        StepSpec(
            "description",
            "flow.room_type.step.description",
            "flow.room_type.step.description.description",
            PersistPolicy.VALID_WITH_DRAFT,
        ),
        StepSpec("photos", "flow.room_type.step.photos", "flow.room_type.step.photos.description"),
        StepSpec("facilities", "flow.room_type.step.facilities", "flow.room_type.step.facilities.description"),
        StepSpec("pricing", "flow.room_type.step.pricing", "flow.room_type.step.pricing.description"),
    ),
    submission_type=RoomTypeCreationSubmission,
    extra_fields=("property_id",),
)
