# -*- coding: utf-8 -*-
"""Room creation flow: photos, facilities, pricing, per-room management."""

from typing import Any, Dict

from app.config import Vocabularies
from models.submissions import RoomCreationSubmission
from services.wizard.flow_definition import FlowDefinition, StepSpec
from utils.logger import get_logger

logger = get_logger(__name__)

FLOW_KEY = "room-creation"


def normalize_deposit(data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop a depositPercentage the rooms API does not know."""
    payload = dict(data)
    value = payload.get("depositPercentage")
    if value is not None and value not in Vocabularies.DEPOSIT_PERCENTAGES:
        logger.warning(f"Unknown depositPercentage value: {value}")
        payload.pop("depositPercentage")
    return payload


ROOM_CREATION_FLOW = FlowDefinition(
    key=FLOW_KEY,
    steps=(
        StepSpec("room-photos", "flow.room.step.photos", "flow.room.step.photos.description"),
        StepSpec("room-facilities", "flow.room.step.facilities", "flow.room.step.facilities.description"),
        StepSpec("room-pricing", "flow.room.step.pricing", "flow.room.step.pricing.description"),
        StepSpec("room-management", "flow.room.step.management", "flow.room.step.management.description"),
    ),
    submission_type=RoomCreationSubmission,
    shapers={"room-pricing": normalize_deposit},
    upgraders={"room-pricing": normalize_deposit},
    extra_fields=("property_id",),
)
