# -*- coding: utf-8 -*-
"""
Submission models - typed aggregates of the wizard flows.

One frozen dataclass per flow with one field per step slot. Constructing an
instance requires every slot, so a built submission is complete by type.
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class PropertyCreationSubmission:
    """POST /properties body: basic data, location, images, facilities & rules."""

    step1: Dict[str, Any]
    step2: Dict[str, Any]
    step3: Dict[str, Any]
    step4: Dict[str, Any]

    @property
    def name(self) -> str:
        return self.step1.get("name", "")

    def to_dict(self) -> dict:
        """Convert to the API request body."""
        return {
            "step1": self.step1,
            "step2": self.step2,
            "step3": self.step3,
            "step4": self.step4,
        }


@dataclass(frozen=True)
class RoomCreationSubmission:
    """POST /rooms body: rooms of an existing property."""

    property_id: str
    step1: Dict[str, Any]
    step2: Dict[str, Any]
    step3: Dict[str, Any]
    step4: Dict[str, Any]

    def to_dict(self) -> dict:
        return {
            "propertyId": self.property_id,
            "step1": self.step1,
            "step2": self.step2,
            "step3": self.step3,
            "step4": self.step4,
        }


@dataclass(frozen=True)
class RoomTypeCreationSubmission:
    """
    Room type added to an existing property.

    The room-types endpoint takes one flat object, so the slots are merged
    in order (later steps win on duplicate keys).
    """

    property_id: str
    step1: Dict[str, Any]
    step2: Dict[str, Any]
    step3: Dict[str, Any]
    step4: Dict[str, Any]
    step5: Dict[str, Any]

    def to_dict(self) -> dict:
        payload: Dict[str, Any] = {}
        for slot in (self.step1, self.step2, self.step3, self.step4, self.step5):
            payload.update(slot)
        return payload
