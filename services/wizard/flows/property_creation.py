# -*- coding: utf-8 -*-
"""
Property creation flow: basic data, location, images, facilities & rules.

Step widgets report flat form data; the shapers below build the nested
objects the properties endpoint expects.
"""

import re
from typing import Any, Dict, List

from app.config import Vocabularies
from models.submissions import PropertyCreationSubmission
from services.wizard.flow_definition import FlowDefinition, PersistPolicy, StepSpec

FLOW_KEY = "property-creation"

BASIC_DATA_FIELDS = (
    "name", "buildYear", "propertyType", "roomTypes",
    "totalRooms", "availableRooms", "description",
)

LOCATION_FIELDS = (
    "provinceName", "regencyName", "districtName",
    "fullAddress", "latitude", "longitude",
)

IMAGE_FIELDS = ("buildingPhotos", "sharedFacilitiesPhotos", "floorPlanPhotos")


def slugify(name: str) -> str:
    """"Kolam Renang" -> "kolam_renang"."""
    return re.sub(r"\s+", "_", name.strip().lower())


def shape_basic_data(data: Dict[str, Any]) -> Dict[str, Any]:
    payload = {name: data.get(name) for name in BASIC_DATA_FIELDS}
    if not payload["availableRooms"]:
        payload["availableRooms"] = payload["totalRooms"]
    return payload


def shape_location(data: Dict[str, Any]) -> Dict[str, Any]:
    return {"location": {name: data.get(name) for name in LOCATION_FIELDS}}


def shape_images(data: Dict[str, Any]) -> Dict[str, Any]:
    return {"images": {name: list(data.get(name) or []) for name in IMAGE_FIELDS}}


def shape_facilities_rules(data: Dict[str, Any]) -> Dict[str, Any]:
    property_names = Vocabularies.lookup(Vocabularies.PROPERTY_FACILITIES)
    parking_names = Vocabularies.lookup(Vocabularies.PARKING_FACILITIES)
    rule_names = Vocabularies.lookup(Vocabularies.PROPERTY_RULES)

    facilities: List[Dict[str, str]] = []
    for code in data.get("propertyFacilities") or []:
        facilities.append({"id": code, "name": property_names.get(code, code), "category": "property"})
    for code in data.get("parkingFacilities") or []:
        facilities.append({"id": code, "name": parking_names.get(code, code), "category": "parking"})
    for name in data.get("customFacilities") or []:
        facilities.append({"id": slugify(name), "name": name, "category": "property"})

    rules: List[Dict[str, str]] = []
    for code in data.get("rules") or []:
        rules.append({"id": code, "name": rule_names.get(code, code)})
    for name in data.get("customRules") or []:
        rules.append({"id": slugify(name), "name": name})

    # The API requires at least one entry of each
    if not facilities:
        code, name = Vocabularies.DEFAULT_FACILITY
        facilities.append({"id": code, "name": name, "category": "property"})
    if not rules:
        code, name = Vocabularies.DEFAULT_RULE
        rules.append({"id": code, "name": name})

    return {"facilities": facilities, "rules": rules}


PROPERTY_CREATION_FLOW = FlowDefinition(
    key=FLOW_KEY,
    steps=(
        StepSpec(
            "basic-data",
            "flow.property.step.basic_data",
            "flow.property.step.basic_data.description",
            PersistPolicy.VALID_WITH_DRAFT,
        ),
        StepSpec(
            "location",
            "flow.property.step.location",
            "flow.property.step.location.description",
            PersistPolicy.ALWAYS,
        ),
        StepSpec(
            "images",
            "flow.property.step.images",
            "flow.property.step.images.description",
        ),
        StepSpec(
            "facilities-rules",
            "flow.property.step.facilities_rules",
            "flow.property.step.facilities_rules.description",
        ),
    ),
    submission_type=PropertyCreationSubmission,
    shapers={
        "basic-data": shape_basic_data,
        "location": shape_location,
        "images": shape_images,
        "facilities-rules": shape_facilities_rules,
    },
)
