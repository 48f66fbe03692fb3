# -*- coding: utf-8 -*-
"""Concrete wizard flows and the backend call each one submits to."""

from typing import Any, Callable, Dict, Optional

from .property_creation import PROPERTY_CREATION_FLOW
from .room_creation import ROOM_CREATION_FLOW
from .room_type_creation import ROOM_TYPE_CREATION_FLOW

FLOWS = {
    flow.key: flow
    for flow in (PROPERTY_CREATION_FLOW, ROOM_CREATION_FLOW, ROOM_TYPE_CREATION_FLOW)
}


def get_flow(key: str):
    """Look up a flow by its storage key."""
    try:
        return FLOWS[key]
    except KeyError:
        raise ValueError(f"Unknown wizard flow: {key}")


def make_backend(flow, client=None, property_id: Optional[str] = None
                 ) -> Callable[[Dict[str, Any]], Any]:
    """Bind the API client method that accepts a flow's request body."""
    if client is None:
        from services.api_client import get_api_client
        client = get_api_client()

    if flow.key == PROPERTY_CREATION_FLOW.key:
        return client.create_property
    if flow.key == ROOM_CREATION_FLOW.key:
        return client.create_rooms
    if flow.key == ROOM_TYPE_CREATION_FLOW.key:
        if not property_id:
            raise ValueError("Room type creation needs a property_id")
        return lambda payload: client.create_room_type(property_id, payload)
    raise ValueError(f"No backend for flow: {flow.key}")


__all__ = [
    "PROPERTY_CREATION_FLOW",
    "ROOM_CREATION_FLOW",
    "ROOM_TYPE_CREATION_FLOW",
    "FLOWS",
    "get_flow",
    "make_backend",
]
