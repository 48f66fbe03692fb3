# -*- coding: utf-8 -*-
"""
Kos Admin Data Models
"""

from .submissions import (
    PropertyCreationSubmission,
    RoomCreationSubmission,
    RoomTypeCreationSubmission,
)

__all__ = [
    "PropertyCreationSubmission",
    "RoomCreationSubmission",
    "RoomTypeCreationSubmission",
]
