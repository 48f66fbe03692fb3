# -*- coding: utf-8 -*-
"""
Wizard Context - navigation state and collected payloads of one wizard run.

Tracks:
- Current and furthest visited step
- Raw form data per step (what the step widget is seeded with)
- Shaped payload per slot ("step1".."stepN") used for submission
- Run status
"""

import copy
import uuid
from datetime import datetime
from typing import Any, Dict, Optional

STATUS_IN_PROGRESS = "in_progress"
STATUS_SUBMITTING = "submitting"
STATUS_COMPLETED = "completed"


def slot_key(index: int) -> str:
    """Slot name of a 0-based step index."""
    return f"step{index + 1}"


class WizardContext:
    """State of a single wizard run."""

    def __init__(self, flow_key: str, step_count: int):
        if step_count < 1:
            raise ValueError("A wizard needs at least one step")

        self.wizard_id: str = str(uuid.uuid4())
        self.flow_key = flow_key
        self.step_count = step_count
        self.status: str = STATUS_IN_PROGRESS
        self.created_at: datetime = datetime.now()
        self.updated_at: datetime = datetime.now()

        self._current_step_index: int = 0
        self.max_visited_index: int = 0

        # Raw data as reported by each step widget, keyed by step index
        self.step_data: Dict[int, Dict[str, Any]] = {}

        # Shaped payloads keyed by slot
        self.completed_payloads: Dict[str, Any] = {}

    @property
    def current_step_index(self) -> int:
        return self._current_step_index

    @current_step_index.setter
    def current_step_index(self, index: int):
        self._current_step_index = self.clamp(index)
        if self._current_step_index > self.max_visited_index:
            self.max_visited_index = self._current_step_index
        self.updated_at = datetime.now()

    @property
    def last_index(self) -> int:
        return self.step_count - 1

    @property
    def is_completed(self) -> bool:
        return self.status == STATUS_COMPLETED

    def clamp(self, index: int) -> int:
        return max(0, min(int(index), self.last_index))

    def record_step(self, index: int, data: Dict[str, Any], payload: Optional[Any] = None):
        """Store a step's raw data and, when given, its shaped slot payload."""
        self.step_data[index] = copy.deepcopy(data)
        if payload is not None:
            self.completed_payloads[slot_key(index)] = copy.deepcopy(payload)
        self.updated_at = datetime.now()

    def get_step_data(self, index: int) -> Optional[Dict[str, Any]]:
        data = self.step_data.get(index)
        return copy.deepcopy(data) if data is not None else None

    def has_payload(self, index: int) -> bool:
        return slot_key(index) in self.completed_payloads

    def aggregate(self) -> Dict[str, Any]:
        """Copy of the slot -> payload mapping."""
        return copy.deepcopy(self.completed_payloads)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "wizard_id": self.wizard_id,
            "flow_key": self.flow_key,
            "step_count": self.step_count,
            "status": self.status,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "current_step_index": self._current_step_index,
            "max_visited_index": self.max_visited_index,
            "step_data": {str(k): v for k, v in self.step_data.items()},
            "completed_payloads": copy.deepcopy(self.completed_payloads),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WizardContext":
        context = cls(data["flow_key"], int(data["step_count"]))
        context.wizard_id = data.get("wizard_id", context.wizard_id)
        context.status = data.get("status", STATUS_IN_PROGRESS)
        context.max_visited_index = context.clamp(data.get("max_visited_index", 0))
        context.current_step_index = data.get("current_step_index", 0)
        context.step_data = {
            int(k): v for k, v in (data.get("step_data") or {}).items()
        }
        context.completed_payloads = dict(data.get("completed_payloads") or {})

        if "created_at" in data:
            context.created_at = datetime.fromisoformat(data["created_at"])
        if "updated_at" in data:
            context.updated_at = datetime.fromisoformat(data["updated_at"])
        return context
