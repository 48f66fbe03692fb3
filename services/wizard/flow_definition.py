# -*- coding: utf-8 -*-
"""
Flow Definition - static description of one multi-step creation flow.

A flow declares its steps, the storage namespace, how each step's raw form
data is shaped into the submission slot, how stale persisted data is
upgraded, and which typed submission the slots assemble into.
"""

import copy
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Type

from services.exceptions import IncompleteAggregateError
from services.translation_manager import tr
from utils.logger import get_logger

logger = get_logger(__name__)


class PersistPolicy(Enum):
    """When a step's payload is written to storage."""
    VALID_ONLY = "valid_only"              # only valid payloads reach the step key
    ALWAYS = "always"                      # every change is written
    VALID_WITH_DRAFT = "valid_with_draft"  # invalid edits go to a separate draft key

    @property
    def uses_drafts(self) -> bool:
        return self is PersistPolicy.VALID_WITH_DRAFT


@dataclass(frozen=True)
class StepSpec:
    """Declaration of one step inside a flow."""
    id: str
    title_key: str
    description_key: str = ""
    persist_policy: PersistPolicy = PersistPolicy.VALID_ONLY


Shaper = Callable[[Dict[str, Any]], Any]
Upgrader = Callable[[Dict[str, Any]], Optional[Dict[str, Any]]]


@dataclass(frozen=True)
class FlowDefinition:
    """
    A wizard flow.

    Attributes:
        key: Storage namespace ("property-creation")
        steps: Ordered step declarations; slot "stepN" is the N-th entry
        submission_type: Frozen dataclass with one field per slot plus extras
        shapers: step id -> raw form data to slot payload
        upgraders: step id -> repair a restored payload, or None to discard it
        extra_fields: Non-slot fields the submission requires (e.g. propertyId)
        use_session_scope: Persist to session storage instead of the local file
    """
    key: str
    steps: Tuple[StepSpec, ...]
    submission_type: Type
    shapers: Mapping[str, Shaper] = field(default_factory=dict)
    upgraders: Mapping[str, Upgrader] = field(default_factory=dict)
    extra_fields: Tuple[str, ...] = ()
    use_session_scope: bool = True

    @property
    def step_count(self) -> int:
        return len(self.steps)

    def slot_keys(self) -> List[str]:
        return [f"step{i + 1}" for i in range(self.step_count)]

    def step_title(self, index: int) -> str:
        return tr(self.steps[index].title_key)

    def step_description(self, index: int) -> str:
        key = self.steps[index].description_key
        return tr(key) if key else ""

    def shape(self, index: int, data: Dict[str, Any]) -> Any:
        """Turn a step's raw form data into its slot payload."""
        shaper = self.shapers.get(self.steps[index].id)
        if shaper is None:
            return copy.deepcopy(data)
        return shaper(data)

    def upgrade(self, index: int, data: Any) -> Optional[Dict[str, Any]]:
        """
        Repair a restored payload written by an older form.

        Returns None when the payload is unusable and must be ignored.
        """
        if not isinstance(data, dict):
            logger.warning(
                f"{self.key}: discarding restored {self.steps[index].id} "
                f"payload of type {type(data).__name__}"
            )
            return None
        upgrader = self.upgraders.get(self.steps[index].id)
        if upgrader is None:
            return data
        try:
            return upgrader(copy.deepcopy(data))
        except Exception as e:
            logger.warning(f"{self.key}: failed to upgrade {self.steps[index].id} payload: {e}")
            return None

    def missing_slots(self, aggregate: Mapping[str, Any]) -> List[str]:
        return [slot for slot in self.slot_keys() if aggregate.get(slot) is None]

    def describe_slots(self, slots: List[str]) -> str:
        """Human label for slots: "step4 (Fasilitas & Peraturan)"."""
        slot_keys = self.slot_keys()
        labels = []
        for slot in slots:
            if slot in slot_keys:
                labels.append(f"{slot} ({self.step_title(slot_keys.index(slot))})")
            else:
                labels.append(slot)
        return ", ".join(labels)

    def build_submission(self, aggregate: Mapping[str, Any], extras: Optional[Mapping[str, Any]] = None):
        """
        Assemble the typed submission.

        Raises:
            IncompleteAggregateError: a slot has no recorded payload
            ValueError: a required extra field is missing
        """
        missing = self.missing_slots(aggregate)
        if missing:
            raise IncompleteAggregateError(missing, flow_key=self.key)

        extras = dict(extras or {})
        absent = [name for name in self.extra_fields if not extras.get(name)]
        if absent:
            raise ValueError(f"{self.key}: missing required field(s) {', '.join(absent)}")

        values = {slot: copy.deepcopy(aggregate[slot]) for slot in self.slot_keys()}
        values.update({name: extras[name] for name in self.extra_fields})

        declared = {f.name for f in fields(self.submission_type)}
        unknown = set(values) - declared
        if unknown:
            raise TypeError(
                f"{self.submission_type.__name__} has no field(s) {', '.join(sorted(unknown))}"
            )
        return self.submission_type(**values)


def validate_unique_ids(steps) -> None:
    """Raise ValueError when two steps share an id."""
    seen = set()
    for step in steps:
        if step.id in seen:
            raise ValueError(f"Duplicate step id: {step.id}")
        seen.add(step.id)
