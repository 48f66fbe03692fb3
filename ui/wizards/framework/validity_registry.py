# -*- coding: utf-8 -*-
"""
Validity Registry - per-step "can be submitted" flags.

Written by the controller on behalf of each step, read to decide whether
forward navigation and submission are allowed.
"""

from enum import Enum
from typing import Dict, Iterable, Optional

from PyQt5.QtCore import QObject, pyqtSignal

from utils.logger import get_logger

logger = get_logger(__name__)


class GatingPolicy(Enum):
    """How submission from the last step is gated."""
    SEQUENTIAL = "sequential"       # every step 0..last must be valid
    CURRENT_STEP = "current_step"   # only the last step must be valid


class ValidityRegistry(QObject):
    """Mapping step index -> bool. Missing entries read as False."""

    validity_changed = pyqtSignal(int, bool)  # index, is_valid

    def __init__(
        self,
        initial: Optional[Dict[int, bool]] = None,
        policy: GatingPolicy = GatingPolicy.SEQUENTIAL,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.policy = policy
        self._validity: Dict[int, bool] = {}
        for index, value in (initial or {}).items():
            self._validity[index] = bool(value)

    def set_valid(self, index: int, is_valid: bool) -> bool:
        """
        Record a step's validity.

        Returns True only when the stored value changed; a repeated write of
        the same value neither emits nor returns True.
        """
        is_valid = bool(is_valid)
        if index in self._validity and self._validity[index] == is_valid:
            return False
        self._validity[index] = is_valid
        logger.debug(f"Step {index} validity -> {is_valid}")
        self.validity_changed.emit(index, is_valid)
        return True

    def is_valid(self, index: int) -> bool:
        return self._validity.get(index, False)

    def all_valid_up_to(self, index: int) -> bool:
        """True when every step 0..index (inclusive) is valid."""
        if index < 0:
            return True
        return all(self.is_valid(i) for i in range(index + 1))

    def invalid_indices(self, indices: Iterable[int]):
        return [i for i in indices if not self.is_valid(i)]

    def can_submit(self, last_index: int) -> bool:
        if self.policy == GatingPolicy.CURRENT_STEP:
            return self.is_valid(last_index)
        return self.all_valid_up_to(last_index)

    def reset(self):
        self._validity.clear()

    def snapshot(self) -> Dict[int, bool]:
        return dict(self._validity)
