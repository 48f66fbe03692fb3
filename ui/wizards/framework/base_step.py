# -*- coding: utf-8 -*-
"""
Base Step - contract between a business form and the wizard controller.

A step widget owns its fields and its field-level validation. The engine
only sees what the step reports:
- populate_data(data): seed the fields (restored or pre-filled data)
- collect_data(): current form data as a JSON-serializable dict
- validate(): current validity
- step_reported(dict, bool): emitted by report() whenever content changes
"""

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from PyQt5.QtWidgets import QWidget, QVBoxLayout
from PyQt5.QtCore import pyqtSignal

from services.wizard.flow_definition import PersistPolicy


@dataclass
class StepValidationResult:
    """Result of step validation."""
    is_valid: bool
    errors: List[str]
    warnings: List[str] = None

    def __post_init__(self):
        if self.warnings is None:
            self.warnings = []

    def add_error(self, message: str):
        """Add an error message."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str):
        self.warnings.append(message)

    def has_errors(self) -> bool:
        return len(self.errors) > 0


@dataclass
class StepDescriptor:
    """
    Static description of one wizard step.

    `render` is the step's UI unit (normally a BaseStep); the controller
    never inspects it.
    """
    id: str
    title: str
    description: str = ""
    render: Optional[Any] = None
    initial_validity: bool = False
    persist_policy: PersistPolicy = PersistPolicy.VALID_ONLY
    initial_data: Optional[Dict[str, Any]] = field(default=None, repr=False)


# Combine PyQt5 metaclass with ABC metaclass
class ABCQWidgetMeta(type(QWidget), ABCMeta):
    """Metaclass that combines PyQt5's metaclass with ABC."""
    pass


class BaseStep(QWidget, metaclass=ABCQWidgetMeta):
    """
    Abstract base class for wizard step widgets.

    Subclasses build their fields in setup_ui() and call report() from
    their change handlers.
    """

    step_reported = pyqtSignal(dict, bool)  # data, is_valid

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._is_initialized = False
        self._populating = False

        self.main_layout = QVBoxLayout(self)
        self.main_layout.setContentsMargins(20, 20, 20, 20)
        self.main_layout.setSpacing(16)

    def initialize(self):
        """Build the UI once."""
        if not self._is_initialized:
            self.setup_ui()
            self._is_initialized = True

    def on_show(self):
        if not self._is_initialized:
            self.initialize()

    def on_hide(self):
        pass

    # =========================================================================
    # Abstract Methods - Must be implemented by subclasses
    # =========================================================================

    @abstractmethod
    def setup_ui(self):
        """Create the step's widgets and connect their change signals."""
        pass

    @abstractmethod
    def validate(self) -> StepValidationResult:
        pass

    @abstractmethod
    def collect_data(self) -> Dict[str, Any]:
        pass

    def populate_data(self, data: Dict[str, Any]):
        """
        Fill the fields from data.

        Override together with setup_ui(). Change handlers fired while
        populating do not report.
        """
        pass

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def seed(self, data: Optional[Dict[str, Any]]):
        """Initialize the UI and populate it without emitting reports."""
        self.initialize()
        if not data:
            return
        self._populating = True
        try:
            self.populate_data(data)
        finally:
            self._populating = False

    def report(self):
        """Emit the current (data, is_valid) to the controller."""
        if self._populating:
            return
        result = self.validate()
        self.step_reported.emit(self.collect_data(), result.is_valid)

    def create_validation_result(self) -> StepValidationResult:
        return StepValidationResult(is_valid=True, errors=[], warnings=[])
