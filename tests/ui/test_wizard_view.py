# -*- coding: utf-8 -*-
"""
Tests for the Wizard View.

Tests cover:
- Buttons follow the controller
- Typing in a step reports through the controller
- Restored data is shown in the step widgets
"""

import pytest
from PyQt5 import sip
from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import QLineEdit

from repositories.form_persistence import step_key
from services.wizard.flows import PROPERTY_CREATION_FLOW
from services.wizard.submission_coordinator import SubmissionCoordinator
from ui.wizards.framework import BaseStep, StepValidationResult, WizardController, WizardView
from ui.wizards.framework.wizard_controller import _active_flows


class TextStep(BaseStep):
    """Single required text field."""

    def __init__(self, field_name: str, parent=None):
        super().__init__(parent)
        self.field_name = field_name

    def setup_ui(self):
        self.edit = QLineEdit()
        self.edit.textChanged.connect(lambda _: self.report())
        self.main_layout.addWidget(self.edit)

    def validate(self) -> StepValidationResult:
        result = self.create_validation_result()
        if not self.edit.text().strip():
            result.add_error(f"{self.field_name} required")
        return result

    def collect_data(self):
        return {self.field_name: self.edit.text()}

    def populate_data(self, data):
        self.edit.setText(data.get(self.field_name, ""))


@pytest.fixture
def make_view(qtbot, persistence, backend):
    views = []

    def factory():
        coordinator = SubmissionCoordinator(PROPERTY_CREATION_FLOW, backend, persistence)
        controller = WizardController(
            PROPERTY_CREATION_FLOW, coordinator, persistence,
            debounce_ms=0, background_submission=False
        )
        steps = [TextStep(name) for name in ("name", "fullAddress", "note", "rule")]
        view = WizardView(controller, steps)
        qtbot.addWidget(view)
        views.append(view)
        return view

    yield factory
    for view in views:
        view.controller.dispose()


class TestWizardView:
    """Test the generic wizard UI."""

    def test_initial_state(self, make_view):
        view = make_view()

        assert view.step_container.currentIndex() == 0
        assert view.title_label.text() == "Data Dasar"
        assert view.btn_previous.isEnabled() is False
        assert view.btn_next.isEnabled() is False
        assert view.btn_next.toolTip() != ""

    def test_typing_enables_next_and_navigates(self, make_view, qtbot):
        view = make_view()

        qtbot.keyClicks(view.steps[0].edit, "Kos Mawar")
        qtbot.waitUntil(lambda: view.btn_next.isEnabled())

        qtbot.mouseClick(view.btn_next, Qt.LeftButton)

        assert view.controller.current_index == 1
        assert view.step_container.currentIndex() == 1
        assert view.btn_previous.isEnabled() is True
        assert view.title_label.text() == "Lokasi"

    def test_last_step_shows_finish(self, make_view, qtbot, backend):
        view = make_view()
        for step in view.steps:
            step.edit.setText("isi")
            qtbot.waitUntil(lambda: view.controller.can_go_next())
            qtbot.mouseClick(view.btn_next, Qt.LeftButton)
            if view.controller.is_completed:
                break

        assert view.controller.is_completed
        assert len(backend.calls) == 1
        assert view.btn_next.isEnabled() is False

    def test_restored_data_is_displayed(self, make_view, persistence, qtbot):
        persistence.save(step_key(PROPERTY_CREATION_FLOW.key, 1), {"name": "Kos Mawar"})
        persistence.save_current_step(PROPERTY_CREATION_FLOW.key, 1)

        view = make_view()

        assert view.steps[0].edit.text() == "Kos Mawar"
        assert view.step_container.currentIndex() == 1
        assert view.btn_previous.isEnabled() is True

    def test_deleted_view_releases_flow(self, qapp, persistence, backend):
        coordinator = SubmissionCoordinator(PROPERTY_CREATION_FLOW, backend, persistence)
        controller = WizardController(
            PROPERTY_CREATION_FLOW, coordinator, persistence,
            debounce_ms=60000, background_submission=False
        )
        view = WizardView(controller, [TextStep(name) for name in ("name", "fullAddress", "note", "rule")])
        controller.report_step(0, {"name": "Kos Mawar"}, True)

        sip.delete(view)

        assert PROPERTY_CREATION_FLOW.key not in _active_flows
        assert persistence.load(step_key(PROPERTY_CREATION_FLOW.key, 1)).data == {"name": "Kos Mawar"}
