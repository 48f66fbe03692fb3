# -*- coding: utf-8 -*-
"""
Wizard View - hosts step widgets and wires them to a WizardController.

Provides:
- Header with flow step title, description and progress
- Step container
- Previous / Next (Finish) buttons driven by the controller
- Inline message line for blocked navigation and submission errors
"""

from typing import List, Optional

from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QStackedWidget, QProgressBar
)
from PyQt5.QtCore import pyqtSignal
from PyQt5.QtGui import QFont

from services.translation_manager import tr
from utils.logger import get_logger

from .base_step import BaseStep
from .wizard_controller import WizardController

logger = get_logger(__name__)


class WizardView(QWidget):
    """
    Generic wizard UI.

    The view owns no state of its own: every button state, label and page
    change is derived from the controller.
    """

    # Signals
    wizard_completed = pyqtSignal(object)  # SubmissionResult

    def __init__(self, controller: WizardController, steps: List[BaseStep],
                 parent: Optional[QWidget] = None):
        super().__init__(parent)

        if len(steps) != controller.step_count:
            raise ValueError(
                f"{controller.flow.key} has {controller.step_count} steps, got {len(steps)} widgets"
            )

        self.controller = controller
        self.steps = steps

        self._setup_ui()

        for index, step in enumerate(self.steps):
            controller.bind_step(index, step)

        controller.step_changed.connect(self._on_step_changed)
        controller.can_go_next_changed.connect(self._update_navigation_buttons)
        controller.can_go_previous_changed.connect(self._update_navigation_buttons)
        controller.navigation_blocked.connect(self._on_navigation_blocked)
        controller.submission_started.connect(self._on_submission_started)
        controller.submission_failed.connect(self._on_submission_failed)
        controller.wizard_completed.connect(self._on_wizard_completed)
        # Views deleted without a close event (deleteLater, parent teardown)
        self.destroyed.connect(lambda *_: controller.dispose())

        self._show_step(controller.current_index)

        # Restored steps re-announce their validity through the queue
        for index, step in enumerate(self.steps):
            if controller.seed_data(index) is not None:
                step.report()

    # =========================================================================
    # UI Setup
    # =========================================================================

    def _setup_ui(self):
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        main_layout.addWidget(self._create_header())

        self.step_container = QStackedWidget()
        for step in self.steps:
            self.step_container.addWidget(step)
        main_layout.addWidget(self.step_container, 1)

        self.message_label = QLabel("")
        self.message_label.setWordWrap(True)
        self.message_label.setVisible(False)
        main_layout.addWidget(self.message_label)

        main_layout.addWidget(self._create_footer())

    def _create_header(self) -> QWidget:
        header = QWidget()
        layout = QVBoxLayout(header)
        layout.setContentsMargins(20, 16, 20, 16)
        layout.setSpacing(8)

        self.title_label = QLabel("")
        title_font = QFont()
        title_font.setPointSize(14)
        title_font.setBold(True)
        self.title_label.setFont(title_font)
        layout.addWidget(self.title_label)

        self.description_label = QLabel("")
        layout.addWidget(self.description_label)

        progress_layout = QHBoxLayout()
        progress_layout.setSpacing(8)

        self.progress_label = QLabel("")
        progress_layout.addWidget(self.progress_label)

        self.progress_bar = QProgressBar()
        self.progress_bar.setMaximum(100)
        self.progress_bar.setTextVisible(False)
        progress_layout.addWidget(self.progress_bar, 1)

        self.percent_label = QLabel("")
        progress_layout.addWidget(self.percent_label)

        layout.addLayout(progress_layout)
        return header

    def _create_footer(self) -> QWidget:
        footer = QWidget()
        layout = QHBoxLayout(footer)
        layout.setContentsMargins(20, 16, 20, 16)
        layout.setSpacing(12)

        self.btn_previous = QPushButton(tr("wizard.button.previous"))
        self.btn_previous.clicked.connect(self._handle_previous)
        layout.addWidget(self.btn_previous)

        layout.addStretch()

        self.btn_next = QPushButton(tr("wizard.button.next"))
        self.btn_next.clicked.connect(self._handle_next)
        layout.addWidget(self.btn_next)

        return footer

    # =========================================================================
    # Navigation Handlers
    # =========================================================================

    def _handle_previous(self):
        self.controller.go_back()

    def _handle_next(self):
        self._clear_message()
        self.controller.go_next()

    # =========================================================================
    # Event Handlers
    # =========================================================================

    def _on_step_changed(self, old_index: int, new_index: int):
        self._clear_message()
        self._show_step(new_index)

    def _show_step(self, index: int):
        self.step_container.setCurrentIndex(index)
        step = self.controller.steps[index]
        self.title_label.setText(step.title)
        self.description_label.setText(step.description)
        self._update_progress()
        self._update_navigation_buttons()

    def _update_progress(self):
        percent = self.controller.progress_percentage()
        self.progress_label.setText(tr(
            "wizard.progress",
            current=self.controller.current_index + 1,
            total=self.controller.step_count
        ))
        self.percent_label.setText(tr("wizard.progress.percent", percent=percent))
        self.progress_bar.setValue(percent)

    def _update_navigation_buttons(self, *_):
        controller = self.controller
        self.btn_previous.setEnabled(controller.can_go_previous())

        if controller.is_last_step:
            self.btn_next.setText(tr("wizard.button.finish"))
        else:
            self.btn_next.setText(tr("wizard.button.next"))

        can_next = controller.can_go_next()
        self.btn_next.setEnabled(can_next)
        if can_next or controller.is_completed:
            self.btn_next.setToolTip("")
        else:
            self.btn_next.setToolTip(
                tr("wizard.nav.step_invalid", step=controller.get_current_step().title)
            )

    def _on_navigation_blocked(self, index: int, reason: str):
        self._show_message(reason)

    def _on_submission_started(self):
        self._show_message(tr("wizard.nav.submitting"))

    def _on_submission_failed(self, result):
        self._show_message(result.message or tr("wizard.error.submit_failed"))
        self._update_navigation_buttons()

    def _on_wizard_completed(self, result):
        self._update_progress()
        self._update_navigation_buttons()
        self._show_message(result.message)
        self.wizard_completed.emit(result)

    def _show_message(self, text: str):
        self.message_label.setText(text)
        self.message_label.setVisible(bool(text))

    def _clear_message(self):
        self._show_message("")

    def closeEvent(self, event):
        self.controller.dispose()
        super().closeEvent(event)
