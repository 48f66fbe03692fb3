# -*- coding: utf-8 -*-
"""
Submission Coordinator - turns a wizard aggregate into one backend call.

Outcomes:
- INCOMPLETE: a slot was never recorded. The backend is not called and
  persisted data is left alone.
- REMOTE_FAILURE: the backend raised or answered {"success": false}.
  Nothing is cleared so the user can retry.
- SUCCESS: every step key, draft key and the step pointer of the flow
  are cleared.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional

from PyQt5.QtCore import QThread, pyqtSignal

from repositories.form_persistence import FormPersistence, step_key, draft_key
from services.error_mapper import map_exception, extract_field_errors
from services.exceptions import ApiException, IncompleteAggregateError
from services.translation_manager import tr
from services.wizard.flow_definition import FlowDefinition
from utils.logger import get_logger

logger = get_logger(__name__)

Backend = Callable[[Dict[str, Any]], Any]


class SubmissionOutcome(Enum):
    SUCCESS = "success"
    INCOMPLETE = "incomplete"
    REMOTE_FAILURE = "remote_failure"


@dataclass
class SubmissionResult:
    """Result of SubmissionCoordinator.submit()."""
    outcome: SubmissionOutcome
    response: Any = None
    error: Optional[Exception] = None
    message: str = ""
    missing_steps: List[str] = field(default_factory=list)
    field_errors: List[str] = field(default_factory=list)
    stored_data_detected: bool = False

    @property
    def success(self) -> bool:
        return self.outcome == SubmissionOutcome.SUCCESS


class SubmissionCoordinator:
    """
    Builds the flow's typed submission and hands it to the backend.

    Args:
        flow: Flow being submitted
        backend: Callable taking the request body and returning the response
        persistence: Store cleared on success
        diagnose_storage: On an incomplete aggregate, re-read persisted step
            snapshots to tell the user recoverable data exists
    """

    def __init__(
        self,
        flow: FlowDefinition,
        backend: Backend,
        persistence: Optional[FormPersistence] = None,
        diagnose_storage: bool = False
    ):
        self.flow = flow
        self.backend = backend
        self.persistence = persistence or FormPersistence()
        self.diagnose_storage = diagnose_storage

    def submit(self, aggregate: Mapping[str, Any],
               extras: Optional[Mapping[str, Any]] = None) -> SubmissionResult:
        try:
            submission = self.flow.build_submission(aggregate, extras)
        except IncompleteAggregateError as e:
            return self._incomplete(e)
        except (ValueError, TypeError) as e:
            logger.error(f"{self.flow.key}: cannot build submission: {e}")
            return SubmissionResult(
                outcome=SubmissionOutcome.INCOMPLETE,
                error=e,
                message=str(e),
            )

        payload = submission.to_dict()
        logger.info(f"Submitting {self.flow.key} ({len(self.flow.slot_keys())} steps)")

        try:
            response = self.backend(payload)
        except Exception as e:
            return self._remote_failure(e)

        if isinstance(response, dict) and response.get("success") is False:
            error = ApiException(
                response.get("error") or response.get("message") or tr("wizard.error.submit_failed"),
                response_data=response,
                context=self.flow.key,
            )
            return self._remote_failure(error)

        self.persistence.clear_flow(
            self.flow.key, self.flow.step_count, self.flow.use_session_scope
        )
        logger.info(f"{self.flow.key} submitted successfully")
        return SubmissionResult(
            outcome=SubmissionOutcome.SUCCESS,
            response=response,
            message=tr("wizard.success.submitted"),
        )

    def _incomplete(self, error: IncompleteAggregateError) -> SubmissionResult:
        missing = error.missing_slots
        logger.warning(f"{self.flow.key}: incomplete aggregate, missing {missing}")

        message = tr("wizard.error.incomplete", steps=self.flow.describe_slots(missing))
        stored = self.diagnose_storage and self._stored_data_exists(missing)
        if stored:
            message = f"{message}\n{tr('wizard.error.stored_data_detected')}"

        return SubmissionResult(
            outcome=SubmissionOutcome.INCOMPLETE,
            error=error,
            message=message,
            missing_steps=list(missing),
            stored_data_detected=stored,
        )

    def _remote_failure(self, error: Exception) -> SubmissionResult:
        response_data = getattr(error, "response_data", None) or {}
        field_errors = extract_field_errors(response_data)
        if field_errors:
            message = tr("wizard.error.validation_details", details="\n".join(field_errors))
        else:
            message = map_exception(error, context=self.flow.key)
        logger.error(f"{self.flow.key} submission failed: {error}")
        return SubmissionResult(
            outcome=SubmissionOutcome.REMOTE_FAILURE,
            error=error,
            message=message,
            field_errors=field_errors,
        )

    def _stored_data_exists(self, missing_slots: List[str]) -> bool:
        """Whether a step or draft snapshot exists for one of the missing slots."""
        scope = self.flow.use_session_scope
        slot_keys = self.flow.slot_keys()
        for slot in missing_slots:
            if slot not in slot_keys:
                continue
            number = slot_keys.index(slot) + 1
            for key in (step_key(self.flow.key, number), draft_key(self.flow.key, number)):
                if self.persistence.has(key, scope):
                    return True
        return False


def run_submission(coordinator: SubmissionCoordinator, aggregate: Mapping[str, Any],
                   extras: Optional[Mapping[str, Any]] = None) -> SubmissionResult:
    """Submit, turning any unexpected error into a REMOTE_FAILURE result."""
    try:
        return coordinator.submit(aggregate, extras)
    except Exception as e:
        logger.error(f"Submission of {coordinator.flow.key} crashed: {e}", exc_info=True)
        return SubmissionResult(
            outcome=SubmissionOutcome.REMOTE_FAILURE,
            error=e,
            message=tr("wizard.error.submit_failed"),
        )


class SubmissionWorker(QThread):
    """Background worker running one submission."""

    completed = pyqtSignal(object)  # SubmissionResult

    def __init__(self, coordinator: SubmissionCoordinator,
                 aggregate: Mapping[str, Any], extras: Optional[Mapping[str, Any]] = None):
        super().__init__()
        self.coordinator = coordinator
        self.aggregate = dict(aggregate)
        self.extras = dict(extras or {})

    def run(self):
        """Run the submission in background."""
        self.completed.emit(run_submission(self.coordinator, self.aggregate, self.extras))
