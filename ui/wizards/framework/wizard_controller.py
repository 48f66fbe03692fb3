# -*- coding: utf-8 -*-
"""
Wizard Controller - sequences the steps of one flow.

Handles:
- Forward navigation gated on the current step's validity
- Backward and jump navigation (jumps only to visited steps)
- Deferred recording of step reports (one drain per event loop tick)
- Debounced persistence of step data, immediate persistence of the step pointer
- Restore on construction
- Submission from the last step
"""

import copy
import weakref
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

from PyQt5.QtCore import QObject, QTimer, pyqtSignal

from repositories.form_persistence import FormPersistence, step_key, draft_key
from services.translation_manager import tr
from services.wizard.flow_definition import FlowDefinition, PersistPolicy, validate_unique_ids
from services.wizard.submission_coordinator import (
    SubmissionCoordinator, SubmissionResult, SubmissionWorker, run_submission
)
from utils.logger import get_logger

from .base_step import BaseStep, StepDescriptor
from .update_queue import StepUpdateQueue
from .validity_registry import GatingPolicy, ValidityRegistry
from .wizard_context import (
    WizardContext, slot_key, STATUS_COMPLETED, STATUS_IN_PROGRESS, STATUS_SUBMITTING
)

logger = get_logger(__name__)

# Flow keys with a live controller. Storage is one shared namespace, so only
# one wizard per flow is expected at a time.
_active_flows: Set[str] = set()

# Submission threads still running; a disposed controller must not drop them
_running_workers: Set[SubmissionWorker] = set()


class WizardController(QObject):
    """
    Navigation, aggregation and persistence for one wizard run.

    Step widgets report through report_step() (or bind_step()); the report
    is applied on the next event loop turn.
    """

    # Signals
    step_changed = pyqtSignal(int, int)  # old_index, new_index
    can_go_next_changed = pyqtSignal(bool)
    can_go_previous_changed = pyqtSignal(bool)
    navigation_blocked = pyqtSignal(int, str)  # index, reason
    submission_started = pyqtSignal()
    submission_finished = pyqtSignal(object)  # SubmissionResult, any outcome
    submission_failed = pyqtSignal(object)  # SubmissionResult
    wizard_completed = pyqtSignal(object)  # SubmissionResult

    def __init__(
        self,
        flow: FlowDefinition,
        coordinator: SubmissionCoordinator,
        persistence: Optional[FormPersistence] = None,
        initial_data: Optional[Mapping[str, Dict[str, Any]]] = None,
        extras: Optional[Mapping[str, Any]] = None,
        gating: GatingPolicy = GatingPolicy.SEQUENTIAL,
        debounce_ms: Optional[int] = None,
        background_submission: bool = True,
        parent: Optional[QObject] = None
    ):
        """
        Initialize the controller and restore persisted progress.

        Args:
            flow: Flow definition
            coordinator: Runs the final submission
            persistence: Snapshot store (defaults to the coordinator's)
            initial_data: Authoritative raw form data per slot ("step1"..),
                e.g. a server record in edit mode. Wins over local snapshots.
            extras: Non-slot submission fields (property_id)
            gating: Policy for submitting from the last step
            debounce_ms: Delay of step data writes (Config default)
            background_submission: Submit in a QThread worker
            parent: Parent QObject

        Raises:
            ValueError: two steps share an id
        """
        super().__init__(parent)
        validate_unique_ids(flow.steps)

        from app.config import Config

        self.flow = flow
        self.coordinator = coordinator
        self.persistence = persistence or coordinator.persistence
        self.extras = dict(extras or {})
        self.background_submission = background_submission
        self._scope = flow.use_session_scope

        self.context = WizardContext(flow.key, flow.step_count)
        self.steps: List[StepDescriptor] = [
            StepDescriptor(
                id=step_spec.id,
                title=flow.step_title(i),
                description=flow.step_description(i),
                persist_policy=step_spec.persist_policy,
            )
            for i, step_spec in enumerate(flow.steps)
        ]
        self.registry = ValidityRegistry(
            {i: step.initial_validity for i, step in enumerate(self.steps)},
            policy=gating,
            parent=self
        )

        self._queue = StepUpdateQueue(self._apply_report, parent=self)
        self._last_committed: Dict[int, Tuple[Dict[str, Any], bool]] = {}
        self._dirty: Set[int] = set()
        self._worker: Optional[SubmissionWorker] = None
        self._disposed = False

        self._persist_timer = QTimer(self)
        self._persist_timer.setSingleShot(True)
        self._persist_timer.setInterval(
            debounce_ms if debounce_ms is not None else Config.WIZARD_PERSIST_DEBOUNCE_MS
        )
        self._persist_timer.timeout.connect(self._persist_pending)

        if flow.key in _active_flows:
            logger.warning(f"Another wizard for '{flow.key}' is active; both share storage keys")
        _active_flows.add(flow.key)

        self._restore(dict(initial_data or {}))

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def current_index(self) -> int:
        return self.context.current_step_index

    @property
    def max_visited_index(self) -> int:
        return self.context.max_visited_index

    @property
    def step_count(self) -> int:
        return len(self.steps)

    @property
    def is_last_step(self) -> bool:
        return self.current_index == self.context.last_index

    @property
    def is_completed(self) -> bool:
        return self.context.is_completed

    @property
    def is_submitting(self) -> bool:
        return self.context.status == STATUS_SUBMITTING

    def get_current_step(self) -> StepDescriptor:
        return self.steps[self.current_index]

    # =========================================================================
    # Restore
    # =========================================================================

    def _restore(self, initial_data: Dict[str, Dict[str, Any]]):
        restored = []
        for index, step in enumerate(self.steps):
            authoritative = initial_data.get(slot_key(index))
            if authoritative is not None:
                self._seed(index, authoritative, is_valid=True)
                continue

            snapshot = self.persistence.load(step_key(self.flow.key, index + 1), self._scope)
            data = self.flow.upgrade(index, snapshot.data) if snapshot else None

            draft = None
            if step.persist_policy.uses_drafts:
                draft_snapshot = self.persistence.load(draft_key(self.flow.key, index + 1), self._scope)
                if draft_snapshot and (
                    snapshot is None or draft_snapshot.meta.timestamp >= snapshot.meta.timestamp
                ):
                    draft = self.flow.upgrade(index, draft_snapshot.data)

            if data is not None:
                # ALWAYS steps may have written invalid data; their widget settles validity
                self._seed(index, data, is_valid=step.persist_policy != PersistPolicy.ALWAYS)
                restored.append(index)
            if draft is not None:
                self.context.step_data[index] = copy.deepcopy(draft)
                self.steps[index].initial_data = copy.deepcopy(draft)
                self._last_committed[index] = (copy.deepcopy(draft), False)
                self.registry.set_valid(index, False)
                if index not in restored:
                    restored.append(index)

        if initial_data:
            logger.info(f"{self.flow.key}: seeded from caller data, step pointer not restored")
        else:
            pointer = self.persistence.load_current_step(self.flow.key, self._scope)
            if pointer is not None:
                index = self.context.clamp(pointer)
                self.context.max_visited_index = index
                self.context.current_step_index = index
                logger.info(f"{self.flow.key}: restored to step {index}")

        if restored:
            logger.info(f"{self.flow.key}: restored data for steps {[i + 1 for i in sorted(restored)]}")

    def _seed(self, index: int, data: Dict[str, Any], is_valid: bool):
        payload = None
        if is_valid or self.steps[index].persist_policy == PersistPolicy.ALWAYS:
            payload = self._shape(index, data)
        self.context.record_step(index, data, payload)
        self.steps[index].initial_data = copy.deepcopy(data)
        self._last_committed[index] = (copy.deepcopy(data), is_valid)
        self.registry.set_valid(index, is_valid)

    def seed_data(self, index: int) -> Optional[Dict[str, Any]]:
        """Data the step widget at index should be populated with."""
        return self.context.get_step_data(index)

    # =========================================================================
    # Step reports
    # =========================================================================

    def bind_step(self, index: int, step: BaseStep):
        """Attach a step widget: seed it and route its reports here."""
        self._check_index(index)
        self.steps[index].render = step
        step.seed(self.seed_data(index))
        step.step_reported.connect(
            lambda data, is_valid, i=index: self.report_step(i, data, is_valid)
        )

    def report_step(self, index: int, data: Dict[str, Any], is_valid: bool):
        """
        Step contract entry point. Applied on the next event loop turn.
        """
        if self._disposed or self.is_completed:
            return
        self._check_index(index)
        self._queue.post(index, copy.deepcopy(data), bool(is_valid))

    def flush_pending(self) -> int:
        """Apply queued reports now."""
        return self._queue.drain()

    def _apply_report(self, index: int, data: Dict[str, Any], is_valid: bool):
        if self._disposed or self.is_completed:
            return

        if self._last_committed.get(index) == (data, is_valid):
            logger.debug(f"Step {index}: unchanged report ignored")
            return
        self._last_committed[index] = (copy.deepcopy(data), is_valid)

        policy = self.steps[index].persist_policy
        payload = None
        if is_valid or policy == PersistPolicy.ALWAYS:
            payload = self._shape(index, data)
        self.context.record_step(index, data, payload)

        if self.registry.set_valid(index, is_valid):
            self.can_go_next_changed.emit(self.can_go_next())

        self._dirty.add(index)
        self._schedule_persist()

    def _shape(self, index: int, data: Dict[str, Any]) -> Optional[Any]:
        try:
            return self.flow.shape(index, data)
        except Exception as e:
            logger.error(f"{self.flow.key}: cannot shape step {index + 1} data: {e}")
            return None

    # =========================================================================
    # Persistence
    # =========================================================================

    def _schedule_persist(self):
        if self._disposed or self.is_completed:
            return
        self._persist_timer.start()

    def persist_now(self):
        """Write pending step data without waiting for the debounce."""
        self._persist_timer.stop()
        self._persist_pending()

    def _persist_pending(self):
        # Writes wait while a submission is in flight; success clears the flow
        if self._disposed or self.is_completed or self.is_submitting:
            return
        for index in sorted(self._dirty):
            self._persist_step(index)
        self._dirty.clear()

    def _persist_step(self, index: int):
        committed = self._last_committed.get(index)
        if committed is None:
            return
        data, is_valid = committed
        number = index + 1
        policy = self.steps[index].persist_policy
        key = step_key(self.flow.key, number)

        if policy == PersistPolicy.ALWAYS:
            self.persistence.save(key, data, self._scope, current_step=self.current_index)
        elif is_valid:
            self.persistence.save(key, data, self._scope, current_step=self.current_index)
            if policy.uses_drafts:
                self.persistence.clear(draft_key(self.flow.key, number), self._scope)
        elif policy.uses_drafts:
            self.persistence.save(
                draft_key(self.flow.key, number), data, self._scope, current_step=self.current_index
            )

    # =========================================================================
    # Navigation
    # =========================================================================

    def can_go_next(self) -> bool:
        if self._disposed or self.is_completed or self.is_submitting:
            return False
        if self.is_last_step:
            return self.registry.can_submit(self.context.last_index)
        return self.registry.is_valid(self.current_index)

    def can_go_previous(self) -> bool:
        if self._disposed or self.is_completed or self.is_submitting:
            return False
        return self.current_index > 0

    def progress_percentage(self) -> int:
        if self.is_completed:
            return 100
        return round((self.current_index + 1) / self.step_count * 100)

    def go_next(self) -> bool:
        """
        Advance one step, or submit from the last step.

        Returns True when the index changed or a submission was started.
        """
        if not self._navigation_allowed():
            return False

        index = self.current_index
        if index < self.context.last_index:
            if not self.registry.is_valid(index):
                self._block(index, tr("wizard.nav.step_invalid", step=self.steps[index].title))
                return False
            logger.info(f"Navigating: Step {index} → {index + 1}")
            self._navigate_to(index + 1)
            return True

        return self._submit()

    def go_back(self) -> bool:
        if not self._navigation_allowed() or self.current_index == 0:
            return False
        logger.info(f"Navigating back: Step {self.current_index} → {self.current_index - 1}")
        self._navigate_to(self.current_index - 1)
        return True

    def go_to(self, index: int) -> bool:
        """Jump to an already visited step."""
        if not self._navigation_allowed():
            return False
        if index < 0 or index > self.max_visited_index:
            logger.debug(f"Jump to {index} refused (max visited {self.max_visited_index})")
            return False
        if index != self.current_index:
            self._navigate_to(index)
        return True

    def _navigation_allowed(self) -> bool:
        if self._disposed:
            return False
        if self.is_completed:
            self._block(self.current_index, tr("wizard.nav.completed"))
            return False
        if self.is_submitting:
            self._block(self.current_index, tr("wizard.nav.submitting"))
            return False
        return True

    def _block(self, index: int, reason: str):
        logger.debug(f"Navigation blocked at step {index}: {reason}")
        self.navigation_blocked.emit(index, reason)

    def _navigate_to(self, new_index: int):
        old_index = self.current_index

        current = self.steps[old_index].render
        if isinstance(current, BaseStep):
            current.on_hide()

        self.context.current_step_index = new_index
        self.persistence.save_current_step(self.flow.key, new_index, self._scope)
        self._dirty.update(self._last_committed.keys())
        self._schedule_persist()

        target = self.steps[new_index].render
        if isinstance(target, BaseStep):
            target.on_show()

        self.step_changed.emit(old_index, new_index)
        self.can_go_next_changed.emit(self.can_go_next())
        self.can_go_previous_changed.emit(self.can_go_previous())

    # =========================================================================
    # Submission
    # =========================================================================

    def _submit(self) -> bool:
        self.flush_pending()
        last = self.context.last_index

        if not self.registry.can_submit(last):
            if self.registry.policy == GatingPolicy.CURRENT_STEP:
                invalid = [last]
            else:
                invalid = self.registry.invalid_indices(range(last + 1))
            if invalid == [last]:
                reason = tr("wizard.nav.step_invalid", step=self.steps[last].title)
            else:
                reason = tr(
                    "wizard.nav.previous_steps_invalid",
                    steps=", ".join(self.steps[i].title for i in invalid)
                )
            self._block(last, reason)
            return False

        # Everything collected so far is on disk before the network call
        self.persist_now()

        self.context.status = STATUS_SUBMITTING
        self.submission_started.emit()
        self.can_go_next_changed.emit(False)
        self.can_go_previous_changed.emit(False)

        aggregate = self.context.aggregate()
        if not self.background_submission:
            result = run_submission(self.coordinator, aggregate, self.extras)
            self._on_submission_result(result)
            return result.success

        worker = SubmissionWorker(self.coordinator, aggregate, self.extras)
        worker.completed.connect(self._on_submission_result)
        _running_workers.add(worker)
        worker_ref = weakref.ref(worker)
        worker.finished.connect(lambda: _running_workers.discard(worker_ref()))
        self._worker = worker
        worker.start()
        return True

    def _on_submission_result(self, result: SubmissionResult):
        if self._disposed:
            logger.info(f"{self.flow.key}: submission result after dispose ignored")
            return

        self.submission_finished.emit(result)

        if result.success:
            self._persist_timer.stop()
            self._dirty.clear()
            self._queue.close()
            self.context.status = STATUS_COMPLETED
            self.can_go_next_changed.emit(False)
            self.can_go_previous_changed.emit(False)
            logger.info(f"{self.flow.key}: wizard completed")
            self.wizard_completed.emit(result)
            return

        self.context.status = STATUS_IN_PROGRESS
        if self._dirty:
            self._schedule_persist()
        self.can_go_next_changed.emit(self.can_go_next())
        self.can_go_previous_changed.emit(self.can_go_previous())
        self.submission_failed.emit(result)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def dispose(self):
        """
        Write committed step data, then stop timers and ignore anything
        that arrives later.
        """
        if self._disposed:
            return
        if not self.is_completed and not self.is_submitting:
            self.flush_pending()
            self._persist_pending()

        self._disposed = True
        self._persist_timer.stop()
        self._queue.close()
        _active_flows.discard(self.flow.key)

    def _check_index(self, index: int):
        if not 0 <= index < self.step_count:
            raise IndexError(f"Step index out of range: {index} (0-{self.step_count - 1})")
