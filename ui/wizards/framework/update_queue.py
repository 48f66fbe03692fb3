# -*- coding: utf-8 -*-
"""
Step Update Queue - defers step reports to the next event loop turn.

Steps report (data, is_valid) from inside their own signal handlers. Applying
those writes synchronously would re-enter the controller while a step is
still updating, so reports are queued and drained once per tick by a
zero-interval single-shot QTimer.

Within one drain the latest report per step index wins; steps keep the order
in which they first reported.
"""

from collections import OrderedDict
from typing import Any, Callable, Dict, List, Optional, Tuple

from PyQt5.QtCore import QObject, QTimer, pyqtSignal

from utils.logger import get_logger

logger = get_logger(__name__)

StepReport = Tuple[int, Dict[str, Any], bool]


class StepUpdateQueue(QObject):
    """Coalescing queue of step reports."""

    drained = pyqtSignal(int)  # number of reports applied

    def __init__(self, handler: Callable[[int, Dict[str, Any], bool], None],
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        self._handler = handler
        self._pending: "OrderedDict[int, StepReport]" = OrderedDict()
        self._closed = False

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(0)
        self._timer.timeout.connect(self.drain)

    def post(self, index: int, data: Dict[str, Any], is_valid: bool):
        """Queue a report; the write happens on the next tick."""
        if self._closed:
            return
        # Reassigning an existing key keeps its first-report position
        self._pending[index] = (index, data, is_valid)
        if not self._timer.isActive():
            self._timer.start()

    def has_pending(self) -> bool:
        return bool(self._pending)

    def drain(self) -> int:
        """Apply every queued report. Safe to call synchronously."""
        self._timer.stop()
        if not self._pending:
            return 0

        batch: List[StepReport] = list(self._pending.values())
        self._pending.clear()

        for index, data, is_valid in batch:
            try:
                self._handler(index, data, is_valid)
            except Exception as e:
                logger.error(f"Failed to apply report for step {index}: {e}", exc_info=True)

        self.drained.emit(len(batch))
        return len(batch)

    def close(self):
        """Drop pending reports and refuse new ones."""
        self._closed = True
        self._timer.stop()
        self._pending.clear()
