# -*- coding: utf-8 -*-
"""Tests for the deferred Step Update Queue."""

import pytest

from ui.wizards.framework.update_queue import StepUpdateQueue


@pytest.fixture
def applied():
    return []


@pytest.fixture
def queue(qapp, applied):
    return StepUpdateQueue(lambda index, data, valid: applied.append((index, data, valid)))


class TestStepUpdateQueue:
    """Test that reports are deferred and coalesced."""

    def test_post_is_not_applied_synchronously(self, queue, applied, qtbot):
        queue.post(0, {"name": "K"}, False)

        assert applied == []
        assert queue.has_pending()

        qtbot.waitUntil(lambda: len(applied) == 1)
        assert applied == [(0, {"name": "K"}, False)]

    def test_latest_report_per_step_wins(self, queue, applied, qtbot):
        queue.post(0, {"name": "K"}, False)
        queue.post(1, {"city": "Malang"}, True)
        queue.post(0, {"name": "Kos Mawar"}, True)

        with qtbot.waitSignal(queue.drained) as blocker:
            pass

        assert blocker.args == [2]
        # Step 0 keeps its first-report position
        assert applied == [
            (0, {"name": "Kos Mawar"}, True),
            (1, {"city": "Malang"}, True),
        ]

    def test_drain_synchronously(self, queue, applied):
        queue.post(2, {}, True)

        assert queue.drain() == 1
        assert applied == [(2, {}, True)]
        assert queue.drain() == 0

    def test_handler_error_does_not_drop_other_reports(self, qapp):
        seen = []

        def handler(index, data, valid):
            if index == 0:
                raise RuntimeError("boom")
            seen.append(index)

        queue = StepUpdateQueue(handler)
        queue.post(0, {}, True)
        queue.post(1, {}, True)
        queue.drain()

        assert seen == [1]

    def test_closed_queue_ignores_posts(self, queue, applied):
        queue.post(0, {}, True)
        queue.close()
        queue.post(1, {}, True)

        assert queue.drain() == 0
        assert applied == []
