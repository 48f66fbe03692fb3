# -*- coding: utf-8 -*-
"""Tests for the Validity Registry."""

import pytest

from ui.wizards.framework.validity_registry import GatingPolicy, ValidityRegistry


@pytest.fixture
def registry(qapp):
    return ValidityRegistry()


class TestValidityRegistry:
    """Test per-step validity flags."""

    def test_unknown_index_is_invalid(self, registry):
        assert registry.is_valid(0) is False
        assert registry.is_valid(99) is False

    def test_set_valid_reports_change_only_once(self, registry, qtbot):
        with qtbot.waitSignal(registry.validity_changed) as blocker:
            assert registry.set_valid(1, True) is True
        assert blocker.args == [1, True]

        with qtbot.assertNotEmitted(registry.validity_changed):
            assert registry.set_valid(1, True) is False

    def test_first_false_write_is_recorded(self, registry):
        assert registry.set_valid(0, False) is True
        assert registry.snapshot() == {0: False}

    def test_all_valid_up_to(self, registry):
        registry.set_valid(0, True)
        registry.set_valid(1, True)
        registry.set_valid(3, True)

        assert registry.all_valid_up_to(1) is True
        assert registry.all_valid_up_to(2) is False
        assert registry.all_valid_up_to(3) is False

    def test_sequential_submit_needs_every_step(self, registry):
        registry.set_valid(3, True)
        assert registry.can_submit(3) is False

        for i in range(3):
            registry.set_valid(i, True)
        assert registry.can_submit(3) is True

    def test_current_step_policy(self, qapp):
        registry = ValidityRegistry(policy=GatingPolicy.CURRENT_STEP)
        registry.set_valid(3, True)

        assert registry.can_submit(3) is True

    def test_reset(self, registry):
        registry.set_valid(0, True)
        registry.reset()

        assert registry.snapshot() == {}
        assert registry.is_valid(0) is False
