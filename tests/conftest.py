# -*- coding: utf-8 -*-
"""Shared fixtures for the wizard engine tests."""

import os

# Must be set before Qt and Config are imported
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest

from repositories.form_persistence import FormPersistence
from repositories.storage_backends import SessionStorage, LocalStorage, reset_storage_backends
from services.api_client import reset_api_client
from services.translation_manager import set_language
from utils.logger import setup_logger

setup_logger(log_to_file=False)


@pytest.fixture(autouse=True)
def _isolated_globals():
    """Run every test in Indonesian with fresh shared singletons."""
    set_language("id")
    yield
    from ui.wizards.framework import wizard_controller
    wizard_controller._active_flows.clear()
    reset_storage_backends()
    reset_api_client()


@pytest.fixture
def session_storage():
    return SessionStorage()


@pytest.fixture
def local_storage(tmp_path):
    return LocalStorage(tmp_path / "form_storage.json")


@pytest.fixture
def persistence(session_storage, local_storage):
    return FormPersistence(session_backend=session_storage, local_backend=local_storage)


class FakeBackend:
    """Records submitted bodies and answers with a canned response or error."""

    def __init__(self, response=None, error=None):
        self.response = response if response is not None else {"success": True, "data": {"id": "prop-1"}}
        self.error = error
        self.calls = []

    def __call__(self, payload):
        self.calls.append(payload)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def backend_factory():
    """Build a FakeBackend with a specific response or error."""
    return FakeBackend
