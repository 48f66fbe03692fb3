# -*- coding: utf-8 -*-
"""
Key/value storage backends used by form persistence.

Two scopes exist:
- SessionStorage: lives as long as the application process
- LocalStorage: JSON file on disk, survives restarts

Values are stored as serialized strings. Only FormPersistence should talk
to these classes directly.
"""

import json
import os
import tempfile
import threading
from abc import ABCMeta, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

from services.exceptions import PersistenceError
from utils.logger import get_logger

logger = get_logger(__name__)


class StorageBackend(metaclass=ABCMeta):
    """Interface shared by the session and local stores."""

    name = "storage"

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set_item(self, key: str, value: str):
        pass

    @abstractmethod
    def remove_item(self, key: str):
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        pass

    def clear(self):
        for key in self.keys():
            self.remove_item(key)


class SessionStorage(StorageBackend):
    """In-memory store scoped to the running application."""

    name = "session"

    def __init__(self):
        self._items: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._items.get(key)

    def set_item(self, key: str, value: str):
        if not isinstance(value, str):
            raise PersistenceError("Session storage only accepts strings", key=key)
        with self._lock:
            self._items[key] = value

    def remove_item(self, key: str):
        with self._lock:
            self._items.pop(key, None)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._items.keys())

    def clear(self):
        with self._lock:
            self._items.clear()


class LocalStorage(StorageBackend):
    """
    Store persisted to a single JSON file.

    The whole file is rewritten on every change via a temp file and
    os.replace so a crash never leaves a half-written document behind.
    A corrupt file is logged and treated as empty.
    """

    name = "local"

    def __init__(self, path: Optional[Path] = None):
        if path is None:
            from app.config import Config
            path = Config.LOCAL_STORAGE_PATH
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                content = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Local storage file unreadable ({self.path}): {e}")
            return {}
        if not isinstance(content, dict):
            logger.warning(f"Local storage file has unexpected shape: {type(content).__name__}")
            return {}
        return {k: v for k, v in content.items() if isinstance(v, str)}

    def _write_all(self, items: Dict[str, str]):
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=".form_storage_", suffix=".tmp", dir=str(self.path.parent)
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(items, f, ensure_ascii=False)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except OSError as e:
            raise PersistenceError(
                f"Failed to write local storage: {e}", original_error=e
            ) from e

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read_all().get(key)

    def set_item(self, key: str, value: str):
        if not isinstance(value, str):
            raise PersistenceError("Local storage only accepts strings", key=key)
        with self._lock:
            items = self._read_all()
            items[key] = value
            self._write_all(items)

    def remove_item(self, key: str):
        with self._lock:
            items = self._read_all()
            if key in items:
                del items[key]
                self._write_all(items)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._read_all().keys())

    def clear(self):
        with self._lock:
            self._write_all({})


_session_storage: Optional[SessionStorage] = None
_local_storage: Optional[LocalStorage] = None


def get_session_storage() -> SessionStorage:
    """Get the process-wide session storage."""
    global _session_storage
    if _session_storage is None:
        _session_storage = SessionStorage()
    return _session_storage


def get_local_storage() -> LocalStorage:
    """Get the default local storage (Config.LOCAL_STORAGE_PATH)."""
    global _local_storage
    if _local_storage is None:
        _local_storage = LocalStorage()
    return _local_storage


def reset_storage_backends():
    """Drop the shared backend instances (used by tests)."""
    global _session_storage, _local_storage
    _session_storage = None
    _local_storage = None
