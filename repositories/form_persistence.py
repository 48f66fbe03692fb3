# -*- coding: utf-8 -*-
"""
Form Persistence - snapshot store for in-progress wizard data.

Every value is wrapped in an envelope:

    {"data": ..., "timestamp": <epoch seconds>, "version": "1.0", "currentStep": <int|None>}

Reads discard entries written by another envelope version or older than the
expiry window. Nothing in this module raises to the caller: storage and
serialization problems are logged and reported as "no data".

Key schema:
    "<flow>-step-<n>"        step payload (n is 1-based)
    "<flow>-step-<n>-draft"  invalid in-progress payload
    "<flow>"                 index of the active step
"""

import json
import time
from dataclasses import dataclass
from typing import Any, List, Optional

from repositories.storage_backends import (
    StorageBackend, get_session_storage, get_local_storage
)
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SnapshotMeta:
    """Envelope metadata of a loaded snapshot."""
    timestamp: float
    version: str
    current_step: Optional[int] = None


@dataclass(frozen=True)
class LoadedSnapshot:
    """Result of FormPersistence.load()."""
    data: Any
    meta: SnapshotMeta


def step_key(flow_key: str, step_number: int) -> str:
    """Storage key of a step payload (1-based step number)."""
    return f"{flow_key}-step-{step_number}"


def draft_key(flow_key: str, step_number: int) -> str:
    """Storage key of a step's invalid in-progress payload."""
    return f"{step_key(flow_key, step_number)}-draft"


class FormPersistence:
    """
    Scoped key/value snapshot store.

    use_session_scope=True targets the session backend (process lifetime),
    False targets the local backend (JSON file).
    """

    step_key = staticmethod(step_key)
    draft_key = staticmethod(draft_key)

    def __init__(
        self,
        session_backend: Optional[StorageBackend] = None,
        local_backend: Optional[StorageBackend] = None,
        version: Optional[str] = None,
        expiration_hours: Optional[float] = None,
        clock=time.time
    ):
        from app.config import Config

        self._session_backend = session_backend
        self._local_backend = local_backend
        self.version = version if version is not None else Config.FORM_PERSISTENCE_VERSION
        self.expiration_hours = (
            expiration_hours if expiration_hours is not None else Config.FORM_EXPIRATION_HOURS
        )
        self._clock = clock

    def _backend(self, use_session_scope: bool) -> StorageBackend:
        if use_session_scope:
            if self._session_backend is None:
                self._session_backend = get_session_storage()
            return self._session_backend
        if self._local_backend is None:
            self._local_backend = get_local_storage()
        return self._local_backend

    # =========================================================================
    # Snapshots
    # =========================================================================

    def save(
        self,
        key: str,
        data: Any,
        use_session_scope: bool = True,
        current_step: Optional[int] = None
    ) -> bool:
        """
        Serialize data under key.

        Returns False (and keeps the previous value) when the data cannot be
        serialized or the backend rejects the write.
        """
        envelope = {
            "data": data,
            "timestamp": self._clock(),
            "version": self.version,
            "currentStep": current_step,
        }
        try:
            serialized = json.dumps(envelope, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to serialize form data for '{key}': {e}")
            return False

        try:
            self._backend(use_session_scope).set_item(key, serialized)
        except Exception as e:
            logger.error(f"Failed to save form data for '{key}': {e}")
            return False

        logger.debug(f"Saved form data: {key}")
        return True

    def load(self, key: str, use_session_scope: bool = True) -> Optional[LoadedSnapshot]:
        """Return the stored snapshot or None when absent, stale or unreadable."""
        try:
            raw = self._backend(use_session_scope).get_item(key)
        except Exception as e:
            logger.warning(f"Failed to read form data for '{key}': {e}")
            return None

        if raw is None:
            return None

        try:
            envelope = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Corrupt form data for '{key}': {e}")
            return None

        if not isinstance(envelope, dict) or "data" not in envelope:
            logger.warning(f"Unexpected form data shape for '{key}'")
            return None

        version = envelope.get("version")
        if version != self.version:
            logger.info(f"Discarding form data for '{key}': version {version} != {self.version}")
            self.clear(key, use_session_scope)
            return None

        timestamp = envelope.get("timestamp")
        if not isinstance(timestamp, (int, float)):
            logger.warning(f"Form data for '{key}' has no valid timestamp")
            return None

        age_hours = (self._clock() - timestamp) / 3600.0
        if age_hours > self.expiration_hours:
            logger.info(f"Discarding expired form data for '{key}' ({age_hours:.1f}h old)")
            self.clear(key, use_session_scope)
            return None

        current_step = envelope.get("currentStep")
        if not isinstance(current_step, int) or isinstance(current_step, bool):
            current_step = None

        return LoadedSnapshot(
            data=envelope["data"],
            meta=SnapshotMeta(timestamp=timestamp, version=version, current_step=current_step)
        )

    def clear(self, key: str, use_session_scope: bool = True):
        """Remove a snapshot. Clearing an absent key is a no-op."""
        try:
            self._backend(use_session_scope).remove_item(key)
        except Exception as e:
            logger.warning(f"Failed to clear form data for '{key}': {e}")

    def has(self, key: str, use_session_scope: bool = True) -> bool:
        return self.load(key, use_session_scope) is not None

    # =========================================================================
    # Current step pointer
    # =========================================================================

    def save_current_step(self, flow_key: str, index: int, use_session_scope: bool = True) -> bool:
        return self.save(flow_key, index, use_session_scope, current_step=index)

    def load_current_step(self, flow_key: str, use_session_scope: bool = True) -> Optional[int]:
        snapshot = self.load(flow_key, use_session_scope)
        if snapshot is None:
            return None
        index = snapshot.data
        if isinstance(index, bool) or not isinstance(index, int):
            index = snapshot.meta.current_step
        return index

    def clear_current_step_pointer(self, flow_key: str, use_session_scope: bool = True):
        self.clear(flow_key, use_session_scope)

    # =========================================================================
    # Bulk operations
    # =========================================================================

    def keys(self, prefix: Optional[str] = None, use_session_scope: bool = True) -> List[str]:
        try:
            all_keys = self._backend(use_session_scope).keys()
        except Exception as e:
            logger.warning(f"Failed to list form data keys: {e}")
            return []
        if prefix is None:
            return sorted(all_keys)
        return sorted(k for k in all_keys if k.startswith(prefix))

    def clear_all(self, prefix: Optional[str] = None, use_session_scope: bool = True) -> int:
        """Clear every key starting with prefix. Returns the number of keys removed."""
        removed = self.keys(prefix, use_session_scope)
        for key in removed:
            self.clear(key, use_session_scope)
        if removed:
            logger.info(f"Cleared {len(removed)} form data entries (prefix={prefix!r})")
        return len(removed)

    def clear_flow(self, flow_key: str, step_count: int, use_session_scope: bool = True):
        """Clear every step key, draft key and the pointer of a flow."""
        for number in range(1, step_count + 1):
            self.clear(step_key(flow_key, number), use_session_scope)
            self.clear(draft_key(flow_key, number), use_session_scope)
        self.clear_current_step_pointer(flow_key, use_session_scope)
        logger.info(f"Cleared persisted data for flow '{flow_key}' ({step_count} steps)")
