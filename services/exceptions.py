# -*- coding: utf-8 -*-
"""Custom exceptions for the kos admin client."""

from typing import List, Optional, Sequence


class KosAdminError(Exception):
    """Base class. ``context`` names the endpoint or flow that failed."""

    def __init__(self, message: str, context: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.context = context


class ApiException(KosAdminError):
    """The backend answered with an error status or ``{"success": false}``."""

    def __init__(self, message: str, status_code: int = None,
                 response_data: dict = None, context: str = None):
        super().__init__(message, context)
        self.status_code = status_code
        self.response_data = response_data or {}

    def __str__(self):
        prefix = f"[{self.status_code}] " if self.status_code else ""
        return f"{prefix}{self.message}"


class ValidationException(KosAdminError):
    """Local validation failed before anything was sent."""

    def __init__(self, message: str, field: str = None,
                 errors: list = None, context: str = None):
        super().__init__(message, context)
        self.field = field
        self.errors = errors or []


class NetworkException(KosAdminError):
    """The backend could not be reached (connection refused, timeout)."""

    def __init__(self, message: str, original_error: Exception = None,
                 context: str = None):
        super().__init__(message, context)
        self.original_error = original_error


class IncompleteAggregateError(KosAdminError):
    """A wizard submission was attempted with unrecorded step slots."""

    def __init__(self, missing_slots: Sequence[str], flow_key: str = None):
        self.missing_slots: List[str] = list(missing_slots)
        self.flow_key = flow_key
        super().__init__(
            f"Incomplete aggregate for {flow_key or 'flow'}: "
            f"missing {', '.join(self.missing_slots)}",
            context=flow_key,
        )


class PersistenceError(KosAdminError):
    """A storage backend could not complete a read or write."""

    def __init__(self, message: str, key: str = None,
                 original_error: Exception = None):
        super().__init__(message, context=key)
        self.key = key
        self.original_error = original_error
