# -*- coding: utf-8 -*-
"""Centralized error message mapper."""

from typing import List

from services.translation_manager import tr
from services.exceptions import ApiException, ValidationException, NetworkException
from utils.logger import get_logger

logger = get_logger(__name__)


def map_api_error(error: ApiException) -> str:
    """Map API exception to a user-facing message.

    A 400 with structured details is shown to the user as a validation list,
    anything else collapses to the generic submission failure text.
    """
    status = error.status_code

    if status == 400:
        details = extract_field_errors(error.response_data)
        if details:
            logger.warning(f"API validation error (400): {details}")
            return tr("wizard.error.validation_details", details="\n".join(details))
    elif status:
        logger.warning(f"API error ({status}): {error}")

    if error.message:
        return error.message
    return tr("wizard.error.submit_failed")


def map_network_error(error: NetworkException) -> str:
    """Map network exception to user-friendly translated message."""
    msg = str(error.original_error) if error.original_error else ""
    if "timeout" in msg.lower() or "timed out" in msg.lower():
        return tr("error.api.timeout")
    return tr("error.api.connection")


def map_exception(error: Exception, context: str = None) -> str:
    """Map any exception to a user-friendly message."""
    if isinstance(error, ApiException):
        if not error.context and context:
            error.context = context
        return map_api_error(error)

    if isinstance(error, NetworkException):
        return map_network_error(error)

    if isinstance(error, ValidationException):
        if error.errors:
            logger.warning(f"Validation error: {error.errors}")
        return error.message or tr("wizard.error.submit_failed")

    logger.warning(f"Unexpected error ({context or 'unknown'}): {error}")
    message = str(error)
    return message if message else tr("wizard.error.submit_failed")


def extract_field_errors(response_data) -> List[str]:
    """Extract per-field validation lines from an API error body.

    Understands ``details: [{path, message}]`` and an ``errors`` dict or list.
    """
    if not isinstance(response_data, dict):
        return []

    lines: List[str] = []

    details = response_data.get("details")
    if isinstance(details, list):
        for item in details:
            if not isinstance(item, dict):
                lines.append(f"• {item}")
                continue
            path = item.get("path", "")
            if isinstance(path, (list, tuple)):
                path = ".".join(str(p) for p in path)
            message = item.get("message", "")
            lines.append(f"• {path}: {message}" if path else f"• {message}")

    errors = response_data.get("errors")
    if isinstance(errors, dict):
        for field, messages in errors.items():
            if isinstance(messages, list):
                for msg in messages:
                    lines.append(f"• {field}: {msg}")
            else:
                lines.append(f"• {field}: {messages}")
    elif isinstance(errors, list):
        lines.extend(f"• {e}" for e in errors)

    return lines
