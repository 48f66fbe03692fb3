# -*- coding: utf-8 -*-
"""
Kos Admin Service Layer
"""

# Lazy imports to avoid circular dependencies
__all__ = [
    "KosApiClient",
    "SubmissionCoordinator",
    "tr",
]


def __getattr__(name):
    """Lazy import to avoid circular dependencies."""
    if name == "KosApiClient":
        from .api_client import KosApiClient
        return KosApiClient
    elif name == "SubmissionCoordinator":
        from .wizard.submission_coordinator import SubmissionCoordinator
        return SubmissionCoordinator
    elif name == "tr":
        from .translation_manager import tr
        return tr
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
