# -*- coding: utf-8 -*-
"""
Kos Admin Repository Layer
"""

# Lazy imports to avoid circular dependencies
__all__ = [
    "FormPersistence",
    "SessionStorage",
    "LocalStorage",
]


def __getattr__(name):
    """Lazy import to avoid circular dependencies."""
    if name == "FormPersistence":
        from .form_persistence import FormPersistence
        return FormPersistence
    elif name == "SessionStorage":
        from .storage_backends import SessionStorage
        return SessionStorage
    elif name == "LocalStorage":
        from .storage_backends import LocalStorage
        return LocalStorage
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
