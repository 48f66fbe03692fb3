# -*- coding: utf-8 -*-
"""
Wizard Framework - multi-step wizard engine for the kos admin flows.

Provides the step contract, validity tracking, the navigation controller
with deferred step reports and persisted progress, and a generic view.
"""

from .base_step import BaseStep, StepDescriptor, StepValidationResult
from .validity_registry import GatingPolicy, ValidityRegistry
from .update_queue import StepUpdateQueue
from .wizard_context import WizardContext
from .wizard_controller import WizardController
from .base_wizard import WizardView

__all__ = [
    'BaseStep',
    'StepDescriptor',
    'StepValidationResult',
    'GatingPolicy',
    'ValidityRegistry',
    'StepUpdateQueue',
    'WizardContext',
    'WizardController',
    'WizardView'
]
