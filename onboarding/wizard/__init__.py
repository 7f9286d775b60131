"""
Onboarding Wizard

A guided multi-step wizard engine with validation-gated transitions,
optional and skippable steps, completion tracking and resumable drafts.
"""

from .controller import WizardController
from .context import StepContext
from .errors import (
    ConfigurationError,
    OperationResult,
    PersistenceError,
    RejectionKind,
    WizardError,
)
from .navigator import Navigator, NavigationAction
from .persistence import InMemoryGateway, JsonFileGateway, PersistenceGateway
from .progress import ProgressReporter, ProgressView
from .registry import StepRegistry
from .runner import WizardRunner
from .state import DraftSnapshot, StepStatus, WizardPhase, WizardState
from .steps import FunctionContent, StepContent, StepDescriptor, ValidationResult

__all__ = [
    "WizardController",
    "StepContext",
    "ConfigurationError",
    "OperationResult",
    "PersistenceError",
    "RejectionKind",
    "WizardError",
    "Navigator",
    "NavigationAction",
    "InMemoryGateway",
    "JsonFileGateway",
    "PersistenceGateway",
    "ProgressReporter",
    "ProgressView",
    "StepRegistry",
    "WizardRunner",
    "DraftSnapshot",
    "StepStatus",
    "WizardPhase",
    "WizardState",
    "FunctionContent",
    "StepContent",
    "StepDescriptor",
    "ValidationResult",
]
