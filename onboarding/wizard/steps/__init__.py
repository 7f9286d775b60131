"""
Wizard Steps

The step contract and the company onboarding step set.
"""

from typing import List, Optional

from rich.console import Console

from .base import (
    FunctionContent,
    StepContent,
    StepDescriptor,
    ValidationResult,
    Validator,
)
from . import s01_welcome, s02_organization, s03_team_setup, s04_plan_selection, s05_payment


def company_onboarding_steps(console: Optional[Console] = None) -> List[StepDescriptor]:
    """
    Build the company onboarding steps in wizard order.

    Args:
        console: Console shared by the step content providers

    Returns:
        Step descriptors: welcome, organization, team setup, plan, payment
    """
    modules = [s01_welcome, s02_organization, s03_team_setup, s04_plan_selection, s05_payment]
    return [module.descriptor(console) for module in modules]


__all__ = [
    "FunctionContent",
    "StepContent",
    "StepDescriptor",
    "ValidationResult",
    "Validator",
    "company_onboarding_steps",
]
