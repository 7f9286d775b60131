"""Shared fixtures for wizard tests.

The three-step registry mirrors the reference scenario:
A (required, name must be non-empty), B (optional, skippable),
C (required, no validator).
"""

import io
from typing import Any, List

import pytest
from rich.console import Console

from onboarding.wizard import (
    InMemoryGateway,
    StepDescriptor,
    ValidationResult,
    WizardController,
)


def require_name(data: Any) -> ValidationResult:
    """Validation gate for step A."""
    if data.get("name"):
        return ValidationResult.ok()
    return ValidationResult.fail("name required")


@pytest.fixture
def abc_steps() -> List[StepDescriptor]:
    """Registry [A(required), B(optional, can_skip), C(required, no validator)]."""
    return [
        StepDescriptor(id="A", title="Step A", validate=require_name),
        StepDescriptor(id="B", title="Step B", is_optional=True, can_skip=True),
        StepDescriptor(id="C", title="Step C"),
    ]


@pytest.fixture
def gateway() -> InMemoryGateway:
    return InMemoryGateway()


@pytest.fixture
def controller(abc_steps, gateway) -> WizardController:
    """Fresh controller over the A/B/C registry with an in-memory gateway."""
    return WizardController(abc_steps, gateway=gateway)


@pytest.fixture
def console() -> Console:
    """Console writing to a buffer instead of the terminal."""
    return Console(file=io.StringIO(), width=120, force_terminal=False)
