"""
Step 4: Plan Selection

Choose a subscription plan and billing cycle.
"""

from typing import Any, Dict, Optional

from rich.console import Console

from .base import StepContent, StepDescriptor, ValidationResult

PLANS = {
    "starter": "Up to 10 employees",
    "professional": "Up to 200 employees, advanced reporting",
    "enterprise": "Unlimited employees, dedicated support",
}

BILLING_CYCLES = ["monthly", "annual"]


def validate_plan(data: Dict[str, Any]) -> ValidationResult:
    errors = []

    if data.get("plan") not in PLANS:
        errors.append("Please choose a plan")
    if data.get("billing_cycle") not in BILLING_CYCLES:
        errors.append("Please choose a billing cycle")

    return ValidationResult(is_valid=not errors, errors=errors)


class PlanSelectionStep(StepContent):
    """Plan selection step."""

    def render(self, context) -> Any:
        existing = context.current_data or {}

        self.show_table(
            "Available plans",
            ["Plan", "Includes"],
            [[name, details] for name, details in PLANS.items()],
        )

        plan = self.prompt_choice("Plan", list(PLANS), default=existing.get("plan"))
        billing_cycle = self.prompt_choice(
            "Billing cycle",
            BILLING_CYCLES,
            default=existing.get("billing_cycle", "monthly"),
        )

        context.set_data({"plan": plan, "billing_cycle": billing_cycle})
        context.on_complete()


def descriptor(console: Optional[Console] = None) -> StepDescriptor:
    return StepDescriptor(
        id="plan-selection",
        title="Plan Selection",
        description="Choose your perfect plan",
        validate=validate_plan,
        content=PlanSelectionStep(console),
    )
