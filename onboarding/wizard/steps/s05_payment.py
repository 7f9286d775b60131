"""
Step 5: Payment

Billing contact and terms acceptance. Card details are handled by the
payment provider outside this wizard.
"""

from typing import Any, Dict, Optional

from rich.console import Console

from .base import EMAIL_PATTERN, StepContent, StepDescriptor, ValidationResult


def validate_payment(data: Dict[str, Any]) -> ValidationResult:
    errors = []

    if not EMAIL_PATTERN.match(data.get("billing_email") or ""):
        errors.append("A valid billing email is required")
    if not data.get("accept_terms"):
        errors.append("You must accept the terms of service")

    return ValidationResult(is_valid=not errors, errors=errors)


class PaymentStep(StepContent):
    """Payment step - billing contact."""

    def render(self, context) -> Any:
        existing = context.current_data or {}

        billing_email = self.prompt_email(
            "Billing email",
            default=existing.get("billing_email", ""),
        )
        accept_terms = self.prompt_confirm(
            "Do you accept the terms of service?",
            default=bool(existing.get("accept_terms")),
        )

        context.set_data({"billing_email": billing_email, "accept_terms": accept_terms})
        context.on_complete()


def descriptor(console: Optional[Console] = None) -> StepDescriptor:
    return StepDescriptor(
        id="payment",
        title="Payment",
        description="Secure payment setup",
        validate=validate_payment,
        content=PaymentStep(console),
    )
