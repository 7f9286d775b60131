"""
Step 1: Welcome

Introduces the company onboarding wizard.
"""

from typing import Any, Optional

from rich.console import Console
from rich.panel import Panel

from .base import StepContent, StepDescriptor


class WelcomeStep(StepContent):
    """Welcome step - explains what the wizard sets up."""

    def render(self, context) -> Any:
        self.console.print(Panel.fit(
            "[bold]Welcome![/bold]\n\n"
            "You've successfully created your company account.\n"
            "Let's set up your organization in just a few quick steps:\n"
            "  • Organization details\n"
            "  • Team roles and members\n"
            "  • Plan selection\n"
            "  • Billing contact",
            title="Company Onboarding",
            border_style="blue"
        ))
        self.console.print()

        if self.prompt_confirm("Ready to get started?", default=True):
            context.set_data({"acknowledged": True})
            context.on_complete()


def descriptor(console: Optional[Console] = None) -> StepDescriptor:
    return StepDescriptor(
        id="welcome",
        title="Welcome",
        description="Getting started with your setup",
        content=WelcomeStep(console),
    )
