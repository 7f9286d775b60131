"""
Step 2: Organization

Collect company name, industry and size.
"""

from typing import Any, Dict, Optional

from rich.console import Console

from .base import StepContent, StepDescriptor, ValidationResult

COMPANY_SIZES = ["1-10", "11-50", "51-200", "201-1000", "1000+"]


def validate_organization(data: Dict[str, Any]) -> ValidationResult:
    """Company name is required; size must be one of COMPANY_SIZES."""
    errors = []

    if not str(data.get("company_name") or "").strip():
        errors.append("Company name is required")

    size = data.get("company_size")
    if size and size not in COMPANY_SIZES:
        errors.append(f"Company size must be one of: {', '.join(COMPANY_SIZES)}")

    return ValidationResult(is_valid=not errors, errors=errors)


class OrganizationStep(StepContent):
    """Organization step - company details and structure."""

    def render(self, context) -> Any:
        existing = context.current_data or {}

        if existing:
            self.console.print("[dim]Current values (press Enter to keep):[/dim]")
            self.console.print(f"  Company: [cyan]{existing.get('company_name', 'N/A')}[/cyan]")
            self.console.print()

        company_name = self.prompt_text(
            "Company name",
            default=existing.get("company_name", ""),
        )
        industry = self.prompt_text(
            "Industry (optional)",
            default=existing.get("industry", ""),
            required=False,
        )
        company_size = self.prompt_choice(
            "Company size",
            COMPANY_SIZES,
            default=existing.get("company_size"),
        )

        context.set_data({
            "company_name": company_name,
            "industry": industry,
            "company_size": company_size,
        })
        context.on_complete()


def descriptor(console: Optional[Console] = None) -> StepDescriptor:
    return StepDescriptor(
        id="organization",
        title="Organization",
        description="Company details and structure",
        validate=validate_organization,
        content=OrganizationStep(console),
    )
