"""
Step 3: Team Setup

Optional step to invite team members and assign roles.
"""

from typing import Any, Dict, Optional

from rich.console import Console

from .base import EMAIL_PATTERN, StepContent, StepDescriptor, ValidationResult

TEAM_ROLES = ["admin", "manager", "member"]


def validate_team(data: Dict[str, Any]) -> ValidationResult:
    """Every invite needs a valid email and a known role."""
    errors = []

    for number, invite in enumerate(data.get("invites", []), 1):
        email = invite.get("email", "")
        if not EMAIL_PATTERN.match(email):
            errors.append(f"Invite {number}: invalid email address '{email}'")
        if invite.get("role") not in TEAM_ROLES:
            errors.append(f"Invite {number}: role must be one of {', '.join(TEAM_ROLES)}")

    return ValidationResult(is_valid=not errors, errors=errors)


class TeamSetupStep(StepContent):
    """Team setup step - roles and team members."""

    def render(self, context) -> Any:
        existing = list((context.current_data or {}).get("invites", []))

        if existing:
            self.show_table(
                "Pending invites",
                ["Email", "Role"],
                [[invite.get("email", ""), invite.get("role", "")] for invite in existing],
            )
            self.console.print()

        if not self.prompt_confirm("Invite team members now?", default=bool(existing)):
            context.on_skip()
            return

        invites = existing
        while True:
            email = self.prompt_text("Email (leave empty to finish)", required=False)
            if not email:
                break
            role = self.prompt_choice("Role", TEAM_ROLES, default="member")
            invites.append({"email": email, "role": role})

        context.set_data({"invites": invites})
        context.on_complete()


def descriptor(console: Optional[Console] = None) -> StepDescriptor:
    return StepDescriptor(
        id="team-setup",
        title="Team Setup",
        description="Roles and team members",
        is_optional=True,
        can_skip=True,
        validate=validate_team,
        content=TeamSetupStep(console),
    )
