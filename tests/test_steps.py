"""Tests for the company onboarding steps."""

import pytest
from rich.prompt import Confirm, Prompt

from onboarding.wizard import StepContext, WizardController
from onboarding.wizard.steps import company_onboarding_steps
from onboarding.wizard.steps.s02_organization import validate_organization
from onboarding.wizard.steps.s03_team_setup import validate_team
from onboarding.wizard.steps.s04_plan_selection import validate_plan
from onboarding.wizard.steps.s05_payment import validate_payment


def answer_with(monkeypatch, prompts=(), confirms=()):
    replies = iter(prompts)
    confirmations = iter(confirms)
    monkeypatch.setattr(Prompt, "ask", lambda *args, **kwargs: next(replies))
    monkeypatch.setattr(Confirm, "ask", lambda *args, **kwargs: next(confirmations))


@pytest.fixture
def company(console):
    return WizardController(company_onboarding_steps(console))


class TestStepSet:
    """Tests for the step list itself."""

    def test_order(self):
        ids = [step.id for step in company_onboarding_steps()]
        assert ids == ["welcome", "organization", "team-setup", "plan-selection", "payment"]

    def test_only_team_setup_is_optional(self):
        optional = [step.id for step in company_onboarding_steps() if step.is_optional]
        assert optional == ["team-setup"]


# =============================================================================
# Validators
# =============================================================================


class TestValidators:
    """Tests for the per-step validation gates."""

    def test_organization(self):
        assert validate_organization({"company_name": "Acme", "company_size": "11-50"}).is_valid
        assert validate_organization({"company_name": " "}).errors == ["Company name is required"]
        assert not validate_organization({"company_name": "Acme", "company_size": "huge"}).is_valid

    def test_team(self):
        assert validate_team({}).is_valid
        assert validate_team({"invites": [{"email": "ana@acme.io", "role": "admin"}]}).is_valid

        result = validate_team({"invites": [{"email": "nope", "role": "owner"}]})
        assert len(result.errors) == 2

    def test_plan(self):
        assert validate_plan({"plan": "starter", "billing_cycle": "annual"}).is_valid
        assert validate_plan({}).errors == ["Please choose a plan", "Please choose a billing cycle"]

    def test_payment(self):
        assert validate_payment({"billing_email": "billing@acme.io", "accept_terms": True}).is_valid
        result = validate_payment({"billing_email": "billing@acme.io"})
        assert result.errors == ["You must accept the terms of service"]


# =============================================================================
# Rendering
# =============================================================================


class TestRendering:
    """Content providers report back through their context."""

    def render_current(self, controller):
        step = controller.current_step
        step.content.render(StepContext(controller, step.id))

    def test_welcome(self, company, monkeypatch):
        answer_with(monkeypatch, confirms=[True])

        self.render_current(company)

        assert company.current_step_id == "organization"
        assert company.wizard_data["welcome"] == {"acknowledged": True}

    def test_organization(self, company, monkeypatch):
        company.complete_step("welcome")
        answer_with(monkeypatch, prompts=["Acme", "Retail", "2"])

        self.render_current(company)

        assert company.wizard_data["organization"] == {
            "company_name": "Acme",
            "industry": "Retail",
            "company_size": "11-50",
        }
        assert company.current_step_id == "team-setup"

    def test_team_setup_declined_skips(self, company, monkeypatch):
        company.complete_step("welcome")
        company.complete_step("organization", {"company_name": "Acme"})
        answer_with(monkeypatch, confirms=[False])

        self.render_current(company)

        assert company.current_step_id == "plan-selection"
        assert not company.is_step_completed("team-setup")

    def test_team_setup_invites(self, company, monkeypatch):
        company.complete_step("welcome")
        company.complete_step("organization", {"company_name": "Acme"})
        answer_with(monkeypatch, prompts=["ana@acme.io", "admin", ""], confirms=[True])

        self.render_current(company)

        assert company.wizard_data["team-setup"] == {"invites": [{"email": "ana@acme.io", "role": "admin"}]}
        assert company.is_step_completed("team-setup")

    def test_plan_and_payment_finish_wizard(self, company, monkeypatch):
        company.complete_step("welcome")
        company.complete_step("organization", {"company_name": "Acme"})
        company.skip_step("team-setup")
        answer_with(monkeypatch, prompts=["professional", "annual", "billing@acme.io"], confirms=[True])

        self.render_current(company)
        self.render_current(company)

        assert company.wizard_data["plan-selection"] == {"plan": "professional", "billing_cycle": "annual"}
        assert company.is_wizard_complete
        assert company.progress_percentage == 100.0
