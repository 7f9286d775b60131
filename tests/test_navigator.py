"""Tests for keyboard and prompt navigation."""

import pytest
from rich.prompt import Prompt

from onboarding.wizard import (
    DraftSnapshot,
    InMemoryGateway,
    NavigationAction,
    Navigator,
    PersistenceError,
    RejectionKind,
    StepStatus,
)


def answer_with(monkeypatch, *answers):
    """Feed canned answers to Prompt.ask."""
    replies = iter(answers)
    monkeypatch.setattr(Prompt, "ask", lambda *args, **kwargs: next(replies))


class BrokenGateway(InMemoryGateway):
    def load(self):
        raise PersistenceError("unreadable")


@pytest.fixture
def navigator(controller, console):
    return Navigator(controller, console)


# =============================================================================
# Key bindings
# =============================================================================


class TestKeyBindings:
    """Arrow keys and Enter map onto controller operations."""

    def test_action_for_key(self):
        assert Navigator.action_for_key("Left") == NavigationAction.BACK
        assert Navigator.action_for_key("right") == NavigationAction.CONTINUE
        assert Navigator.action_for_key("ENTER") == NavigationAction.COMPLETE
        assert Navigator.action_for_key("x") is None

    def test_enter_requires_valid_step(self, navigator, controller):
        result = navigator.handle_key("enter")

        assert result.rejection == RejectionKind.VALIDATION
        assert result.errors == ["name required"]
        assert controller.current_step_id == "A"

    def test_enter_completes_valid_step(self, navigator, controller):
        controller.set_step_data("A", {"name": "x"})

        assert navigator.handle_key("enter")
        assert controller.completed_step_ids == {"A"}
        assert controller.current_step_id == "B"

    def test_left_at_first_step(self, navigator):
        result = navigator.handle_key("left")
        assert result.rejection == RejectionKind.NAVIGATION

    def test_right_requires_completion(self, navigator, controller):
        assert not navigator.handle_key("right")
        assert controller.current_step_id == "A"

    def test_arrows_move_between_steps(self, navigator, controller):
        controller.complete_step("A", {"name": "x"})

        assert navigator.handle_key("left")
        assert controller.current_step_id == "A"
        assert navigator.handle_key("right")
        assert controller.current_step_id == "B"

    def test_skip_key(self, navigator, controller):
        controller.complete_step("A", {"name": "x"})

        assert navigator.handle_key("s")
        assert controller.current_step_id == "C"

    def test_unbound_key(self, navigator, controller):
        result = navigator.handle_key("x")

        assert result.rejection == RejectionKind.NAVIGATION
        assert controller.current_step_id == "A"

    def test_quit_changes_nothing(self, navigator, controller, gateway):
        result = navigator.handle_key("q")

        assert result.message == "quit"
        assert controller.current_step_id == "A"
        assert gateway.saved == []


# =============================================================================
# Prompts
# =============================================================================


class TestNavigationPrompt:
    """Tests for the interactive navigation prompt."""

    def test_empty_answer_completes(self, navigator, monkeypatch):
        answer_with(monkeypatch, "")
        assert navigator.show_navigation_prompt() == NavigationAction.COMPLETE

    def test_unavailable_choice_is_retried(self, navigator, controller, monkeypatch):
        controller.complete_step("A", {"name": "x"})
        answer_with(monkeypatch, "z", "s")

        assert navigator.show_navigation_prompt() == NavigationAction.SKIP

    def test_back_not_offered_on_first_step(self, navigator, monkeypatch):
        answer_with(monkeypatch, "b", "q")
        assert navigator.show_navigation_prompt() == NavigationAction.QUIT

    def test_enter_continues_completed_step(self, navigator, controller, monkeypatch):
        controller.complete_step("A", {"name": "x"})
        controller.previous_step()
        answer_with(monkeypatch, "")

        assert navigator.show_navigation_prompt() == NavigationAction.CONTINUE

    def test_confirm_quit(self, navigator, monkeypatch):
        answer_with(monkeypatch, "y")
        assert navigator.confirm_quit()


class TestResume:
    """Tests for offering to resume a saved draft."""

    @pytest.fixture
    def saved(self):
        return InMemoryGateway(DraftSnapshot(
            current_step_id="B",
            completed_step_ids=["A"],
            wizard_data={"A": {"name": "x"}},
        ))

    def test_no_draft(self, navigator, monkeypatch):
        answer_with(monkeypatch)
        assert navigator.handle_resume(InMemoryGateway()) == (True, None)

    def test_resume(self, navigator, saved, monkeypatch):
        answer_with(monkeypatch, "r")

        should_continue, snapshot = navigator.handle_resume(saved)

        assert should_continue
        assert snapshot.current_step_id == "B"

    def test_start_fresh_clears_draft(self, navigator, saved, monkeypatch):
        answer_with(monkeypatch, "f")

        assert navigator.handle_resume(saved) == (True, None)
        assert saved.load() is None

    def test_quit(self, navigator, saved, monkeypatch):
        answer_with(monkeypatch, "q")

        assert navigator.handle_resume(saved) == (False, None)
        assert saved.has_draft()

    def test_unreadable_draft_starts_fresh(self, navigator, monkeypatch):
        answer_with(monkeypatch)
        assert navigator.handle_resume(BrokenGateway()) == (True, None)


class TestStepSummary:
    """Tests for the step list."""

    def test_summary_lines(self, navigator, controller):
        controller.complete_step("A", {"name": "x"})
        controller.skip_step("B")

        summary = navigator.get_step_summary()

        assert "Step 1: Step A" in summary
        assert "Step 2: Step B [dim](Optional)[/dim]" in summary
        assert controller.status_of("A") == StepStatus.COMPLETED
        assert controller.status_of("B") == StepStatus.SKIPPED
        assert controller.status_of("C") == StepStatus.CURRENT
