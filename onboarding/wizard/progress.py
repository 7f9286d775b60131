"""
Wizard Progress

Read-only progress view derived from controller state. Never persisted.

Only mandatory steps count toward the percentage, so a wizard finished
with its optional steps skipped still reads 100%. A registry made only of
optional steps falls back to counting every step.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from .registry import StepRegistry

if TYPE_CHECKING:
    from .controller import WizardController


@dataclass(frozen=True)
class ProgressView:
    """Snapshot of wizard progress."""
    completed_count: int
    total_steps: int
    required_completed: int
    required_total: int
    percentage: float
    is_complete: bool = False

    def summary(self) -> str:
        return f"{round(self.percentage)}% Complete ({self.completed_count}/{self.total_steps} steps)"


def compute_progress(
    registry: StepRegistry,
    completed_step_ids: Iterable[str],
    is_complete: bool = False,
) -> ProgressView:
    """
    Compute the progress view for a registry and a completed set.

    Args:
        registry: The wizard's step registry
        completed_step_ids: Ids of completed steps
        is_complete: Whether the wizard reached its terminal state

    Returns:
        ProgressView with a percentage between 0 and 100
    """
    completed = set(completed_step_ids)
    required_ids = {step.id for step in registry.required_steps}

    completed_count = len(completed)
    total_steps = len(registry)
    required_completed = len(completed & required_ids)
    required_total = len(required_ids)

    if is_complete:
        percentage = 100.0
    elif required_total:
        percentage = required_completed / required_total * 100.0
    else:
        percentage = completed_count / total_steps * 100.0

    return ProgressView(
        completed_count=completed_count,
        total_steps=total_steps,
        required_completed=required_completed,
        required_total=required_total,
        percentage=percentage,
        is_complete=is_complete,
    )


class ProgressReporter:
    """Derives progress views and progress bars from a controller."""

    def __init__(self, controller: "WizardController"):
        self.controller = controller

    def view(self) -> ProgressView:
        return compute_progress(
            self.controller.registry,
            self.controller.completed_step_ids,
            self.controller.is_wizard_complete,
        )

    def render_bar(self, width: int = 30) -> str:
        """
        Build a rich-markup progress bar.

        Args:
            width: Bar length in characters

        Returns:
            Markup string such as "[=====>-----] 50%"
        """
        view = self.view()
        filled = int(view.percentage / 100.0 * width)

        if filled >= width:
            bar = "[green]" + "=" * width + "[/green]"
        else:
            bar = (
                "[green]" + "=" * filled + "[/green]"
                + "[cyan]>[/cyan]"
                + "[dim]" + "-" * (width - filled - 1) + "[/dim]"
            )

        return f"\\[{bar}] {round(view.percentage)}%"
