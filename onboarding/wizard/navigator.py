"""
Wizard Navigation

Keyboard and prompt input for the wizard. Keys map straight onto
controller operations; the navigator keeps no state of its own.
"""

from enum import Enum
from typing import Dict, Optional, Tuple

from rich.console import Console
from rich.prompt import Prompt

from .controller import WizardController
from .errors import OperationResult, PersistenceError, RejectionKind
from .persistence import PersistenceGateway
from .progress import ProgressReporter
from .state import DraftSnapshot, StepStatus


class NavigationAction(str, Enum):
    """Possible navigation actions."""
    COMPLETE = "complete"
    CONTINUE = "continue"
    BACK = "back"
    SKIP = "skip"
    QUIT = "quit"


KEY_BINDINGS: Dict[str, NavigationAction] = {
    "left": NavigationAction.BACK,
    "right": NavigationAction.CONTINUE,
    "enter": NavigationAction.COMPLETE,
    "b": NavigationAction.BACK,
    "n": NavigationAction.CONTINUE,
    "c": NavigationAction.CONTINUE,
    "s": NavigationAction.SKIP,
    "q": NavigationAction.QUIT,
}

STATUS_ICONS = {
    StepStatus.COMPLETED: "[green]✓[/green]",
    StepStatus.SKIPPED: "[yellow]○[/yellow]",
    StepStatus.CURRENT: "[cyan]→[/cyan]",
    StepStatus.PENDING: "[dim]○[/dim]",
}


class Navigator:
    """
    Routes keys and prompt answers onto wizard controller operations.
    """

    def __init__(self, controller: WizardController, console: Optional[Console] = None):
        """
        Initialize navigator.

        Args:
            controller: The wizard controller
            console: Rich console for output
        """
        self.controller = controller
        self.console = console or Console()
        self.reporter = ProgressReporter(controller)

    @staticmethod
    def action_for_key(key: str) -> Optional[NavigationAction]:
        """Look up the action bound to a key name, e.g. 'left' or 'enter'."""
        return KEY_BINDINGS.get(key.strip().lower())

    def handle_key(self, key: str) -> OperationResult:
        """
        Apply the operation bound to a key.

        Args:
            key: Key name ('left', 'right', 'enter') or a letter alias

        Returns:
            The controller's result, or a navigation rejection for unbound keys
        """
        action = self.action_for_key(key)
        if action is None:
            return OperationResult.rejected(
                RejectionKind.NAVIGATION,
                f"No action bound to key '{key}'",
                self.controller.current_step_id,
            )
        return self.dispatch(action)

    def dispatch(self, action: NavigationAction) -> OperationResult:
        """Apply a navigation action to the controller."""
        controller = self.controller
        step_id = controller.current_step_id

        if action == NavigationAction.BACK:
            return controller.previous_step()

        if action == NavigationAction.CONTINUE:
            return controller.next_step()

        if action == NavigationAction.SKIP:
            return controller.skip_step(step_id)

        if action == NavigationAction.COMPLETE:
            validation = controller.current_validation
            if not validation.is_valid:
                return OperationResult.rejected(
                    RejectionKind.VALIDATION,
                    f"Step '{step_id}' is not valid yet",
                    step_id,
                    validation.errors,
                )
            return controller.complete_step(step_id, controller.get_step_data(step_id))

        # Quitting is the host's decision
        return OperationResult.accepted(step_id, message="quit")

    def show_navigation_prompt(self) -> NavigationAction:
        """
        Show navigation options for the current step and get the user's choice.

        Returns:
            The chosen navigation action
        """
        controller = self.controller
        step = controller.current_step
        completed = controller.is_step_completed(step.id)
        can_next = controller.can_proceed_to_next and not controller.is_last_step
        can_back = not controller.is_first_step
        can_skip = controller.allow_skipping and step.skippable

        options = []
        if not completed:
            options.append("[Enter] Complete step")
        if can_next:
            options.append("[N] Next" if not completed else "[Enter] Next")
        if can_back:
            options.append("[B] Back")
        if can_skip:
            options.append("[S] Skip")
        options.append("[Q] Quit")

        self.console.print()
        self.console.print("  ".join(options), style="dim", markup=False)

        while True:
            choice = Prompt.ask("", default="", console=self.console).strip().lower()

            if choice == "":
                if not completed:
                    return NavigationAction.COMPLETE
                if can_next:
                    return NavigationAction.CONTINUE
            elif choice in ("n", "c") and can_next:
                return NavigationAction.CONTINUE
            elif choice == "b" and can_back:
                return NavigationAction.BACK
            elif choice == "s" and can_skip:
                return NavigationAction.SKIP
            elif choice == "q":
                return NavigationAction.QUIT

            self.console.print("[yellow]Invalid choice. Please try again.[/yellow]")

    def handle_resume(self, gateway: PersistenceGateway) -> Tuple[bool, Optional[DraftSnapshot]]:
        """
        Offer to resume from a saved draft.

        Args:
            gateway: Gateway holding the draft

        Returns:
            Tuple of (should_continue, snapshot to resume from or None)
        """
        try:
            snapshot = gateway.load()
        except PersistenceError as e:
            self.console.print(f"[red]Failed to load saved draft: {e}. Starting fresh.[/red]")
            return True, None

        if snapshot is None:
            return True, None

        registry = self.controller.registry
        step = registry.get(snapshot.current_step_id)
        title = step.title if step else snapshot.current_step_id

        self.console.print()
        self.console.print("[bold yellow]Saved wizard progress found![/bold yellow]")
        self.console.print()
        self.console.print(f"  Current step: [cyan]{title}[/cyan]")
        self.console.print(
            f"  Completed: [cyan]{len(snapshot.completed_step_ids)}[/cyan] "
            f"of [cyan]{len(registry)}[/cyan] steps"
        )
        if snapshot.saved_at:
            self.console.print(f"  Saved: [cyan]{snapshot.saved_at}[/cyan]")
        self.console.print()

        choice = Prompt.ask(
            "Would you like to [bold]R[/bold]esume, start [bold]F[/bold]resh, or [bold]Q[/bold]uit?",
            choices=["r", "f", "q"],
            default="r",
            console=self.console,
        ).lower()

        if choice == "q":
            return False, None

        if choice == "r":
            return True, snapshot

        gateway.clear()
        return True, None

    def confirm_quit(self) -> bool:
        """
        Confirm the user wants to quit.

        Returns:
            True if user confirms quit
        """
        self.console.print()
        if self.controller.gateway is not None:
            self.console.print("[yellow]Your progress will be saved and can be resumed later.[/yellow]")

        choice = Prompt.ask(
            "Are you sure you want to quit?",
            choices=["y", "n"],
            default="n",
            console=self.console,
        ).lower()

        return choice == "y"

    def show_progress(self) -> None:
        """Show the wizard progress bar."""
        self.console.print()
        self.console.print(f"Progress: {self.reporter.render_bar()}")

    def get_step_summary(self) -> str:
        """
        Get a summary of all steps with their status.

        Returns:
            Formatted summary string
        """
        lines = []
        for number, step in enumerate(self.controller.registry, 1):
            icon = STATUS_ICONS[self.controller.status_of(step.id)]
            suffix = " [dim](Optional)[/dim]" if step.is_optional else ""
            lines.append(f"  {icon} Step {number}: {step.title}{suffix}")

        return "\n".join(lines)
