"""
Wizard Runner

Hosts a wizard controller in the terminal: renders each step through its
content provider and routes navigation prompts onto the controller.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .context import StepContext
from .controller import WizardController
from .errors import ConfigurationError, PersistenceError
from .navigator import Navigator, NavigationAction
from .steps.base import StepContent, StepDescriptor


class WizardRunner:
    """
    Orchestrates a wizard session in the terminal.

    The runner owns no wizard state; everything goes through the controller.
    """

    def __init__(
        self,
        controller: WizardController,
        console: Optional[Console] = None,
        title: str = "Setup Wizard",
        show_step_navigation: bool = True,
    ):
        """
        Initialize the wizard runner.

        Args:
            controller: The wizard controller to drive
            console: Rich console for output
            title: Wizard title shown in the banner
            show_step_navigation: Show the step list above each step
        """
        self.controller = controller
        self.console = console or Console()
        self.title = title
        self.show_step_navigation = show_step_navigation
        self.navigator = Navigator(controller, self.console)

    def run(self, resume: bool = False) -> bool:
        """
        Run the wizard until it completes or the user quits.

        Args:
            resume: Offer to resume from the gateway's saved draft

        Returns:
            True if the wizard completed
        """
        self.console.print(Panel.fit(f"[bold]{self.title}[/bold]", border_style="blue"))

        if resume and self.controller.gateway is not None:
            should_continue, snapshot = self.navigator.handle_resume(self.controller.gateway)
            if not should_continue:
                return False
            if snapshot is not None:
                self._restore(snapshot)

        while not self.controller.is_wizard_complete:
            step = self.controller.current_step

            self._show_step_header(step)
            self._show_errors()
            self._render_content(step)

            if self.controller.is_wizard_complete:
                break
            if self.controller.current_step_id != step.id:
                # The provider completed or skipped its step
                continue

            action = self.navigator.show_navigation_prompt()

            if action == NavigationAction.QUIT:
                if self.navigator.confirm_quit():
                    self._save_on_quit()
                    return False
                continue

            result = self.navigator.dispatch(action)
            if not result:
                self.console.print(f"\n[red]{result.message}[/red]")
                for error in result.errors:
                    self.console.print(f"  [red]• {error}[/red]")

        self._show_completion()
        return True

    def _restore(self, snapshot) -> None:
        try:
            self.controller.restore(snapshot)
        except ConfigurationError as e:
            self.console.print(f"[red]Saved draft does not match this wizard: {e}. Starting fresh.[/red]")
            self.controller.reset()
            return

        step = self.controller.current_step
        self.console.print(f"\n[green]Resuming from step {self.controller.current_index + 1}: {step.title}...[/green]\n")

    def _show_step_header(self, step: StepDescriptor) -> None:
        """Show header for a wizard step."""
        total = len(self.controller.registry)
        optional = " [dim](Optional)[/dim]" if step.is_optional else ""

        self.navigator.show_progress()
        if self.show_step_navigation:
            self.console.print(self.navigator.get_step_summary())

        self.console.print()
        self.console.rule(
            f"[bold]Step {self.controller.current_index + 1} of {total}: {step.title}[/bold]{optional}",
            style="cyan",
        )
        self.console.print()

        if step.description:
            self.console.print(f"[dim]{step.description}[/dim]")
            self.console.print()

    def _show_errors(self) -> None:
        validation = self.controller.current_validation
        if validation.is_valid or not validation.errors:
            return

        lines = "\n".join(f"• {error}" for error in validation.errors)
        self.console.print(Panel.fit(
            f"[red]{lines}[/red]",
            title="Please fix the following issues",
            border_style="red",
        ))

    def _render_content(self, step: StepDescriptor) -> None:
        content = step.content
        if content is None:
            return
        if isinstance(content, StepContent):
            content.attach(self.console)
        content.render(StepContext(self.controller, step.id))

    def _save_on_quit(self) -> None:
        if self.controller.gateway is None:
            self.console.print("\n[yellow]Wizard closed. Progress was not saved.[/yellow]")
            return
        try:
            self.controller.save_draft()
        except PersistenceError as e:
            self.console.print(f"\n[red]Could not save progress: {e}[/red]")
            return
        self.console.print("\n[yellow]Progress saved. Run 'onboarding wizard run --resume' to continue.[/yellow]")

    def _show_completion(self) -> None:
        """Show wizard completion message and a summary of collected data."""
        self.console.print()
        self.console.print(Panel.fit(
            f"[bold green]{self.title} Complete![/bold green]\n\n"
            f"{self.controller.progress.summary()}",
            title="✓ Success",
            border_style="green",
        ))

        self.console.print()
        self.console.print("[bold]Summary:[/bold]")
        self._show_data_summary()

    def _show_data_summary(self) -> None:
        """Show summary of collected step data."""
        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Step", style="dim")
        table.add_column("Status")
        table.add_column("Details")

        for step in self.controller.registry:
            status = self.controller.status_of(step.id).value
            data = self.controller.wizard_data.get(step.id)
            table.add_row(step.title, status, _describe(data))

        self.console.print(table)

    def export_data(self, output_file: Path) -> Path:
        """
        Export the collected step data to a YAML file.

        Args:
            output_file: File to write

        Returns:
            Path to the written file
        """
        output_file = Path(output_file)
        output_file.parent.mkdir(parents=True, exist_ok=True)

        document: Dict[str, Any] = {
            "current_step": self.controller.current_step_id,
            "complete": self.controller.is_wizard_complete,
            "completed_steps": [
                step.id for step in self.controller.registry
                if self.controller.is_step_completed(step.id)
            ],
            "data": dict(self.controller.wizard_data),
        }

        with open(output_file, "w") as f:
            yaml.safe_dump(document, f, default_flow_style=False, sort_keys=False)

        return output_file


def _describe(data: Any) -> str:
    if not data:
        return "-"
    if isinstance(data, dict):
        return ", ".join(f"{key}: {value}" for key, value in data.items())
    return str(data)
