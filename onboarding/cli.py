"""
Command-line interface for the onboarding wizard.

Provides commands for running the company onboarding wizard, inspecting
and clearing saved drafts, and writing a settings template.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table

from .config import ConfigError, ConfigLoader, WizardSettings
from .config.defaults import get_default_settings
from .wizard import (
    ConfigurationError,
    JsonFileGateway,
    Navigator,
    PersistenceError,
    WizardController,
    WizardRunner,
)
from .wizard.steps import company_onboarding_steps

console = Console()


def _load_settings(config: Optional[str], state_dir: Optional[str]) -> WizardSettings:
    try:
        settings = ConfigLoader(config).load().settings
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    if state_dir:
        try:
            settings = WizardSettings(**{**settings.model_dump(), "state_dir": state_dir})
        except ValidationError as e:
            console.print(f"[red]Invalid state directory: {e}[/red]")
            sys.exit(1)
    return settings


def _build_controller(settings: WizardSettings) -> WizardController:
    return WizardController(
        company_onboarding_steps(console),
        gateway=JsonFileGateway(settings.draft_path),
        allow_skipping=settings.allow_skipping,
        autosave=settings.autosave,
    )


# ============================================================
# Main CLI Group
# ============================================================

@click.group()
@click.version_option(version="1.0.0", prog_name="onboarding")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, verbose: bool):
    """
    Onboarding Wizard

    Guided, resumable multi-step setup for new company accounts.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ============================================================
# INIT Command
# ============================================================

@cli.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default="./onboarding.yaml",
    help="Settings file to write",
)
def init(output: str):
    """Write a settings file with the default values."""
    output_path = Path(output)

    if output_path.exists():
        if not Confirm.ask(f"[yellow]{output} already exists. Overwrite?[/yellow]", console=console):
            console.print("[red]Aborted.[/red]")
            return

    ConfigLoader.from_dict(get_default_settings()).save(output_path)
    console.print(f"[green]Settings written to[/green] [cyan]{output_path}[/cyan]")


# ============================================================
# STEPS Command
# ============================================================

@cli.command("steps")
def list_steps():
    """List the onboarding steps in order."""
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim")
    table.add_column("ID")
    table.add_column("Title")
    table.add_column("Optional")
    table.add_column("Description")

    for number, step in enumerate(company_onboarding_steps(console), 1):
        table.add_row(
            str(number),
            step.id,
            step.title,
            "yes" if step.is_optional else "no",
            step.description,
        )

    console.print(table)


# ============================================================
# WIZARD Commands
# ============================================================

@cli.group()
def wizard():
    """
    Run and manage the onboarding wizard.

    Run 'onboarding wizard run' to start, or add --resume to continue
    from a saved draft.
    """
    pass


@wizard.command("run")
@click.option("--resume", "-r", is_flag=True, help="Offer to resume from a saved draft")
@click.option("--config", "-c", type=click.Path(exists=True), help="Settings YAML file")
@click.option("--state-dir", type=click.Path(), envvar="ONBOARDING_STATE_DIR", help="Draft directory")
@click.option("--export", "-o", "export_path", type=click.Path(), help="Write collected data to YAML on completion")
def wizard_run(resume: bool, config: Optional[str], state_dir: Optional[str], export_path: Optional[str]):
    """Run the company onboarding wizard."""
    settings = _load_settings(config, state_dir)

    runner = WizardRunner(
        _build_controller(settings),
        console=console,
        title=settings.title,
        show_step_navigation=settings.show_step_navigation,
    )
    success = runner.run(resume=resume)

    if not success:
        sys.exit(1)

    if export_path:
        written = runner.export_data(Path(export_path))
        console.print(f"\nData exported to: [cyan]{written}[/cyan]")


@wizard.command("status")
@click.option("--config", "-c", type=click.Path(exists=True), help="Settings YAML file")
@click.option("--state-dir", type=click.Path(), envvar="ONBOARDING_STATE_DIR", help="Draft directory")
def wizard_status(config: Optional[str], state_dir: Optional[str]):
    """Show progress stored in the saved draft."""
    settings = _load_settings(config, state_dir)
    gateway = JsonFileGateway(settings.draft_path)

    try:
        snapshot = gateway.load()
    except PersistenceError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    if snapshot is None:
        console.print("[yellow]No saved draft found.[/yellow]")
        return

    try:
        controller = WizardController(company_onboarding_steps(console), restored_state=snapshot)
    except ConfigurationError as e:
        console.print(f"[red]Saved draft does not match the onboarding steps: {e}[/red]")
        sys.exit(1)

    navigator = Navigator(controller, console)
    console.print(Panel.fit(
        f"Current step: [cyan]{controller.current_step.title}[/cyan]\n"
        f"Progress: [cyan]{controller.progress.summary()}[/cyan]\n"
        f"Saved: [cyan]{snapshot.saved_at or 'N/A'}[/cyan]\n"
        f"File: [cyan]{gateway.path}[/cyan]",
        title="Saved Draft",
        border_style="blue",
    ))
    console.print(navigator.get_step_summary())


@wizard.command("reset")
@click.option("--config", "-c", type=click.Path(exists=True), help="Settings YAML file")
@click.option("--state-dir", type=click.Path(), envvar="ONBOARDING_STATE_DIR", help="Draft directory")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
def wizard_reset(config: Optional[str], state_dir: Optional[str], yes: bool):
    """Discard the saved draft."""
    settings = _load_settings(config, state_dir)
    gateway = JsonFileGateway(settings.draft_path)

    if not gateway.has_draft():
        console.print("[yellow]No saved draft found.[/yellow]")
        return

    if not yes and not Confirm.ask("Discard saved onboarding progress?", default=False, console=console):
        console.print("[red]Aborted.[/red]")
        return

    gateway.clear()
    console.print("[green]Saved draft removed.[/green]")


# ============================================================
# Entry Point
# ============================================================

if __name__ == "__main__":
    cli()
