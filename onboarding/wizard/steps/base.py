"""
Step Contract

Step descriptors, validation results and the content provider
interface that every wizard step plugs into.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, List, Optional

from rich.console import Console
from rich.prompt import Prompt, Confirm
from rich.table import Table

if TYPE_CHECKING:
    from ..context import StepContext


@dataclass
class ValidationResult:
    """Result of running a step's validation gate."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def fail(cls, *errors: str) -> "ValidationResult":
        return cls(is_valid=False, errors=list(errors))

    def copy(self) -> "ValidationResult":
        return ValidationResult(is_valid=self.is_valid, errors=list(self.errors))


Validator = Callable[[Any], ValidationResult]


class StepContent(ABC):
    """
    Capability interface for step content providers.

    A provider renders its step and reports back through the
    StepContext it is given: set_data, set_valid, on_complete,
    on_skip and save_draft. Providers never touch wizard state
    directly.
    """

    def __init__(self, console: Optional[Console] = None):
        """
        Initialize the provider.

        Args:
            console: Rich console used by the prompt helpers
        """
        self.console = console or Console()

    def attach(self, console: Console) -> None:
        """Bind the provider to the host's console."""
        self.console = console

    @abstractmethod
    def render(self, context: "StepContext") -> Any:
        """
        Render this step and drive it through the context.

        Args:
            context: The step context for the current step

        Returns:
            Whatever the host needs from rendering (unused by the engine)
        """
        pass

    # Utility methods for common prompts

    def prompt_text(
        self,
        prompt: str,
        default: str = "",
        required: bool = True,
        validator: Optional[Callable[[str], Optional[str]]] = None,
    ) -> str:
        """
        Prompt for text input.

        Args:
            prompt: Prompt text
            default: Default value
            required: Whether input is required
            validator: Optional function returning an error message

        Returns:
            User input string
        """
        while True:
            value = Prompt.ask(prompt, default=default or "", console=self.console)

            if required and not value:
                self.console.print("[red]This field is required.[/red]")
                continue

            if validator and value:
                error = validator(value)
                if error:
                    self.console.print(f"[red]{error}[/red]")
                    continue

            return value

    def prompt_email(self, prompt: str, default: str = "") -> str:
        """Prompt for an email address."""
        def validate_email(value: str) -> Optional[str]:
            if not EMAIL_PATTERN.match(value):
                return "Invalid email address (e.g., billing@example.com)"
            return None

        return self.prompt_text(prompt, default, validator=validate_email)

    def prompt_choice(
        self,
        prompt: str,
        choices: List[str],
        default: Optional[str] = None,
    ) -> str:
        """
        Prompt for a choice from a list.

        Args:
            prompt: Prompt text
            choices: List of valid choices
            default: Default choice

        Returns:
            Selected choice
        """
        self.console.print()
        for i, choice in enumerate(choices, 1):
            self.console.print(f"  [{i}] {choice}")
        self.console.print()

        while True:
            selection = Prompt.ask(
                prompt,
                default=str(choices.index(default) + 1) if default in choices else "1",
                console=self.console,
            )

            try:
                idx = int(selection) - 1
                if 0 <= idx < len(choices):
                    return choices[idx]
            except ValueError:
                for choice in choices:
                    if choice.lower() == selection.lower():
                        return choice

            self.console.print("[red]Invalid selection. Please choose a number from the list.[/red]")

    def prompt_confirm(self, prompt: str, default: bool = True) -> bool:
        """Prompt for yes/no confirmation."""
        return Confirm.ask(prompt, default=default, console=self.console)

    def show_table(self, title: str, columns: List[str], rows: List[List[str]]) -> None:
        """Display a table."""
        table = Table(title=title, show_header=True, header_style="bold cyan")

        for col in columns:
            table.add_column(col)

        for row in rows:
            table.add_row(*row)

        self.console.print(table)


class FunctionContent(StepContent):
    """Content provider backed by a plain callable taking the context."""

    def __init__(self, func: Callable[["StepContext"], Any], console: Optional[Console] = None):
        super().__init__(console)
        self.func = func

    def render(self, context: "StepContext") -> Any:
        return self.func(context)


@dataclass(frozen=True)
class StepDescriptor:
    """
    Immutable description of one wizard step.

    A step without a validator is always valid. The content reference is
    opaque to the engine and only used by hosts.
    """
    id: str
    title: str
    description: str = ""
    is_optional: bool = False
    can_skip: bool = False
    validate: Optional[Validator] = field(default=None, compare=False)
    content: Optional[StepContent] = field(default=None, compare=False)

    @property
    def skippable(self) -> bool:
        """Whether the pointer may pass this step without completing it."""
        return self.can_skip or self.is_optional

    def run_validation(self, data: Any) -> ValidationResult:
        """Run this step's validation gate against the given data."""
        if self.validate is None:
            return ValidationResult.ok()
        return self.validate(data)


EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$")
