"""
Step Context

The object a content provider receives when rendering a step. All of
its mutators route back into the wizard controller.
"""

from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Sequence

from .errors import OperationResult

if TYPE_CHECKING:
    from .controller import WizardController


class StepContext:
    """
    View of one step handed to its content provider.

    The context is bound to a step id; reads always reflect the
    controller's latest state.
    """

    def __init__(self, controller: "WizardController", step_id: str):
        """
        Initialize the context.

        Args:
            controller: The wizard controller that owns the state
            step_id: The step this context is bound to
        """
        self.controller = controller
        self.step_id = step_id

    @property
    def step(self):
        return self.controller.registry.get(self.step_id)

    @property
    def current_data(self) -> Any:
        return self.controller.get_step_data(self.step_id)

    @property
    def all_data(self) -> Mapping[str, Any]:
        return self.controller.wizard_data

    @property
    def is_valid(self) -> bool:
        return self.controller.validation_for(self.step_id).is_valid

    @property
    def errors(self) -> List[str]:
        return self.controller.validation_for(self.step_id).errors

    def set_data(self, data: Any) -> OperationResult:
        """Replace this step's data and re-validate it."""
        return self.controller.set_step_data(self.step_id, data)

    def set_valid(self, valid: bool, errors: Optional[Sequence[str]] = None) -> OperationResult:
        """Report validity computed by the provider itself."""
        return self.controller.set_validation(self.step_id, valid, errors)

    def on_complete(self) -> OperationResult:
        """Submit the current data and complete this step."""
        return self.controller.complete_step(self.step_id, self.current_data)

    def on_skip(self) -> OperationResult:
        return self.controller.skip_step(self.step_id)

    def save_draft(self, data: Any = None) -> OperationResult:
        """Export a draft resuming on this step."""
        return self.controller.save_draft(self.step_id, data)
