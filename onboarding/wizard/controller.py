"""
Wizard Controller

The wizard state machine. Owns the current-step pointer, the completed
step set and the per-step data map, and is the only thing that mutates
them.

Every operation is synchronous. Invalid operations are rejected with an
OperationResult and leave progress untouched; only construction raises.
"""

import copy
import logging
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from .errors import ConfigurationError, OperationResult, PersistenceError, RejectionKind
from .persistence import PersistenceGateway
from .progress import ProgressView, compute_progress
from .registry import StepRegistry
from .state import DraftSnapshot, StepStatus, WizardPhase, WizardState, timestamp
from .steps.base import StepDescriptor, ValidationResult

logger = logging.getLogger(__name__)

RestoredState = Union[DraftSnapshot, Mapping[str, Any]]


class WizardController:
    """
    Drives a wizard through its registered steps.

    Completing a step marks it done and moves the pointer to the next
    registered step. Forward navigation only reaches steps whose
    predecessor is completed or optional; backward navigation and jumps
    to completed steps are always allowed. Accepted navigation emits a
    draft snapshot to the gateway, if one is attached.
    """

    def __init__(
        self,
        steps: Union[StepRegistry, Sequence[StepDescriptor]],
        initial_step_id: Optional[str] = None,
        restored_state: Optional[RestoredState] = None,
        gateway: Optional[PersistenceGateway] = None,
        allow_skipping: bool = True,
        autosave: bool = True,
    ):
        """
        Initialize the controller.

        Args:
            steps: Step registry or descriptors in wizard order
            initial_step_id: Step to start on instead of the first one
            restored_state: Draft snapshot to resume from
            gateway: Persistence gateway receiving draft snapshots
            allow_skipping: Whether skippable steps may be skipped at all
            autosave: Emit a snapshot to the gateway after each navigation

        Raises:
            ConfigurationError: If the steps or the start pointer are invalid
        """
        self.gateway = gateway
        self.allow_skipping = allow_skipping
        self.autosave = autosave
        self.initialize(steps, initial_step_id, restored_state)

    def initialize(
        self,
        steps: Union[StepRegistry, Sequence[StepDescriptor]],
        initial_step_id: Optional[str] = None,
        restored_state: Optional[RestoredState] = None,
    ) -> None:
        """
        (Re)initialize the wizard, fresh or from a restored snapshot.

        Restored data is taken verbatim; only the step the pointer lands on
        is re-validated. A restored snapshot carries its own pointer, so it
        cannot be combined with initial_step_id.

        Raises:
            ConfigurationError: If the steps or the start pointer are invalid,
                or both initial_step_id and restored_state are given
        """
        registry = steps if isinstance(steps, StepRegistry) else StepRegistry(steps)

        if initial_step_id is not None and initial_step_id not in registry:
            raise ConfigurationError(f"Initial step is not registered: {initial_step_id}")

        if initial_step_id is not None and restored_state is not None:
            raise ConfigurationError("initial_step_id and restored_state are mutually exclusive")

        if restored_state is not None:
            snapshot = self._coerce_snapshot(restored_state)
            self._check_snapshot(registry, snapshot)
            state = WizardState.from_snapshot(snapshot)
            # A finished wizard is saved with its pointer on the completed last step
            last_id = registry.last.id
            if state.current_step_id == last_id and state.is_completed(last_id):
                state.phase = WizardPhase.COMPLETE
        else:
            state = WizardState(current_step_id=initial_step_id or registry.first.id)

        self.registry = registry
        self._state = state
        self._validation: Dict[str, ValidationResult] = {}
        self._enter_step(state.current_step_id)

        logger.debug(
            "Wizard initialized at %s (%d steps, %d completed)",
            state.current_step_id,
            len(registry),
            len(state.completed_step_ids),
        )

    def restore(self, snapshot: RestoredState) -> None:
        """Reinitialize from a draft snapshot with the same registry."""
        self.initialize(self.registry, restored_state=snapshot)

    @staticmethod
    def _coerce_snapshot(restored_state: RestoredState) -> DraftSnapshot:
        if isinstance(restored_state, DraftSnapshot):
            return restored_state
        try:
            return DraftSnapshot.from_dict(dict(restored_state))
        except (ValidationError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid restored state: {e}") from e

    @staticmethod
    def _check_snapshot(registry: StepRegistry, snapshot: DraftSnapshot) -> None:
        if snapshot.current_step_id not in registry:
            raise ConfigurationError(
                f"Restored pointer references unknown step: {snapshot.current_step_id}"
            )

        unknown = [sid for sid in snapshot.completed_step_ids if sid not in registry]
        unknown += [sid for sid in snapshot.wizard_data if sid not in registry]
        if unknown:
            raise ConfigurationError(
                f"Restored state references unknown steps: {', '.join(sorted(set(unknown)))}"
            )

    # ------------------------------------------------------------------
    # Read API
    # ------------------------------------------------------------------

    @property
    def state(self) -> WizardState:
        """The underlying state. Treat as read-only."""
        return self._state

    @property
    def current_step_id(self) -> str:
        return self._state.current_step_id

    @property
    def current_step(self) -> StepDescriptor:
        return self.registry.get(self._state.current_step_id)

    @property
    def current_index(self) -> int:
        return self.registry.index_of(self._state.current_step_id)

    @property
    def completed_step_ids(self) -> FrozenSet[str]:
        return frozenset(self._state.completed_step_ids)

    @property
    def skipped_step_ids(self) -> Tuple[str, ...]:
        return tuple(self._state.skipped_step_ids)

    @property
    def wizard_data(self) -> Mapping[str, Any]:
        return MappingProxyType(self._state.step_data)

    @property
    def phase(self) -> WizardPhase:
        return self._state.phase

    @property
    def is_wizard_complete(self) -> bool:
        return self._state.phase == WizardPhase.COMPLETE

    @property
    def progress(self) -> ProgressView:
        return compute_progress(
            self.registry, self._state.completed_step_ids, self.is_wizard_complete
        )

    @property
    def progress_percentage(self) -> float:
        return self.progress.percentage

    @property
    def is_first_step(self) -> bool:
        return self.current_index == 0

    @property
    def is_last_step(self) -> bool:
        return self.current_index == len(self.registry) - 1

    @property
    def can_proceed_to_next(self) -> bool:
        """Whether the current step is completed or optional."""
        return self._state.is_completed(self.current_step_id) or self.current_step.is_optional

    @property
    def current_validation(self) -> ValidationResult:
        """Cached validation result of the current step."""
        return self.validation_for(self.current_step_id)

    def validation_for(self, step_id: str) -> ValidationResult:
        """
        Get the cached validation result for a step.

        Steps not validated since they were last entered report valid.
        """
        result = self._validation.get(step_id)
        if result is None:
            return ValidationResult.ok()
        return result.copy()

    def get_step_data(self, step_id: str) -> Any:
        """Stored data for a step, or an empty dict if it has none."""
        return self._state.step_data.get(step_id, {})

    def is_step_completed(self, step_id: str) -> bool:
        return self._state.is_completed(step_id)

    def status_of(self, step_id: str) -> StepStatus:
        return self._state.status_of(step_id)

    def snapshot(self) -> DraftSnapshot:
        """Current progress as a snapshot, without touching the gateway."""
        return self._state.to_snapshot()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def set_current_step(self, step_id: str) -> OperationResult:
        """
        Move the pointer to the current step or a completed step.

        Forward jumps to steps that are not completed are rejected.
        """
        if step_id not in self.registry:
            return self._reject(RejectionKind.UNKNOWN_STEP, f"Unknown step: {step_id}", step_id)

        if step_id == self.current_step_id:
            return OperationResult.accepted(step_id)

        if not self._state.is_completed(step_id):
            return self._reject(
                RejectionKind.NAVIGATION,
                f"Cannot jump to step '{step_id}': it has not been completed",
                step_id,
            )

        self._move_to(step_id)
        return OperationResult.accepted(step_id)

    def set_step_data(self, step_id: str, data: Any) -> OperationResult:
        """
        Replace a step's data and re-run its validation gate.

        Never completes or advances. The result carries the new validation
        errors, if any.
        """
        self._mark_started()

        step = self.registry.get(step_id)
        if step is None:
            return self._reject(RejectionKind.UNKNOWN_STEP, f"Unknown step: {step_id}", step_id)

        self._state.step_data[step_id] = data
        validation = self._validate(step, data)

        return OperationResult.accepted(
            step_id,
            message="" if validation.is_valid else "Step data is invalid",
            errors=validation.errors,
        )

    def set_validation(self, step_id: str, is_valid: bool, errors: Optional[Sequence[str]] = None) -> OperationResult:
        """
        Override the displayed validation result for a step.

        Completion is still gated by the step's own validator.
        """
        if step_id not in self.registry:
            return self._reject(RejectionKind.UNKNOWN_STEP, f"Unknown step: {step_id}", step_id)

        self._validation[step_id] = ValidationResult(is_valid=is_valid, errors=list(errors or []))
        return OperationResult.accepted(step_id)

    def complete_step(self, step_id: str, data: Any = None) -> OperationResult:
        """
        Validate and complete a step, then advance to the next one.

        Args:
            step_id: The current step or a previously completed step
            data: Data submitted for the step

        Returns:
            OperationResult. Invalid data on a mandatory step is rejected with
            the validation errors and leaves progress unchanged.
        """
        self._mark_started()

        step = self.registry.get(step_id)
        if step is None:
            return self._reject(RejectionKind.UNKNOWN_STEP, f"Unknown step: {step_id}", step_id)

        if step_id != self.current_step_id and not self._state.is_completed(step_id):
            return self._reject(
                RejectionKind.NAVIGATION,
                f"Cannot complete step '{step_id}' before reaching it",
                step_id,
            )

        if data is None:
            data = {}

        validation = self._validate(step, data)
        if not validation.is_valid and not step.is_optional:
            return self._reject(
                RejectionKind.VALIDATION,
                f"Step '{step_id}' failed validation",
                step_id,
                validation.errors,
            )

        self._state.step_data[step_id] = data
        self._state.mark_completed(step_id)
        logger.info("Step completed: %s", step_id)

        next_step = self.registry.next_after(step_id)
        if next_step is not None:
            self._move_to(next_step.id)
        else:
            self._state.phase = WizardPhase.COMPLETE
            logger.info("Wizard complete (%d steps completed)", len(self._state.completed_step_ids))
            self._autosave()

        return OperationResult.accepted(step_id)

    def skip_step(self, step_id: str) -> OperationResult:
        """
        Move past the current step without completing it.

        Only optional or skippable steps can be skipped. Skipping the last
        step leaves the pointer where it is.
        """
        step = self.registry.get(step_id)
        if step is None:
            return self._reject(RejectionKind.UNKNOWN_STEP, f"Unknown step: {step_id}", step_id)

        if self.is_wizard_complete:
            return self._reject(RejectionKind.COMPLETED, "Wizard is already complete", step_id)

        if step_id != self.current_step_id:
            return self._reject(
                RejectionKind.NAVIGATION,
                f"Only the current step can be skipped, not '{step_id}'",
                step_id,
            )

        if not step.skippable:
            return self._reject(RejectionKind.SKIP, f"Step '{step_id}' cannot be skipped", step_id)

        if not self.allow_skipping:
            return self._reject(RejectionKind.SKIP, "Skipping is disabled for this wizard", step_id)

        self._mark_started()
        self._state.mark_skipped(step_id)
        logger.info("Step skipped: %s", step_id)

        next_step = self.registry.next_after(step_id)
        if next_step is not None:
            self._move_to(next_step.id)

        return OperationResult.accepted(step_id)

    def previous_step(self) -> OperationResult:
        """Move the pointer back one step."""
        previous = self.registry.previous_before(self.current_step_id)
        if previous is None:
            return self._reject(
                RejectionKind.NAVIGATION, "Already at the first step", self.current_step_id
            )

        self._move_to(previous.id)
        return OperationResult.accepted(previous.id)

    def next_step(self) -> OperationResult:
        """Move the pointer forward one step once the current step allows it."""
        current = self.current_step

        if not self.can_proceed_to_next:
            return self._reject(
                RejectionKind.NAVIGATION,
                f"Complete step '{current.id}' before moving on",
                current.id,
            )

        following = self.registry.next_after(current.id)
        if following is None:
            return self._reject(RejectionKind.NAVIGATION, "Already at the last step", current.id)

        if not self._state.is_completed(current.id):
            self._state.mark_skipped(current.id)

        self._move_to(following.id)
        return OperationResult.accepted(following.id)

    def save_draft(self, step_id: Optional[str] = None, data: Any = None) -> OperationResult:
        """
        Export a full draft snapshot to the gateway.

        Progress state is not changed. When data is given it is merged into
        the exported snapshot for the target step only.

        Args:
            step_id: Step the draft should resume on. Defaults to the current step
            data: Unsaved data for that step

        Returns:
            OperationResult carrying the exported snapshot

        Raises:
            PersistenceError: If the gateway fails to store the draft
        """
        target = step_id or self.current_step_id
        if target not in self.registry:
            return self._reject(RejectionKind.UNKNOWN_STEP, f"Unknown step: {target}", target)

        snapshot = self._state.to_snapshot()
        snapshot.current_step_id = target
        if data is not None:
            snapshot.wizard_data[target] = copy.deepcopy(data)
        snapshot.saved_at = timestamp()

        if self.gateway is not None:
            self.gateway.save(snapshot)
        self._state.last_saved_at = snapshot.saved_at

        logger.debug("Draft exported at step %s", target)
        result = OperationResult.accepted(target)
        result.snapshot = snapshot
        return result

    def reset(self) -> None:
        """Return to a fresh wizard on the first registered step."""
        self._state = WizardState(current_step_id=self.registry.first.id)
        self._validation = {}
        self._enter_step(self._state.current_step_id)

        if self.gateway is not None:
            try:
                self.gateway.clear()
            except PersistenceError as e:
                logger.warning("Could not clear saved draft: %s", e)

        logger.info("Wizard reset")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _validate(self, step: StepDescriptor, data: Any) -> ValidationResult:
        result = step.run_validation(data)
        self._validation[step.id] = result.copy()
        return result

    def _enter_step(self, step_id: str) -> None:
        """Reload the step's stored data and re-run its gate."""
        self._validate(self.registry.get(step_id), self.get_step_data(step_id))

    def _move_to(self, step_id: str) -> None:
        old = self._state.current_step_id
        self._state.current_step_id = step_id
        self._enter_step(step_id)
        logger.debug("Navigated: %s -> %s", old, step_id)
        self._autosave()

    def _mark_started(self) -> None:
        if self._state.phase == WizardPhase.NOT_STARTED:
            self._state.phase = WizardPhase.IN_PROGRESS

    def _autosave(self) -> None:
        if self.gateway is None or not self.autosave:
            return

        snapshot = self._state.to_snapshot()
        snapshot.saved_at = timestamp()
        try:
            self.gateway.save(snapshot)
        except PersistenceError as e:
            logger.warning("Automatic draft save failed: %s", e)
            return
        self._state.last_saved_at = snapshot.saved_at

    def _reject(
        self,
        kind: RejectionKind,
        message: str,
        step_id: Optional[str] = None,
        errors: Optional[Sequence[str]] = None,
    ) -> OperationResult:
        logger.warning("Rejected (%s): %s", kind.value, message)
        return OperationResult.rejected(kind, message, step_id, list(errors or []))
