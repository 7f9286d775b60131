"""
Step Registry

Ordered, immutable catalog of step descriptors.
"""

from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .errors import ConfigurationError
from .steps.base import StepDescriptor


class StepRegistry:
    """
    Ordered catalog of wizard steps, fixed at construction.

    Navigation order is exactly registration order.
    """

    def __init__(self, steps: Sequence[StepDescriptor]):
        """
        Initialize the registry.

        Args:
            steps: Step descriptors in wizard order

        Raises:
            ConfigurationError: If no steps are given or ids repeat
        """
        if not steps:
            raise ConfigurationError("A wizard needs at least one step")

        self._steps: Tuple[StepDescriptor, ...] = tuple(steps)
        self._index: Dict[str, int] = {}

        for position, step in enumerate(self._steps):
            if not isinstance(step, StepDescriptor):
                raise ConfigurationError(
                    f"Step at position {position} is not a StepDescriptor: {step!r}"
                )
            if step.id in self._index:
                raise ConfigurationError(f"Duplicate step id: {step.id}")
            self._index[step.id] = position

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[StepDescriptor]:
        return iter(self._steps)

    def __contains__(self, step_id: object) -> bool:
        return step_id in self._index

    def __getitem__(self, position: int) -> StepDescriptor:
        return self._steps[position]

    @property
    def ids(self) -> List[str]:
        """Step ids in registry order."""
        return [step.id for step in self._steps]

    @property
    def first(self) -> StepDescriptor:
        return self._steps[0]

    @property
    def last(self) -> StepDescriptor:
        return self._steps[-1]

    @property
    def required_steps(self) -> List[StepDescriptor]:
        """Steps that are not optional."""
        return [step for step in self._steps if not step.is_optional]

    def get(self, step_id: str) -> Optional[StepDescriptor]:
        """Get a step by id, or None if it is not registered."""
        position = self._index.get(step_id)
        if position is None:
            return None
        return self._steps[position]

    def index_of(self, step_id: str) -> int:
        """
        Get the registry position of a step.

        Raises:
            KeyError: If the step is not registered
        """
        return self._index[step_id]

    def next_after(self, step_id: str) -> Optional[StepDescriptor]:
        """Get the step following step_id, or None at the end."""
        position = self._index[step_id] + 1
        if position < len(self._steps):
            return self._steps[position]
        return None

    def previous_before(self, step_id: str) -> Optional[StepDescriptor]:
        """Get the step preceding step_id, or None at the start."""
        position = self._index[step_id] - 1
        if position >= 0:
            return self._steps[position]
        return None
