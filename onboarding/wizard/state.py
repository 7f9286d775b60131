"""
Wizard State

Progress data owned by the wizard controller and the snapshot shape
used to persist and resume drafts.
"""

import copy
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WizardPhase(str, Enum):
    """Wizard-level completion state."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


class StepStatus(str, Enum):
    """Display status of a single step, derived from wizard state."""
    PENDING = "pending"
    CURRENT = "current"
    COMPLETED = "completed"
    SKIPPED = "skipped"


class DraftSnapshot(BaseModel):
    """
    Serialized wizard progress.

    This is the only shape exchanged with persistence gateways. It
    serializes with camelCase keys: currentStepId, completedStepIds,
    wizardData and the optional savedAt timestamp.
    """

    model_config = ConfigDict(populate_by_name=True)

    current_step_id: str = Field(..., alias="currentStepId", description="Step the pointer is on")
    completed_step_ids: List[str] = Field(
        default_factory=list,
        alias="completedStepIds",
        description="Completed step ids in completion order",
    )
    wizard_data: Dict[str, Any] = Field(
        default_factory=dict,
        alias="wizardData",
        description="Per-step data keyed by step id",
    )
    saved_at: Optional[str] = Field(None, alias="savedAt", description="When the draft was exported")

    @field_validator("completed_step_ids")
    @classmethod
    def dedupe_completed(cls, v: List[str]) -> List[str]:
        """Completed ids form a set; keep the first occurrence of each."""
        return list(dict.fromkeys(v))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase wire dictionary."""
        data = self.model_dump(by_alias=True)
        if data.get("savedAt") is None:
            data.pop("savedAt", None)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DraftSnapshot":
        """Create a snapshot from a wire dictionary."""
        return cls.model_validate(data)


@dataclass
class WizardState:
    """
    Mutable wizard progress.

    Only the controller mutates this object. completed_step_ids only grows
    until the state is replaced by a fresh one on reset.
    """
    current_step_id: str
    completed_step_ids: List[str] = field(default_factory=list)
    skipped_step_ids: List[str] = field(default_factory=list)
    step_data: Dict[str, Any] = field(default_factory=dict)
    phase: WizardPhase = WizardPhase.NOT_STARTED
    last_saved_at: Optional[str] = None

    def is_completed(self, step_id: str) -> bool:
        return step_id in self.completed_step_ids

    def mark_completed(self, step_id: str) -> None:
        """Add a step to the completed set. Repeated calls are no-ops."""
        if step_id not in self.completed_step_ids:
            self.completed_step_ids.append(step_id)
        if step_id in self.skipped_step_ids:
            self.skipped_step_ids.remove(step_id)

    def mark_skipped(self, step_id: str) -> None:
        """Record that the pointer passed a step without completing it."""
        if step_id not in self.completed_step_ids and step_id not in self.skipped_step_ids:
            self.skipped_step_ids.append(step_id)

    def status_of(self, step_id: str) -> StepStatus:
        """Get the display status of a step."""
        if step_id == self.current_step_id and self.phase != WizardPhase.COMPLETE:
            return StepStatus.CURRENT
        if step_id in self.completed_step_ids:
            return StepStatus.COMPLETED
        if step_id in self.skipped_step_ids:
            return StepStatus.SKIPPED
        return StepStatus.PENDING

    def to_snapshot(self) -> DraftSnapshot:
        """Export the persisted fields as a snapshot."""
        return DraftSnapshot(
            current_step_id=self.current_step_id,
            completed_step_ids=list(self.completed_step_ids),
            wizard_data=copy.deepcopy(self.step_data),
            saved_at=self.last_saved_at,
        )

    @classmethod
    def from_snapshot(cls, snapshot: DraftSnapshot) -> "WizardState":
        """Restore state verbatim from a snapshot."""
        state = cls(
            current_step_id=snapshot.current_step_id,
            completed_step_ids=list(snapshot.completed_step_ids),
            step_data=copy.deepcopy(snapshot.wizard_data),
            last_saved_at=snapshot.saved_at,
        )
        if state.completed_step_ids or state.step_data:
            state.phase = WizardPhase.IN_PROGRESS
        return state


def timestamp() -> str:
    """Current time as an ISO-8601 string."""
    return datetime.now().isoformat()
