"""
Wizard Errors

Exception types and per-operation result objects for the wizard engine.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .state import DraftSnapshot


class WizardError(Exception):
    """Base class for wizard engine errors."""
    pass


class ConfigurationError(WizardError):
    """Invalid step registry or restore pointer. Raised at construction."""
    pass


class PersistenceError(WizardError):
    """A draft could not be written, read or decoded."""
    pass


class RejectionKind(str, Enum):
    """Why an operation was rejected."""
    VALIDATION = "validation"
    NAVIGATION = "navigation"
    SKIP = "skip"
    UNKNOWN_STEP = "unknown_step"
    COMPLETED = "completed"


@dataclass
class OperationResult:
    """
    Outcome of a controller operation.

    Rejected operations never change wizard progress. The result is truthy
    only when the operation was accepted.
    """
    success: bool
    step_id: Optional[str] = None
    message: str = ""
    errors: List[str] = field(default_factory=list)
    rejection: Optional[RejectionKind] = None
    snapshot: Optional["DraftSnapshot"] = None

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def accepted(
        cls,
        step_id: Optional[str] = None,
        message: str = "",
        errors: Optional[List[str]] = None,
    ) -> "OperationResult":
        return cls(success=True, step_id=step_id, message=message, errors=list(errors or []))

    @classmethod
    def rejected(
        cls,
        kind: RejectionKind,
        message: str,
        step_id: Optional[str] = None,
        errors: Optional[List[str]] = None,
    ) -> "OperationResult":
        return cls(
            success=False,
            step_id=step_id,
            message=message,
            errors=list(errors or []),
            rejection=kind,
        )
