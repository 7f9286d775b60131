"""
Draft Persistence

Persistence port for wizard drafts and the adapters shipped with the
engine: an in-memory gateway and a JSON file gateway.
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .errors import PersistenceError
from .state import DraftSnapshot

logger = logging.getLogger(__name__)


class PersistenceGateway(ABC):
    """
    Port receiving and returning serialized wizard progress.

    The controller treats save() as fire-and-forget: it never retries and
    never blocks on the result.
    """

    @abstractmethod
    def save(self, snapshot: DraftSnapshot) -> None:
        """Store a draft snapshot, replacing any previous one."""
        pass

    @abstractmethod
    def load(self) -> Optional[DraftSnapshot]:
        """Return the stored draft, or None if there is none."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Discard the stored draft."""
        pass

    def has_draft(self) -> bool:
        """Check if a draft is stored."""
        return self.load() is not None


class InMemoryGateway(PersistenceGateway):
    """Keeps drafts in memory. Records every save for inspection."""

    def __init__(self, snapshot: Optional[DraftSnapshot] = None):
        self.saved: List[DraftSnapshot] = []
        self._current = snapshot

    def save(self, snapshot: DraftSnapshot) -> None:
        self._current = snapshot.model_copy(deep=True)
        self.saved.append(self._current)

    def load(self) -> Optional[DraftSnapshot]:
        if self._current is None:
            return None
        return self._current.model_copy(deep=True)

    def clear(self) -> None:
        self._current = None


class JsonFileGateway(PersistenceGateway):
    """
    Stores the draft as a JSON document on disk.

    The file holds the camelCase snapshot dictionary, so drafts written by
    other hosts of the same wizard can be resumed here.
    """

    def __init__(self, path: Path):
        """
        Initialize the gateway.

        Args:
            path: Draft file location. Parent directories are created on save.
        """
        self.path = Path(path)

    def save(self, snapshot: DraftSnapshot) -> None:
        """
        Write the snapshot to disk.

        The draft is replaced in one step; a failed save leaves the previous
        draft intact.

        Raises:
            PersistenceError: If the snapshot cannot be serialized or written
        """
        try:
            content = json.dumps(snapshot.to_dict(), indent=2)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Cannot serialize draft for {self.path}: {e}") from e

        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w") as f:
                f.write(content)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise PersistenceError(f"Cannot write draft to {self.path}: {e}") from e
        logger.debug("Draft saved to %s", self.path)

    def load(self) -> Optional[DraftSnapshot]:
        """
        Read the snapshot from disk.

        Returns:
            The stored snapshot, or None if no draft file exists

        Raises:
            PersistenceError: If the file is unreadable or malformed
        """
        if not self.path.exists():
            return None

        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Cannot read draft from {self.path}: {e}") from e

        try:
            return DraftSnapshot.from_dict(data)
        except ValidationError as e:
            raise PersistenceError(f"Invalid draft in {self.path}: {e}") from e

    def clear(self) -> None:
        """Remove the draft file."""
        if self.path.exists():
            self.path.unlink()
            logger.debug("Draft removed from %s", self.path)

    def has_draft(self) -> bool:
        return self.path.exists()

    def get_draft_info(self) -> Optional[Dict[str, Any]]:
        """Get summary info about the saved draft, or None if unavailable."""
        try:
            snapshot = self.load()
        except PersistenceError:
            return None
        if snapshot is None:
            return None

        return {
            "current_step_id": snapshot.current_step_id,
            "completed_steps": len(snapshot.completed_step_ids),
            "saved_at": snapshot.saved_at or "",
            "path": str(self.path),
        }
