"""
Pydantic models for wizard settings validation.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .defaults import DEFAULT_STATE_DIR, DRAFT_FILENAME


class WizardSettings(BaseModel):
    """
    Settings for hosting a wizard.

    Mirrors the host options of the wizard UI (title, skipping, step
    navigation) plus where drafts are stored.
    """

    title: str = Field(default="Setup Wizard", description="Title shown in the wizard banner")
    allow_skipping: bool = Field(default=True, description="Allow skippable steps to be skipped")
    show_step_navigation: bool = Field(default=True, description="Show the step list above each step")
    autosave: bool = Field(default=True, description="Save a draft after every navigation")
    state_dir: Path = Field(default=DEFAULT_STATE_DIR, description="Directory for draft files")
    draft_filename: str = Field(default=DRAFT_FILENAME, description="Draft file name")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title must not be empty")
        return v

    @field_validator("state_dir", mode="before")
    @classmethod
    def expand_state_dir(cls, v: Optional[object]) -> object:
        """Expand '~' in configured state directories."""
        if isinstance(v, str):
            return Path(v).expanduser()
        return v

    @field_validator("draft_filename")
    @classmethod
    def validate_draft_filename(cls, v: str) -> str:
        if not v or "/" in v or "\\" in v:
            raise ValueError(f"Draft filename must be a plain file name: {v!r}")
        return v

    @property
    def draft_path(self) -> Path:
        """Full path of the draft file."""
        return self.state_dir / self.draft_filename
