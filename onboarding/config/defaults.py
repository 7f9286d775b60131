"""
Default settings for the onboarding wizard.
"""

from pathlib import Path
from typing import Any, Dict

STATE_DIR_ENV = "ONBOARDING_STATE_DIR"
DEFAULT_STATE_DIR = Path.home() / ".onboarding"
DRAFT_FILENAME = "wizard_draft.json"


def get_default_settings() -> Dict[str, Any]:
    """Get the default wizard settings as a plain dictionary."""
    return {
        "title": "Setup Wizard",
        "allow_skipping": True,
        "show_step_navigation": True,
        "autosave": True,
        "state_dir": str(DEFAULT_STATE_DIR),
        "draft_filename": DRAFT_FILENAME,
    }
