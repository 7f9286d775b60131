"""Settings handling for the onboarding wizard."""

from .models import WizardSettings
from .loader import ConfigLoader, ConfigError

__all__ = [
    "WizardSettings",
    "ConfigLoader",
    "ConfigError",
]
