"""
Settings loader for YAML files.

Handles loading and validation of wizard settings, with environment
overrides applied on top.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from .defaults import STATE_DIR_ENV
from .models import WizardSettings


class ConfigError(Exception):
    """Configuration loading or validation error."""
    pass


class ConfigLoader:
    """
    Loads and validates wizard settings from a YAML file.

    The file may hold the settings at its top level or under a
    'wizard' key. The ONBOARDING_STATE_DIR environment variable
    overrides the configured state directory.
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize the config loader.

        Args:
            config_path: Path to a YAML settings file
        """
        self.config_path = Path(config_path) if config_path else None
        self._settings: Optional[WizardSettings] = None

    def load(self) -> "ConfigLoader":
        """
        Load settings from the config path, or defaults when there is none.

        Returns:
            Self for method chaining
        """
        data: Dict[str, Any] = {}

        if self.config_path is not None:
            if not self.config_path.is_file():
                raise ConfigError(f"Configuration file does not exist: {self.config_path}")
            data = self._read_yaml(self.config_path)
            if not isinstance(data, dict):
                raise ConfigError(f"Configuration in {self.config_path} must be a mapping")
            if isinstance(data.get("wizard"), dict):
                data = data["wizard"]

        self._settings = self._parse_settings(self._apply_env(data))
        return self

    def _read_yaml(self, file_path: Path) -> Any:
        """Read and parse a YAML file."""
        try:
            with open(file_path, "r") as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {file_path}: {e}")
        except IOError as e:
            raise ConfigError(f"Cannot read {file_path}: {e}")

    @staticmethod
    def _apply_env(data: Dict[str, Any]) -> Dict[str, Any]:
        env_dir = os.environ.get(STATE_DIR_ENV)
        if env_dir:
            data = dict(data)
            data["state_dir"] = env_dir
        return data

    def _parse_settings(self, data: Dict[str, Any]) -> WizardSettings:
        """Parse wizard settings."""
        try:
            return WizardSettings(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid wizard settings: {e}")

    @property
    def settings(self) -> WizardSettings:
        """Get loaded settings, loading defaults on first access."""
        if self._settings is None:
            self.load()
        return self._settings

    def save(self, output_path: Union[str, Path]) -> None:
        """
        Save current settings to a YAML file.

        Args:
            output_path: File to write
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w") as f:
            yaml.dump(
                {"wizard": self.settings.model_dump(mode="json")},
                f,
                default_flow_style=False,
                sort_keys=False,
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConfigLoader":
        """
        Create a ConfigLoader from a dictionary.

        Useful for programmatic configuration. Environment overrides still apply.
        """
        loader = cls()
        loader._settings = loader._parse_settings(loader._apply_env(data))
        return loader
