"""
Configuration management for Mathertale.

This module handles loading and accessing configuration values from config.yaml.
It provides a centralized way to manage build settings (paths, file suffixes,
logging) without changing code.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List
import logging


class ConfigManager:
    """
    Manages configuration loading and access for the Mathertale builder.
    """

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        try:
            if not self.config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

            with open(self.config_path, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}

            logging.info(f"Configuration loaded from {self.config_path}")

        except (OSError, yaml.YAMLError) as e:
            logging.warning(f"Failed to load configuration, using defaults: {e}")
            self._config = self._get_default_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return {
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
            "paths": {
                "output_dir": "build",
                "log_file": "mathertale.log",
                "vault_root": "."
            },
            "build": {
                "journey_suffix": ".journey.canvas",
                "quest_suffixes": [".quest.canvas", ".quest.md"],
                "json_indent": 2
            }
        }

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "paths.output_dir")
            default: Default value if key is not found

        Returns:
            The configuration value

        Examples:
            config.get("build.journey_suffix")  # Returns ".journey.canvas"
            config.get("logging.level")  # Returns "INFO"
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get an entire configuration section.

        Args:
            section: Name of the configuration section

        Returns:
            Dictionary containing the section configuration
        """
        return self._config.get(section, {})

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    # Convenience properties for commonly used values

    @property
    def output_directory(self) -> str:
        """Get the build output directory."""
        return self.get("paths.output_dir", "build")

    @property
    def log_filename(self) -> str:
        """Get log file name."""
        return self.get("paths.log_file", "mathertale.log")

    @property
    def vault_root(self) -> str:
        """Get the directory canvas file references are resolved against."""
        return self.get("paths.vault_root", ".")

    @property
    def journey_suffix(self) -> str:
        """Get the file suffix identifying journey canvases."""
        return self.get("build.journey_suffix", ".journey.canvas")

    @property
    def quest_suffixes(self) -> List[str]:
        """Get the file suffixes identifying quest documents."""
        return self.get("build.quest_suffixes", [".quest.canvas", ".quest.md"])

    @property
    def json_indent(self) -> int:
        """Get the indent used when writing JSON output."""
        return self.get("build.json_indent", 2)


# Global configuration instance
config = ConfigManager()


def get_config() -> ConfigManager:
    """
    Get the global configuration instance.

    Returns:
        The global ConfigManager instance
    """
    return config


def load_config(config_path: str) -> ConfigManager:
    """
    Replace the global configuration with one loaded from ``config_path``.

    Returns:
        The new global ConfigManager instance
    """
    global config
    config = ConfigManager(config_path)
    return config
