#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - Loading, default creation and merging for the FictionForge config file
# - YAML errors surface as ValueError from load_safe_yaml
# - find_line_number moved here for validation messages
#

"""
config_loader.py - Configuration loading and merging utilities for FictionForge
"""

import yaml
import logging
from pathlib import Path
from typing import Any

from .common_yaml_utils import load_safe_yaml, merge_yaml_configs
from .config_schema import DEFAULT_CONFIG_TEMPLATE


def find_line_number(key_path: str, config_lines: list[str]) -> int | None:
    """
    Find the line number of a configuration key in the YAML file.

    Args:
        key_path: Dot-separated path to key
        config_lines: Configuration file lines

    Returns:
        Line number (1-based) or None if not found
    """
    if not config_lines:
        return None

    keys = key_path.split(".")
    depth = 0
    for i, line in enumerate(config_lines, 1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        # YAML typically uses 2-space indent
        indent = len(line) - len(line.lstrip())
        if indent == depth * 2 and stripped.startswith(f"{keys[depth]}:"):
            if depth == len(keys) - 1:
                return i
            depth += 1
        elif indent < depth * 2:
            depth = indent // 2

    return None


class ConfigLoader:
    """Handles loading and merging of configuration files."""

    def __init__(self, config_path: Path, logger: logging.Logger | None = None):
        """
        Initialize configuration loader.

        Args:
            config_path: Path to configuration file
            logger: Logger instance
        """
        self.config_path = config_path
        self.logger = logger or logging.getLogger(__name__)
        self._config_lines: list[str] = []

    def load_config(self) -> dict[str, Any]:
        """
        Load configuration from file or create default.

        Returns:
            Configuration dictionary

        Raises:
            ValueError: If the file cannot be read or parsed
        """
        if not self.config_path.exists():
            self.logger.info(f"Configuration file not found. Creating default at: {self.config_path}")
            self._create_default_config()

        config = load_safe_yaml(self.config_path)
        self._config_lines = self.config_path.read_text(encoding="utf-8").split("\n")

        if not config:
            self.logger.warning("Configuration file is empty. Using defaults.")
            return self.get_default_config()

        return config

    def _create_default_config(self) -> None:
        """Create default configuration file."""
        try:
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(DEFAULT_CONFIG_TEMPLATE)
            self.logger.info("Default configuration file created successfully.")
        except OSError as e:
            self.logger.error(f"Failed to create configuration file: {e}")
            raise

    def get_default_config(self) -> dict[str, Any]:
        """
        Get default configuration as dictionary.

        Returns:
            Default configuration dictionary
        """
        result = yaml.safe_load(DEFAULT_CONFIG_TEMPLATE)
        return result if isinstance(result, dict) else {}

    def merge_with_defaults(self, config: dict[str, Any]) -> dict[str, Any]:
        """
        Merge user config with defaults to ensure all keys exist.

        Args:
            config: User configuration

        Returns:
            Merged configuration
        """
        return merge_yaml_configs(self.get_default_config(), config)

    def get_config_lines(self) -> list[str]:
        """Configuration file lines for error reporting."""
        return self._config_lines

    def find_line_number(self, key_path: str) -> int | None:
        """Line number of a dot-separated key in the loaded file."""
        return find_line_number(key_path, self._config_lines)
