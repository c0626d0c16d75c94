#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - Orchestrates loading, validation and merging of the FictionForge config
# - Validation reports the first error as ValueError with its line number
# - No module-level instance: callers own their ConfigManager
#

# Copyright 2025 Emasoft
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
config_manager.py - Configuration management for FictionForge
"""

import logging
from pathlib import Path
from typing import Any

from .config_loader import ConfigLoader
from .config_schema import VALID_LOG_LEVELS

DEFAULT_CONFIG_PATH = Path("fictionforge_config.yml")


class ConfigManager:
    """Manages configuration for chapter import and access gating."""

    def __init__(
        self,
        config_path: Path | None = None,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to configuration file (default: fictionforge_config.yml)
            logger: Logger instance

        Raises:
            ValueError: If the configuration file is unreadable or invalid
        """
        self.logger = logger or logging.getLogger(__name__)
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self.loader = ConfigLoader(self.config_path, self.logger)
        self.config = self._load_config()

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from file or create default."""
        config = self.loader.load_config()
        defaults = self.loader.get_default_config()

        first_error = self.validate_config_first_error(config, defaults)
        if first_error:
            line = first_error.get("line")
            location = f" (line {line})" if line else ""
            raise ValueError(f"{first_error['message']}{location} in {self.config_path}")

        return self.loader.merge_with_defaults(config)

    def validate_config_first_error(self, config: dict[str, Any], defaults: dict[str, Any]) -> dict[str, Any] | None:
        """
        Validate configuration and return only the FIRST error found.

        Args:
            config: Configuration to validate
            defaults: Default configuration for reference

        Returns:
            First error found or None if valid
        """
        for key in config.keys():
            if key not in defaults:
                return {
                    "type": "unknown_key",
                    "key": key,
                    "line": self.loader.find_line_number(str(key)),
                    "message": f"Unknown configuration section '{key}'",
                }

        for section, value in config.items():
            if not isinstance(value, dict):
                return {
                    "type": "invalid_section",
                    "key": section,
                    "line": self.loader.find_line_number(str(section)),
                    "message": f"Section '{section}' must be a mapping",
                }

        tiers = config.get("access", {}).get("tiers")
        if tiers is not None:
            if not isinstance(tiers, dict) or not tiers:
                return {
                    "type": "invalid_value",
                    "path": "access.tiers",
                    "line": self.loader.find_line_number("access.tiers"),
                    "message": "access.tiers must map tier names to ranks",
                }
            for name, rank in tiers.items():
                if isinstance(rank, bool) or not isinstance(rank, int) or rank < 1:
                    return {
                        "type": "invalid_value",
                        "path": f"access.tiers.{name}",
                        "value": rank,
                        "line": self.loader.find_line_number(f"access.tiers.{name}"),
                        "message": f"Invalid rank {rank!r} for tier '{name}'. Ranks must be positive integers",
                    }

        level = config.get("logging", {}).get("level")
        if level is not None and str(level).upper() not in VALID_LOG_LEVELS:
            return {
                "type": "invalid_value",
                "path": "logging.level",
                "value": level,
                "valid_values": list(VALID_LOG_LEVELS),
                "line": self.loader.find_line_number("logging.level"),
                "message": f"Invalid value '{level}' for logging.level. Must be one of {', '.join(VALID_LOG_LEVELS)}",
            }

        min_chars = config.get("importer", {}).get("min_content_chars")
        if min_chars is not None and (isinstance(min_chars, bool) or not isinstance(min_chars, int) or min_chars < 0):
            return {
                "type": "invalid_value",
                "path": "importer.min_content_chars",
                "value": min_chars,
                "line": self.loader.find_line_number("importer.min_content_chars"),
                "message": f"Invalid value {min_chars!r} for importer.min_content_chars. Must be a non-negative integer",
            }

        return None

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key_path: Dot-separated path (e.g., 'access.tiers.patron')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value: Any = self.config
        for key in key_path.split("."):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def tier_hierarchy(self) -> dict[str, int]:
        """Tier name -> rank, names lowercased."""
        return {str(name).lower(): int(rank) for name, rank in self.get("access.tiers", {}).items()}
