#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - Configuration pre-parse and logging setup for the FictionForge CLI
#

"""
cli_setup.py - CLI setup and initialization
===========================================

Handles initialization of configuration and logging for the FictionForge
CLI application.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Sequence, Tuple

from rich.markup import escape

from .common_print_utils import safe_print
from .config_manager import ConfigManager


def setup_configuration(argv: Sequence[str] | None = None) -> Tuple[ConfigManager, dict[str, Any]]:
    """Load and validate configuration from config file.

    Args:
        argv: Command-line arguments (default: sys.argv[1:])

    Returns:
        Tuple of (ConfigManager instance, configuration dictionary)
    """
    # Pre-parse to get config file path
    config_parser = argparse.ArgumentParser(add_help=False)
    config_parser.add_argument("--config", type=str, default="fictionforge_config.yml")
    config_args, _ = config_parser.parse_known_args(argv)

    try:
        config_manager = ConfigManager(config_path=Path(config_args.config))
        return config_manager, config_manager.config
    except ValueError as e:
        safe_print(f"[bold red]Configuration error: {escape(str(e))}[/bold red]")
        safe_print("Please fix the configuration file or delete it to regenerate defaults.")
        sys.exit(1)


def setup_logging(config: dict[str, Any]) -> logging.Logger:
    """Set up logging based on configuration.

    Args:
        config: Configuration dictionary

    Returns:
        Configured logger instance
    """
    log_level = getattr(logging, str(config["logging"]["level"]).upper(), logging.INFO)
    log_format = config["logging"]["format"]

    logging.basicConfig(level=log_level, format=log_format)
    logger = logging.getLogger("fictionforge_core")
    logger.setLevel(log_level)

    # Set up file logging if enabled
    if config["logging"]["file_enabled"]:
        try:
            file_handler = logging.FileHandler(config["logging"]["file_path"])
            file_handler.setLevel(log_level)
            file_handler.setFormatter(logging.Formatter(log_format))
            logger.addHandler(file_handler)
        except OSError as e:
            logger.error(f"Failed to set up file logging to {config['logging']['file_path']}: {e}")
            # Continue without file logging

    return logger
