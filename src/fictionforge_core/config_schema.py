#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - Default template now covers importer, access tiers, database and logging
# - Added VALID_LOG_LEVELS for validation
#

"""
config_schema.py - Configuration schema and default template for FictionForge
"""

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Default configuration template with extensive comments
DEFAULT_CONFIG_TEMPLATE = """# FictionForge Configuration File
# ==============================
# This file contains default settings for chapter import and access gating.
# Any command-line arguments will override these settings.

# Chapter Import Settings
# -----------------------
importer:
  # Spine items (EPUB) and prefaces (DOCX) with fewer visible characters
  # than this are not chapters (covers, tables of contents, title pages)
  min_content_chars: 20
  # Prefix of titles given to chapters that have none ("Chapter 3")
  default_title_prefix: "Chapter"

# Access Settings
# ---------------
access:
  # Subscription tiers and their rank. A subscription grants access to
  # chapters requiring its own tier or any lower-ranked one.
  tiers:
    supporter: 1
    enthusiast: 2
    patron: 3

# Database Settings
# -----------------
database:
  # SQLite database file holding stories, chapters, subscriptions and comments
  path: "fictionforge.db"

# Logging Settings
# ----------------
logging:
  # Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL
  level: INFO
  # Log format
  format: "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
  # Enable file logging
  file_enabled: false
  # Log file path
  file_path: "fictionforge.log"
"""
