#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - Parser reworked into preview/access subcommands
# - Defaults for importer options come from the loaded configuration
#

"""
cli_parser.py - Command-line argument parsing for FictionForge
==============================================================

Two subcommands:

- ``preview <file>`` lists the chapters a manuscript would be imported as
- ``access <chapter_id>`` shows whether a reader may open a chapter
"""

from __future__ import annotations

import argparse
from typing import Any

from .manuscript_importer import SUPPORTED_KINDS

EPILOG = """
Examples:
  fictionforge preview novel.epub
  fictionforge preview draft.txt --kind text
  fictionforge access 6f1c... --user reader-42 --db fictionforge.db
"""


def _add_preview_args(subparsers: Any, config: dict[str, Any]) -> None:
    """Add the preview subcommand.

    Args:
        subparsers: Subparsers action of the main parser
        config: Configuration dictionary for default values
    """
    preview = subparsers.add_parser("preview", help="List the chapters found in a manuscript file")
    preview.add_argument("filepath", type=str, help="Path to an .epub, .docx, .txt or .md manuscript")
    preview.add_argument(
        "--kind",
        choices=SUPPORTED_KINDS,
        help="Manuscript format (default: detected from the file suffix)",
    )
    preview.add_argument(
        "--min-chars",
        type=int,
        default=config["importer"]["min_content_chars"],
        help=f"Minimum visible characters of an EPUB chapter or DOCX preface (default: {config['importer']['min_content_chars']})",
    )


def _add_access_args(subparsers: Any, config: dict[str, Any]) -> None:
    """Add the access subcommand.

    Args:
        subparsers: Subparsers action of the main parser
        config: Configuration dictionary for default values
    """
    access = subparsers.add_parser("access", help="Show whether a reader may open a chapter")
    access.add_argument("chapter_id", type=str, help="Id of the chapter")
    access.add_argument("--user", type=str, default=None, help="Id of the reader (default: anonymous)")
    access.add_argument(
        "--db",
        type=str,
        default=config["database"]["path"],
        help=f"SQLite database file (default: {config['database']['path']})",
    )


def create_parser(config: dict[str, Any]) -> argparse.ArgumentParser:
    """Create the argument parser.

    Args:
        config: Configuration dictionary for default values

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="fictionforge",
        description="Import manuscripts as chapters and check chapter access",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=str,
        default="fictionforge_config.yml",
        help="Path to configuration file (default: fictionforge_config.yml)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True
    _add_preview_args(subparsers, config)
    _add_access_args(subparsers, config)
    return parser


def validate_args(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Validate parsed arguments; exits through the parser on error.

    Args:
        args: Parsed arguments
        parser: Parser used to report errors
    """
    if args.command == "preview" and args.min_chars < 0:
        parser.error("--min-chars must not be negative")
    if args.command == "access" and not args.chapter_id.strip():
        parser.error("chapter_id must not be empty")
