#!/usr/bin/env python3
# -*- coding: utf-8 -*-

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

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - Entry point for the fictionforge command
# - preview: list the chapters detected in a manuscript
# - access: show the access decision, required tier and metadata of a stored chapter
# - Interpolated paths and error text are escaped before printing
#

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from rich.markup import escape

from .access_gate import AccessGate
from .cli_parser import create_parser, validate_args
from .cli_setup import setup_configuration, setup_logging
from .common_print_utils import print_table, safe_print
from .config_manager import ConfigManager
from .content_store import ContentStore
from .import_errors import ChapterImportError, ChapterNotFoundError
from .manuscript_importer import parse_manuscript
from .models import TierName
from .text_processing import count_words_in_markup

APP_NAME = "FictionForge - chapter import and access gating"
APP_VERSION = "1.0.0"  # Semantic version (major.minor.patch)

# Global logger - will be initialized in main()
tolog: logging.Logger | None = None


def describe_tier(tier_name: str | None) -> str:
    """'patron' -> 'Patron ($12.00/month)'. Tiers added in the config are shown as stored."""
    if not tier_name:
        return "none"
    tier = TierName.from_name(tier_name)
    if tier is None:
        return tier_name
    return f"{tier.display_name} (${tier.price_cents / 100:.2f}/month)"


def run_preview(args: argparse.Namespace, config: dict[str, Any], logger: logging.Logger) -> int:
    """Print the chapters a manuscript would be imported as."""
    file_path = Path(args.filepath)
    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        safe_print(f"[bold red]File not found: {escape(str(file_path))}[/bold red]")
        return 1

    try:
        chapters = parse_manuscript(
            file_path,
            kind=args.kind,
            min_content_chars=args.min_chars,
            title_prefix=config["importer"]["default_title_prefix"],
        )
    except ChapterImportError as e:
        logger.error(f"Could not import {file_path}: {e}")
        safe_print(f"[bold red]{escape(str(e))}[/bold red]")
        return 1

    rows = [(i, chapter.title, count_words_in_markup(chapter.html)) for i, chapter in enumerate(chapters, start=1)]
    print_table(f"{escape(file_path.name)}: {len(chapters)} chapters", ["#", "Title", "Words"], rows)
    return 0


def run_access(args: argparse.Namespace, config_manager: ConfigManager, logger: logging.Logger) -> int:
    """Print the access decision for a chapter."""
    db_path = Path(args.db)
    if not db_path.exists():
        logger.error(f"Database not found: {db_path}")
        safe_print(f"[bold red]Database not found: {escape(str(db_path))}[/bold red]")
        return 1

    store = ContentStore.sqlite(str(db_path))
    try:
        gate = AccessGate(store, tier_hierarchy=config_manager.tier_hierarchy())
        try:
            payload = gate.chapter_payload(args.chapter_id, args.user)
        except ChapterNotFoundError as e:
            safe_print(f"[bold red]{escape(str(e))}[/bold red]")
            return 1
    finally:
        store.close()

    verdict = "[bold green]granted[/bold green]" if payload["has_access"] else "[bold yellow]denied[/bold yellow]"
    reader = args.user or "anonymous reader"
    safe_print(f"Access for {escape(reader)}: {verdict}")
    safe_print(f"Required tier: {escape(describe_tier(payload.get('min_tier_name')))}")
    safe_print(f"Words: {payload['word_count']}  Comments: {payload['comment_count']}")
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point for the FictionForge CLI application."""
    global tolog

    # Set up configuration first
    config_manager, config = setup_configuration(argv)

    # Set up logging based on config
    tolog = setup_logging(config)

    # Create and configure argument parser
    parser = create_parser(config)
    args = parser.parse_args(argv)
    validate_args(args, parser)

    try:
        if args.command == "preview":
            status = run_preview(args, config, tolog)
        else:
            status = run_access(args, config_manager, tolog)
    except Exception as e:
        tolog.exception("Fatal error")
        safe_print(f"[bold red]Fatal error: {escape(str(e))}[/bold red]")
        sys.exit(1)

    if status:
        sys.exit(status)


if __name__ == "__main__":
    main()
