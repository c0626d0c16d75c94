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

"""
epub_parser.py - Import an EPUB as an ordered list of chapters
==============================================================

Each spine item becomes one chapter. Items whose text is too short to be a
chapter (covers, tables of contents, title pages) are skipped.
"""

from __future__ import annotations

import logging
import re
from pathlib import PurePosixPath

from .epub_container import BinarySource, EpubContainer, resolve_relative_path
from .html_processing import extract_body_content, extract_document_title, first_heading_text, visible_text_length
from .import_constants import DEFAULT_TITLE_PREFIX, MIN_CONTENT_CHARS
from .import_errors import EmptyResultError
from .models import ParsedChapter

logger = logging.getLogger(__name__)


def title_from_filename(href: str) -> str:
    """'Text/chapter_01-intro.xhtml' -> 'chapter 01 intro'"""
    stem = PurePosixPath(href).name
    stem = re.sub(r"\.[^.]+$", "", stem)
    return re.sub(r"[-_]", " ", stem).strip()


def extract_title(xhtml: str, href: str, fallback: str = f"{DEFAULT_TITLE_PREFIX} 1") -> str:
    """
    Pick a chapter title for a content document.

    Order: <title> element, first <h1>/<h2>, the file name, then ``fallback``
    when the file name has nothing readable in it.
    """
    return extract_document_title(xhtml) or first_heading_text(xhtml) or title_from_filename(href) or fallback


def parse_epub(source: BinarySource, min_content_chars: int = MIN_CONTENT_CHARS) -> list[ParsedChapter]:
    """
    Parse an EPUB archive into chapters in spine order.

    Args:
        source: Path, bytes or binary file object of the .epub
        min_content_chars: Spine items with less stripped text are skipped

    Returns:
        List of ParsedChapter in reading order

    Raises:
        FormatError: If the container or package document is unusable
        EmptyResultError: If no spine item holds chapter content
    """
    chapters: list[ParsedChapter] = []

    with EpubContainer.open(source) as container:
        opf_path, manifest, spine = container.read_package()

        for item_id in spine:
            href = manifest.get(item_id)
            if not href:
                logger.debug(f"Spine item '{item_id}' has no manifest entry, skipping")
                continue

            member = resolve_relative_path(opf_path, href)
            xhtml = container.read_text(member)
            if xhtml is None:
                logger.debug(f"Spine item '{item_id}' points at missing member {member}, skipping")
                continue

            body = extract_body_content(xhtml)
            if visible_text_length(body) < min_content_chars:
                logger.debug(f"Spine item '{item_id}' ({member}) is too short to be a chapter, skipping")
                continue

            title = extract_title(xhtml, href, f"{DEFAULT_TITLE_PREFIX} {len(chapters) + 1}")
            chapters.append(ParsedChapter(title=title, html=body))

    if not chapters:
        raise EmptyResultError("No chapters found in EPUB file. The file may be empty or contain only a cover and table of contents.")

    logger.info(f"Parsed {len(chapters)} chapters from EPUB")
    return chapters
