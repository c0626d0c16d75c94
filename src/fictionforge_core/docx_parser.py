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
docx_parser.py - Import a Word document as an ordered list of chapters
======================================================================

The document is converted to markup first, then split either on explicit
---CHAPTER--- markers or on top-level <h1>/<h2> headings.
"""

from __future__ import annotations

import logging
from typing import Callable

from .docx_converter import convert_docx_to_html
from .epub_container import BinarySource
from .html_processing import first_heading_text, split_at_headings, visible_text_length
from .import_constants import CHAPTER_MARKER_RE, DEFAULT_TITLE_PREFIX, MARKER_PARAGRAPH_RE, MIN_CONTENT_CHARS, PREFACE_TITLE
from .import_errors import EmptyResultError
from .models import ParsedChapter

logger = logging.getLogger(__name__)

DocxConverter = Callable[[BinarySource], str]


def split_on_markers(full_html: str, title_prefix: str = DEFAULT_TITLE_PREFIX) -> list[ParsedChapter]:
    """Split markup on ---CHAPTER--- markers; title from the part's first heading."""
    parts = [part.strip() for part in MARKER_PARAGRAPH_RE.split(full_html)]
    parts = [part for part in parts if part]
    return [ParsedChapter(title=first_heading_text(part) or f"{title_prefix} {i}", html=part) for i, part in enumerate(parts, start=1)]


def split_on_headings(
    full_html: str,
    min_content_chars: int = MIN_CONTENT_CHARS,
    title_prefix: str = DEFAULT_TITLE_PREFIX,
) -> list[ParsedChapter]:
    """
    Split markup so each top-level <h1>/<h2> starts a chapter.

    Without headings the whole document is one chapter. Text before the
    first heading becomes a Preface chapter when it is long enough.
    """
    preface, sections = split_at_headings(full_html)
    if not sections:
        return [ParsedChapter(title=f"{title_prefix} 1", html=full_html)]

    chapters = [ParsedChapter(title=title or f"{title_prefix} {i}", html=section) for i, (title, section) in enumerate(sections, start=1)]

    if preface and visible_text_length(preface) > min_content_chars:
        chapters.insert(0, ParsedChapter(title=PREFACE_TITLE, html=preface))

    return chapters


def split_docx_html(
    full_html: str,
    min_content_chars: int = MIN_CONTENT_CHARS,
    title_prefix: str = DEFAULT_TITLE_PREFIX,
) -> list[ParsedChapter]:
    """
    Split converted document markup into chapters.

    Raises:
        EmptyResultError: If the document holds no text at all
    """
    if not visible_text_length(full_html):
        raise EmptyResultError("No text found in DOCX file. The document may be empty.")

    if CHAPTER_MARKER_RE.search(full_html):
        chapters = split_on_markers(full_html, title_prefix)
        logger.debug(f"Split DOCX on chapter markers into {len(chapters)} chapters")
    else:
        chapters = split_on_headings(full_html, min_content_chars, title_prefix)
        logger.debug(f"Split DOCX on headings into {len(chapters)} chapters")

    if not chapters:
        raise EmptyResultError("No chapters found in DOCX file")
    return chapters


def parse_docx(
    source: BinarySource,
    converter: DocxConverter = convert_docx_to_html,
    min_content_chars: int = MIN_CONTENT_CHARS,
    title_prefix: str = DEFAULT_TITLE_PREFIX,
) -> list[ParsedChapter]:
    """
    Parse a .docx file into chapters.

    Args:
        source: Path, bytes or binary file object of the .docx
        converter: Document-to-markup conversion step
        min_content_chars: Minimum stripped text for a Preface chapter
        title_prefix: Prefix of positional default titles ("Chapter 3")

    Returns:
        List of ParsedChapter in document order

    Raises:
        FormatError: If the file is not a Word document
        EmptyResultError: If the document has no text
    """
    chapters = split_docx_html(converter(source), min_content_chars, title_prefix)
    logger.info(f"Parsed {len(chapters)} chapters from DOCX")
    return chapters
