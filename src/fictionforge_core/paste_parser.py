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
paste_parser.py - Split pasted plain text into chapters
=======================================================

Boundaries, in priority order:

1. explicit ---CHAPTER--- markers
2. two or more lines starting with "Chapter <number>"
3. otherwise the whole text is one chapter
"""

from __future__ import annotations

import logging

from .html_processing import text_to_html
from .import_constants import CHAPTER_MARKER_RE, DEFAULT_TITLE_PREFIX, PASTE_CHAPTER_RE
from .import_errors import EmptyResultError
from .models import ParsedChapter

logger = logging.getLogger(__name__)


def chunk_to_chapter(chunk: str, fallback_title: str, drop_blank_lines: bool = False) -> ParsedChapter:
    """
    First line is the title, the rest is the content.

    The title doubles as the content when nothing follows it. With
    drop_blank_lines the content collapses into a single paragraph.
    """
    lines = chunk.strip().split("\n")
    if drop_blank_lines:
        lines = [line for line in lines if line.strip()]
    title = lines[0].strip() or fallback_title
    content = "\n".join(lines[1:]).strip()
    return ParsedChapter(title=title, html=text_to_html(content or title))


def parse_pasted_text(text: str, title_prefix: str = DEFAULT_TITLE_PREFIX) -> list[ParsedChapter]:
    """
    Parse pasted manuscript text into chapters.

    Args:
        text: Raw pasted text
        title_prefix: Prefix of positional default titles

    Returns:
        List of ParsedChapter in text order

    Raises:
        EmptyResultError: If the text is empty or whitespace only
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    if not text.strip():
        raise EmptyResultError("Please paste some text first")

    if CHAPTER_MARKER_RE.search(text):
        parts = [part.strip() for part in CHAPTER_MARKER_RE.split(text)]
        parts = [part for part in parts if part]
        logger.debug(f"Split pasted text on chapter markers into {len(parts)} chapters")
        return [chunk_to_chapter(part, f"{title_prefix} {i}", drop_blank_lines=True) for i, part in enumerate(parts, start=1)]

    starts = [m.start() for m in PASTE_CHAPTER_RE.finditer(text)]
    if len(starts) >= 2:
        ends = starts[1:] + [len(text)]
        logger.debug(f"Split pasted text on chapter headings into {len(starts)} chapters")
        return [chunk_to_chapter(text[start:end], f"{title_prefix} {i}") for i, (start, end) in enumerate(zip(starts, ends), start=1)]

    return [ParsedChapter(title=f"{title_prefix} 1", html=text_to_html(text.strip()))]
