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
# - Added format dispatch for manuscript files
# - Imported chapters are stored as unpublished drafts with their word counts
# - Story totals are recomputed after each import
#

"""
manuscript_importer.py - Turn a manuscript file into draft chapters
===================================================================

``parse_manuscript`` picks the parser from the file suffix (or an explicit
kind) and returns the chapters found. ``import_chapters`` stores parsed
chapters as drafts of a story, each as a JSON document tree.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Sequence

from .common_file_utils import decode_text_file
from .content_store import ContentStore
from .docx_parser import parse_docx
from .document_json import html_to_document
from .epub_parser import parse_epub
from .import_constants import DEFAULT_TITLE_PREFIX, MIN_CONTENT_CHARS, SUPPORTED_SUFFIXES
from .import_errors import FormatError
from .models import ParsedChapter
from .paste_parser import parse_pasted_text
from .text_processing import count_words_from_json

logger = logging.getLogger(__name__)

SUPPORTED_KINDS = ("epub", "docx", "text")

__all__ = ["parse_manuscript", "html_to_document", "import_chapters", "detect_kind", "SUPPORTED_KINDS"]


def detect_kind(path: Path) -> str:
    """
    Manuscript kind from the file suffix.

    Raises:
        FormatError: If the suffix is not a supported manuscript format
    """
    kind = SUPPORTED_SUFFIXES.get(path.suffix.lower())
    if kind is None:
        supported = ", ".join(sorted(SUPPORTED_SUFFIXES))
        raise FormatError(f"Unsupported file type '{path.suffix or path.name}'. Supported formats: {supported}")
    return kind


def parse_manuscript(
    path: str | Path,
    kind: str | None = None,
    min_content_chars: int = MIN_CONTENT_CHARS,
    title_prefix: str = DEFAULT_TITLE_PREFIX,
) -> list[ParsedChapter]:
    """
    Parse a manuscript file into chapters.

    Args:
        path: Manuscript file
        kind: 'epub', 'docx' or 'text'; detected from the suffix when None
        min_content_chars: Minimum visible text of an EPUB chapter or DOCX preface
        title_prefix: Prefix of positional default titles

    Returns:
        List of ParsedChapter in reading order

    Raises:
        FormatError: If the format is unsupported or the file is malformed
        EmptyResultError: If no chapters are found
        OSError: If the file cannot be read
    """
    path = Path(path)
    if kind is None:
        kind = detect_kind(path)
    elif kind not in SUPPORTED_KINDS:
        raise FormatError(f"Unknown manuscript kind '{kind}'. Expected one of: {', '.join(SUPPORTED_KINDS)}")

    logger.info(f"Parsing {kind} manuscript: {path}")
    if kind == "epub":
        return parse_epub(path, min_content_chars=min_content_chars)
    if kind == "docx":
        return parse_docx(path, min_content_chars=min_content_chars, title_prefix=title_prefix)
    return parse_pasted_text(decode_text_file(path, logger), title_prefix=title_prefix)


def import_chapters(store: ContentStore, story_id: str, chapters: Sequence[ParsedChapter]) -> list[str]:
    """
    Store parsed chapters as drafts at the end of a story.

    Each chapter's markup is converted to a JSON document tree; its word
    count is taken from that tree. The story's published totals are
    recomputed afterwards (drafts do not change them, but stale totals are
    corrected).

    Args:
        store: Content store to write to
        story_id: Story receiving the chapters
        chapters: Parsed chapters in reading order

    Returns:
        Ids of the created chapters, in order

    Raises:
        StoryNotFoundError: If the story does not exist
    """
    rows = []
    for chapter in chapters:
        document = html_to_document(chapter.html)
        rows.append(
            {
                "title": chapter.title,
                "content": json.dumps(document, ensure_ascii=False),
                "word_count": count_words_from_json(document),
            }
        )

    chapter_ids = store.add_draft_chapters(story_id, rows)
    chapter_count, total_words = store.refresh_story_totals(story_id)
    logger.info(f"Imported {len(chapter_ids)} draft chapters into story {story_id} ({chapter_count} published, {total_words} words)")
    return chapter_ids
