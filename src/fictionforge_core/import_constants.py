#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - Created module holding the import patterns and thresholds
# - Includes CHAPTER_MARKER_RE, PASTE_CHAPTER_RE and MIN_CONTENT_CHARS
#

"""
import_constants.py - Regex patterns and constants for chapter import
=====================================================================

Shared by the EPUB, DOCX and pasted-text importers.
"""

import re

# ────────────────────────── thresholds ────────────────────────── #

# Spine items and DOCX prefaces need more stripped text than this to count
MIN_CONTENT_CHARS = 20

DEFAULT_TITLE_PREFIX = "Chapter"
PREFACE_TITLE = "Preface"

# ────────────────────────── regexes & tables ────────────────────────── #

CHAPTER_MARKER = "---CHAPTER---"
CHAPTER_MARKER_RE = re.compile(re.escape(CHAPTER_MARKER), re.IGNORECASE)

# Marker on its own converted paragraph, e.g. "<p>---CHAPTER---</p>"
MARKER_PARAGRAPH_RE = re.compile(r"(?:<p(?:\s[^>]*)?>\s*)?" + re.escape(CHAPTER_MARKER) + r"(?:\s*</p>)?", re.IGNORECASE)

# "Chapter 12 ..." at the start of a line
PASTE_CHAPTER_RE = re.compile(r"^(chapter\s+\d+[^\n]*)", re.IGNORECASE | re.MULTILINE)

# Blank line separating pasted paragraphs
PARAGRAPH_BREAK_RE = re.compile(r"\n\s*\n")

# Headings that start a chapter in converted documents
CHAPTER_HEADING_TAGS = ("h1", "h2")

# ────────────────────────── EPUB layout ────────────────────────── #

CONTAINER_PATH = "META-INF/container.xml"

# Suffixes accepted by parse_manuscript, mapped to importer kind
SUPPORTED_SUFFIXES = {
    ".epub": "epub",
    ".docx": "docx",
    ".txt": "text",
    ".md": "text",
    ".markdown": "text",
}
