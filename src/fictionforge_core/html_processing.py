#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - Reworked for chapter import: body/title/heading extraction
# - Markup is parsed with BeautifulSoup and walked as a node tree
# - Added text_to_html for pasted plain text
#

"""
html_processing.py - Markup helpers for the chapter importers
=============================================================

Extracts bodies, titles and headings from (X)HTML and converts pasted plain
text into paragraph markup. All markup is parsed into a BeautifulSoup tree
first so that attributes, entities and nested inline tags are handled the
same way everywhere.
"""

from __future__ import annotations

import html
from typing import Iterable

from bs4 import BeautifulSoup, Tag

from .import_constants import CHAPTER_HEADING_TAGS, PARAGRAPH_BREAK_RE

HTML_PARSER = "html.parser"


def parse_markup(markup: str) -> BeautifulSoup:
    """Parse an HTML or XHTML string into a soup."""
    return BeautifulSoup(markup, HTML_PARSER)


def strip_tags(markup: str) -> str:
    """
    Remove all tags from markup and return the text content.

    Args:
        markup: HTML fragment or document

    Returns:
        Text with entities unescaped (not stripped of surrounding whitespace)
    """
    soup = parse_markup(markup)
    for element in soup(["script", "style"]):
        element.decompose()
    return soup.get_text()


def visible_text_length(markup: str) -> int:
    """Length of the stripped text content of markup."""
    return len(strip_tags(markup).strip())


def extract_body_content(xhtml: str) -> str:
    """
    Return the inner markup of <body>, or the whole document if there is none.

    Args:
        xhtml: Content document from an EPUB

    Returns:
        Body markup, trimmed
    """
    soup = parse_markup(xhtml)
    if soup.body is None:
        return xhtml
    return soup.body.decode_contents().strip()


def extract_document_title(xhtml: str) -> str | None:
    """Text of the document's <title> element, if present and non-empty."""
    soup = parse_markup(xhtml)
    if soup.title is None:
        return None
    title = soup.title.get_text().strip()
    return title or None


def first_heading_text(markup: str, tags: Iterable[str] = CHAPTER_HEADING_TAGS) -> str | None:
    """
    Text of the first heading among ``tags``, inner tags removed.

    Returns:
        Heading text, or None when there is no heading or it is empty
    """
    soup = parse_markup(markup)
    heading = soup.find(list(tags))
    if heading is None:
        return None
    text = heading.get_text().strip()
    return text or None


def split_at_headings(markup: str, tags: Iterable[str] = CHAPTER_HEADING_TAGS) -> tuple[str, list[tuple[str, str]]]:
    """
    Split a document into sections, one per top-level heading.

    Only headings at the top level of the fragment start a section; headings
    nested in tables or other containers stay inside the current section.

    Args:
        markup: Converted document markup
        tags: Heading tag names that start a new section

    Returns:
        Tuple of (markup before the first heading, list of
        (heading text, section markup including the heading))
    """
    heading_tags = set(tags)
    soup = parse_markup(markup)

    preface: list[str] = []
    sections: list[tuple[str, list[str]]] = []
    for node in soup.contents:
        if isinstance(node, Tag) and node.name in heading_tags:
            sections.append((node.get_text().strip(), [str(node)]))
        elif sections:
            sections[-1][1].append(str(node))
        else:
            preface.append(str(node))

    return "".join(preface).strip(), [(title, "".join(parts).strip()) for title, parts in sections]


def text_to_html(text: str) -> str:
    """
    Convert plain text to paragraph markup.

    Blank lines separate paragraphs; single newlines inside a paragraph become
    <br />. Text is HTML-escaped.

    Args:
        text: Plain text

    Returns:
        Paragraphs joined by newlines, e.g. "<p>one</p>\\n<p>two<br />three</p>"
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    paragraphs = [p for p in PARAGRAPH_BREAK_RE.split(text) if p.strip()]
    return "\n".join("<p>" + html.escape(p.strip(), quote=False).replace("\n", "<br />") + "</p>" for p in paragraphs)
