#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - Reworked for chapter metadata: word counting over markup and JSON documents
#

"""
text_processing.py - Word counting for stored chapter content
=============================================================

Chapter content is stored either as a JSON document tree (imported and
edited chapters) or as a markup string. Word counts skip structural tokens
in both cases and count whitespace-delimited words of the text itself.
"""

from __future__ import annotations

import json
from typing import Any

from .html_processing import strip_tags


def count_words(text: str) -> int:
    """Number of whitespace-delimited tokens in text."""
    return len(text.split())


def count_words_in_markup(markup: str) -> int:
    """Number of words in markup once tags are removed."""
    return count_words(strip_tags(markup))


def count_words_from_json(document: Any) -> int:
    """
    Count words in the text nodes of a JSON document tree.

    Nodes look like {"type": "paragraph", "content": [...]}; only nodes of
    type "text" carry words.

    Args:
        document: Root node (dict) or list of nodes

    Returns:
        Total word count
    """
    count = 0
    stack = [document]
    while stack:
        node = stack.pop()
        if isinstance(node, list):
            stack.extend(node)
        elif isinstance(node, dict):
            if node.get("type") == "text" and isinstance(node.get("text"), str):
                count += count_words(node["text"])
            children = node.get("content")
            if children:
                stack.append(children)
    return count


def count_words_from_content(content: Any) -> int:
    """
    Word count for stored chapter content of either representation.

    Args:
        content: JSON document (dict/list), JSON text, markup string or None

    Returns:
        Word count, 0 for empty content
    """
    if not content:
        return 0
    if isinstance(content, (dict, list)):
        return count_words_from_json(content)
    text = str(content)
    if text.lstrip().startswith(("{", "[")):
        try:
            return count_words_from_json(json.loads(text))
        except json.JSONDecodeError:
            pass
    return count_words_in_markup(text)
