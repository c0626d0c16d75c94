#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Test suite for text_processing module.
"""

import json

from fictionforge_core.text_processing import (
    count_words,
    count_words_from_content,
    count_words_from_json,
    count_words_in_markup,
)

DOCUMENT = {
    "type": "doc",
    "content": [
        {"type": "heading", "attrs": {"level": 1}, "content": [{"type": "text", "text": "The Storm"}]},
        {
            "type": "paragraph",
            "content": [
                {"type": "text", "text": "Rain fell "},
                {"type": "text", "text": "all night", "marks": [{"type": "bold"}]},
                {"type": "hardBreak"},
            ],
        },
        {"type": "bulletList", "content": [{"type": "listItem", "content": [{"type": "paragraph", "content": [{"type": "text", "text": "one item"}]}]}]},
    ],
}


class TestCountWords:
    """Test count_words and count_words_in_markup."""

    def test_whitespace_tokens(self):
        """Test tokens split on any whitespace."""
        assert count_words("  one\ttwo\nthree  ") == 3

    def test_markup_tags_not_counted(self):
        """Test tag names and attributes are not words."""
        assert count_words_in_markup('<p class="lead">Hello <strong>brave</strong> world</p>') == 3

    def test_entities_decoded(self):
        """Test an entity between spaces is one word."""
        assert count_words_in_markup("<p>Fish &amp; chips</p>") == 3


class TestCountWordsFromJson:
    """Test the count_words_from_json function."""

    def test_only_text_nodes_count(self):
        """Test node types, attrs and marks are not words."""
        assert count_words_from_json(DOCUMENT) == 8

    def test_list_of_nodes(self):
        """Test a bare list of nodes."""
        assert count_words_from_json([{"type": "text", "text": "a b"}, {"type": "text", "text": "c"}]) == 3

    def test_empty_document(self):
        """Test a document with an empty paragraph."""
        assert count_words_from_json({"type": "doc", "content": [{"type": "paragraph"}]}) == 0


class TestCountWordsFromContent:
    """Test the count_words_from_content function."""

    def test_dict_document(self):
        """Test a parsed JSON document."""
        assert count_words_from_content(DOCUMENT) == 8

    def test_json_text(self):
        """Test JSON stored as text."""
        assert count_words_from_content(json.dumps(DOCUMENT)) == 8

    def test_markup(self):
        """Test markup content."""
        assert count_words_from_content("<p>three little words</p>") == 3

    def test_text_that_looks_like_json(self):
        """Test invalid JSON falls back to text counting."""
        assert count_words_from_content("{not json} at all") == 4

    def test_empty(self):
        """Test empty and missing content."""
        assert count_words_from_content(None) == 0
        assert count_words_from_content("") == 0
