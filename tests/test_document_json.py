#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Test suite for document_json module.
"""

from fictionforge_core.document_json import html_to_document


def text(value, *marks):
    node = {"type": "text", "text": value}
    if marks:
        node["marks"] = [{"type": mark} for mark in marks]
    return node


class TestHtmlToDocument:
    """Test the html_to_document function."""

    def test_empty_markup(self):
        """Test an empty chapter is a document with one empty paragraph."""
        assert html_to_document("") == {"type": "doc", "content": [{"type": "paragraph"}]}

    def test_heading_and_paragraph(self):
        """Test headings keep their level and paragraphs their text."""
        doc = html_to_document("<h2>One</h2>\n<p>Hello <strong>world</strong></p>")

        assert doc == {
            "type": "doc",
            "content": [
                {"type": "heading", "attrs": {"level": 2}, "content": [text("One")]},
                {"type": "paragraph", "content": [text("Hello "), text("world", "bold")]},
            ],
        }

    def test_nested_marks(self):
        """Test marks accumulate through nested inline tags."""
        doc = html_to_document("<p><em>very <b>bold</b></em></p>")

        assert doc["content"][0]["content"] == [text("very ", "italic"), text("bold", "italic", "bold")]

    def test_space_inside_inline_tag_kept(self):
        """Test whitespace at the edge of an inline tag separates words."""
        doc = html_to_document("<p>Hello<strong> world</strong></p>")

        assert doc["content"][0]["content"] == [text("Hello"), text(" world", "bold")]

    def test_line_break(self):
        """Test <br> becomes a hard break."""
        doc = html_to_document("<p>one<br />two</p>")

        assert doc["content"][0]["content"] == [text("one"), {"type": "hardBreak"}, text("two")]

    def test_link(self):
        """Test links carry their href."""
        doc = html_to_document('<p><a href="https://example.com">site</a></p>')

        assert doc["content"][0]["content"] == [{"type": "text", "text": "site", "marks": [{"type": "link", "attrs": {"href": "https://example.com"}}]}]

    def test_lists(self):
        """Test bullet and ordered lists."""
        doc = html_to_document("<ul><li>a</li><li><p>b</p></li></ul><ol><li>c</li></ol>")

        bullet, ordered = doc["content"]
        assert bullet["type"] == "bulletList"
        assert bullet["content"] == [
            {"type": "listItem", "content": [{"type": "paragraph", "content": [text("a")]}]},
            {"type": "listItem", "content": [{"type": "paragraph", "content": [text("b")]}]},
        ]
        assert ordered["type"] == "orderedList"

    def test_blockquote_and_rule(self):
        """Test blockquotes wrap blocks and <hr> is a rule."""
        doc = html_to_document("<blockquote><p>quoted</p></blockquote><hr/>")

        assert doc["content"] == [
            {"type": "blockquote", "content": [{"type": "paragraph", "content": [text("quoted")]}]},
            {"type": "horizontalRule"},
        ]

    def test_divs_are_unwrapped(self):
        """Test container tags do not appear in the document."""
        doc = html_to_document('<div class="chapter"><section><p>inside</p></section></div>')

        assert doc["content"] == [{"type": "paragraph", "content": [text("inside")]}]

    def test_loose_text_becomes_paragraph(self):
        """Test text outside any block is wrapped in a paragraph."""
        doc = html_to_document("loose <em>words</em><p>then a paragraph</p>")

        assert doc["content"] == [
            {"type": "paragraph", "content": [text("loose "), text("words", "italic")]},
            {"type": "paragraph", "content": [text("then a paragraph")]},
        ]

    def test_whitespace_collapsed(self):
        """Test source line breaks inside a paragraph become spaces."""
        doc = html_to_document("<p>  one\n   two  </p>")

        assert doc["content"][0]["content"] == [text("one two")]

    def test_empty_paragraphs_dropped(self):
        """Test paragraphs without content are skipped."""
        doc = html_to_document("<p> </p><p>kept</p>")

        assert doc["content"] == [{"type": "paragraph", "content": [text("kept")]}]

    def test_script_and_comments_skipped(self):
        """Test non-content nodes are ignored."""
        doc = html_to_document("<p>a<!-- note --></p><script>x()</script>")

        assert doc["content"] == [{"type": "paragraph", "content": [text("a")]}]

    def test_entities_decoded(self):
        """Test entities become characters in text nodes."""
        doc = html_to_document("<p>Fish &amp; chips</p>")

        assert doc["content"][0]["content"] == [text("Fish & chips")]
