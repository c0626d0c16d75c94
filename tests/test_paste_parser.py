#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Test suite for paste_parser module.
"""

import pytest

from fictionforge_core.import_errors import EmptyResultError
from fictionforge_core.models import ParsedChapter
from fictionforge_core.paste_parser import chunk_to_chapter, parse_pasted_text


class TestChunkToChapter:
    """Test the chunk_to_chapter function."""

    def test_first_line_is_title(self):
        """Test the title/content split."""
        chapter = chunk_to_chapter("The Title\nBody line", "Chapter 9")
        assert chapter == ParsedChapter(title="The Title", html="<p>Body line</p>")

    def test_title_only_chunk_reuses_title(self):
        """Test a chunk with nothing after its title."""
        chapter = chunk_to_chapter("Lonely Title\n", "Chapter 9")
        assert chapter == ParsedChapter(title="Lonely Title", html="<p>Lonely Title</p>")

    def test_blank_lines_kept_by_default(self):
        """Test paragraph breaks survive unless blank lines are dropped."""
        chunk = "Title\none\n\ntwo"

        assert chunk_to_chapter(chunk, "Chapter 1").html == "<p>one</p>\n<p>two</p>"
        assert chunk_to_chapter(chunk, "Chapter 1", drop_blank_lines=True).html == "<p>one<br />two</p>"


class TestParsePastedText:
    """Test the parse_pasted_text function."""

    def test_chapter_headings(self):
        """Test two 'Chapter N' lines split the text."""
        chapters = parse_pasted_text("Chapter 1\nfoo\n\nChapter 2\nbar")

        assert chapters == [
            ParsedChapter(title="Chapter 1", html="<p>foo</p>"),
            ParsedChapter(title="Chapter 2", html="<p>bar</p>"),
        ]

    def test_no_structure_single_chapter(self):
        """Test prose without markers or headings."""
        chapters = parse_pasted_text("just some prose, no markers")

        assert chapters == [ParsedChapter(title="Chapter 1", html="<p>just some prose, no markers</p>")]

    def test_markers(self):
        """Test ---CHAPTER--- separated chunks, first line as title."""
        chapters = parse_pasted_text("Arrival\nThe train was late.\n---CHAPTER---\nDeparture\nThe train left.")

        assert [c.title for c in chapters] == ["Arrival", "Departure"]
        assert chapters[1].html == "<p>The train left.</p>"

    def test_marker_chunk_blank_lines_collapsed(self):
        """Test blank lines inside a marker chunk do not start new paragraphs."""
        chapters = parse_pasted_text("---CHAPTER---\nTitle\n\npara1\n\npara2")

        assert chapters == [ParsedChapter(title="Title", html="<p>para1<br />para2</p>")]

    def test_marker_chunk_title_after_blank_lines(self):
        """Test the first non-blank line of a marker chunk is the title."""
        chapters = parse_pasted_text("Intro\n---CHAPTER---\n\n\nThe Return\n\nHome at last.")

        assert chapters[1] == ParsedChapter(title="The Return", html="<p>Home at last.</p>")

    def test_markers_take_priority(self):
        """Test markers win over Chapter N headings."""
        chapters = parse_pasted_text("Chapter 1\na\nChapter 2\nb\n---CHAPTER---\nChapter 3\nc")

        assert [c.title for c in chapters] == ["Chapter 1", "Chapter 3"]

    def test_empty_marker_chunks_dropped(self):
        """Test leading, repeated and trailing markers."""
        chapters = parse_pasted_text("---CHAPTER---\nOne\ntext\n---CHAPTER---\n\n---CHAPTER---")

        assert [c.title for c in chapters] == ["One"]

    def test_paragraphs_kept_inside_chapter(self):
        """Test blank lines inside a chapter become paragraph breaks."""
        chapters = parse_pasted_text("Chapter 1\npara one\nstill one\n\npara two\nChapter 2\nx")

        assert chapters[0].html == "<p>para one<br />still one</p>\n<p>para two</p>"

    def test_text_before_first_heading_dropped(self):
        """Test front matter before 'Chapter 1' is not imported."""
        chapters = parse_pasted_text("My Novel\nby Someone\n\nChapter 1\na\nChapter 2\nb")

        assert [c.title for c in chapters] == ["Chapter 1", "Chapter 2"]

    def test_heading_line_kept_as_title(self):
        """Test the whole heading line, any case, is the title."""
        chapters = parse_pasted_text("chapter 10: The Reckoning\nx\nCHAPTER 11 - Aftermath\ny")

        assert [c.title for c in chapters] == ["chapter 10: The Reckoning", "CHAPTER 11 - Aftermath"]

    def test_single_heading_is_single_chapter(self):
        """Test one 'Chapter N' line is not enough to split."""
        chapters = parse_pasted_text("Chapter 1\nThe only chapter.")

        assert len(chapters) == 1
        assert chapters[0].title == "Chapter 1"
        assert chapters[0].html == "<p>Chapter 1<br />The only chapter.</p>"

    def test_windows_line_endings(self):
        """Test CRLF input splits like LF input."""
        chapters = parse_pasted_text("Chapter 1\r\nfoo\r\n\r\nChapter 2\r\nbar")

        assert [c.html for c in chapters] == ["<p>foo</p>", "<p>bar</p>"]

    def test_html_is_escaped(self):
        """Test markup characters in pasted text are escaped."""
        chapters = parse_pasted_text("if a < b && c > d <script>")

        assert chapters[0].html == "<p>if a &lt; b &amp;&amp; c &gt; d &lt;script&gt;</p>"

    def test_custom_title_prefix(self):
        """Test positional titles use the given prefix."""
        chapters = parse_pasted_text("plain text", title_prefix="Part")

        assert chapters[0].title == "Part 1"

    @pytest.mark.parametrize("text", ["", "   ", "\n\n\t\n"])
    def test_empty_input(self, text):
        """Test empty or whitespace-only input."""
        with pytest.raises(EmptyResultError, match="Please paste some text first"):
            parse_pasted_text(text)
