#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Test suite for common_file_utils module.
"""

from unittest.mock import patch

from fictionforge_core.common_file_utils import decode_bytes, decode_text_file, detect_encoding


class TestDetectEncoding:
    """Test the detect_encoding function."""

    def test_ascii(self):
        """Test plain ASCII is detected with confidence."""
        encoding, confidence = detect_encoding(b"Plain old text.")
        assert encoding.lower() == "ascii"
        assert confidence > 0.5

    @patch("fictionforge_core.common_file_utils.chardet.detect")
    def test_undetectable_defaults_to_utf8(self, mock_detect):
        """Test a None guess falls back to utf-8."""
        mock_detect.return_value = {"encoding": None, "confidence": 0.0}

        assert detect_encoding(b"\x00\x01") == ("utf-8", 0.0)


class TestDecodeBytes:
    """Test the decode_bytes function."""

    def test_utf8(self):
        """Test UTF-8 is decoded without detection."""
        with patch("fictionforge_core.common_file_utils.chardet.detect") as mock_detect:
            assert decode_bytes("Ça va? ✓".encode("utf-8")) == "Ça va? ✓"
        mock_detect.assert_not_called()

    def test_utf8_bom_removed(self):
        """Test a byte order mark does not reach the text."""
        assert decode_bytes(b"\xef\xbb\xbfChapter 1") == "Chapter 1"

    @patch("fictionforge_core.common_file_utils.chardet.detect")
    def test_detected_encoding_used(self, mock_detect):
        """Test a confident guess is used for non-UTF-8 bytes."""
        mock_detect.return_value = {"encoding": "cp1252", "confidence": 0.9}

        assert decode_bytes("naïve “quotes”".encode("cp1252")) == "naïve “quotes”"

    @patch("fictionforge_core.common_file_utils.chardet.detect")
    def test_low_confidence_uses_fallbacks(self, mock_detect):
        """Test fallbacks are tried when the guess is weak."""
        mock_detect.return_value = {"encoding": "koi8-r", "confidence": 0.1}

        assert decode_bytes("café".encode("cp1252")) == "café"

    @patch("fictionforge_core.common_file_utils.chardet.detect")
    def test_bogus_detected_encoding(self, mock_detect):
        """Test an unknown codec name from detection is survived."""
        mock_detect.return_value = {"encoding": "no-such-codec", "confidence": 0.99}

        assert decode_bytes("café".encode("cp1252")) == "café"

    def test_replacement_when_nothing_fits(self):
        """Test the last resort decodes with replacement characters."""
        assert decode_bytes(b"caf\xe9", fallback_encodings=["utf-8"]).startswith("caf")


class TestDecodeTextFile:
    """Test the decode_text_file function."""

    def test_reads_file(self, temp_dir):
        """Test a file on disk is read and decoded."""
        path = temp_dir / "draft.txt"
        path.write_bytes("Chapter 1\nÉlan".encode("utf-8"))

        assert decode_text_file(path) == "Chapter 1\nÉlan"
