#!/usr/bin/env python3

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
common_file_utils.py - Encoding detection for manuscript text files

Authors paste or upload plain-text manuscripts saved by all kinds of
editors. Files are read as bytes, UTF-8 is tried first, then the encoding
chardet detects, then a list of fallback encodings.
"""

import logging
from pathlib import Path

import chardet

# Default logger
logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_ENCODINGS = ["utf-8", "cp1252", "latin-1"]


def detect_encoding(raw_data: bytes, logger: logging.Logger | None = None) -> tuple[str, float]:
    """
    Detect the encoding of raw bytes with chardet.

    Returns: (encoding, confidence) tuple; ("utf-8", 0.0) when undetectable
    """
    if logger is None:
        logger = globals()["logger"]

    result = chardet.detect(raw_data)
    encoding = result.get("encoding") or "utf-8"
    confidence = result.get("confidence") or 0.0
    logger.debug(f"chardet.detect: {encoding} (confidence: {confidence})")
    return encoding, confidence


def decode_bytes(
    raw_data: bytes,
    confidence_threshold: float = 0.5,
    fallback_encodings: list[str] | None = None,
    logger: logging.Logger | None = None,
) -> str:
    """
    Decode manuscript bytes to text.

    Parameters:
    - raw_data: File content
    - confidence_threshold: Minimum chardet confidence to trust its guess
    - fallback_encodings: Encodings tried when detection fails
    - logger: Logger instance (uses module logger if None)

    Returns: Decoded text (with replacement chars if nothing decodes cleanly)
    """
    if logger is None:
        logger = globals()["logger"]

    if fallback_encodings is None:
        fallback_encodings = DEFAULT_FALLBACK_ENCODINGS

    try:
        return raw_data.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.debug("Content is not valid UTF-8, detecting encoding")

    encoding, confidence = detect_encoding(raw_data, logger)
    if confidence >= confidence_threshold:
        try:
            return raw_data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Failed to decode with detected encoding {encoding}: {e}")

    for enc in fallback_encodings:
        try:
            content = raw_data.decode(enc)
            logger.debug(f"Successfully decoded with fallback encoding: {enc}")
            return content
        except UnicodeDecodeError:
            continue

    logger.warning(f"All encodings failed, using {fallback_encodings[0]} with error replacement")
    return raw_data.decode(fallback_encodings[0], errors="replace")


def decode_text_file(file_path: Path, logger: logging.Logger | None = None) -> str:
    """
    Read and decode an entire text file.

    Raises:
        OSError: If the file cannot be read
    """
    with Path(file_path).open("rb") as f:
        raw_data = f.read()
    return decode_bytes(raw_data, logger=logger)
