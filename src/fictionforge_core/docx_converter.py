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
docx_converter.py - Convert a Word document to rich-text markup
===============================================================

Thin wrapper around mammoth. Heading styles become <h1>..<h6>, bold and
italic runs become <strong> and <em>, and content controls and text boxes
are read the way Word renders them.
"""

from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path
from typing import BinaryIO
from xml.parsers.expat import ExpatError
from xml.sax import SAXException

import mammoth

from .epub_container import BinarySource
from .import_errors import FormatError

logger = logging.getLogger(__name__)


def _convert_file(docx_file: BinaryIO) -> str:
    try:
        result = mammoth.convert_to_html(docx_file)
    except (zipfile.BadZipFile, ExpatError, SAXException, KeyError, OSError, ValueError) as e:
        raise FormatError(f"Invalid DOCX file: {e}") from e

    for message in result.messages:
        logger.debug(f"DOCX conversion {message.type}: {message.message}")
    return result.value


def convert_docx_to_html(source: BinarySource) -> str:
    """
    Convert a .docx file to HTML.

    Args:
        source: Path, bytes or binary file object of the .docx

    Returns:
        HTML fragment with one block element per paragraph

    Raises:
        FormatError: If the input is not a readable Word document
    """
    if isinstance(source, (str, Path)):
        with open(source, "rb") as docx_file:
            return _convert_file(docx_file)
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    return _convert_file(source)
