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
import_errors.py - Exception types for manuscript import and chapter access
===========================================================================

Import errors are raised straight to the caller so the author sees what went
wrong with their file. AccessLookupError never leaves the access gate: it is
turned into a denial there.
"""


class ChapterImportError(Exception):
    """Base class for errors raised while importing a manuscript."""


class FormatError(ChapterImportError):
    """Raised when an EPUB/DOCX container or package structure is malformed."""


class EmptyResultError(ChapterImportError):
    """Raised when a parser ran cleanly but found no usable chapters."""


class AccessLookupError(Exception):
    """Raised by the content store when a lookup needed for gating fails."""


class ChapterNotFoundError(LookupError):
    """Raised when a chapter does not exist or is not published."""


class StoryNotFoundError(LookupError):
    """Raised when importing chapters into a story that does not exist."""
