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
FictionForge Core - chapter import and access gating

Turns EPUB, DOCX and pasted-text manuscripts into ordered chapters and
decides which readers may open a tier-gated chapter.
"""

__version__ = "1.0.0"
__author__ = "Emasoft"
__email__ = "713559+Emasoft@users.noreply.github.com"
__license__ = "Apache-2.0"

# Importers
from . import epub_parser
from . import docx_parser
from . import paste_parser
from . import manuscript_importer
from . import document_json

# Access
from . import access_gate
from . import content_store

# Utility modules
from . import common_file_utils
from . import common_print_utils
from . import common_yaml_utils
from . import html_processing
from . import text_processing

# Support modules
from . import config_manager
from . import import_errors
from . import models

from .access_gate import AccessGate
from .docx_parser import parse_docx
from .epub_parser import parse_epub
from .import_errors import AccessLookupError, ChapterImportError, EmptyResultError, FormatError
from .manuscript_importer import import_chapters, parse_manuscript
from .models import ChapterAccess, ParsedChapter
from .paste_parser import parse_pasted_text

__all__ = [
    "epub_parser",
    "docx_parser",
    "paste_parser",
    "manuscript_importer",
    "document_json",
    "access_gate",
    "content_store",
    "common_file_utils",
    "common_print_utils",
    "common_yaml_utils",
    "html_processing",
    "text_processing",
    "config_manager",
    "import_errors",
    "models",
    "AccessGate",
    "AccessLookupError",
    "ChapterAccess",
    "ChapterImportError",
    "EmptyResultError",
    "FormatError",
    "ParsedChapter",
    "import_chapters",
    "parse_docx",
    "parse_epub",
    "parse_manuscript",
    "parse_pasted_text",
]
