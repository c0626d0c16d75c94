#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Pytest configuration and shared fixtures for all tests
"""

import io
import os
import shutil
import sys
import tempfile
import zipfile
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add src directory to path so we can import our modules
src_dir = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src")
sys.path.insert(0, src_dir)

from fictionforge_core.content_store import ContentStore  # noqa: E402

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"

CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="{opf_path}" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>"""

OPF_XML = """<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="3.0" unique-identifier="uid">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/"><dc:title>Test Book</dc:title></metadata>
  <manifest>
{items}
  </manifest>
  <spine>
{itemrefs}
  </spine>
</package>"""

STYLES_XML = f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<w:styles xmlns:w="{W_NS}">
  <w:style w:type="paragraph" w:styleId="Title"><w:name w:val="Title"/></w:style>
  <w:style w:type="paragraph" w:styleId="Heading1"><w:name w:val="heading 1"/></w:style>
  <w:style w:type="paragraph" w:styleId="Heading2"><w:name w:val="heading 2"/></w:style>
  <w:style w:type="paragraph" w:styleId="Heading3"><w:name w:val="heading 3"/></w:style>
</w:styles>"""


def xhtml(title, body):
    """A minimal XHTML content document."""
    title_tag = f"<title>{title}</title>" if title is not None else ""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<html xmlns="http://www.w3.org/1999/xhtml">'
        f"<head>{title_tag}</head><body>{body}</body></html>"
    )


def build_epub(documents, opf_path="OEBPS/content.opf", spine=None, extra_items=None, include_container=True):
    """
    Build an EPUB archive in memory.

    Args:
        documents: List of (item_id, href, text) placed next to the OPF
        opf_path: Archive path of the package document
        spine: Spine idrefs (default: every document id in order)
        extra_items: Additional (item_id, href) manifest entries with no file
        include_container: Whether to write META-INF/container.xml

    Returns:
        EPUB bytes
    """
    opf_dir = opf_path.rsplit("/", 1)[0] + "/" if "/" in opf_path else ""
    items = [(item_id, href) for item_id, href, _ in documents] + list(extra_items or [])
    spine = spine if spine is not None else [item_id for item_id, _, _ in documents]

    manifest_xml = "\n".join(f'    <item id="{item_id}" href="{href}" media-type="application/xhtml+xml"/>' for item_id, href in items)
    spine_xml = "\n".join(f'    <itemref idref="{idref}"/>' for idref in spine)

    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr("mimetype", "application/epub+zip")
        if include_container:
            zf.writestr("META-INF/container.xml", CONTAINER_XML.format(opf_path=opf_path))
        zf.writestr(opf_path, OPF_XML.format(items=manifest_xml, itemrefs=spine_xml))
        for _, href, text in documents:
            zf.writestr(opf_dir + href, text)
    return buf.getvalue()


def docx_paragraph(text, style=None, bold=False, italic=False):
    """A w:p element with one run."""
    ppr = f'<w:pPr><w:pStyle w:val="{style}"/></w:pPr>' if style else ""
    rpr_parts = ("<w:b/>" if bold else "") + ("<w:i/>" if italic else "")
    rpr = f"<w:rPr>{rpr_parts}</w:rPr>" if rpr_parts else ""
    return f'<w:p>{ppr}<w:r>{rpr}<w:t xml:space="preserve">{text}</w:t></w:r></w:p>'


def build_docx(body_xml, styles=True, include_document=True):
    """
    Build a DOCX archive in memory.

    Args:
        body_xml: Inner XML of w:body
        styles: Whether to include word/styles.xml
        include_document: Whether to include word/document.xml

    Returns:
        DOCX bytes
    """
    document = f'<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n<w:document xmlns:w="{W_NS}"><w:body>{body_xml}</w:body></w:document>'
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr("[Content_Types].xml", '<?xml version="1.0"?><Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types"/>')
        if include_document:
            zf.writestr("word/document.xml", document)
        if styles:
            zf.writestr("word/styles.xml", STYLES_XML)
    return buf.getvalue()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def mock_logger():
    """Create a mock logger for testing"""
    logger = Mock()
    logger.info = Mock()
    logger.debug = Mock()
    logger.warning = Mock()
    logger.error = Mock()
    logger.exception = Mock()
    return logger


@pytest.fixture
def store():
    """In-memory SQLite content store with tables created"""
    content_store = ContentStore.sqlite()
    yield content_store
    content_store.close()


@pytest.fixture
def long_text():
    """Paragraph text comfortably above the chapter length threshold"""
    return "The rain had not stopped for three days, and the river kept rising."
