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
epub_container.py - Reading the OCF container and OPF package of an EPUB
========================================================================

An EPUB is a ZIP archive. META-INF/container.xml points at the package
document (OPF), whose manifest maps ids to files and whose spine lists the
ids in reading order.
"""

from __future__ import annotations

import io
import logging
import xml.etree.ElementTree as ET
import zipfile
from pathlib import Path
from typing import BinaryIO, Union
from urllib.parse import unquote

from .import_constants import CONTAINER_PATH
from .import_errors import FormatError

logger = logging.getLogger(__name__)

BinarySource = Union[str, Path, bytes, bytearray, BinaryIO]


def open_zip(source: BinarySource, kind: str) -> zipfile.ZipFile:
    """
    Open a path, byte string or binary file object as a ZIP archive.

    Args:
        source: The uploaded file
        kind: Human-readable format name used in error messages ("EPUB", "DOCX")

    Raises:
        FormatError: If the input is not a ZIP archive
    """
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    try:
        return zipfile.ZipFile(source)
    except zipfile.BadZipFile as e:
        raise FormatError(f"Invalid {kind}: the file is not a ZIP archive. Export the manuscript again as a .{kind.lower()} file.") from e


def _local_name(tag: str) -> str:
    """Strip the XML namespace from an element tag."""
    return tag.rsplit("}", 1)[-1]


def _parse_xml(text: str, what: str) -> ET.Element:
    try:
        return ET.fromstring(text.encode("utf-8"))
    except ET.ParseError as e:
        raise FormatError(f"Invalid EPUB: {what} is not well-formed XML ({e})") from e


def resolve_relative_path(base_path: str, relative_path: str) -> str:
    """
    Resolve an href against the directory of the document that contains it.

    Args:
        base_path: Archive path of the referencing document (e.g. "OEBPS/content.opf")
        relative_path: href found in that document (e.g. "../Text/ch1.xhtml")

    Returns:
        Archive member path, e.g. "Text/ch1.xhtml"
    """
    if relative_path.startswith("/"):
        return relative_path[1:]
    base_dir = base_path[: base_path.rfind("/") + 1]
    resolved: list[str] = []
    for part in (base_dir + relative_path).split("/"):
        if part == "..":
            if resolved:
                resolved.pop()
        elif part != ".":
            resolved.append(part)
    return "/".join(resolved)


def find_package_path(container_xml: str) -> str:
    """
    Return the first full-path attribute found in container.xml.

    Raises:
        FormatError: If no rootfile path is declared
    """
    root = _parse_xml(container_xml, CONTAINER_PATH)
    for element in root.iter():
        full_path = element.get("full-path")
        if full_path:
            return full_path
    raise FormatError("Invalid EPUB: cannot find OPF path in container.xml")


def parse_manifest(opf_xml: str) -> dict[str, str]:
    """
    Map manifest item ids to their hrefs.

    Args:
        opf_xml: Package document text

    Returns:
        Dictionary of id -> href (URL-decoded, fragment removed)
    """
    root = _parse_xml(opf_xml, "the OPF package document")
    manifest: dict[str, str] = {}
    for element in root.iter():
        if _local_name(element.tag) != "item":
            continue
        item_id = element.get("id")
        href = element.get("href")
        if item_id and href:
            manifest.setdefault(item_id, unquote(href.split("#", 1)[0]))
    return manifest


def parse_spine(opf_xml: str) -> list[str]:
    """
    Return the spine idrefs in reading order.

    Raises:
        FormatError: If the package document has no spine
    """
    root = _parse_xml(opf_xml, "the OPF package document")
    spine = next((el for el in root.iter() if _local_name(el.tag) == "spine"), None)
    if spine is None:
        raise FormatError("Invalid EPUB: no spine found in OPF")
    return [ref.get("idref", "") for ref in spine if _local_name(ref.tag) == "itemref" and ref.get("idref")]


class EpubContainer:
    """Named member lookup over an opened EPUB archive."""

    def __init__(self, archive: zipfile.ZipFile):
        self.archive = archive
        self._names = set(archive.namelist())

    @classmethod
    def open(cls, source: BinarySource) -> EpubContainer:
        return cls(open_zip(source, "EPUB"))

    def __enter__(self) -> EpubContainer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self.archive.close()

    def read_text(self, name: str) -> str | None:
        """
        Read an archive member as UTF-8 text.

        Returns:
            Member text, or None if the archive has no such member
        """
        if name not in self._names:
            return None
        return self.archive.read(name).decode("utf-8", errors="replace")

    def package_path(self) -> str:
        """
        Locate the OPF package document via META-INF/container.xml.

        Raises:
            FormatError: If container.xml is missing or names no package
        """
        container_xml = self.read_text(CONTAINER_PATH)
        if container_xml is None:
            raise FormatError(f"Invalid EPUB: missing {CONTAINER_PATH}")
        return find_package_path(container_xml)

    def read_package(self) -> tuple[str, dict[str, str], list[str]]:
        """
        Read the package document.

        Returns:
            Tuple of (package path, manifest id -> href, spine idrefs)

        Raises:
            FormatError: If the package document is missing or has no spine
        """
        opf_path = self.package_path()
        opf_xml = self.read_text(opf_path)
        if opf_xml is None:
            raise FormatError(f"Invalid EPUB: OPF file not found at {opf_path}")
        manifest = parse_manifest(opf_xml)
        spine = parse_spine(opf_xml)
        logger.debug(f"Package {opf_path}: {len(manifest)} manifest items, {len(spine)} spine entries")
        return opf_path, manifest, spine
