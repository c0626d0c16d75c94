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
document_json.py - Convert chapter markup to the editor's JSON document tree
============================================================================

Chapters are stored as a tree of nodes, the format the chapter editor
loads and saves:

    {"type": "doc", "content": [
        {"type": "heading", "attrs": {"level": 1}, "content": [{"type": "text", "text": "One"}]},
        {"type": "paragraph", "content": [
            {"type": "text", "text": "Hello "},
            {"type": "text", "text": "world", "marks": [{"type": "bold"}]},
        ]},
    ]}

Unknown tags are unwrapped; their text is kept.
"""

from __future__ import annotations

import re
from typing import Any, Iterable

from bs4 import NavigableString, Tag
from bs4.element import PreformattedString

from .html_processing import parse_markup

Node = dict[str, Any]

MARK_TAGS = {
    "strong": "bold",
    "b": "bold",
    "em": "italic",
    "i": "italic",
    "u": "underline",
    "s": "strike",
    "strike": "strike",
    "del": "strike",
    "code": "code",
}

HEADING_TAGS = {"h1": 1, "h2": 2, "h3": 3, "h4": 4, "h5": 5, "h6": 6}

# Tags whose children are laid out as blocks of the parent
TRANSPARENT_BLOCKS = {"html", "body", "div", "section", "article", "main", "header", "footer", "aside", "figure", "center"}

SKIPPED_TAGS = {"head", "script", "style", "title", "meta", "link"}

WHITESPACE_RE = re.compile(r"\s+")


def _text_node(text: str, marks: list[Node]) -> Node:
    node: Node = {"type": "text", "text": text}
    if marks:
        node["marks"] = [dict(mark) for mark in marks]
    return node


def _inline_nodes(nodes: Iterable[Any], marks: list[Node]) -> list[Node]:
    result: list[Node] = []
    for node in nodes:
        if isinstance(node, PreformattedString):
            continue
        if isinstance(node, NavigableString):
            text = WHITESPACE_RE.sub(" ", str(node))
            if text:
                result.append(_text_node(text, marks))
        elif isinstance(node, Tag):
            if node.name in SKIPPED_TAGS:
                continue
            if node.name == "br":
                result.append({"type": "hardBreak"})
            elif node.name in MARK_TAGS:
                result.extend(_inline_nodes(node.children, marks + [{"type": MARK_TAGS[node.name]}]))
            elif node.name == "a" and node.get("href"):
                result.extend(_inline_nodes(node.children, marks + [{"type": "link", "attrs": {"href": node["href"]}}]))
            else:
                result.extend(_inline_nodes(node.children, marks))
    return result


def _trim_inline(nodes: list[Node]) -> list[Node]:
    """Strip outer whitespace of a run of inline nodes and drop empty text."""
    if nodes and nodes[0]["type"] == "text":
        nodes[0]["text"] = nodes[0]["text"].lstrip()
    if nodes and nodes[-1]["type"] == "text":
        nodes[-1]["text"] = nodes[-1]["text"].rstrip()
    return [node for node in nodes if node["type"] != "text" or node["text"]]


def _textblock(node_type: str, children: Iterable[Any], attrs: Node | None = None) -> Node | None:
    content = _trim_inline(_inline_nodes(children, []))
    if node_type == "paragraph" and not content:
        return None
    block: Node = {"type": node_type}
    if attrs:
        block["attrs"] = attrs
    if content:
        block["content"] = content
    return block


def _list_items(list_tag: Tag) -> list[Node]:
    items = []
    for child in list_tag.children:
        if isinstance(child, Tag) and child.name == "li":
            content = _block_nodes(child.children) or [{"type": "paragraph"}]
            items.append({"type": "listItem", "content": content})
    return items


def _table(table_tag: Tag) -> Node | None:
    rows = []
    for row in table_tag.find_all("tr"):
        cells = []
        for cell in row.find_all(["td", "th"], recursive=False):
            cell_type = "tableHeader" if cell.name == "th" else "tableCell"
            cells.append({"type": cell_type, "content": _block_nodes(cell.children) or [{"type": "paragraph"}]})
        if cells:
            rows.append({"type": "tableRow", "content": cells})
    return {"type": "table", "content": rows} if rows else None


def _block_nodes(nodes: Iterable[Any]) -> list[Node]:
    blocks: list[Node] = []
    pending: list[Any] = []

    def flush() -> None:
        if pending:
            paragraph = _textblock("paragraph", list(pending))
            if paragraph:
                blocks.append(paragraph)
            pending.clear()

    for node in nodes:
        if not isinstance(node, Tag) or node.name in MARK_TAGS or node.name in ("a", "br", "span", "sup", "sub", "small"):
            pending.append(node)
            continue

        name = node.name
        if name in SKIPPED_TAGS:
            continue
        flush()
        if name == "p":
            paragraph = _textblock("paragraph", node.children)
            if paragraph:
                blocks.append(paragraph)
        elif name in HEADING_TAGS:
            heading = _textblock("heading", node.children, {"level": HEADING_TAGS[name]})
            if heading and heading.get("content"):
                blocks.append(heading)
        elif name == "blockquote":
            content = _block_nodes(node.children)
            if content:
                blocks.append({"type": "blockquote", "content": content})
        elif name in ("ul", "ol"):
            items = _list_items(node)
            if items:
                blocks.append({"type": "bulletList" if name == "ul" else "orderedList", "content": items})
        elif name == "hr":
            blocks.append({"type": "horizontalRule"})
        elif name == "pre":
            text = node.get_text()
            block: Node = {"type": "codeBlock"}
            if text:
                block["content"] = [{"type": "text", "text": text}]
            blocks.append(block)
        elif name == "img" and node.get("src"):
            blocks.append({"type": "image", "attrs": {"src": node["src"], "alt": node.get("alt")}})
        elif name == "table":
            table = _table(node)
            if table:
                blocks.append(table)
        elif name in TRANSPARENT_BLOCKS:
            blocks.extend(_block_nodes(node.children))
        else:
            pending.append(node)
    flush()
    return blocks


def html_to_document(markup: str) -> Node:
    """
    Convert chapter markup to a JSON document tree.

    Args:
        markup: Chapter HTML fragment

    Returns:
        Root node of type "doc"; an empty document has one empty paragraph
    """
    content = _block_nodes(parse_markup(markup).contents)
    return {"type": "doc", "content": content or [{"type": "paragraph"}]}
