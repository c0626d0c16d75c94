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

# HERE IS THE CHANGELOG FOR THIS VERSION OF THE CODE:
# - Added tier ordering and the chapter access decision
# - Lookup failures are logged and turned into a denial
# - Word count and comment count are returned whatever the decision
#

"""
access_gate.py - Decide whether a reader may see a chapter's content
====================================================================

Rules, in order:

1. a chapter without a tier requirement is public
2. the story's author always has access
3. anonymous readers are denied
4. otherwise the reader needs an active subscription to the author whose
   tier ranks at least as high as the chapter's required tier

The gate fails closed: if any lookup fails the reader is denied.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from .content_store import Chapter, ContentStore
from .import_errors import AccessLookupError, ChapterNotFoundError
from .models import AccessDecision, ChapterAccess, TierName
from .text_processing import count_words_from_content

TIER_HIERARCHY: dict[str, int] = {tier.value: tier.rank for tier in TierName}


def tier_rank(tier_name: str | None, hierarchy: Mapping[str, int] = TIER_HIERARCHY) -> int | None:
    """Rank of a tier name, None for empty or unknown names."""
    if not tier_name:
        return None
    return hierarchy.get(tier_name.strip().lower())


def tier_grants_access(required_tier: str | None, held_tier: str | None, hierarchy: Mapping[str, int] = TIER_HIERARCHY) -> bool:
    """
    Whether holding ``held_tier`` satisfies ``required_tier``.

    No requirement is always satisfied. Unknown tier names never satisfy
    and are never satisfied.
    """
    if not required_tier:
        return True
    required = tier_rank(required_tier, hierarchy)
    held = tier_rank(held_tier, hierarchy)
    return required is not None and held is not None and held >= required


class AccessGate:
    """Resolves chapter access against a content store."""

    def __init__(
        self,
        store: ContentStore,
        tier_hierarchy: Mapping[str, int] | None = None,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize the gate.

        Args:
            store: Source of chapters, subscriptions and comments
            tier_hierarchy: Tier name -> rank (default: supporter < enthusiast < patron)
            logger: Logger instance
        """
        self.store = store
        self.tier_hierarchy = dict(tier_hierarchy) if tier_hierarchy else TIER_HIERARCHY
        self.logger = logger or logging.getLogger(__name__)

    def resolve_access(self, chapter: Chapter, requester_id: str | None) -> AccessDecision:
        """
        Decide whether the requester may read the chapter's content.

        Args:
            chapter: Chapter record (its story is looked up through the store)
            requester_id: Id of the signed-in reader, None when anonymous

        Returns:
            AccessDecision; denied whenever a lookup fails
        """
        required_tier = chapter.min_tier_name
        if not required_tier:
            return AccessDecision(True)

        try:
            author_id = self.store.story_author_id(chapter)
            if requester_id is not None and requester_id == author_id:
                return AccessDecision(True)
            if requester_id is None:
                return AccessDecision(False)
            held_tier = self.store.active_subscription_tier(requester_id, author_id)
        except AccessLookupError as e:
            self.logger.warning(f"Access lookup failed for chapter {chapter.id}, denying access: {e}")
            return AccessDecision(False)

        if held_tier is None:
            return AccessDecision(False)
        return AccessDecision(tier_grants_access(required_tier, held_tier, self.tier_hierarchy))

    def chapter_metadata(self, chapter: Chapter) -> tuple[int, int]:
        """
        Word count and top-level comment count of a chapter.

        Returns:
            Tuple of (word_count, comment_count); comment count is 0 if it cannot be looked up
        """
        word_count = count_words_from_content(chapter.content)
        try:
            comment_count = self.store.count_top_level_comments(chapter.id)
        except AccessLookupError as e:
            self.logger.warning(f"Comment count unavailable for chapter {chapter.id}: {e}")
            comment_count = 0
        return word_count, comment_count

    def _load_published_chapter(self, chapter_id: str) -> Chapter | None:
        """
        Load a published chapter.

        Returns:
            The chapter, or None when the lookup itself failed

        Raises:
            ChapterNotFoundError: If the chapter does not exist or is unpublished
        """
        try:
            chapter = self.store.get_chapter(chapter_id)
        except AccessLookupError as e:
            self.logger.warning(f"Could not load chapter {chapter_id}, denying access: {e}")
            return None
        if chapter is None:
            raise ChapterNotFoundError(f"Chapter {chapter_id} not found")
        if not chapter.is_published:
            raise ChapterNotFoundError(f"Chapter {chapter_id} not published")
        return chapter

    def resolve_chapter_access(self, chapter_id: str, requester_id: str | None) -> ChapterAccess:
        """
        Resolve access to a chapter by id, with its metadata.

        Args:
            chapter_id: Chapter to open
            requester_id: Id of the signed-in reader, None when anonymous

        Returns:
            ChapterAccess(has_access, word_count, comment_count)

        Raises:
            ChapterNotFoundError: If the chapter does not exist or is unpublished
        """
        chapter = self._load_published_chapter(chapter_id)
        if chapter is None:
            return ChapterAccess(has_access=False, word_count=0, comment_count=0)

        decision = self.resolve_access(chapter, requester_id)
        word_count, comment_count = self.chapter_metadata(chapter)
        return ChapterAccess(has_access=decision.has_access, word_count=word_count, comment_count=comment_count)

    def chapter_payload(self, chapter_id: str, requester_id: str | None) -> dict[str, Any]:
        """
        Reader-facing view of a chapter; content is None when access is denied.

        Raises:
            ChapterNotFoundError: If the chapter does not exist or is unpublished
        """
        chapter = self._load_published_chapter(chapter_id)
        if chapter is None:
            return {"id": chapter_id, "content": None, "has_access": False, "word_count": 0, "comment_count": 0}

        decision = self.resolve_access(chapter, requester_id)
        word_count, comment_count = self.chapter_metadata(chapter)
        story = chapter.story
        return {
            "id": chapter.id,
            "title": chapter.title,
            "chapter_number": chapter.chapter_number,
            "content": chapter.content if decision.has_access else None,
            "author_note_before": chapter.author_note_before,
            "author_note_after": chapter.author_note_after,
            "default_author_note_before": story.default_author_note_before,
            "default_author_note_after": story.default_author_note_after,
            "min_tier_name": chapter.min_tier_name,
            "likes": chapter.likes or 0,
            "has_access": decision.has_access,
            "word_count": word_count,
            "comment_count": comment_count,
            "story_id": story.id,
            "story_title": story.title,
            "author_id": story.author_id,
        }
