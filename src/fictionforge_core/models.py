#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2025 Emasoft
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
#
# CHANGELOG:
# - Added ParsedChapter record shared by all importers
# - Added TierName enum with rank, display name and price
# - Added AccessDecision and ChapterAccess results
#

"""Data models for the FictionForge chapter importer and access gate."""

from __future__ import annotations

import enum
from dataclasses import dataclass


@dataclass(frozen=True)
class ParsedChapter:
    """A chapter produced by an importer: a title and a rich-text fragment."""

    title: str
    html: str


class TierName(enum.Enum):
    """Subscription tiers an author can offer, in ascending order."""

    SUPPORTER = "supporter"
    """Entry tier, $3/month."""
    ENTHUSIAST = "enthusiast"
    """Middle tier, $6/month."""
    PATRON = "patron"
    """Top tier, $12/month."""

    @property
    def rank(self) -> int:
        return TIER_RANKS[self.value]

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def price_cents(self) -> int:
        return TIER_PRICES_CENTS[self.value]

    @classmethod
    def from_name(cls, name: str | None) -> TierName | None:
        """
        Look up a tier by its stored name.

        Args:
            name: Tier name as stored on chapters and subscriptions

        Returns:
            The matching TierName, or None for empty or unknown names
        """
        if not name:
            return None
        try:
            return cls(name.strip().lower())
        except ValueError:
            return None


TIER_RANKS: dict[str, int] = {
    "supporter": 1,
    "enthusiast": 2,
    "patron": 3,
}

TIER_PRICES_CENTS: dict[str, int] = {
    "supporter": 300,
    "enthusiast": 600,
    "patron": 1200,
}


@dataclass(frozen=True)
class AccessDecision:
    """Whether a requester may read a chapter's content."""

    has_access: bool

    def __bool__(self) -> bool:
        return self.has_access


@dataclass(frozen=True)
class ChapterAccess:
    """Access decision plus the chapter metadata that is never withheld."""

    has_access: bool
    word_count: int
    comment_count: int
