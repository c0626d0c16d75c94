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
content_store.py - Stories, chapters, subscriptions and comments
================================================================

Uses peewee ORM. Models carry no database of their own: a ContentStore is
built around an explicit database object and binds the models to it for
the duration of each operation, so several stores (a test database, a file
database) can live side by side. Binding is serialized across threads, so
a store may be shared by worker threads.
"""

from __future__ import annotations

import logging
import threading
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator

from peewee import (
    BooleanField,
    CharField,
    Check,
    Database,
    DatabaseError,
    DateTimeField,
    ForeignKeyField,
    IntegerField,
    InterfaceError,
    Model,
    SqliteDatabase,
    TextField,
    fn,
)

from .import_errors import AccessLookupError, StoryNotFoundError

logger = logging.getLogger(__name__)

ACTIVE_STATUS = "active"

# Binding swaps the database on the shared model classes; one store at a time
_bind_lock = threading.RLock()


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(Model):
    """Base model; bound to a database by ContentStore."""


class Story(BaseModel):
    """A serial written by one author"""

    id = CharField(primary_key=True, max_length=50, default=_new_id)
    title = CharField(max_length=255)
    author_id = CharField(max_length=50, index=True)
    default_author_note_before = TextField(null=True)
    default_author_note_after = TextField(null=True)
    chapter_count = IntegerField(default=0)
    total_word_count = IntegerField(default=0)
    updated_at = DateTimeField(null=True)

    class Meta:
        table_name = "stories"


class Chapter(BaseModel):
    """One chapter; content is a JSON document or markup"""

    id = CharField(primary_key=True, max_length=50, default=_new_id)
    story = ForeignKeyField(Story, backref="chapters", column_name="story_id", on_delete="CASCADE")
    title = CharField(max_length=255)
    chapter_number = IntegerField(constraints=[Check("chapter_number > 0")])
    content = TextField(null=True)
    author_note_before = TextField(null=True)
    author_note_after = TextField(null=True)
    min_tier_name = CharField(max_length=20, null=True)
    likes = IntegerField(default=0)
    is_published = BooleanField(default=False)
    published_at = DateTimeField(null=True)
    word_count = IntegerField(default=0)

    class Meta:
        table_name = "chapters"
        indexes = ((("story", "chapter_number"), True),)


class AuthorSubscription(BaseModel):
    """A reader's subscription to an author at a given tier"""

    id = CharField(primary_key=True, max_length=50, default=_new_id)
    subscriber_id = CharField(max_length=50)
    author_id = CharField(max_length=50)
    tier_name = CharField(max_length=20)
    status = CharField(max_length=20, default=ACTIVE_STATUS)
    created_at = DateTimeField(default=_utcnow)

    class Meta:
        table_name = "author_subscriptions"
        indexes = ((("subscriber_id", "author_id"), False),)


class Comment(BaseModel):
    """Reader comment; replies point at their parent"""

    id = CharField(primary_key=True, max_length=50, default=_new_id)
    chapter = ForeignKeyField(Chapter, backref="comments", column_name="chapter_id", on_delete="CASCADE")
    parent = ForeignKeyField("self", backref="replies", column_name="parent_id", null=True, on_delete="CASCADE")
    author_id = CharField(max_length=50, null=True)
    body = TextField(default="")
    created_at = DateTimeField(default=_utcnow)

    class Meta:
        table_name = "comments"


MODELS = [Story, Chapter, AuthorSubscription, Comment]


class ContentStore:
    """
    Reads and writes platform records through an injected peewee database.

    Lookups used for access gating raise AccessLookupError on any database
    failure; write operations let database errors propagate.
    """

    def __init__(self, database: Database):
        self.database = database

    @classmethod
    def sqlite(cls, path: str = ":memory:") -> ContentStore:
        """Store backed by an SQLite file (or memory), tables created."""
        store = cls(SqliteDatabase(path, pragmas={"foreign_keys": 1}))
        store.create_tables()
        return store

    @contextmanager
    def bound(self) -> Iterator[None]:
        """Bind all models to this store's database, holding the process-wide bind lock."""
        with _bind_lock, self.database.bind_ctx(MODELS):
            yield

    def create_tables(self) -> None:
        with self.bound():
            self.database.create_tables(MODELS, safe=True)

    def close(self) -> None:
        if not self.database.is_closed():
            self.database.close()

    # ──────────────────────────── gating lookups ──────────────────────────── #

    def get_chapter(self, chapter_id: str) -> Chapter | None:
        """
        Fetch a chapter together with its story.

        Raises:
            AccessLookupError: If the database query fails
        """
        try:
            with self.bound():
                return Chapter.select(Chapter, Story).join(Story).where(Chapter.id == chapter_id).first()
        except (DatabaseError, InterfaceError) as e:
            raise AccessLookupError(f"Failed to load chapter {chapter_id}: {e}") from e

    def active_subscription_tier(self, subscriber_id: str, author_id: str) -> str | None:
        """
        Tier name of the subscriber's active subscription to an author.

        Returns:
            Tier name, or None when there is no active subscription

        Raises:
            AccessLookupError: If the database query fails
        """
        try:
            with self.bound():
                subscription = (
                    AuthorSubscription.select(AuthorSubscription.tier_name)
                    .where(
                        (AuthorSubscription.subscriber_id == subscriber_id)
                        & (AuthorSubscription.author_id == author_id)
                        & (AuthorSubscription.status == ACTIVE_STATUS)
                    )
                    .order_by(AuthorSubscription.created_at.desc())
                    .first()
                )
        except (DatabaseError, InterfaceError) as e:
            raise AccessLookupError(f"Failed to look up subscription of {subscriber_id} to {author_id}: {e}") from e
        return subscription.tier_name if subscription is not None else None

    def count_top_level_comments(self, chapter_id: str) -> int:
        """
        Number of comments on a chapter that are not replies.

        Raises:
            AccessLookupError: If the database query fails
        """
        try:
            with self.bound():
                return Comment.select().where((Comment.chapter == chapter_id) & (Comment.parent.is_null())).count()
        except (DatabaseError, InterfaceError) as e:
            raise AccessLookupError(f"Failed to count comments of chapter {chapter_id}: {e}") from e

    def story_author_id(self, chapter: Chapter) -> str:
        """
        Author of the story a chapter belongs to.

        Raises:
            AccessLookupError: If the story cannot be loaded
        """
        try:
            with self.bound():
                return chapter.story.author_id
        except (DatabaseError, InterfaceError, Story.DoesNotExist) as e:
            raise AccessLookupError(f"Failed to load story of chapter {chapter.id}: {e}") from e

    # ──────────────────────────── import writes ──────────────────────────── #

    def get_story(self, story_id: str) -> Story | None:
        with self.bound():
            return Story.get_or_none(Story.id == story_id)

    def next_chapter_number(self, story_id: str) -> int:
        """One past the story's highest chapter number (1 for a new story)."""
        with self.bound():
            highest = Chapter.select(fn.MAX(Chapter.chapter_number)).where(Chapter.story == story_id).scalar()
        return (highest or 0) + 1

    def add_draft_chapters(self, story_id: str, rows: list[dict[str, Any]]) -> list[str]:
        """
        Insert unpublished chapters after the story's last chapter.

        Args:
            story_id: Story to append to
            rows: Dicts with title, content and word_count

        Returns:
            Ids of the created chapters, in order

        Raises:
            StoryNotFoundError: If the story does not exist
        """
        if self.get_story(story_id) is None:
            raise StoryNotFoundError(f"Story {story_id} not found")

        created: list[str] = []
        with self.bound():
            with self.database.atomic():
                number = self.next_chapter_number(story_id)
                for row in rows:
                    chapter = Chapter.create(
                        story=story_id,
                        title=row["title"],
                        content=row["content"],
                        word_count=row.get("word_count", 0),
                        chapter_number=number,
                        is_published=False,
                        published_at=None,
                    )
                    created.append(chapter.id)
                    number += 1
        logger.debug(f"Added {len(created)} draft chapters to story {story_id}")
        return created

    def refresh_story_totals(self, story_id: str) -> tuple[int, int]:
        """
        Recompute a story's published chapter count and word total.

        Returns:
            Tuple of (chapter_count, total_word_count)
        """
        with self.bound():
            published = Chapter.select(fn.COUNT(Chapter.id), fn.COALESCE(fn.SUM(Chapter.word_count), 0)).where(
                (Chapter.story == story_id) & (Chapter.is_published == True)  # noqa: E712
            )
            chapter_count, total_words = published.scalar(as_tuple=True)
            Story.update(chapter_count=chapter_count, total_word_count=total_words, updated_at=_utcnow()).where(Story.id == story_id).execute()
        return int(chapter_count), int(total_words)
