# src/learnloop/services/visibility.py
"""Visibility policy for moderated content.

A post or comment is listed to a viewer according to three tiers:

1. Soft-deleted items are never listed, not even to their author or an admin.
2. Items that are not hidden are listed to everyone.
3. Hidden items are listed only to admins and to the item's author.

:func:`is_visible` is the pure form of the rule. The ``*_clause`` helpers
produce the same rule as a SQL predicate so listings filter in the database
rather than after the fact. All of them are built by :func:`_build_clause`.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Protocol

from sqlalchemy import ColumnElement, and_, false, or_, true

from learnloop.models import User


class ModeratedItem(Protocol):
    """Attributes the policy reads from a post or comment."""

    is_hidden: bool
    deleted_at: Any
    author_id: uuid.UUID


@dataclass(frozen=True)
class Viewer:
    """Identity a request is evaluated under; never persisted."""

    user_id: uuid.UUID | None = None
    is_admin: bool = False

    @classmethod
    def anonymous(cls) -> Viewer:
        return cls()

    @classmethod
    def for_user(cls, user: User | None) -> Viewer:
        if user is None:
            return cls.anonymous()
        return cls(user_id=user.id, is_admin=bool(user.is_admin))

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None


def is_visible(item: ModeratedItem, viewer: Viewer) -> bool:
    """Return True if *viewer* may see *item* in a listing."""
    if item.deleted_at is not None:
        return False
    if not item.is_hidden:
        return True
    return viewer.is_admin or (viewer.user_id is not None and viewer.user_id == item.author_id)


def _build_clause(model: Any, *, sees_hidden: bool, author_match: Any = None) -> ColumnElement[bool]:
    # deleted_at IS NULL AND (is_hidden = false OR <sees_hidden> OR <author_match>)
    hidden_ok: list[Any] = [model.is_hidden.is_(False)]
    hidden_ok.append(true() if sees_hidden else false())
    if author_match is not None:
        hidden_ok.append(author_match)
    return and_(model.deleted_at.is_(None), or_(*hidden_ok))


def visibility_clause(model: Any, viewer: Viewer) -> ColumnElement[bool]:
    """Full per-row predicate: hidden rows pass for admins and for their own author."""
    author_match = None
    if viewer.user_id is not None:
        author_match = model.author_id == viewer.user_id
    return _build_clause(model, sees_hidden=viewer.is_admin, author_match=author_match)


def feed_visibility_clause(model: Any, viewer: Viewer) -> ColumnElement[bool]:
    """Predicate for the home and topic feeds, where only admins see hidden rows."""
    return _build_clause(model, sees_hidden=viewer.is_admin)


def author_feed_visibility_clause(
    model: Any,
    viewer: Viewer,
    author_id: uuid.UUID,
) -> ColumnElement[bool]:
    """Predicate for one author's feed.

    The author is fixed for the whole page, so the ownership check is decided
    once here instead of per row.
    """
    own_profile = viewer.user_id is not None and viewer.user_id == author_id
    return _build_clause(model, sees_hidden=viewer.is_admin or own_profile)
