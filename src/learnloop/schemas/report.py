"""Report submission and admin review schemas."""

import uuid
from datetime import datetime
from typing import Any

from pydantic import Field

from learnloop.models import ReportReason

from .common import APIModel, Pagination
from .user import UserSummary


class ReportCreate(APIModel):
    """Report submission body.

    Target exclusivity and the reason are validated by the report ledger.
    """

    post_id: int | None = None
    comment_id: int | None = None
    reason: Any = None
    details: str | None = Field(None, max_length=500)


class ReportResponse(APIModel):
    id: int
    post_id: int | None
    comment_id: int | None
    reason: ReportReason
    details: str | None = None
    created_at: datetime


class ReportCreatedResponse(APIModel):
    message: str
    report: ReportResponse


class ReportedItem(APIModel):
    """Projection of the reported post or comment."""

    id: int
    kind: str
    title: str | None = None
    content: str
    post_id: int | None = None
    is_hidden: bool
    deleted_at: datetime | None = None
    created_at: datetime
    author: UserSummary


class ReportListItem(ReportResponse):
    reporter: UserSummary
    target: ReportedItem
    total_reports: int


class ReportListResponse(APIModel):
    reports: list[ReportListItem]
    pagination: Pagination


class AdminUserView(APIModel):
    """User projection for admin-only views; includes the email address."""

    id: uuid.UUID
    username: str
    email: str
    learning_score: int
    created_at: datetime


class ReportedItemDetail(ReportedItem):
    author: AdminUserView  # type: ignore[assignment]


class ReportWithReporter(ReportResponse):
    reporter: AdminUserView


class ReportDetailResponse(APIModel):
    report: ReportWithReporter
    target: ReportedItemDetail
    all_reports: list[ReportWithReporter]
    total_reports: int


class ModerationActionResponse(APIModel):
    """Result of an admin unhide or dismiss."""

    message: str
    kind: str
    target_id: int
    is_hidden: bool
    dismissed_reports: int = 0
