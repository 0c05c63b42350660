# src/learnloop/api/v1/endpoints/admin.py
"""Admin review of community reports."""

from fastapi import APIRouter, Query

from learnloop.api.v1.dependencies import AdminUserDep, ReportLedgerDep, SessionDep
from learnloop.models import Post, Report
from learnloop.schemas.common import Pagination
from learnloop.schemas.report import (
    AdminUserView,
    ModerationActionResponse,
    ReportDetailResponse,
    ReportedItem,
    ReportedItemDetail,
    ReportListItem,
    ReportListResponse,
    ReportWithReporter,
)
from learnloop.schemas.user import UserSummary
from learnloop.services.reports import ContentItem

router = APIRouter(prefix="/admin/reports", tags=["admin"])


def _target_fields(target: ContentItem) -> dict:
    is_post = isinstance(target, Post)
    return {
        "id": target.id,
        "kind": "post" if is_post else "comment",
        "title": target.title if is_post else None,
        "content": target.content,
        "post_id": None if is_post else target.post_id,
        "is_hidden": target.is_hidden,
        "deleted_at": target.deleted_at,
        "created_at": target.created_at,
    }


def _target_of(report: Report) -> ContentItem:
    return report.post if report.post is not None else report.comment  # type: ignore[return-value]


def _with_reporter(report: Report) -> ReportWithReporter:
    return ReportWithReporter(
        id=report.id,
        post_id=report.post_id,
        comment_id=report.comment_id,
        reason=report.reason,
        details=report.details,
        created_at=report.created_at,
        reporter=AdminUserView.model_validate(report.reporter),
    )


@router.get("", response_model=ReportListResponse)
async def list_reports(
    db: SessionDep,
    admin: AdminUserDep,
    ledger: ReportLedgerDep,
    limit: int | None = Query(None, description="Page size (default 50, max 100)"),
    offset: int = Query(0, description="Number of reports to skip"),
) -> ReportListResponse:
    """List reports newest first with the live report count of each target."""
    page = ledger.list_reports(db, limit=limit, offset=offset)
    items = []
    for entry in page.entries:
        report = entry.report
        target = _target_of(report)
        items.append(
            ReportListItem(
                id=report.id,
                post_id=report.post_id,
                comment_id=report.comment_id,
                reason=report.reason,
                details=report.details,
                created_at=report.created_at,
                reporter=UserSummary.model_validate(report.reporter),
                target=ReportedItem(
                    **_target_fields(target),
                    author=UserSummary.model_validate(target.author),
                ),
                total_reports=entry.total_reports,
            )
        )
    return ReportListResponse(
        reports=items,
        pagination=Pagination(limit=page.limit, offset=page.offset, has_more=page.has_more),
    )


@router.get("/{report_id}", response_model=ReportDetailResponse)
async def get_report(
    report_id: int,
    db: SessionDep,
    admin: AdminUserDep,
    ledger: ReportLedgerDep,
) -> ReportDetailResponse:
    """Return a report, its target and every report filed against that target."""
    detail = ledger.get_report_detail(db, report_id)
    target = _target_of(detail.report)
    return ReportDetailResponse(
        report=_with_reporter(detail.report),
        target=ReportedItemDetail(
            **_target_fields(target),
            author=AdminUserView.model_validate(target.author),
        ),
        all_reports=[_with_reporter(report) for report in detail.all_reports],
        total_reports=detail.total_reports,
    )


@router.post("/{report_id}/unhide", response_model=ModerationActionResponse)
async def unhide_reported_content(
    report_id: int,
    db: SessionDep,
    admin: AdminUserDep,
    ledger: ReportLedgerDep,
) -> ModerationActionResponse:
    """Make the reported item visible again; reports stay on record."""
    target = ledger.unhide(db, report_id)
    return ModerationActionResponse(
        message="Content unhidden",
        kind="post" if isinstance(target, Post) else "comment",
        target_id=target.id,
        is_hidden=target.is_hidden,
    )


@router.post("/{report_id}/dismiss", response_model=ModerationActionResponse)
async def dismiss_reports(
    report_id: int,
    db: SessionDep,
    admin: AdminUserDep,
    ledger: ReportLedgerDep,
) -> ModerationActionResponse:
    """Delete every report against the reported item and unhide it."""
    target, deleted = ledger.dismiss(db, report_id)
    return ModerationActionResponse(
        message="Reports dismissed",
        kind="post" if isinstance(target, Post) else "comment",
        target_id=target.id,
        is_hidden=target.is_hidden,
        dismissed_reports=deleted,
    )
