# src/learnloop/services/reports.py
"""Report ledger and auto-hide engine.

Reports against a post or comment are recorded here. Once the number of
reports for one item reaches the auto-hide threshold the item's ``is_hidden``
flag is raised inside the same transaction as the report insert. Admins
review reports and may unhide an item or dismiss every report against it.
"""

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from learnloop.core.errors import Conflict, Forbidden, InvalidRequest, NotFound
from learnloop.core.settings import settings
from learnloop.models import Comment, Post, Report, ReportReason, User

logger = logging.getLogger(__name__)

ContentItem = Post | Comment


@dataclass(frozen=True)
class ReportSubmission:
    """Outcome of a successful report submission."""

    report: Report
    report_count: int
    hidden_now: bool


@dataclass(frozen=True)
class ReportListEntry:
    report: Report
    total_reports: int


@dataclass(frozen=True)
class ReportPage:
    entries: list[ReportListEntry]
    limit: int
    offset: int

    @property
    def has_more(self) -> bool:
        return len(self.entries) == self.limit


@dataclass(frozen=True)
class ReportDetail:
    report: Report
    all_reports: list[Report]
    total_reports: int


def _target_columns(post_id: int | None) -> tuple[type[ContentItem], Any]:
    """Return the content model and the report column pointing at it."""
    if post_id is not None:
        return Post, Report.post_id
    return Comment, Report.comment_id


def parse_reason(reason: Any) -> ReportReason:
    """Return *reason* as a :class:`ReportReason`.

    Raises:
        InvalidRequest: If the value is not one of the enumerated reasons.
    """
    try:
        return ReportReason(reason)
    except ValueError as err:
        allowed = ", ".join(member.value for member in ReportReason)
        raise InvalidRequest(f"Invalid reason. Must be one of: {allowed}") from err


class ReportLedger:
    """Service owning report rows and the hidden flag they drive."""

    def __init__(self, threshold: int | None = None) -> None:
        self.threshold = threshold if threshold is not None else settings.report_auto_hide_threshold

    # --- Submission -----------------------------------------------------------------
    def submit(
        self,
        db: Session,
        reporter: User,
        *,
        post_id: int | None = None,
        comment_id: int | None = None,
        reason: Any,
        details: str | None = None,
    ) -> ReportSubmission:
        """Record a report and hide the target once the threshold is reached.

        Validation runs before anything is written. The insert, the recount and
        the conditional hide then commit together or not at all.

        Raises:
            InvalidRequest: Neither or both targets given, or an unknown reason.
            NotFound: The target does not exist or was deleted.
            Forbidden: The reporter wrote the target.
            Conflict: The reporter already reported the target.
        """
        if (post_id is None) == (comment_id is None):
            raise InvalidRequest("Provide exactly one of postId or commentId")
        parsed_reason = parse_reason(reason)

        model, report_column = _target_columns(post_id)
        target_id = post_id if post_id is not None else comment_id
        kind = "post" if model is Post else "comment"

        try:
            # Row lock on the target serializes concurrent reporters of the same item.
            target = db.execute(
                select(model)
                .where(model.id == target_id, model.deleted_at.is_(None))
                .with_for_update()
            ).scalar_one_or_none()
            if target is None:
                raise NotFound(f"{kind.capitalize()} not found")

            if target.author_id == reporter.id:
                raise Forbidden("You cannot report your own content")

            duplicate = db.scalar(
                select(Report.id).where(
                    Report.reporter_id == reporter.id,
                    report_column == target_id,
                )
            )
            if duplicate is not None:
                raise Conflict(f"You have already reported this {kind}")

            report = Report(
                reporter_id=reporter.id,
                post_id=post_id,
                comment_id=comment_id,
                reason=parsed_reason,
                details=(details or "").strip() or None,
            )
            db.add(report)
            try:
                db.flush()
            except IntegrityError as err:
                raise Conflict(f"You have already reported this {kind}") from err

            report_count = self.count_reports(db, post_id=post_id, comment_id=comment_id)
            hidden_now = False
            if report_count >= self.threshold and not target.is_hidden:
                result = db.execute(
                    update(model)
                    .where(model.id == target_id, model.is_hidden.is_(False))
                    .values(is_hidden=True)
                )
                hidden_now = result.rowcount == 1

            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(report)
        logger.info(
            "Report %s filed against %s %s (%s), %d total",
            report.id, kind, target_id, parsed_reason.value, report_count,
        )
        if hidden_now:
            logger.warning(
                "Auto-hid %s %s after reaching %d reports", kind, target_id, report_count
            )
        return ReportSubmission(report=report, report_count=report_count, hidden_now=hidden_now)

    @staticmethod
    def count_reports(
        db: Session,
        *,
        post_id: int | None = None,
        comment_id: int | None = None,
    ) -> int:
        """Return the number of report rows referencing one target."""
        _, column = _target_columns(post_id)
        target_id = post_id if post_id is not None else comment_id
        return int(
            db.scalar(select(func.count()).select_from(Report).where(column == target_id)) or 0
        )

    # --- Admin review ---------------------------------------------------------------
    def list_reports(self, db: Session, *, limit: int | None = None, offset: int = 0) -> ReportPage:
        """Return reports newest first with the live report count of each target."""
        if limit is None or limit < 1:
            limit = settings.admin_reports_page_size
        limit = min(limit, settings.admin_reports_max_page_size)
        offset = max(offset, 0)

        reports = list(
            db.scalars(
                select(Report)
                .options(
                    selectinload(Report.reporter),
                    selectinload(Report.post).selectinload(Post.author),
                    selectinload(Report.comment).selectinload(Comment.author),
                )
                .order_by(Report.created_at.desc(), Report.id.desc())
                .offset(offset)
                .limit(limit)
            )
        )

        post_counts = self._grouped_counts(
            db, Report.post_id, {r.post_id for r in reports if r.post_id is not None}
        )
        comment_counts = self._grouped_counts(
            db, Report.comment_id, {r.comment_id for r in reports if r.comment_id is not None}
        )
        entries = [
            ReportListEntry(
                report=report,
                total_reports=(
                    post_counts.get(report.post_id, 0)
                    if report.post_id is not None
                    else comment_counts.get(report.comment_id, 0)
                ),
            )
            for report in reports
        ]
        return ReportPage(entries=entries, limit=limit, offset=offset)

    @staticmethod
    def _grouped_counts(db: Session, column: Any, ids: set[int]) -> dict[int, int]:
        if not ids:
            return {}
        rows = db.execute(
            select(column, func.count()).where(column.in_(ids)).group_by(column)
        ).all()
        return {int(target_id): int(count) for target_id, count in rows}

    def get_report_detail(self, db: Session, report_id: int) -> ReportDetail:
        """Return one report plus every report filed against the same target."""
        report = self._get_report(db, report_id)
        _, column = _target_columns(report.post_id)
        target_id = report.post_id if report.post_id is not None else report.comment_id
        all_reports = list(
            db.scalars(
                select(Report)
                .options(selectinload(Report.reporter))
                .where(column == target_id)
                .order_by(Report.created_at.desc(), Report.id.desc())
            )
        )
        return ReportDetail(report=report, all_reports=all_reports, total_reports=len(all_reports))

    def unhide(self, db: Session, report_id: int) -> ContentItem:
        """Clear the hidden flag on the report's target; report rows are kept."""
        report = self._get_report(db, report_id)
        target = self._get_target(report)
        try:
            target.is_hidden = False
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(target)
        logger.info("Admin unhid %s %s via report %s", report.target_kind, target.id, report_id)
        return target

    def dismiss(self, db: Session, report_id: int) -> tuple[ContentItem, int]:
        """Delete every report against the report's target and unhide it.

        Returns the target and the number of report rows removed.
        """
        report = self._get_report(db, report_id)
        target = self._get_target(report)
        kind = report.target_kind
        _, column = _target_columns(report.post_id)
        try:
            result = db.execute(delete(Report).where(column == target.id))
            target.is_hidden = False
            db.commit()
        except Exception:
            db.rollback()
            raise
        deleted = int(result.rowcount or 0)
        logger.info("Admin dismissed %d reports against %s %s", deleted, kind, target.id)
        return target, deleted

    # --- Helpers --------------------------------------------------------------------
    @staticmethod
    def _get_report(db: Session, report_id: int) -> Report:
        report = db.scalar(
            select(Report)
            .options(
                selectinload(Report.reporter),
                selectinload(Report.post).selectinload(Post.author),
                selectinload(Report.comment).selectinload(Comment.author),
            )
            .where(Report.id == report_id)
        )
        if report is None:
            raise NotFound("Report not found")
        return report

    @staticmethod
    def _get_target(report: Report) -> ContentItem:
        target: ContentItem | None = report.post if report.post_id is not None else report.comment
        if target is None:
            raise NotFound("Reported content not found")
        return target

