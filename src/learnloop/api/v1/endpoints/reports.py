# src/learnloop/api/v1/endpoints/reports.py
"""Community report submission."""

import logging

from fastapi import APIRouter, status

from learnloop.api.v1.dependencies import (
    CurrentUserDep,
    RateLimiterDep,
    ReportLedgerDep,
    SessionDep,
)
from learnloop.core.errors import RateLimited
from learnloop.core.settings import settings
from learnloop.schemas.report import ReportCreate, ReportCreatedResponse, ReportResponse
from learnloop.services.rate_limit import HOUR_SECONDS

router = APIRouter(prefix="/reports", tags=["reports"])
logger = logging.getLogger(__name__)


@router.post("", response_model=ReportCreatedResponse, status_code=status.HTTP_201_CREATED)
async def submit_report(
    payload: ReportCreate,
    db: SessionDep,
    user: CurrentUserDep,
    limiter: RateLimiterDep,
    ledger: ReportLedgerDep,
) -> ReportCreatedResponse:
    """Report a post or comment.

    Once an item collects enough reports it is hidden from everyone but its
    author and admins.
    """
    if not user.is_system_account and not limiter.hit(
        "report",
        str(user.id),
        limit=settings.reports_per_hour,
        window_seconds=HOUR_SECONDS,
    ):
        logger.info("User %s exceeded the report quota", user.id)
        raise RateLimited("Too many reports. Please try again later.")

    submission = ledger.submit(
        db,
        user,
        post_id=payload.post_id,
        comment_id=payload.comment_id,
        reason=payload.reason,
        details=payload.details,
    )
    return ReportCreatedResponse(
        message="Report submitted successfully",
        report=ReportResponse.model_validate(submission.report),
    )
