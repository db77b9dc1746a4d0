"""
Waitlist endpoints.

POST adds an email to the pre-launch waitlist; GET returns the head count
and a few initials for the "you're not alone" badge. No email is sent on
signup.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import internal_error
from app.core.rate_limiter import submission_rate_limit
from app.db.session import get_db
from app.schemas.contact import SubmissionResponse
from app.schemas.error import ERROR_RESPONSES
from app.schemas.waitlist import WaitlistJoinRequest, WaitlistStatsResponse
from app.services.validation import validate_email
from app.services.waitlist_service import WaitlistService

logger = logging.getLogger(__name__)

router = APIRouter()

WAITLIST_SUCCESS_MESSAGE = "You're on the waitlist! We'll let you know when we launch."


def get_waitlist_service() -> WaitlistService:
    return WaitlistService()


@router.post(
    "/waitlist",
    response_model=SubmissionResponse,
    responses=ERROR_RESPONSES,
    summary="Join the waitlist",
    dependencies=[Depends(submission_rate_limit("waitlist"))],
)
async def join_waitlist(
    payload: WaitlistJoinRequest,
    request: Request,
    db: Session = Depends(get_db),
    service: WaitlistService = Depends(get_waitlist_service),
) -> SubmissionResponse:
    email = validate_email(payload.email)

    try:
        service.join(db, email)
    except SQLAlchemyError:
        logger.exception(
            "Waitlist signup could not be stored request_id=%s",
            getattr(request.state, "request_id", None),
            extra={"event": "waitlist_store_failed"},
        )
        raise internal_error()

    return SubmissionResponse(success=True, message=WAITLIST_SUCCESS_MESSAGE)


@router.get(
    "/waitlist",
    response_model=WaitlistStatsResponse,
    summary="Waitlist size and recent initials",
)
async def waitlist_stats(
    db: Session = Depends(get_db),
    service: WaitlistService = Depends(get_waitlist_service),
) -> WaitlistStatsResponse:
    try:
        count, initials = service.stats(db, settings.WAITLIST_INITIALS_SAMPLE)
    except SQLAlchemyError:
        logger.exception("Waitlist stats query failed", extra={"event": "waitlist_stats_failed"})
        raise internal_error()

    return WaitlistStatsResponse(success=True, count=count, initials=initials)
