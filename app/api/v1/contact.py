"""
Contact form endpoint.

Public endpoint receiving project enquiries with optional attachments.
Validate, persist, then notify: the stored row is the proof of receipt, so
a failed notification email does not turn a stored submission into an error.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import internal_error
from app.core.rate_limiter import submission_rate_limit
from app.core.sanitizer import email_domain
from app.db.session import get_db
from app.schemas.contact import SubmissionResponse
from app.schemas.error import ERROR_RESPONSES
from app.services.contact_service import ContactService
from app.services.notifier import ContactNotifier
from app.services.validation import validate_contact_submission

logger = logging.getLogger(__name__)

router = APIRouter()

CONTACT_SUCCESS_MESSAGE = "Message sent successfully! We will get back to you soon."


def get_contact_service() -> ContactService:
    return ContactService()


def get_contact_notifier() -> ContactNotifier:
    return ContactNotifier()


@router.post(
    "/contact",
    response_model=SubmissionResponse,
    responses=ERROR_RESPONSES,
    summary="Submit contact form",
    description="Stores a contact request and emails it, with up to 3 attachments, to the team.",
    dependencies=[Depends(submission_rate_limit("contact"))],
)
async def submit_contact(
    request: Request,
    full_name: Optional[str] = Form(None, alias="fullName"),
    email: Optional[str] = Form(None),
    subject: Optional[str] = Form(None),
    project_details: Optional[str] = Form(None, alias="projectDetails"),
    contact_type: Optional[str] = Form(None, alias="contactType"),
    attachment: Optional[List[UploadFile]] = File(None),
    attachments: Optional[List[UploadFile]] = File(None),
    db: Session = Depends(get_db),
    service: ContactService = Depends(get_contact_service),
    notifier: ContactNotifier = Depends(get_contact_notifier),
) -> SubmissionResponse:
    request_id = getattr(request.state, "request_id", None)

    files = await service.read_attachments([*(attachment or []), *(attachments or [])])
    record = validate_contact_submission(
        {
            "fullName": full_name,
            "email": email,
            "subject": subject,
            "projectDetails": project_details,
            "contactType": contact_type,
        },
        files,
    )

    try:
        submission = service.create_submission(db, record)
    except SQLAlchemyError:
        logger.exception(
            "Contact submission could not be stored request_id=%s",
            request_id,
            extra={"event": "contact_store_failed", "request_id": request_id},
        )
        raise internal_error()

    try:
        await notifier.notify(submission, files)
        notified = True
    except Exception as exc:
        notified = False
        logger.warning(
            "Contact notification failed id=%s error=%s",
            submission.id,
            exc,
            extra={
                "event": "contact_notification_failed",
                "request_id": request_id,
                "submission_id": str(submission.id),
            },
        )

    logger.info(
        "AUDIT: Contact request accepted id=%s domain=%s attachments=%s notified=%s",
        submission.id,
        email_domain(record.email),
        len(files),
        notified,
        extra={
            "event": "contact_request_accepted",
            "request_id": request_id,
            "submission_id": str(submission.id),
            "has_attachment": record.has_attachment,
            "notified": notified,
        },
    )

    return SubmissionResponse(success=True, message=CONTACT_SUCCESS_MESSAGE)
