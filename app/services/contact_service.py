from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from fastapi import UploadFile
from sqlalchemy.orm import Session

from app.models.contact import ContactSubmission
from app.schemas.contact import ContactAttachment, ContactSubmissionCreate

logger = logging.getLogger(__name__)


class ContactService:
    """Decodes contact uploads and writes accepted submissions."""

    async def read_attachments(
        self, uploads: Iterable[Optional[UploadFile]]
    ) -> List[ContactAttachment]:
        attachments: List[ContactAttachment] = []
        for upload in uploads:
            if upload is None:
                continue
            content = await upload.read()
            # An untouched <input type="file"> posts an empty, unnamed part
            if not upload.filename and not content:
                continue
            attachments.append(
                ContactAttachment(
                    filename=upload.filename or "attachment",
                    content_type=upload.content_type,
                    content=content,
                )
            )
        return attachments

    def create_submission(
        self, db: Session, record: ContactSubmissionCreate
    ) -> ContactSubmission:
        submission = ContactSubmission(
            full_name=record.full_name,
            email=record.email,
            subject=record.subject,
            project_details=record.project_details,
            contact_type=record.contact_type,
            has_attachment=record.has_attachment,
            attachment_name=record.attachment_name,
        )
        db.add(submission)
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(submission)

        logger.info(
            "Contact submission stored id=%s has_attachment=%s",
            submission.id,
            submission.has_attachment,
            extra={"event": "contact_submission_stored", "submission_id": str(submission.id)},
        )
        return submission
