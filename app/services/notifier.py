from __future__ import annotations

import logging
from email.message import EmailMessage
from typing import Optional, Sequence

from app.core.config import settings
from app.core.email import send_email
from app.models.contact import ContactSubmission
from app.schemas.contact import ContactAttachment

logger = logging.getLogger(__name__)

_CONTACT_TYPE_LABELS = {"INDIVIDUAL": "Individual", "BUSINESS": "Business"}


class ContactNotifier:
    """Forwards an accepted contact submission to the admin mailbox."""

    def __init__(self, recipient: Optional[str] = None, sender: Optional[str] = None):
        self.recipient = recipient or settings.CONTACT_NOTIFY_TO
        self.sender = sender or settings.SMTP_USER or settings.EMAIL_FROM

    def build_message(
        self,
        submission: ContactSubmission,
        attachments: Sequence[ContactAttachment] = (),
    ) -> EmailMessage:
        contact_type = getattr(submission.contact_type, "value", submission.contact_type)

        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = self.recipient
        msg["Reply-To"] = submission.email
        # Header values cannot carry line breaks; the body keeps the raw subject
        subject_line = " ".join(submission.subject.split())
        msg["Subject"] = (
            f"[{settings.PROJECT_NAME}] New contact request - {subject_line}"
        )

        body_lines = [
            "New contact form submission",
            f"ID: {submission.id}",
            f"Name: {submission.full_name}",
            f"Email: {submission.email}",
            f"Contact type: {_CONTACT_TYPE_LABELS.get(contact_type, contact_type)}",
            f"Subject: {submission.subject}",
            "",
            "Project details:",
            submission.project_details,
            "",
        ]

        if attachments:
            body_lines.append(f"Attachments ({len(attachments)}):")
            for attachment in attachments:
                body_lines.append(
                    f"- {attachment.filename} "
                    f"({attachment.size_bytes} bytes, sha256={attachment.sha256})"
                )
        else:
            body_lines.append("Attachments: none")

        msg.set_content("\n".join(body_lines))

        for attachment in attachments:
            maintype, subtype = ("application", "octet-stream")
            if attachment.content_type and "/" in attachment.content_type:
                maintype, subtype = attachment.content_type.split(";", 1)[0].strip().split("/", 1)
            msg.add_attachment(
                attachment.content,
                maintype=maintype,
                subtype=subtype,
                filename=attachment.filename,
            )

        return msg

    async def send(self, message: EmailMessage) -> None:
        await send_email(message)

    async def notify(
        self,
        submission: ContactSubmission,
        attachments: Sequence[ContactAttachment] = (),
    ) -> None:
        await self.send(self.build_message(submission, attachments))
        logger.info(
            "Contact notification sent id=%s attachments=%s",
            submission.id,
            len(attachments),
            extra={"event": "contact_notification_sent", "submission_id": str(submission.id)},
        )
