"""
Validation rules for contact and waitlist submissions.

Pure functions: no database, no I/O. Each check either returns the
normalized value or raises ``SubmissionError`` with the error kind, the
message shown to the visitor and the form field it belongs to.

Order matters. Text fields are checked first and the first failure wins;
attachments are only looked at once every text field has passed.
"""
from __future__ import annotations

import re
from typing import Mapping, Optional, Sequence

from app.core.config import settings
from app.core.errors import ErrorKind, SubmissionError
from app.models.contact import ContactType
from app.schemas.contact import ContactAttachment, ContactSubmissionCreate

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Consumer providers only; corporate and custom domains are turned away.
ALLOWED_EMAIL_DOMAINS = frozenset(
    {
        "gmail.com",
        "icloud.com",
        "yahoo.com",
        "outlook.com",
        "hotmail.com",
        "aol.com",
        "protonmail.com",
        "zoho.com",
        "mail.com",
        "yandex.com",
    }
)

ALLOWED_CONTENT_TYPES = frozenset(
    {
        "application/pdf",
        "application/vnd.ms-powerpoint",
        "application/vnd.openxmlformats-officedocument.presentationml.presentation",
        "application/vnd.ms-excel",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "image/jpeg",
        "image/jpg",
        "image/png",
    }
)

# Form field name -> ContactSubmissionCreate attribute
CONTACT_REQUIRED_FIELDS = {
    "fullName": "full_name",
    "email": "email",
    "subject": "subject",
    "projectDetails": "project_details",
    "contactType": "contact_type",
}

CONTACT_TYPES = {
    "Individual": ContactType.INDIVIDUAL,
    "Business": ContactType.BUSINESS,
}

MSG_MISSING_FIELDS = "All fields are required"
MSG_EMAIL_REQUIRED = "Email is required"
MSG_INVALID_EMAIL = "Please enter a valid email address"
MSG_DISALLOWED_DOMAIN = (
    "Please use a valid email provider (e.g., Gmail, iCloud, Outlook, Yahoo, etc.)"
)
MSG_INVALID_CONTACT_TYPE = "Invalid contact type"
MSG_FILE_TOO_LARGE = "File size must be less than {limit}"
MSG_UNSUPPORTED_FILE_TYPE = "Invalid file type. Allowed: PDF, PPT, PPTX, XLS, XLSX, JPG, PNG"
MSG_TOO_MANY_FILES = "You cannot upload more than {limit} files."


def _clean(value: Optional[str]) -> str:
    return value.strip() if isinstance(value, str) else ""


def _human_size(num_bytes: int) -> str:
    mb = num_bytes / (1024 * 1024)
    return f"{mb:g}MB"


def validate_email(raw: Optional[str]) -> str:
    """Check syntax and provider; return the address lower-cased."""
    email = _clean(raw)
    if not email:
        raise SubmissionError(ErrorKind.MISSING_FIELDS, MSG_EMAIL_REQUIRED, field="email")

    if not EMAIL_PATTERN.match(email):
        raise SubmissionError(
            ErrorKind.INVALID_EMAIL_SYNTAX, MSG_INVALID_EMAIL, field="email"
        )

    email = email.lower()
    domain = email.rsplit("@", 1)[1]
    if domain not in ALLOWED_EMAIL_DOMAINS:
        raise SubmissionError(
            ErrorKind.DISALLOWED_EMAIL_DOMAIN, MSG_DISALLOWED_DOMAIN, field="email"
        )

    return email


def validate_contact_type(raw: str) -> ContactType:
    # Case-sensitive: "individual" is rejected
    try:
        return CONTACT_TYPES[raw]
    except KeyError:
        raise SubmissionError(
            ErrorKind.INVALID_CONTACT_TYPE, MSG_INVALID_CONTACT_TYPE, field="contactType"
        ) from None


def _content_type(attachment: ContactAttachment) -> str:
    declared = attachment.content_type or ""
    return declared.split(";", 1)[0].strip().lower()


def validate_attachments(
    attachments: Sequence[ContactAttachment],
    max_files: Optional[int] = None,
    max_bytes: Optional[int] = None,
) -> list[ContactAttachment]:
    """Enforce file count, per-file size and the content-type allow-list."""
    max_files = settings.CONTACT_MAX_ATTACHMENTS if max_files is None else max_files
    max_bytes = settings.CONTACT_MAX_ATTACHMENT_BYTES if max_bytes is None else max_bytes

    if len(attachments) > max_files:
        raise SubmissionError(
            ErrorKind.TOO_MANY_FILES,
            MSG_TOO_MANY_FILES.format(limit=max_files),
            field="files",
        )

    for attachment in attachments:
        if attachment.size_bytes > max_bytes:
            raise SubmissionError(
                ErrorKind.FILE_TOO_LARGE,
                MSG_FILE_TOO_LARGE.format(limit=_human_size(max_bytes)),
                field="files",
            )
        if _content_type(attachment) not in ALLOWED_CONTENT_TYPES:
            raise SubmissionError(
                ErrorKind.UNSUPPORTED_FILE_TYPE, MSG_UNSUPPORTED_FILE_TYPE, field="files"
            )

    return list(attachments)


def validate_contact_submission(
    fields: Mapping[str, Optional[str]],
    attachments: Sequence[ContactAttachment] = (),
) -> ContactSubmissionCreate:
    """Validate a decoded contact form and return the record to persist."""
    cleaned = {name: _clean(fields.get(name)) for name in CONTACT_REQUIRED_FIELDS}
    if not all(cleaned.values()):
        raise SubmissionError(ErrorKind.MISSING_FIELDS, MSG_MISSING_FIELDS)

    email = validate_email(cleaned["email"])
    contact_type = validate_contact_type(cleaned["contactType"])

    accepted = validate_attachments(attachments) if attachments else []

    return ContactSubmissionCreate(
        full_name=cleaned["fullName"],
        email=email,
        subject=cleaned["subject"],
        project_details=cleaned["projectDetails"],
        contact_type=contact_type,
        attachment_names=[a.filename for a in accepted],
    )
