from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel, Field

from app.models.contact import ContactType


class ContactSubmissionCreate(BaseModel):
    """Normalized contact submission, as accepted by the validation layer."""

    full_name: str
    email: str
    subject: str
    project_details: str
    contact_type: ContactType
    attachment_names: List[str] = Field(default_factory=list)

    @property
    def has_attachment(self) -> bool:
        return bool(self.attachment_names)

    @property
    def attachment_name(self) -> Optional[str]:
        return self.attachment_names[0] if self.attachment_names else None


class SubmissionResponse(BaseModel):
    success: bool = True
    message: str


@dataclass
class ContactAttachment:
    """Decoded file part of a contact request."""

    filename: str
    content_type: Optional[str]
    content: bytes

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    @property
    def sha256(self) -> str:
        return hashlib.sha256(self.content).hexdigest()
