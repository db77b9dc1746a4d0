import enum

from sqlalchemy import Boolean, Column, Enum, Text

from app.db.base import Base, CreatedAtMixin, UUIDMixin


class ContactType(str, enum.Enum):
    """Who is reaching out. Stored upper-cased."""

    INDIVIDUAL = "INDIVIDUAL"
    BUSINESS = "BUSINESS"


class ContactSubmission(Base, UUIDMixin, CreatedAtMixin):
    """
    One accepted contact-form POST. Written once, never updated.
    """

    __tablename__ = "contact_submissions"

    full_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, index=True)
    subject = Column(Text, nullable=False)
    project_details = Column(Text, nullable=False)
    contact_type = Column(
        Enum(ContactType, name="contact_type", native_enum=False, length=20),
        nullable=False,
    )
    has_attachment = Column(Boolean, nullable=False, default=False)
    attachment_name = Column(Text, nullable=True)  # first accepted file

    def __repr__(self) -> str:
        return f"<ContactSubmission(id={self.id}, type={self.contact_type}, attachment={self.has_attachment})>"
