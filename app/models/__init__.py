"""
All ORM models in one place.

Usage:
    from app.models import ContactSubmission, WaitlistEntry
"""

from app.db.base import Base

from .contact import ContactSubmission, ContactType
from .waitlist import WaitlistEntry

__all__ = [
    "Base",
    "ContactSubmission",
    "ContactType",
    "WaitlistEntry",
]
