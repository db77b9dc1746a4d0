"""Waitlist signups and the social-proof summary shown after joining."""
from __future__ import annotations

import logging
from typing import List, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ErrorKind, SubmissionError
from app.core.sanitizer import email_domain
from app.models.waitlist import WaitlistEntry

logger = logging.getLogger(__name__)

MSG_ALREADY_REGISTERED = "Email already registered"


def _already_registered() -> SubmissionError:
    return SubmissionError(
        ErrorKind.EMAIL_ALREADY_REGISTERED, MSG_ALREADY_REGISTERED, field="email"
    )


class WaitlistService:
    def join(self, db: Session, email: str) -> WaitlistEntry:
        """Insert a validated, lower-cased email.

        The lookup only gives the common case a cheap early exit; two
        concurrent requests can both pass it, and the unique index then
        turns the loser's insert into an IntegrityError.
        """
        existing = db.execute(
            select(WaitlistEntry.id).where(WaitlistEntry.email == email)
        ).first()
        if existing is not None:
            raise _already_registered()

        entry = WaitlistEntry(email=email)
        db.add(entry)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.info(
                "Waitlist insert lost uniqueness race domain=%s",
                email_domain(email),
                extra={"event": "waitlist_duplicate_race"},
            )
            raise _already_registered() from None
        except Exception:
            db.rollback()
            raise
        db.refresh(entry)

        logger.info(
            "Waitlist entry created id=%s domain=%s",
            entry.id,
            email_domain(email),
            extra={"event": "waitlist_joined", "entry_id": str(entry.id)},
        )
        return entry

    def stats(self, db: Session, sample_size: int) -> Tuple[int, List[str]]:
        """Return the member count and initials of the newest signups."""
        count = db.execute(select(func.count(WaitlistEntry.id))).scalar_one()
        emails = db.execute(
            select(WaitlistEntry.email)
            .order_by(WaitlistEntry.created_at.desc(), WaitlistEntry.email)
            .limit(sample_size)
        ).scalars().all()
        initials = [email[0].upper() for email in emails if email]
        return count, initials
