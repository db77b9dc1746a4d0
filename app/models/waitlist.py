from sqlalchemy import Column, Text

from app.db.base import Base, CreatedAtMixin, UUIDMixin


class WaitlistEntry(Base, UUIDMixin, CreatedAtMixin):
    """
    Pre-launch signup. The unique index on email is what keeps two
    concurrent signups for the same address down to one row.
    """

    __tablename__ = "waitlist_entries"

    email = Column(Text, nullable=False, unique=True, index=True)

    def __repr__(self) -> str:
        return f"<WaitlistEntry(id={self.id})>"
