from unittest.mock import MagicMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from app.core.errors import ErrorKind, SubmissionError
from app.models.waitlist import WaitlistEntry
from app.services.waitlist_service import WaitlistService


class _StaleReadSession:
    """Session whose pre-check never sees existing rows, as in a race."""

    def __init__(self, inner):
        self._inner = inner

    def execute(self, *args, **kwargs):
        result = MagicMock()
        result.first.return_value = None
        return result

    def __getattr__(self, name):
        return getattr(self._inner, name)


def _count(db):
    return db.execute(select(func.count(WaitlistEntry.id))).scalar_one()


def test_join_creates_entry(db_session):
    entry = WaitlistService().join(db_session, "person@gmail.com")

    assert entry.id is not None
    assert entry.created_at is not None
    assert _count(db_session) == 1


def test_second_join_is_conflict(db_session):
    service = WaitlistService()
    service.join(db_session, "person@gmail.com")

    with pytest.raises(SubmissionError) as exc_info:
        service.join(db_session, "person@gmail.com")

    assert exc_info.value.code == ErrorKind.EMAIL_ALREADY_REGISTERED
    assert exc_info.value.message == "Email already registered"
    assert _count(db_session) == 1


def test_unique_index_catches_race_past_precheck(db_session):
    service = WaitlistService()
    service.join(db_session, "person@gmail.com")

    with pytest.raises(SubmissionError) as exc_info:
        service.join(_StaleReadSession(db_session), "person@gmail.com")

    assert exc_info.value.code == ErrorKind.EMAIL_ALREADY_REGISTERED
    assert _count(db_session) == 1


def test_store_rejects_duplicate_rows_directly(db_session):
    db_session.add(WaitlistEntry(email="dup@gmail.com"))
    db_session.commit()
    db_session.add(WaitlistEntry(email="dup@gmail.com"))

    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_stats_count_and_initials(db_session):
    service = WaitlistService()
    for email in ["alice@gmail.com", "bob@yahoo.com", "carol@icloud.com"]:
        service.join(db_session, email)

    count, initials = service.stats(db_session, sample_size=5)

    assert count == 3
    assert initials == ["C", "B", "A"]


def test_stats_orders_newest_first_not_alphabetically(db_session):
    service = WaitlistService()
    service.join(db_session, "amy@gmail.com")
    service.join(db_session, "zed@gmail.com")

    _, initials = service.stats(db_session, sample_size=5)

    assert initials == ["Z", "A"]


def test_created_at_keeps_sub_second_precision(db_session):
    service = WaitlistService()
    first = service.join(db_session, "amy@gmail.com")
    second = service.join(db_session, "zed@gmail.com")
    db_session.expire_all()

    assert first.created_at < second.created_at


def test_stats_sample_is_capped(db_session):
    service = WaitlistService()
    for i in range(7):
        service.join(db_session, f"user{i}@gmail.com")

    count, initials = service.stats(db_session, sample_size=5)

    assert count == 7
    assert initials == ["U"] * 5


def test_stats_on_empty_waitlist(db_session):
    assert WaitlistService().stats(db_session, sample_size=5) == (0, [])
