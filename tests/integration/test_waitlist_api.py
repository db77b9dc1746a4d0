from sqlalchemy import select

from app.models.waitlist import WaitlistEntry
from app.services.notifier import ContactNotifier


def _emails(db_session):
    return db_session.execute(select(WaitlistEntry.email)).scalars().all()


def test_join_then_duplicate(client, db_session):
    first = client.post("/api/waitlist", json={"email": "person@gmail.com"})

    assert first.status_code == 200
    assert first.json()["success"] is True
    assert first.json()["message"]

    second = client.post("/api/waitlist", json={"email": "person@gmail.com"})

    assert second.status_code == 400
    assert second.json() == {
        "success": False,
        "code": "EMAIL_ALREADY_REGISTERED",
        "message": "Email already registered",
        "field": "email",
    }
    assert _emails(db_session) == ["person@gmail.com"]


def test_duplicate_detection_ignores_case(client, db_session):
    client.post("/api/waitlist", json={"email": "Person@Gmail.com"})
    response = client.post("/api/waitlist", json={"email": "person@GMAIL.com "})

    assert response.status_code == 400
    assert response.json()["code"] == "EMAIL_ALREADY_REGISTERED"
    assert _emails(db_session) == ["person@gmail.com"]


def test_join_invalid_email(client, db_session):
    response = client.post("/api/waitlist", json={"email": "person@gmail"})

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_EMAIL_SYNTAX"
    assert _emails(db_session) == []


def test_join_corporate_domain_rejected(client, db_session):
    response = client.post("/api/waitlist", json={"email": "user@company.io"})

    assert response.status_code == 400
    assert response.json()["code"] == "DISALLOWED_EMAIL_DOMAIN"
    assert _emails(db_session) == []


def test_join_missing_email(client, db_session):
    response = client.post("/api/waitlist", json={})

    assert response.status_code == 400
    assert response.json()["code"] == "MISSING_FIELDS"
    assert response.json()["message"] == "Email is required"


def test_join_malformed_body(client, db_session):
    response = client.post(
        "/api/waitlist",
        content=b"not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_REQUEST"


def test_join_sends_no_email(client, monkeypatch):
    calls = []

    async def _record(self, message):
        calls.append(message)

    monkeypatch.setattr(ContactNotifier, "send", _record)

    response = client.post("/api/waitlist", json={"email": "quiet@yahoo.com"})

    assert response.status_code == 200
    assert calls == []


def test_stats(client):
    for email in ["alice@gmail.com", "bob@yahoo.com"]:
        client.post("/api/waitlist", json={"email": email})

    response = client.get("/api/waitlist")

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["count"] == 2
    assert payload["initials"] == ["B", "A"]


def test_stats_newest_first_within_same_second(client):
    # Alphabetical order would give A before Z
    for email in ["amy@gmail.com", "zed@gmail.com"]:
        client.post("/api/waitlist", json={"email": email})

    response = client.get("/api/waitlist")

    assert response.json()["initials"] == ["Z", "A"]


def test_stats_empty(client):
    response = client.get("/api/waitlist")

    assert response.json() == {"success": True, "count": 0, "initials": []}


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
