from app.core.sanitizer import email_domain, redact_pii


def test_email_is_masked_but_domain_kept():
    assert redact_pii("joined person@gmail.com") == "joined p***@gmail.com"


def test_ip_last_octet_removed():
    assert redact_pii("client 203.0.113.10 blocked") == "client 203.0.113.*** blocked"


def test_password_assignments_redacted():
    assert "hunter2" not in redact_pii("SMTP_PASSWORD=hunter2")


def test_non_string_is_stringified():
    assert redact_pii(42) == "42"


def test_email_domain():
    assert email_domain("Person@Gmail.com") == "gmail.com"
    assert email_domain("nobody") is None
    assert email_domain("") is None
