import re

_EMAIL_RE = re.compile(r"[\w.+-]+@[\w.-]+\.\w+")
_IPV4_RE = re.compile(r"\b(\d{1,3}\.\d{1,3}\.\d{1,3}\.)\d{1,3}\b")
_SECRET_RE = re.compile(
    r'(password|passwd|pwd|secret)["\']?\s*[:=]\s*["\']?[^"\'&\s]+',
    flags=re.IGNORECASE,
)


def redact_pii(message: str) -> str:
    """Redact personally identifiable information from log messages.

    Submitters' emails keep their first character and domain, IPv4 addresses
    lose their last octet, and credential-looking assignments are blanked.
    """
    if not isinstance(message, str):
        return str(message)

    # Emails: person@gmail.com -> p***@gmail.com
    message = _EMAIL_RE.sub(
        lambda m: m.group()[0] + "***@" + m.group().split("@")[1],
        message,
    )

    # IPs (IPv4): 192.168.1.100 -> 192.168.1.***
    message = _IPV4_RE.sub(r"\1***", message)

    message = _SECRET_RE.sub(r"\1=[REDACTED]", message)

    return message


def email_domain(email: str) -> str | None:
    """Return the domain part of an address, the only part safe to log."""
    if not email or "@" not in email:
        return None
    return email.rsplit("@", 1)[1].lower()
