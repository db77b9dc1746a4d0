"""
=============================================================================
LANDING SUBMISSIONS - RATE LIMITER MODULE
=============================================================================
Per-IP sliding-window limiter for the public submission endpoints.

Features:
- 60 second sliding window, SUBMISSION_RATE_LIMIT_PER_MINUTE requests per IP
- Separate windows per endpoint scope ("contact", "waitlist")
- Trusted-proxy validation for X-Forwarded-For

State is in-memory and per-process.

Usage:
    from app.core.rate_limiter import submission_rate_limit

    @router.post("/contact", dependencies=[Depends(submission_rate_limit("contact"))])
    async def submit_contact():
        ...
=============================================================================
"""

import ipaddress
import logging
import time
from collections import defaultdict, deque
from threading import Lock
from typing import Deque, Dict, List, Tuple

from fastapi import Request, status

from app.core.config import settings
from app.core.errors import ErrorKind, SubmissionError

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 60
SWEEP_EVERY = 256

_trusted_networks: List[ipaddress.IPv4Network | ipaddress.IPv6Network] = []


def _build_trusted_networks() -> None:
    """Parse TRUSTED_PROXIES setting into network objects."""
    global _trusted_networks
    nets = []
    for entry in settings.TRUSTED_PROXIES:
        try:
            nets.append(ipaddress.ip_network(entry, strict=False))
        except ValueError:
            logger.warning("Invalid TRUSTED_PROXIES entry ignored: %s", entry)
    _trusted_networks = nets


_build_trusted_networks()

_lock = Lock()
_windows: Dict[Tuple[str, str], Deque[float]] = defaultdict(deque)
_hits_since_sweep = 0


def _is_trusted_proxy(ip_str: str) -> bool:
    try:
        addr = ipaddress.ip_address(ip_str)
    except ValueError:
        return False
    return any(addr in net for net in _trusted_networks)


def get_client_ip(request: Request) -> str:
    """Extract client IP, trusting X-Forwarded-For only from trusted proxies."""
    direct_ip = request.client.host if request.client else "unknown"

    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded and _is_trusted_proxy(direct_ip):
        parts = [p.strip() for p in forwarded.split(",")]
        # Rightmost untrusted hop is the real client
        for ip in reversed(parts):
            if not _is_trusted_proxy(ip):
                return ip
        return parts[0]

    return direct_ip


def _prune(window: Deque[float], window_start: float) -> None:
    while window and window[0] <= window_start:
        window.popleft()


def _sweep_idle(window_start: float) -> None:
    # Caller holds _lock
    global _hits_since_sweep
    for key in list(_windows):
        _prune(_windows[key], window_start)
        if not _windows[key]:
            del _windows[key]
    _hits_since_sweep = 0


def hit(scope: str, client_ip: str, limit: int, now: float | None = None) -> bool:
    """Record one request; return False when the window is already full.

    Every SWEEP_EVERY calls the windows of clients that went quiet are
    dropped, so memory follows the number of recently active IPs.
    """
    global _hits_since_sweep
    now = time.time() if now is None else now
    window_start = now - WINDOW_SECONDS

    with _lock:
        _hits_since_sweep += 1
        if _hits_since_sweep >= SWEEP_EVERY:
            _sweep_idle(window_start)

        window = _windows[(scope, client_ip)]
        _prune(window, window_start)

        if len(window) >= limit:
            return False

        window.append(now)
        return True


def submission_rate_limit(scope: str):
    """Return a dependency enforcing the per-minute limit for ``scope``."""

    async def _limit(request: Request) -> None:
        client_ip = get_client_ip(request)
        if not hit(scope, client_ip, settings.SUBMISSION_RATE_LIMIT_PER_MINUTE):
            logger.warning(
                "Rate limit exceeded scope=%s ip=%s",
                scope,
                client_ip,
                extra={"event": "rate_limited", "scope": scope},
            )
            raise SubmissionError(
                ErrorKind.RATE_LIMITED,
                "Too many requests. Please wait a minute and try again.",
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            )

    return _limit


def reset_rate_limiter_state() -> None:
    """Clear rate limiter state. Intended for tests."""
    global _hits_since_sweep
    with _lock:
        _windows.clear()
        _hits_since_sweep = 0


def tracked_clients() -> int:
    """Number of (scope, ip) windows currently held in memory."""
    with _lock:
        return len(_windows)
