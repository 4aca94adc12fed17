# core/rate_limiter.py

from typing import Dict, List, Tuple, Optional
from collections import defaultdict
from threading import Lock
import time

from fastapi import HTTPException, Request


# Simple in-memory sliding-window limiter, per process
_rate_limit_store: Dict[str, List[float]] = defaultdict(list)
_store_lock = Lock()


def check_rate_limit(
    identifier: str,
    max_requests: int = 10,
    window_seconds: int = 60,
) -> Tuple[bool, int]:
    """
    Record one attempt for `identifier` and report whether it is allowed.

    Returns:
        Tuple of (allowed: bool, remaining: int)
    """
    now = time.time()
    window_start = now - window_seconds

    with _store_lock:
        attempts = [ts for ts in _rate_limit_store[identifier] if ts > window_start]

        if len(attempts) >= max_requests:
            _rate_limit_store[identifier] = attempts
            return False, 0

        attempts.append(now)
        _rate_limit_store[identifier] = attempts
        return True, max_requests - len(attempts)


def reset_rate_limits(identifier: Optional[str] = None) -> None:
    """Forget recorded attempts (all of them, or just one identifier)."""
    with _store_lock:
        if identifier is None:
            _rate_limit_store.clear()
        else:
            _rate_limit_store.pop(identifier, None)


def get_rate_limit_identifier(request: Request, scope: Optional[str] = None) -> str:
    """
    Build the limiter key from the client IP, honouring X-Forwarded-For
    when running behind a proxy. `scope` namespaces the key (e.g. a username).
    """
    client_ip = request.client.host if request.client else "unknown"

    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        # First entry is the original client
        client_ip = forwarded_for.split(",")[0].strip()

    if scope:
        return f"ip:{client_ip}:{scope}"
    return f"ip:{client_ip}"


def require_rate_limit(
    request: Request,
    identifier: Optional[str] = None,
    max_requests: int = 10,
    window_seconds: int = 60
) -> int:
    """
    Raise 429 Too Many Requests once `identifier` exceeds its budget.
    Returns the number of attempts left in the window.
    """
    if identifier is None:
        identifier = get_rate_limit_identifier(request)

    allowed, remaining = check_rate_limit(identifier, max_requests, window_seconds)

    if not allowed:
        raise HTTPException(
            status_code=429,
            detail=f"Rate limit exceeded. Maximum {max_requests} requests per {window_seconds} seconds.",
            headers={
                "X-RateLimit-Limit": str(max_requests),
                "X-RateLimit-Window": str(window_seconds),
                "Retry-After": str(window_seconds),
            }
        )

    return remaining
