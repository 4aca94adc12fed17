# services/access_codes.py

import secrets
from datetime import datetime, timedelta
from typing import NamedTuple, Optional, Tuple

from models.enums import CodeDuration


CODE_LIFETIMES = {
    CodeDuration.daily.value: timedelta(days=2),
    CodeDuration.weekly.value: timedelta(days=10),
    CodeDuration.monthly.value: timedelta(days=35),
}
DEFAULT_CODE_LIFETIME = CODE_LIFETIMES[CodeDuration.monthly.value]

TRACKER_TOKEN_LIFETIME = timedelta(days=7)


class IssuedCode(NamedTuple):
    code: str
    expiry: datetime


def random_code() -> str:
    """Uniform 4-digit lock code, 1000-9999. Collisions are acceptable."""
    return str(1000 + secrets.randbelow(9000))


def code_expiry(duration: Optional[str], now: Optional[datetime] = None) -> datetime:
    """Unknown or missing durations get the monthly lifetime."""
    now = now or datetime.now()
    return now + CODE_LIFETIMES.get(str(duration) if duration else "", DEFAULT_CODE_LIFETIME)


def issue_code(duration: Optional[str] = "monthly", now: Optional[datetime] = None) -> IssuedCode:
    return IssuedCode(code=random_code(), expiry=code_expiry(duration, now))


# -------------------------------------------------
# Public inquiry tracker tokens
# -------------------------------------------------
def issue_tracker_token(now: Optional[datetime] = None) -> Tuple[str, datetime]:
    now = now or datetime.now()
    return secrets.token_urlsafe(24), now + TRACKER_TOKEN_LIFETIME


def is_tracker_expired(token_expiry: datetime, now: Optional[datetime] = None) -> bool:
    return (now or datetime.now()) > token_expiry
