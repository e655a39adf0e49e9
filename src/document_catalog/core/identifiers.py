"""Identifier and timestamp helpers shared by every table."""

import secrets
import time
from datetime import datetime, timezone
from typing import Callable

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"

# Id prefixes, one per table
DOCUMENT = "DOC"
CATEGORY = "CAT"
TAG = "TAG"
FAVORITE = "FAV"
SESSION = "SES"
ACTIVITY = "ACT"
VIEW = "VIEW"

Clock = Callable[[], datetime]


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_id(prefix: str = "ID") -> str:
    """Generate a self-describing record id such as ``DOC_LX2K9F0A_4HQ7Z``.

    The millisecond component orders ids roughly by creation time; the random
    suffix keeps ids distinct when several are generated in the same tick.
    """
    timestamp = _to_base36(time.time_ns() // 1_000_000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(5))
    return f"{prefix}_{timestamp}_{suffix}".upper()


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (the form SQLite round-trips)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
