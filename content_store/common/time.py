"""
Time Utilities

Policy:
- Timestamps stored inside JSON values are ISO-8601 strings in UTC.
- Session token claims use integer epoch milliseconds.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone

UTC = timezone.utc


def utc_now() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(UTC)


def utc_now_iso() -> str:
    """Return current UTC time as an ISO-8601 string with millisecond precision."""
    return utc_now().isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now_ms() -> int:
    """Return current epoch time in milliseconds."""
    return int(time.time() * 1000)
