from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

from ..core.errors import ValidationError

# date-time from RFC 3339 section 5.6: full date, "T", full time with a
# mandatory "Z" or +hh:mm offset, optional fraction of any length.
RFC3339_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(?:(Z)|([+-])(\d{2}):(\d{2}))$",
    re.ASCII,
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_rfc3339(ts: str, label: str = "timestamp") -> datetime:
    """Parse an RFC 3339 timestamp and normalise it to UTC.

    Fractions beyond microseconds are truncated. Anything outside the RFC
    3339 shape (basic ISO 8601, missing seconds, missing offset) is rejected.
    """
    match = RFC3339_RE.match(ts.strip())
    if match is None:
        raise ValidationError(f"Invalid {label} format: {ts!r}")
    year, month, day, hour, minute, second, fraction, zulu, sign, off_h, off_m = match.groups()
    try:
        if zulu:
            offset = timedelta(0)
        else:
            if int(off_m) > 59:
                raise ValueError("offset minutes out of range")
            offset = timedelta(hours=int(off_h), minutes=int(off_m))
            if sign == "-":
                offset = -offset
        dt = datetime(
            int(year),
            int(month),
            int(day),
            int(hour),
            int(minute),
            int(second),
            int((fraction or "0")[:6].ljust(6, "0")),
            tzinfo=timezone(offset),
        )
    except ValueError as exc:
        raise ValidationError(f"Invalid {label} format: {ts!r}") from exc
    return dt.astimezone(timezone.utc)


def resolve_period(start_raw: str | None, end_raw: str | None) -> tuple[datetime, datetime] | None:
    """Return the inclusive ``(start, end)`` window, or ``None`` when neither bound is given."""
    start_raw = (start_raw or "").strip()
    end_raw = (end_raw or "").strip()
    if not start_raw and not end_raw:
        return None
    if not start_raw or not end_raw:
        raise ValidationError("startPeriod and endPeriod must be supplied together")
    start = parse_rfc3339(start_raw, "start period")
    end = parse_rfc3339(end_raw, "end period")
    if start > end:
        raise ValidationError("startPeriod must not be later than endPeriod")
    return start, end
