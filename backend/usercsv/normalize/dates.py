from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


def parse_iso_datetime(s: str) -> datetime:
    """
    "2023-06-15T10:30:00.000Z" -> aware datetime (UTC).

    Values without an offset are taken as UTC.
    Raises ValueError on anything that is not ISO-8601.
    """
    if not isinstance(s, str):
        raise ValueError(f"Invalid ISO-8601 date-time: {s!r}")
    s = s.strip()
    if not s:
        raise ValueError("Invalid ISO-8601 date-time: empty string")
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def iso_to_epoch_millis(s: str, warnings: Optional[list[str]] = None) -> int:
    """
    ISO-8601 date-time -> integer milliseconds since 1970-01-01T00:00:00Z.

    Never raises: an unparseable value is logged, reported into `warnings`
    (when given) and converted to 0.
    """
    try:
        dt = parse_iso_datetime(s)
    except ValueError as e:
        msg = f"Error converting date {s!r}: {e}"
        logger.warning(msg)
        if warnings is not None:
            warnings.append(msg)
        return 0
    # floor to whole milliseconds (sub-ms precision is dropped)
    return (dt - _EPOCH) // _ONE_MS
