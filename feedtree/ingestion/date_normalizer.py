"""
Date Normalizer
===============

Converts feed publish dates to RFC 3339 timestamps.

Accepted inputs, tried in this order (first match wins):

- RFC 1123 with numeric offset   ``Mon, 02 Jan 2006 15:04:05 -0700``
- RFC 1123 with named zone       ``Mon, 02 Jan 2006 15:04:05 MST``
- RFC 3339                       ``2006-01-02T15:04:05Z07:00``
- Literal GMT, unpadded day      ``Mon, 2 Jan 2006 15:04:05 GMT``

Anything else is handled according to a ``DatePolicy``.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Tuple

from ..config.settings import DatePolicy
from ..utils.exceptions import InvalidDateError
from ..utils.logging import get_logger_for_component

logger = get_logger_for_component("date_normalizer")

# RFC 822 section 5 zone names; any other alphabetic zone reads as UTC.
RFC822_ZONE_OFFSETS = {
    "UT": 0, "UTC": 0, "GMT": 0, "Z": 0,
    "EST": -5, "EDT": -4,
    "CST": -6, "CDT": -5,
    "MST": -7, "MDT": -6,
    "PST": -8, "PDT": -7,
}

RFC1123_BASE = "%a, %d %b %Y %H:%M:%S"

_EXCESS_FRACTION = re.compile(r"(\.\d{6})\d+")


def _parse_rfc1123_offset(value: str) -> datetime:
    return datetime.strptime(value, RFC1123_BASE + " %z")


def _parse_rfc1123_named_zone(value: str) -> datetime:
    head, _, zone = value.rpartition(" ")
    if not zone.isalpha():
        raise ValueError(f"not a zone name: {zone!r}")
    parsed = datetime.strptime(head, RFC1123_BASE)
    offset = timedelta(hours=RFC822_ZONE_OFFSETS.get(zone.upper(), 0))
    return parsed.replace(tzinfo=timezone(offset))


def _parse_rfc3339(value: str) -> datetime:
    value = _EXCESS_FRACTION.sub(r"\1", value)
    fmt = "%Y-%m-%dT%H:%M:%S.%f%z" if "." in value else "%Y-%m-%dT%H:%M:%S%z"
    return datetime.strptime(value, fmt)


def _parse_literal_gmt(value: str) -> datetime:
    return datetime.strptime(value, RFC1123_BASE + " GMT").replace(tzinfo=timezone.utc)


DATE_FORMATS: Tuple[Tuple[str, Callable[[str], datetime]], ...] = (
    ("rfc1123z", _parse_rfc1123_offset),
    ("rfc1123", _parse_rfc1123_named_zone),
    ("rfc3339", _parse_rfc3339),
    ("rfc1123-gmt", _parse_literal_gmt),
)


def format_timestamp(moment: datetime) -> str:
    """Render an aware datetime as RFC 3339 with second precision.

    A zero offset is written as ``Z``; any other offset is kept as given.
    """
    text = moment.isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def parse_date(raw: str) -> Optional[datetime]:
    """Return the aware datetime for the first matching format, or None."""
    value = (raw or "").strip()
    for _name, parser in DATE_FORMATS:
        try:
            return parser(value)
        except ValueError:
            continue
    return None


def normalize_date(
    raw: str,
    policy: DatePolicy = DatePolicy.FALLBACK,
    sentinel: str = "",
    now: Optional[Callable[[], datetime]] = None,
) -> str:
    """Convert a raw publish date to a canonical timestamp string.

    Args:
        raw: Date text from the feed
        policy: Behaviour when no accepted format matches
        sentinel: Value returned under ``DatePolicy.SENTINEL``
        now: Source of the current time for ``DatePolicy.FALLBACK``;
            defaults to the UTC wall clock

    Returns:
        RFC 3339 timestamp, or the sentinel

    Raises:
        InvalidDateError: If nothing matches and the policy is ``FAIL``
    """
    parsed = parse_date(raw)
    if parsed is not None:
        return format_timestamp(parsed)

    if policy == DatePolicy.FAIL:
        raise InvalidDateError(raw or "")

    if policy == DatePolicy.SENTINEL:
        return sentinel

    logger.warning(
        f"Unrecognized publish date {raw!r}, substituting current time",
        extra={"raw_date": raw},
    )
    current = now() if now else datetime.now(timezone.utc)
    return format_timestamp(current.replace(microsecond=0))
