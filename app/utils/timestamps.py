"""
UTC timestamp helpers for BaaS rows
"""
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

# Postgres trims trailing zeros from fractions and may print "+00" offsets
_FRACTION = re.compile(r"\.(\d+)")
_SHORT_OFFSET = re.compile(r"(\d{2}:\d{2}(?::\d{2})?(?:\.\d+)?[+-]\d{2})$")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def normalize_iso(value: str) -> str:
    """Rewrite a Postgres timestamp into a form datetime.fromisoformat accepts on 3.10"""
    value = value.strip().replace("Z", "+00:00")
    value = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), value, count=1)
    return _SHORT_OFFSET.sub(r"\1:00", value)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp from Postgres; naive values are taken as UTC"""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(normalize_iso(value))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def start_of_day(now: datetime) -> datetime:
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(now: datetime) -> datetime:
    """Midnight of the most recent Sunday"""
    days_since_sunday = (now.weekday() + 1) % 7
    return start_of_day(now) - timedelta(days=days_since_sunday)
