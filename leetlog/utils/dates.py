# leetlog/utils/dates.py
from datetime import date, datetime, timedelta
from typing import List
from zoneinfo import ZoneInfo

from leetlog.utils.config import settings


def today_key(tz_name: str | None = None, now: datetime | None = None) -> str:
    """Returns today's date key (YYYY-MM-DD) in the reference time zone."""
    tz = ZoneInfo(tz_name or settings.TIMEZONE)
    current = now.astimezone(tz) if now is not None else datetime.now(tz)
    return current.date().isoformat()


def parse_date_key(value: str) -> date:
    """Parses a strict YYYY-MM-DD key. Raises ValueError on anything else."""
    if not isinstance(value, str) or len(value) != 10:
        raise ValueError(f"'{value}' is not a YYYY-MM-DD date")
    parsed = date.fromisoformat(value)
    # fromisoformat also takes week dates and basic format on 3.11+
    if parsed.isoformat() != value:
        raise ValueError(f"'{value}' is not a YYYY-MM-DD date")
    return parsed


def window_keys(reference: str, days: int) -> List[str]:
    """Date keys of the inclusive window ending at `reference`, oldest first."""
    end = parse_date_key(reference)
    return [(end - timedelta(days=offset)).isoformat() for offset in range(days - 1, -1, -1)]
