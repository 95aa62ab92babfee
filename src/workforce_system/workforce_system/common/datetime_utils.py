from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Callable, Optional

Clock = Callable[[], datetime]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_utc() -> datetime:
    """Current UTC time as a naive datetime (matches MySQL DATETIME columns).

    Note: Wrapped so tests can inject a fixed clock.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def iso_or_none(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None
