"""
Canonical calendar day.

`reference_today()` is the only place that reads the wall clock. Everything
downstream takes the reference date as an argument so that two calls made
moments apart around midnight cannot disagree about which day it is.
"""
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from question_diary.core.config import settings


def reference_zone() -> ZoneInfo:
    return ZoneInfo(settings.TIMEZONE)


def reference_today(now: Optional[datetime] = None) -> date:
    """Return today's date in the reference timezone.

    `now` must be timezone-aware when given; it is converted, not reinterpreted.
    """
    zone = reference_zone()
    if now is None:
        return datetime.now(tz=zone).date()
    return now.astimezone(zone).date()
