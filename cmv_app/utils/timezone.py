import calendar
from datetime import datetime
import pytz

from cmv_app.config import settings

LOCAL_TZ = pytz.timezone(settings.TIMEZONE)


def get_local_now():
    """Get current time in the configured timezone"""
    return datetime.now(LOCAL_TZ)


def to_local_tz(dt):
    """Convert datetime to the configured timezone"""
    if dt.tzinfo is None:
        # Naive datetime, assume it was entered as local time
        dt = LOCAL_TZ.localize(dt)
    return dt.astimezone(LOCAL_TZ)


def subtract_months(dt, months):
    """Move a datetime back by whole calendar months, clamping the day to the month end"""
    month_index = dt.month - 1 - months
    year = dt.year + month_index // 12
    month = month_index % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)
