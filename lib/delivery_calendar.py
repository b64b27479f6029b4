# =============================================================================
# lib/delivery_calendar.py - Delivery Calendar (Asia/Kolkata)
# =============================================================================
# All business dates are Kolkata calendar dates, whatever timezone the
# server or the cron runner uses. 00:05 IST is 18:35 UTC the previous day,
# so reading the server clock directly would be off by one day.
#
# The menu runs on a two-week cycle: odd ISO weeks use week 1 of the
# template table, even ISO weeks use week 2. Sundays are rest days.
# =============================================================================

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

DELIVERY_TIMEZONE = ZoneInfo("Asia/Kolkata")

SUNDAY = 7


def delivery_today(now: datetime | None = None) -> date:
    """
    Return today's date in the delivery timezone.

    Args:
        now: The instant to convert. Defaults to the current time.
            Naive datetimes are treated as UTC.

    Example:
        >>> delivery_today(datetime(2024, 1, 14, 18, 35, tzinfo=timezone.utc))
        datetime.date(2024, 1, 15)
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(DELIVERY_TIMEZONE).date()


def iso_day_of_week(day: date) -> int:
    """ISO weekday: 1 = Monday ... 7 = Sunday."""
    return day.isoweekday()


def iso_week_number(day: date) -> int:
    """ISO 8601 week number (1..53)."""
    return day.isocalendar()[1]


def menu_week_for(day: date) -> int:
    """Which week of the biweekly menu applies: 2 for even ISO weeks, else 1."""
    return 2 if iso_week_number(day) % 2 == 0 else 1


def is_rest_day(day: date) -> bool:
    """No deliveries are scheduled on Sundays."""
    return iso_day_of_week(day) == SUNDAY
