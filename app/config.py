"""Centralized runtime configuration with timezone support."""
import os
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

# App timezone setting - defaults to Central Time
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "America/Chicago")


def get_app_tz() -> ZoneInfo:
    """Get the application timezone."""
    return ZoneInfo(APP_TIMEZONE)


def utc_now() -> datetime:
    """Return timezone-aware UTC datetime. Use this instead of datetime.now()."""
    return datetime.now(timezone.utc)


def utc_now_naive() -> datetime:
    """UTC now without tzinfo, for the naive-UTC DateTime columns."""
    return utc_now().replace(tzinfo=None)


def app_today() -> date:
    """Wall-clock date in the app's timezone. Decides whether today is a Friday."""
    return datetime.now(get_app_tz()).date()
