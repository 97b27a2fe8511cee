"""
Observation timestamps for assessment records.

A pipeline run asks its clock for the time once and renders it with a
TimestampFormatter, so every record of that run carries the same value.
"""

from datetime import datetime, timezone
from typing import Callable, Optional
from zoneinfo import ZoneInfo

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TimestampFormatter:
    """Render an aware or naive datetime in a fixed display time zone.

    Naive datetimes are taken to be UTC.
    """

    def __init__(self, tz: str = "Asia/Kolkata", fmt: str = "%Y-%m-%d %H:%M:%S", suffix: Optional[str] = "IST"):
        self.tz = ZoneInfo(tz)
        self.fmt = fmt
        self.suffix = suffix

    @classmethod
    def from_config(cls, config: Optional[dict]) -> "TimestampFormatter":
        settings = (config or {}).get("TIMESTAMP") or {}
        return cls(
            tz=settings.get("TIMEZONE", "Asia/Kolkata"),
            fmt=settings.get("FORMAT", "%Y-%m-%d %H:%M:%S"),
            suffix=settings.get("SUFFIX", "IST"),
        )

    def __call__(self, moment: datetime) -> str:
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        rendered = moment.astimezone(self.tz).strftime(self.fmt)
        if self.suffix:
            rendered = f"{rendered} {self.suffix}"
        return rendered


def fixed_clock(moment: datetime) -> Clock:
    """Clock that always returns `moment`; used for reproducible runs."""
    return lambda: moment
