"""Timestamps of typedpipe values and store entries. All of them are timezone aware UTC."""

from datetime import datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo

UTC = ZoneInfo("UTC")


class TimeParser:
    """encapsulation of time related methods"""

    @classmethod
    def now(cls, timezone: tzinfo = None) -> datetime:
        """returns the current time

        Parameters
        ----------
        timezone : tzinfo
            the timezone to use for the timestamp, defaults to UTC

        Returns
        -------
        datetime
            current date and time as datetime
        """
        return datetime.now(timezone if timezone is not None else UTC)

    @classmethod
    def age(cls, timestamp: datetime) -> timedelta:
        """returns how long ago the timestamp was, negative for timestamps in the future"""
        return cls.now() - timestamp
