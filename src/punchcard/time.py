# SPDX-License-Identifier: MIT

from typing import Optional, cast

import pendulum


def now_local() -> pendulum.DateTime:
    return pendulum.now("local")


def today_local() -> pendulum.Date:
    return now_local().date()


def yesterday_local() -> pendulum.Date:
    return today_local().subtract(days=1)


def date_to_iso_str(date: pendulum.Date) -> str:
    return date.to_date_string()


def date_from_str(date: str) -> pendulum.Date:
    return cast(pendulum.DateTime, pendulum.parse(date, tz="local")).date()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime)).in_tz("local")


def datetime_from_str_optional(datetime: Optional[str]) -> Optional[pendulum.DateTime]:
    if datetime is None:
        return None
    return datetime_from_str(datetime)


def datetime_to_display_time_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("HH:mm")


def datetime_to_wall_clock_str(datetime: pendulum.DateTime) -> str:
    """Format as the service's 12 hour clock, e.g. 9:05am."""
    return datetime.in_tz("local").format("h:mmA").lower()


def hours_since(datetime: pendulum.DateTime) -> float:
    elapsed = now_local() - datetime
    return max(elapsed.total_seconds(), 0) / 3600


def as_hours(hours: float, decimal: bool = False) -> str:
    """
    Render a fractional hour count.

    as_hours(1.5) == "1:30", as_hours(1.5, decimal=True) == "1.50"
    """
    if decimal:
        return f"{hours:.2f}"
    minutes = int(round(hours * 60))
    return f"{minutes // 60}:{minutes % 60:02d}"
