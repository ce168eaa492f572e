# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from punchcard.model.task_reference import (
    AliasReference,
    ExplicitReference,
    TaskReference,
)
from punchcard.time import now_local, today_local

WEEKDAYS = [
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
]

_ID_P = re.compile(r"^\d+$")
_CLOCK_P = re.compile(r"^(\d{1,2})(?::(\d{2}))?\s*(am|pm|a|p)?$", re.IGNORECASE)
_OFFSET_P = re.compile(r"^\+(\d*):(\d{2})$")


def parse_task_reference(
    tokens: list[str],
) -> tuple[Optional[TaskReference], list[str]]:
    """
    Read a task reference from the front of the arguments.

    "@name" gives an alias, two numeric IDs give an explicit project and
    task. Returns the reference (or None) and the unconsumed tokens.
    """
    if len(tokens) > 0 and tokens[0].startswith("@") and len(tokens[0]) > 1:
        return AliasReference(tokens[0][1:]), tokens[1:]
    if len(tokens) > 1 and _ID_P.match(tokens[0]) and _ID_P.match(tokens[1]):
        return ExplicitReference(tokens[0], tokens[1]), tokens[2:]
    return None, tokens


def parse_clock_time(text: str) -> Optional[tuple[int, int]]:
    """
    Parse "9am", "9:30", "9:30pm" or "14:00" into (hour, minute).

    A bare number is not a clock time, it could be a project ID.
    """
    match = _CLOCK_P.match(text.strip())
    if not match:
        return None
    hour_str, minute_str, meridiem = match.groups()
    if minute_str is None and meridiem is None:
        return None

    hour = int(hour_str)
    minute = int(minute_str or 0)
    if meridiem is not None:
        if hour < 1 or hour > 12:
            raise typer.BadParameter(f"Hour must be between 1 and 12, got {hour}")
        meridiem = meridiem.lower()
        if meridiem.startswith("p") and hour != 12:
            hour += 12
        elif meridiem.startswith("a") and hour == 12:
            hour = 0

    if hour < 0 or hour > 23:
        raise typer.BadParameter(f"Hour must be between 0 and 23, got {hour}")
    if minute < 0 or minute > 59:
        raise typer.BadParameter(f"Minute must be between 0 and 59, got {minute}")
    return (hour, minute)


def parse_starting_time(
    tokens: list[str],
) -> tuple[Optional[pendulum.DateTime], list[str]]:
    """
    Take a starting time out of the arguments.

    Either a leading clock time ("9am" is today at 9:00) or a "+H:MM" offset
    anywhere ("+0:15" is fifteen minutes ago).
    """
    for index, token in enumerate(tokens):
        offset_match = _OFFSET_P.match(token)
        if offset_match:
            hours = int(offset_match.group(1) or 0)
            minutes = int(offset_match.group(2))
            starting_time = now_local().subtract(hours=hours, minutes=minutes)
            return starting_time, tokens[:index] + tokens[index + 1 :]

    if len(tokens) > 0:
        clock = parse_clock_time(tokens[0])
        if clock is not None:
            hour, minute = clock
            starting_time = pendulum.today("local").set(
                hour=hour, minute=minute, second=0, microsecond=0
            )
            return starting_time, tokens[1:]

    return None, tokens


def parse_date(date_param: Optional[str]) -> Optional[pendulum.Date]:
    if date_param is None or not date_param.strip():
        return None

    date = date_param.strip().lower()
    today = today_local()

    # Match YYYY-MM-DD format
    if re.match(r"^\d{4}-\d{2}-\d{2}$", date):
        try:
            return pendulum.parse(date, tz="local").date()  # type: ignore[union-attr]
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date: {e}")

    # Match numeric input for relative days (e.g., "-1", "3")
    if re.match(r"^[-+]?\d+$", date):
        return today.add(days=int(date))

    if date in ("today", "t", "now"):
        return today
    if date in ("yesterday", "y"):
        return today.subtract(days=1)
    if date in ("tomorrow", "o"):
        return today.add(days=1)

    # "monday" and "last monday" both mean the most recent past monday
    weekday = date.removeprefix("last ").strip()
    if weekday in WEEKDAYS:
        days_back = (today.weekday() - WEEKDAYS.index(weekday)) % 7
        if days_back == 0 and date.startswith("last "):
            days_back = 7
        return today.subtract(days=days_back)

    raise typer.BadParameter(f"Incorrect date format: {date_param!r}")
