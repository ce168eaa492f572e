# SPDX-License-Identifier: MIT

import logging
from typing import Callable, Optional

import pendulum

from punchcard import time
from punchcard.errors import (
    AlreadyRunningError,
    DeletionFailedError,
    NoMatchingTimerError,
    NoRunningTimerError,
    NothingToCancelError,
)
from punchcard.model.day_entry import DayEntry, day_entry_display_name
from punchcard.model.task import Task
from punchcard.remote.api import EntryApi, RawRecord
from punchcard.remote.records import day_entry_from_record

logger = logging.getLogger(__name__)

Confirm = Callable[[DayEntry], bool]


def _running(entries: list[DayEntry]) -> Optional[DayEntry]:
    return next((entry for entry in entries if entry["running"]), None)


def _most_recent(entries: list[DayEntry]) -> Optional[DayEntry]:
    if len(entries) == 0:
        return None
    # Entries without updated_at keep the service's order.
    ordered = sorted(
        enumerate(entries),
        key=lambda pair: (
            pair[1]["updated_at"].timestamp()
            if pair[1]["updated_at"] is not None
            else float("-inf"),
            pair[0],
        ),
    )
    return ordered[-1][1]


def _for_task(
    entries: list[DayEntry], project_id: str, task_id: str
) -> list[DayEntry]:
    return [
        entry
        for entry in entries
        if entry["task"]["project_id"] == project_id
        and entry["task"]["task_id"] == task_id
    ]


class Timesheet:
    """
    Lifecycle of day entries against the remote service.

    Entries are never cached: every operation looks the current state up
    again and then issues a single mutation. The "only one running timer"
    checks made here are best effort, the service stays the authority and
    its rejections surface as RemoteError.
    """

    def __init__(self, api: EntryApi) -> None:
        self.api = api

    def __entry(self, record: RawRecord, task: Optional[Task] = None) -> DayEntry:
        entry = day_entry_from_record(record)
        if task is not None:
            entry["task"] = task
        return entry

    def daily(self, date: Optional[pendulum.Date] = None) -> list[DayEntry]:
        if date is None:
            records, _ = self.api.fetch_today()
        else:
            records = self.api.fetch_daily(date)
        return [self.__entry(record) for record in records]

    def with_timer(self, date: Optional[pendulum.Date] = None) -> Optional[DayEntry]:
        return _running(self.daily(date))

    def last(self) -> Optional[DayEntry]:
        return _most_recent(self.daily())

    def last_by_task(self, project_id: str, task_id: str) -> Optional[DayEntry]:
        return _most_recent(_for_task(self.daily(), project_id, task_id))

    def toggle(self, entry: DayEntry) -> DayEntry:
        logger.info(
            "%s entry %s", "Stopping" if entry["running"] else "Starting", entry["id"]
        )
        updated = self.__entry(self.api.toggle_entry(entry["id"]))
        if not updated["task"]["task_name"]:
            updated["task"] = entry["task"]
        return updated

    def append_note(self, entry: DayEntry, text: str) -> DayEntry:
        notes = entry["notes"] + [text]
        logger.info("Appending note to entry %s", entry["id"])
        updated = self.__entry(self.api.update_entry_notes(entry["id"], "\n".join(notes)))
        if not updated["task"]["task_name"]:
            updated["task"] = entry["task"]
        return updated

    def start(
        self,
        task: Task,
        starting_time: Optional[pendulum.DateTime] = None,
        note: str = "",
    ) -> DayEntry:
        if self.with_timer() is not None:
            raise AlreadyRunningError()

        logger.info(
            "Starting timer for project %s task %s", task["project_id"], task["task_id"]
        )
        entry = self.__entry(
            self.api.create_entry(task["project_id"], task["task_id"], starting_time, note),
            task,
        )
        # Entries created with elapsed hours come back stopped.
        if not entry["running"]:
            entry = self.__entry(self.api.toggle_entry(entry["id"]), task)
        return entry

    def stop(self, note: str = "") -> DayEntry:
        entry = self.with_timer() or self.with_timer(time.yesterday_local())
        if entry is None:
            raise NoRunningTimerError()
        if note:
            entry = self.append_note(entry, note)
        return self.toggle(entry)

    def note(self, text: str = "", require_running: bool = True) -> DayEntry:
        entries = self.daily()
        entry = _running(entries)
        if entry is None and not require_running:
            entry = _most_recent(entries)
        if entry is None:
            raise NoRunningTimerError()
        if not text:
            return entry
        return self.append_note(entry, text)

    def log(
        self,
        task: Task,
        starting_time: Optional[pendulum.DateTime] = None,
        note: str = "",
    ) -> DayEntry:
        if self.with_timer() is not None:
            raise AlreadyRunningError()
        self.start(task, starting_time, note)
        return self.stop()

    def resume(self, task_ids: Optional[tuple[str, str]] = None) -> DayEntry:
        entries = self.daily()
        if _running(entries) is not None:
            raise AlreadyRunningError()
        if task_ids is not None:
            entries = _for_task(entries, *task_ids)
        entry = _most_recent(entries)
        if entry is None:
            raise NoMatchingTimerError()
        return self.toggle(entry)

    def cancel(self, confirm: Confirm) -> Optional[DayEntry]:
        """
        Delete the running entry, or the most recent one of today.

        Returns the deleted entry, or None when the user declined.
        """
        entries = self.daily()
        entry = _running(entries) or _most_recent(entries)
        if entry is None:
            raise NothingToCancelError()
        if not confirm(entry):
            logger.info("Cancel of entry %s declined", entry["id"])
            return None
        if not self.api.delete_entry(entry["id"]):
            raise DeletionFailedError(day_entry_display_name(entry))
        logger.info("Deleted entry %s", entry["id"])
        return entry
