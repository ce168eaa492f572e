# SPDX-License-Identifier: MIT

from typing import Any, Optional, Protocol

import pendulum

RawRecord = dict[str, Any]


class EntryApi(Protocol):
    """The calls made against the remote time tracking service."""

    def fetch_today(self) -> tuple[list[RawRecord], list[RawRecord]]:
        """Return today's day entries and the projects (with tasks) of the account."""
        ...

    def fetch_daily(self, date: pendulum.Date) -> list[RawRecord]: ...

    def create_entry(
        self,
        project_id: str,
        task_id: str,
        starting_time: Optional[pendulum.DateTime],
        note: str,
    ) -> RawRecord: ...

    def toggle_entry(self, entry_id: str) -> RawRecord: ...

    def update_entry_notes(self, entry_id: str, notes: str) -> RawRecord: ...

    def delete_entry(self, entry_id: str) -> bool: ...
