# SPDX-License-Identifier: MIT

import logging
from typing import Any, Optional

import httpx
import pendulum

from punchcard import time
from punchcard.configuration import APP_NAME, Credentials
from punchcard.errors import NotFoundError, RemoteError
from punchcard.remote.api import RawRecord

logger = logging.getLogger(__name__)

USER_AGENT = f"{APP_NAME} (httpx)"


class HarvestApi:
    """
    EntryApi implementation for the service's /daily timesheet endpoints.

    One request per call, no retries.
    """

    def __init__(
        self, credentials: Credentials, client: Optional[httpx.Client] = None
    ) -> None:
        scheme = "https" if credentials.ssl else "http"
        self.base_url = f"{scheme}://{credentials.subdomain}.harvestapp.com"
        self._client = client or httpx.Client(
            base_url=self.base_url,
            auth=(credentials.login, credentials.password),
            timeout=httpx.Timeout(credentials.timeout),
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
                "User-Agent": USER_AGENT,
            },
        )

    def close(self) -> None:
        self._client.close()

    def _request(
        self, method: str, path: str, json: Optional[dict[str, Any]] = None
    ) -> httpx.Response:
        logger.debug("%s %s", method, path)
        try:
            response = self._client.request(method, path, json=json)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise RemoteError(None, f"Unable to reach {self.base_url}: {e}") from e

        logger.debug("%s %s -> %s", method, path, response.status_code)
        if response.is_success:
            return response

        message = response.text.strip() or response.reason_phrase
        logger.warning("%s %s -> HTTP %s: %s", method, path, response.status_code, message)
        if response.status_code == 404:
            raise NotFoundError(response.status_code, message)
        raise RemoteError(response.status_code, message)

    def _json(self, response: httpx.Response) -> dict[str, Any]:
        try:
            payload = response.json()
        except ValueError as e:
            raise RemoteError(
                response.status_code, f"Unexpected response from service: {e}"
            ) from e
        if not isinstance(payload, dict):
            raise RemoteError(response.status_code, "Unexpected response from service")
        return payload

    def _entry(self, response: httpx.Response) -> RawRecord:
        payload = self._json(response)
        # Some endpoints wrap the entry in a day_entry key.
        if "day_entry" in payload:
            if not isinstance(payload["day_entry"], dict):
                raise RemoteError(
                    response.status_code, "Unexpected response from service"
                )
            return payload["day_entry"]
        return payload

    def fetch_today(self) -> tuple[list[RawRecord], list[RawRecord]]:
        payload = self._json(self._request("GET", "/daily"))
        return payload.get("day_entries") or [], payload.get("projects") or []

    def fetch_daily(self, date: pendulum.Date) -> list[RawRecord]:
        path = f"/daily/{date.day_of_year}/{date.year}"
        payload = self._json(self._request("GET", path))
        return payload.get("day_entries") or []

    def create_entry(
        self,
        project_id: str,
        task_id: str,
        starting_time: Optional[pendulum.DateTime],
        note: str,
    ) -> RawRecord:
        body: dict[str, Any] = {
            "notes": note,
            "project_id": project_id,
            "task_id": task_id,
            "spent_at": time.date_to_iso_str(
                starting_time.date() if starting_time else time.today_local()
            ),
            "hours": "",
        }
        if starting_time is not None:
            body["started_at"] = time.datetime_to_wall_clock_str(starting_time)
            body["hours"] = round(time.hours_since(starting_time), 2)
        return self._entry(self._request("POST", "/daily/add", json=body))

    def toggle_entry(self, entry_id: str) -> RawRecord:
        return self._entry(self._request("GET", f"/daily/timer/{entry_id}"))

    def update_entry_notes(self, entry_id: str, notes: str) -> RawRecord:
        return self._entry(
            self._request("POST", f"/daily/update/{entry_id}", json={"notes": notes})
        )

    def delete_entry(self, entry_id: str) -> bool:
        """False when the service refuses the delete, e.g. for a locked entry."""
        try:
            self._request("DELETE", f"/daily/delete/{entry_id}")
        except RemoteError as e:
            if e.status is None:
                raise
            return False
        return True
