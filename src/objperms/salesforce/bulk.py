"""Bulk API query jobs with bounded polling."""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from types import TracebackType
from typing import Any

import requests

from objperms.constants.salesforce import (
    BULK_CONTENT_TYPE,
    BULK_SESSION_HEADER,
    BULK_STATE_CLOSED,
    BULK_STATE_COMPLETED,
    BULK_TERMINAL_FAILURE_STATES,
    DEFAULT_BULK_POLL_INTERVAL_SECONDS,
    DEFAULT_BULK_POLL_TIMEOUT_SECONDS,
    RECORD_ATTRIBUTES_KEY,
)
from objperms.exceptions import BulkQueryTimeoutError, QueryError

logger = logging.getLogger(__name__)


class BulkQueryJob:
    """A single-batch Bulk API query job.

    Used as a context manager: entering creates the job, leaving closes it.
    """

    def __init__(
        self,
        session: requests.Session,
        bulk_url: str,
        session_id: str,
        object_name: str,
        *,
        poll_interval: float = DEFAULT_BULK_POLL_INTERVAL_SECONDS,
        poll_timeout: float = DEFAULT_BULK_POLL_TIMEOUT_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.session = session
        self.bulk_url = bulk_url.rstrip("/")
        self.object_name = object_name
        self.poll_interval = poll_interval
        self.poll_timeout = poll_timeout
        self.headers = {
            BULK_SESSION_HEADER: session_id,
            "Content-Type": BULK_CONTENT_TYPE,
        }
        self.job_id = ""
        self._sleep = sleep
        self._clock = clock

    def __enter__(self) -> BulkQueryJob:
        payload = {"operation": "query", "object": self.object_name, "contentType": "JSON"}
        job = self._request("POST", "job", data=json.dumps(payload))
        self.job_id = job["id"]
        logger.debug("Created bulk job %s for %s", self.job_id, self.object_name)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_traceback: TracebackType | None,
    ) -> None:
        if not self.job_id:
            return
        try:
            self._request("POST", f"job/{self.job_id}", data=json.dumps({"state": BULK_STATE_CLOSED}))
        except QueryError as exc:
            if exc_type is None:
                raise
            logger.warning("Failed to close bulk job %s: %s", self.job_id, exc)
        else:
            logger.debug("Closed bulk job %s", self.job_id)

    def submit(self, soql: str) -> str:
        """Add the query batch to the job and return its batch id."""
        batch = self._request("POST", f"job/{self.job_id}/batch", data=soql)
        return batch["id"]

    def wait(self, batch_id: str) -> None:
        """Poll the batch until it completes.

        Raises:
            QueryError: the batch failed or was not processed.
            BulkQueryTimeoutError: the batch did not finish within ``poll_timeout``.
        """
        deadline = self._clock() + self.poll_timeout
        while True:
            batch = self._request("GET", f"job/{self.job_id}/batch/{batch_id}")
            state = batch.get("state")
            if state == BULK_STATE_COMPLETED:
                logger.debug("Bulk batch %s completed", batch_id)
                return
            if state in BULK_TERMINAL_FAILURE_STATES:
                message = f"Bulk batch {batch_id} {state}"
                if batch.get("stateMessage"):
                    message = f"{message}: {batch['stateMessage']}"
                raise QueryError(message)
            if self._clock() >= deadline:
                raise BulkQueryTimeoutError(self.job_id, self.poll_timeout)
            logger.debug("Bulk batch %s is %s, polling again in %gs", batch_id, state, self.poll_interval)
            self._sleep(self.poll_interval)

    def results(self, batch_id: str) -> list[dict[str, Any]]:
        """Download and concatenate every result set of a completed batch."""
        records: list[dict[str, Any]] = []
        result_ids = self._request("GET", f"job/{self.job_id}/batch/{batch_id}/result")
        for result_id in result_ids:
            page = self._request("GET", f"job/{self.job_id}/batch/{batch_id}/result/{result_id}")
            records.extend(strip_attributes(record) for record in page)
        return records

    def query(self, soql: str) -> list[dict[str, Any]]:
        """Submit ``soql``, wait for it and return all records."""
        batch_id = self.submit(soql)
        self.wait(batch_id)
        return self.results(batch_id)

    def _request(self, method: str, path: str, *, data: str | None = None) -> Any:
        url = f"{self.bulk_url}/{path}"
        try:
            response = self.session.request(method, url, headers=self.headers, data=data)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as exc:
            raise QueryError(f"Bulk API {method} {path} failed: {exc}") from exc
        except ValueError as exc:
            raise QueryError(f"Bulk API {method} {path} returned invalid JSON: {exc}") from exc


def strip_attributes(record: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of a record without the ``attributes`` envelope, recursively."""
    cleaned: dict[str, Any] = {}
    for key, value in record.items():
        if key == RECORD_ATTRIBUTES_KEY:
            continue
        cleaned[key] = strip_attributes(value) if isinstance(value, dict) else value
    return cleaned
