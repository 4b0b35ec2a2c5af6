"""Salesforce API exceptions."""

from __future__ import annotations

from objperms.exceptions.base import ObjPermsError


class SalesforceConnectionError(ObjPermsError):
    """Raised when logging in to Salesforce fails."""


class QueryError(ObjPermsError):
    """Raised when a SOQL, bulk or metadata request fails."""


class BulkQueryTimeoutError(QueryError, TimeoutError):
    """Raised when a bulk query does not complete within the poll timeout."""

    def __init__(self, job_id: str, timeout: float) -> None:
        super().__init__(f"Bulk job {job_id} did not complete within {timeout:g} seconds")
        self.job_id = job_id
        self.timeout = timeout
