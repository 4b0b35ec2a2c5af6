"""Shared pytest fixtures and fakes for objperms tests."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pytest

from objperms.cache import ContentCache
from objperms.constants.salesforce import OBJECT_PERMISSION_FLAGS
from objperms.exceptions import QueryError


def metadata_record(full_name: str, object_name: str | None = None, **flags: bool) -> dict[str, Any]:
    """Build a Profile/Permission Set record with string-typed flags."""
    entries = []
    if object_name is not None:
        entry: dict[str, Any] = {"object": object_name}
        for api_name in OBJECT_PERMISSION_FLAGS:
            entry[api_name] = "true" if flags.get(api_name) else "false"
        entries.append(entry)
    return {"fullName": full_name, "objectPermissions": entries}


class FakeSalesforceClient:
    """In-memory stand-in for ``SalesforceClient``."""

    def __init__(
        self,
        *,
        listings: dict[str, list[dict[str, str]]] | None = None,
        records: dict[tuple[str, str], Any] | None = None,
        query_results: dict[str, list[dict[str, Any]]] | None = None,
        users: Iterable[dict[str, Any]] = (),
        failing_reads: Iterable[str] = (),
        failing_queries: Iterable[str] = (),
    ) -> None:
        self.listings = listings or {}
        self.records = records or {}
        self.query_results = query_results or {}
        self.users = list(users)
        self.failing_reads = set(failing_reads)
        self.failing_queries = set(failing_queries)
        self.queries: list[str] = []
        self.bulk_queries: list[tuple[str, str]] = []
        self.reads: list[tuple[str, str]] = []

    def list_metadata(self, metadata_type: str) -> list[dict[str, str]]:
        return list(self.listings.get(metadata_type, []))

    def read_metadata(self, metadata_type: str, full_name: str) -> Any:
        self.reads.append((metadata_type, full_name))
        if full_name in self.failing_reads:
            raise QueryError(f"{metadata_type} {full_name} was not found")
        return self.records[(metadata_type, full_name)]

    def query(self, soql: str) -> list[dict[str, Any]]:
        self.queries.append(soql)
        object_name = soql.split(" from ", 1)[1].split(" ", 1)[0]
        if object_name in self.failing_queries:
            raise QueryError(f"Query failed: {soql}")
        return list(self.query_results.get(object_name, []))

    def bulk_query(self, object_name: str, soql: str) -> list[dict[str, Any]]:
        self.bulk_queries.append((object_name, soql))
        if object_name in self.failing_queries:
            raise QueryError(f"Bulk query failed: {soql}")
        return list(self.users)


@pytest.fixture
def cache(tmp_path: Path) -> ContentCache:
    """Return an enabled cache rooted in a temp directory."""
    return ContentCache(tmp_path / "cache", 1)


@pytest.fixture
def sysadmin_client() -> FakeSalesforceClient:
    """One profile with read access to Account and one user on it."""
    return FakeSalesforceClient(
        listings={"Profile": [{"fullName": "SysAdmin", "id": "00e000000000001"}]},
        records={("Profile", "SysAdmin"): metadata_record("SysAdmin", "Account", allowRead=True)},
        users=[{"Id": "005000000000001", "Username": "admin@example.com", "ProfileId": "00e000000000001"}],
    )
