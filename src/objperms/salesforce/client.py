"""Cached Salesforce API client.

Every call is memoized through a :class:`~objperms.cache.ContentCache`, keyed
by the SOQL text or by the metadata type and name.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from simple_salesforce import Salesforce
from simple_salesforce.exceptions import SalesforceError
from zeep.exceptions import Error as ZeepError
from zeep.helpers import serialize_object

from objperms.cache import ContentCache
from objperms.constants.cache import METADATA_LIST_KEY_PREFIX
from objperms.constants.salesforce import DEFAULT_BULK_POLL_INTERVAL_SECONDS, DEFAULT_BULK_POLL_TIMEOUT_SECONDS
from objperms.exceptions import QueryError
from objperms.salesforce.bulk import BulkQueryJob, strip_attributes
from objperms.types import JsonValue, MetadataListEntry

logger = logging.getLogger(__name__)


class SalesforceClient:
    """API-boundary adapter around a logged-in ``simple_salesforce`` connection."""

    def __init__(
        self,
        connection: Salesforce,
        cache: ContentCache,
        *,
        bulk_poll_interval: float = DEFAULT_BULK_POLL_INTERVAL_SECONDS,
        bulk_poll_timeout: float = DEFAULT_BULK_POLL_TIMEOUT_SECONDS,
    ) -> None:
        self.connection = connection
        self.cache = cache
        self.bulk_poll_interval = bulk_poll_interval
        self.bulk_poll_timeout = bulk_poll_timeout

    def query(self, soql: str) -> list[dict[str, Any]]:
        """Run a SOQL query, following pagination, and return its records."""
        return self.cache.fetch(soql, lambda: self._query(soql))

    def bulk_query(self, object_name: str, soql: str) -> list[dict[str, Any]]:
        """Run a SOQL query through the Bulk API and return its records."""
        return self.cache.fetch(soql, lambda: self._bulk_query(object_name, soql))

    def list_metadata(self, metadata_type: str) -> list[MetadataListEntry]:
        """List every metadata component of a type."""
        key = f"{METADATA_LIST_KEY_PREFIX}-{metadata_type}"
        return self.cache.fetch(key, lambda: self._list_metadata(metadata_type))

    def read_metadata(self, metadata_type: str, full_name: str) -> JsonValue:
        """Read one named metadata component."""
        key = f"{metadata_type}-{full_name}"
        return self.cache.fetch(key, lambda: self._read_metadata(metadata_type, full_name))

    def _query(self, soql: str) -> list[dict[str, Any]]:
        logger.debug("Querying: %s", soql)
        try:
            result = self.connection.query_all(soql)
        except SalesforceError as exc:
            raise QueryError(f"Query failed: {soql} ({exc})") from exc
        return [strip_attributes(record) for record in result.get("records", [])]

    def _bulk_query(self, object_name: str, soql: str) -> list[dict[str, Any]]:
        logger.debug("Bulk querying: %s", soql)
        with BulkQueryJob(
            self.connection.session,
            self.connection.bulk_url,
            self.connection.session_id,
            object_name,
            poll_interval=self.bulk_poll_interval,
            poll_timeout=self.bulk_poll_timeout,
        ) as job:
            return job.query(soql)

    def _list_metadata(self, metadata_type: str) -> list[MetadataListEntry]:
        logger.debug("Listing %s metadata", metadata_type)
        try:
            response = self.connection.mdapi.list_metadata([{"type": metadata_type}])
        except (SalesforceError, ZeepError) as exc:
            raise QueryError(f"Listing {metadata_type} metadata failed: {exc}") from exc

        entries: list[MetadataListEntry] = []
        for item in _to_json(response) or []:
            if not item.get("fullName") or not item.get("id"):
                continue
            entries.append({"fullName": item["fullName"], "id": item["id"], "type": metadata_type})
        return entries

    def _read_metadata(self, metadata_type: str, full_name: str) -> JsonValue:
        logger.debug("Reading %s %s", metadata_type, full_name)
        try:
            response = getattr(self.connection.mdapi, metadata_type).read(full_name)
        except (SalesforceError, ZeepError) as exc:
            raise QueryError(f"Reading {metadata_type} {full_name} failed: {exc}") from exc

        payload = _to_json(response)
        if not payload or (isinstance(payload, dict) and not payload.get("fullName")):
            raise QueryError(f"{metadata_type} {full_name} was not found")
        return payload


def _to_json(value: object) -> JsonValue:
    """Convert a SOAP response into plain JSON-compatible data."""
    serialized = serialize_object(value, target_cls=dict)
    return json.loads(json.dumps(serialized, default=str))
