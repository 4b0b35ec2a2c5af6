"""Bulk retrieval of named metadata components."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from objperms.constants.config import DEFAULT_METADATA_MAX_WORKERS
from objperms.model import MetadataIndex
from objperms.salesforce.client import SalesforceClient
from objperms.types import JsonObject
from objperms.utils import gather_settled

logger = logging.getLogger(__name__)


class MetadataFetcher:
    """Lists and reads Profiles, Permission Sets and other metadata types."""

    def __init__(self, client: SalesforceClient, *, max_workers: int = DEFAULT_METADATA_MAX_WORKERS) -> None:
        self.client = client
        self.max_workers = max_workers

    def list_names(self, metadata_type: str, index: MetadataIndex) -> list[str]:
        """Return the full names of every component of a type.

        Record ids are registered in ``index`` as a side effect, since the
        read call does not return them.
        """
        entries = self.client.list_metadata(metadata_type)
        index.register(metadata_type, entries)
        return [entry["fullName"] for entry in entries]

    def read_all(self, metadata_type: str, full_names: Sequence[str]) -> list[JsonObject]:
        """Read every named component, skipping the ones that fail."""
        logger.info("Reading %s metadata for %d names", metadata_type, len(full_names))
        settled = gather_settled(
            lambda full_name: self.client.read_metadata(metadata_type, full_name),
            full_names,
            max_workers=self.max_workers,
            label=f"Reading {metadata_type}",
        )
        if settled.rejected:
            logger.warning("Skipped %d of %d %s records", len(settled.rejected), len(full_names), metadata_type)

        records: list[JsonObject] = []
        for result in settled.fulfilled:
            if isinstance(result, list):
                records.extend(result)
            else:
                records.append(result)
        return records

    def fetch_all(self, metadata_type: str, index: MetadataIndex) -> list[JsonObject]:
        """List then read every component of a type."""
        logger.info("Fetching %s metadata", metadata_type)
        return self.read_all(metadata_type, self.list_names(metadata_type, index))
