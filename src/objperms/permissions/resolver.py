"""Resolve which Profiles, Permission Sets and groups grant access to an object."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from objperms.constants.salesforce import (
    PERMISSION_SET,
    PERMISSION_SET_ASSIGNMENT,
    PERMISSION_SET_ASSIGNMENT_FIELDS,
    PERMISSION_SET_GROUP_COMPONENT,
    PERMISSION_SET_GROUP_COMPONENT_FIELDS,
    PROFILE,
    WHERE_OR,
)
from objperms.model import (
    Assignment,
    MetadataIndex,
    ObjectPermissionFlags,
    PermissionSetGroupLink,
    PermissionSource,
    ResolvedPermissions,
)
from objperms.salesforce.client import SalesforceClient
from objperms.salesforce.metadata import MetadataFetcher
from objperms.salesforce.query import generate_query, in_clause
from objperms.types import JsonObject, ObjectPermissionEntry

logger = logging.getLogger(__name__)


def unique_ids(values: Iterable[str | None]) -> list[str]:
    """Drop empty values and duplicates, keeping first-seen order."""
    return list(dict.fromkeys(value for value in values if value))


def find_object_permissions(
    records: Iterable[JsonObject],
    *,
    metadata_type: str,
    object_name: str,
    index: MetadataIndex,
) -> list[PermissionSource]:
    """Keep the records that grant any access to ``object_name``."""
    sources: list[PermissionSource] = []
    for record in records:
        entries = record.get("objectPermissions") or []
        if isinstance(entries, dict):
            entries = [entries]

        entry: ObjectPermissionEntry | None = next(
            (item for item in entries if item.get("object") == object_name), None
        )
        if entry is None:
            continue

        flags = ObjectPermissionFlags.from_metadata(entry)
        if not flags.any_access():
            continue

        full_name = record.get("fullName", "")
        record_id = index.id_for(metadata_type, full_name)
        if record_id is None:
            logger.warning("No %s id listed for %r, skipping", metadata_type, full_name)
            continue

        sources.append(
            PermissionSource(id=record_id, full_name=full_name, object_name=object_name, flags=flags)
        )
    return sources


class PermissionResolver:
    """Finds every permission source for an object and how it is assigned."""

    def __init__(self, client: SalesforceClient, fetcher: MetadataFetcher) -> None:
        self.client = client
        self.fetcher = fetcher

    def resolve(self, object_name: str, index: MetadataIndex | None = None) -> ResolvedPermissions:
        """Resolve Profiles, Permission Sets, groups and assignments for ``object_name``.

        Metadata reads are best-effort; any query failure propagates.
        """
        index = index if index is not None else MetadataIndex()

        profiles = self.permission_sources(PROFILE, object_name, index)
        logger.info("Found %d profiles with access", len(profiles))

        permission_sets = self.permission_sources(PERMISSION_SET, object_name, index)
        logger.info("Found %d permission sets with access", len(permission_sets))

        permission_set_ids = unique_ids(source.id for source in permission_sets)
        groups = self.find_permission_set_groups(permission_set_ids)
        logger.info("Found %d permission set groups", len(groups))

        group_ids = unique_ids(group.permission_set_group_id for group in groups)
        assignments = self.find_assignments(group_ids, permission_set_ids)

        return ResolvedPermissions(
            object_name=object_name,
            profiles=tuple(profiles),
            permission_sets=tuple(permission_sets),
            groups=tuple(groups),
            assignments=tuple(assignments),
        )

    def permission_sources(self, metadata_type: str, object_name: str, index: MetadataIndex) -> list[PermissionSource]:
        """Fetch all metadata of a type and keep the entries granting access."""
        records = self.fetcher.fetch_all(metadata_type, index)
        return find_object_permissions(records, metadata_type=metadata_type, object_name=object_name, index=index)

    def find_permission_set_groups(self, permission_set_ids: list[str]) -> list[PermissionSetGroupLink]:
        """Return the group memberships of the given Permission Sets."""
        logger.info("Fetching permission set groups for %d permission sets", len(permission_set_ids))
        if not permission_set_ids:
            return []

        query = generate_query(
            PERMISSION_SET_GROUP_COMPONENT_FIELDS,
            PERMISSION_SET_GROUP_COMPONENT,
            [in_clause("PermissionSetId", permission_set_ids)],
        )
        return [PermissionSetGroupLink.from_record(record) for record in self.client.query(query)]

    def find_assignments(self, group_ids: list[str], permission_set_ids: list[str]) -> list[Assignment]:
        """Return assignments of the given groups or Permission Sets."""
        predicates = []
        if group_ids:
            predicates.append(in_clause("PermissionSetGroupId", group_ids))
        if permission_set_ids:
            predicates.append(in_clause("PermissionSetId", permission_set_ids))
        if not predicates:
            return []

        query = generate_query(
            PERMISSION_SET_ASSIGNMENT_FIELDS,
            PERMISSION_SET_ASSIGNMENT,
            WHERE_OR.join(predicates),
        )
        return [Assignment.from_record(record) for record in self.client.query(query)]
