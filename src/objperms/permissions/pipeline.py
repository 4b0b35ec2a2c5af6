"""End-to-end export of object permissions for one run."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path

from objperms.constants.branding import TOTAL_TIME_LABEL
from objperms.constants.config import DEFAULT_METADATA_MAX_WORKERS
from objperms.constants.salesforce import USER, USER_FIELDS, WHERE_OR
from objperms.model import MetadataIndex, ResolvedPermissions, User
from objperms.permissions.aggregator import aggregate_user_permissions
from objperms.permissions.resolver import PermissionResolver, unique_ids
from objperms.reporting import ensure_writable, write_user_permissions_csv
from objperms.salesforce.client import SalesforceClient
from objperms.salesforce.metadata import MetadataFetcher
from objperms.salesforce.query import generate_query, in_clause

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportResult:
    """Outcome of one export run."""

    object_name: str
    output_path: Path
    rows_written: int
    resolved: ResolvedPermissions
    elapsed_seconds: float


def build_user_query(resolved: ResolvedPermissions) -> str | None:
    """Build the user query, or None when no user can hold access.

    Users are selected by direct assignment OR by profile; the union may
    include users whose sources grant nothing on the object.
    """
    user_ids = unique_ids(assignment.assignee_id for assignment in resolved.assignments)
    profile_ids = unique_ids(profile.id for profile in resolved.profiles)
    logger.info(
        "Fetching users for %d profiles and %d direct assignments",
        len(profile_ids),
        len(user_ids),
    )

    predicates = []
    if user_ids:
        predicates.append(in_clause("Id", user_ids))
    if profile_ids:
        predicates.append(in_clause("ProfileId", profile_ids))
    if not predicates:
        return None
    return generate_query(USER_FIELDS, USER, WHERE_OR.join(predicates))


def fetch_users(client: SalesforceClient, resolved: ResolvedPermissions) -> list[User]:
    """Bulk query every user that may hold access through the resolved sources."""
    query = build_user_query(resolved)
    if query is None:
        return []

    users = [User.from_record(record) for record in client.bulk_query(USER, query)]
    logger.info("Found %d users", len(users))
    return users


def export_object_permissions(
    *,
    client: SalesforceClient,
    object_name: str,
    output_path: Path,
    force: bool = False,
    max_workers: int = DEFAULT_METADATA_MAX_WORKERS,
) -> ExportResult:
    """Resolve, aggregate and write per-user permissions for ``object_name``."""
    started_at = time.perf_counter()
    ensure_writable(output_path, force=force)

    fetcher = MetadataFetcher(client, max_workers=max_workers)
    resolver = PermissionResolver(client, fetcher)
    resolved = resolver.resolve(object_name, MetadataIndex())

    users = fetch_users(client, resolved)
    rows = aggregate_user_permissions(resolved, users)
    written = write_user_permissions_csv(output_path, rows, force=force)

    elapsed = time.perf_counter() - started_at
    logger.info("%s: %.3fs", TOTAL_TIME_LABEL, elapsed)
    return ExportResult(
        object_name=object_name,
        output_path=output_path,
        rows_written=written,
        resolved=resolved,
        elapsed_seconds=elapsed,
    )
