"""Fold every permission source into one row per user."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass

from objperms.model import (
    NO_ACCESS,
    AggregatedUserPermission,
    Assignment,
    ObjectPermissionFlags,
    PermissionSetGroupLink,
    PermissionSource,
    ResolvedPermissions,
    User,
)


@dataclass(frozen=True)
class PermissionIndices:
    """Lookup tables used while merging."""

    profiles: dict[str, ObjectPermissionFlags]
    permission_sets: dict[str, ObjectPermissionFlags]
    groups: dict[str, list[PermissionSetGroupLink]]
    assignments: dict[str, list[Assignment]]

    @classmethod
    def build(cls, resolved: ResolvedPermissions) -> PermissionIndices:
        groups: dict[str, list[PermissionSetGroupLink]] = defaultdict(list)
        for link in resolved.groups:
            groups[link.permission_set_group_id].append(link)

        assignments: dict[str, list[Assignment]] = defaultdict(list)
        for assignment in resolved.assignments:
            assignments[assignment.assignee_id].append(assignment)

        return cls(
            profiles=_flags_by_id(resolved.profiles),
            permission_sets=_flags_by_id(resolved.permission_sets),
            groups=dict(groups),
            assignments=dict(assignments),
        )


def _flags_by_id(sources: Iterable[PermissionSource]) -> dict[str, ObjectPermissionFlags]:
    flags: dict[str, ObjectPermissionFlags] = {}
    for source in sources:
        flags[source.id] = flags.get(source.id, NO_ACCESS) | source.flags
    return flags


def user_flags(user: User, indices: PermissionIndices) -> ObjectPermissionFlags:
    """Return the OR of the user's profile and every assigned Permission Set."""
    flags = NO_ACCESS
    if user.profile_id:
        flags |= indices.profiles.get(user.profile_id, NO_ACCESS)

    for assignment in indices.assignments.get(user.id, []):
        if assignment.is_group:
            for link in indices.groups.get(assignment.permission_set_group_id or "", []):
                flags |= indices.permission_sets.get(link.permission_set_id, NO_ACCESS)
        elif assignment.permission_set_id:
            flags |= indices.permission_sets.get(assignment.permission_set_id, NO_ACCESS)

    return flags


def aggregate_user_permissions(
    resolved: ResolvedPermissions,
    users: Iterable[User],
) -> list[AggregatedUserPermission]:
    """Return one row per distinct user id, in first-seen order.

    Users whose sources grant nothing still get a row with every flag false.
    """
    indices = PermissionIndices.build(resolved)
    rows: dict[str, AggregatedUserPermission] = {}
    for user in users:
        flags = user_flags(user, indices)
        existing = rows.get(user.id)
        if existing is not None:
            flags = existing.flags | flags
        rows[user.id] = AggregatedUserPermission(id=user.id, username=user.username, flags=flags)
    return list(rows.values())
