"""Domain entities for permission resolution and aggregation."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields

from objperms.constants.salesforce import METADATA_TRUE, OBJECT_PERMISSION_FLAGS
from objperms.types import AssignmentRecord, MetadataListEntry, PermissionSetGroupComponentRecord, UserRecord


def is_metadata_true(value: object) -> bool:
    """Return True for a Metadata API boolean that is set.

    The Metadata API returns flags as the strings ``"true"``/``"false"``;
    deserialized SOAP payloads may already carry native booleans.
    """
    if isinstance(value, bool):
        return value
    return isinstance(value, str) and value.strip().lower() == METADATA_TRUE


@dataclass(frozen=True)
class ObjectPermissionFlags:
    """The six object permission flags, normalized to booleans."""

    allow_create: bool = False
    allow_delete: bool = False
    allow_edit: bool = False
    allow_read: bool = False
    modify_all_records: bool = False
    view_all_records: bool = False

    @classmethod
    def from_metadata(cls, entry: Mapping[str, object]) -> ObjectPermissionFlags:
        """Build flags from a raw ``objectPermissions`` entry keyed by API names."""
        values = [is_metadata_true(entry.get(api_name)) for api_name in OBJECT_PERMISSION_FLAGS]
        return cls(*values)

    def any_access(self) -> bool:
        """Return True when at least one flag is set."""
        return any(self.as_tuple())

    def as_tuple(self) -> tuple[bool, ...]:
        """Return flags in canonical API order."""
        return tuple(getattr(self, item.name) for item in fields(self))

    def as_dict(self) -> dict[str, bool]:
        """Return flags keyed by their Salesforce API names."""
        return dict(zip(OBJECT_PERMISSION_FLAGS, self.as_tuple(), strict=True))

    def merge(self, other: ObjectPermissionFlags) -> ObjectPermissionFlags:
        """Return the flag-wise OR of both flag sets."""
        merged = [mine or theirs for mine, theirs in zip(self.as_tuple(), other.as_tuple(), strict=True)]
        return ObjectPermissionFlags(*merged)

    __or__ = merge


NO_ACCESS = ObjectPermissionFlags()


@dataclass(frozen=True)
class PermissionSource:
    """A Profile or Permission Set's permissions on the target object."""

    id: str
    full_name: str
    object_name: str
    flags: ObjectPermissionFlags


@dataclass(frozen=True)
class PermissionSetGroupLink:
    """Membership of a Permission Set in a Permission Set Group."""

    id: str
    permission_set_id: str
    permission_set_group_id: str
    group_developer_name: str | None = None
    group_label: str | None = None

    @classmethod
    def from_record(cls, record: PermissionSetGroupComponentRecord) -> PermissionSetGroupLink:
        """Build a link from a ``PermissionSetGroupComponent`` row."""
        group = record.get("PermissionSetGroup") or {}
        return cls(
            id=record.get("Id", ""),
            permission_set_id=record.get("PermissionSetId", ""),
            permission_set_group_id=record.get("PermissionSetGroupId", ""),
            group_developer_name=group.get("DeveloperName"),
            group_label=group.get("MasterLabel"),
        )


@dataclass(frozen=True)
class Assignment:
    """A Permission Set or Permission Set Group assigned to a user."""

    assignee_id: str
    permission_set_id: str | None = None
    permission_set_group_id: str | None = None

    @property
    def is_group(self) -> bool:
        """Whether the grant is mediated by a Permission Set Group."""
        return bool(self.permission_set_group_id)

    @classmethod
    def from_record(cls, record: AssignmentRecord) -> Assignment:
        """Build an assignment from a ``PermissionSetAssignment`` row."""
        return cls(
            assignee_id=record.get("AssigneeId", ""),
            permission_set_id=record.get("PermissionSetId") or None,
            permission_set_group_id=record.get("PermissionSetGroupId") or None,
        )


@dataclass(frozen=True)
class User:
    """A Salesforce user."""

    id: str
    username: str
    profile_id: str | None = None

    @classmethod
    def from_record(cls, record: UserRecord) -> User:
        return cls(
            id=record.get("Id", ""),
            username=record.get("Username", ""),
            profile_id=record.get("ProfileId") or None,
        )


@dataclass(frozen=True)
class AggregatedUserPermission:
    """One exportable row: a user and their consolidated flags."""

    id: str
    username: str
    flags: ObjectPermissionFlags = NO_ACCESS

    def to_row(self) -> dict[str, str | bool]:
        """Return the row keyed by CSV column name."""
        return {"id": self.id, "username": self.username, **self.flags.as_dict()}


@dataclass(frozen=True)
class ResolvedPermissions:
    """Permission sources for one object and how they reach users."""

    object_name: str
    profiles: tuple[PermissionSource, ...] = ()
    permission_sets: tuple[PermissionSource, ...] = ()
    groups: tuple[PermissionSetGroupLink, ...] = ()
    assignments: tuple[Assignment, ...] = ()


@dataclass
class MetadataIndex:
    """Record ids of listed metadata, by type then ``fullName``.

    ``readMetadata`` does not return record ids, so the ids captured while
    listing are looked up here when permission sources are built.
    """

    ids: dict[str, dict[str, str]] = field(default_factory=dict)

    def register(self, metadata_type: str, entries: Iterable[MetadataListEntry]) -> None:
        """Record ``fullName -> id`` for every listed entry of a type."""
        by_name = self.ids.setdefault(metadata_type, {})
        for entry in entries:
            by_name[entry["fullName"]] = entry["id"]

    def id_for(self, metadata_type: str, full_name: str) -> str | None:
        """Return the record id for a listed metadata name."""
        return self.ids.get(metadata_type, {}).get(full_name)

    def count(self, metadata_type: str) -> int:
        return len(self.ids.get(metadata_type, {}))
