"""Typed shapes of raw Salesforce API payloads, as cached on disk."""

from __future__ import annotations

from typing import NotRequired, TypedDict


class MetadataListEntry(TypedDict):
    """One row of a Metadata API ``listMetadata`` response."""

    fullName: str
    id: str
    type: NotRequired[str]


class ObjectPermissionEntry(TypedDict, total=False):
    """One ``objectPermissions`` entry of a Profile or Permission Set."""

    object: str
    allowCreate: str | bool
    allowDelete: str | bool
    allowEdit: str | bool
    allowRead: str | bool
    modifyAllRecords: str | bool
    viewAllRecords: str | bool


class _GroupReference(TypedDict, total=False):
    DeveloperName: str
    MasterLabel: str


class PermissionSetGroupComponentRecord(TypedDict, total=False):
    """A ``PermissionSetGroupComponent`` SOQL row."""

    Id: str
    PermissionSetId: str
    PermissionSetGroupId: str
    PermissionSetGroup: _GroupReference | None


class AssignmentRecord(TypedDict, total=False):
    """A ``PermissionSetAssignment`` SOQL row."""

    AssigneeId: str
    PermissionSetId: str | None
    PermissionSetGroupId: str | None


class UserRecord(TypedDict, total=False):
    """A ``User`` bulk query row."""

    Id: str
    Username: str
    ProfileId: str | None
