"""Shared type aliases for objperms."""

from .common import JsonObject, JsonScalar, JsonValue
from .salesforce import (
    AssignmentRecord,
    MetadataListEntry,
    ObjectPermissionEntry,
    PermissionSetGroupComponentRecord,
    UserRecord,
)

__all__ = [
    "AssignmentRecord",
    "JsonObject",
    "JsonScalar",
    "JsonValue",
    "MetadataListEntry",
    "ObjectPermissionEntry",
    "PermissionSetGroupComponentRecord",
    "UserRecord",
]
