"""Core data models for objperms."""

from .entities import (
    NO_ACCESS,
    AggregatedUserPermission,
    Assignment,
    MetadataIndex,
    ObjectPermissionFlags,
    PermissionSetGroupLink,
    PermissionSource,
    ResolvedPermissions,
    User,
    is_metadata_true,
)

__all__ = [
    "NO_ACCESS",
    "AggregatedUserPermission",
    "Assignment",
    "MetadataIndex",
    "ObjectPermissionFlags",
    "PermissionSetGroupLink",
    "PermissionSource",
    "ResolvedPermissions",
    "User",
    "is_metadata_true",
]
