"""Salesforce object, field and API constants."""

from __future__ import annotations

PROFILE: str = "Profile"
PERMISSION_SET: str = "PermissionSet"

OBJECT_PERMISSION_FLAGS: tuple[str, ...] = (
    "allowCreate",
    "allowDelete",
    "allowEdit",
    "allowRead",
    "modifyAllRecords",
    "viewAllRecords",
)
METADATA_TRUE: str = "true"

PERMISSION_SET_GROUP_COMPONENT: str = "PermissionSetGroupComponent"
PERMISSION_SET_GROUP_COMPONENT_FIELDS: tuple[str, ...] = (
    "Id",
    "PermissionSetGroup.DeveloperName",
    "PermissionSetGroup.MasterLabel",
    "PermissionSetId",
    "PermissionSetGroupId",
)

PERMISSION_SET_ASSIGNMENT: str = "PermissionSetAssignment"
PERMISSION_SET_ASSIGNMENT_FIELDS: tuple[str, ...] = (
    "PermissionSetId",
    "PermissionSetGroupId",
    "AssigneeId",
)

USER: str = "User"
USER_FIELDS: tuple[str, ...] = ("Id", "Username", "ProfileId")

WHERE_AND: str = " AND "
WHERE_OR: str = " OR "

DEFAULT_BULK_POLL_INTERVAL_SECONDS: float = 5.0
DEFAULT_BULK_POLL_TIMEOUT_SECONDS: float = 600.0

BULK_CONTENT_TYPE: str = "application/json; charset=UTF-8"
BULK_SESSION_HEADER: str = "X-SFDC-Session"
BULK_STATE_COMPLETED: str = "Completed"
BULK_STATE_FAILED: str = "Failed"
BULK_STATE_NOT_PROCESSED: str = "NotProcessed"
BULK_STATE_CLOSED: str = "Closed"
BULK_TERMINAL_FAILURE_STATES: frozenset[str] = frozenset({BULK_STATE_FAILED, BULK_STATE_NOT_PROCESSED})

RECORD_ATTRIBUTES_KEY: str = "attributes"
