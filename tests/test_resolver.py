"""Tests for permission source resolution."""

from __future__ import annotations

import pytest
from conftest import FakeSalesforceClient, metadata_record

from objperms.exceptions import QueryError
from objperms.model import MetadataIndex, ObjectPermissionFlags
from objperms.permissions.resolver import PermissionResolver, find_object_permissions, unique_ids
from objperms.salesforce.metadata import MetadataFetcher

GROUP_QUERY = (
    "select Id,PermissionSetGroup.DeveloperName,PermissionSetGroup.MasterLabel,PermissionSetId,PermissionSetGroupId "
    "from PermissionSetGroupComponent where PermissionSetId in ('0PS1','0PS2')"
)
ASSIGNMENT_QUERY = (
    "select PermissionSetId,PermissionSetGroupId,AssigneeId from PermissionSetAssignment "
    "where PermissionSetGroupId in ('0PG1') OR PermissionSetId in ('0PS1','0PS2')"
)


def _resolver(client: FakeSalesforceClient) -> PermissionResolver:
    return PermissionResolver(client, MetadataFetcher(client))  # type: ignore[arg-type]


def _full_client(**overrides: object) -> FakeSalesforceClient:
    options: dict[str, object] = {
        "listings": {
            "Profile": [
                {"fullName": "Admin", "id": "00e1"},
                {"fullName": "ReadOnly", "id": "00e2"},
                {"fullName": "Other", "id": "00e3"},
            ],
            "PermissionSet": [
                {"fullName": "EditAccounts", "id": "0PS1"},
                {"fullName": "DeleteAccounts", "id": "0PS2"},
                {"fullName": "Unrelated", "id": "0PS3"},
            ],
        },
        "records": {
            ("Profile", "Admin"): metadata_record("Admin", "Account", allowRead=True, modifyAllRecords=True),
            ("Profile", "ReadOnly"): metadata_record("ReadOnly", "Account"),
            ("Profile", "Other"): metadata_record("Other", "Contact", allowRead=True),
            ("PermissionSet", "EditAccounts"): metadata_record("EditAccounts", "Account", allowEdit=True),
            ("PermissionSet", "DeleteAccounts"): metadata_record("DeleteAccounts", "Account", allowDelete=True),
            ("PermissionSet", "Unrelated"): metadata_record("Unrelated"),
        },
        "query_results": {
            "PermissionSetGroupComponent": [
                {"Id": "0PGC1", "PermissionSetId": "0PS2", "PermissionSetGroupId": "0PG1"},
            ],
            "PermissionSetAssignment": [
                {"AssigneeId": "005A", "PermissionSetId": "0PS1", "PermissionSetGroupId": None},
                {"AssigneeId": "005B", "PermissionSetId": "0PSX", "PermissionSetGroupId": "0PG1"},
            ],
        },
    }
    options.update(overrides)
    return FakeSalesforceClient(**options)  # type: ignore[arg-type]


def test_find_object_permissions_keeps_only_granting_entries() -> None:
    index = MetadataIndex()
    index.register("Profile", [{"fullName": "Admin", "id": "00e1"}, {"fullName": "None", "id": "00e2"}])
    records = [
        metadata_record("Admin", "Account", allowRead=True),
        metadata_record("None", "Account"),
        metadata_record("Elsewhere", "Contact", allowRead=True),
    ]

    sources = find_object_permissions(records, metadata_type="Profile", object_name="Account", index=index)

    assert [source.id for source in sources] == ["00e1"]
    assert sources[0].flags == ObjectPermissionFlags(allow_read=True)
    assert sources[0].full_name == "Admin"


def test_find_object_permissions_skips_unlisted_records() -> None:
    sources = find_object_permissions(
        [metadata_record("Ghost", "Account", allowRead=True)],
        metadata_type="Profile",
        object_name="Account",
        index=MetadataIndex(),
    )

    assert sources == []


def test_find_object_permissions_accepts_single_entry_mapping() -> None:
    index = MetadataIndex()
    index.register("PermissionSet", [{"fullName": "Solo", "id": "0PS9"}])
    record = {"fullName": "Solo", "objectPermissions": {"object": "Account", "viewAllRecords": "true"}}

    sources = find_object_permissions([record], metadata_type="PermissionSet", object_name="Account", index=index)

    assert sources[0].flags.view_all_records


def test_resolve_builds_group_and_assignment_queries() -> None:
    client = _full_client()

    resolved = _resolver(client).resolve("Account")

    assert [source.id for source in resolved.profiles] == ["00e1"]
    assert [source.id for source in resolved.permission_sets] == ["0PS1", "0PS2"]
    assert client.queries == [GROUP_QUERY, ASSIGNMENT_QUERY]
    assert [group.permission_set_group_id for group in resolved.groups] == ["0PG1"]
    assert [assignment.assignee_id for assignment in resolved.assignments] == ["005A", "005B"]


def test_resolve_without_permission_sets_skips_queries() -> None:
    client = _full_client(
        listings={"Profile": [{"fullName": "Admin", "id": "00e1"}]},
        records={("Profile", "Admin"): metadata_record("Admin", "Account", allowRead=True)},
    )

    resolved = _resolver(client).resolve("Account")

    assert client.queries == []
    assert resolved.groups == ()
    assert resolved.assignments == ()
    assert len(resolved.profiles) == 1


def test_resolve_without_groups_queries_permission_set_assignments_only() -> None:
    client = _full_client(query_results={"PermissionSetGroupComponent": []})

    _resolver(client).resolve("Account")

    assert client.queries[-1] == (
        "select PermissionSetId,PermissionSetGroupId,AssigneeId from PermissionSetAssignment "
        "where PermissionSetId in ('0PS1','0PS2')"
    )


@pytest.mark.parametrize("failing", ["PermissionSetGroupComponent", "PermissionSetAssignment"])
def test_resolve_aborts_on_query_failure(failing: str) -> None:
    client = _full_client(failing_queries=[failing])

    with pytest.raises(QueryError):
        _resolver(client).resolve("Account")


def test_resolve_tolerates_metadata_read_failures() -> None:
    client = _full_client(failing_reads=["EditAccounts"])

    resolved = _resolver(client).resolve("Account")

    assert [source.id for source in resolved.permission_sets] == ["0PS2"]


def test_unique_ids_drops_blanks_and_duplicates() -> None:
    assert unique_ids(["b", None, "a", "", "b"]) == ["b", "a"]
