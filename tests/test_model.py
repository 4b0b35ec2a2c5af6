"""Tests for domain entities."""

from __future__ import annotations

import pytest

from objperms.constants.salesforce import OBJECT_PERMISSION_FLAGS
from objperms.model import (
    NO_ACCESS,
    Assignment,
    MetadataIndex,
    ObjectPermissionFlags,
    PermissionSetGroupLink,
    User,
    is_metadata_true,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("true", True),
        ("True", True),
        (" true ", True),
        (True, True),
        ("false", False),
        (False, False),
        ("yes", False),
        (None, False),
        (1, False),
    ],
)
def test_is_metadata_true(value: object, expected: bool) -> None:
    assert is_metadata_true(value) is expected


def test_flags_from_metadata_normalizes_strings() -> None:
    flags = ObjectPermissionFlags.from_metadata({"object": "Account", "allowRead": "true", "allowEdit": "false"})

    assert flags == ObjectPermissionFlags(allow_read=True)
    assert flags.any_access()
    assert not ObjectPermissionFlags.from_metadata({"object": "Account"}).any_access()


def test_flags_as_dict_uses_api_order() -> None:
    flags = ObjectPermissionFlags(allow_create=True, view_all_records=True)

    assert list(flags.as_dict()) == list(OBJECT_PERMISSION_FLAGS)
    assert flags.as_dict()["allowCreate"] is True
    assert flags.as_dict()["viewAllRecords"] is True
    assert flags.as_dict()["allowRead"] is False


def test_flags_merge_is_or() -> None:
    read = ObjectPermissionFlags(allow_read=True)
    edit = ObjectPermissionFlags(allow_read=False, allow_edit=True)

    assert read | edit == ObjectPermissionFlags(allow_read=True, allow_edit=True)
    assert read | NO_ACCESS == read
    assert read | read == read


def test_group_link_from_record_reads_nested_group() -> None:
    link = PermissionSetGroupLink.from_record(
        {
            "Id": "0PSG1",
            "PermissionSetId": "0PS1",
            "PermissionSetGroupId": "0PG1",
            "PermissionSetGroup": {"DeveloperName": "Sales_Ops", "MasterLabel": "Sales Ops"},
        }
    )

    assert link.permission_set_group_id == "0PG1"
    assert link.group_developer_name == "Sales_Ops"
    assert link.group_label == "Sales Ops"


def test_assignment_from_record_discriminates_group() -> None:
    direct = Assignment.from_record({"AssigneeId": "005A", "PermissionSetId": "0PS1", "PermissionSetGroupId": None})
    grouped = Assignment.from_record({"AssigneeId": "005A", "PermissionSetId": "0PS9", "PermissionSetGroupId": "0PG1"})

    assert not direct.is_group
    assert grouped.is_group


def test_user_from_record() -> None:
    user = User.from_record({"Id": "005A", "Username": "a@example.com", "ProfileId": ""})

    assert user == User(id="005A", username="a@example.com", profile_id=None)


def test_metadata_index_registers_ids_per_type() -> None:
    index = MetadataIndex()
    index.register("Profile", [{"fullName": "Admin", "id": "00e1"}])
    index.register("PermissionSet", [{"fullName": "Admin", "id": "0PS1"}])

    assert index.id_for("Profile", "Admin") == "00e1"
    assert index.id_for("PermissionSet", "Admin") == "0PS1"
    assert index.id_for("Profile", "Missing") is None
    assert index.count("Profile") == 1
