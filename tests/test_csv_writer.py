"""Tests for CSV export."""

from __future__ import annotations

import csv
from pathlib import Path

import pytest

from objperms.exceptions import OutputExistsError
from objperms.model import AggregatedUserPermission, ObjectPermissionFlags
from objperms.reporting import ensure_writable, render_csv_string, write_user_permissions_csv

HEADER = "id,username,allowCreate,allowDelete,allowEdit,allowRead,modifyAllRecords,viewAllRecords"


def _rows() -> list[AggregatedUserPermission]:
    return [
        AggregatedUserPermission(
            id="005A",
            username="a@example.com",
            flags=ObjectPermissionFlags(allow_read=True, view_all_records=True),
        ),
        AggregatedUserPermission(id="005B", username="b@example.com"),
    ]


def test_render_csv_string_uses_lowercase_booleans() -> None:
    lines = render_csv_string(_rows()).splitlines()

    assert lines == [
        HEADER,
        "005A,a@example.com,false,false,false,true,false,true",
        "005B,b@example.com,false,false,false,false,false,false",
    ]


def test_render_csv_string_header_only_for_no_rows() -> None:
    assert render_csv_string([]).splitlines() == [HEADER]


def test_write_creates_parent_and_returns_count(tmp_path: Path) -> None:
    path = tmp_path / "out" / "account.csv"

    written = write_user_permissions_csv(path, _rows())

    assert written == 2
    with path.open(newline="", encoding="utf-8") as handle:
        records = list(csv.DictReader(handle))
    assert records[0]["allowRead"] == "true"
    assert records[1]["username"] == "b@example.com"
    assert not list(path.parent.glob(".csv_tmp_*"))


def test_write_refuses_existing_file_without_force(tmp_path: Path) -> None:
    path = tmp_path / "account.csv"
    path.write_text("keep me", encoding="utf-8")

    with pytest.raises(OutputExistsError, match="use --force to overwrite"):
        write_user_permissions_csv(path, _rows())

    assert path.read_text(encoding="utf-8") == "keep me"


def test_write_overwrites_with_force(tmp_path: Path) -> None:
    path = tmp_path / "account.csv"
    path.write_text("old", encoding="utf-8")

    write_user_permissions_csv(path, _rows(), force=True)

    assert path.read_text(encoding="utf-8").startswith(HEADER)


def test_ensure_writable_accepts_missing_path(tmp_path: Path) -> None:
    ensure_writable(tmp_path / "new.csv", force=False)
