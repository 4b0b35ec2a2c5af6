"""Constants for CSV export."""

from __future__ import annotations

from objperms.constants.salesforce import OBJECT_PERMISSION_FLAGS

CSV_COLUMNS: tuple[str, ...] = ("id", "username", *OBJECT_PERMISSION_FLAGS)
CSV_TEMP_PREFIX: str = ".csv_tmp_"
CSV_TEMP_SUFFIX: str = ".csv"

CSV_TRUE: str = "true"
CSV_FALSE: str = "false"
