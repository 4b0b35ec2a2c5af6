"""CSV export of aggregated user permissions."""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Sequence
from pathlib import Path

from objperms.constants.reporting import CSV_COLUMNS, CSV_FALSE, CSV_TEMP_PREFIX, CSV_TEMP_SUFFIX, CSV_TRUE
from objperms.exceptions import OutputExistsError
from objperms.io import write_text_atomic
from objperms.model import AggregatedUserPermission

logger = logging.getLogger(__name__)


def ensure_writable(path: Path, *, force: bool) -> None:
    """Raise OutputExistsError if ``path`` exists and ``force`` is not set."""
    if path.exists() and not force:
        raise OutputExistsError(path)


def write_user_permissions_csv(path: Path, rows: Sequence[AggregatedUserPermission], *, force: bool = False) -> int:
    """Write the rows to ``path`` and return how many were written."""
    ensure_writable(path, force=force)
    logger.info("Writing %d users to %s", len(rows), path)
    write_text_atomic(
        path=path,
        content=render_csv_string(rows),
        temp_prefix=CSV_TEMP_PREFIX,
        temp_suffix=CSV_TEMP_SUFFIX,
        newline="",
    )
    return len(rows)


def render_csv_string(rows: Sequence[AggregatedUserPermission]) -> str:
    """Render rows as a CSV string (useful for testing)."""
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(CSV_COLUMNS)
    for row in rows:
        writer.writerow((row.id, row.username, *(_render_bool(flag) for flag in row.flags.as_tuple())))
    return buf.getvalue()


def _render_bool(value: bool) -> str:
    return CSV_TRUE if value else CSV_FALSE
