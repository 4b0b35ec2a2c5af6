"""SOQL query string assembly."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from objperms.constants.salesforce import WHERE_AND


def quote_string(value: str) -> str:
    """Wrap a value in single quotes. Values are not escaped."""
    return f"'{value}'"


def quote_strings(values: Iterable[str]) -> list[str]:
    """Single-quote every value."""
    return [quote_string(value) for value in values]


def in_clause(field: str, values: Iterable[str]) -> str:
    """Render ``field in ('a','b')``."""
    return f"{field} in ({','.join(quote_strings(values))})"


def generate_query(
    fields: Sequence[str],
    object_name: str,
    where: Sequence[str] | str | None = None,
    order_by: str | None = None,
    limit: int | None = None,
) -> str:
    """Build a SOQL query.

    A sequence of ``where`` predicates is joined with ``AND``; a string is used
    verbatim, so callers can pre-join predicates with ``OR``.
    """
    parts = ["select", ",".join(fields), f"from {object_name}"]

    if isinstance(where, str):
        if where:
            parts.append(f"where {where}")
    elif where:
        parts.append(f"where {WHERE_AND.join(where)}")

    if order_by:
        parts.append(f"order by {order_by}")

    if limit:
        parts.append(f"limit {limit}")

    return " ".join(parts)
