"""Branding constants for terminal output."""

from __future__ import annotations

BRAND_NAME: str = "objperms"
CLI_DESCRIPTION: str = (
    f"{BRAND_NAME}: export every user with access to a Salesforce object, "
    "and the object permissions they hold, to CSV"
)
TOTAL_TIME_LABEL: str = "Total time"
