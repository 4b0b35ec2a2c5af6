"""Reporting package for objperms outputs."""

from __future__ import annotations

from .csv_writer import ensure_writable, render_csv_string, write_user_permissions_csv

__all__ = ["ensure_writable", "render_csv_string", "write_user_permissions_csv"]
