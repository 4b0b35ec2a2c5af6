"""Shared utility helpers."""

from __future__ import annotations

from .concurrency import SettledResults, gather_settled

__all__ = ["SettledResults", "gather_settled"]
