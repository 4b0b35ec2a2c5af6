"""Permission resolution, per-user aggregation and export."""

from .aggregator import aggregate_user_permissions
from .resolver import PermissionResolver

__all__ = ["PermissionResolver", "aggregate_user_permissions"]
