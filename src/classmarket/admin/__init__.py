"""Admin - Class management for admins."""

from classmarket.admin.exceptions import AdminError, PermissionDeniedError
from classmarket.admin.models import AdminClassRow
from classmarket.admin.service import ClassAdmin, require_admin
from classmarket.config import CloseMode

__all__ = [
    "AdminClassRow",
    "AdminError",
    "ClassAdmin",
    "CloseMode",
    "PermissionDeniedError",
    "require_admin",
]
