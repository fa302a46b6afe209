"""Store - Data access facade for classes, users and enrollments."""

from classmarket.store.models import (
    ClassRecord,
    ClassStatus,
    Enrollment,
    Role,
    User,
)
from classmarket.store.store import MarketStore

__all__ = [
    "ClassRecord",
    "ClassStatus",
    "Enrollment",
    "MarketStore",
    "Role",
    "User",
]
