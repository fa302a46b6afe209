"""ClassAdmin - Admin-only class operations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from classmarket.admin.exceptions import PermissionDeniedError
from classmarket.admin.models import AdminClassRow
from classmarket.backend import BackendError
from classmarket.catalog import format_capacity, format_period
from classmarket.config import CloseMode
from classmarket.store import ClassStatus

if TYPE_CHECKING:
    from datetime import tzinfo

    from classmarket.store import ClassRecord, MarketStore, User

logger = logging.getLogger(__name__)


def require_admin(principal: User | None, action: str) -> User:
    """Return the principal if it is an admin.

    Raises:
        PermissionDeniedError: If principal is None or not an admin
    """
    if principal is None or not principal.is_admin:
        who = principal.id if principal is not None else "anonymous"
        logger.warning("Denied %s for %s", action, who)
        raise PermissionDeniedError(f"Only admins can {action}")
    return principal


class ClassAdmin:
    """Admin operations on classes."""

    def __init__(
        self, store: MarketStore, tz: tzinfo, close_mode: CloseMode = CloseMode.STATUS
    ) -> None:
        """Initialize the admin service.

        Args:
            store: Data access facade.
            tz: Timezone for period labels.
            close_mode: STATUS marks the class closed. SENTINEL zeroes its
                capacity instead, for backends without a status column.
        """
        self.store = store
        self.tz = tz
        self.close_mode = close_mode

    def close_class(self, principal: User | None, class_id: str) -> ClassRecord:
        """Stop a class from accepting enrollments.

        In STATUS mode only the status changes and capacity is kept. In
        SENTINEL mode ``students_max`` is set to 0. Counters are never touched.

        Args:
            principal: The caller.
            class_id: The class to close.

        Returns:
            The refreshed class record.

        Raises:
            PermissionDeniedError: If the caller is not an admin (nothing is written)
            RecordNotFoundError: If the class doesn't exist
            BackendError: If the update fails
        """
        admin = require_admin(principal, "close a class")
        try:
            if self.close_mode == CloseMode.SENTINEL:
                record = self.store.set_students_max(class_id, 0)
            else:
                record = self.store.set_class_status(class_id, ClassStatus.CLOSED)
        except BackendError as e:
            logger.error("Closing class %s failed: %s", class_id, e)
            raise
        logger.info("Class %s closed by %s", class_id, admin.id)
        return record

    def list_classes(self, principal: User | None) -> list[AdminClassRow]:
        """List all classes for the admin class table.

        Raises:
            PermissionDeniedError: If the caller is not an admin
        """
        require_admin(principal, "list classes")
        return [
            AdminClassRow(
                id=c.id,
                title=c.title,
                lecturer=c.lecturer,
                capacity=format_capacity(c.students_total, c.students_max),
                period=format_period(c.start_date, c.end_date, self.tz),
                status=c.effective_status.value,
            )
            for c in self.store.list_classes()
        ]
