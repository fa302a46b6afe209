"""MarketStore - Data access facade over the backend."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import ValidationError

from classmarket.backend import Filter, InvalidRecordError, RecordNotFoundError, Table
from classmarket.store.models import ClassRecord, ClassStatus, Enrollment, Record, User

if TYPE_CHECKING:
    from classmarket.backend import Backend

logger = logging.getLogger("classmarket.store")

RELATED_CLASSES_LIMIT = 2

R = TypeVar("R", bound=Record)


def _parse(model: type[R], row: dict[str, Any]) -> R:
    try:
        return model.model_validate(row)
    except ValidationError as e:
        logger.error("Unreadable %s row %s: %s", model.__name__, row.get("id"), e)
        raise InvalidRecordError(f"Malformed {model.__name__} row '{row.get('id')}'") from e


def _parse_rows(model: type[R], rows: list[dict[str, Any]]) -> list[R]:
    """Parse rows for a listing, leaving out the ones that can't be read."""
    records = []
    for row in rows:
        try:
            records.append(_parse(model, row))
        except InvalidRecordError:
            continue
    return records


class MarketStore:
    """Read and write class, user and enrollment records.

    The only component the rest of the application uses to reach the backend.
    Backend exceptions propagate unchanged; "no row" for a lookup by id is
    reported as RecordNotFoundError.
    """

    def __init__(self, backend: Backend) -> None:
        """Initialize the store.

        Args:
            backend: Backend implementation serving the rows
        """
        self.backend = backend

    def close(self) -> None:
        """Close the underlying backend."""
        self.backend.close()

    # --- Users ---

    def get_principal(self, access_token: str | None) -> User | None:
        """Resolve the caller behind an access token.

        Args:
            access_token: Bearer token from the request, if any

        Returns:
            The caller's User profile, or None for anonymous callers and
            tokens without a matching profile
        """
        if not access_token:
            return None
        user_id = self.backend.get_auth_user_id(access_token)
        if user_id is None:
            return None
        try:
            return self.get_user(user_id)
        except RecordNotFoundError:
            logger.warning("Authenticated user %s has no profile row", user_id)
            return None

    def get_user(self, user_id: str) -> User:
        """Get a user by ID.

        Raises:
            RecordNotFoundError: If user doesn't exist
        """
        rows = self.backend.select(Table.USER, [Filter.eq("id", user_id)], limit=1)
        if not rows:
            raise RecordNotFoundError(f"User with id '{user_id}' not found")
        return _parse(User, rows[0])

    # --- Classes ---

    def get_class(self, class_id: str) -> ClassRecord:
        """Get a class by ID.

        Raises:
            RecordNotFoundError: If class doesn't exist
        """
        rows = self.backend.select(Table.CLASS, [Filter.eq("id", class_id)], limit=1)
        if not rows:
            raise RecordNotFoundError(f"Class with id '{class_id}' not found")
        return _parse(ClassRecord, rows[0])

    def list_classes(self) -> list[ClassRecord]:
        """List all classes, oldest first."""
        rows = self.backend.select(Table.CLASS, order_by="created_at")
        return _parse_rows(ClassRecord, rows)

    def list_related_classes(
        self, record: ClassRecord, limit: int = RELATED_CLASSES_LIMIT
    ) -> list[ClassRecord]:
        """List other classes taught by the same lecturer."""
        rows = self.backend.select(
            Table.CLASS,
            [Filter.eq("lecturer", record.lecturer), Filter.neq("id", record.id)],
            limit=limit,
        )
        return _parse_rows(ClassRecord, rows)

    def increment_students_total(self, class_id: str) -> int:
        """Add one to a class's enrollment counter on the backend.

        Returns:
            The new counter value
        """
        return self.backend.increment(Table.CLASS, class_id, "students_total")

    def set_students_total(self, class_id: str, value: int) -> ClassRecord:
        """Overwrite a class's enrollment counter."""
        return self._update_class(class_id, {"students_total": value})

    def set_students_max(self, class_id: str, value: int | None) -> ClassRecord:
        """Overwrite a class's capacity. None means unlimited."""
        return self._update_class(class_id, {"students_max": value})

    def set_class_status(self, class_id: str, status: ClassStatus) -> ClassRecord:
        """Open or close a class."""
        return self._update_class(class_id, {"status": status.value})

    def _update_class(self, class_id: str, values: dict[str, object]) -> ClassRecord:
        rows = self.backend.update(Table.CLASS, [Filter.eq("id", class_id)], values)
        if not rows:
            raise RecordNotFoundError(f"Class with id '{class_id}' not found")
        return _parse(ClassRecord, rows[0])

    # --- Enrollments ---

    def find_enrollment(self, student_id: str, class_id: str) -> Enrollment | None:
        """Get the enrollment for a (student, class) pair, if any."""
        rows = self.backend.select(
            Table.ENROLLMENT,
            [Filter.eq("student_id", student_id), Filter.eq("class_id", class_id)],
            limit=1,
        )
        return _parse(Enrollment, rows[0]) if rows else None

    def list_enrollments_for_student(self, student_id: str) -> list[Enrollment]:
        """List a student's enrollments, oldest first."""
        rows = self.backend.select(
            Table.ENROLLMENT,
            [Filter.eq("student_id", student_id)],
            order_by="enrolled_at",
        )
        return _parse_rows(Enrollment, rows)

    def create_enrollment(self, student_id: str, class_id: str) -> Enrollment:
        """Insert an enrollment row.

        Raises:
            DuplicateRecordError: If the student is already enrolled
        """
        row = self.backend.insert(
            Table.ENROLLMENT, {"student_id": student_id, "class_id": class_id}
        )
        logger.info("Enrolled student %s in class %s", student_id, class_id)
        return _parse(Enrollment, row)
