"""EnrollmentService - Enroll students in classes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from classmarket.backend import BackendError, DuplicateRecordError
from classmarket.config import CounterMode
from classmarket.enrollment.exceptions import (
    AuthenticationRequiredError,
    ClassClosedError,
    ClassFullError,
)
from classmarket.enrollment.models import EnrollmentResult

if TYPE_CHECKING:
    from classmarket.store import ClassRecord, Enrollment, MarketStore, User

logger = logging.getLogger(__name__)


class EnrollmentService:
    """Enrolls the caller in a class and keeps the class counter in step.

    Enrolling is two writes: insert the enrollment row, then bump the class's
    ``students_total``. The second write is independent; if it fails the
    enrollment still stands.
    """

    def __init__(self, store: MarketStore, counter_mode: CounterMode = CounterMode.ATOMIC) -> None:
        """Initialize the service.

        Args:
            store: Data access facade.
            counter_mode: ATOMIC asks the backend to increment the counter.
                CLIENT writes back the cached count plus one; two sessions
                enrolling at once can then undercount.
        """
        self.store = store
        self.counter_mode = counter_mode

    def enroll(
        self,
        principal: User | None,
        class_id: str,
        cached: ClassRecord | None = None,
    ) -> EnrollmentResult:
        """Enroll the principal in a class.

        Enrolling twice is a no-op: the existing row is returned with
        ``created=False`` and the counter is left alone.

        Args:
            principal: The caller; None if anonymous.
            class_id: The class to join.
            cached: The class record the caller is looking at. Only used as
                the base for the counter in CLIENT mode; status and capacity
                are always checked on a fresh read.

        Returns:
            EnrollmentResult describing what happened.

        Raises:
            AuthenticationRequiredError: If principal is None (nothing is written)
            RecordNotFoundError: If the class doesn't exist
            ClassClosedError: If the class is closed
            ClassFullError: If the class is at capacity
            BackendError: If the enrollment insert fails
        """
        if principal is None:
            raise AuthenticationRequiredError("Sign in to enroll in a class")

        record = self.store.get_class(class_id)
        counter_base = cached if cached is not None and cached.id == class_id else record

        existing = self.store.find_enrollment(principal.id, class_id)
        if existing is not None:
            logger.info("User %s already enrolled in class %s", principal.id, class_id)
            return self._already_enrolled(existing, record)

        if record.is_closed:
            raise ClassClosedError(f"Class '{class_id}' is closed")
        if record.is_full:
            raise ClassFullError(
                f"Class '{class_id}' is full ({record.students_total}/{record.students_max})"
            )

        try:
            enrollment = self.store.create_enrollment(principal.id, class_id)
        except DuplicateRecordError:
            # Lost a race with another request from the same user
            existing = self.store.find_enrollment(principal.id, class_id)
            if existing is None:
                raise
            return self._already_enrolled(existing, record)
        except BackendError as e:
            logger.error("Enrollment of %s in class %s failed: %s", principal.id, class_id, e)
            raise

        try:
            students_total = self._bump_counter(counter_base)
        except BackendError as e:
            logger.error(
                "Enrolled %s but counter update for %s failed: %s", principal.id, class_id, e
            )
            return EnrollmentResult(
                enrollment=enrollment,
                created=True,
                students_total=record.students_total,
                counter_updated=False,
            )

        return EnrollmentResult(enrollment=enrollment, created=True, students_total=students_total)

    def _bump_counter(self, record: ClassRecord) -> int:
        if self.counter_mode == CounterMode.CLIENT:
            new_total = record.students_total + 1
            self.store.set_students_total(record.id, new_total)
            return new_total
        return self.store.increment_students_total(record.id)

    @staticmethod
    def _already_enrolled(existing: Enrollment, record: ClassRecord) -> EnrollmentResult:
        return EnrollmentResult(
            enrollment=existing,
            created=False,
            students_total=record.students_total,
        )
