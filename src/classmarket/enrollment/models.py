"""Data models for enrollment."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from classmarket.store import Enrollment


@dataclass
class EnrollmentResult:
    """Outcome of an enroll call.

    Attributes:
        enrollment: The student's enrollment row.
        created: False when the student was already enrolled.
        students_total: The class's counter after the call, as far as known.
        counter_updated: False if the counter write failed after enrolling.
    """

    enrollment: Enrollment
    created: bool
    students_total: int
    counter_updated: bool = True
