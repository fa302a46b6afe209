"""Enrollment - Enroll students in classes."""

from classmarket.config import CounterMode
from classmarket.enrollment.exceptions import (
    AuthenticationRequiredError,
    ClassClosedError,
    ClassFullError,
    EnrollmentError,
)
from classmarket.enrollment.models import EnrollmentResult
from classmarket.enrollment.service import EnrollmentService

__all__ = [
    "AuthenticationRequiredError",
    "ClassClosedError",
    "ClassFullError",
    "CounterMode",
    "EnrollmentError",
    "EnrollmentResult",
    "EnrollmentService",
]
