"""Custom exceptions for enrollment."""


class EnrollmentError(Exception):
    """Base exception for enrollment errors."""


class AuthenticationRequiredError(EnrollmentError):
    """The caller must sign in to enroll."""


class ClassClosedError(EnrollmentError):
    """The class no longer accepts enrollments."""


class ClassFullError(EnrollmentError):
    """The class has reached its capacity."""
