"""Custom exceptions for admin operations."""


class AdminError(Exception):
    """Base exception for admin operation errors."""


class PermissionDeniedError(AdminError):
    """The caller is not an admin."""
