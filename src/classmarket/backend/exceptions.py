"""Custom exceptions for backend access."""


class BackendError(Exception):
    """Base exception for backend errors."""


class RecordNotFoundError(BackendError):
    """No row matched the requested identifier."""


class DuplicateRecordError(BackendError):
    """Insert violated a uniqueness constraint."""


class BackendUnavailableError(BackendError):
    """Transient failure: network error or a 5xx from the backend."""


class BackendAuthError(BackendError):
    """The backend rejected the request credentials."""


class InvalidRecordError(BackendError):
    """A row came back in a shape the application can't read."""
