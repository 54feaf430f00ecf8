"""Custom exceptions for the STT proxy service.

Every failure that can reach a client is a ``ProxyError``. The status code,
message and optional payload travel on the exception itself so the error
normalizer never has to probe for ad hoc attributes.
"""

from typing import Any

BACKEND_UNREACHABLE_MESSAGE = "Python backend is not reachable"


class ProxyError(Exception):
    """Base class for all client-visible failures."""

    status_code: int = 500
    label: str | None = None

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        payload: dict[str, Any] | None = None,
    ):
        if status_code is not None:
            self.status_code = status_code
        self.message = message
        self.payload = payload
        super().__init__(message)


class RequestValidationFailed(ProxyError):
    """Raised when inbound request input is missing or malformed."""

    status_code = 400
    label = "Bad Request"


class RecordingNotFoundError(ProxyError):
    """Raised when a requested recording does not exist."""

    status_code = 404
    label = "Not Found"

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f"Recording {filename} not found")


class StorageError(ProxyError):
    """Base class for local artifact storage failures."""


class StorageWriteError(StorageError):
    """Raised when writing an audio file to the storage directory fails."""

    def __init__(self, filename: str, cause: Exception | None = None):
        self.filename = filename
        self.cause = cause
        super().__init__("Failed to save audio file")


class StorageListError(StorageError):
    """Raised when the storage directory cannot be read."""

    def __init__(self, storage_dir: str, cause: Exception | None = None):
        self.storage_dir = storage_dir
        self.cause = cause
        super().__init__("Failed to list recordings")


class UpstreamError(ProxyError):
    """Base class for failures talking to the speech backend."""

    def __init__(
        self,
        operation: str,
        message: str,
        status_code: int | None = None,
        payload: dict[str, Any] | None = None,
    ):
        self.operation = operation
        super().__init__(message, status_code=status_code, payload=payload)


class UpstreamResponseError(UpstreamError):
    """The backend answered with a non-2xx status."""


class UpstreamUnreachableError(UpstreamError):
    """No response was received from the backend."""

    status_code = 503

    def __init__(self, operation: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(operation, BACKEND_UNREACHABLE_MESSAGE)


class UpstreamRequestError(UpstreamError):
    """The request could not be built or sent locally."""

    status_code = 500

    def __init__(self, operation: str, cause: Exception, message: str | None = None):
        self.cause = cause
        super().__init__(operation, message or str(cause) or "Internal server error")
