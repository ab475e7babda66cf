"""
Application-layer exceptions.

These exceptions are raised by use cases and core services and translated
to HTTP responses by the handlers registered in backend.main. The message
is user-facing for access, lookup and validation failures; upstream
failures carry a generic message and the detail goes to the logs.
"""


class ApplicationError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AccessDeniedError(ApplicationError):
    """Caller is not authenticated, not a pod member, or not the pod creator."""

    status_code = 403


class NotFoundError(ApplicationError):
    """Requested pod, invite, user or product does not exist (or is hidden)."""

    status_code = 404


class InvalidInputError(ApplicationError):
    """Expected, recoverable validation failure with an actionable message."""

    status_code = 400


class UpstreamServiceError(ApplicationError):
    """The store or a third-party service failed and there is no safe default."""

    status_code = 500
