"""Domain errors raised by services and the auth gate.

Each error carries the HTTP status the API layer answers with; the
exception handlers in ``jobpool.api.app`` turn them into the response
envelope.
"""


class JobPoolError(Exception):
    """Base class for expected, request-scoped failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(JobPoolError):
    """A referenced entity does not exist."""

    status_code = 404


class ConflictError(JobPoolError):
    """The request collides with existing state (e.g. duplicate application)."""

    status_code = 400


class BadRequestError(JobPoolError):
    status_code = 400


class UnauthorizedError(JobPoolError):
    status_code = 401


class ForbiddenError(JobPoolError):
    status_code = 403
