"""Error taxonomy shared by the stores, the session engine and the HTTP layer.

Stores and engines raise these; ``liftoff.main`` maps each one to a status code.
"""


class LiftoffError(Exception):
    """Base class for every error the core reports to its callers."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(LiftoffError):
    """Input out of shape or range. Carries the offending field name."""

    status_code = 422

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")


class NotFound(LiftoffError):
    """Unknown id, or an id owned by somebody else. The two are indistinguishable."""

    status_code = 404


class Conflict(LiftoffError):
    status_code = 409


class InvalidArgument(LiftoffError):
    status_code = 400


class StorageError(LiftoffError):
    """Backend failure. Never retried inside the core."""

    status_code = 503
