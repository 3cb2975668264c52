"""Domain errors raised by the directory, the relationship store and the engine.

Every failure that leaves the engine is one of the four kinds below. The
HTTP layer maps them to status codes in ``app.main``.
"""


class FriendsError(Exception):
    """Base exception for all friends-management errors."""

    status_code: int = 500

    def __init__(self, message: str, details: dict | None = None):
        """Initialize exception with message and optional details.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(FriendsError):
    """An email does not resolve to a registered account."""

    status_code = 404

    def __init__(self, message: str, email: str | None = None):
        super().__init__(message, details={"email": email} if email else None)
        self.email = email


class InvalidError(FriendsError):
    """Malformed input, or a mentioned/listed email with no account behind it."""

    status_code = 400

    def __init__(self, message: str, email: str | None = None):
        super().__init__(message, details={"email": email} if email else None)
        self.email = email


class ConflictError(FriendsError):
    """The requested edge already exists, or an existing block vetoes it.

    Attributes:
        kind: Relationship kind the conflict was detected on, if any
    """

    status_code = 409

    def __init__(self, message: str, kind: str | None = None):
        super().__init__(message, details={"kind": kind} if kind else None)
        self.kind = kind


class StorageFailure(FriendsError):
    """The database could not complete a read or write.

    The message is internal; callers only ever see an opaque failure.
    """

    status_code = 500
