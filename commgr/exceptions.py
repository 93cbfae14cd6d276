"""
Custom exceptions for commgr.

This module defines all custom exceptions used throughout the commgr package.
All exceptions inherit from CommgrError for easy catching of package-specific errors.
"""


class CommgrError(Exception):
    """
    Base exception for all commgr errors.

    All custom exceptions in this package inherit from this class,
    allowing callers to catch every commgr-specific error with a single
    except clause.

    Examples
    --------
    >>> try:
    ...     # some commgr operation
    ...     pass
    ... except CommgrError as e:
    ...     print(f"commgr error: {e}")
    """

    pass


class MissingCredentialError(CommgrError):
    """
    A required credential is empty after resolution.

    Raised before any network traffic happens. Fix the input and rerun.

    Attributes
    ----------
    field : str
        Name of the missing credential ("username", "password" or "token").

    Examples
    --------
    >>> raise MissingCredentialError("password")
    """

    def __init__(self, field: str):
        super().__init__(f"missing API {field}")
        self.field = field


class NetworkError(CommgrError):
    """
    Transport-level failure talking to the management API.

    Covers connection refused, DNS failures, timeouts and server-side
    (5xx) unavailability. Never retried automatically.

    Attributes
    ----------
    status_code : int, optional
        HTTP status code if a response was received.
    cancelled : bool
        True if the request was aborted through a cancellation signal.
    """

    cancelled = False

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class RequestCancelledError(NetworkError):
    """Request aborted before it completed."""

    cancelled = True

    def __init__(self, message: str = "request cancelled"):
        super().__init__(message)


class AuthError(CommgrError):
    """
    The management API rejected the supplied credentials.

    Attributes
    ----------
    status_code : int
        HTTP status code returned by the server (401 or 403).
    """

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class ProtocolError(CommgrError):
    """
    Response received but not decodable into a community list.

    Usually indicates a version or schema mismatch between this client
    and the management API.

    Attributes
    ----------
    status_code : int, optional
        HTTP status code of the offending response, if known.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class WriteError(CommgrError):
    """
    Writing to the output sink failed.

    Rows written before the failure have already been flushed and form
    a valid CSV prefix.
    """

    pass
