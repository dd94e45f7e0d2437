"""
Error taxonomy shared by all exchange services.

Every service in the project raises one of the classes below (or an
app-specific subclass defined in the app's ``services/exceptions.py``).
Callers can tell authorization failures from conflicts from transient
storage problems by catching the base classes, or by reading ``kind``.

Exception Hierarchy:
    ExchangeServiceError (base)
    ├── AuthorizationError   caller is not the required party/role
    ├── InvalidStateError    action not valid from the current status
    ├── NotFoundError        record missing or not visible to the caller
    ├── ConflictError        concurrent update detected, refetch and retry
    ├── InvalidInputError    malformed input (stars, blank reason, ...)
    └── TransientError       storage/network failure, retry with backoff

Usage:
    from apps.common.exceptions import ConflictError

    try:
        accept_request(request_id=request_id, caller=user)
    except ConflictError:
        # someone else moved the request first
        ...
"""


class ExchangeServiceError(Exception):
    """
    Base exception for all exchange service errors.

    Attributes:
        kind: Stable machine-readable name of the error category.
        status_code: HTTP status used when the error reaches the API.
        retryable: Whether repeating the same call may succeed.
    """

    kind = 'error'
    status_code = 400
    retryable = False
    default_message = 'The operation could not be completed.'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)

    @property
    def message(self):
        return str(self)


class AuthorizationError(ExchangeServiceError):
    """Caller is not the party (or role) allowed to perform the action."""

    kind = 'authorization'
    status_code = 403
    default_message = 'You are not allowed to perform this action.'


class InvalidStateError(ExchangeServiceError):
    """
    Action is not valid from the record's current state.

    Usually caused by a stale client or a double submit. The client should
    refresh and re-evaluate which actions are available.
    """

    kind = 'invalid_state'
    status_code = 400
    default_message = 'This action is not available in the current state.'


class NotFoundError(ExchangeServiceError):
    """Referenced record does not exist or is not visible to the caller."""

    kind = 'not_found'
    status_code = 404
    default_message = 'Not found.'


class ConflictError(ExchangeServiceError):
    """
    Concurrent modification detected by an optimistic check.

    The caller may refetch the record and retry.
    """

    kind = 'conflict'
    status_code = 409
    retryable = True
    default_message = 'The record was changed by someone else. Refresh and try again.'


class InvalidInputError(ExchangeServiceError):
    """Malformed input, e.g. stars outside 1-5 or an empty reason."""

    kind = 'validation'
    status_code = 400
    default_message = 'Invalid input.'


class TransientError(ExchangeServiceError):
    """
    Storage or network failure.

    The message never carries driver details; those are logged where the
    failure is caught.
    """

    kind = 'transient'
    status_code = 503
    retryable = True
    default_message = 'The service is temporarily unavailable. Please try again.'
