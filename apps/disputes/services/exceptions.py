"""Domain exceptions for disputes app."""

from apps.common.exceptions import (
    AuthorizationError,
    ConflictError,
    InvalidStateError,
    NotFoundError,
)


class DisputeNotFoundError(NotFoundError):
    """Dispute does not exist or is not visible to the caller."""
    default_message = 'Dispute not found.'


class DisputeWindowClosedError(InvalidStateError):
    """Completed exchanges can only be disputed for a limited time."""
    default_message = 'The dispute window for this exchange has closed.'


class DuplicateDisputeError(ConflictError):
    """A request can carry only one dispute."""
    default_message = 'A dispute is already open for this request.'
    retryable = False


class DisputeAlreadyResolvedError(InvalidStateError):
    default_message = 'This dispute has already been resolved.'


class AdminRequiredError(AuthorizationError):
    default_message = 'Only admins can resolve disputes.'
