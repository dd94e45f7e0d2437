"""Services for disputes business logic."""

from .dispute_management import (
    open_dispute,
    resolve_dispute,
    get_dispute_for_request,
    get_dispute_by_id,
    list_disputes,
)

from .exceptions import (
    DisputeNotFoundError,
    DisputeWindowClosedError,
    DuplicateDisputeError,
    DisputeAlreadyResolvedError,
    AdminRequiredError,
)

__all__ = [
    # Services
    'open_dispute',
    'resolve_dispute',
    'get_dispute_for_request',
    'get_dispute_by_id',
    'list_disputes',
    # Exceptions
    'DisputeNotFoundError',
    'DisputeWindowClosedError',
    'DuplicateDisputeError',
    'DisputeAlreadyResolvedError',
    'AdminRequiredError',
]
