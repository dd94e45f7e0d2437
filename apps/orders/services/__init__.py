"""
Orders services - Business logic layer.

- Request management (create, read)
- Transitions (accept, decline, order, pick up, complete, cancel)
- Audit trail
"""

from .request_management import (
    create_request,
    get_request_for_user,
    get_user_requests,
    get_post_requests,
    has_shared,
)

from .transitions import (
    run_transition,
    TransitionOutcome,
    accept_request,
    decline_request,
    mark_ordered,
    mark_picked_up,
    mark_completed,
    cancel_request,
)

from .audit import (
    record_transition,
    record_rejected_attempt,
    get_audit_trail,
)

from .exceptions import (
    RequestNotFoundError,
    NotRequestPartyError,
    OwnPostRequestError,
    ShareRequiredError,
    ConcurrentTransitionError,
    CancelReasonRequiredError,
)

__all__ = [
    # Request Management Services
    'create_request',
    'get_request_for_user',
    'get_user_requests',
    'get_post_requests',
    'has_shared',
    # Transition Services
    'run_transition',
    'TransitionOutcome',
    'accept_request',
    'decline_request',
    'mark_ordered',
    'mark_picked_up',
    'mark_completed',
    'cancel_request',
    # Audit Services
    'record_transition',
    'record_rejected_attempt',
    'get_audit_trail',
    # Exceptions
    'RequestNotFoundError',
    'NotRequestPartyError',
    'OwnPostRequestError',
    'ShareRequiredError',
    'ConcurrentTransitionError',
    'CancelReasonRequiredError',
]
