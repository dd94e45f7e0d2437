"""Domain exceptions for orders app."""

from apps.common.exceptions import (
    AuthorizationError,
    ConflictError,
    InvalidInputError,
    NotFoundError,
)


class RequestNotFoundError(NotFoundError):
    """Request does not exist or the caller is not allowed to see it."""
    default_message = 'Request not found.'


class NotRequestPartyError(AuthorizationError):
    """Caller is neither the buyer nor the seller of the request."""
    default_message = 'You are not a party to this request.'


class OwnPostRequestError(InvalidInputError):
    """Sellers cannot request swipes from their own post."""
    default_message = 'You cannot request a swipe from your own post.'


class ShareRequiredError(AuthorizationError):
    """Buyer has to complete an exchange as a seller first."""
    default_message = 'Share a swipe before requesting one.'


class ConcurrentTransitionError(ConflictError):
    """Another transition changed the request after it was read."""
    default_message = 'This request was updated by someone else. Refresh and try again.'


class CancelReasonRequiredError(InvalidInputError):
    """Cancelling needs a non-blank reason."""
    default_message = 'A reason is required to cancel a request.'

