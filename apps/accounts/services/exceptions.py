"""Domain-specific exceptions for accounts services."""

from apps.common.exceptions import AuthorizationError, NotFoundError


class UserNotFoundError(NotFoundError):
    """Raised when user does not exist."""
    default_message = 'User not found.'


class BannedUserError(AuthorizationError):
    """Raised when a banned user tries to take part in an exchange."""
    default_message = 'Your account is suspended from the exchange.'
