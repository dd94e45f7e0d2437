"""Domain exceptions for posts app."""

from apps.common.exceptions import (
    AuthorizationError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
)


class PostNotFoundError(NotFoundError):
    """Post does not exist."""
    default_message = 'Post not found.'


class PostUnavailableError(InvalidStateError):
    """Post is closed or has no capacity left."""
    default_message = 'This post has no swipes available.'


class NotPostOwnerError(AuthorizationError):
    """Only the seller who created the post may manage it."""
    default_message = 'Only the seller of this post can do that.'


class InvalidCapacityError(InvalidInputError):
    """Capacity must be a positive whole number."""
    default_message = 'Capacity must be a positive whole number.'


class CapacityInvariantError(InvalidStateError):
    """Releasing would push remaining capacity above the total."""
    default_message = 'Post capacity is already fully available.'
