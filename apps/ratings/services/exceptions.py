"""Domain exceptions for ratings app."""

from apps.common.exceptions import ConflictError, InvalidInputError, InvalidStateError


class InvalidStarsError(InvalidInputError):
    default_message = 'Stars must be a whole number between 1 and 5.'


class RatingNotAllowedError(InvalidStateError):
    """Only completed exchanges can be rated."""
    default_message = 'Only completed exchanges can be rated.'


class DuplicateRatingError(ConflictError):
    """Each party rates an exchange once."""
    default_message = 'You have already rated this exchange.'
    retryable = False
