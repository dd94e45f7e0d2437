"""Services for ratings business logic."""

from .rating_management import (
    submit_rating,
    get_ratings_for_user,
    get_ratings_for_request,
)

from .exceptions import (
    InvalidStarsError,
    RatingNotAllowedError,
    DuplicateRatingError,
)

__all__ = [
    # Services
    'submit_rating',
    'get_ratings_for_user',
    'get_ratings_for_request',
    # Exceptions
    'InvalidStarsError',
    'RatingNotAllowedError',
    'DuplicateRatingError',
]
