"""Services for accounts business logic."""

from .exceptions import (
    UserNotFoundError,
    BannedUserError,
)
from .profile_stats import (
    get_profile,
    ensure_not_banned,
    record_completion,
    record_cancellation,
    refresh_rating_average,
    get_leaderboard,
)

__all__ = [
    # Exceptions
    'UserNotFoundError',
    'BannedUserError',
    # Services
    'get_profile',
    'ensure_not_banned',
    'record_completion',
    'record_cancellation',
    'refresh_rating_average',
    'get_leaderboard',
]
