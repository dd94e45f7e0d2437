"""
Posts services - Business logic layer.

- Post management (create, read, close)
- Capacity allocation (atomic reserve/release)
"""

from .post_management import (
    create_post,
    get_post_by_id,
    list_open_posts,
    get_user_posts,
    close_post,
)

from .capacity import (
    reserve_slot,
    release_slot,
)

from .exceptions import (
    PostNotFoundError,
    PostUnavailableError,
    NotPostOwnerError,
    InvalidCapacityError,
    CapacityInvariantError,
)

__all__ = [
    # Post Management Services
    'create_post',
    'get_post_by_id',
    'list_open_posts',
    'get_user_posts',
    'close_post',
    # Capacity Services
    'reserve_slot',
    'release_slot',
    # Exceptions
    'PostNotFoundError',
    'PostUnavailableError',
    'NotPostOwnerError',
    'InvalidCapacityError',
    'CapacityInvariantError',
]
