"""
Capacity allocation service.

A post's ``capacity_remaining`` is only ever changed here, and only with
single conditional ``UPDATE`` statements built from ``F()`` expressions.
The condition is evaluated by the database against the current row, so two
buyers racing for the last swipe cannot both succeed, and a release can
never push the counter above ``capacity_total``.

Both functions are meant to run inside the caller's transaction so that the
capacity change commits or rolls back together with the request change that
caused it.
"""

import logging
from uuid import UUID

from django.db.models import F
from django.utils import timezone

from ..models import Post, PostStatus
from .exceptions import (
    PostNotFoundError,
    PostUnavailableError,
    CapacityInvariantError,
)

logger = logging.getLogger(__name__)


def reserve_slot(*, post_id: UUID) -> Post:
    """
    Take one unit of capacity from an open post.

    Decrement-with-floor-check: the row only changes when the post is open
    and has at least one unit left. When the last unit is taken the post is
    closed.

    Args:
        post_id: UUID of the post

    Returns:
        Post instance reflecting the new capacity

    Raises:
        PostNotFoundError: If post doesn't exist
        PostUnavailableError: If post is closed or full
    """
    now = timezone.now()
    updated = (
        Post.objects
        .filter(id=post_id, status=PostStatus.OPEN, capacity_remaining__gt=0)
        .update(capacity_remaining=F('capacity_remaining') - 1, updated_at=now)
    )

    if not updated:
        if not Post.objects.filter(id=post_id).exists():
            raise PostNotFoundError(f"Post {post_id} not found")
        raise PostUnavailableError()

    # Close once exhausted
    Post.objects.filter(
        id=post_id,
        status=PostStatus.OPEN,
        capacity_remaining=0,
    ).update(status=PostStatus.CLOSED, updated_at=now)

    post = Post.objects.get(id=post_id)
    logger.debug("Reserved slot on post %s (%s left)", post_id, post.capacity_remaining)
    return post


def release_slot(*, post_id: UUID) -> Post:
    """
    Give one unit of capacity back to a post.

    A post that was closed because it ran out of capacity is reopened; a post
    the seller closed stays closed.

    Args:
        post_id: UUID of the post

    Returns:
        Post instance reflecting the new capacity

    Raises:
        PostNotFoundError: If post doesn't exist
        CapacityInvariantError: If capacity is already at its total
    """
    now = timezone.now()
    updated = (
        Post.objects
        .filter(id=post_id, capacity_remaining__lt=F('capacity_total'))
        .update(capacity_remaining=F('capacity_remaining') + 1, updated_at=now)
    )

    if not updated:
        if not Post.objects.filter(id=post_id).exists():
            raise PostNotFoundError(f"Post {post_id} not found")
        logger.error("Release on post %s with no reserved capacity", post_id)
        raise CapacityInvariantError()

    Post.objects.filter(
        id=post_id,
        status=PostStatus.CLOSED,
        closed_by_seller=False,
        capacity_remaining__gt=0,
    ).update(status=PostStatus.OPEN, updated_at=now)

    post = Post.objects.get(id=post_id)
    logger.debug("Released slot on post %s (%s left)", post_id, post.capacity_remaining)
    return post
