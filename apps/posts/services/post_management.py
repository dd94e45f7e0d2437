"""Post management service - create, read and close swipe offers."""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.accounts.services import ensure_not_banned
from apps.common.exceptions import InvalidInputError
from apps.common.storage import translate_storage_errors
from ..models import Post, PostStatus
from .exceptions import (
    PostNotFoundError,
    NotPostOwnerError,
    InvalidCapacityError,
)

logger = logging.getLogger(__name__)


@translate_storage_errors
@transaction.atomic
def create_post(
    *,
    seller: User,
    capacity_total: int,
    location: str = '',
    notes: str = '',
    max_value_hint: Optional[Decimal] = None
) -> Post:
    """
    Publish a new swipe offer.

    Args:
        seller: User offering swipes
        capacity_total: Number of swipes offered (positive integer)
        location: Where the seller will order/pick up
        notes: Free-form notes for buyers
        max_value_hint: Suggested maximum order value

    Returns:
        Created Post instance (open, fully available)

    Raises:
        InvalidCapacityError: If capacity is not a positive integer
        InvalidInputError: If max_value_hint is negative
        BannedUserError: If seller is banned
    """
    if isinstance(capacity_total, bool) or not isinstance(capacity_total, int) or capacity_total < 1:
        raise InvalidCapacityError()

    if max_value_hint is not None and max_value_hint < 0:
        raise InvalidInputError("Maximum value hint cannot be negative")

    ensure_not_banned(seller)

    post = Post.objects.create(
        seller=seller,
        status=PostStatus.OPEN,
        capacity_total=capacity_total,
        capacity_remaining=capacity_total,
        location=location.strip(),
        notes=notes.strip(),
        max_value_hint=max_value_hint,
    )

    logger.info("Post %s created by %s with %s swipes", post.id, seller.id, capacity_total)
    return post


def get_post_by_id(*, post_id: UUID) -> Post:
    """
    Retrieve a post by ID.

    Raises:
        PostNotFoundError: If post doesn't exist
    """
    try:
        return Post.objects.select_related('seller').get(id=post_id)
    except (Post.DoesNotExist, ValidationError, ValueError):
        raise PostNotFoundError(f"Post {post_id} not found")


def list_open_posts() -> QuerySet[Post]:
    """Open posts, newest first."""
    return (
        Post.objects
        .filter(status=PostStatus.OPEN)
        .select_related('seller')
        .order_by('-created_at')
    )


def get_user_posts(*, user: User) -> QuerySet[Post]:
    """All posts created by a user, newest first."""
    return (
        Post.objects
        .filter(seller=user)
        .select_related('seller')
        .order_by('-created_at')
    )


@translate_storage_errors
@transaction.atomic
def close_post(*, post_id: UUID, seller: User) -> Post:
    """
    Close a post so it accepts no new requests.

    Existing requests keep the capacity they already reserved.

    Raises:
        PostNotFoundError: If post doesn't exist
        NotPostOwnerError: If user is not the post's seller
    """
    try:
        post = Post.objects.select_for_update().get(id=post_id)
    except (Post.DoesNotExist, ValidationError, ValueError):
        raise PostNotFoundError(f"Post {post_id} not found")

    if post.seller_id != seller.id:
        raise NotPostOwnerError()

    post.status = PostStatus.CLOSED
    post.closed_by_seller = True
    post.updated_at = timezone.now()
    post.save(update_fields=['status', 'closed_by_seller', 'updated_at'])

    logger.info("Post %s closed by seller", post.id)
    return post
