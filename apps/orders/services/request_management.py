"""Request management service - create and read swipe requests."""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Q, QuerySet

from apps.accounts.models import User
from apps.accounts.services import ensure_not_banned
from apps.common.exceptions import InvalidInputError
from apps.common.storage import translate_storage_errors
from apps.posts.models import Post
from apps.posts.services import reserve_slot, PostNotFoundError, NotPostOwnerError
from ..models import SwipeRequest, RequestStatus
from ..signals import EventType, RequestEvent, emit_request_event
from .exceptions import (
    RequestNotFoundError,
    OwnPostRequestError,
    ShareRequiredError,
)

logger = logging.getLogger(__name__)


def has_shared(user: User) -> bool:
    """True once the user has completed at least one exchange as a seller."""
    return SwipeRequest.objects.filter(
        seller=user,
        status=RequestStatus.COMPLETED,
    ).exists()


@translate_storage_errors
@transaction.atomic
def create_request(
    *,
    buyer: User,
    post_id: UUID,
    items_text: str,
    instructions: str = '',
    est_total: Optional[Decimal] = None
) -> SwipeRequest:
    """
    File a request against an open post, reserving one swipe.

    Args:
        buyer: User asking for food
        post_id: UUID of the post
        items_text: What the buyer wants ordered
        instructions: Extra instructions for the seller
        est_total: Buyer's estimate of the order value

    Returns:
        Created SwipeRequest (status requested)

    Raises:
        InvalidInputError: If items_text is blank or est_total negative
        BannedUserError: If buyer is banned
        ShareRequiredError: If the share-first rule is on and buyer never shared
        PostNotFoundError: If post doesn't exist
        OwnPostRequestError: If buyer is the post's seller
        PostUnavailableError: If post is closed or full
    """
    items_text = (items_text or '').strip()
    if not items_text:
        raise InvalidInputError("Tell the seller what to order")

    if est_total is not None and est_total < 0:
        raise InvalidInputError("Estimated total cannot be negative")

    ensure_not_banned(buyer)

    if settings.REQUIRE_SHARE_BEFORE_REQUEST and not has_shared(buyer):
        raise ShareRequiredError()

    try:
        seller_id = Post.objects.values_list('seller_id', flat=True).get(id=post_id)
    except (Post.DoesNotExist, ValidationError, ValueError):
        raise PostNotFoundError(f"Post {post_id} not found")

    if seller_id == buyer.id:
        raise OwnPostRequestError()

    post = reserve_slot(post_id=post_id)

    swipe_request = SwipeRequest.objects.create(
        post=post,
        buyer=buyer,
        seller_id=seller_id,
        status=RequestStatus.REQUESTED,
        items_text=items_text,
        instructions=(instructions or '').strip(),
        est_total=est_total,
    )

    event = RequestEvent(
        event_type=EventType.INSERT,
        request_id=str(swipe_request.id),
        record=swipe_request.as_record(),
        actor_id=str(buyer.id),
    )
    transaction.on_commit(lambda: emit_request_event(SwipeRequest, event))

    logger.info(
        "Request %s created by %s on post %s (%s left)",
        swipe_request.id, buyer.id, post.id, post.capacity_remaining
    )
    return swipe_request


def get_request_for_user(*, request_id: UUID, user: User) -> SwipeRequest:
    """
    Retrieve a request visible to the user.

    Parties see their own requests; admins see all.

    Raises:
        RequestNotFoundError: If it doesn't exist or isn't visible
    """
    try:
        swipe_request = (
            SwipeRequest.objects
            .select_related('post', 'buyer', 'seller', 'cancelled_by')
            .get(id=request_id)
        )
    except (SwipeRequest.DoesNotExist, ValidationError, ValueError):
        raise RequestNotFoundError(f"Request {request_id} not found")

    if not (swipe_request.is_party(user) or user.is_admin):
        raise RequestNotFoundError(f"Request {request_id} not found")

    return swipe_request


def get_user_requests(
    *,
    user: User,
    role: Optional[str] = None,
    status: Optional[str] = None
) -> QuerySet[SwipeRequest]:
    """
    Requests the user is a party to, most recently updated first.

    Args:
        user: The user
        role: 'buyer' or 'seller' to limit to one side
        status: Optional status filter
    """
    if role == 'buyer':
        queryset = SwipeRequest.objects.filter(buyer=user)
    elif role == 'seller':
        queryset = SwipeRequest.objects.filter(seller=user)
    else:
        queryset = SwipeRequest.objects.filter(Q(buyer=user) | Q(seller=user))

    if status:
        queryset = queryset.filter(status=status)

    return queryset.select_related('post', 'buyer', 'seller').order_by('-updated_at')


def get_post_requests(*, post_id: UUID, seller: User) -> QuerySet[SwipeRequest]:
    """
    All requests filed against one post, oldest first.

    Raises:
        PostNotFoundError: If post doesn't exist
        NotPostOwnerError: If user is not the post's seller
    """
    try:
        post = Post.objects.get(id=post_id)
    except (Post.DoesNotExist, ValidationError, ValueError):
        raise PostNotFoundError(f"Post {post_id} not found")

    if post.seller_id != seller.id:
        raise NotPostOwnerError()

    return (
        SwipeRequest.objects
        .filter(post=post)
        .select_related('buyer', 'seller')
        .order_by('created_at')
    )
