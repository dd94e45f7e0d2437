"""Rating service - submit and list ratings between exchange parties."""

import logging
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.accounts.services import refresh_rating_average
from apps.common.storage import translate_storage_errors
from apps.orders.models import SwipeRequest, RequestStatus
from apps.orders.services import RequestNotFoundError, NotRequestPartyError, get_request_for_user
from ..models import Rating
from .exceptions import (
    InvalidStarsError,
    RatingNotAllowedError,
    DuplicateRatingError,
)

logger = logging.getLogger(__name__)


@translate_storage_errors
@transaction.atomic
def submit_rating(
    *,
    request_id: UUID,
    caller: User,
    stars: int,
    comment: str = ''
) -> Rating:
    """
    Rate the other party of a completed exchange.

    This operation:
    1. Validates the star count
    2. Checks the caller is a party and the exchange is completed
    3. Checks for a duplicate rating (request, rater)
    4. Creates the rating and recomputes the ratee's average atomically

    Args:
        request_id: UUID of the completed request
        caller: Buyer or seller of the request
        stars: 1-5
        comment: Optional comment

    Returns:
        Created Rating instance

    Raises:
        InvalidStarsError: If stars is not an integer in 1-5
        RequestNotFoundError: If request doesn't exist
        NotRequestPartyError: If caller is not a party
        RatingNotAllowedError: If request is not completed
        DuplicateRatingError: If caller already rated this request
    """
    if isinstance(stars, bool) or not isinstance(stars, int) or not (1 <= stars <= 5):
        raise InvalidStarsError()

    try:
        swipe_request = SwipeRequest.objects.get(id=request_id)
    except (SwipeRequest.DoesNotExist, ValidationError, ValueError):
        raise RequestNotFoundError(f"Request {request_id} not found")

    if not swipe_request.is_party(caller):
        raise NotRequestPartyError()

    if swipe_request.status != RequestStatus.COMPLETED:
        raise RatingNotAllowedError()

    if Rating.objects.filter(request=swipe_request, rater=caller).exists():
        raise DuplicateRatingError()

    try:
        with transaction.atomic():
            rating = Rating.objects.create(
                request=swipe_request,
                rater=caller,
                ratee_id=swipe_request.other_party_id(caller.id),
                stars=stars,
                comment=(comment or '').strip(),
            )
    except IntegrityError:
        # Unique constraint caught a concurrent duplicate
        raise DuplicateRatingError()

    refresh_rating_average(user_id=rating.ratee_id)

    logger.info("Rating %s: %s rated %s %s stars", rating.id, caller.id, rating.ratee_id, stars)
    return rating


def get_ratings_for_user(*, user_id: UUID) -> QuerySet[Rating]:
    """Ratings a user has received, newest first."""
    return (
        Rating.objects
        .filter(ratee_id=user_id)
        .select_related('rater')
        .order_by('-created_at')
    )


def get_ratings_for_request(*, request_id: UUID, user: User) -> QuerySet[Rating]:
    """
    Ratings left on one exchange.

    Raises:
        RequestNotFoundError: If the request isn't visible to the user
    """
    swipe_request = get_request_for_user(request_id=request_id, user=user)
    return (
        Rating.objects
        .filter(request=swipe_request)
        .select_related('rater', 'ratee')
        .order_by('created_at')
    )
