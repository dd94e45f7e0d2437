"""
Profile statistics service.

Maintains the denormalized counters shown on user profiles and the
leaderboard. Counters are changed with ``F()`` expressions so concurrent
transitions never lose an increment; the rating average is recomputed under
a row lock like the aggregate ratings elsewhere in the project.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Avg, F
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.models import User, RolePreference
from .exceptions import UserNotFoundError, BannedUserError

logger = logging.getLogger(__name__)


def get_profile(*, user_id: UUID) -> User:
    """
    Retrieve a user profile by ID.

    Raises:
        UserNotFoundError: If the user doesn't exist or is inactive
    """
    try:
        return User.objects.get(id=user_id, is_active=True)
    except (User.DoesNotExist, ValidationError, ValueError):
        raise UserNotFoundError(f"User {user_id} not found")


def ensure_not_banned(user: User) -> None:
    """
    Raises:
        BannedUserError: If the user is banned from the exchange
    """
    if user.is_banned:
        raise BannedUserError()


def record_completion(*, buyer_id: UUID, seller_id: UUID) -> None:
    """
    Count one completed exchange for each party.

    Called exactly once per request, by the transition that moves it to
    ``completed``. Ratings never touch ``completed_count``.
    """
    User.objects.filter(id__in=[buyer_id, seller_id]).update(
        completed_count=F('completed_count') + 1,
        updated_at=timezone.now(),
    )


def record_cancellation(*, user_id: UUID) -> None:
    """Count a cancellation against the party who cancelled."""
    User.objects.filter(id=user_id).update(
        cancel_count=F('cancel_count') + 1,
        updated_at=timezone.now(),
    )


@transaction.atomic
def refresh_rating_average(*, user_id: UUID) -> User:
    """
    Recalculate and persist a user's rolling rating average.

    Uses select_for_update() so two ratings landing at the same time for the
    same ratee cannot overwrite each other's result.

    Returns:
        Updated User instance

    Raises:
        UserNotFoundError: If user doesn't exist
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(id=user_id)
        )
    except (User.DoesNotExist, ValidationError, ValueError):
        raise UserNotFoundError(f"User {user_id} not found")

    average = user.ratings_received.aggregate(avg=Avg('stars'))['avg']
    if average is None:
        user.rating_avg = Decimal('0.00')
    else:
        user.rating_avg = Decimal(str(average)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    user.save(update_fields=['rating_avg', 'updated_at'])

    logger.debug("Rating average for %s is now %s", user_id, user.rating_avg)
    return user


def get_leaderboard(*, limit: int = 5) -> QuerySet[User]:
    """
    Sellers ranked by completed exchanges.

    Args:
        limit: Number of profiles to return

    Returns:
        QuerySet of sellers with at least one completed exchange
    """
    return (
        User.objects
        .filter(
            role_preference=RolePreference.SELLER,
            completed_count__gt=0,
            is_active=True,
            is_banned=False,
        )
        .order_by('-completed_count', '-rating_avg')[:limit]
    )
