"""
Service layer tests for accounts app.

- Badge tiers
- Profile counters (completions, cancellations)
- Rating average recomputation
- Leaderboard and ban checks
"""

import pytest
from decimal import Decimal
from uuid import uuid4

from apps.accounts.badges import get_earned_badges, get_top_badge, get_next_badge
from apps.accounts.models import User, RolePreference
from apps.accounts.services import (
    get_profile,
    ensure_not_banned,
    record_completion,
    record_cancellation,
    refresh_rating_average,
    get_leaderboard,
)
from apps.accounts.services.exceptions import UserNotFoundError, BannedUserError
from apps.ratings.models import Rating


# ============================================================================
# BADGE TESTS
# ============================================================================

class TestBadges:

    def test_no_badges_before_first_exchange(self):
        assert get_earned_badges(0) == []
        assert get_top_badge(0) is None
        assert get_next_badge(0).id == 'first'

    def test_thresholds_are_inclusive(self):
        assert [b.id for b in get_earned_badges(5)] == ['first', 'helper']
        assert get_top_badge(5).id == 'helper'
        assert get_next_badge(5).id == 'regular'

    def test_no_next_badge_after_last_tier(self):
        assert get_top_badge(120).id == 'legend'
        assert get_next_badge(50) is None


# ============================================================================
# PROFILE COUNTER TESTS
# ============================================================================

@pytest.mark.django_db
class TestProfileCounters:

    def test_get_profile(self, buyer):
        assert get_profile(user_id=buyer.id) == buyer

    def test_get_profile_unknown(self, db):
        with pytest.raises(UserNotFoundError):
            get_profile(user_id=uuid4())

    def test_record_completion_counts_both_parties(self, buyer, seller):
        record_completion(buyer_id=buyer.id, seller_id=seller.id)

        buyer.refresh_from_db()
        seller.refresh_from_db()
        assert buyer.completed_count == 1
        assert seller.completed_count == 1

    def test_record_cancellation_counts_only_caller(self, buyer, seller):
        record_cancellation(user_id=buyer.id)

        buyer.refresh_from_db()
        seller.refresh_from_db()
        assert buyer.cancel_count == 1
        assert seller.cancel_count == 0

    def test_ensure_not_banned(self, buyer):
        ensure_not_banned(buyer)

        buyer.is_banned = True
        with pytest.raises(BannedUserError):
            ensure_not_banned(buyer)


@pytest.mark.django_db
class TestRatingAverage:

    def test_average_without_ratings_is_zero(self, seller):
        user = refresh_rating_average(user_id=seller.id)

        assert user.rating_avg == Decimal('0.00')

    def test_average_is_rounded_to_two_places(self, completed_request, buyer, seller):
        Rating.objects.create(request=completed_request, rater=buyer, ratee=seller, stars=5)
        other_buyer = User.objects.create_user(email='other@example.com', password='TestPass123!')
        Rating.objects.create(request=completed_request, rater=other_buyer, ratee=seller, stars=4)
        third = User.objects.create_user(email='third@example.com', password='TestPass123!')
        Rating.objects.create(request=completed_request, rater=third, ratee=seller, stars=4)

        user = refresh_rating_average(user_id=seller.id)

        assert user.rating_avg == Decimal('4.33')

    def test_unknown_user(self, db):
        with pytest.raises(UserNotFoundError):
            refresh_rating_average(user_id=uuid4())


@pytest.mark.django_db
class TestLeaderboard:

    def test_orders_by_completed_count(self, db):
        top = User.objects.create_user(
            email='top@example.com', password='x', role_preference=RolePreference.SELLER, completed_count=7
        )
        second = User.objects.create_user(
            email='second@example.com', password='x', role_preference=RolePreference.SELLER, completed_count=3
        )
        User.objects.create_user(
            email='new@example.com', password='x', role_preference=RolePreference.SELLER
        )
        User.objects.create_user(
            email='buyer2@example.com', password='x', completed_count=10
        )

        assert list(get_leaderboard()) == [top, second]

    def test_banned_sellers_excluded(self, db):
        User.objects.create_user(
            email='banned@example.com',
            password='x',
            role_preference=RolePreference.SELLER,
            completed_count=4,
            is_banned=True,
        )

        assert list(get_leaderboard()) == []

    def test_limit(self, db):
        for i in range(4):
            User.objects.create_user(
                email=f'seller{i}@example.com',
                password='x',
                role_preference=RolePreference.SELLER,
                completed_count=i + 1,
            )

        assert len(get_leaderboard(limit=2)) == 2
