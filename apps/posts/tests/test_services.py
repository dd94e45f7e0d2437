"""
Service layer tests for posts app.

- Post management (create, read, close)
- Capacity allocation (reserve, release, auto close/reopen)
"""

import pytest
from decimal import Decimal
from uuid import uuid4

from apps.common.exceptions import InvalidInputError
from apps.posts.models import Post, PostStatus
from apps.posts.services import (
    create_post,
    get_post_by_id,
    list_open_posts,
    get_user_posts,
    close_post,
    reserve_slot,
    release_slot,
)
from apps.posts.services.exceptions import (
    PostNotFoundError,
    PostUnavailableError,
    NotPostOwnerError,
    InvalidCapacityError,
    CapacityInvariantError,
)
from apps.accounts.services.exceptions import BannedUserError


# ============================================================================
# POST MANAGEMENT TESTS
# ============================================================================

@pytest.mark.django_db
class TestCreatePost:

    def test_create_post_success(self, seller):
        post = create_post(
            seller=seller,
            capacity_total=3,
            location='  North Dining Hall ',
            notes='Until 1pm',
            max_value_hint=Decimal('12.50'),
        )

        assert post.status == PostStatus.OPEN
        assert post.capacity_total == 3
        assert post.capacity_remaining == 3
        assert post.location == 'North Dining Hall'
        assert post.closed_by_seller is False

    @pytest.mark.parametrize('capacity', [0, -1, 2.5, '3', True])
    def test_invalid_capacity(self, seller, capacity):
        with pytest.raises(InvalidCapacityError):
            create_post(seller=seller, capacity_total=capacity)

        assert not Post.objects.exists()

    def test_negative_value_hint(self, seller):
        with pytest.raises(InvalidInputError):
            create_post(seller=seller, capacity_total=1, max_value_hint=Decimal('-1'))

    def test_banned_seller(self, seller):
        seller.is_banned = True
        seller.save()

        with pytest.raises(BannedUserError):
            create_post(seller=seller, capacity_total=1)


@pytest.mark.django_db
class TestReadPosts:

    def test_get_post_by_id(self, post):
        assert get_post_by_id(post_id=post.id) == post

    def test_get_unknown_post(self, db):
        with pytest.raises(PostNotFoundError):
            get_post_by_id(post_id=uuid4())

    def test_open_posts_exclude_closed(self, post, single_post, seller):
        close_post(post_id=single_post.id, seller=seller)

        assert list(list_open_posts()) == [post]

    def test_user_posts(self, post, single_post, seller, buyer):
        assert set(get_user_posts(user=seller)) == {post, single_post}
        assert list(get_user_posts(user=buyer)) == []


@pytest.mark.django_db
class TestClosePost:

    def test_close_by_owner(self, post, seller):
        closed = close_post(post_id=post.id, seller=seller)

        assert closed.status == PostStatus.CLOSED
        assert closed.closed_by_seller is True

    def test_close_by_other_user(self, post, buyer):
        with pytest.raises(NotPostOwnerError):
            close_post(post_id=post.id, seller=buyer)

        post.refresh_from_db()
        assert post.status == PostStatus.OPEN

    def test_close_unknown_post(self, seller):
        with pytest.raises(PostNotFoundError):
            close_post(post_id=uuid4(), seller=seller)


# ============================================================================
# CAPACITY TESTS
# ============================================================================

@pytest.mark.django_db
class TestCapacity:

    def test_reserve_decrements(self, post):
        updated = reserve_slot(post_id=post.id)

        assert updated.capacity_remaining == 1
        assert updated.status == PostStatus.OPEN

    def test_last_slot_closes_post(self, single_post):
        updated = reserve_slot(post_id=single_post.id)

        assert updated.capacity_remaining == 0
        assert updated.status == PostStatus.CLOSED
        assert updated.closed_by_seller is False

    def test_reserve_on_full_post(self, single_post):
        reserve_slot(post_id=single_post.id)

        with pytest.raises(PostUnavailableError):
            reserve_slot(post_id=single_post.id)

        single_post.refresh_from_db()
        assert single_post.capacity_remaining == 0

    def test_reserve_on_closed_post(self, post, seller):
        close_post(post_id=post.id, seller=seller)

        with pytest.raises(PostUnavailableError):
            reserve_slot(post_id=post.id)

    def test_reserve_unknown_post(self, db):
        with pytest.raises(PostNotFoundError):
            reserve_slot(post_id=uuid4())

    def test_release_reopens_exhausted_post(self, single_post):
        reserve_slot(post_id=single_post.id)
        updated = release_slot(post_id=single_post.id)

        assert updated.capacity_remaining == 1
        assert updated.status == PostStatus.OPEN

    def test_release_keeps_seller_closed_post_closed(self, post, seller):
        reserve_slot(post_id=post.id)
        close_post(post_id=post.id, seller=seller)

        updated = release_slot(post_id=post.id)

        assert updated.capacity_remaining == 2
        assert updated.status == PostStatus.CLOSED

    def test_release_never_exceeds_total(self, post):
        with pytest.raises(CapacityInvariantError):
            release_slot(post_id=post.id)

        post.refresh_from_db()
        assert post.capacity_remaining == post.capacity_total

    def test_release_unknown_post(self, db):
        with pytest.raises(PostNotFoundError):
            release_slot(post_id=uuid4())
