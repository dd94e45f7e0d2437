import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, RolePreference
from apps.notifications.backends import LocMemBackend
from apps.posts.services import create_post
from apps.orders.services import (
    create_request,
    accept_request,
    mark_ordered,
    mark_picked_up,
    mark_completed,
)


@pytest.fixture(autouse=True)
def clear_outbox():
    """Start every test with an empty notification outbox."""
    LocMemBackend.outbox.clear()
    yield
    LocMemBackend.outbox.clear()


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def client_for():
    """Return a factory building a JWT-authenticated API client for a user."""
    def make_client(user):
        client = APIClient()
        refresh = RefreshToken.for_user(user)
        client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
        return client
    return make_client


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
def seller(db):
    """Create and return a user who shares swipes."""
    return User.objects.create_user(
        email='seller@example.com',
        password='TestPass123!',
        display_name='Swipe Seller',
        role_preference=RolePreference.SELLER,
    )


@pytest.fixture
def buyer(db):
    """Create and return a user who requests food."""
    return User.objects.create_user(
        email='buyer@example.com',
        password='TestPass123!',
        display_name='Hungry Buyer',
        role_preference=RolePreference.BUYER,
    )


@pytest.fixture
def outsider(db):
    """Create and return a user who is not part of any exchange."""
    return User.objects.create_user(
        email='outsider@example.com',
        password='TestPass123!',
        display_name='Outsider User',
    )


@pytest.fixture
def admin_user(db):
    """Create and return an admin."""
    return User.objects.create_superuser(
        email='admin@example.com',
        password='TestPass123!',
        display_name='Admin',
    )


@pytest.fixture
def seller_client(client_for, seller):
    return client_for(seller)


@pytest.fixture
def buyer_client(client_for, buyer):
    return client_for(buyer)


@pytest.fixture
def outsider_client(client_for, outsider):
    return client_for(outsider)


@pytest.fixture
def admin_client(client_for, admin_user):
    return client_for(admin_user)


# =============================================================================
# Posts and requests
# =============================================================================

@pytest.fixture
def post(seller):
    """Open post with two swipes."""
    return create_post(
        seller=seller,
        capacity_total=2,
        location='North Dining Hall',
        max_value_hint=Decimal('12.00'),
    )


@pytest.fixture
def single_post(seller):
    """Open post with a single swipe."""
    return create_post(seller=seller, capacity_total=1, location='Campus Co-op')


@pytest.fixture
def swipe_request(buyer, post):
    """Request in the requested state."""
    return create_request(
        buyer=buyer,
        post_id=post.id,
        items_text='Chicken wrap, iced tea',
        est_total=Decimal('9.50'),
    )


@pytest.fixture
def accepted_request(swipe_request, seller):
    return accept_request(request_id=swipe_request.id, caller=seller)


@pytest.fixture
def ordered_request(accepted_request, seller):
    return mark_ordered(request_id=accepted_request.id, caller=seller, order_id_text='A-102')


@pytest.fixture
def picked_up_request(ordered_request, buyer):
    return mark_picked_up(request_id=ordered_request.id, caller=buyer)


@pytest.fixture
def completed_request(picked_up_request, buyer, seller):
    """Request both parties confirmed."""
    mark_completed(request_id=picked_up_request.id, caller=buyer)
    return mark_completed(request_id=picked_up_request.id, caller=seller)
