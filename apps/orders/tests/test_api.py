import pytest
from uuid import uuid4
from django.urls import reverse
from rest_framework import status
from apps.orders.models import SwipeRequest, RequestStatus


# =============================================================================
# Request List / Create Tests
# =============================================================================

@pytest.mark.django_db
class TestRequestCreate:
    """Tests for POST /api/requests/"""

    def test_create_request(self, buyer_client, post, buyer):
        response = buyer_client.post(reverse('orders:request-list'), {
            'post': str(post.id),
            'items_text': 'Pad thai',
            'est_total': '9.25',
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == RequestStatus.REQUESTED
        assert response.data['buyer']['id'] == str(buyer.id)
        assert response.data['available_actions'] == ['cancel']
        assert SwipeRequest.objects.filter(buyer=buyer).count() == 1

    def test_missing_items(self, buyer_client, post):
        response = buyer_client.post(reverse('orders:request-list'), {'post': str(post.id)})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'items_text' in response.data

    def test_own_post(self, seller_client, post):
        response = seller_client.post(reverse('orders:request-list'), {
            'post': str(post.id),
            'items_text': 'Pad thai',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['kind'] == 'validation'

    def test_unknown_post(self, buyer_client):
        response = buyer_client.post(reverse('orders:request-list'), {
            'post': str(uuid4()),
            'items_text': 'Pad thai',
        })

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert set(response.data) == {'error', 'kind', 'retryable'}
        assert response.data['kind'] == 'not_found'
        assert response.data['retryable'] is False


@pytest.mark.django_db
class TestRequestList:
    """Tests for GET /api/requests/"""

    def test_list_own_requests(self, buyer_client, seller_client, outsider_client, swipe_request):
        assert buyer_client.get(reverse('orders:request-list')).data['count'] == 1
        assert seller_client.get(reverse('orders:request-list')).data['count'] == 1
        assert outsider_client.get(reverse('orders:request-list')).data['count'] == 0

    def test_filter_by_role(self, buyer_client, swipe_request):
        response = buyer_client.get(reverse('orders:request-list'), {'role': 'seller'})

        assert response.data['count'] == 0

    def test_invalid_status_filter(self, buyer_client):
        response = buyer_client.get(reverse('orders:request-list'), {'status': 'lost'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestRequestDetail:
    """Tests for GET /api/requests/{id}/"""

    def test_party_can_view(self, seller_client, swipe_request):
        response = seller_client.get(reverse('orders:request-detail', args=[swipe_request.id]))

        assert response.status_code == status.HTTP_200_OK
        assert set(response.data['available_actions']) == {'accept', 'decline', 'cancel'}

    def test_outsider_gets_404(self, outsider_client, swipe_request):
        response = outsider_client.get(reverse('orders:request-detail', args=[swipe_request.id]))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['kind'] == 'not_found'


# =============================================================================
# Lifecycle Action Tests
# =============================================================================

@pytest.mark.django_db
class TestLifecycleActions:

    def test_full_exchange_over_http(self, buyer_client, seller_client, swipe_request):
        request_id = swipe_request.id

        response = seller_client.post(reverse('orders:request-accept', args=[request_id]))
        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == RequestStatus.ACCEPTED

        response = seller_client.post(
            reverse('orders:request-mark-ordered', args=[request_id]),
            {'order_id_text': 'B-7'},
        )
        assert response.data['status'] == RequestStatus.ORDERED
        assert response.data['order_id_text'] == 'B-7'

        response = buyer_client.post(reverse('orders:request-mark-picked-up', args=[request_id]))
        assert response.data['status'] == RequestStatus.PICKED_UP

        response = buyer_client.post(reverse('orders:request-mark-completed', args=[request_id]))
        assert response.data['status'] == RequestStatus.PICKED_UP
        assert response.data['available_actions'] == ['open_dispute']

        response = seller_client.post(reverse('orders:request-mark-completed', args=[request_id]))
        assert response.data['status'] == RequestStatus.COMPLETED

        response = buyer_client.get(reverse('orders:request-audit', args=[request_id]))
        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 5
        assert response.data[0]['action'] == 'accept'

    def test_wrong_party_gets_403(self, buyer_client, swipe_request):
        response = buyer_client.post(reverse('orders:request-accept', args=[swipe_request.id]))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['kind'] == 'authorization'
        assert response.data['retryable'] is False
        assert 'error' in response.data

    def test_outsider_gets_403_on_action(self, outsider_client, swipe_request):
        response = outsider_client.post(reverse('orders:request-accept', args=[swipe_request.id]))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['error'] == 'You are not a party to this request.'

    def test_malformed_id_gets_404(self, seller_client):
        response = seller_client.post(reverse('orders:request-accept', args=['not-a-uuid']))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['kind'] == 'not_found'
        assert response.data['retryable'] is False

    def test_malformed_id_on_audit(self, buyer_client):
        response = buyer_client.get(reverse('orders:request-audit', args=['not-a-uuid']))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['kind'] == 'not_found'

    def test_invalid_state_gets_400(self, seller_client, swipe_request):
        response = seller_client.post(reverse('orders:request-mark-ordered', args=[swipe_request.id]))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['kind'] == 'invalid_state'

    def test_decline(self, seller_client, swipe_request, post):
        response = seller_client.post(reverse('orders:request-decline', args=[swipe_request.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == RequestStatus.CANCELLED
        post.refresh_from_db()
        assert post.capacity_remaining == 2

    def test_cancel_requires_reason(self, buyer_client, swipe_request):
        response = buyer_client.post(reverse('orders:request-cancel', args=[swipe_request.id]), {})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'reason' in response.data

    def test_cancel(self, buyer_client, swipe_request):
        response = buyer_client.post(
            reverse('orders:request-cancel', args=[swipe_request.id]),
            {'reason': 'Not hungry anymore'},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['cancel_reason'] == 'Not hungry anymore'
        assert response.data['available_actions'] == []

    def test_audit_hidden_from_outsider(self, outsider_client, swipe_request):
        response = outsider_client.get(reverse('orders:request-audit', args=[swipe_request.id]))

        assert response.status_code == status.HTTP_404_NOT_FOUND
