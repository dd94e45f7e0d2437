import pytest
from unittest import mock
from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from apps.notifications.backends import LocMemBackend


SECRET = 'test-webhook-secret'


def payload(event_type='UPDATE', table='requests', record=None, old_record=None):
    return {
        'type': event_type,
        'table': table,
        'schema': 'public',
        'record': record,
        'old_record': old_record,
    }


ACCEPTED = {'id': 'req-1', 'buyer_id': 'buyer-1', 'seller_id': 'seller-1', 'status': 'accepted'}
REQUESTED = dict(ACCEPTED, status='requested')


@pytest.mark.django_db
class TestRequestWebhook:
    """Tests for POST /api/notifications/webhook/"""

    def post(self, client, data, secret=SECRET):
        headers = {'HTTP_X_WEBHOOK_SECRET': secret} if secret is not None else {}
        return client.post(reverse('notifications:webhook'), data, format='json', **headers)

    def test_sends_notification(self, api_client):
        response = self.post(api_client, payload(record=ACCEPTED, old_record=REQUESTED))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'sent': True, 'recipient_id': 'buyer-1'}
        assert LocMemBackend.outbox[0].title == 'Your request was accepted!'

    def test_missing_secret_header(self, api_client):
        response = self.post(api_client, payload(record=ACCEPTED), secret=None)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data == {'error': 'Unauthorized'}
        assert LocMemBackend.outbox == []

    def test_wrong_secret(self, api_client):
        response = self.post(api_client, payload(record=ACCEPTED), secret='guess')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    @override_settings(WEBHOOK_SECRET='')
    def test_unconfigured_secret(self, api_client):
        response = self.post(api_client, payload(record=ACCEPTED))

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data == {'error': 'Missing server configuration'}

    def test_other_table_skipped(self, api_client):
        response = self.post(api_client, payload(table='posts', record={'id': 'p-1'}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'skipped': True, 'reason': 'Not a requests event'}

    def test_no_notification_skipped(self, api_client):
        response = self.post(api_client, payload(record=ACCEPTED, old_record=ACCEPTED))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['skipped'] is True

    def test_incomplete_record(self, api_client):
        response = self.post(api_client, payload(record={'id': 'req-1', 'status': 'accepted'}))

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_invalid_event_type(self, api_client):
        response = self.post(api_client, payload(event_type='TRUNCATE', record=ACCEPTED))

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_delivery_failure(self, api_client):
        with mock.patch('apps.notifications.views.deliver', side_effect=RuntimeError('push down')):
            response = self.post(api_client, payload(record=ACCEPTED, old_record=REQUESTED))

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data == {'error': 'Delivery failed'}
