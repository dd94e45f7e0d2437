"""Tests for request change -> notification mapping."""

import pytest
from datetime import datetime, timezone

from django.test import override_settings

from apps.notifications.mapping import (
    Notification,
    estimate_wait_minutes,
    local_hour,
    map_notification,
)


def make_record(status, **extra):
    record = {
        'id': 'req-1',
        'buyer_id': 'buyer-1',
        'seller_id': 'seller-1',
        'status': status,
        'cancelled_by': None,
        'cancel_reason': None,
    }
    record.update(extra)
    return record


# 11:00, 08:00 and 20:00 in New York (EST, UTC-5)
LUNCH = datetime(2024, 1, 15, 16, 0, tzinfo=timezone.utc)
BREAKFAST = datetime(2024, 1, 15, 13, 0, tzinfo=timezone.utc)
EVENING = datetime(2024, 1, 16, 1, 0, tzinfo=timezone.utc)


class TestWaitEstimate:

    @pytest.mark.parametrize('hour,minutes', [
        (7, 5), (9, 5), (10, 10), (12, 10), (13, 5), (16, 5), (17, 3), (6, 3), (0, 3), (23, 3),
    ])
    def test_wait_windows(self, hour, minutes):
        assert estimate_wait_minutes(hour) == minutes

    def test_local_hour_uses_configured_zone(self):
        assert local_hour(LUNCH) == 11

        with override_settings(NOTIFICATION_TIME_ZONE='UTC'):
            assert local_hour(LUNCH) == 16


class TestInsert:

    def test_new_request_notifies_seller(self):
        notification = map_notification('INSERT', make_record('requested'))

        assert notification == Notification(
            recipient_id='seller-1',
            title='New swipe request!',
            body='Someone wants you to place an order for them.',
            request_id='req-1',
        )

    def test_insert_in_other_status(self):
        assert map_notification('INSERT', make_record('accepted')) is None


class TestUpdate:

    def test_accepted_notifies_buyer(self):
        notification = map_notification('UPDATE', make_record('accepted'), make_record('requested'))

        assert notification.recipient_id == 'buyer-1'
        assert notification.title == 'Your request was accepted!'

    @pytest.mark.parametrize('now,minutes', [(LUNCH, 10), (BREAKFAST, 5), (EVENING, 3)])
    def test_ordered_includes_wait_estimate(self, now, minutes):
        notification = map_notification('UPDATE', make_record('ordered'), make_record('accepted'), now=now)

        assert notification.recipient_id == 'buyer-1'
        assert notification.title == 'Your order has been placed!'
        assert f'about {minutes} min' in notification.body

    def test_picked_up(self):
        notification = map_notification('UPDATE', make_record('picked_up'), make_record('ordered'))

        assert notification.title == 'Your order is ready for pickup!'

    def test_same_status_is_silent(self):
        old = make_record('picked_up')
        new = make_record('picked_up', buyer_completed=True)

        assert map_notification('UPDATE', new, old) is None

    @pytest.mark.parametrize('status', ['completed', 'disputed', 'requested'])
    def test_statuses_without_notification(self, status):
        assert map_notification('UPDATE', make_record(status), make_record('picked_up')) is None

    def test_cancelled_by_buyer_notifies_seller(self):
        record = make_record('cancelled', cancelled_by='buyer-1', cancel_reason='Not hungry')
        notification = map_notification('UPDATE', record, make_record('requested'))

        assert notification.recipient_id == 'seller-1'
        assert notification.title == 'A request was cancelled'
        assert notification.body.endswith('Reason: Not hungry')

    def test_cancelled_by_seller_notifies_buyer(self):
        record = make_record('cancelled', cancelled_by='seller-1')
        notification = map_notification('UPDATE', record, make_record('accepted'))

        assert notification.recipient_id == 'buyer-1'
        assert notification.title == 'Your request was cancelled'
        assert 'Reason' not in notification.body

    def test_delete_is_ignored(self):
        assert map_notification('DELETE', make_record('requested')) is None

    def test_as_dict(self):
        notification = map_notification('INSERT', make_record('requested'))

        assert notification.as_dict()['recipient_id'] == 'seller-1'
