"""
Notification mapping.

Pure translation of a request row change into at most one notification.
The input is the same shape the webhook receives: an event type (INSERT or
UPDATE), the new row and, for updates, the previous row. Delivery is the
backend's concern.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from django.conf import settings
from django.utils import timezone


@dataclass(frozen=True)
class Notification:
    recipient_id: str
    title: str
    body: str
    request_id: Optional[str] = None

    def as_dict(self):
        return {
            'recipient_id': self.recipient_id,
            'title': self.title,
            'body': self.body,
            'request_id': self.request_id,
        }


# (start hour inclusive, end hour exclusive, minutes)
WAIT_WINDOWS = (
    (10, 13, 10),
    (7, 10, 5),
    (13, 17, 5),
)
DEFAULT_WAIT_MINUTES = 3


def estimate_wait_minutes(hour: int) -> int:
    """Expected dining hall wait for an order placed at ``hour`` local time."""
    for start, end, minutes in WAIT_WINDOWS:
        if start <= hour < end:
            return minutes
    return DEFAULT_WAIT_MINUTES


def local_hour(now: Optional[datetime] = None) -> int:
    """Hour of ``now`` (default: current time) in NOTIFICATION_TIME_ZONE."""
    now = now or timezone.now()
    if timezone.is_naive(now):
        now = timezone.make_aware(now, timezone.get_default_timezone())
    return now.astimezone(ZoneInfo(settings.NOTIFICATION_TIME_ZONE)).hour


def map_notification(
    event_type: str,
    record: dict,
    old_record: Optional[dict] = None,
    now: Optional[datetime] = None
) -> Optional[Notification]:
    """
    Map a request row change to a notification.

    Args:
        event_type: 'INSERT' or 'UPDATE' (anything else maps to None)
        record: New row, with at least id, status, buyer_id and seller_id
        old_record: Previous row for updates
        now: Time used for the wait estimate (default: current time)

    Returns:
        Notification, or None when the change needs no notification
    """
    status = record.get('status')
    request_id = record.get('id')

    if event_type == 'INSERT':
        if status == 'requested':
            return Notification(
                recipient_id=record['seller_id'],
                title='New swipe request!',
                body='Someone wants you to place an order for them.',
                request_id=request_id,
            )
        return None

    if event_type != 'UPDATE':
        return None

    # Same status means only a flag changed (first half of completion)
    if old_record is not None and old_record.get('status') == status:
        return None

    if status == 'accepted':
        return Notification(
            recipient_id=record['buyer_id'],
            title='Your request was accepted!',
            body='The sharer accepted your food request.',
            request_id=request_id,
        )

    if status == 'ordered':
        minutes = estimate_wait_minutes(local_hour(now))
        return Notification(
            recipient_id=record['buyer_id'],
            title='Your order has been placed!',
            body=f'The sharer placed your order. Estimated wait: about {minutes} min.',
            request_id=request_id,
        )

    if status == 'picked_up':
        return Notification(
            recipient_id=record['buyer_id'],
            title='Your order is ready for pickup!',
            body='Head over to pick up your food.',
            request_id=request_id,
        )

    if status == 'cancelled':
        return _cancelled_notification(record)

    return None


def _cancelled_notification(record: dict) -> Notification:
    cancelled_by = record.get('cancelled_by')
    reason = record.get('cancel_reason')
    suffix = f' Reason: {reason}' if reason else ''

    if cancelled_by and str(cancelled_by) == str(record['buyer_id']):
        return Notification(
            recipient_id=record['seller_id'],
            title='A request was cancelled',
            body=f'The requester cancelled their swipe request.{suffix}',
            request_id=record.get('id'),
        )

    return Notification(
        recipient_id=record['buyer_id'],
        title='Your request was cancelled',
        body=f'The sharer cancelled your food request.{suffix}',
        request_id=record.get('id'),
    )
