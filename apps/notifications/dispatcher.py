"""
Notification dispatcher.

Subscribes to ``request_transitioned``. The signal is sent after commit, so
a failure here can never undo a transition; it is logged and dropped.
"""

import logging

from django.dispatch import receiver

from apps.orders.signals import request_transitioned
from .backends import deliver
from .mapping import map_notification

logger = logging.getLogger(__name__)


@receiver(request_transitioned, dispatch_uid='notifications.dispatch_request_event')
def dispatch_request_event(sender, event, **kwargs):
    notification = map_notification(event.event_type, event.record, event.old_record, now=event.occurred_at)
    if notification is None:
        return None

    try:
        deliver(notification)
    except Exception:
        # Delivery is best-effort
        logger.exception("Failed to deliver notification for request %s", event.request_id)
        return None

    return notification
