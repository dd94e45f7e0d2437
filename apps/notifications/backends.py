"""
Notification delivery backends.

The active backend is named by the NOTIFICATION_BACKEND setting, the same
way Django picks an email backend. Push delivery itself lives outside this
project; the backends here log or collect notifications.
"""

import logging

from django.conf import settings
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)


class BaseNotificationBackend:
    """Subclasses implement ``send()``."""

    def send(self, notification):
        raise NotImplementedError('subclasses of BaseNotificationBackend must provide a send() method')


class LoggingBackend(BaseNotificationBackend):
    """Write each notification to the log."""

    def send(self, notification):
        logger.info(
            "Notify %s: %s - %s (request %s)",
            notification.recipient_id,
            notification.title,
            notification.body,
            notification.request_id,
        )
        return True


class LocMemBackend(BaseNotificationBackend):
    """Collect notifications in ``LocMemBackend.outbox``."""

    outbox = []

    def send(self, notification):
        LocMemBackend.outbox.append(notification)
        return True


def get_backend(path=None):
    """Instantiate the backend at ``path`` (default: NOTIFICATION_BACKEND)."""
    return import_string(path or settings.NOTIFICATION_BACKEND)()


def deliver(notification):
    """Hand ``notification`` to the configured backend."""
    return get_backend().send(notification)
