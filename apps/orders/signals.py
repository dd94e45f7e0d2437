"""
Domain events for swipe requests.

``request_transitioned`` is sent after the transaction that created or moved
a request has committed. Receivers get a ``RequestEvent`` as the ``event``
keyword argument and must not assume they run inside a transaction.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from django.dispatch import Signal
from django.utils import timezone


request_transitioned = Signal()


class EventType:
    INSERT = 'INSERT'
    UPDATE = 'UPDATE'


@dataclass(frozen=True)
class RequestEvent:
    event_type: str
    request_id: str
    record: dict
    old_record: Optional[dict] = None
    action: Optional[str] = None
    actor_id: Optional[str] = None
    occurred_at: datetime = field(default_factory=timezone.now)


def emit_request_event(sender, event: RequestEvent) -> None:
    """Send ``request_transitioned`` to all receivers."""
    request_transitioned.send(sender=sender, event=event)
