"""
Audit log service.

Every transition attempt leaves exactly one ``AuditLogEntry``. Applied
transitions are recorded inside the transaction that performs them, so an
entry exists if and only if the change committed. Rejected attempts are
recorded after the failed transaction has rolled back.
"""

import logging
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.common.exceptions import ExchangeServiceError
from ..models import AuditLogEntry, AuditOutcome, SwipeRequest
from .exceptions import RequestNotFoundError

logger = logging.getLogger(__name__)


def record_transition(
    *,
    request: SwipeRequest,
    actor: Optional[User],
    action: str,
    from_status: str,
    to_status: str,
    metadata: Optional[dict] = None
) -> AuditLogEntry:
    """
    Write an ``applied`` entry. Must run inside the transition's transaction.
    """
    entry = AuditLogEntry.objects.create(
        request=request,
        actor=actor,
        action=action,
        outcome=AuditOutcome.APPLIED,
        from_status=from_status,
        to_status=to_status,
        metadata=metadata or {},
    )
    logger.info(
        "Request %s: %s %s -> %s by %s",
        request.id, action, from_status, to_status, actor.id if actor else None
    )
    return entry


def record_rejected_attempt(
    *,
    request_id: Optional[UUID],
    actor: Optional[User],
    action: str,
    error: ExchangeServiceError
) -> Optional[AuditLogEntry]:
    """
    Write a ``rejected`` entry for an attempt that raised ``error``.

    Called outside the failed transaction, so ``from_status`` is the status
    the request has after the rollback. Failing to write the entry is logged
    and does not replace the original error.

    Returns:
        The created entry, or None if it could not be stored
    """
    logger.info(
        "Request %s: %s rejected for %s (%s)",
        request_id, action, actor.id if actor else None, error.kind
    )

    metadata = {'error_kind': error.kind, 'error': error.message}
    try:
        from_status = ''
        if request_id is not None:
            try:
                from_status = (
                    SwipeRequest.objects
                    .filter(id=request_id)
                    .values_list('status', flat=True)
                    .first()
                )
            except (ValidationError, ValueError):
                metadata['request_id'] = str(request_id)
                from_status = None
            # The FK is only set for requests that exist
            if from_status is None:
                request_id, from_status = None, ''

        return AuditLogEntry.objects.create(
            request_id=request_id,
            actor=actor,
            action=action,
            outcome=AuditOutcome.REJECTED,
            from_status=from_status,
            metadata=metadata,
        )
    except DatabaseError:
        logger.exception("Could not write rejected audit entry for request %s", request_id)
        return None


def get_audit_trail(*, request_id: UUID, user: User) -> QuerySet[AuditLogEntry]:
    """
    Audit entries for one request, oldest first.

    Raises:
        RequestNotFoundError: If the request doesn't exist or the user is
            neither a party nor an admin
    """
    try:
        swipe_request = SwipeRequest.objects.get(id=request_id)
    except (SwipeRequest.DoesNotExist, ValidationError, ValueError):
        raise RequestNotFoundError()

    if not (swipe_request.is_party(user) or user.is_admin):
        raise RequestNotFoundError()

    return (
        AuditLogEntry.objects
        .filter(request=swipe_request)
        .select_related('actor')
        .order_by('created_at')
    )
