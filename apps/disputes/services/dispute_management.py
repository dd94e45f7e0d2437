"""Dispute service - open, resolve and list disputes."""

import logging
from datetime import timedelta
from uuid import UUID

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import Q, QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.common.exceptions import ExchangeServiceError, InvalidInputError
from apps.common.storage import translate_storage_errors
from apps.orders.models import RequestAction, RequestStatus
from apps.orders.services import (
    run_transition,
    record_transition,
    record_rejected_attempt,
    get_request_for_user,
)
from ..models import Dispute, DisputeStatus
from .exceptions import (
    DisputeNotFoundError,
    DisputeWindowClosedError,
    DuplicateDisputeError,
    DisputeAlreadyResolvedError,
    AdminRequiredError,
)

logger = logging.getLogger(__name__)


def open_dispute(
    *,
    request_id: UUID,
    caller: User,
    reason: str,
    description: str = ''
) -> Dispute:
    """
    Open a dispute on an exchange and move the request to ``disputed``.

    Completed exchanges can be disputed for DISPUTE_WINDOW_HOURS after
    completion.

    Args:
        request_id: UUID of the request
        caller: Buyer or seller of the request
        reason: Short reason (required)
        description: Longer explanation

    Returns:
        Created Dispute (open)

    Raises:
        InvalidInputError: If reason is blank
        AuthorizationError: If caller is not a party
        DuplicateDisputeError: If the request already has a dispute
        DisputeWindowClosedError: If the completion window has passed
        InvalidStateError: If the request is not ordered, picked_up or completed
        ConflictError: If the request changed concurrently
    """
    reason = (reason or '').strip()
    description = (description or '').strip()

    def validate():
        if not reason:
            raise InvalidInputError("A reason is required to open a dispute")

    def guard(swipe_request, role):
        if Dispute.objects.filter(request_id=swipe_request.id).exists():
            raise DuplicateDisputeError()

        if swipe_request.status == RequestStatus.COMPLETED and swipe_request.completed_at:
            window = timedelta(hours=settings.DISPUTE_WINDOW_HOURS)
            if timezone.now() - swipe_request.completed_at > window:
                raise DisputeWindowClosedError()

    def after(swipe_request, result):
        try:
            with transaction.atomic():
                return Dispute.objects.create(
                    request=swipe_request,
                    opener=caller,
                    reason=reason,
                    description=description,
                )
        except IntegrityError:
            raise DuplicateDisputeError()

    outcome = run_transition(
        request_id=request_id,
        caller=caller,
        action=RequestAction.OPEN_DISPUTE,
        validate=validate,
        guard=guard,
        after=after,
        metadata={'reason': reason},
    )

    dispute = outcome.extra
    logger.info("Dispute %s opened on request %s by %s", dispute.id, request_id, caller.id)
    return dispute


def resolve_dispute(*, dispute_id: UUID, admin: User, resolution: str) -> Dispute:
    """
    Close a dispute with an admin's resolution.

    The request stays ``disputed``; the resolution is recorded on the
    dispute and in the request's audit trail.

    Raises:
        AdminRequiredError: If the user is not an admin
        InvalidInputError: If resolution is blank
        DisputeNotFoundError: If dispute doesn't exist
        DisputeAlreadyResolvedError: If dispute is already resolved
    """
    try:
        return _resolve(dispute_id=dispute_id, admin=admin, resolution=resolution)
    except ExchangeServiceError as exc:
        try:
            request_id = (
                Dispute.objects
                .filter(id=dispute_id)
                .values_list('request_id', flat=True)
                .first()
            )
        except (ValidationError, ValueError):
            request_id = None
        record_rejected_attempt(
            request_id=request_id,
            actor=admin,
            action=RequestAction.RESOLVE_DISPUTE,
            error=exc,
        )
        raise


@translate_storage_errors
@transaction.atomic
def _resolve(*, dispute_id, admin, resolution):
    if not admin.is_admin:
        raise AdminRequiredError()

    resolution = (resolution or '').strip()
    if not resolution:
        raise InvalidInputError("A resolution is required")

    try:
        dispute = (
            Dispute.objects
            .select_for_update()
            .select_related('request')
            .get(id=dispute_id)
        )
    except (Dispute.DoesNotExist, ValidationError, ValueError):
        raise DisputeNotFoundError(f"Dispute {dispute_id} not found")

    if not dispute.is_open:
        raise DisputeAlreadyResolvedError()

    dispute.status = DisputeStatus.RESOLVED
    dispute.resolution = resolution
    dispute.resolved_by = admin
    dispute.resolved_at = timezone.now()
    dispute.save(update_fields=['status', 'resolution', 'resolved_by', 'resolved_at'])

    record_transition(
        request=dispute.request,
        actor=admin,
        action=RequestAction.RESOLVE_DISPUTE,
        from_status=dispute.request.status,
        to_status=dispute.request.status,
        metadata={'dispute_id': str(dispute.id)},
    )

    logger.info("Dispute %s resolved by %s", dispute.id, admin.id)
    return dispute


def get_dispute_for_request(*, request_id: UUID, user: User):
    """
    The dispute attached to a request, or None.

    Raises:
        RequestNotFoundError: If the request isn't visible to the user
    """
    swipe_request = get_request_for_user(request_id=request_id, user=user)
    return Dispute.objects.filter(request=swipe_request).first()


def get_dispute_by_id(*, dispute_id: UUID, user: User) -> Dispute:
    """
    Raises:
        DisputeNotFoundError: If it doesn't exist or isn't visible to the user
    """
    try:
        dispute = list_disputes(user=user).get(id=dispute_id)
    except (Dispute.DoesNotExist, ValidationError, ValueError):
        raise DisputeNotFoundError(f"Dispute {dispute_id} not found")
    return dispute


def list_disputes(*, user: User, status: str = None) -> QuerySet[Dispute]:
    """
    Disputes visible to the user, newest first.

    Admins see every dispute; everyone else sees disputes on their own
    requests.
    """
    queryset = Dispute.objects.select_related('request', 'opener', 'resolved_by')
    if not user.is_admin:
        queryset = queryset.filter(Q(request__buyer=user) | Q(request__seller=user))
    if status:
        queryset = queryset.filter(status=status)
    return queryset.order_by('-created_at')
