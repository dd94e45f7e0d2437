"""
Request transition runner.

Every status change of a swipe request goes through ``run_transition()``:

1. Load the request (snapshot of status and version).
2. Resolve the caller's party role and ask the state machine for the
   result. Authorization is checked before the source state.
3. Compare-and-set: ``UPDATE requests ... WHERE id = ? AND status = <read
   status> AND version = <read version>``. Zero rows means another
   transition committed first and the caller gets ``ConflictError``.
4. Apply side effects (capacity release, profile counters, hook) and write
   the audit entry in the same transaction.
5. After commit, send ``request_transitioned``.

Failed attempts are audited as ``rejected`` once the transaction has rolled
back. Storage failures surface as ``TransientError``.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from apps.accounts.models import User
from apps.accounts.services import record_completion, record_cancellation
from apps.common.exceptions import ExchangeServiceError
from apps.common.storage import translate_storage_errors
from apps.posts.services import release_slot
from .. import state_machine
from ..models import SwipeRequest, RequestAction
from ..signals import EventType, RequestEvent, emit_request_event
from .audit import record_transition, record_rejected_attempt
from .exceptions import (
    RequestNotFoundError,
    NotRequestPartyError,
    ConcurrentTransitionError,
    CancelReasonRequiredError,
)

logger = logging.getLogger(__name__)


@dataclass
class TransitionOutcome:
    request: SwipeRequest
    result: state_machine.TransitionResult
    # Whatever the ``after`` hook returned
    extra: Any = None


def _load_request(request_id: UUID) -> SwipeRequest:
    try:
        return SwipeRequest.objects.get(id=request_id)
    except (SwipeRequest.DoesNotExist, ValidationError, ValueError):
        raise RequestNotFoundError(f"Request {request_id} not found")


def run_transition(
    *,
    request_id: UUID,
    caller: User,
    action: str,
    validate: Optional[Callable[[], None]] = None,
    guard: Optional[Callable[[SwipeRequest, str], None]] = None,
    fields: Optional[dict] = None,
    after: Optional[Callable[[SwipeRequest, state_machine.TransitionResult], Any]] = None,
    metadata: Optional[dict] = None
) -> TransitionOutcome:
    """
    Run one audited, atomic transition.

    Args:
        request_id: UUID of the request
        caller: User performing the action
        action: RequestAction value
        validate: Input check run before anything is read
        guard: Extra precondition checked inside the transaction once the
            caller is known to be a party, before the state machine
        fields: Additional request columns written by the compare-and-set
        after: Side effect run after the update, inside the transaction
        metadata: Extra data stored on the audit entry

    Returns:
        TransitionOutcome with the refreshed request

    Raises:
        AuthorizationError: Caller is not allowed to perform the action
        InvalidStateError: Action not valid from the current status
        ConflictError: Another transition won the race
        NotFoundError: Request doesn't exist
        InvalidInputError: validate() rejected the input
        TransientError: Storage failure
    """
    try:
        if validate is not None:
            validate()
        return _apply_transition(
            request_id=request_id,
            caller=caller,
            action=action,
            guard=guard,
            fields=fields or {},
            after=after,
            metadata=metadata or {},
        )
    except ExchangeServiceError as exc:
        record_rejected_attempt(
            request_id=request_id,
            actor=caller,
            action=action,
            error=exc,
        )
        raise


@translate_storage_errors
@transaction.atomic
def _apply_transition(*, request_id, caller, action, guard, fields, after, metadata):
    swipe_request = _load_request(request_id)
    read_status = swipe_request.status
    read_version = swipe_request.version

    role = state_machine.resolve_role(
        caller_id=caller.id,
        buyer_id=swipe_request.buyer_id,
        seller_id=swipe_request.seller_id,
    )
    if role == state_machine.PartyRole.OUTSIDER:
        raise NotRequestPartyError()

    if guard is not None:
        guard(swipe_request, role)

    result = state_machine.apply(
        state_machine.RequestState(
            status=read_status,
            buyer_completed=swipe_request.buyer_completed,
            seller_completed=swipe_request.seller_completed,
        ),
        action,
        role,
    )

    now = timezone.now()
    changes = {
        'status': result.state.status,
        'buyer_completed': result.state.buyer_completed,
        'seller_completed': result.state.seller_completed,
        **fields,
    }
    if result.completed:
        changes['completed_at'] = now

    updated = (
        SwipeRequest.objects
        .filter(id=swipe_request.id, status=read_status, version=read_version)
        .update(version=F('version') + 1, updated_at=now, **changes)
    )
    if not updated:
        logger.info("Request %s: %s lost a concurrent update", swipe_request.id, action)
        raise ConcurrentTransitionError()

    old_record = swipe_request.as_record()
    swipe_request.refresh_from_db()

    if result.releases_capacity:
        release_slot(post_id=swipe_request.post_id)
    if result.completed:
        record_completion(buyer_id=swipe_request.buyer_id, seller_id=swipe_request.seller_id)

    extra = after(swipe_request, result) if after is not None else None

    record_transition(
        request=swipe_request,
        actor=caller,
        action=action,
        from_status=read_status,
        to_status=result.state.status,
        metadata={'role': role, 'version': swipe_request.version, **metadata},
    )

    event = RequestEvent(
        event_type=EventType.UPDATE,
        request_id=str(swipe_request.id),
        record=swipe_request.as_record(),
        old_record=old_record,
        action=action,
        actor_id=str(caller.id),
    )
    transaction.on_commit(lambda: emit_request_event(SwipeRequest, event))

    return TransitionOutcome(request=swipe_request, result=result, extra=extra)


# =============================================================================
# Public transitions
# =============================================================================

def accept_request(*, request_id: UUID, caller: User) -> SwipeRequest:
    """
    Seller accepts a pending request.

    Raises:
        AuthorizationError: If caller is not the seller
        InvalidStateError: If request is not requested
        ConflictError: If the request changed concurrently
    """
    return run_transition(
        request_id=request_id,
        caller=caller,
        action=RequestAction.ACCEPT,
    ).request


def decline_request(*, request_id: UUID, caller: User) -> SwipeRequest:
    """
    Seller declines a pending request. The reserved swipe goes back to the post.

    Raises:
        AuthorizationError: If caller is not the seller
        InvalidStateError: If request is not requested
        ConflictError: If the request changed concurrently
    """
    return run_transition(
        request_id=request_id,
        caller=caller,
        action=RequestAction.DECLINE,
        fields={'cancelled_by': caller},
    ).request


def mark_ordered(
    *,
    request_id: UUID,
    caller: User,
    proof_path: Optional[str] = None,
    order_id_text: Optional[str] = None
) -> SwipeRequest:
    """
    Seller confirms the food was ordered.

    Args:
        request_id: UUID of the request
        caller: The seller
        proof_path: Opaque storage path of the receipt image
        order_id_text: Order number shown by the dining hall

    Raises:
        AuthorizationError: If caller is not the seller
        InvalidStateError: If request is not accepted
        ConflictError: If the request changed concurrently
    """
    fields = {}
    if proof_path:
        fields['ordered_proof_path'] = proof_path.strip()
    if order_id_text:
        fields['order_id_text'] = order_id_text.strip()

    return run_transition(
        request_id=request_id,
        caller=caller,
        action=RequestAction.MARK_ORDERED,
        fields=fields,
        metadata={'has_proof': bool(proof_path)},
    ).request


def mark_picked_up(*, request_id: UUID, caller: User) -> SwipeRequest:
    """
    Buyer confirms they collected the food.

    Raises:
        AuthorizationError: If caller is not the buyer
        InvalidStateError: If request is not ordered
        ConflictError: If the request changed concurrently
    """
    return run_transition(
        request_id=request_id,
        caller=caller,
        action=RequestAction.MARK_PICKED_UP,
    ).request


def mark_completed(*, request_id: UUID, caller: User) -> SwipeRequest:
    """
    One party confirms the exchange is done.

    The request becomes ``completed`` once both parties have confirmed; at
    that point both profiles get one more completed exchange.

    Raises:
        AuthorizationError: If caller is not a party
        InvalidStateError: If request is not picked_up, or the caller
            already confirmed
        ConflictError: If the request changed concurrently
    """
    return run_transition(
        request_id=request_id,
        caller=caller,
        action=RequestAction.MARK_COMPLETED,
    ).request


def cancel_request(*, request_id: UUID, caller: User, reason: str) -> SwipeRequest:
    """
    Either party cancels before the food is ordered.

    The reserved swipe goes back to the post and the cancellation counts
    against the caller's profile.

    Raises:
        CancelReasonRequiredError: If reason is blank
        AuthorizationError: If caller is not a party
        InvalidStateError: If request is past accepted
        ConflictError: If the request changed concurrently
    """
    reason = (reason or '').strip()

    def validate():
        if not reason:
            raise CancelReasonRequiredError()

    def after(swipe_request, result):
        record_cancellation(user_id=caller.id)

    return run_transition(
        request_id=request_id,
        caller=caller,
        action=RequestAction.CANCEL,
        validate=validate,
        fields={'cancel_reason': reason, 'cancelled_by': caller},
        after=after,
    ).request
