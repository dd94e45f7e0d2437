"""
Request lifecycle state machine.

Pure, table-driven transition logic for swipe requests. Nothing in this
module touches the database: ``apply()`` takes an immutable snapshot of a
request's state, an action and the caller's party role, and either returns
the resulting state or raises a taxonomy error. The transition runner in
``services.transitions`` is responsible for persisting the result
atomically.

Happy path::

    requested -> accepted -> ordered -> picked_up -> completed

Side branches: ``cancelled`` (from requested/accepted) and ``disputed``
(from ordered/picked_up/completed). ``completed``, ``cancelled`` and
``disputed`` are terminal.

Example::

    >>> state = RequestState(status=RequestStatus.REQUESTED)
    >>> result = apply(state, RequestAction.ACCEPT, PartyRole.SELLER)
    >>> result.state.status
    'accepted'
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from django.db import models

from apps.common.exceptions import AuthorizationError, InvalidStateError
from .models import RequestStatus, RequestAction


class PartyRole(models.TextChoices):
    BUYER = 'buyer', 'Buyer'
    SELLER = 'seller', 'Seller'
    OUTSIDER = 'outsider', 'Not a party'


TERMINAL_STATUSES = frozenset({
    RequestStatus.COMPLETED,
    RequestStatus.CANCELLED,
    RequestStatus.DISPUTED,
})


@dataclass(frozen=True)
class RequestState:
    status: str
    buyer_completed: bool = False
    seller_completed: bool = False


@dataclass(frozen=True)
class TransitionRule:
    allowed_from: frozenset
    allowed_roles: frozenset
    # None when the target depends on the state (two-phase completion)
    target: Optional[str]
    releases_capacity: bool = False


@dataclass(frozen=True)
class TransitionResult:
    action: str
    role: str
    previous: RequestState
    state: RequestState
    releases_capacity: bool = False

    @property
    def status_changed(self) -> bool:
        return self.previous.status != self.state.status

    @property
    def completed(self) -> bool:
        return self.status_changed and self.state.status == RequestStatus.COMPLETED


BOTH_PARTIES = frozenset({PartyRole.BUYER, PartyRole.SELLER})

TRANSITIONS = {
    RequestAction.ACCEPT: TransitionRule(
        allowed_from=frozenset({RequestStatus.REQUESTED}),
        allowed_roles=frozenset({PartyRole.SELLER}),
        target=RequestStatus.ACCEPTED,
    ),
    RequestAction.DECLINE: TransitionRule(
        allowed_from=frozenset({RequestStatus.REQUESTED}),
        allowed_roles=frozenset({PartyRole.SELLER}),
        target=RequestStatus.CANCELLED,
        releases_capacity=True,
    ),
    RequestAction.MARK_ORDERED: TransitionRule(
        allowed_from=frozenset({RequestStatus.ACCEPTED}),
        allowed_roles=frozenset({PartyRole.SELLER}),
        target=RequestStatus.ORDERED,
    ),
    RequestAction.MARK_PICKED_UP: TransitionRule(
        allowed_from=frozenset({RequestStatus.ORDERED}),
        allowed_roles=frozenset({PartyRole.BUYER}),
        target=RequestStatus.PICKED_UP,
    ),
    RequestAction.MARK_COMPLETED: TransitionRule(
        allowed_from=frozenset({RequestStatus.PICKED_UP}),
        allowed_roles=BOTH_PARTIES,
        target=None,
    ),
    RequestAction.CANCEL: TransitionRule(
        allowed_from=frozenset({RequestStatus.REQUESTED, RequestStatus.ACCEPTED}),
        allowed_roles=BOTH_PARTIES,
        target=RequestStatus.CANCELLED,
        releases_capacity=True,
    ),
    RequestAction.OPEN_DISPUTE: TransitionRule(
        allowed_from=frozenset({
            RequestStatus.ORDERED,
            RequestStatus.PICKED_UP,
            RequestStatus.COMPLETED,
        }),
        allowed_roles=BOTH_PARTIES,
        target=RequestStatus.DISPUTED,
    ),
}


def resolve_role(*, caller_id, buyer_id, seller_id) -> str:
    """Party role of ``caller_id`` on a request."""
    if caller_id == buyer_id:
        return PartyRole.BUYER
    if caller_id == seller_id:
        return PartyRole.SELLER
    return PartyRole.OUTSIDER


def available_actions(state: RequestState, role: str) -> list[str]:
    """Actions ``role`` could successfully apply to ``state`` right now."""
    actions = []
    for action in TRANSITIONS:
        try:
            apply(state, action, role)
        except (AuthorizationError, InvalidStateError):
            continue
        actions.append(action)
    return actions


def apply(state: RequestState, action: str, role: str) -> TransitionResult:
    """
    Compute the result of ``action`` taken by ``role`` on ``state``.

    The caller's role is checked before the source state, so someone who is
    not the required party always gets an authorization error.

    Raises:
        AuthorizationError: If role may not perform the action
        InvalidStateError: If the action is not valid from state.status,
            or the caller already confirmed completion
        KeyError: If action is not a request transition
    """
    rule = TRANSITIONS[action]

    if role not in rule.allowed_roles:
        if role == PartyRole.OUTSIDER:
            raise AuthorizationError("You are not a party to this request.")
        allowed = ' or '.join(sorted(str(r) for r in rule.allowed_roles))
        raise AuthorizationError(f"Only the {allowed} can {RequestAction(action).label.lower()}.")

    if state.status not in rule.allowed_from:
        raise InvalidStateError(
            f"Cannot {RequestAction(action).label.lower()} a request that is {state.status}."
        )

    if action == RequestAction.MARK_COMPLETED:
        new_state = _mark_completed(state, role)
    else:
        new_state = replace(state, status=rule.target)

    return TransitionResult(
        action=action,
        role=role,
        previous=state,
        state=new_state,
        releases_capacity=rule.releases_capacity,
    )


def _mark_completed(state: RequestState, role: str) -> RequestState:
    flag = 'buyer_completed' if role == PartyRole.BUYER else 'seller_completed'
    if getattr(state, flag):
        raise InvalidStateError("You have already confirmed this exchange.")

    new_state = replace(state, **{flag: True})
    if new_state.buyer_completed and new_state.seller_completed:
        new_state = replace(new_state, status=RequestStatus.COMPLETED)
    return new_state
