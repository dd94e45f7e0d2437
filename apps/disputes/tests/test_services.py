"""
Service layer tests for disputes app.

- Opening disputes (state, window, duplicates)
- Resolving disputes (admin only, audit entry)
- Visibility of disputes
"""

import pytest
from datetime import timedelta
from uuid import uuid4

from django.test import override_settings
from django.utils import timezone

from apps.common.exceptions import AuthorizationError, InvalidInputError, InvalidStateError
from apps.disputes.models import Dispute, DisputeStatus
from apps.disputes.services import (
    open_dispute,
    resolve_dispute,
    get_dispute_for_request,
    get_dispute_by_id,
    list_disputes,
)
from apps.disputes.services.exceptions import (
    DisputeNotFoundError,
    DisputeWindowClosedError,
    DuplicateDisputeError,
    DisputeAlreadyResolvedError,
    AdminRequiredError,
)
from apps.orders.models import SwipeRequest, RequestStatus, RequestAction, AuditLogEntry, AuditOutcome
from apps.orders.services import RequestNotFoundError


def age_completion(swipe_request, hours):
    """Move completed_at into the past."""
    SwipeRequest.objects.filter(id=swipe_request.id).update(
        completed_at=timezone.now() - timedelta(hours=hours)
    )


# ============================================================================
# OPEN DISPUTE TESTS
# ============================================================================

@pytest.mark.django_db
class TestOpenDispute:

    def test_open_on_ordered_request(self, ordered_request, buyer):
        dispute = open_dispute(
            request_id=ordered_request.id,
            caller=buyer,
            reason='  Wrong items ',
            description='Got a salad instead of a wrap',
        )

        assert dispute.status == DisputeStatus.OPEN
        assert dispute.opener == buyer
        assert dispute.reason == 'Wrong items'
        ordered_request.refresh_from_db()
        assert ordered_request.status == RequestStatus.DISPUTED

    def test_open_is_audited(self, picked_up_request, seller):
        open_dispute(request_id=picked_up_request.id, caller=seller, reason='Never picked up')

        entry = AuditLogEntry.objects.filter(action=RequestAction.OPEN_DISPUTE).get()
        assert entry.outcome == AuditOutcome.APPLIED
        assert entry.from_status == RequestStatus.PICKED_UP
        assert entry.to_status == RequestStatus.DISPUTED
        assert entry.metadata['reason'] == 'Never picked up'

    def test_open_within_window(self, completed_request, buyer):
        age_completion(completed_request, hours=23)

        dispute = open_dispute(request_id=completed_request.id, caller=buyer, reason='Cold food')

        assert dispute.request_id == completed_request.id

    def test_window_closed(self, completed_request, buyer):
        age_completion(completed_request, hours=25)

        with pytest.raises(DisputeWindowClosedError):
            open_dispute(request_id=completed_request.id, caller=buyer, reason='Cold food')

        completed_request.refresh_from_db()
        assert completed_request.status == RequestStatus.COMPLETED
        assert not Dispute.objects.exists()

    @override_settings(DISPUTE_WINDOW_HOURS=48)
    def test_window_is_configurable(self, completed_request, buyer):
        age_completion(completed_request, hours=25)

        open_dispute(request_id=completed_request.id, caller=buyer, reason='Cold food')

    def test_duplicate_dispute(self, ordered_request, buyer, seller):
        open_dispute(request_id=ordered_request.id, caller=buyer, reason='Wrong items')

        with pytest.raises(DuplicateDisputeError) as exc:
            open_dispute(request_id=ordered_request.id, caller=seller, reason='Buyer is lying')

        assert exc.value.kind == 'conflict'
        assert exc.value.retryable is False
        assert Dispute.objects.count() == 1

    @pytest.mark.parametrize('fixture_name', ['swipe_request', 'accepted_request'])
    def test_too_early_to_dispute(self, request, fixture_name, buyer):
        swipe_request = request.getfixturevalue(fixture_name)

        with pytest.raises(InvalidStateError):
            open_dispute(request_id=swipe_request.id, caller=buyer, reason='Changed my mind')

    def test_outsider_cannot_open(self, ordered_request, outsider):
        with pytest.raises(AuthorizationError):
            open_dispute(request_id=ordered_request.id, caller=outsider, reason='Spite')

    def test_reason_required(self, ordered_request, buyer):
        with pytest.raises(InvalidInputError):
            open_dispute(request_id=ordered_request.id, caller=buyer, reason=' ')

        rejected = AuditLogEntry.objects.get(outcome=AuditOutcome.REJECTED)
        assert rejected.metadata['error_kind'] == 'validation'


# ============================================================================
# RESOLVE DISPUTE TESTS
# ============================================================================

@pytest.fixture
def dispute(ordered_request, buyer):
    return open_dispute(request_id=ordered_request.id, caller=buyer, reason='Wrong items')


@pytest.mark.django_db
class TestResolveDispute:

    def test_admin_resolves(self, dispute, admin_user):
        resolved = resolve_dispute(dispute_id=dispute.id, admin=admin_user, resolution='Refund agreed')

        assert resolved.status == DisputeStatus.RESOLVED
        assert resolved.resolved_by == admin_user
        assert resolved.resolved_at is not None
        resolved.request.refresh_from_db()
        assert resolved.request.status == RequestStatus.DISPUTED

    def test_resolution_is_audited(self, dispute, admin_user):
        resolve_dispute(dispute_id=dispute.id, admin=admin_user, resolution='Refund agreed')

        entry = AuditLogEntry.objects.get(action=RequestAction.RESOLVE_DISPUTE)
        assert entry.outcome == AuditOutcome.APPLIED
        assert entry.actor == admin_user
        assert entry.from_status == entry.to_status == RequestStatus.DISPUTED

    def test_party_cannot_resolve(self, dispute, buyer):
        with pytest.raises(AdminRequiredError):
            resolve_dispute(dispute_id=dispute.id, admin=buyer, resolution='I win')

        dispute.refresh_from_db()
        assert dispute.status == DisputeStatus.OPEN
        rejected = AuditLogEntry.objects.get(outcome=AuditOutcome.REJECTED)
        assert rejected.request_id == dispute.request_id

    def test_resolution_required(self, dispute, admin_user):
        with pytest.raises(InvalidInputError):
            resolve_dispute(dispute_id=dispute.id, admin=admin_user, resolution='')

    def test_resolve_twice(self, dispute, admin_user):
        resolve_dispute(dispute_id=dispute.id, admin=admin_user, resolution='Refund agreed')

        with pytest.raises(DisputeAlreadyResolvedError):
            resolve_dispute(dispute_id=dispute.id, admin=admin_user, resolution='Again')

    def test_unknown_dispute(self, admin_user):
        with pytest.raises(DisputeNotFoundError):
            resolve_dispute(dispute_id=uuid4(), admin=admin_user, resolution='Refund agreed')

    def test_malformed_dispute_id(self, admin_user):
        with pytest.raises(DisputeNotFoundError):
            resolve_dispute(dispute_id='not-a-uuid', admin=admin_user, resolution='Refund agreed')

        entry = AuditLogEntry.objects.get()
        assert entry.outcome == AuditOutcome.REJECTED
        assert entry.request is None


# ============================================================================
# VISIBILITY TESTS
# ============================================================================

@pytest.mark.django_db
class TestDisputeVisibility:

    def test_parties_and_admin_see_dispute(self, dispute, buyer, seller, admin_user):
        assert list(list_disputes(user=buyer)) == [dispute]
        assert list(list_disputes(user=seller)) == [dispute]
        assert list(list_disputes(user=admin_user)) == [dispute]

    def test_outsider_sees_nothing(self, dispute, outsider):
        assert list(list_disputes(user=outsider)) == []

        with pytest.raises(DisputeNotFoundError):
            get_dispute_by_id(dispute_id=dispute.id, user=outsider)

    def test_filter_by_status(self, dispute, admin_user):
        assert list(list_disputes(user=admin_user, status=DisputeStatus.RESOLVED)) == []

    def test_dispute_for_request(self, dispute, seller, outsider):
        assert get_dispute_for_request(request_id=dispute.request_id, user=seller) == dispute

        with pytest.raises(RequestNotFoundError):
            get_dispute_for_request(request_id=dispute.request_id, user=outsider)

    def test_no_dispute_for_request(self, ordered_request, buyer):
        assert get_dispute_for_request(request_id=ordered_request.id, user=buyer) is None
