from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class RequestStatus(models.TextChoices):
    REQUESTED = 'requested', 'Requested'
    ACCEPTED = 'accepted', 'Accepted'
    ORDERED = 'ordered', 'Ordered'
    PICKED_UP = 'picked_up', 'Picked Up'
    COMPLETED = 'completed', 'Completed'
    CANCELLED = 'cancelled', 'Cancelled'
    DISPUTED = 'disputed', 'Disputed'


class RequestAction(models.TextChoices):
    ACCEPT = 'accept', 'Accept'
    DECLINE = 'decline', 'Decline'
    MARK_ORDERED = 'mark_ordered', 'Mark ordered'
    MARK_PICKED_UP = 'mark_picked_up', 'Mark picked up'
    MARK_COMPLETED = 'mark_completed', 'Mark completed'
    CANCEL = 'cancel', 'Cancel'
    OPEN_DISPUTE = 'open_dispute', 'Open dispute'
    RESOLVE_DISPUTE = 'resolve_dispute', 'Resolve dispute'


class SwipeRequest(models.Model):
    """One buyer's food request against one post."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    post = models.ForeignKey(
        'posts.Post',
        on_delete=models.PROTECT,
        related_name='requests'
    )
    buyer = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='requests_made'
    )
    # Denormalized from post
    seller = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='requests_received'
    )

    status = models.CharField(
        max_length=20,
        choices=RequestStatus.choices,
        default=RequestStatus.REQUESTED
    )

    # Order details
    items_text = models.TextField()
    instructions = models.TextField(blank=True)
    est_total = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    # Set by mark_ordered (proof is an opaque storage path)
    ordered_proof_path = models.CharField(max_length=500, blank=True)
    order_id_text = models.CharField(max_length=100, blank=True)

    # Two-phase completion
    buyer_completed = models.BooleanField(default=False)
    seller_completed = models.BooleanField(default=False)
    completed_at = models.DateTimeField(null=True, blank=True)

    # Cancellation
    cancel_reason = models.TextField(blank=True)
    cancelled_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='requests_cancelled'
    )

    # Optimistic concurrency counter, bumped by every transition
    version = models.PositiveIntegerField(default=0)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'requests'
        indexes = [
            models.Index(fields=['buyer', 'updated_at'], name='requests_buyer_updated_idx'),
            models.Index(fields=['seller', 'updated_at'], name='requests_seller_updated_idx'),
            models.Index(fields=['post', 'created_at'], name='requests_post_created_idx'),
            models.Index(fields=['seller', 'status'], name='requests_seller_status_idx'),
        ]
        ordering = ['-updated_at']

    def __str__(self):
        return f"{self.buyer.get_display_name()} -> {self.seller.get_display_name()} ({self.status})"

    def is_party(self, user):
        return user.id in (self.buyer_id, self.seller_id)

    def other_party_id(self, user_id):
        return self.seller_id if user_id == self.buyer_id else self.buyer_id

    def as_record(self):
        """Flat row representation used in domain events and webhooks."""
        return {
            'id': str(self.id),
            'post_id': str(self.post_id),
            'buyer_id': str(self.buyer_id),
            'seller_id': str(self.seller_id),
            'status': self.status,
            'buyer_completed': self.buyer_completed,
            'seller_completed': self.seller_completed,
            'cancel_reason': self.cancel_reason or None,
            'cancelled_by': str(self.cancelled_by_id) if self.cancelled_by_id else None,
            'completed_at': self.completed_at.isoformat() if self.completed_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }


class AuditOutcome(models.TextChoices):
    APPLIED = 'applied', 'Applied'
    REJECTED = 'rejected', 'Rejected'


class AuditLogImmutableError(Exception):
    """Raised on any attempt to change or remove an audit entry."""
    pass


class AuditLogQuerySet(models.QuerySet):
    """Queryset that refuses bulk mutation of audit entries."""

    def update(self, **kwargs):
        raise AuditLogImmutableError("Audit entries cannot be updated")

    def delete(self):
        raise AuditLogImmutableError("Audit entries cannot be deleted")


class AuditLogEntry(models.Model):
    """Append-only record of one transition attempt."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    request = models.ForeignKey(
        SwipeRequest,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='audit_entries'
    )
    actor = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='audit_entries'
    )
    action = models.CharField(max_length=30, choices=RequestAction.choices)
    outcome = models.CharField(max_length=10, choices=AuditOutcome.choices)
    from_status = models.CharField(max_length=20, choices=RequestStatus.choices, blank=True)
    to_status = models.CharField(max_length=20, choices=RequestStatus.choices, blank=True)
    metadata = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = AuditLogQuerySet.as_manager()

    class Meta:
        db_table = 'audit_log'
        indexes = [
            models.Index(fields=['request', 'created_at'], name='audit_request_created_idx'),
            models.Index(fields=['actor', 'created_at'], name='audit_actor_created_idx'),
            models.Index(fields=['outcome', 'created_at'], name='audit_outcome_created_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.action} {self.from_status or '-'} -> {self.to_status or '-'} ({self.outcome})"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise AuditLogImmutableError("Audit entries cannot be updated")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise AuditLogImmutableError("Audit entries cannot be deleted")
