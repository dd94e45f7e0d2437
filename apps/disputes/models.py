from django.db import models
import uuid


class DisputeStatus(models.TextChoices):
    OPEN = 'open', 'Open'
    RESOLVED = 'resolved', 'Resolved'


class Dispute(models.Model):
    """A party's complaint about one exchange, resolved by an admin."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    request = models.OneToOneField(
        'orders.SwipeRequest',
        on_delete=models.PROTECT,
        related_name='dispute'
    )
    opener = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='disputes_opened'
    )

    reason = models.CharField(max_length=200)
    description = models.TextField(blank=True)

    status = models.CharField(
        max_length=10,
        choices=DisputeStatus.choices,
        default=DisputeStatus.OPEN
    )

    # Set by resolve_dispute
    resolution = models.TextField(blank=True)
    resolved_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='disputes_resolved'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    resolved_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'disputes'
        indexes = [
            models.Index(fields=['status', 'created_at'], name='disputes_status_created_idx'),
            models.Index(fields=['opener', 'created_at'], name='disputes_opener_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"Dispute on {self.request_id} ({self.status})"

    @property
    def is_open(self):
        return self.status == DisputeStatus.OPEN
