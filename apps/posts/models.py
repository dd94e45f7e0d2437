from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class PostStatus(models.TextChoices):
    OPEN = 'open', 'Open'
    CLOSED = 'closed', 'Closed'


class Post(models.Model):
    """A seller's offer of meal swipe capacity."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    seller = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='posts'
    )
    status = models.CharField(
        max_length=10,
        choices=PostStatus.choices,
        default=PostStatus.OPEN
    )

    # Capacity (capacity_remaining is owned by services.capacity)
    capacity_total = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    capacity_remaining = models.PositiveIntegerField()

    # Offer details
    location = models.CharField(max_length=200, blank=True)
    notes = models.TextField(blank=True)
    max_value_hint = models.DecimalField(
        max_digits=6,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    # Closed by the seller rather than by running out of capacity
    closed_by_seller = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'posts'
        indexes = [
            models.Index(fields=['status', 'created_at'], name='posts_status_created_idx'),
            models.Index(fields=['seller', 'created_at'], name='posts_seller_created_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(capacity_total__gt=0),
                name='post_capacity_total_positive',
            ),
            models.CheckConstraint(
                condition=models.Q(capacity_remaining__gte=0),
                name='post_capacity_remaining_non_negative',
            ),
            models.CheckConstraint(
                condition=models.Q(capacity_remaining__lte=models.F('capacity_total')),
                name='post_capacity_remaining_within_total',
            ),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.seller.get_display_name()} - {self.capacity_remaining}/{self.capacity_total} ({self.status})"

    @property
    def is_full(self):
        return self.capacity_remaining == 0
