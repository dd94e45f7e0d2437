from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
import uuid


class Rating(models.Model):
    """One party's rating of the other after a completed exchange."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    request = models.ForeignKey('orders.SwipeRequest', on_delete=models.PROTECT, related_name='ratings')
    rater = models.ForeignKey('accounts.User', on_delete=models.PROTECT, related_name='ratings_given')
    ratee = models.ForeignKey('accounts.User', on_delete=models.PROTECT, related_name='ratings_received')
    stars = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    comment = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'ratings'
        constraints = [
            models.UniqueConstraint(fields=['request', 'rater'], name='rating_once_per_request'),
            models.CheckConstraint(
                condition=~models.Q(rater=models.F('ratee')),
                name='rating_not_self',
            ),
            models.CheckConstraint(
                condition=models.Q(stars__gte=1) & models.Q(stars__lte=5),
                name='rating_stars_range',
            ),
        ]
        indexes = [
            models.Index(fields=['ratee', 'created_at'], name='ratings_ratee_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.rater.get_display_name()} -> {self.ratee.get_display_name()} ({self.stars}★)"
