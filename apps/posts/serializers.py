from decimal import Decimal

from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer
from .models import Post


class PostCreateSerializer(serializers.Serializer):
    """
    Validate input for publishing a post.

    Fields:
        capacity_total (int): Swipes offered (1-20)
        location (str): Dining hall or pickup spot
        notes (str): Free-form notes
        max_value_hint (decimal): Suggested maximum order value
    """

    capacity_total = serializers.IntegerField(min_value=1, max_value=20)
    location = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True, default='')
    max_value_hint = serializers.DecimalField(
        max_digits=6,
        decimal_places=2,
        min_value=Decimal('0.00'),
        required=False,
        allow_null=True,
    )


class PostSerializer(serializers.ModelSerializer):
    seller = UserMinimalSerializer(read_only=True)

    class Meta:
        model = Post
        fields = [
            'id',
            'seller',
            'status',
            'capacity_total',
            'capacity_remaining',
            'location',
            'notes',
            'max_value_hint',
            'closed_by_seller',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields
