from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer
from .models import Rating


class RatingCreateSerializer(serializers.Serializer):
    request = serializers.UUIDField()
    stars = serializers.IntegerField(min_value=1, max_value=5)
    comment = serializers.CharField(max_length=1000, required=False, allow_blank=True, default='')


class RatingFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for listing ratings.

    Exactly one of ``ratee`` or ``request`` is required.
    """

    ratee = serializers.UUIDField(required=False)
    request = serializers.UUIDField(required=False)

    def validate(self, attrs):
        if bool(attrs.get('ratee')) == bool(attrs.get('request')):
            raise serializers.ValidationError('Provide either ratee or request.')
        return attrs


class RatingSerializer(serializers.ModelSerializer):
    rater = UserMinimalSerializer(read_only=True)

    class Meta:
        model = Rating
        fields = ['id', 'request', 'rater', 'ratee', 'stars', 'comment', 'created_at']
        read_only_fields = fields
