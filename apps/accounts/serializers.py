from rest_framework import serializers
from .models import User
from .badges import get_earned_badges, get_next_badge


class BadgeSerializer(serializers.Serializer):
    id = serializers.CharField()
    label = serializers.CharField()
    threshold = serializers.IntegerField()


class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'display_name', 'rating_avg', 'completed_count']
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()


class ProfileSerializer(serializers.ModelSerializer):
    """Public profile with exchange statistics and badges."""

    display_name = serializers.SerializerMethodField()
    badges = serializers.SerializerMethodField()
    next_badge = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id',
            'display_name',
            'role_preference',
            'rating_avg',
            'completed_count',
            'cancel_count',
            'badges',
            'next_badge',
            'created_at',
        ]
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()

    def get_badges(self, obj):
        return BadgeSerializer(get_earned_badges(obj.completed_count), many=True).data

    def get_next_badge(self, obj):
        tier = get_next_badge(obj.completed_count)
        return BadgeSerializer(tier).data if tier else None


class CurrentUserSerializer(ProfileSerializer):
    """Profile of the authenticated user, including private fields."""

    class Meta(ProfileSerializer.Meta):
        fields = ProfileSerializer.Meta.fields + ['email', 'is_banned', 'is_admin']
        read_only_fields = fields


class ProfileUpdateSerializer(serializers.ModelSerializer):
    """Fields a user may change on their own profile."""

    class Meta:
        model = User
        fields = ['display_name', 'role_preference']

    def validate_role_preference(self, value):
        # Admin role is granted by staff, not self-assigned
        if value == 'admin' and not self.instance.is_admin:
            raise serializers.ValidationError('Admin role cannot be self-assigned.')
        return value
