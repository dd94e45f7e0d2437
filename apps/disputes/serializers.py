from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer
from .models import Dispute, DisputeStatus


class OpenDisputeSerializer(serializers.Serializer):
    request = serializers.UUIDField()
    reason = serializers.CharField(max_length=200)
    description = serializers.CharField(max_length=2000, required=False, allow_blank=True, default='')


class ResolveDisputeSerializer(serializers.Serializer):
    resolution = serializers.CharField(max_length=2000)


class DisputeFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=DisputeStatus.choices, required=False)


class DisputeSerializer(serializers.ModelSerializer):
    opener = UserMinimalSerializer(read_only=True)
    resolved_by = UserMinimalSerializer(read_only=True)

    class Meta:
        model = Dispute
        fields = [
            'id',
            'request',
            'opener',
            'reason',
            'description',
            'status',
            'resolution',
            'resolved_by',
            'created_at',
            'resolved_at',
        ]
        read_only_fields = fields
