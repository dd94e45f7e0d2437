from decimal import Decimal

from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer
from . import state_machine
from .models import SwipeRequest, RequestStatus, AuditLogEntry


# =============================================================================
# Input Serializers
# =============================================================================

class RequestCreateSerializer(serializers.Serializer):
    """
    Validate input for filing a request.

    Fields:
        post (UUID): Post to request a swipe from
        items_text (str): What to order
        instructions (str): Optional instructions for the seller
        est_total (decimal): Optional estimated order value
    """

    post = serializers.UUIDField()
    items_text = serializers.CharField(max_length=2000)
    instructions = serializers.CharField(max_length=1000, required=False, allow_blank=True, default='')
    est_total = serializers.DecimalField(
        max_digits=8,
        decimal_places=2,
        min_value=Decimal('0.00'),
        required=False,
        allow_null=True,
    )


class RequestFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for listing requests.

    Query Parameters:
        role (str): 'buyer' or 'seller'
        status (str): Request status
    """

    role = serializers.ChoiceField(choices=['buyer', 'seller'], required=False)
    status = serializers.ChoiceField(choices=RequestStatus.choices, required=False)


class MarkOrderedSerializer(serializers.Serializer):
    proof_path = serializers.CharField(max_length=500, required=False, allow_blank=True)
    order_id_text = serializers.CharField(max_length=100, required=False, allow_blank=True)


class CancelRequestSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=1000)


# =============================================================================
# Output Serializers
# =============================================================================

class SwipeRequestSerializer(serializers.ModelSerializer):
    """Request with both parties and the actions available to the viewer."""

    buyer = UserMinimalSerializer(read_only=True)
    seller = UserMinimalSerializer(read_only=True)
    available_actions = serializers.SerializerMethodField()

    class Meta:
        model = SwipeRequest
        fields = [
            'id',
            'post',
            'buyer',
            'seller',
            'status',
            'items_text',
            'instructions',
            'est_total',
            'ordered_proof_path',
            'order_id_text',
            'buyer_completed',
            'seller_completed',
            'completed_at',
            'cancel_reason',
            'cancelled_by',
            'version',
            'available_actions',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_available_actions(self, obj):
        request = self.context.get('request')
        if request is None or not request.user.is_authenticated:
            return []

        role = state_machine.resolve_role(
            caller_id=request.user.id,
            buyer_id=obj.buyer_id,
            seller_id=obj.seller_id,
        )
        state = state_machine.RequestState(
            status=obj.status,
            buyer_completed=obj.buyer_completed,
            seller_completed=obj.seller_completed,
        )
        return [str(action) for action in state_machine.available_actions(state, role)]


class AuditLogEntrySerializer(serializers.ModelSerializer):
    actor = UserMinimalSerializer(read_only=True)

    class Meta:
        model = AuditLogEntry
        fields = [
            'id',
            'actor',
            'action',
            'outcome',
            'from_status',
            'to_status',
            'metadata',
            'created_at',
        ]
        read_only_fields = fields
