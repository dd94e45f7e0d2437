import hmac
import logging

from django.conf import settings
from rest_framework import serializers, status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .backends import deliver
from .mapping import map_notification

logger = logging.getLogger(__name__)


class WebhookPayloadSerializer(serializers.Serializer):
    """Row change event posted by the database webhook."""

    type = serializers.ChoiceField(choices=['INSERT', 'UPDATE', 'DELETE'])
    table = serializers.CharField()
    schema = serializers.CharField(required=False, allow_blank=True)
    record = serializers.DictField(allow_null=True, required=False)
    old_record = serializers.DictField(allow_null=True, required=False)


@extend_schema(
    request=WebhookPayloadSerializer,
    description="Map a request row change to a notification and deliver it.",
    tags=['notifications'],
)
@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def request_webhook(request):
    """
    Database webhook for the requests table.

    Guarded by the ``X-Webhook-Secret`` header.
    """
    expected = settings.WEBHOOK_SECRET
    if not expected:
        logger.error("Webhook called but WEBHOOK_SECRET is not configured")
        return Response({'error': 'Missing server configuration'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    provided = request.headers.get('X-Webhook-Secret', '')
    if not hmac.compare_digest(provided.encode(), expected.encode()):
        return Response({'error': 'Unauthorized'}, status=status.HTTP_401_UNAUTHORIZED)

    serializer = WebhookPayloadSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    payload = serializer.validated_data

    if payload['table'] != 'requests':
        return Response({'skipped': True, 'reason': 'Not a requests event'})

    try:
        notification = map_notification(
            payload['type'],
            payload.get('record') or {},
            payload.get('old_record'),
        )
    except KeyError as exc:
        return Response({'error': f'Record is missing {exc}'}, status=status.HTTP_400_BAD_REQUEST)

    if notification is None:
        return Response({'skipped': True, 'reason': 'No notification for this event'})

    try:
        deliver(notification)
    except Exception:
        logger.exception("Webhook delivery failed for %s", notification.recipient_id)
        return Response({'error': 'Delivery failed'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response({'sent': True, 'recipient_id': notification.recipient_id})
