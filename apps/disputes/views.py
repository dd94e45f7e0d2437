from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import (
    OpenDisputeSerializer,
    ResolveDisputeSerializer,
    DisputeFilterSerializer,
    DisputeSerializer,
)
from .services import (
    open_dispute,
    resolve_dispute,
    get_dispute_by_id,
    list_disputes,
)


class DisputeViewSet(viewsets.GenericViewSet):
    """
    ViewSet for disputes.

    list: Disputes visible to the user (all of them for admins)
    create: Open a dispute on a request
    retrieve: Get one dispute
    resolve: Resolve a dispute (admin only)
    """

    serializer_class = DisputeSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return list_disputes(user=self.request.user)

    @extend_schema(parameters=[DisputeFilterSerializer])
    def list(self, request):
        filters = DisputeFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        disputes = list_disputes(user=request.user, status=filters.validated_data.get('status'))
        return Response(DisputeSerializer(disputes, many=True).data)

    @extend_schema(request=OpenDisputeSerializer, responses={201: DisputeSerializer})
    def create(self, request):
        """Open a dispute."""
        serializer = OpenDisputeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        dispute = open_dispute(
            request_id=serializer.validated_data['request'],
            caller=request.user,
            reason=serializer.validated_data['reason'],
            description=serializer.validated_data.get('description', ''),
        )
        return Response(DisputeSerializer(dispute).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        return Response(DisputeSerializer(get_dispute_by_id(dispute_id=pk, user=request.user)).data)

    @extend_schema(request=ResolveDisputeSerializer, responses={200: DisputeSerializer})
    @action(detail=True, methods=['post'])
    def resolve(self, request, pk=None):
        """Resolve a dispute (admin only)."""
        serializer = ResolveDisputeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        dispute = resolve_dispute(
            dispute_id=pk,
            admin=request.user,
            resolution=serializer.validated_data['resolution'],
        )
        return Response(DisputeSerializer(dispute).data)
