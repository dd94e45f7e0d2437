from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .serializers import (
    RequestCreateSerializer,
    RequestFilterSerializer,
    MarkOrderedSerializer,
    CancelRequestSerializer,
    SwipeRequestSerializer,
    AuditLogEntrySerializer,
)
from .services import (
    create_request,
    get_request_for_user,
    get_user_requests,
    accept_request,
    decline_request,
    mark_ordered,
    mark_picked_up,
    mark_completed,
    cancel_request,
    get_audit_trail,
)


class RequestPagination(PageNumberPagination):
    """Custom pagination for requests."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class SwipeRequestViewSet(viewsets.GenericViewSet):
    """
    ViewSet for swipe requests.

    All business logic is handled by services; taxonomy errors are rendered
    by the project exception handler.

    list: Requests the user is a party to
    create: File a request against a post
    retrieve: Get one request
    accept / decline / mark_ordered / mark_picked_up / mark_completed / cancel:
        Lifecycle transitions
    audit: Audit trail of the request
    """

    serializer_class = SwipeRequestSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = RequestPagination

    def get_queryset(self):
        return get_user_requests(user=self.request.user)

    def _respond(self, swipe_request, status_code=status.HTTP_200_OK):
        serializer = SwipeRequestSerializer(swipe_request, context={'request': self.request})
        return Response(serializer.data, status=status_code)

    @extend_schema(parameters=[RequestFilterSerializer], tags=['requests'])
    def list(self, request):
        """List requests where the user is buyer or seller."""
        filters = RequestFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        queryset = get_user_requests(
            user=request.user,
            role=filters.validated_data.get('role'),
            status=filters.validated_data.get('status'),
        )
        page = self.paginate_queryset(queryset)
        serializer = SwipeRequestSerializer(page, many=True, context={'request': request})
        return self.get_paginated_response(serializer.data)

    @extend_schema(request=RequestCreateSerializer, responses={201: SwipeRequestSerializer}, tags=['requests'])
    def create(self, request):
        """File a request, reserving one swipe from the post."""
        serializer = RequestCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        swipe_request = create_request(
            buyer=request.user,
            post_id=serializer.validated_data['post'],
            items_text=serializer.validated_data['items_text'],
            instructions=serializer.validated_data.get('instructions', ''),
            est_total=serializer.validated_data.get('est_total'),
        )
        return self._respond(swipe_request, status.HTTP_201_CREATED)

    @extend_schema(tags=['requests'])
    def retrieve(self, request, pk=None):
        """Get a request the user is a party to."""
        return self._respond(get_request_for_user(request_id=pk, user=request.user))

    @extend_schema(request=None, tags=['requests'])
    @action(detail=True, methods=['post'])
    def accept(self, request, pk=None):
        """Seller accepts the request."""
        return self._respond(accept_request(request_id=pk, caller=request.user))

    @extend_schema(request=None, tags=['requests'])
    @action(detail=True, methods=['post'])
    def decline(self, request, pk=None):
        """Seller declines the request."""
        return self._respond(decline_request(request_id=pk, caller=request.user))

    @extend_schema(request=MarkOrderedSerializer, tags=['requests'])
    @action(detail=True, methods=['post'])
    def mark_ordered(self, request, pk=None):
        """Seller confirms the order was placed."""
        serializer = MarkOrderedSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        swipe_request = mark_ordered(
            request_id=pk,
            caller=request.user,
            proof_path=serializer.validated_data.get('proof_path'),
            order_id_text=serializer.validated_data.get('order_id_text'),
        )
        return self._respond(swipe_request)

    @extend_schema(request=None, tags=['requests'])
    @action(detail=True, methods=['post'])
    def mark_picked_up(self, request, pk=None):
        """Buyer confirms pickup."""
        return self._respond(mark_picked_up(request_id=pk, caller=request.user))

    @extend_schema(request=None, tags=['requests'])
    @action(detail=True, methods=['post'])
    def mark_completed(self, request, pk=None):
        """Either party confirms the exchange is done."""
        return self._respond(mark_completed(request_id=pk, caller=request.user))

    @extend_schema(request=CancelRequestSerializer, tags=['requests'])
    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        """Either party cancels before the order is placed."""
        serializer = CancelRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        swipe_request = cancel_request(
            request_id=pk,
            caller=request.user,
            reason=serializer.validated_data['reason'],
        )
        return self._respond(swipe_request)

    @extend_schema(responses={200: AuditLogEntrySerializer(many=True)}, tags=['requests'])
    @action(detail=True, methods=['get'])
    def audit(self, request, pk=None):
        """Audit trail of the request, oldest first."""
        entries = get_audit_trail(request_id=pk, user=request.user)
        return Response(AuditLogEntrySerializer(entries, many=True).data)
