from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from apps.orders.serializers import SwipeRequestSerializer
from apps.orders.services import get_post_requests
from .serializers import PostCreateSerializer, PostSerializer
from .services import (
    create_post,
    get_post_by_id,
    list_open_posts,
    get_user_posts,
    close_post,
)


class PostPagination(PageNumberPagination):
    """Custom pagination for posts."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class PostViewSet(viewsets.GenericViewSet):
    """
    ViewSet for swipe posts.

    list: Open posts, newest first
    create: Publish a post
    retrieve: Get one post
    mine: Posts created by the current user
    close: Close a post (seller only)
    requests: Requests filed against a post (seller only)
    """

    serializer_class = PostSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = PostPagination

    def get_queryset(self):
        return list_open_posts()

    def list(self, request):
        """Open posts with swipes left."""
        page = self.paginate_queryset(list_open_posts())
        return self.get_paginated_response(PostSerializer(page, many=True).data)

    @extend_schema(request=PostCreateSerializer, responses={201: PostSerializer})
    def create(self, request):
        """Publish a new post."""
        serializer = PostCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        post = create_post(
            seller=request.user,
            capacity_total=serializer.validated_data['capacity_total'],
            location=serializer.validated_data.get('location', ''),
            notes=serializer.validated_data.get('notes', ''),
            max_value_hint=serializer.validated_data.get('max_value_hint'),
        )
        return Response(PostSerializer(post).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        return Response(PostSerializer(get_post_by_id(post_id=pk)).data)

    @action(detail=False, methods=['get'])
    def mine(self, request):
        """Posts created by the current user."""
        page = self.paginate_queryset(get_user_posts(user=request.user))
        return self.get_paginated_response(PostSerializer(page, many=True).data)

    @extend_schema(request=None)
    @action(detail=True, methods=['post'])
    def close(self, request, pk=None):
        """Stop accepting requests on this post."""
        post = close_post(post_id=pk, seller=request.user)
        return Response(PostSerializer(post).data)

    @extend_schema(responses={200: SwipeRequestSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def requests(self, request, pk=None):
        """Requests filed against this post."""
        swipe_requests = get_post_requests(post_id=pk, seller=request.user)
        serializer = SwipeRequestSerializer(swipe_requests, many=True, context={'request': request})
        return Response(serializer.data)
