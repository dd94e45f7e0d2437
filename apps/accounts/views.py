from rest_framework import generics, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from .models import User
from .serializers import (
    ProfileSerializer,
    CurrentUserSerializer,
    ProfileUpdateSerializer,
)
from .services import get_leaderboard


class LeaderboardQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(required=False, min_value=1, max_value=50, default=5)


@extend_schema(
    responses={200: CurrentUserSerializer},
    description="Get the current authenticated user's profile.",
    tags=['accounts'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated user profile."""
    return Response(CurrentUserSerializer(request.user).data)


@extend_schema(
    request=ProfileUpdateSerializer,
    responses={200: CurrentUserSerializer},
    description="Update the current user's display name or role preference.",
    tags=['accounts'],
)
@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def update_profile(request):
    """Update user profile."""
    serializer = ProfileUpdateSerializer(request.user, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    serializer.save()
    return Response(CurrentUserSerializer(request.user).data)


@extend_schema(
    parameters=[
        OpenApiParameter('limit', OpenApiTypes.INT, description='Number of sellers (1-50)'),
    ],
    responses={200: ProfileSerializer(many=True)},
    description="Top sellers by completed exchanges.",
    tags=['accounts'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def leaderboard(request):
    """Sellers ranked by completed exchanges."""
    query = LeaderboardQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    sellers = get_leaderboard(limit=query.validated_data['limit'])
    return Response(ProfileSerializer(sellers, many=True).data)


class UserDetailView(generics.RetrieveAPIView):
    """
    Get user profile by ID.

    GET /api/accounts/users/{id}/
    """
    queryset = User.objects.filter(is_active=True)
    serializer_class = ProfileSerializer
    permission_classes = [IsAuthenticated]
