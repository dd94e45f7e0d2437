from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import RatingCreateSerializer, RatingFilterSerializer, RatingSerializer
from .services import submit_rating, get_ratings_for_user, get_ratings_for_request


@extend_schema(
    methods=['GET'],
    parameters=[RatingFilterSerializer],
    responses={200: RatingSerializer(many=True)},
    description="Ratings received by a user, or left on one exchange.",
    tags=['ratings'],
)
@extend_schema(
    methods=['POST'],
    request=RatingCreateSerializer,
    responses={201: RatingSerializer},
    description="Rate the other party of a completed exchange.",
    tags=['ratings'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def ratings(request):
    if request.method == 'POST':
        serializer = RatingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        rating = submit_rating(
            request_id=serializer.validated_data['request'],
            caller=request.user,
            stars=serializer.validated_data['stars'],
            comment=serializer.validated_data.get('comment', ''),
        )
        return Response(RatingSerializer(rating).data, status=status.HTTP_201_CREATED)

    filters = RatingFilterSerializer(data=request.query_params)
    filters.is_valid(raise_exception=True)

    if filters.validated_data.get('ratee'):
        queryset = get_ratings_for_user(user_id=filters.validated_data['ratee'])
    else:
        queryset = get_ratings_for_request(request_id=filters.validated_data['request'], user=request.user)

    return Response(RatingSerializer(queryset, many=True).data)
