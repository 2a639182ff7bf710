from rest_framework import status, serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .serializers import (
    ReviewSerializer,
    ReviewCreateSerializer,
    UserReviewsFilterSerializer,
    ReviewStatsSerializer,
    CanReviewSerializer,
)
from .services import (
    can_review as can_review_service,
    create_review as create_review_service,
    list_user_reviews,
    get_review_stats,
    ReviewsServiceError,
    TransactionNotFoundError,
    ReviewNotAllowedError,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


class ReviewPagination(PageNumberPagination):
    """Custom pagination for reviews."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema(
    request=ReviewCreateSerializer,
    responses={
        201: ReviewSerializer,
        400: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Review the other party of a completed transaction.",
    tags=['reviews'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def create_review(request):
    serializer = ReviewCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        review = create_review_service(
            transaction_id=serializer.validated_data['transaction'],
            reviewer=request.user,
            rating=serializer.validated_data['rating'],
            comment=serializer.validated_data['comment'],
        )
    except TransactionNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except ReviewNotAllowedError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except ReviewsServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(ReviewSerializer(review).data, status=status.HTTP_201_CREATED)


@extend_schema(
    parameters=[UserReviewsFilterSerializer],
    responses={200: ReviewSerializer(many=True)},
    description="Reviews a user received (default) or gave.",
    tags=['reviews'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def user_reviews(request, user_id):
    filter_serializer = UserReviewsFilterSerializer(data=request.query_params)
    filter_serializer.is_valid(raise_exception=True)

    reviews = list_user_reviews(user_id=user_id, kind=filter_serializer.validated_data['type'])

    paginator = ReviewPagination()
    page = paginator.paginate_queryset(reviews, request)
    return paginator.get_paginated_response(ReviewSerializer(page, many=True).data)


@extend_schema(
    responses={200: ReviewStatsSerializer},
    description="Average rating, distribution and positive/negative counts of a user.",
    tags=['reviews'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def user_review_stats(request, user_id):
    return Response(ReviewStatsSerializer(get_review_stats(user_id=user_id)).data)


@extend_schema(
    responses={200: CanReviewSerializer},
    description="Whether the current user may review a transaction, with the reason if not.",
    tags=['reviews'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def can_review(request, transaction_id):
    allowed, reason = can_review_service(transaction_id=transaction_id, user=request.user)
    return Response({'can_review': allowed, 'reason': reason})
