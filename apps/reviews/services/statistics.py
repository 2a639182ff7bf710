"""Statistics service - reputation figures for a user."""

from django.db.models import Avg, Count, Q
from uuid import UUID

from ..models import Review


def get_review_stats(*, user_id: UUID) -> dict:
    """
    Aggregate the reviews a user has received.

    Returns:
        Dictionary with:
        - average: float - mean rating rounded to 1 decimal (0 without reviews)
        - total: int
        - distribution: dict - count per rating, keys '1'..'5'
        - positive: int - ratings of 4 or 5
        - negative: int - ratings of 1 or 2
    """
    queryset = Review.objects.filter(reviewed_id=user_id)

    aggregates = queryset.aggregate(
        average=Avg('rating'),
        total=Count('id'),
        positive=Count('id', filter=Q(rating__gte=4)),
        negative=Count('id', filter=Q(rating__lte=2)),
        **{f'r{i}': Count('id', filter=Q(rating=i)) for i in range(1, 6)},
    )

    return {
        'average': round(float(aggregates['average'] or 0), 1),
        'total': aggregates['total'],
        'distribution': {str(i): aggregates[f'r{i}'] for i in range(1, 6)},
        'positive': aggregates['positive'],
        'negative': aggregates['negative'],
    }
