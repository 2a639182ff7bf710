"""
Reviews services - Business logic layer.

- Review eligibility and creation
- Reputation statistics
"""

from .review_management import (
    REVIEW_KINDS,
    can_review,
    create_review,
    list_user_reviews,
)
from .statistics import get_review_stats
from .exceptions import (
    ReviewsServiceError,
    TransactionNotFoundError,
    ReviewNotAllowedError,
    DuplicateReviewError,
    InvalidRatingError,
)

__all__ = [
    # Review Management Services
    'REVIEW_KINDS',
    'can_review',
    'create_review',
    'list_user_reviews',
    # Statistics Services
    'get_review_stats',
    # Exceptions
    'ReviewsServiceError',
    'TransactionNotFoundError',
    'ReviewNotAllowedError',
    'DuplicateReviewError',
    'InvalidRatingError',
]
