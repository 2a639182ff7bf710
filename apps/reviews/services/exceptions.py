"""Domain exceptions for reviews app."""


class ReviewsServiceError(Exception):
    """Base exception for all reviews service errors."""
    pass


class TransactionNotFoundError(ReviewsServiceError):
    pass


class ReviewNotAllowedError(ReviewsServiceError):
    """Transaction not completed, or user not part of it."""
    pass


class DuplicateReviewError(ReviewsServiceError):
    """User already reviewed this transaction."""
    pass


class InvalidRatingError(ReviewsServiceError):
    """Rating must be between 1 and 5."""
    pass
