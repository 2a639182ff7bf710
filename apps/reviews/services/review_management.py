"""Review management service - who may review, and creating reviews."""

import logging

from django.db import transaction, IntegrityError
from django.db.models import QuerySet
from django.contrib.auth import get_user_model
from typing import Optional, Tuple
from uuid import UUID

from apps.transactions.models import Transaction, TransactionStatus
from ..models import Review
from .exceptions import (
    TransactionNotFoundError,
    ReviewNotAllowedError,
    DuplicateReviewError,
    InvalidRatingError,
)

User = get_user_model()
logger = logging.getLogger(__name__)

REVIEW_KINDS = ('received', 'given')


def _review_blocker(txn: Transaction, user: User) -> Optional[str]:
    if txn.status != TransactionStatus.COMPLETED:
        return 'Transaction must be completed'
    if not txn.is_participant(user):
        return 'User is not part of this transaction'
    if Review.objects.filter(transaction=txn, reviewer=user).exists():
        return 'Already reviewed'
    return None


def can_review(*, transaction_id: UUID, user: User) -> Tuple[bool, Optional[str]]:
    """
    Check whether ``user`` may review the transaction.

    Returns:
        (True, None) or (False, reason)
    """
    try:
        txn = Transaction.objects.get(id=transaction_id)
    except Transaction.DoesNotExist:
        return False, 'Transaction not found'

    reason = _review_blocker(txn, user)
    return reason is None, reason


@transaction.atomic
def create_review(
    *,
    transaction_id: UUID,
    reviewer: User,
    rating: int,
    comment: str = ''
) -> Review:
    """
    Review the counterparty of a completed transaction.

    The buyer reviews the seller and the seller reviews the buyer.

    Raises:
        InvalidRatingError: If rating not in 1-5 range
        TransactionNotFoundError: If transaction doesn't exist
        ReviewNotAllowedError: If not completed or reviewer not a participant
        DuplicateReviewError: If reviewer already reviewed this transaction
    """
    if not (1 <= rating <= 5):
        raise InvalidRatingError("Rating must be between 1 and 5")

    try:
        txn = Transaction.objects.select_for_update().get(id=transaction_id)
    except Transaction.DoesNotExist:
        raise TransactionNotFoundError(f"Transaction {transaction_id} not found")

    reason = _review_blocker(txn, reviewer)
    if reason == 'Already reviewed':
        raise DuplicateReviewError("You have already reviewed this transaction")
    if reason:
        raise ReviewNotAllowedError(reason)

    is_buyer_review = txn.buyer_id == reviewer.id

    try:
        review = Review.objects.create(
            transaction=txn,
            reviewer=reviewer,
            reviewed_id=txn.seller_id if is_buyer_review else txn.buyer_id,
            rating=rating,
            comment=comment,
            is_buyer_review=is_buyer_review,
        )
    except IntegrityError:
        raise DuplicateReviewError("You have already reviewed this transaction")

    logger.info(
        "Review %s on transaction %s: %d stars from %s",
        review.id, txn.transaction_number, rating, 'buyer' if is_buyer_review else 'seller',
    )
    return review


def list_user_reviews(*, user_id: UUID, kind: str = 'received') -> QuerySet[Review]:
    """Reviews a user received (default) or gave, newest first."""
    if kind not in REVIEW_KINDS:
        raise ValueError(f"kind must be one of {REVIEW_KINDS}")

    field = 'reviewed_id' if kind == 'received' else 'reviewer_id'
    return (
        Review.objects
        .filter(**{field: user_id})
        .select_related('reviewer', 'reviewed', 'transaction', 'transaction__vehicle')
        .order_by('-created_at')
    )
