"""Transaction lookups and per-user statistics."""

from django.db.models import Count, Q, QuerySet, Sum, Value
from django.db.models.functions import Coalesce
from django.contrib.auth import get_user_model
from decimal import Decimal
from typing import Optional
from uuid import UUID

from ..models import Transaction, TransactionStatus
from .exceptions import TransactionNotFoundError

User = get_user_model()

PARTY_ROLES = ('buyer', 'seller')


def _with_relations(queryset: QuerySet[Transaction]) -> QuerySet[Transaction]:
    return queryset.select_related('vehicle', 'vehicle__brand', 'vehicle__model', 'buyer', 'seller')


def list_user_transactions(
    *,
    user: User,
    role: Optional[str] = None,
    status: Optional[str] = None
) -> QuerySet[Transaction]:
    """
    Transactions the user takes part in.

    Args:
        user: Buyer or seller
        role: 'buyer' or 'seller' to restrict the side; both sides when None
        status: Optional status filter
    """
    if role in PARTY_ROLES:
        queryset = Transaction.objects.filter(**{role: user})
    else:
        queryset = Transaction.objects.filter(Q(buyer=user) | Q(seller=user))

    if status:
        queryset = queryset.filter(status=status)

    return _with_relations(queryset).order_by('-created_at')


def list_transactions(*, status: Optional[str] = None) -> QuerySet[Transaction]:
    """All transactions, for admins."""
    queryset = Transaction.objects.all()
    if status:
        queryset = queryset.filter(status=status)
    return _with_relations(queryset).order_by('-created_at')


def list_pending_transactions() -> QuerySet[Transaction]:
    """Pending offers, oldest first."""
    return _with_relations(
        Transaction.objects.filter(status=TransactionStatus.PENDING)
    ).order_by('created_at')


def get_transaction(*, transaction_id: UUID) -> Transaction:
    """
    Raises:
        TransactionNotFoundError: If transaction doesn't exist
    """
    try:
        return _with_relations(Transaction.objects.all()).get(id=transaction_id)
    except Transaction.DoesNotExist:
        raise TransactionNotFoundError()


def get_transaction_by_number(*, transaction_number: str) -> Transaction:
    """
    Raises:
        TransactionNotFoundError: If no transaction has that number
    """
    try:
        return _with_relations(Transaction.objects.all()).get(
            transaction_number=transaction_number.upper()
        )
    except Transaction.DoesNotExist:
        raise TransactionNotFoundError()


def get_user_transaction_stats(*, user: User, role: str) -> dict:
    """Counts by status and completed volume for one side of the user's deals."""
    if role not in PARTY_ROLES:
        raise ValueError(f"role must be one of {PARTY_ROLES}")

    stats = Transaction.objects.filter(**{role: user}).aggregate(
        total=Count('id'),
        completed=Count('id', filter=Q(status=TransactionStatus.COMPLETED)),
        pending=Count('id', filter=Q(status=TransactionStatus.PENDING)),
        processing=Count('id', filter=Q(status=TransactionStatus.PROCESSING)),
        cancelled=Count('id', filter=Q(status=TransactionStatus.CANCELLED)),
        total_amount=Coalesce(
            Sum('price', filter=Q(status=TransactionStatus.COMPLETED)),
            Value(Decimal('0.00')),
        ),
    )
    stats['role'] = role
    return stats
