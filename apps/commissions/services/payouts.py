"""Commission persistence and payout tracking."""

import logging

from django.db import transaction
from django.db.models import Count, Q, QuerySet, Sum, Value
from django.db.models.functions import Coalesce
from django.contrib.auth import get_user_model
from django.utils import timezone
from decimal import Decimal
from typing import Iterable, Optional
from uuid import UUID

from ..models import Commission
from .exceptions import CommissionNotFoundError, CommissionAlreadyPaidError
from .resolver import CommissionBreakdown, calculate_commission

User = get_user_model()
logger = logging.getLogger(__name__)

ZERO = Value(Decimal('0.00'))


@transaction.atomic
def create_commission_for_transaction(*, txn, breakdown: Optional[CommissionBreakdown] = None) -> Commission:
    """
    Persist the commission of a sale. Calling it twice returns the first record.

    Args:
        txn: The Transaction the fee is charged on
        breakdown: Already resolved fee; resolved from the current rules when omitted
    """
    existing = Commission.objects.filter(transaction=txn).first()
    if existing:
        return existing

    if breakdown is None:
        breakdown = calculate_commission(price=txn.price, seller_role=txn.seller.role)

    commission = Commission.objects.create(
        transaction=txn,
        rule_id=breakdown.rule_id,
        amount=breakdown.amount,
        percentage=breakdown.percentage,
    )

    logger.info(
        "Commission %s recorded for transaction %s: %s (%s%%, rule %s)",
        commission.id, txn.transaction_number, commission.amount,
        commission.percentage, breakdown.rule_id or 'default',
    )
    return commission


@transaction.atomic
def mark_commission_paid(*, commission_id: UUID, payment_reference: str = '') -> Commission:
    """
    Raises:
        CommissionNotFoundError: If commission doesn't exist
        CommissionAlreadyPaidError: If it was paid before
    """
    try:
        commission = (
            Commission.objects
            .select_for_update()
            .get(id=commission_id)
        )
    except Commission.DoesNotExist:
        raise CommissionNotFoundError()

    if commission.is_paid:
        raise CommissionAlreadyPaidError()

    commission.is_paid = True
    commission.paid_at = timezone.now()
    commission.payment_reference = payment_reference
    commission.save(update_fields=['is_paid', 'paid_at', 'payment_reference'])

    logger.info("Commission %s marked paid (ref %s)", commission.id, payment_reference or '-')
    return commission


@transaction.atomic
def pay_commissions_batch(*, commission_ids: Iterable[UUID], payment_reference: str) -> int:
    """Mark unpaid commissions paid. Already-paid ids are skipped. Returns rows updated."""
    updated = (
        Commission.objects
        .filter(id__in=list(commission_ids), is_paid=False)
        .update(is_paid=True, paid_at=timezone.now(), payment_reference=payment_reference)
    )
    logger.info("Batch payout %s settled %d commission(s)", payment_reference, updated)
    return updated


def _with_relations(queryset: QuerySet[Commission]) -> QuerySet[Commission]:
    return queryset.select_related(
        'rule',
        'transaction',
        'transaction__seller',
        'transaction__vehicle',
    )


def list_unpaid_commissions() -> QuerySet[Commission]:
    """Oldest first, the order they should be settled in."""
    return _with_relations(Commission.objects.filter(is_paid=False)).order_by('created_at')


def list_seller_commissions(*, seller: User, is_paid: Optional[bool] = None) -> QuerySet[Commission]:
    queryset = Commission.objects.filter(transaction__seller=seller)
    if is_paid is not None:
        queryset = queryset.filter(is_paid=is_paid)
    return _with_relations(queryset).order_by('-created_at')


def get_seller_commission_stats(*, seller: User) -> dict:
    """Totals of fees charged on a seller's sales."""
    return Commission.objects.filter(transaction__seller=seller).aggregate(
        total=Coalesce(Sum('amount'), ZERO),
        paid=Coalesce(Sum('amount', filter=Q(is_paid=True)), ZERO),
        pending=Coalesce(Sum('amount', filter=Q(is_paid=False)), ZERO),
        pending_count=Count('id', filter=Q(is_paid=False)),
    )
