"""
Transaction lifecycle.

    create   -> pending      vehicle: available -> reserved
    process  pending -> processing
    complete processing -> completed   vehicle -> sold, commission recorded
    cancel   pending|processing -> cancelled   vehicle -> available

Each operation runs in one database transaction and locks the vehicle row
and then the transaction row before checking its guard, so two concurrent
calls cannot both pass the same guard. Locks are always taken in that
order.
"""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone
from uuid import UUID

from apps.commissions.services import calculate_commission, create_commission_for_transaction
from apps.vehicles.models import Vehicle, VehicleStatus
from apps.vehicles.services import invalidate_vehicle
from ..models import Transaction, TransactionStatus, OPEN_STATUSES
from .exceptions import (
    TransactionNotFoundError,
    VehicleNotFoundError,
    InvalidTransactionStateError,
    VehicleNotAvailableError,
    SelfPurchaseError,
    OpenTransactionExistsError,
)
from .numbering import allocate_transaction_number

User = get_user_model()
logger = logging.getLogger(__name__)


def _lock_for_transition(transaction_id: UUID):
    """Lock the vehicle, then the transaction. Returns (txn, vehicle)."""
    vehicle_id = (
        Transaction.objects
        .filter(id=transaction_id)
        .values_list('vehicle_id', flat=True)
        .first()
    )
    if vehicle_id is None:
        raise TransactionNotFoundError()

    vehicle = Vehicle.objects.select_for_update().get(id=vehicle_id)
    txn = Transaction.objects.select_for_update().get(id=transaction_id)
    return txn, vehicle


def _reject(txn: Transaction, operation: str):
    logger.warning(
        "Rejected %s on transaction %s in status %s",
        operation, txn.transaction_number, txn.status,
    )
    raise InvalidTransactionStateError(f"Cannot {operation} a {txn.status} transaction.")


@transaction.atomic
def create_transaction(
    *,
    vehicle_id: UUID,
    buyer: User,
    payment_method: str = '',
    notes: str = ''
) -> Transaction:
    """
    Open a purchase offer on a listing and reserve the vehicle.

    The price is the listing price; the commission is resolved for the
    seller's role and may be re-resolved on completion.

    Raises:
        VehicleNotFoundError: If vehicle doesn't exist
        VehicleNotAvailableError: If vehicle is unpublished or not available
        SelfPurchaseError: If buyer is the seller
        OpenTransactionExistsError: If another open transaction holds the vehicle
    """
    try:
        vehicle = (
            Vehicle.objects
            .select_for_update()
            .get(id=vehicle_id)
        )
    except Vehicle.DoesNotExist:
        raise VehicleNotFoundError()

    if vehicle.status != VehicleStatus.AVAILABLE or not vehicle.is_published:
        raise VehicleNotAvailableError()

    if vehicle.seller_id == buyer.id:
        raise SelfPurchaseError()

    if Transaction.objects.filter(vehicle=vehicle, status__in=OPEN_STATUSES).exists():
        raise OpenTransactionExistsError()

    seller = vehicle.seller
    breakdown = calculate_commission(price=vehicle.price, seller_role=seller.role)

    txn = Transaction.objects.create(
        transaction_number=allocate_transaction_number(),
        vehicle=vehicle,
        buyer=buyer,
        seller=seller,
        price=vehicle.price,
        commission_amount=breakdown.amount,
        net_amount=vehicle.price - breakdown.amount,
        status=TransactionStatus.PENDING,
        payment_method=payment_method,
        notes=notes,
    )

    vehicle.status = VehicleStatus.RESERVED
    vehicle.save(update_fields=['status', 'updated_at'])
    invalidate_vehicle(vehicle.id)

    logger.info(
        "Transaction %s opened on vehicle %s by %s for %s",
        txn.transaction_number, vehicle.id, buyer.id, txn.price,
    )
    return txn


@transaction.atomic
def process_transaction(*, transaction_id: UUID) -> Transaction:
    """
    Move a pending transaction to processing. The vehicle stays reserved.

    Raises:
        TransactionNotFoundError: If transaction doesn't exist
        InvalidTransactionStateError: If it is not pending
    """
    txn, _vehicle = _lock_for_transition(transaction_id)

    if not txn.can_be_processed():
        _reject(txn, 'process')

    txn.status = TransactionStatus.PROCESSING
    txn.save(update_fields=['status', 'updated_at'])

    logger.info("Transaction %s processing", txn.transaction_number)
    return txn


@transaction.atomic
def complete_transaction(*, transaction_id: UUID, payment_reference: str = '') -> Transaction:
    """
    Complete a processing transaction: vehicle sold, commission recorded.

    The commission is resolved again against the current rules and the
    transaction's commission_amount/net_amount follow the recorded value.

    Raises:
        TransactionNotFoundError: If transaction doesn't exist
        InvalidTransactionStateError: If it is not processing
    """
    txn, vehicle = _lock_for_transition(transaction_id)

    if not txn.can_be_completed():
        _reject(txn, 'complete')

    now = timezone.now()
    breakdown = calculate_commission(price=txn.price, seller_role=txn.seller.role)

    txn.status = TransactionStatus.COMPLETED
    txn.completed_at = now
    txn.payment_reference = payment_reference
    txn.commission_amount = breakdown.amount
    txn.net_amount = txn.price - breakdown.amount
    txn.save(update_fields=[
        'status', 'completed_at', 'payment_reference',
        'commission_amount', 'net_amount', 'updated_at',
    ])

    vehicle.status = VehicleStatus.SOLD
    vehicle.sold_at = now
    vehicle.save(update_fields=['status', 'sold_at', 'updated_at'])
    invalidate_vehicle(vehicle.id)

    create_commission_for_transaction(txn=txn, breakdown=breakdown)

    logger.info(
        "Transaction %s completed (ref %s), vehicle %s sold",
        txn.transaction_number, payment_reference or '-', vehicle.id,
    )
    return txn


@transaction.atomic
def cancel_transaction(*, transaction_id: UUID, reason: str = '') -> Transaction:
    """
    Cancel an open transaction and put the vehicle back on sale.

    The reason is stored as given.

    Raises:
        TransactionNotFoundError: If transaction doesn't exist
        InvalidTransactionStateError: If it is completed, cancelled or refunded
    """
    txn, vehicle = _lock_for_transition(transaction_id)

    if not txn.can_be_cancelled():
        _reject(txn, 'cancel')

    txn.status = TransactionStatus.CANCELLED
    txn.cancelled_at = timezone.now()
    txn.cancelled_reason = reason
    txn.save(update_fields=['status', 'cancelled_at', 'cancelled_reason', 'updated_at'])

    vehicle.status = VehicleStatus.AVAILABLE
    vehicle.save(update_fields=['status', 'updated_at'])
    invalidate_vehicle(vehicle.id)

    logger.info("Transaction %s cancelled: %s", txn.transaction_number, reason or '-')
    return txn
