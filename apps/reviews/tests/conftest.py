import pytest
from apps.transactions.services import create_transaction, process_transaction, complete_transaction
from apps.reviews.services import create_review


@pytest.fixture
def completed_transaction(db, vehicle, user):
    """``user`` bought the seller's Corolla."""
    txn = create_transaction(vehicle_id=vehicle.id, buyer=user)
    process_transaction(transaction_id=txn.id)
    return complete_transaction(transaction_id=txn.id, payment_reference='ref-1')


@pytest.fixture
def open_transaction(db, dealer_vehicle, user):
    return create_transaction(vehicle_id=dealer_vehicle.id, buyer=user)


@pytest.fixture
def buyer_review(completed_transaction, user):
    return create_review(
        transaction_id=completed_transaction.id,
        reviewer=user,
        rating=5,
        comment='Car exactly as described',
    )
