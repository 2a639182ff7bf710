import pytest
from apps.transactions.services import create_transaction, process_transaction


@pytest.fixture
def pending_transaction(db, vehicle, user, commission_rules):
    """Buyer ``user`` has an open offer on the seller's 25 000 vehicle."""
    return create_transaction(vehicle_id=vehicle.id, buyer=user, payment_method='bank_transfer')


@pytest.fixture
def processing_transaction(db, pending_transaction):
    return process_transaction(transaction_id=pending_transaction.id)


@pytest.fixture
def buyer_client(authenticated_client):
    """Client of the buyer in the fixtures' transactions."""
    return authenticated_client
