import pytest
from decimal import Decimal
from apps.commissions.models import CommissionRule, CommissionType
from apps.transactions.services import (
    create_transaction,
    process_transaction,
    complete_transaction,
)


def make_rule(**kwargs):
    """Unsaved rule for resolver tests; no database needed."""
    defaults = {
        'name': 'Rule',
        'type': CommissionType.PERCENTAGE,
        'value': Decimal('5'),
        'priority': 0,
        'is_active': True,
    }
    defaults.update(kwargs)
    return CommissionRule(**defaults)


def sell(vehicle, buyer, payment_reference=''):
    txn = create_transaction(vehicle_id=vehicle.id, buyer=buyer)
    process_transaction(transaction_id=txn.id)
    return complete_transaction(transaction_id=txn.id, payment_reference=payment_reference)


@pytest.fixture
def completed_sale(db, vehicle, user, commission_rules):
    """The seller's 25 000 vehicle sold to ``user``: 1 250 commission."""
    return sell(vehicle, user, payment_reference='ref-1')


@pytest.fixture
def completed_dealer_sale(db, dealer_vehicle, user, commission_rules):
    """The dealer's 20 000 vehicle sold to ``user``: 600 commission."""
    return sell(dealer_vehicle, user)


@pytest.fixture
def commission(completed_sale):
    return completed_sale.commission


@pytest.fixture
def dealer_commission(completed_dealer_sale):
    return completed_dealer_sale.commission
