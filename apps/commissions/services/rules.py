"""Default commission rules."""

import logging

from django.db import transaction
from decimal import Decimal

from apps.accounts.models import UserRole
from ..models import CommissionRule, CommissionType

logger = logging.getLogger(__name__)

DEFAULT_RULES = [
    {
        'name': 'Standard commission',
        'description': 'Default commission for every sale',
        'type': CommissionType.PERCENTAGE,
        'value': Decimal('5'),
        'priority': 0,
    },
    {
        'name': 'Dealer commission',
        'description': 'Reduced commission for dealers',
        'type': CommissionType.PERCENTAGE,
        'value': Decimal('3'),
        'user_role': UserRole.DEALER,
        'priority': 10,
    },
    {
        'name': 'Economy vehicles commission',
        'description': 'Flat commission for low-priced vehicles',
        'type': CommissionType.FIXED,
        'value': Decimal('500'),
        'max_price': Decimal('10000'),
        'priority': 5,
    },
    {
        'name': 'Luxury vehicles commission',
        'description': 'Special commission for high-value vehicles',
        'type': CommissionType.PERCENTAGE,
        'value': Decimal('2'),
        'min_price': Decimal('50000'),
        'priority': 15,
    },
]


@transaction.atomic
def seed_default_rules() -> list[CommissionRule]:
    """Create the default rules whose name is not taken yet. Returns the created rules."""
    created = []
    for data in DEFAULT_RULES:
        if CommissionRule.objects.filter(name=data['name']).exists():
            continue
        created.append(CommissionRule.objects.create(**data))

    if created:
        logger.info("Seeded %d commission rule(s)", len(created))
    return created
