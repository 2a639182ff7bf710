"""Services for commissions business logic."""

from .exceptions import (
    InvalidPriceError,
    CommissionRuleNotFoundError,
    CommissionNotFoundError,
    CommissionAlreadyPaidError,
)
from .resolver import (
    CommissionBreakdown,
    quantize_money,
    ordered_rules,
    resolve_commission,
    active_rules,
    calculate_commission,
    describe_rule,
    commission_table,
)
from .payouts import (
    create_commission_for_transaction,
    mark_commission_paid,
    pay_commissions_batch,
    list_unpaid_commissions,
    list_seller_commissions,
    get_seller_commission_stats,
)
from .rules import DEFAULT_RULES, seed_default_rules

__all__ = [
    # Exceptions
    'InvalidPriceError',
    'CommissionRuleNotFoundError',
    'CommissionNotFoundError',
    'CommissionAlreadyPaidError',
    # Resolver
    'CommissionBreakdown',
    'quantize_money',
    'ordered_rules',
    'resolve_commission',
    'active_rules',
    'calculate_commission',
    'describe_rule',
    'commission_table',
    # Payouts
    'create_commission_for_transaction',
    'mark_commission_paid',
    'pay_commissions_batch',
    'list_unpaid_commissions',
    'list_seller_commissions',
    'get_seller_commission_stats',
    # Rules
    'DEFAULT_RULES',
    'seed_default_rules',
]
