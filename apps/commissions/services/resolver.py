"""
Commission resolver.

Picks the fee for a sale from an ordered set of commission rules:

    1. active rules, highest ``priority`` first, older rule first on ties
    2. the first rule whose price band contains the price and whose role
       (if any) equals the seller's role wins
    3. no match falls back to ``DEFAULT_COMMISSION_PERCENTAGE`` percent

``resolve_commission`` does no I/O so it can be called with any rule
sequence; ``calculate_commission`` loads the active rules from the database.

Example::

    breakdown = calculate_commission(price=Decimal('20000'), seller_role='dealer')
    breakdown.amount      # Decimal('600.00')
    breakdown.percentage  # Decimal('3.00')
"""

from dataclasses import dataclass
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional
from uuid import UUID

from django.conf import settings
from django.db.models import F, QuerySet

from ..models import CommissionRule, CommissionType
from .exceptions import InvalidPriceError

CENT = Decimal('0.01')
HUNDRED = Decimal('100')
_OLDEST = datetime.min.replace(tzinfo=dt_timezone.utc)


@dataclass(frozen=True)
class CommissionBreakdown:
    amount: Decimal
    percentage: Decimal
    rule_id: Optional[UUID] = None
    rule_name: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.rule_id is None


def quantize_money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def ordered_rules(rules: Iterable[CommissionRule]) -> list[CommissionRule]:
    """
    Sort rules into resolution order.

    Unsaved rules (no created_at) count as oldest; input order breaks any
    remaining tie since sorting is stable.
    """
    return sorted(
        rules,
        key=lambda rule: (-rule.priority, rule.created_at or _OLDEST),
    )


def resolve_commission(
    *,
    price: Decimal,
    seller_role: Optional[str] = None,
    rules: Iterable[CommissionRule],
    default_percentage: Optional[Decimal] = None,
) -> CommissionBreakdown:
    """
    Resolve the commission for a sale.

    Args:
        price: Sale price, must be >= 0
        seller_role: Role of the selling user, or None
        rules: Candidate rules; inactive ones are skipped
        default_percentage: Fallback percent, defaults to the
            DEFAULT_COMMISSION_PERCENTAGE setting

    Returns:
        CommissionBreakdown with amount and percentage rounded half-up to
        cents. For fixed rules the percentage is derived from the amount,
        and is 0 when the price is 0.

    Raises:
        InvalidPriceError: If price is negative
    """
    price = Decimal(price)
    if price < 0:
        raise InvalidPriceError()

    for rule in ordered_rules(rules):
        if not rule.applies_to(price, seller_role):
            continue

        amount = quantize_money(rule.calculate_amount(price))
        if rule.type == CommissionType.PERCENTAGE:
            percentage = quantize_money(rule.value)
        elif price > 0:
            percentage = quantize_money(amount / price * HUNDRED)
        else:
            percentage = quantize_money(Decimal('0'))

        return CommissionBreakdown(
            amount=amount,
            percentage=percentage,
            rule_id=rule.id,
            rule_name=rule.name,
        )

    if default_percentage is None:
        default_percentage = settings.DEFAULT_COMMISSION_PERCENTAGE
    default_percentage = Decimal(default_percentage)

    return CommissionBreakdown(
        amount=quantize_money(price * default_percentage / HUNDRED),
        percentage=quantize_money(default_percentage),
    )


def active_rules() -> QuerySet[CommissionRule]:
    return CommissionRule.objects.filter(is_active=True).order_by('-priority', 'created_at', 'id')


def calculate_commission(*, price: Decimal, seller_role: Optional[str] = None) -> CommissionBreakdown:
    """Resolve against the active rules currently stored."""
    return resolve_commission(price=price, seller_role=seller_role, rules=active_rules())


def _plain(value) -> str:
    return f"{Decimal(value).normalize():f}"


def describe_rule(rule: CommissionRule) -> str:
    """Human-readable summary, e.g. 'Luxury: 2% of price (prices from $50000)'."""
    if rule.description:
        return rule.description

    if rule.type == CommissionType.PERCENTAGE:
        text = f"{rule.name}: {_plain(rule.value)}% of price"
    else:
        text = f"{rule.name}: ${_plain(rule.value)} flat"

    if rule.min_price is not None and rule.max_price is not None:
        text += f" (prices between ${_plain(rule.min_price)} and ${_plain(rule.max_price)})"
    elif rule.min_price is not None:
        text += f" (prices from ${_plain(rule.min_price)})"
    elif rule.max_price is not None:
        text += f" (prices up to ${_plain(rule.max_price)})"

    if rule.user_role:
        text += f" - {rule.get_user_role_display()} only"

    return text


def commission_table() -> QuerySet[CommissionRule]:
    """Active rules in the order shown to sellers."""
    return (
        CommissionRule.objects
        .filter(is_active=True)
        .order_by('-priority', F('min_price').asc(nulls_first=True), 'created_at')
    )
