from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid

from apps.accounts.models import UserRole


class CommissionType(models.TextChoices):
    PERCENTAGE = 'percentage', 'Percentage of price'
    FIXED = 'fixed', 'Fixed amount'


class CommissionRule(models.Model):
    """
    Fee policy for sales matching a price band and, optionally, a seller role.

    Active rules are tried by priority (highest first); on equal priority the
    older rule wins.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    type = models.CharField(max_length=20, choices=CommissionType.choices, default=CommissionType.PERCENTAGE)
    value = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal('0.00'))])
    min_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    max_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    user_role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        blank=True,
        default='',
    )
    is_active = models.BooleanField(default=True)
    priority = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'commission_rules'
        ordering = ['-priority', 'created_at', 'id']
        indexes = [
            models.Index(fields=['is_active', '-priority']),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(value__gte=0),
                name='commission_rule_value_non_negative',
            ),
            models.CheckConstraint(
                condition=(
                    models.Q(min_price__isnull=True)
                    | models.Q(max_price__isnull=True)
                    | models.Q(min_price__lte=models.F('max_price'))
                ),
                name='commission_rule_price_band_ordered',
            ),
        ]

    def __str__(self):
        return self.name

    def applies_to_price(self, price: Decimal) -> bool:
        """Bounds are inclusive; a missing bound is unbounded."""
        if self.min_price is not None and price < self.min_price:
            return False
        if self.max_price is not None and price > self.max_price:
            return False
        return True

    def applies_to_role(self, role) -> bool:
        return not self.user_role or self.user_role == role

    def applies_to(self, price: Decimal, role) -> bool:
        return self.is_active and self.applies_to_price(price) and self.applies_to_role(role)

    def calculate_amount(self, price: Decimal) -> Decimal:
        """Unrounded fee. A flat fee is charged as is, whatever the price."""
        if self.type == CommissionType.PERCENTAGE:
            return price * self.value / Decimal('100')
        return self.value


class Commission(models.Model):
    """Fee owed to the marketplace for one completed transaction."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    transaction = models.OneToOneField(
        'transactions.Transaction',
        on_delete=models.CASCADE,
        related_name='commission',
    )
    rule = models.ForeignKey(
        CommissionRule,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='commissions',
    )
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    percentage = models.DecimalField(max_digits=7, decimal_places=2)
    is_paid = models.BooleanField(default=False)
    paid_at = models.DateTimeField(null=True, blank=True)
    payment_reference = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'commissions'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['is_paid', 'created_at']),
        ]

    def __str__(self):
        return f"{self.amount} on {self.transaction_id}"
