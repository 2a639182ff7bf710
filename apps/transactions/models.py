from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class TransactionStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    PROCESSING = 'processing', 'Processing'
    COMPLETED = 'completed', 'Completed'
    CANCELLED = 'cancelled', 'Cancelled'
    REFUNDED = 'refunded', 'Refunded'


OPEN_STATUSES = (TransactionStatus.PENDING, TransactionStatus.PROCESSING)
TERMINAL_STATUSES = (TransactionStatus.COMPLETED, TransactionStatus.CANCELLED, TransactionStatus.REFUNDED)


class PaymentMethod(models.TextChoices):
    CASH = 'cash', 'Cash'
    BANK_TRANSFER = 'bank_transfer', 'Bank transfer'
    CARD = 'card', 'Card'
    FINANCING = 'financing', 'Financing'
    OTHER = 'other', 'Other'


class Transaction(models.Model):
    """
    A buyer's attempt to purchase one listing.

    pending -> processing -> completed, with cancellation allowed from
    either open state. ``refunded`` is only set by admins.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    transaction_number = models.CharField(max_length=50, unique=True, editable=False)
    vehicle = models.ForeignKey('vehicles.Vehicle', on_delete=models.PROTECT, related_name='transactions')
    buyer = models.ForeignKey('accounts.User', on_delete=models.PROTECT, related_name='purchases')
    seller = models.ForeignKey('accounts.User', on_delete=models.PROTECT, related_name='sales')

    price = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal('0.00'))])
    commission_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    net_amount = models.DecimalField(max_digits=12, decimal_places=2)

    status = models.CharField(
        max_length=20,
        choices=TransactionStatus.choices,
        default=TransactionStatus.PENDING,
        db_index=True,
    )
    payment_method = models.CharField(max_length=50, choices=PaymentMethod.choices, blank=True)
    payment_reference = models.CharField(max_length=255, blank=True)
    notes = models.TextField(blank=True)

    completed_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    cancelled_reason = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'transactions'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['buyer', 'status']),
            models.Index(fields=['seller', 'status']),
            models.Index(fields=['created_at']),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['vehicle'],
                condition=models.Q(status__in=OPEN_STATUSES),
                name='one_open_transaction_per_vehicle',
            ),
            models.CheckConstraint(
                condition=models.Q(price__gte=0) & models.Q(commission_amount__gte=0),
                name='transaction_amounts_non_negative',
            ),
        ]

    def __str__(self):
        return self.transaction_number

    @property
    def is_open(self):
        return self.status in OPEN_STATUSES

    @property
    def is_terminal(self):
        return self.status in TERMINAL_STATUSES

    def can_be_processed(self):
        return self.status == TransactionStatus.PENDING

    def can_be_completed(self):
        return self.status == TransactionStatus.PROCESSING

    def can_be_cancelled(self):
        return self.status in OPEN_STATUSES

    def is_participant(self, user):
        user_id = getattr(user, 'id', None)
        return user_id is not None and user_id in (self.buyer_id, self.seller_id)
