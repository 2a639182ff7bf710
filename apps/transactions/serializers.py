from rest_framework import serializers
from apps.accounts.serializers import UserPublicSerializer
from apps.vehicles.serializers import VehicleListSerializer
from .models import Transaction, TransactionStatus, PaymentMethod


class TransactionSerializer(serializers.ModelSerializer):
    """Transaction detail as seen by its participants."""

    vehicle = VehicleListSerializer(read_only=True)
    buyer = UserPublicSerializer(read_only=True)
    seller = UserPublicSerializer(read_only=True)
    can_be_processed = serializers.BooleanField(read_only=True)
    can_be_completed = serializers.BooleanField(read_only=True)
    can_be_cancelled = serializers.BooleanField(read_only=True)

    class Meta:
        model = Transaction
        fields = [
            'id',
            'transaction_number',
            'vehicle',
            'buyer',
            'seller',
            'price',
            'commission_amount',
            'net_amount',
            'status',
            'payment_method',
            'payment_reference',
            'notes',
            'can_be_processed',
            'can_be_completed',
            'can_be_cancelled',
            'completed_at',
            'cancelled_at',
            'cancelled_reason',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class TransactionListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    vehicle_title = serializers.CharField(source='vehicle.title', read_only=True)
    buyer_username = serializers.CharField(source='buyer.username', read_only=True)
    seller_username = serializers.CharField(source='seller.username', read_only=True)

    class Meta:
        model = Transaction
        fields = [
            'id',
            'transaction_number',
            'vehicle',
            'vehicle_title',
            'buyer_username',
            'seller_username',
            'price',
            'status',
            'created_at',
        ]
        read_only_fields = fields


class TransactionCreateSerializer(serializers.Serializer):
    """Purchase offer input. Price comes from the listing."""

    vehicle = serializers.UUIDField()
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices, required=False, allow_blank=True, default='')
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class TransactionFilterSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=['buyer', 'seller'], required=False)
    status = serializers.ChoiceField(choices=TransactionStatus.choices, required=False)


class CompleteTransactionSerializer(serializers.Serializer):
    payment_reference = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')


class CancelTransactionSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default='', trim_whitespace=False)


class PartyStatsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    completed = serializers.IntegerField()
    pending = serializers.IntegerField()
    processing = serializers.IntegerField()
    cancelled = serializers.IntegerField()
    total_amount = serializers.DecimalField(max_digits=14, decimal_places=2)


class TransactionStatsSerializer(serializers.Serializer):
    as_buyer = PartyStatsSerializer()
    as_seller = PartyStatsSerializer()
