from decimal import Decimal
from rest_framework import serializers
from apps.accounts.models import UserRole
from .models import CommissionRule, Commission, CommissionType
from .services import describe_rule


class CommissionRuleSerializer(serializers.ModelSerializer):
    """Admin CRUD for commission rules."""

    summary = serializers.SerializerMethodField()

    class Meta:
        model = CommissionRule
        fields = [
            'id',
            'name',
            'description',
            'summary',
            'type',
            'value',
            'min_price',
            'max_price',
            'user_role',
            'is_active',
            'priority',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'summary', 'created_at', 'updated_at']

    def get_summary(self, obj) -> str:
        return describe_rule(obj)

    def validate(self, attrs):
        instance = self.instance
        rule_type = attrs.get('type', instance.type if instance else CommissionType.PERCENTAGE)
        value = attrs.get('value', instance.value if instance else None)
        min_price = attrs.get('min_price', instance.min_price if instance else None)
        max_price = attrs.get('max_price', instance.max_price if instance else None)

        if rule_type == CommissionType.PERCENTAGE and value is not None and value > 100:
            raise serializers.ValidationError({'value': 'Percentage cannot exceed 100'})

        if min_price is not None and max_price is not None and min_price > max_price:
            raise serializers.ValidationError({'max_price': 'Must be greater than or equal to min_price'})

        return attrs


class CommissionTableSerializer(serializers.ModelSerializer):
    """Public view of active rules."""

    summary = serializers.SerializerMethodField()

    class Meta:
        model = CommissionRule
        fields = ['name', 'summary', 'type', 'value', 'min_price', 'max_price', 'user_role', 'priority']
        read_only_fields = fields

    def get_summary(self, obj) -> str:
        return describe_rule(obj)


class CommissionSerializer(serializers.ModelSerializer):

    transaction_number = serializers.CharField(source='transaction.transaction_number', read_only=True)
    sale_price = serializers.DecimalField(
        source='transaction.price', max_digits=12, decimal_places=2, read_only=True
    )
    vehicle_title = serializers.CharField(source='transaction.vehicle.title', read_only=True)
    seller = serializers.UUIDField(source='transaction.seller_id', read_only=True)
    rule_name = serializers.CharField(source='rule.name', read_only=True, default=None)

    class Meta:
        model = Commission
        fields = [
            'id',
            'transaction',
            'transaction_number',
            'sale_price',
            'vehicle_title',
            'seller',
            'rule',
            'rule_name',
            'amount',
            'percentage',
            'is_paid',
            'paid_at',
            'payment_reference',
            'created_at',
        ]
        read_only_fields = fields


class CommissionFilterSerializer(serializers.Serializer):
    is_paid = serializers.BooleanField(required=False, allow_null=True, default=None)


class MarkPaidInputSerializer(serializers.Serializer):
    payment_reference = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')


class PayBatchInputSerializer(serializers.Serializer):
    commission_ids = serializers.ListField(child=serializers.UUIDField(), min_length=1)
    payment_reference = serializers.CharField(max_length=255)


class PayBatchResponseSerializer(serializers.Serializer):
    updated = serializers.IntegerField()


class QuoteInputSerializer(serializers.Serializer):
    """Resolver preview. Negative prices are rejected by the resolver itself."""

    price = serializers.DecimalField(max_digits=12, decimal_places=2)
    role = serializers.ChoiceField(choices=UserRole.choices, required=False, allow_null=True, default=None)


class QuoteResponseSerializer(serializers.Serializer):
    price = serializers.DecimalField(max_digits=12, decimal_places=2)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    percentage = serializers.DecimalField(max_digits=7, decimal_places=2)
    net_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    rule_id = serializers.UUIDField(allow_null=True)
    rule_name = serializers.CharField(allow_null=True)


class SellerCommissionStatsSerializer(serializers.Serializer):
    total = serializers.DecimalField(max_digits=14, decimal_places=2)
    paid = serializers.DecimalField(max_digits=14, decimal_places=2)
    pending = serializers.DecimalField(max_digits=14, decimal_places=2)
    pending_count = serializers.IntegerField()
