from rest_framework import serializers
from apps.accounts.serializers import UserPublicSerializer
from .models import Review


class ReviewSerializer(serializers.ModelSerializer):
    """Review with both parties and the vehicle sold."""

    reviewer = UserPublicSerializer(read_only=True)
    reviewed = UserPublicSerializer(read_only=True)
    transaction_number = serializers.CharField(source='transaction.transaction_number', read_only=True)
    vehicle_title = serializers.CharField(source='transaction.vehicle.title', read_only=True)

    class Meta:
        model = Review
        fields = [
            'id',
            'transaction',
            'transaction_number',
            'vehicle_title',
            'reviewer',
            'reviewed',
            'rating',
            'stars',
            'comment',
            'is_buyer_review',
            'created_at',
        ]
        read_only_fields = fields


class ReviewCreateSerializer(serializers.Serializer):
    transaction = serializers.UUIDField()
    rating = serializers.IntegerField(min_value=1, max_value=5)
    comment = serializers.CharField(required=False, allow_blank=True, default='', max_length=2000)


class UserReviewsFilterSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=['received', 'given'], default='received')


class ReviewStatsSerializer(serializers.Serializer):
    """Reputation summary of a user."""

    average = serializers.FloatField()
    total = serializers.IntegerField()
    distribution = serializers.DictField(child=serializers.IntegerField())
    positive = serializers.IntegerField()
    negative = serializers.IntegerField()


class CanReviewSerializer(serializers.Serializer):
    can_review = serializers.BooleanField()
    reason = serializers.CharField(allow_null=True)
