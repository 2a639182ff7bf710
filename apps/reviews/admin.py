from django.contrib import admin
from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    """Reviews are written by transaction parties; admins can only moderate comments."""

    list_display = [
        'get_transaction_number',
        'reviewer',
        'reviewed',
        'rating',
        'is_buyer_review',
        'created_at',
    ]
    list_filter = ['rating', 'is_buyer_review', 'created_at']
    search_fields = ['transaction__transaction_number', 'reviewer__email', 'reviewed__email', 'comment']
    readonly_fields = ['transaction', 'reviewer', 'reviewed', 'rating', 'is_buyer_review', 'created_at', 'updated_at']
    date_hierarchy = 'created_at'

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('transaction', 'reviewer', 'reviewed')

    def get_transaction_number(self, obj):
        return obj.transaction.transaction_number
    get_transaction_number.short_description = 'Transaction'
    get_transaction_number.admin_order_field = 'transaction__transaction_number'

    def has_add_permission(self, request):
        return False
