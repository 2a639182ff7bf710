from django.contrib import admin
from django.utils.html import format_html
from .models import Transaction, TransactionStatus


STATUS_COLORS = {
    TransactionStatus.PENDING: ('#E5C49A', '#2C1810'),
    TransactionStatus.PROCESSING: ('#A47449', 'white'),
    TransactionStatus.COMPLETED: ('#6B8E5E', 'white'),
    TransactionStatus.CANCELLED: ('#B85C5C', 'white'),
    TransactionStatus.REFUNDED: ('#7A7A7A', 'white'),
}


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    """
    Admin interface for transactions.

    Lifecycle changes go through the API. Admins can only mark a
    completed sale as refunded here.
    """

    list_display = [
        'transaction_number',
        'get_vehicle_title',
        'buyer',
        'seller',
        'price',
        'commission_amount',
        'status_badge',
        'created_at',
    ]
    list_filter = ['status', 'payment_method', 'created_at']
    search_fields = [
        'transaction_number',
        'vehicle__title',
        'buyer__email',
        'seller__email',
        'payment_reference',
    ]
    readonly_fields = [
        'transaction_number',
        'vehicle',
        'buyer',
        'seller',
        'price',
        'commission_amount',
        'net_amount',
        'status',
        'payment_reference',
        'completed_at',
        'cancelled_at',
        'cancelled_reason',
        'created_at',
        'updated_at',
    ]
    date_hierarchy = 'created_at'
    actions = ['mark_as_refunded']

    fieldsets = (
        (None, {
            'fields': ('transaction_number', 'vehicle', 'buyer', 'seller', 'status')
        }),
        ('Amounts', {
            'fields': ('price', 'commission_amount', 'net_amount')
        }),
        ('Payment', {
            'fields': ('payment_method', 'payment_reference', 'notes')
        }),
        ('Timeline', {
            'fields': ('completed_at', 'cancelled_at', 'cancelled_reason', 'created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('vehicle', 'buyer', 'seller')

    def get_vehicle_title(self, obj):
        return obj.vehicle.title
    get_vehicle_title.short_description = 'Vehicle'
    get_vehicle_title.admin_order_field = 'vehicle__title'

    def status_badge(self, obj):
        bg, fg = STATUS_COLORS.get(obj.status, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_status_display()
        )
    status_badge.short_description = 'Status'

    def has_add_permission(self, request):
        return False

    @admin.action(description='Mark selected completed transactions as refunded')
    def mark_as_refunded(self, request, queryset):
        updated = queryset.filter(status=TransactionStatus.COMPLETED).update(status=TransactionStatus.REFUNDED)
        self.message_user(request, f'{updated} transaction(s) marked as refunded.')
