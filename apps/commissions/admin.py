from django.contrib import admin
from django.utils.html import format_html
from django.utils import timezone
from .models import CommissionRule, Commission
from .services import describe_rule


@admin.register(CommissionRule)
class CommissionRuleAdmin(admin.ModelAdmin):
    """Commission rules. Higher priority is tried first."""

    list_display = ['name', 'summary', 'priority', 'is_active', 'updated_at']
    list_filter = ['is_active', 'type', 'user_role']
    list_editable = ['priority', 'is_active']
    search_fields = ['name', 'description']
    ordering = ['-priority', 'created_at']
    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        (None, {
            'fields': ('name', 'description', 'is_active', 'priority')
        }),
        ('Fee', {
            'fields': ('type', 'value')
        }),
        ('Applies to', {
            'fields': ('min_price', 'max_price', 'user_role'),
            'description': 'Leave a bound empty for no limit. Leave role empty for every seller.',
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def summary(self, obj):
        return describe_rule(obj)
    summary.short_description = 'Summary'


@admin.register(Commission)
class CommissionAdmin(admin.ModelAdmin):
    list_display = [
        'get_transaction_number',
        'amount',
        'percentage',
        'rule',
        'paid_badge',
        'paid_at',
        'created_at',
    ]
    list_filter = ['is_paid', 'rule', 'created_at']
    search_fields = ['transaction__transaction_number', 'payment_reference', 'transaction__seller__email']
    readonly_fields = ['transaction', 'rule', 'amount', 'percentage', 'created_at']
    actions = ['mark_as_paid']

    def get_transaction_number(self, obj):
        return obj.transaction.transaction_number
    get_transaction_number.short_description = 'Transaction'
    get_transaction_number.admin_order_field = 'transaction__transaction_number'

    def paid_badge(self, obj):
        bg = '#6B8E5E' if obj.is_paid else '#E5C49A'
        fg = 'white' if obj.is_paid else '#2C1810'
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, 'Paid' if obj.is_paid else 'Pending'
        )
    paid_badge.short_description = 'Status'

    def has_add_permission(self, request):
        """Commissions are created when a transaction completes."""
        return False

    @admin.action(description='Mark selected commissions as paid')
    def mark_as_paid(self, request, queryset):
        updated = queryset.filter(is_paid=False).update(is_paid=True, paid_at=timezone.now())
        self.message_user(request, f'{updated} commission(s) marked as paid.')
