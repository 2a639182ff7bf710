from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User, UserRole


ROLE_COLORS = {
    UserRole.BUYER: '#5C7AB8',
    UserRole.SELLER: '#6B8E5E',
    UserRole.DEALER: '#A47449',
    UserRole.ADMIN: '#B85C5C',
}


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin for marketplace users: role management, verification, deactivation."""

    list_display = [
        'email',
        'username',
        'role_badge',
        'is_active',
        'email_verified',
        'created_at',
        'last_login',
    ]
    list_filter = ['role', 'is_active', 'is_staff', 'email_verified', 'created_at']
    search_fields = ['email', 'username', 'first_name', 'last_name']
    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'username', 'first_name', 'last_name', 'phone', 'avatar_url', 'password')
        }),
        ('Marketplace', {
            'fields': ('role',),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Verification', {
            'fields': ('email_verified', 'verification_token', 'password_reset_token', 'password_reset_expires_at'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login', 'deleted_at'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'username', 'role', 'password1', 'password2'),
        }),
    )

    readonly_fields = ['created_at', 'last_login', 'deleted_at', 'password_reset_expires_at']
    filter_horizontal = ['groups', 'user_permissions']
    actions = ['activate_users', 'deactivate_users', 'verify_emails', 'promote_to_dealer']

    def role_badge(self, obj):
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            ROLE_COLORS.get(obj.role, '#999'),
            obj.get_role_display(),
        )
    role_badge.short_description = 'Role'
    role_badge.admin_order_field = 'role'

    @admin.action(description='Reactivate selected accounts')
    def activate_users(self, request, queryset):
        # anonymized accounts stay closed
        count = queryset.filter(deleted_at__isnull=True).update(is_active=True)
        self.message_user(request, f'Reactivated {count} account(s).')

    @admin.action(description='Deactivate selected accounts')
    def deactivate_users(self, request, queryset):
        protected = queryset.filter(is_superuser=True)
        count = queryset.exclude(pk__in=protected).update(is_active=False)
        msg = f'Deactivated {count} account(s).'
        if protected.exists():
            msg += f' Left {protected.count()} superuser(s) active.'
        self.message_user(request, msg)

    @admin.action(description='Mark emails as verified')
    def verify_emails(self, request, queryset):
        count = queryset.filter(email_verified=False).update(email_verified=True, verification_token=None)
        self.message_user(request, f'Verified {count} email(s).')

    @admin.action(description='Promote sellers to dealer')
    def promote_to_dealer(self, request, queryset):
        count = queryset.filter(role=UserRole.SELLER).update(role=UserRole.DEALER)
        self.message_user(request, f'Promoted {count} seller(s) to dealer.')
