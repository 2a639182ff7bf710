from rest_framework import permissions


class IsMarketplaceAdmin(permissions.BasePermission):
    """
    Permission: User must have the admin role or be staff.
    """

    message = 'Marketplace admin access required.'

    def has_permission(self, request, view):
        return bool(
            request.user
            and request.user.is_authenticated
            and request.user.is_marketplace_admin()
        )


class CanSell(permissions.BasePermission):
    """
    Permission: User role must allow listing vehicles (seller, dealer, admin).
    """

    message = 'Only sellers and dealers can perform this action.'

    def has_permission(self, request, view):
        return bool(
            request.user
            and request.user.is_authenticated
            and request.user.can_sell()
        )
