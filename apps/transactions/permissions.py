"""
Permission classes for transactions.

Participants (buyer, seller) and marketplace admins may see and cancel a
transaction; only the seller or an admin moves it forward.
"""
from rest_framework.permissions import BasePermission

from .services import NotTransactionParticipantError, InsufficientPermissionsError


class IsTransactionParticipant(BasePermission):
    """Buyer, seller or admin."""

    def has_object_permission(self, request, view, obj):
        if obj.is_participant(request.user) or request.user.is_marketplace_admin():
            return True
        raise NotTransactionParticipantError()


class CanAdvanceTransaction(BasePermission):
    """Seller or admin: process and complete."""

    def has_object_permission(self, request, view, obj):
        if request.user.is_marketplace_admin() or obj.seller_id == request.user.id:
            return True
        if obj.is_participant(request.user):
            raise InsufficientPermissionsError('Only the seller can advance this transaction.')
        raise NotTransactionParticipantError()
