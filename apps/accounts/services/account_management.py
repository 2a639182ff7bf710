"""Account management and public seller profile."""

from django.db import transaction
from django.db.models import Avg, Count
from django.contrib.auth import get_user_model
from uuid import UUID

from .exceptions import PasswordConfirmationError, UserNotFoundError

User = get_user_model()


@transaction.atomic
def delete_user_account(*, user_id: UUID, password: str) -> None:
    """
    Delete an account by anonymizing it.

    Listings, transactions and reviews keep pointing at the anonymized row.

    Raises:
        PasswordConfirmationError: If password is incorrect
    """
    user = (
        User.objects
        .select_for_update()
        .get(id=user_id)
    )

    if not user.check_password(password):
        raise PasswordConfirmationError("Invalid password")

    user.anonymize()


def get_seller_profile(*, user_id: UUID) -> dict:
    """
    Build the public profile of a user: rating summary and inventory counts.

    Raises:
        UserNotFoundError: If user doesn't exist or is inactive
    """
    from apps.reviews.models import Review
    from apps.vehicles.models import Vehicle, VehicleStatus

    try:
        user = User.objects.get(id=user_id, is_active=True)
    except User.DoesNotExist:
        raise UserNotFoundError("User not found")

    rating = Review.objects.filter(reviewed=user).aggregate(
        average=Avg('rating'),
        total=Count('id'),
    )
    average = rating['average']

    return {
        'user': user,
        'average_rating': round(float(average), 1) if average is not None else None,
        'review_count': rating['total'],
        'active_vehicle_count': Vehicle.objects.filter(
            seller=user, status=VehicleStatus.AVAILABLE
        ).count(),
        'sold_vehicle_count': Vehicle.objects.filter(
            seller=user, status=VehicleStatus.SOLD
        ).count(),
    }
