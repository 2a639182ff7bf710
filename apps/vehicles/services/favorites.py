"""Favorites (watch list) service."""

import logging

from django.db import transaction
from django.db.models import F, QuerySet
from django.contrib.auth import get_user_model
from django.db.models.functions import Greatest
from uuid import UUID

from ..models import Favorite, Vehicle
from .exceptions import VehicleNotFoundError
from .vehicle_cache import invalidate_vehicle

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def toggle_favorite(*, user: User, vehicle_id: UUID) -> dict:
    """
    Add the vehicle to the user's favorites, or remove it if already there.

    Returns:
        {'added': bool, 'favorites_count': int}

    Raises:
        VehicleNotFoundError: If vehicle doesn't exist
    """
    try:
        vehicle = (
            Vehicle.objects
            .select_for_update()
            .get(id=vehicle_id)
        )
    except Vehicle.DoesNotExist:
        raise VehicleNotFoundError(f"Vehicle {vehicle_id} not found")

    deleted, _ = Favorite.objects.filter(user=user, vehicle=vehicle).delete()

    if deleted:
        added = False
        Vehicle.objects.filter(id=vehicle.id).update(
            favorites_count=Greatest(F('favorites_count') - 1, 0)
        )
    else:
        added = True
        Favorite.objects.create(user=user, vehicle=vehicle)
        Vehicle.objects.filter(id=vehicle.id).update(favorites_count=F('favorites_count') + 1)

    vehicle.refresh_from_db(fields=['favorites_count'])
    invalidate_vehicle(vehicle.id)

    return {'added': added, 'favorites_count': vehicle.favorites_count}


def list_favorites(*, user: User) -> QuerySet[Favorite]:
    return (
        Favorite.objects
        .filter(user=user)
        .select_related('vehicle', 'vehicle__brand', 'vehicle__model', 'vehicle__seller')
        .prefetch_related('vehicle__images')
    )


def is_favorite(*, user: User, vehicle_id: UUID) -> bool:
    if not user.is_authenticated:
        return False
    return Favorite.objects.filter(user=user, vehicle_id=vehicle_id).exists()
