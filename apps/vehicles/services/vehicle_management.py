"""Listing CRUD and publication service."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone
from uuid import UUID
from typing import Dict, Any, List, Optional

from ..models import Vehicle, VehicleImage, VehicleStatus, Brand, VehicleModel, max_vehicle_year
from .exceptions import (
    VehicleNotFoundError,
    SellingNotAllowedError,
    NotVehicleOwnerError,
    InvalidVehicleDataError,
    VehicleLockedError,
)
from .vehicle_cache import invalidate_vehicle

User = get_user_model()
logger = logging.getLogger(__name__)

EDITABLE_FIELDS = [
    'brand', 'model', 'title', 'description', 'year', 'price', 'negotiable',
    'mileage', 'color', 'vin', 'license_plate', 'engine_size', 'engine_type',
    'transmission', 'fuel_type', 'drivetrain', 'doors', 'seats', 'condition',
    'features', 'location_address', 'location_city', 'location_province',
    'location_lat', 'location_lng',
]

LOCKED_STATUSES = (VehicleStatus.RESERVED, VehicleStatus.SOLD)


def _validate_brand_model_year(brand: Brand, model: VehicleModel, year: int) -> None:
    if model.brand_id != brand.id:
        raise InvalidVehicleDataError(f"Model '{model.name}' does not belong to brand '{brand.name}'")

    if year > max_vehicle_year():
        raise InvalidVehicleDataError(f"Year {year} is in the future")

    if not model.is_available_for_year(year):
        raise InvalidVehicleDataError(f"{model} was not produced in {year}")


def _get_owned_vehicle_for_update(vehicle_id: UUID, user: User) -> Vehicle:
    try:
        vehicle = (
            Vehicle.objects
            .select_for_update()
            .get(id=vehicle_id)
        )
    except Vehicle.DoesNotExist:
        raise VehicleNotFoundError(f"Vehicle {vehicle_id} not found")

    if not (vehicle.is_owned_by(user) or user.is_marketplace_admin()):
        raise NotVehicleOwnerError("Only the seller can modify this listing")

    return vehicle


@transaction.atomic
def create_vehicle(
    *,
    seller: User,
    brand: Brand,
    model: VehicleModel,
    title: str,
    year: int,
    price,
    publish: bool = False,
    images: Optional[List[Dict[str, Any]]] = None,
    **fields
) -> Vehicle:
    """
    Create a listing for a seller.

    The listing starts available; it only shows up in search once published.

    Raises:
        SellingNotAllowedError: If the user's role cannot sell
        InvalidVehicleDataError: If model/brand/year are inconsistent
    """
    if not seller.can_sell():
        raise SellingNotAllowedError("Only sellers and dealers can list vehicles")

    _validate_brand_model_year(brand, model, year)

    unknown = set(fields) - set(EDITABLE_FIELDS)
    if unknown:
        raise InvalidVehicleDataError(f"Unknown fields: {', '.join(sorted(unknown))}")

    vehicle = Vehicle.objects.create(
        seller=seller,
        brand=brand,
        model=model,
        title=title,
        year=year,
        price=price,
        status=VehicleStatus.AVAILABLE,
        published_at=timezone.now() if publish else None,
        **fields
    )

    for order, image in enumerate(images or []):
        VehicleImage.objects.create(
            vehicle=vehicle,
            url=image['url'],
            thumbnail_url=image.get('thumbnail_url', ''),
            is_primary=image.get('is_primary', order == 0),
            display_order=order,
        )

    logger.info("Vehicle %s listed by %s", vehicle.id, seller.id)
    return vehicle


@transaction.atomic
def update_vehicle(
    *,
    vehicle_id: UUID,
    user: User,
    data: Dict[str, Any]
) -> Vehicle:
    """
    Update listing fields.

    Raises:
        VehicleNotFoundError: If vehicle doesn't exist
        NotVehicleOwnerError: If user is not the seller
        VehicleLockedError: If price changes while the vehicle is reserved or sold
        InvalidVehicleDataError: If model/brand/year become inconsistent
    """
    vehicle = _get_owned_vehicle_for_update(vehicle_id, user)

    if (
        'price' in data
        and vehicle.status in LOCKED_STATUSES
        and data['price'] != vehicle.price
    ):
        raise VehicleLockedError("Price cannot change while the vehicle is reserved or sold")

    for field, value in data.items():
        if field in EDITABLE_FIELDS:
            setattr(vehicle, field, value)

    _validate_brand_model_year(vehicle.brand, vehicle.model, vehicle.year)

    vehicle.save()
    invalidate_vehicle(vehicle.id)
    return vehicle


@transaction.atomic
def publish_vehicle(*, vehicle_id: UUID, user: User) -> Vehicle:
    """Make an available listing visible in search. Publishing twice keeps the first date."""
    vehicle = _get_owned_vehicle_for_update(vehicle_id, user)

    if vehicle.status != VehicleStatus.AVAILABLE:
        raise VehicleLockedError(f"Cannot publish a {vehicle.status} vehicle")

    if vehicle.published_at is None:
        vehicle.published_at = timezone.now()
        vehicle.save(update_fields=['published_at', 'updated_at'])
        invalidate_vehicle(vehicle.id)

    return vehicle


@transaction.atomic
def deactivate_vehicle(*, vehicle_id: UUID, user: User) -> Vehicle:
    """
    Withdraw a listing.

    Raises:
        VehicleLockedError: If a transaction holds the vehicle (reserved/sold)
    """
    vehicle = _get_owned_vehicle_for_update(vehicle_id, user)

    if vehicle.status in LOCKED_STATUSES:
        raise VehicleLockedError(f"Cannot deactivate a {vehicle.status} vehicle")

    vehicle.status = VehicleStatus.INACTIVE
    vehicle.save(update_fields=['status', 'updated_at'])
    invalidate_vehicle(vehicle.id)

    logger.info("Vehicle %s deactivated", vehicle.id)
    return vehicle


@transaction.atomic
def reactivate_vehicle(*, vehicle_id: UUID, user: User) -> Vehicle:
    vehicle = _get_owned_vehicle_for_update(vehicle_id, user)

    if vehicle.status != VehicleStatus.INACTIVE:
        raise VehicleLockedError("Only inactive vehicles can be reactivated")

    vehicle.status = VehicleStatus.AVAILABLE
    vehicle.save(update_fields=['status', 'updated_at'])
    invalidate_vehicle(vehicle.id)
    return vehicle


def get_vehicle_by_id(*, vehicle_id: UUID) -> Vehicle:
    """
    Raises:
        VehicleNotFoundError: If vehicle doesn't exist
    """
    try:
        return (
            Vehicle.objects
            .select_related('seller', 'brand', 'model')
            .prefetch_related('images')
            .get(id=vehicle_id)
        )
    except Vehicle.DoesNotExist:
        raise VehicleNotFoundError(f"Vehicle {vehicle_id} not found")
