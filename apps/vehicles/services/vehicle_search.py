"""Vehicle search and filtering service."""

from django.db.models import F, Q, QuerySet
from django.utils import timezone
from typing import Optional

from ..models import Vehicle, VehicleStatus

SORTABLE_FIELDS = ('created_at', 'price', 'year', 'mileage', 'views_count')
DEFAULT_SORT = 'created_at'


def listed_vehicles() -> QuerySet[Vehicle]:
    """Published, available listings."""
    return (
        Vehicle.objects
        .filter(status=VehicleStatus.AVAILABLE, published_at__isnull=False)
        .select_related('seller', 'brand', 'model')
        .prefetch_related('images')
    )


def search_vehicles(
    *,
    q: Optional[str] = None,
    brand: Optional[int] = None,
    model: Optional[int] = None,
    year_min: Optional[int] = None,
    year_max: Optional[int] = None,
    price_min=None,
    price_max=None,
    mileage_max: Optional[int] = None,
    condition: Optional[str] = None,
    transmission: Optional[str] = None,
    fuel_type: Optional[str] = None,
    drivetrain: Optional[str] = None,
    color: Optional[str] = None,
    city: Optional[str] = None,
    province: Optional[str] = None,
    sort: Optional[str] = None,
    order: str = 'desc',
) -> QuerySet[Vehicle]:
    """
    Search and filter listings visible to buyers.

    Args:
        q: Search term for title and description
        brand, model: Catalogue ids
        year_min, year_max: Inclusive model year range
        price_min, price_max: Inclusive price range
        mileage_max: Maximum mileage
        condition, transmission, fuel_type, drivetrain: Exact choice filters
        color: Case-insensitive partial match
        city, province: Exact location filters
        sort: One of SORTABLE_FIELDS, anything else falls back to created_at
        order: 'asc' or 'desc'

    Returns:
        Filtered QuerySet of Vehicle
    """
    queryset = listed_vehicles()

    if q:
        queryset = queryset.filter(
            Q(title__icontains=q) |
            Q(description__icontains=q)
        )

    if brand:
        queryset = queryset.filter(brand_id=brand)
    if model:
        queryset = queryset.filter(model_id=model)

    if year_min is not None:
        queryset = queryset.filter(year__gte=year_min)
    if year_max is not None:
        queryset = queryset.filter(year__lte=year_max)

    if price_min is not None:
        queryset = queryset.filter(price__gte=price_min)
    if price_max is not None:
        queryset = queryset.filter(price__lte=price_max)

    if mileage_max is not None:
        queryset = queryset.filter(mileage__lte=mileage_max)

    if condition:
        queryset = queryset.filter(condition=condition)
    if transmission:
        queryset = queryset.filter(transmission=transmission)
    if fuel_type:
        queryset = queryset.filter(fuel_type=fuel_type)
    if drivetrain:
        queryset = queryset.filter(drivetrain=drivetrain)

    if color:
        queryset = queryset.filter(color__icontains=color)

    if city:
        queryset = queryset.filter(location_city__iexact=city)
    if province:
        queryset = queryset.filter(location_province__iexact=province)

    sort_field = sort if sort in SORTABLE_FIELDS else DEFAULT_SORT
    prefix = '' if order == 'asc' else '-'

    # id breaks ties so pagination is stable
    return queryset.order_by(f'{prefix}{sort_field}', f'{prefix}id')


def featured_vehicles(*, limit: int = 10) -> QuerySet[Vehicle]:
    """Featured listings whose promotion has not expired."""
    return (
        listed_vehicles()
        .filter(is_featured=True, featured_until__gt=timezone.now())
        .order_by('-featured_until')[:limit]
    )


def seller_vehicles(*, seller, status: Optional[str] = None) -> QuerySet[Vehicle]:
    """All listings of a seller, including unpublished and inactive ones."""
    queryset = (
        Vehicle.objects
        .filter(seller=seller)
        .select_related('brand', 'model')
        .prefetch_related('images')
    )
    if status:
        queryset = queryset.filter(status=status)
    return queryset


def register_view(*, vehicle_id) -> None:
    """Count a detail view without a read-modify-write race."""
    Vehicle.objects.filter(id=vehicle_id).update(views_count=F('views_count') + 1)
