"""Brand and model catalogue service."""

from django.conf import settings
from django.db.models import QuerySet

from ..models import Brand, VehicleModel
from .exceptions import BrandNotFoundError
from .vehicle_cache import BRANDS_CACHE_KEY, cache_get, cache_set


def list_brands() -> list[dict]:
    """Active brands, cached for CACHE_TTL_LONG."""
    brands = cache_get(BRANDS_CACHE_KEY)
    if brands is None:
        brands = list(
            Brand.objects
            .filter(is_active=True)
            .order_by('name')
            .values('id', 'name', 'logo_url')
        )
        cache_set(BRANDS_CACHE_KEY, brands, settings.CACHE_TTL_LONG)
    return brands


def list_models_for_brand(*, brand_id: int) -> QuerySet[VehicleModel]:
    """
    Raises:
        BrandNotFoundError: If brand doesn't exist or is inactive
    """
    if not Brand.objects.filter(id=brand_id, is_active=True).exists():
        raise BrandNotFoundError(f"Brand {brand_id} not found")

    return VehicleModel.objects.filter(brand_id=brand_id, is_active=True).order_by('name')
