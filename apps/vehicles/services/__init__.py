"""Services for vehicles business logic."""

from .exceptions import (
    VehiclesServiceError,
    VehicleNotFoundError,
    BrandNotFoundError,
    SellingNotAllowedError,
    NotVehicleOwnerError,
    InvalidVehicleDataError,
    VehicleLockedError,
)
from .vehicle_management import (
    create_vehicle,
    update_vehicle,
    publish_vehicle,
    deactivate_vehicle,
    reactivate_vehicle,
    get_vehicle_by_id,
)
from .vehicle_search import (
    SORTABLE_FIELDS,
    listed_vehicles,
    search_vehicles,
    featured_vehicles,
    seller_vehicles,
    register_view,
)
from .favorites import (
    toggle_favorite,
    list_favorites,
    is_favorite,
)
from .catalogue import (
    list_brands,
    list_models_for_brand,
)
from .vehicle_cache import (
    get_cached_vehicle,
    set_cached_vehicle,
    invalidate_vehicle,
    invalidate_brands,
)

__all__ = [
    # Exceptions
    'VehiclesServiceError',
    'VehicleNotFoundError',
    'BrandNotFoundError',
    'SellingNotAllowedError',
    'NotVehicleOwnerError',
    'InvalidVehicleDataError',
    'VehicleLockedError',
    # Vehicle Management
    'create_vehicle',
    'update_vehicle',
    'publish_vehicle',
    'deactivate_vehicle',
    'reactivate_vehicle',
    'get_vehicle_by_id',
    # Search
    'SORTABLE_FIELDS',
    'listed_vehicles',
    'search_vehicles',
    'featured_vehicles',
    'seller_vehicles',
    'register_view',
    # Favorites
    'toggle_favorite',
    'list_favorites',
    'is_favorite',
    # Catalogue
    'list_brands',
    'list_models_for_brand',
    # Cache
    'get_cached_vehicle',
    'set_cached_vehicle',
    'invalidate_vehicle',
    'invalidate_brands',
]
