"""Domain-specific exceptions for vehicles services."""


class VehiclesServiceError(Exception):
    """Base exception for vehicles services."""
    pass


class VehicleNotFoundError(VehiclesServiceError):
    """Raised when vehicle does not exist."""
    pass


class BrandNotFoundError(VehiclesServiceError):
    """Raised when brand does not exist or is inactive."""
    pass


class SellingNotAllowedError(VehiclesServiceError):
    """Raised when a user whose role cannot sell tries to list a vehicle."""
    pass


class NotVehicleOwnerError(VehiclesServiceError):
    """Raised when a user modifies a listing they do not own."""
    pass


class InvalidVehicleDataError(VehiclesServiceError):
    """Raised when listing data is inconsistent (brand/model, year)."""
    pass


class VehicleLockedError(VehiclesServiceError):
    """Raised when a reserved or sold listing is edited in a way that would break a deal."""
    pass
