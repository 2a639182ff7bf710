import pytest
from decimal import Decimal
from django.utils import timezone
from datetime import timedelta
from apps.vehicles.models import Brand, VehicleModel, Vehicle, VehicleStatus, FuelType, Transmission


@pytest.fixture
def other_brand(db):
    return Brand.objects.create(name='Honda')


@pytest.fixture
def other_model(db, other_brand):
    return VehicleModel.objects.create(brand=other_brand, name='Civic')


@pytest.fixture
def draft_vehicle(db, seller, brand, vehicle_model):
    """An unpublished listing."""
    return Vehicle.objects.create(
        seller=seller,
        brand=brand,
        model=vehicle_model,
        title='Toyota Corolla draft',
        year=2015,
        price=Decimal('9000.00'),
    )


@pytest.fixture
def diesel_vehicle(db, dealer, other_brand, other_model):
    """A published diesel automatic in Cuenca."""
    return Vehicle.objects.create(
        seller=dealer,
        brand=other_brand,
        model=other_model,
        title='Honda Civic diesel touring',
        year=2017,
        price=Decimal('14000.00'),
        mileage=90000,
        color='Dark Blue',
        fuel_type=FuelType.DIESEL,
        transmission=Transmission.AUTOMATIC,
        location_city='Cuenca',
        published_at=timezone.now(),
    )


@pytest.fixture
def featured_vehicle(vehicle):
    vehicle.is_featured = True
    vehicle.featured_until = timezone.now() + timedelta(days=3)
    vehicle.save()
    return vehicle


@pytest.fixture
def vehicle_payload(brand, vehicle_model):
    """Valid create payload."""
    return {
        'brand': brand.id,
        'model': vehicle_model.id,
        'title': 'Toyota Corolla 2020 LE',
        'description': 'Garage kept',
        'year': 2020,
        'price': '18500.00',
        'mileage': 30000,
        'condition': 'used',
        'features': ['sunroof', 'bluetooth'],
        'location_city': 'Quito',
        'publish': True,
        'images': [
            {'url': 'https://img.example.com/1.jpg'},
            {'url': 'https://img.example.com/2.jpg'},
        ],
    }
