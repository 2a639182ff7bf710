"""
Shared fixtures for all apps.

App-level ``tests/conftest.py`` files build on these users, clients and
the base vehicle catalogue.
"""

import pytest
from decimal import Decimal
from django.core.cache import cache
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User, UserRole
from apps.vehicles.models import Brand, VehicleModel, Vehicle, VehicleCondition, VehicleStatus


def client_for(user):
    """Return a fresh API client authenticated as ``user`` via JWT."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture(autouse=True)
def clear_cache():
    """Local-memory cache survives between tests unless cleared."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """A verified buyer."""
    return User.objects.create_user(
        email='testuser@example.com',
        password='TestPass123!',
        username='testuser',
        first_name='Test',
        last_name='User',
        email_verified=True,
    )


@pytest.fixture
def other_user(db):
    """A second buyer, not involved in fixtures' deals."""
    return User.objects.create_user(
        email='otheruser@example.com',
        password='OtherPass123!',
        username='otheruser',
        email_verified=True,
    )


@pytest.fixture
def seller(db):
    """A private seller."""
    return User.objects.create_user(
        email='seller@example.com',
        password='TestPass123!',
        username='seller',
        first_name='Sam',
        last_name='Seller',
        role=UserRole.SELLER,
        email_verified=True,
    )


@pytest.fixture
def dealer(db):
    """A dealer account."""
    return User.objects.create_user(
        email='dealer@example.com',
        password='TestPass123!',
        username='dealer',
        role=UserRole.DEALER,
        email_verified=True,
    )


@pytest.fixture
def admin_user(db):
    """A marketplace admin (staff)."""
    return User.objects.create_user(
        email='admin@example.com',
        password='TestPass123!',
        username='admin',
        role=UserRole.ADMIN,
        is_staff=True,
        email_verified=True,
    )


@pytest.fixture
def authenticated_client(user):
    return client_for(user)


@pytest.fixture
def other_client(other_user):
    return client_for(other_user)


@pytest.fixture
def seller_client(seller):
    return client_for(seller)


@pytest.fixture
def dealer_client(dealer):
    return client_for(dealer)


@pytest.fixture
def admin_client(admin_user):
    return client_for(admin_user)


@pytest.fixture
def brand(db):
    return Brand.objects.create(name='Toyota')


@pytest.fixture
def vehicle_model(db, brand):
    return VehicleModel.objects.create(brand=brand, name='Corolla', year_start=1990)


@pytest.fixture
def vehicle(db, seller, brand, vehicle_model):
    """A published, available listing priced at 25 000."""
    return Vehicle.objects.create(
        seller=seller,
        brand=brand,
        model=vehicle_model,
        title='Toyota Corolla 2019 SE',
        description='One owner, full service history',
        year=2019,
        price=Decimal('25000.00'),
        mileage=42000,
        condition=VehicleCondition.USED,
        status=VehicleStatus.AVAILABLE,
        location_city='Quito',
        location_province='Pichincha',
        published_at=timezone.now(),
    )


@pytest.fixture
def dealer_vehicle(db, dealer, brand, vehicle_model):
    """A published dealer listing priced at 20 000."""
    return Vehicle.objects.create(
        seller=dealer,
        brand=brand,
        model=vehicle_model,
        title='Toyota Corolla 2021 Certified',
        year=2021,
        price=Decimal('20000.00'),
        mileage=15000,
        condition=VehicleCondition.CERTIFIED,
        status=VehicleStatus.AVAILABLE,
        location_city='Guayaquil',
        location_province='Guayas',
        published_at=timezone.now(),
    )


@pytest.fixture
def commission_rules(db):
    """The default rule set, keyed by rule name."""
    from apps.commissions.services import seed_default_rules
    return {rule.name: rule for rule in seed_default_rules()}
