import pytest
import uuid
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone
from apps.vehicles.models import Vehicle, VehicleStatus, Favorite
from apps.vehicles.services import (
    create_vehicle,
    update_vehicle,
    publish_vehicle,
    deactivate_vehicle,
    reactivate_vehicle,
    search_vehicles,
    featured_vehicles,
    register_view,
    toggle_favorite,
    list_brands,
    get_cached_vehicle,
    set_cached_vehicle,
    SellingNotAllowedError,
    NotVehicleOwnerError,
    InvalidVehicleDataError,
    VehicleLockedError,
    VehicleNotFoundError,
)


@pytest.mark.django_db
class TestCreateVehicle:

    def test_create_unpublished_by_default(self, seller, brand, vehicle_model):
        vehicle = create_vehicle(
            seller=seller, brand=brand, model=vehicle_model,
            title='Corolla for sale', year=2018, price=Decimal('12000'),
        )

        assert vehicle.status == VehicleStatus.AVAILABLE
        assert vehicle.published_at is None

    def test_create_with_images_marks_first_primary(self, seller, brand, vehicle_model):
        vehicle = create_vehicle(
            seller=seller, brand=brand, model=vehicle_model,
            title='Corolla with photos', year=2018, price=Decimal('12000'),
            images=[{'url': 'https://a.example.com/1.jpg'}, {'url': 'https://a.example.com/2.jpg'}],
        )

        images = list(vehicle.images.all())
        assert [i.is_primary for i in images] == [True, False]
        assert vehicle.primary_image().url == 'https://a.example.com/1.jpg'

    def test_buyer_cannot_sell(self, user, brand, vehicle_model):
        with pytest.raises(SellingNotAllowedError):
            create_vehicle(
                seller=user, brand=brand, model=vehicle_model,
                title='Not allowed', year=2018, price=Decimal('1000'),
            )

    def test_model_must_belong_to_brand(self, seller, brand, other_model):
        with pytest.raises(InvalidVehicleDataError):
            create_vehicle(
                seller=seller, brand=brand, model=other_model,
                title='Mismatched', year=2018, price=Decimal('1000'),
            )

    def test_year_before_model_production(self, seller, brand, vehicle_model):
        with pytest.raises(InvalidVehicleDataError):
            create_vehicle(
                seller=seller, brand=brand, model=vehicle_model,
                title='Too old corolla', year=1985, price=Decimal('1000'),
            )


@pytest.mark.django_db
class TestUpdateVehicle:

    def test_owner_updates_price(self, vehicle, seller):
        updated = update_vehicle(vehicle_id=vehicle.id, user=seller, data={'price': Decimal('24000')})

        assert updated.price == Decimal('24000')

    def test_non_owner_rejected(self, vehicle, dealer):
        with pytest.raises(NotVehicleOwnerError):
            update_vehicle(vehicle_id=vehicle.id, user=dealer, data={'price': Decimal('1')})

    def test_admin_may_edit(self, vehicle, admin_user):
        updated = update_vehicle(vehicle_id=vehicle.id, user=admin_user, data={'color': 'Red'})

        assert updated.color == 'Red'

    def test_price_locked_while_reserved(self, vehicle, seller):
        vehicle.status = VehicleStatus.RESERVED
        vehicle.save()

        with pytest.raises(VehicleLockedError):
            update_vehicle(vehicle_id=vehicle.id, user=seller, data={'price': Decimal('1')})

    def test_description_editable_while_reserved(self, vehicle, seller):
        vehicle.status = VehicleStatus.RESERVED
        vehicle.save()

        updated = update_vehicle(vehicle_id=vehicle.id, user=seller, data={'description': 'New text'})

        assert updated.description == 'New text'

    def test_update_invalidates_cache(self, vehicle, seller, django_capture_on_commit_callbacks):
        set_cached_vehicle(vehicle.id, {'title': 'stale'})

        with django_capture_on_commit_callbacks(execute=True):
            update_vehicle(vehicle_id=vehicle.id, user=seller, data={'title': 'Fresh title here'})

        assert get_cached_vehicle(vehicle.id) is None

    def test_missing_vehicle(self, seller):
        with pytest.raises(VehicleNotFoundError):
            update_vehicle(vehicle_id=uuid.uuid4(), user=seller, data={})


@pytest.mark.django_db
class TestPublication:

    def test_publish(self, draft_vehicle, seller):
        vehicle = publish_vehicle(vehicle_id=draft_vehicle.id, user=seller)

        assert vehicle.published_at is not None

    def test_deactivate_and_reactivate(self, vehicle, seller):
        assert deactivate_vehicle(vehicle_id=vehicle.id, user=seller).status == VehicleStatus.INACTIVE
        assert reactivate_vehicle(vehicle_id=vehicle.id, user=seller).status == VehicleStatus.AVAILABLE

    def test_cannot_deactivate_sold(self, vehicle, seller):
        vehicle.status = VehicleStatus.SOLD
        vehicle.save()

        with pytest.raises(VehicleLockedError):
            deactivate_vehicle(vehicle_id=vehicle.id, user=seller)

    def test_reactivate_requires_inactive(self, vehicle, seller):
        with pytest.raises(VehicleLockedError):
            reactivate_vehicle(vehicle_id=vehicle.id, user=seller)


@pytest.mark.django_db
class TestSearch:

    def test_only_published_available(self, vehicle, draft_vehicle, diesel_vehicle):
        diesel_vehicle.status = VehicleStatus.RESERVED
        diesel_vehicle.save()

        assert list(search_vehicles()) == [vehicle]

    def test_text_search(self, vehicle, diesel_vehicle):
        results = list(search_vehicles(q='touring'))

        assert results == [diesel_vehicle]

    def test_filters_combine(self, vehicle, diesel_vehicle):
        assert list(search_vehicles(price_max=Decimal('15000'), fuel_type='diesel')) == [diesel_vehicle]
        assert list(search_vehicles(year_min=2018)) == [vehicle]
        assert list(search_vehicles(color='blue')) == [diesel_vehicle]
        assert list(search_vehicles(city='quito')) == [vehicle]
        assert list(search_vehicles(mileage_max=50000)) == [vehicle]

    def test_sort_by_price(self, vehicle, diesel_vehicle):
        assert list(search_vehicles(sort='price', order='asc')) == [diesel_vehicle, vehicle]
        assert list(search_vehicles(sort='price', order='desc')) == [vehicle, diesel_vehicle]

    def test_unknown_sort_falls_back(self, vehicle, diesel_vehicle):
        results = list(search_vehicles(sort='seller__password'))

        assert set(results) == {vehicle, diesel_vehicle}

    def test_featured_excludes_expired(self, featured_vehicle, diesel_vehicle):
        diesel_vehicle.is_featured = True
        diesel_vehicle.featured_until = timezone.now() - timedelta(days=1)
        diesel_vehicle.save()

        assert list(featured_vehicles()) == [featured_vehicle]

    def test_register_view(self, vehicle):
        register_view(vehicle_id=vehicle.id)
        register_view(vehicle_id=vehicle.id)

        vehicle.refresh_from_db()
        assert vehicle.views_count == 2


@pytest.mark.django_db
class TestFavorites:

    def test_toggle_adds_then_removes(self, user, vehicle):
        result = toggle_favorite(user=user, vehicle_id=vehicle.id)
        assert result == {'added': True, 'favorites_count': 1}
        assert Favorite.objects.filter(user=user, vehicle=vehicle).exists()

        result = toggle_favorite(user=user, vehicle_id=vehicle.id)
        assert result == {'added': False, 'favorites_count': 0}
        assert not Favorite.objects.filter(user=user, vehicle=vehicle).exists()

    def test_counter_tracks_multiple_users(self, user, other_user, vehicle):
        toggle_favorite(user=user, vehicle_id=vehicle.id)
        toggle_favorite(user=other_user, vehicle_id=vehicle.id)

        vehicle.refresh_from_db()
        assert vehicle.favorites_count == 2


@pytest.mark.django_db
class TestCatalogue:

    def test_brands_are_cached(self, brand, django_assert_num_queries):
        list_brands()

        with django_assert_num_queries(0):
            brands = list_brands()

        assert brands[0]['name'] == 'Toyota'
