from django.contrib import admin
from django.utils import timezone
from datetime import timedelta
from apps.vehicles.models import Brand, VehicleModel, Vehicle, VehicleImage, VehicleStatus
from apps.vehicles.services import invalidate_vehicle, invalidate_brands


class VehicleModelInline(admin.TabularInline):
    model = VehicleModel
    extra = 1
    fields = ['name', 'year_start', 'year_end', 'is_active']


class VehicleImageInline(admin.TabularInline):
    model = VehicleImage
    extra = 1
    fields = ['url', 'thumbnail_url', 'is_primary', 'display_order']


@admin.register(Brand)
class BrandAdmin(admin.ModelAdmin):
    list_display = ['name', 'is_active', 'created_at']
    list_filter = ['is_active']
    search_fields = ['name']
    inlines = [VehicleModelInline]

    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        invalidate_brands()


@admin.register(Vehicle)
class VehicleAdmin(admin.ModelAdmin):
    """Admin interface for listings."""

    list_display = [
        'title',
        'brand',
        'model',
        'year',
        'price',
        'status',
        'seller',
        'is_featured',
        'views_count',
        'published_at',
    ]
    list_filter = ['status', 'condition', 'is_featured', 'fuel_type', 'brand', 'created_at']
    search_fields = ['title', 'description', 'vin', 'license_plate', 'seller__email']
    readonly_fields = ['views_count', 'favorites_count', 'sold_at', 'created_at', 'updated_at']
    raw_id_fields = ['seller']
    inlines = [VehicleImageInline]
    actions = ['feature_for_week', 'deactivate_listings']

    fieldsets = (
        ('Listing', {
            'fields': ('seller', 'title', 'description', 'price', 'negotiable', 'status', 'features')
        }),
        ('Vehicle', {
            'fields': (
                'brand', 'model', 'year', 'mileage', 'condition', 'color', 'vin', 'license_plate',
                'engine_size', 'engine_type', 'transmission', 'fuel_type', 'drivetrain', 'doors', 'seats',
            )
        }),
        ('Location', {
            'fields': ('location_address', 'location_city', 'location_province', 'location_lat', 'location_lng'),
            'classes': ('collapse',),
        }),
        ('Promotion & stats', {
            'fields': ('is_featured', 'featured_until', 'views_count', 'favorites_count'),
        }),
        ('Timestamps', {
            'fields': ('published_at', 'sold_at', 'created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        invalidate_vehicle(obj.id)

    @admin.action(description='Feature selected listings for 7 days')
    def feature_for_week(self, request, queryset):
        until = timezone.now() + timedelta(days=7)
        ids = list(queryset.values_list('id', flat=True))
        updated = queryset.update(is_featured=True, featured_until=until)
        for vehicle_id in ids:
            invalidate_vehicle(vehicle_id)
        self.message_user(request, f'{updated} listing(s) featured.')

    @admin.action(description='Deactivate selected available listings')
    def deactivate_listings(self, request, queryset):
        queryset = queryset.filter(status=VehicleStatus.AVAILABLE)
        ids = list(queryset.values_list('id', flat=True))
        updated = queryset.update(status=VehicleStatus.INACTIVE)
        for vehicle_id in ids:
            invalidate_vehicle(vehicle_id)
        self.message_user(request, f'{updated} listing(s) deactivated.')
