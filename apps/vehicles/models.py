from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator, MinLengthValidator
from django.utils import timezone
from decimal import Decimal
import uuid


def max_vehicle_year():
    return timezone.now().year + 1


class VehicleCondition(models.TextChoices):
    NEW = 'new', 'New'
    USED = 'used', 'Used'
    CERTIFIED = 'certified', 'Certified pre-owned'


class VehicleStatus(models.TextChoices):
    AVAILABLE = 'available', 'Available'
    RESERVED = 'reserved', 'Reserved'
    SOLD = 'sold', 'Sold'
    INACTIVE = 'inactive', 'Inactive'


class Transmission(models.TextChoices):
    MANUAL = 'manual', 'Manual'
    AUTOMATIC = 'automatic', 'Automatic'
    CVT = 'cvt', 'CVT'
    SEMI_AUTOMATIC = 'semi_automatic', 'Semi-automatic'


class FuelType(models.TextChoices):
    GASOLINE = 'gasoline', 'Gasoline'
    DIESEL = 'diesel', 'Diesel'
    ELECTRIC = 'electric', 'Electric'
    HYBRID = 'hybrid', 'Hybrid'
    PLUGIN_HYBRID = 'plugin_hybrid', 'Plug-in hybrid'
    LPG = 'lpg', 'LPG'


class Drivetrain(models.TextChoices):
    FWD = 'fwd', 'Front-wheel drive'
    RWD = 'rwd', 'Rear-wheel drive'
    AWD = 'awd', 'All-wheel drive'
    FOUR_WD = '4wd', 'Four-wheel drive'


class Brand(models.Model):
    name = models.CharField(max_length=100, unique=True)
    logo_url = models.URLField(max_length=500, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'brands'
        ordering = ['name']

    def __str__(self):
        return self.name


class VehicleModel(models.Model):
    """A model line of a brand, e.g. Toyota Corolla."""

    brand = models.ForeignKey(Brand, on_delete=models.CASCADE, related_name='models')
    name = models.CharField(max_length=100)
    year_start = models.PositiveIntegerField(null=True, blank=True)
    year_end = models.PositiveIntegerField(null=True, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'vehicle_models'
        unique_together = [['brand', 'name']]
        ordering = ['name']

    def __str__(self):
        return f"{self.brand.name} {self.name}"

    def is_available_for_year(self, year):
        if self.year_start and year < self.year_start:
            return False
        if self.year_end and year > self.year_end:
            return False
        return True


class Vehicle(models.Model):
    """A listing offered for sale by a seller."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    seller = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='vehicles')
    brand = models.ForeignKey(Brand, on_delete=models.PROTECT, related_name='vehicles')
    model = models.ForeignKey(VehicleModel, on_delete=models.PROTECT, related_name='vehicles')

    title = models.CharField(max_length=255, validators=[MinLengthValidator(5)])
    description = models.TextField(blank=True)
    year = models.PositiveIntegerField(validators=[MinValueValidator(1900)])
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
    )
    negotiable = models.BooleanField(default=False)
    mileage = models.PositiveIntegerField(default=0)
    color = models.CharField(max_length=50, blank=True)
    vin = models.CharField(max_length=17, unique=True, null=True, blank=True, validators=[MinLengthValidator(17)])
    license_plate = models.CharField(max_length=20, blank=True)

    engine_size = models.DecimalField(max_digits=4, decimal_places=1, null=True, blank=True)
    engine_type = models.CharField(max_length=50, blank=True)
    transmission = models.CharField(max_length=20, choices=Transmission.choices, blank=True)
    fuel_type = models.CharField(max_length=20, choices=FuelType.choices, blank=True)
    drivetrain = models.CharField(max_length=10, choices=Drivetrain.choices, blank=True)
    doors = models.PositiveSmallIntegerField(
        null=True, blank=True, validators=[MinValueValidator(2), MaxValueValidator(6)]
    )
    seats = models.PositiveSmallIntegerField(
        null=True, blank=True, validators=[MinValueValidator(1), MaxValueValidator(50)]
    )

    condition = models.CharField(max_length=20, choices=VehicleCondition.choices, default=VehicleCondition.USED)
    status = models.CharField(
        max_length=20, choices=VehicleStatus.choices, default=VehicleStatus.AVAILABLE, db_index=True
    )
    features = models.JSONField(default=list, blank=True)

    location_address = models.CharField(max_length=255, blank=True)
    location_city = models.CharField(max_length=100, blank=True)
    location_province = models.CharField(max_length=100, blank=True)
    location_lat = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    location_lng = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)

    views_count = models.PositiveIntegerField(default=0)
    favorites_count = models.PositiveIntegerField(default=0)
    is_featured = models.BooleanField(default=False)
    featured_until = models.DateTimeField(null=True, blank=True)

    published_at = models.DateTimeField(null=True, blank=True)
    sold_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'vehicles'
        indexes = [
            models.Index(fields=['status', 'published_at']),
            models.Index(fields=['brand', 'model']),
            models.Index(fields=['price']),
            models.Index(fields=['year']),
            models.Index(fields=['location_city']),
            models.Index(fields=['created_at']),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.title

    @property
    def is_published(self):
        return self.published_at is not None

    def is_listed(self):
        """Visible in search: published and available."""
        return self.is_published and self.status == VehicleStatus.AVAILABLE

    def is_owned_by(self, user):
        return self.seller_id == getattr(user, 'id', None)

    def primary_image(self):
        images = list(self.images.all())
        for image in images:
            if image.is_primary:
                return image
        return images[0] if images else None


class VehicleImage(models.Model):
    vehicle = models.ForeignKey(Vehicle, on_delete=models.CASCADE, related_name='images')
    url = models.URLField(max_length=500)
    thumbnail_url = models.URLField(max_length=500, blank=True)
    is_primary = models.BooleanField(default=False)
    display_order = models.PositiveSmallIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'vehicle_images'
        ordering = ['display_order', 'created_at']

    def __str__(self):
        return f"Image {self.display_order} of {self.vehicle_id}"


class Favorite(models.Model):
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='favorites')
    vehicle = models.ForeignKey(Vehicle, on_delete=models.CASCADE, related_name='favorited_by')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'favorites'
        unique_together = [['user', 'vehicle']]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.user} ♥ {self.vehicle}"
