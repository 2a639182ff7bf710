from rest_framework import serializers
from apps.accounts.serializers import UserPublicSerializer
from .models import Brand, VehicleModel, Vehicle, VehicleImage, Favorite, VehicleCondition, Transmission, FuelType, Drivetrain
from .services import SORTABLE_FIELDS


class BrandSerializer(serializers.ModelSerializer):

    class Meta:
        model = Brand
        fields = ['id', 'name', 'logo_url']
        read_only_fields = fields


class VehicleModelSerializer(serializers.ModelSerializer):

    class Meta:
        model = VehicleModel
        fields = ['id', 'brand', 'name', 'year_start', 'year_end']
        read_only_fields = fields


class VehicleImageSerializer(serializers.ModelSerializer):

    class Meta:
        model = VehicleImage
        fields = ['id', 'url', 'thumbnail_url', 'is_primary', 'display_order']
        read_only_fields = ['id', 'display_order']


class VehicleSerializer(serializers.ModelSerializer):
    """Full listing detail. This payload is what the detail cache stores."""

    seller = UserPublicSerializer(read_only=True)
    brand_name = serializers.CharField(source='brand.name', read_only=True)
    model_name = serializers.CharField(source='model.name', read_only=True)
    images = VehicleImageSerializer(many=True, read_only=True)

    class Meta:
        model = Vehicle
        fields = [
            'id',
            'seller',
            'brand',
            'brand_name',
            'model',
            'model_name',
            'title',
            'description',
            'year',
            'price',
            'negotiable',
            'mileage',
            'color',
            'vin',
            'license_plate',
            'engine_size',
            'engine_type',
            'transmission',
            'fuel_type',
            'drivetrain',
            'doors',
            'seats',
            'condition',
            'status',
            'features',
            'location_address',
            'location_city',
            'location_province',
            'location_lat',
            'location_lng',
            'views_count',
            'favorites_count',
            'is_featured',
            'featured_until',
            'images',
            'published_at',
            'sold_at',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class VehicleListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for search results."""

    brand_name = serializers.CharField(source='brand.name', read_only=True)
    model_name = serializers.CharField(source='model.name', read_only=True)
    primary_image = serializers.SerializerMethodField()

    class Meta:
        model = Vehicle
        fields = [
            'id',
            'title',
            'brand_name',
            'model_name',
            'year',
            'price',
            'negotiable',
            'mileage',
            'condition',
            'status',
            'location_city',
            'location_province',
            'primary_image',
            'is_featured',
            'views_count',
            'favorites_count',
            'published_at',
            'created_at',
        ]
        read_only_fields = fields

    def get_primary_image(self, obj):
        image = obj.primary_image()
        return image.url if image else None


class VehicleImageInputSerializer(serializers.Serializer):
    url = serializers.URLField(max_length=500)
    thumbnail_url = serializers.URLField(max_length=500, required=False, allow_blank=True)
    is_primary = serializers.BooleanField(required=False)


class VehicleCreateSerializer(serializers.ModelSerializer):
    """Input for creating a listing."""

    brand = serializers.PrimaryKeyRelatedField(queryset=Brand.objects.filter(is_active=True))
    model = serializers.PrimaryKeyRelatedField(queryset=VehicleModel.objects.filter(is_active=True))
    publish = serializers.BooleanField(default=False, write_only=True)
    images = VehicleImageInputSerializer(many=True, required=False, write_only=True)

    class Meta:
        model = Vehicle
        fields = [
            'brand',
            'model',
            'title',
            'description',
            'year',
            'price',
            'negotiable',
            'mileage',
            'color',
            'vin',
            'license_plate',
            'engine_size',
            'engine_type',
            'transmission',
            'fuel_type',
            'drivetrain',
            'doors',
            'seats',
            'condition',
            'features',
            'location_address',
            'location_city',
            'location_province',
            'location_lat',
            'location_lng',
            'publish',
            'images',
        ]

    def validate_features(self, value):
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise serializers.ValidationError('Features must be a list of strings')
        return value


class VehicleUpdateSerializer(VehicleCreateSerializer):
    """Partial update input. Publication has its own endpoint."""

    publish = None
    images = None

    class Meta(VehicleCreateSerializer.Meta):
        fields = [f for f in VehicleCreateSerializer.Meta.fields if f not in ('publish', 'images')]


class VehicleSearchSerializer(serializers.Serializer):
    """Validate search query parameters."""

    q = serializers.CharField(required=False, allow_blank=True)
    brand = serializers.IntegerField(required=False)
    model = serializers.IntegerField(required=False)
    year_min = serializers.IntegerField(required=False, min_value=1900)
    year_max = serializers.IntegerField(required=False, min_value=1900)
    price_min = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, min_value=0)
    price_max = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, min_value=0)
    mileage_max = serializers.IntegerField(required=False, min_value=0)
    condition = serializers.ChoiceField(choices=VehicleCondition.choices, required=False)
    transmission = serializers.ChoiceField(choices=Transmission.choices, required=False)
    fuel_type = serializers.ChoiceField(choices=FuelType.choices, required=False)
    drivetrain = serializers.ChoiceField(choices=Drivetrain.choices, required=False)
    color = serializers.CharField(required=False)
    city = serializers.CharField(required=False)
    province = serializers.CharField(required=False)
    sort = serializers.ChoiceField(choices=SORTABLE_FIELDS, required=False)
    order = serializers.ChoiceField(choices=['asc', 'desc'], default='desc')

    def validate(self, attrs):
        if 'price_min' in attrs and 'price_max' in attrs and attrs['price_min'] > attrs['price_max']:
            raise serializers.ValidationError({'price_max': 'Must be greater than or equal to price_min'})
        if 'year_min' in attrs and 'year_max' in attrs and attrs['year_min'] > attrs['year_max']:
            raise serializers.ValidationError({'year_max': 'Must be greater than or equal to year_min'})
        return attrs


class FavoriteSerializer(serializers.ModelSerializer):
    vehicle = VehicleListSerializer(read_only=True)

    class Meta:
        model = Favorite
        fields = ['id', 'vehicle', 'created_at']
        read_only_fields = fields


class FavoriteToggleResponseSerializer(serializers.Serializer):
    added = serializers.BooleanField()
    favorites_count = serializers.IntegerField()
