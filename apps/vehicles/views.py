import logging

from rest_framework import viewsets, status, mixins
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly, AllowAny
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import CanSell
from .models import Brand, VehicleStatus
from .serializers import (
    BrandSerializer,
    VehicleModelSerializer,
    VehicleSerializer,
    VehicleListSerializer,
    VehicleCreateSerializer,
    VehicleUpdateSerializer,
    VehicleSearchSerializer,
    FavoriteSerializer,
    FavoriteToggleResponseSerializer,
)
from .services import (
    create_vehicle,
    update_vehicle,
    publish_vehicle,
    deactivate_vehicle,
    reactivate_vehicle,
    get_vehicle_by_id,
    search_vehicles,
    featured_vehicles,
    seller_vehicles,
    register_view,
    toggle_favorite,
    list_favorites,
    list_brands,
    list_models_for_brand,
    get_cached_vehicle,
    set_cached_vehicle,
    VehiclesServiceError,
    VehicleNotFoundError,
    BrandNotFoundError,
    SellingNotAllowedError,
    NotVehicleOwnerError,
)

logger = logging.getLogger(__name__)


def _error_response(error: VehiclesServiceError) -> Response:
    if isinstance(error, (VehicleNotFoundError, BrandNotFoundError)):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, (NotVehicleOwnerError, SellingNotAllowedError)):
        code = status.HTTP_403_FORBIDDEN
    else:
        code = status.HTTP_400_BAD_REQUEST
    return Response({'error': str(error)}, status=code)


class VehiclePagination(PageNumberPagination):
    """Custom pagination for vehicles."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class VehicleViewSet(viewsets.ModelViewSet):
    """
    ViewSet for vehicle listings.

    list: Search published, available listings
    create: List a vehicle (sellers and dealers)
    retrieve: Listing detail (cached)
    partial_update: Edit own listing
    destroy: Deactivate own listing
    """

    serializer_class = VehicleSerializer
    permission_classes = [IsAuthenticatedOrReadOnly]
    pagination_class = VehiclePagination
    lookup_value_regex = '[0-9a-f-]{36}'
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def get_permissions(self):
        if self.action == 'create':
            return [IsAuthenticated(), CanSell()]
        if self.action in ['mine', 'favorites', 'favorite']:
            return [IsAuthenticated()]
        return super().get_permissions()

    def get_queryset(self):
        """Filter listings using the search input serializer."""
        filter_serializer = VehicleSearchSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        return search_vehicles(**filter_serializer.validated_data)

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action in ['list', 'featured', 'mine']:
            return VehicleListSerializer
        elif self.action == 'create':
            return VehicleCreateSerializer
        elif self.action == 'partial_update':
            return VehicleUpdateSerializer
        return VehicleSerializer

    @extend_schema(parameters=[VehicleSearchSerializer])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            vehicle = create_vehicle(seller=request.user, **serializer.validated_data)
        except VehiclesServiceError as e:
            return _error_response(e)

        return Response(
            VehicleSerializer(get_vehicle_by_id(vehicle_id=vehicle.id)).data,
            status=status.HTTP_201_CREATED
        )

    def retrieve(self, request, *args, **kwargs):
        """
        Listing detail from the look-aside cache.

        Unpublished and inactive listings are only visible to their seller.
        """
        vehicle_id = kwargs.get('pk')

        payload = get_cached_vehicle(vehicle_id)
        if payload is None:
            try:
                vehicle = get_vehicle_by_id(vehicle_id=vehicle_id)
            except VehicleNotFoundError as e:
                return _error_response(e)
            payload = dict(VehicleSerializer(vehicle).data)
            set_cached_vehicle(vehicle_id, payload)

        is_owner = (
            request.user.is_authenticated
            and (str(request.user.id) == str(payload['seller']['id']) or request.user.is_marketplace_admin())
        )
        hidden = payload['published_at'] is None or payload['status'] == VehicleStatus.INACTIVE
        if hidden and not is_owner:
            return Response({'error': 'Vehicle not found'}, status=status.HTTP_404_NOT_FOUND)

        if not is_owner:
            register_view(vehicle_id=vehicle_id)

        return Response(payload)

    def update(self, request, *args, **kwargs):
        if not kwargs.get('partial'):
            return Response(
                {'error': 'Use PATCH to update a listing'},
                status=status.HTTP_405_METHOD_NOT_ALLOWED
            )

        serializer = VehicleUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            vehicle = update_vehicle(
                vehicle_id=kwargs.get('pk'),
                user=request.user,
                data=serializer.validated_data,
            )
        except VehiclesServiceError as e:
            return _error_response(e)

        return Response(VehicleSerializer(vehicle).data)

    def destroy(self, request, *args, **kwargs):
        """Deactivate a listing; rows are kept for transaction history."""
        try:
            deactivate_vehicle(vehicle_id=kwargs.get('pk'), user=request.user)
        except VehiclesServiceError as e:
            return _error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None, responses={200: VehicleSerializer})
    @action(detail=True, methods=['post'])
    def publish(self, request, pk=None):
        try:
            vehicle = publish_vehicle(vehicle_id=pk, user=request.user)
        except VehiclesServiceError as e:
            return _error_response(e)
        return Response(VehicleSerializer(vehicle).data)

    @extend_schema(request=None, responses={200: VehicleSerializer})
    @action(detail=True, methods=['post'])
    def deactivate(self, request, pk=None):
        try:
            vehicle = deactivate_vehicle(vehicle_id=pk, user=request.user)
        except VehiclesServiceError as e:
            return _error_response(e)
        return Response(VehicleSerializer(vehicle).data)

    @extend_schema(request=None, responses={200: VehicleSerializer})
    @action(detail=True, methods=['post'])
    def reactivate(self, request, pk=None):
        try:
            vehicle = reactivate_vehicle(vehicle_id=pk, user=request.user)
        except VehiclesServiceError as e:
            return _error_response(e)
        return Response(VehicleSerializer(vehicle).data)

    @extend_schema(request=None, responses={200: FavoriteToggleResponseSerializer})
    @action(detail=True, methods=['post'])
    def favorite(self, request, pk=None):
        """Toggle the listing in the current user's favorites."""
        try:
            result = toggle_favorite(user=request.user, vehicle_id=pk)
        except VehiclesServiceError as e:
            return _error_response(e)
        return Response(result)

    @action(detail=False, methods=['get'])
    def featured(self, request):
        vehicles = featured_vehicles()
        return Response(VehicleListSerializer(vehicles, many=True).data)

    @action(detail=False, methods=['get'])
    def mine(self, request):
        """All of the current user's listings, any status."""
        queryset = seller_vehicles(seller=request.user, status=request.query_params.get('status'))
        page = self.paginate_queryset(queryset)
        serializer = VehicleListSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    @extend_schema(responses={200: FavoriteSerializer(many=True)})
    @action(detail=False, methods=['get'])
    def favorites(self, request):
        page = self.paginate_queryset(list_favorites(user=request.user))
        serializer = FavoriteSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)


class BrandViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    Read-only vehicle catalogue.

    list: Active brands (cached)
    models: Active models of a brand
    """

    queryset = Brand.objects.filter(is_active=True)
    serializer_class = BrandSerializer
    permission_classes = [AllowAny]
    pagination_class = None

    def list(self, request, *args, **kwargs):
        return Response(BrandSerializer(list_brands(), many=True).data)

    @extend_schema(responses={200: VehicleModelSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def models(self, request, pk=None):
        try:
            models = list_models_for_brand(brand_id=pk)
        except BrandNotFoundError as e:
            return _error_response(e)
        return Response(VehicleModelSerializer(models, many=True).data)
