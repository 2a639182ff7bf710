from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'vehicles'

# Note: brands must be registered BEFORE empty prefix to avoid URL conflicts
router = DefaultRouter()
router.register(r'brands', views.BrandViewSet, basename='brand')
router.register(r'', views.VehicleViewSet, basename='vehicle')

urlpatterns = [
    # Vehicle ViewSet routes
    # GET    /api/vehicles/                    - Search listings
    # POST   /api/vehicles/                    - Create listing
    # GET    /api/vehicles/{id}/               - Listing detail
    # PATCH  /api/vehicles/{id}/               - Edit listing
    # DELETE /api/vehicles/{id}/               - Deactivate listing

    # Custom actions
    # POST   /api/vehicles/{id}/publish/       - Publish listing
    # POST   /api/vehicles/{id}/deactivate/    - Deactivate listing
    # POST   /api/vehicles/{id}/reactivate/    - Reactivate listing
    # POST   /api/vehicles/{id}/favorite/      - Toggle favorite
    # GET    /api/vehicles/featured/           - Featured listings
    # GET    /api/vehicles/mine/               - Own listings
    # GET    /api/vehicles/favorites/          - Own favorites

    # Catalogue
    # GET    /api/vehicles/brands/             - Active brands
    # GET    /api/vehicles/brands/{id}/models/ - Models of a brand

    path('', include(router.urls)),
]
