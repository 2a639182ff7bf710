"""Root URLconf. Every marketplace endpoint lives under /api/."""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenRefreshView

from config.views import health_check

api_patterns = [
    path('health/', health_check, name='health-check'),
    path('schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    path('auth/', include('apps.accounts.urls')),
    path('auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # Catalogue and sales
    path('vehicles/', include('apps.vehicles.urls')),
    path('transactions/', include('apps.transactions.urls')),
    path('commissions/', include('apps.commissions.urls')),

    # Buyer/seller interaction
    path('messaging/', include('apps.messaging.urls')),
    path('reviews/', include('apps.reviews.urls')),
]

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include(api_patterns)),
]

handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
