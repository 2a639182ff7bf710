from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'transactions'

router = DefaultRouter()
router.register(r'', views.TransactionViewSet, basename='transaction')

urlpatterns = [
    # GET    /api/transactions/                         - Own transactions (?role=&status=)
    # POST   /api/transactions/                         - Open purchase offer
    # GET    /api/transactions/{id}/                    - Detail
    # POST   /api/transactions/{id}/process/            - pending -> processing
    # POST   /api/transactions/{id}/complete/           - processing -> completed
    # POST   /api/transactions/{id}/cancel/             - pending|processing -> cancelled
    # GET    /api/transactions/stats/                   - Own stats
    # GET    /api/transactions/pending/                 - Pending offers (admin)
    # GET    /api/transactions/by-number/{number}/      - Lookup by transaction number
    path('', include(router.urls)),
]
