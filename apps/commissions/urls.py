from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'commissions'

# Note: rules must be registered BEFORE empty prefix to avoid URL conflicts
router = DefaultRouter()
router.register(r'rules', views.CommissionRuleViewSet, basename='rule')
router.register(r'', views.CommissionViewSet, basename='commission')

urlpatterns = [
    # GET    /api/commissions/quote/?price=&role=   - Resolver preview

    # Rule routes (admin)
    # GET    /api/commissions/rules/                - List rules
    # POST   /api/commissions/rules/                - Create rule
    # GET    /api/commissions/rules/{id}/           - Rule detail
    # PATCH  /api/commissions/rules/{id}/           - Update rule
    # DELETE /api/commissions/rules/{id}/           - Deactivate rule
    # GET    /api/commissions/rules/table/          - Public commission table

    # Commission routes
    # GET    /api/commissions/                      - List (admin, ?is_paid=)
    # GET    /api/commissions/{id}/                 - Detail (admin)
    # GET    /api/commissions/unpaid/               - Unpaid, oldest first (admin)
    # POST   /api/commissions/{id}/mark_paid/       - Mark paid (admin)
    # POST   /api/commissions/pay_batch/            - Batch payout (admin)
    # GET    /api/commissions/mine/                 - Own commissions (seller)
    # GET    /api/commissions/stats/                - Own totals (seller)

    path('quote/', views.quote, name='quote'),
    path('', include(router.urls)),
]
