from django.urls import path
from . import views

app_name = 'reviews'

urlpatterns = [
    # POST   /api/reviews/                                  - Review a completed transaction
    # GET    /api/reviews/user/{user_id}/?type=received|given - User's reviews
    # GET    /api/reviews/user/{user_id}/stats/             - User's rating summary
    # GET    /api/reviews/can_review/{transaction_id}/      - Review eligibility
    path('', views.create_review, name='review-create'),
    path('user/<uuid:user_id>/', views.user_reviews, name='user-reviews'),
    path('user/<uuid:user_id>/stats/', views.user_review_stats, name='user-review-stats'),
    path('can_review/<uuid:transaction_id>/', views.can_review, name='can-review'),
]
