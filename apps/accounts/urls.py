from django.urls import path
from . import views

app_name = 'users'

# /api/auth/
#   register/                  POST   sign-up, returns JWT pair
#   login/                     POST   email or username + password
#   logout/                    POST   blacklist refresh token
#   user/                      GET    own profile
#   user/update/               PATCH  names, phone, avatar
#   user/delete/               DELETE anonymize own account
#   users/<uuid>/              GET    public seller profile
#   verify-email/              POST   confirm email with token
#   verify-email/resend/       POST   reissue verification token
#   password-reset/            POST   mail a reset token
#   password-reset/confirm/    POST   set new password with token

urlpatterns = [
    path('register/', views.register, name='register'),
    path('login/', views.login, name='login'),
    path('logout/', views.logout, name='logout'),

    path('user/', views.get_current_user, name='current-user'),
    path('user/update/', views.update_profile, name='update-profile'),
    path('user/delete/', views.delete_account, name='delete-account'),
    path('users/<uuid:pk>/', views.user_profile, name='user-detail'),

    path('verify-email/', views.verify_email, name='verify-email'),
    path('verify-email/resend/', views.resend_verification, name='resend-verification'),
    path('password-reset/', views.request_password_reset, name='password-reset'),
    path('password-reset/confirm/', views.confirm_password_reset, name='password-reset-confirm'),
]
