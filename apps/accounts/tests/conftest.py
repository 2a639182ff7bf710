import pytest
from datetime import timedelta
from django.utils import timezone
from apps.accounts.models import User


@pytest.fixture
def user_unverified(db):
    return User.objects.create_user(
        email='unverified@example.com',
        password='TestPass123!',
        username='unverified',
        verification_token='test-verification-token',
    )


@pytest.fixture
def user_inactive(db):
    return User.objects.create_user(
        email='inactive@example.com',
        password='TestPass123!',
        username='inactive',
        is_active=False,
    )


@pytest.fixture
def user_with_reset_token(db):
    """Verified user holding a reset token that is still valid for 30 minutes."""
    return User.objects.create_user(
        email='resetuser@example.com',
        password='OldPass123!',
        username='resetuser',
        email_verified=True,
        password_reset_token='valid-reset-token-12345',
        password_reset_expires_at=timezone.now() + timedelta(minutes=30),
    )


@pytest.fixture
def expired_reset_token(user_with_reset_token):
    user_with_reset_token.password_reset_expires_at = timezone.now() - timedelta(minutes=1)
    user_with_reset_token.save(update_fields=['password_reset_expires_at'])
    return user_with_reset_token.password_reset_token
