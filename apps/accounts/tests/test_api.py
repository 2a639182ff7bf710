import pytest
import uuid
from django.urls import reverse
from rest_framework import status
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole


# =============================================================================
# Registration Tests
# =============================================================================

@pytest.mark.django_db
class TestRegistration:
    """Tests for POST /api/auth/register/"""

    def test_register_success(self, api_client):
        """Successfully register a new buyer."""
        url = reverse('users:register')
        data = {
            'email': 'newuser@example.com',
            'username': 'NewUser',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
            'first_name': 'New',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert response.data['user']['role'] == UserRole.BUYER
        assert response.data['user']['username'] == 'newuser'

    def test_register_as_dealer(self, api_client):
        """Dealers can self-register."""
        url = reverse('users:register')
        data = {
            'email': 'dealer2@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
            'role': 'dealer',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert User.objects.get(email='dealer2@example.com').role == UserRole.DEALER

    def test_register_as_admin_rejected(self, api_client):
        """Admin role is not offered at registration."""
        url = reverse('users:register')
        data = {
            'email': 'sneaky@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
            'role': 'admin',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not User.objects.filter(email='sneaky@example.com').exists()

    def test_register_without_username(self, api_client):
        """Username defaults to the local part of the email."""
        url = reverse('users:register')
        data = {
            'email': 'minimal@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert User.objects.get(email='minimal@example.com').username == 'minimal'

    def test_register_duplicate_email(self, api_client, user):
        url = reverse('users:register')
        data = {
            'email': user.email,
            'username': 'another',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_register_duplicate_username(self, api_client, user):
        """Cannot register with a taken username."""
        url = reverse('users:register')
        data = {
            'email': 'fresh@example.com',
            'username': 'TESTUSER',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'username' in response.data

    def test_register_password_mismatch(self, api_client):
        """password_confirm must echo password."""
        url = reverse('users:register')
        data = {
            'email': 'mismatch@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'DifferentPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password_confirm' in response.data

    def test_register_weak_password(self, api_client):
        url = reverse('users:register')
        data = {
            'email': 'weak@example.com',
            'password': '123',
            'password_confirm': '123',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_register_response_hides_secrets(self, api_client):
        url = reverse('users:register')
        data = {
            'email': 'secret@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert 'password' not in response.data['user']
        assert 'verification_token' not in response.data['user']


# =============================================================================
# Login / Logout Tests
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login/"""

    def test_login_success(self, api_client, user):
        url = reverse('users:login')
        response = api_client.post(url, {'login': user.email, 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data['tokens']
        assert response.data['user']['email'] == user.email

    def test_login_email_case_insensitive(self, api_client, user):
        url = reverse('users:login')
        response = api_client.post(url, {'login': 'TestUser@Example.com', 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_200_OK

    def test_login_with_username(self, api_client, user):
        url = reverse('users:login')
        response = api_client.post(url, {'login': 'testuser', 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['username'] == 'testuser'

    def test_login_wrong_password(self, api_client, user):
        url = reverse('users:login')
        response = api_client.post(url, {'login': user.email, 'password': 'WrongPassword123!'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert 'error' in response.data

    def test_login_inactive_user(self, api_client, user_inactive):
        """Right password on a deactivated account is 403, not 401."""
        url = reverse('users:login')
        response = api_client.post(url, {'login': user_inactive.email, 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_login_updates_last_login(self, api_client, user):
        url = reverse('users:login')
        api_client.post(url, {'login': user.email, 'password': 'TestPass123!'})

        user.refresh_from_db()
        assert user.last_login is not None


@pytest.mark.django_db
class TestLogout:
    """Tests for POST /api/auth/logout/"""

    def test_logout_blacklists_refresh_token(self, authenticated_client, api_client, user):
        """A blacklisted refresh token can no longer be rotated."""
        refresh = RefreshToken.for_user(user)
        response = authenticated_client.post(reverse('users:logout'), {'refresh': str(refresh)})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'Logout successful'

        response = api_client.post(reverse('token_refresh'), {'refresh': str(refresh)})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_logout_invalid_token(self, authenticated_client):
        response = authenticated_client.post(reverse('users:logout'), {'refresh': 'garbage'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_logout_unauthenticated(self, api_client):
        """Logout requires authentication."""
        response = api_client.post(reverse('users:logout'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Profile Tests
# =============================================================================

@pytest.mark.django_db
class TestCurrentUser:
    """Tests for GET /api/auth/user/ and PATCH /api/auth/user/update/"""

    def test_get_current_user(self, authenticated_client, user):
        response = authenticated_client.get(reverse('users:current-user'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == user.email
        assert response.data['display_name'] == 'Test User'
        assert response.data['role'] == UserRole.BUYER

    def test_get_current_user_unauthenticated(self, api_client):
        response = api_client.get(reverse('users:current-user'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_update_names(self, authenticated_client, user):
        url = reverse('users:update-profile')
        response = authenticated_client.patch(url, {'first_name': 'Updated', 'phone': '+593999'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['display_name'] == 'Updated User'
        user.refresh_from_db()
        assert user.phone == '+593999'

    def test_cannot_escalate_role(self, authenticated_client, user):
        """Role and email are read-only on the profile endpoint."""
        url = reverse('users:update-profile')
        authenticated_client.patch(url, {'role': 'admin', 'email': 'new@example.com'})

        user.refresh_from_db()
        assert user.role == UserRole.BUYER
        assert user.email == 'testuser@example.com'


@pytest.mark.django_db
class TestPublicProfile:
    """Tests for GET /api/auth/users/<id>/"""

    def test_public_profile(self, api_client, seller, vehicle):
        url = reverse('users:user-detail', kwargs={'pk': seller.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['username'] == 'seller'
        assert 'email' not in response.data['user']
        assert response.data['active_vehicle_count'] == 1
        assert response.data['sold_vehicle_count'] == 0
        assert response.data['average_rating'] is None

    def test_public_profile_not_found(self, api_client):
        url = reverse('users:user-detail', kwargs={'pk': uuid.uuid4()})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Email Verification / Password Reset Tests
# =============================================================================

@pytest.mark.django_db
class TestEmailVerification:
    """Tests for POST /api/auth/verify-email/"""

    def test_verify_email(self, api_client, user_unverified):
        refresh = RefreshToken.for_user(user_unverified)
        api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')

        response = api_client.post(reverse('users:verify-email'), {'token': 'test-verification-token'})

        assert response.status_code == status.HTTP_200_OK
        user_unverified.refresh_from_db()
        assert user_unverified.email_verified is True
        assert user_unverified.verification_token is None

    def test_verify_email_wrong_token(self, api_client, user_unverified):
        refresh = RefreshToken.for_user(user_unverified)
        api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')

        response = api_client.post(reverse('users:verify-email'), {'token': 'nope'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_resend_verification(self, api_client, user_unverified):
        refresh = RefreshToken.for_user(user_unverified)
        api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')

        response = api_client.post(reverse('users:resend-verification'))

        assert response.status_code == status.HTTP_200_OK
        user_unverified.refresh_from_db()
        assert user_unverified.verification_token != 'test-verification-token'

    def test_resend_verification_already_verified(self, authenticated_client):
        response = authenticated_client.post(reverse('users:resend-verification'))

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestPasswordReset:
    """Tests for the password reset endpoints."""

    def test_request_reset_unknown_email(self, api_client):
        """Does not reveal whether the email exists."""
        response = api_client.post(reverse('users:password-reset'), {'email': 'ghost@example.com'})

        assert response.status_code == status.HTTP_200_OK

    def test_confirm_reset(self, api_client, user_with_reset_token):
        data = {
            'token': 'valid-reset-token-12345',
            'new_password': 'BrandNewPass456!',
            'new_password_confirm': 'BrandNewPass456!',
        }
        response = api_client.post(reverse('users:password-reset-confirm'), data)

        assert response.status_code == status.HTTP_200_OK
        user_with_reset_token.refresh_from_db()
        assert user_with_reset_token.check_password('BrandNewPass456!')

    def test_confirm_reset_invalid_token(self, api_client):
        data = {
            'token': 'invalid',
            'new_password': 'BrandNewPass456!',
            'new_password_confirm': 'BrandNewPass456!',
        }
        response = api_client.post(reverse('users:password-reset-confirm'), data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_confirm_reset_expired_token(self, api_client, expired_reset_token):
        data = {
            'token': expired_reset_token,
            'new_password': 'BrandNewPass456!',
            'new_password_confirm': 'BrandNewPass456!',
        }
        response = api_client.post(reverse('users:password-reset-confirm'), data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Reset token has expired'


# =============================================================================
# Delete Account Tests
# =============================================================================

@pytest.mark.django_db
class TestDeleteAccount:
    """Tests for DELETE /api/auth/user/delete/"""

    def test_delete_account_success(self, authenticated_client, user):
        """Account is anonymized, not removed."""
        url = reverse('users:delete-account')
        response = authenticated_client.delete(url, {'password': 'TestPass123!', 'confirm': True}, format='json')

        assert response.status_code == status.HTTP_204_NO_CONTENT
        user.refresh_from_db()
        assert user.is_active is False
        assert user.deleted_at is not None
        assert 'anonymized' in user.email

    def test_delete_account_wrong_password(self, authenticated_client, user):
        url = reverse('users:delete-account')
        response = authenticated_client.delete(url, {'password': 'WrongPassword!', 'confirm': True}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        user.refresh_from_db()
        assert user.is_active is True

    def test_delete_account_without_confirmation(self, authenticated_client, user):
        url = reverse('users:delete-account')
        response = authenticated_client.delete(url, {'password': 'TestPass123!', 'confirm': False}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
