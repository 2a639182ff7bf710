"""
One-time tokens sent by email.

Verification tokens never expire and are replaced on every resend.
Password reset tokens live in their own column and expire after
PASSWORD_RESET_TOKEN_TTL_MINUTES.
"""

import logging
import secrets
from datetime import timedelta

from django.conf import settings
from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone
from uuid import UUID

from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    EmailAlreadyVerifiedError,
    UserNotFoundError,
)

User = get_user_model()
logger = logging.getLogger(__name__)


def new_token() -> str:
    return secrets.token_urlsafe(32)


def _locked_user(**lookup) -> User:
    try:
        return User.objects.select_for_update().get(**lookup)
    except User.DoesNotExist:
        raise UserNotFoundError("User not found")


# Email verification

@transaction.atomic
def resend_verification(*, user_id: UUID) -> str:
    """
    Replace the user's verification token. Earlier links stop working.

    Raises:
        UserNotFoundError: If user does not exist
        EmailAlreadyVerifiedError: If there is nothing left to verify
    """
    user = _locked_user(id=user_id)
    if user.email_verified:
        raise EmailAlreadyVerifiedError("Email is already verified")

    user.verification_token = new_token()
    user.save(update_fields=['verification_token'])
    logger.info("Verification token reissued for user %s", user.id)
    return user.verification_token


@transaction.atomic
def verify_user_email(*, user_id: UUID, token: str) -> User:
    """
    Raises:
        UserNotFoundError: If user does not exist
        InvalidTokenError: If token is missing or is not the current one
    """
    user = _locked_user(id=user_id)

    if not token or user.verification_token != token:
        raise InvalidTokenError("Invalid verification token")

    user.email_verified = True
    user.verification_token = None
    user.save(update_fields=['email_verified', 'verification_token'])
    return user


# Password reset

@transaction.atomic
def request_password_reset(*, email: str) -> str:
    """
    Issue a reset token for an active account and return it for mailing.

    Raises:
        UserNotFoundError: If no active user has this email
    """
    user = _locked_user(email=email.strip().lower(), is_active=True)

    user.password_reset_token = new_token()
    user.password_reset_expires_at = timezone.now() + timedelta(
        minutes=settings.PASSWORD_RESET_TOKEN_TTL_MINUTES
    )
    user.save(update_fields=['password_reset_token', 'password_reset_expires_at'])

    logger.info("Password reset requested for user %s", user.id)
    return user.password_reset_token


@transaction.atomic
def confirm_password_reset(*, token: str, new_password: str) -> User:
    """
    Set a new password and consume the token.

    Raises:
        InvalidTokenError: If no active user holds this token
        ExpiredTokenError: If the token is past its expiry
    """
    if not token:
        raise InvalidTokenError("Invalid reset token")

    try:
        user = _locked_user(password_reset_token=token, is_active=True)
    except UserNotFoundError:
        raise InvalidTokenError("Invalid reset token")

    if not user.has_valid_reset_token(token):
        raise ExpiredTokenError("Reset token has expired")

    user.set_password(new_password)
    user.clear_reset_token()
    user.save(update_fields=['password', 'password_reset_token', 'password_reset_expires_at'])

    logger.info("Password reset completed for user %s", user.id)
    return user
