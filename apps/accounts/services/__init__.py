"""Accounts services: sign-up, login, email tokens and account lifecycle."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    RoleNotAllowedError,
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidTokenError,
    ExpiredTokenError,
    EmailAlreadyVerifiedError,
    UserNotFoundError,
    PasswordConfirmationError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user
from .tokens import (
    resend_verification,
    verify_user_email,
    request_password_reset,
    confirm_password_reset,
)
from .account_management import delete_user_account, get_seller_profile

__all__ = [
    'AccountsServiceError',
    'UserRegistrationError',
    'RoleNotAllowedError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'InvalidTokenError',
    'ExpiredTokenError',
    'EmailAlreadyVerifiedError',
    'UserNotFoundError',
    'PasswordConfirmationError',
    'register_user',
    'authenticate_user',
    'resend_verification',
    'verify_user_email',
    'request_password_reset',
    'confirm_password_reset',
    'delete_user_account',
    'get_seller_profile',
]
