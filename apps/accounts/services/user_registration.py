"""Self-service sign-up for buyers, private sellers and dealers."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from apps.accounts.models import UserRole
from .exceptions import UserRegistrationError, RoleNotAllowedError
from .tokens import new_token

User = get_user_model()
logger = logging.getLogger(__name__)

SELF_SERVICE_ROLES = (UserRole.BUYER, UserRole.SELLER, UserRole.DEALER)


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    username: str = '',
    first_name: str = '',
    last_name: str = '',
    phone: str = '',
    role: str = UserRole.BUYER,
) -> User:
    """
    Create the account unverified, holding a fresh verification token.

    The username defaults to the local part of the email.

    Raises:
        RoleNotAllowedError: If the role is not a self-service role
        UserRegistrationError: If the email or username is taken
    """
    if role not in SELF_SERVICE_ROLES:
        raise RoleNotAllowedError(f"Cannot register with role '{role}'")

    email = email.strip().lower()
    if User.objects.filter(email=email).exists():
        raise UserRegistrationError("A user with this email already exists")

    profile = {
        'first_name': first_name,
        'last_name': last_name,
        'phone': phone,
        'role': role,
        'verification_token': new_token(),
    }
    if username:
        profile['username'] = username

    try:
        with transaction.atomic():
            user = User.objects.create_user(email=email, password=password, **profile)
    except IntegrityError:
        raise UserRegistrationError("Username is already taken")

    logger.info("Registered %s account %s", role, user.id)
    return user
