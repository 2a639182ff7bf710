"""Login by email or username."""

import logging

from django.db import transaction
from django.db.models import Q
from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()
logger = logging.getLogger(__name__)

CREDENTIALS_MESSAGE = "Invalid login or password"


def _find_login_candidate(login: str):
    login = login.strip().lower()
    lookup = Q(email=login) if '@' in login else Q(username=login)
    return User.objects.select_for_update().filter(lookup).first()


@transaction.atomic
def authenticate_user(*, login: str, password: str) -> User:
    """
    Check credentials and stamp last_login.

    ``login`` is an email address when it contains '@', otherwise a
    username. Both are stored lowercase.

    Raises:
        InvalidCredentialsError: If no user matches or the password is wrong
        InactiveAccountError: If the password is right but the account is deactivated
    """
    user = _find_login_candidate(login)

    if user is None or not user.check_password(password):
        logger.warning("Failed login for %s", login)
        raise InvalidCredentialsError(CREDENTIALS_MESSAGE)

    if not user.is_active:
        logger.warning("Login attempt on inactive account %s", user.id)
        raise InactiveAccountError("Account is deactivated")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])
    return user
