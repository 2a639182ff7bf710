"""Errors raised by the accounts services. Views turn them into {'error': ...} responses."""


class AccountsServiceError(Exception):
    pass


class UserRegistrationError(AccountsServiceError):
    """Sign-up refused: email or username taken."""
    pass


class RoleNotAllowedError(UserRegistrationError):
    """Sign-up asked for a role that cannot be self-assigned (admin)."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Unknown login or wrong password. The message never says which."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Correct password on a deactivated or anonymized account."""
    pass


class InvalidTokenError(AccountsServiceError):
    pass


class ExpiredTokenError(InvalidTokenError):
    """Password reset token matched but is past its expiry."""
    pass


class EmailAlreadyVerifiedError(AccountsServiceError):
    pass


class UserNotFoundError(AccountsServiceError):
    pass


class PasswordConfirmationError(AccountsServiceError):
    """Destructive account action attempted with the wrong current password."""
    pass
