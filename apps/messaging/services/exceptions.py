"""
Domain-specific exceptions for messaging app.

Caught in views and converted to ``{'error': ...}`` responses.
"""


class MessagingServiceError(Exception):
    """Base exception for messaging services."""
    pass


class ConversationNotFoundError(MessagingServiceError):
    pass


class VehicleNotFoundError(MessagingServiceError):
    """Raised when the listing does not exist or is not published."""
    pass


class CannotMessageSelfError(MessagingServiceError):
    """Raised when a seller tries to open a conversation on their own listing."""
    pass


class NotConversationParticipantError(MessagingServiceError):
    pass


class EmptyMessageError(MessagingServiceError):
    pass
