"""Services for messaging business logic."""

from .exceptions import (
    MessagingServiceError,
    ConversationNotFoundError,
    VehicleNotFoundError,
    CannotMessageSelfError,
    NotConversationParticipantError,
    EmptyMessageError,
)
from .access import get_conversation
from .conversations import (
    start_conversation,
    list_conversations,
    count_unread_conversations,
    mark_conversation_read,
)
from .messages import send_message, list_messages, search_messages

__all__ = [
    # Exceptions
    'MessagingServiceError',
    'ConversationNotFoundError',
    'VehicleNotFoundError',
    'CannotMessageSelfError',
    'NotConversationParticipantError',
    'EmptyMessageError',
    # Conversations
    'start_conversation',
    'get_conversation',
    'list_conversations',
    'count_unread_conversations',
    'mark_conversation_read',
    # Messages
    'send_message',
    'list_messages',
    'search_messages',
]
