"""Participant-checked conversation lookup."""

from django.contrib.auth import get_user_model
from uuid import UUID

from ..models import Conversation
from .exceptions import ConversationNotFoundError, NotConversationParticipantError

User = get_user_model()


def get_conversation(*, conversation_id: UUID, user: User) -> Conversation:
    """
    Raises:
        ConversationNotFoundError: If conversation doesn't exist
        NotConversationParticipantError: If user is neither buyer nor seller
    """
    try:
        conversation = (
            Conversation.objects
            .select_related('vehicle', 'buyer', 'seller')
            .get(id=conversation_id)
        )
    except Conversation.DoesNotExist:
        raise ConversationNotFoundError(f"Conversation {conversation_id} not found")

    if not conversation.is_participant(user):
        raise NotConversationParticipantError("You are not part of this conversation")

    return conversation
