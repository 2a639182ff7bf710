"""Sending and reading messages."""

import logging

from django.db import transaction
from django.db.models import F, QuerySet
from django.contrib.auth import get_user_model
from django.utils import timezone
from uuid import UUID

from ..models import Conversation, Message
from .access import get_conversation
from .exceptions import EmptyMessageError

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def send_message(*, conversation_id: UUID, sender: User, content: str) -> Message:
    """
    Post a message and bump the recipient's unread counter.

    Raises:
        ConversationNotFoundError: If conversation doesn't exist
        NotConversationParticipantError: If sender is not buyer or seller
        EmptyMessageError: If content is blank
    """
    if not content or not content.strip():
        raise EmptyMessageError("Message cannot be empty")

    conversation = get_conversation(conversation_id=conversation_id, user=sender)

    message = Message.objects.create(
        conversation=conversation,
        sender=sender,
        content=content,
    )

    counter = 'seller_unread_count' if conversation.is_buyer(sender) else 'buyer_unread_count'
    Conversation.objects.filter(id=conversation.id).update(
        **{counter: F(counter) + 1},
        last_message_at=message.created_at,
        updated_at=timezone.now(),
    )

    logger.debug("Message %s sent in conversation %s", message.id, conversation.id)
    return message


def list_messages(*, conversation_id: UUID, user: User) -> QuerySet[Message]:
    """Messages oldest first."""
    conversation = get_conversation(conversation_id=conversation_id, user=user)
    return conversation.messages.select_related('sender').order_by('created_at')


def search_messages(*, conversation_id: UUID, user: User, query: str) -> QuerySet[Message]:
    """Case-insensitive substring search within one conversation."""
    return list_messages(conversation_id=conversation_id, user=user).filter(content__icontains=query)
