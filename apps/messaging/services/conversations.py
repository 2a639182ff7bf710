"""Conversation management: find-or-create, listing, unread tracking."""

import logging

from django.db import transaction
from django.db.models import Q, QuerySet
from django.contrib.auth import get_user_model
from django.utils import timezone
from typing import Optional
from uuid import UUID

from apps.vehicles.models import Vehicle
from ..models import Conversation, Message
from .exceptions import (
    VehicleNotFoundError,
    CannotMessageSelfError,
)
from .access import get_conversation
from .messages import send_message

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def start_conversation(
    *,
    vehicle_id: UUID,
    buyer: User,
    message: Optional[str] = None
) -> Conversation:
    """
    Open (or reopen) the buyer's conversation with the seller of a listing.

    Args:
        vehicle_id: Listing the buyer is asking about
        buyer: User starting the conversation
        message: Optional first message, sent right away

    Raises:
        VehicleNotFoundError: If vehicle doesn't exist or is unpublished
        CannotMessageSelfError: If the buyer is the seller
    """
    try:
        vehicle = Vehicle.objects.get(id=vehicle_id, published_at__isnull=False)
    except Vehicle.DoesNotExist:
        raise VehicleNotFoundError(f"Vehicle {vehicle_id} not found")

    if vehicle.seller_id == buyer.id:
        raise CannotMessageSelfError("You cannot start a conversation about your own vehicle")

    conversation, created = Conversation.objects.get_or_create(
        vehicle=vehicle,
        buyer=buyer,
        seller_id=vehicle.seller_id,
    )
    if created:
        logger.info("Conversation %s opened on vehicle %s", conversation.id, vehicle.id)

    if message:
        send_message(conversation_id=conversation.id, sender=buyer, content=message)
        conversation.refresh_from_db()

    return conversation


def list_conversations(*, user: User) -> QuerySet[Conversation]:
    """User's conversations, most recent activity first."""
    return (
        Conversation.objects
        .filter(Q(buyer=user) | Q(seller=user))
        .select_related('vehicle', 'vehicle__brand', 'vehicle__model', 'buyer', 'seller')
        .prefetch_related('vehicle__images')
    )


def count_unread_conversations(*, user: User) -> int:
    """Number of conversations with at least one message the user has not read."""
    return Conversation.objects.filter(
        Q(buyer=user, buyer_unread_count__gt=0) | Q(seller=user, seller_unread_count__gt=0)
    ).count()


@transaction.atomic
def mark_conversation_read(*, conversation_id: UUID, user: User) -> int:
    """
    Reset the user's unread counter and flag the other party's messages read.

    Returns:
        Number of messages newly marked read
    """
    conversation = get_conversation(conversation_id=conversation_id, user=user)

    counter = 'buyer_unread_count' if conversation.is_buyer(user) else 'seller_unread_count'
    Conversation.objects.filter(id=conversation.id).update(**{counter: 0})

    return (
        Message.objects
        .filter(conversation=conversation, is_read=False)
        .exclude(sender=user)
        .update(is_read=True, read_at=timezone.now())
    )
