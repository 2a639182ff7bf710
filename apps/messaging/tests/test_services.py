import pytest
import uuid

from apps.messaging.models import Conversation, Message
from apps.messaging.services import (
    start_conversation,
    send_message,
    mark_conversation_read,
    count_unread_conversations,
    list_conversations,
    list_messages,
    search_messages,
    VehicleNotFoundError,
    CannotMessageSelfError,
    NotConversationParticipantError,
    ConversationNotFoundError,
    EmptyMessageError,
)


@pytest.mark.django_db
class TestStartConversation:

    def test_start(self, vehicle, user, seller):
        conversation = start_conversation(vehicle_id=vehicle.id, buyer=user)

        assert conversation.buyer == user
        assert conversation.seller == seller
        assert conversation.last_message_at is None

    def test_find_existing(self, conversation, vehicle, user):
        again = start_conversation(vehicle_id=vehicle.id, buyer=user)

        assert again.id == conversation.id
        assert Conversation.objects.count() == 1

    def test_start_with_message(self, vehicle, user):
        conversation = start_conversation(vehicle_id=vehicle.id, buyer=user, message='Still available?')

        assert conversation.messages.count() == 1
        assert conversation.seller_unread_count == 1
        assert conversation.last_message_at is not None

    def test_seller_cannot_message_self(self, vehicle, seller):
        with pytest.raises(CannotMessageSelfError):
            start_conversation(vehicle_id=vehicle.id, buyer=seller)

    def test_unpublished_vehicle(self, vehicle, user):
        vehicle.published_at = None
        vehicle.save()

        with pytest.raises(VehicleNotFoundError):
            start_conversation(vehicle_id=vehicle.id, buyer=user)

    def test_unknown_vehicle(self, user):
        with pytest.raises(VehicleNotFoundError):
            start_conversation(vehicle_id=uuid.uuid4(), buyer=user)


@pytest.mark.django_db
class TestSendMessage:

    def test_counters(self, chat):
        assert chat.seller_unread_count == 2
        assert chat.buyer_unread_count == 1
        assert chat.last_message_at == chat.messages.order_by('-created_at').first().created_at

    def test_outsider_cannot_send(self, conversation, other_user):
        with pytest.raises(NotConversationParticipantError):
            send_message(conversation_id=conversation.id, sender=other_user, content='Hi')

        assert not Message.objects.exists()

    def test_blank_content(self, conversation, user):
        with pytest.raises(EmptyMessageError):
            send_message(conversation_id=conversation.id, sender=user, content='   ')

    def test_unknown_conversation(self, user):
        with pytest.raises(ConversationNotFoundError):
            send_message(conversation_id=uuid.uuid4(), sender=user, content='Hello')


@pytest.mark.django_db
class TestReadTracking:

    def test_mark_read(self, chat, seller):
        marked = mark_conversation_read(conversation_id=chat.id, user=seller)

        chat.refresh_from_db()
        assert marked == 2
        assert chat.seller_unread_count == 0
        assert chat.buyer_unread_count == 1
        assert chat.messages.filter(sender=seller, is_read=False).count() == 1

    def test_count_unread_conversations(self, chat, user, seller):
        assert count_unread_conversations(user=user) == 1
        assert count_unread_conversations(user=seller) == 1

        mark_conversation_read(conversation_id=chat.id, user=user)
        assert count_unread_conversations(user=user) == 0

    def test_outsider_cannot_mark_read(self, chat, other_user):
        with pytest.raises(NotConversationParticipantError):
            mark_conversation_read(conversation_id=chat.id, user=other_user)


@pytest.mark.django_db
class TestListing:

    def test_list_conversations_for_both_sides(self, conversation, user, seller, other_user):
        assert list(list_conversations(user=user)) == [conversation]
        assert list(list_conversations(user=seller)) == [conversation]
        assert list(list_conversations(user=other_user)) == []

    def test_latest_activity_first(self, conversation, dealer_vehicle, user):
        newer = start_conversation(vehicle_id=dealer_vehicle.id, buyer=user)
        send_message(conversation_id=conversation.id, sender=user, content='Bump')

        assert list(list_conversations(user=user)) == [conversation, newer]

    def test_messages_oldest_first(self, chat, user):
        contents = [m.content for m in list_messages(conversation_id=chat.id, user=user)]

        assert contents[0] == 'Is the price negotiable?'
        assert contents[-1] == 'Yes, a little. Saturday works.'

    def test_search_case_insensitive(self, chat, seller):
        results = search_messages(conversation_id=chat.id, user=seller, query='saturday')

        assert results.count() == 2

    def test_outsider_cannot_list(self, chat, other_user):
        with pytest.raises(NotConversationParticipantError):
            list_messages(conversation_id=chat.id, user=other_user)
