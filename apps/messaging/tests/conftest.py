import pytest
from apps.messaging.services import start_conversation, send_message


@pytest.fixture
def conversation(db, vehicle, user):
    """``user`` asking the seller about the 25 000 Corolla."""
    return start_conversation(vehicle_id=vehicle.id, buyer=user)


@pytest.fixture
def chat(conversation, user, seller):
    """Two buyer messages and one seller reply."""
    send_message(conversation_id=conversation.id, sender=user, content='Is the price negotiable?')
    send_message(conversation_id=conversation.id, sender=user, content='I can pick it up Saturday')
    send_message(conversation_id=conversation.id, sender=seller, content='Yes, a little. Saturday works.')
    conversation.refresh_from_db()
    return conversation
