import pytest
import uuid
from django.urls import reverse
from rest_framework import status


def conversation_url(conversation, action=None):
    if action:
        return reverse(f'messaging:conversation-{action}', kwargs={'pk': conversation.id})
    return reverse('messaging:conversation-detail', kwargs={'pk': conversation.id})


@pytest.mark.django_db
class TestConversationAPI:

    def test_start_conversation(self, authenticated_client, vehicle):
        url = reverse('messaging:conversation-list')
        response = authenticated_client.post(
            url,
            {'vehicle': str(vehicle.id), 'message': 'Hello, is it still available?'},
            format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['vehicle']['id'] == str(vehicle.id)
        assert response.data['last_message']['content'] == 'Hello, is it still available?'
        assert response.data['unread_count'] == 0

    def test_start_own_vehicle(self, seller_client, vehicle):
        url = reverse('messaging:conversation-list')
        response = seller_client.post(url, {'vehicle': str(vehicle.id)}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_start_unknown_vehicle(self, authenticated_client):
        url = reverse('messaging:conversation-list')
        response = authenticated_client.post(url, {'vehicle': str(uuid.uuid4())}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_requires_login(self, api_client):
        response = api_client.get(reverse('messaging:conversation-list'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_list_shows_own_unread(self, seller_client, chat):
        response = seller_client.get(reverse('messaging:conversation-list'))

        assert response.data['count'] == 1
        assert response.data['results'][0]['unread_count'] == 2

    def test_retrieve_outsider(self, other_client, conversation):
        response = other_client.get(conversation_url(conversation))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_send_and_read(self, seller_client, authenticated_client, conversation):
        response = authenticated_client.post(
            conversation_url(conversation, 'send'), {'content': 'Can I test drive it?'}, format='json'
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['sender']['username'] == 'testuser'

        response = seller_client.get(reverse('messaging:conversation-unread-count'))
        assert response.data == {'unread_conversations': 1}

        response = seller_client.post(conversation_url(conversation, 'read'))
        assert response.data == {'marked_read': 1}

        response = seller_client.get(reverse('messaging:conversation-unread-count'))
        assert response.data == {'unread_conversations': 0}

    def test_send_blank(self, authenticated_client, conversation):
        response = authenticated_client.post(conversation_url(conversation, 'send'), {'content': ''}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_outsider_cannot_send(self, other_client, conversation):
        response = other_client.post(conversation_url(conversation, 'send'), {'content': 'Hi'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_messages_and_search(self, authenticated_client, chat):
        response = authenticated_client.get(conversation_url(chat, 'messages'))
        assert response.data['count'] == 3

        response = authenticated_client.get(conversation_url(chat, 'search'), {'q': 'NEGOTIABLE'})
        assert response.data['count'] == 1

    def test_search_requires_query(self, authenticated_client, chat):
        response = authenticated_client.get(conversation_url(chat, 'search'))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
