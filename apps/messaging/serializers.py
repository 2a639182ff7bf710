from rest_framework import serializers
from apps.accounts.serializers import UserPublicSerializer
from apps.vehicles.serializers import VehicleListSerializer
from .models import Conversation, Message


class MessageSerializer(serializers.ModelSerializer):
    sender = UserPublicSerializer(read_only=True)

    class Meta:
        model = Message
        fields = ['id', 'conversation', 'sender', 'content', 'is_read', 'read_at', 'created_at']
        read_only_fields = fields


class ConversationSerializer(serializers.ModelSerializer):
    """Conversation as seen by one participant (unread count is theirs)."""

    vehicle = VehicleListSerializer(read_only=True)
    buyer = UserPublicSerializer(read_only=True)
    seller = UserPublicSerializer(read_only=True)
    unread_count = serializers.SerializerMethodField()
    last_message = serializers.SerializerMethodField()

    class Meta:
        model = Conversation
        fields = [
            'id',
            'vehicle',
            'buyer',
            'seller',
            'unread_count',
            'last_message',
            'last_message_at',
            'created_at',
        ]
        read_only_fields = fields

    def get_unread_count(self, obj) -> int:
        request = self.context.get('request')
        if request is None:
            return 0
        return obj.unread_count_for(request.user)

    def get_last_message(self, obj):
        message = obj.messages.order_by('-created_at').first()
        if message is None:
            return None
        return {
            'content': message.content,
            'sender': str(message.sender_id),
            'created_at': message.created_at,
        }


class ConversationStartSerializer(serializers.Serializer):
    vehicle = serializers.UUIDField()
    message = serializers.CharField(required=False, allow_blank=True, max_length=5000)


class SendMessageSerializer(serializers.Serializer):
    content = serializers.CharField(max_length=5000)


class MessageSearchSerializer(serializers.Serializer):
    q = serializers.CharField(min_length=1, max_length=200)


class UnreadCountSerializer(serializers.Serializer):
    unread_conversations = serializers.IntegerField()


class MarkReadResponseSerializer(serializers.Serializer):
    marked_read = serializers.IntegerField()
