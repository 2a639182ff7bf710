from django.db import models
import uuid


class Conversation(models.Model):
    """
    Thread between a buyer and the seller about one listing.

    Each side has its own unread counter; a message increments the
    counter of the party that did not send it.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    vehicle = models.ForeignKey('vehicles.Vehicle', on_delete=models.CASCADE, related_name='conversations')
    buyer = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='buyer_conversations')
    seller = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='seller_conversations')
    last_message_at = models.DateTimeField(null=True, blank=True)
    buyer_unread_count = models.PositiveIntegerField(default=0)
    seller_unread_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'conversations'
        ordering = [models.F('last_message_at').desc(nulls_last=True), '-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['vehicle', 'buyer', 'seller'],
                name='unique_conversation_per_vehicle_buyer',
            ),
        ]
        indexes = [
            models.Index(fields=['buyer', 'last_message_at']),
            models.Index(fields=['seller', 'last_message_at']),
        ]

    def __str__(self):
        return f"{self.buyer} -> {self.seller} about {self.vehicle_id}"

    def is_buyer(self, user):
        return self.buyer_id == getattr(user, 'id', None)

    def is_seller(self, user):
        return self.seller_id == getattr(user, 'id', None)

    def is_participant(self, user):
        return self.is_buyer(user) or self.is_seller(user)

    def unread_count_for(self, user):
        if self.is_buyer(user):
            return self.buyer_unread_count
        if self.is_seller(user):
            return self.seller_unread_count
        return 0


class Message(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    conversation = models.ForeignKey(Conversation, on_delete=models.CASCADE, related_name='messages')
    sender = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='sent_messages')
    content = models.TextField()
    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'messages'
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['conversation', 'created_at']),
            models.Index(fields=['conversation', 'is_read']),
        ]
        constraints = [
            models.CheckConstraint(
                condition=~models.Q(content=''),
                name='message_content_not_empty',
            ),
        ]

    def __str__(self):
        return f"{self.sender} @ {self.created_at:%Y-%m-%d %H:%M}"
