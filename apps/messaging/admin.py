from django.contrib import admin
from .models import Conversation, Message


class MessageInline(admin.TabularInline):
    model = Message
    extra = 0
    fields = ['sender', 'content', 'is_read', 'created_at']
    readonly_fields = ['sender', 'content', 'created_at']


@admin.register(Conversation)
class ConversationAdmin(admin.ModelAdmin):
    list_display = [
        'id',
        'vehicle',
        'buyer',
        'seller',
        'buyer_unread_count',
        'seller_unread_count',
        'last_message_at',
    ]
    search_fields = ['vehicle__title', 'buyer__email', 'seller__email']
    readonly_fields = ['created_at', 'updated_at', 'last_message_at']
    raw_id_fields = ['vehicle', 'buyer', 'seller']
    inlines = [MessageInline]


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ['sender', 'conversation', 'is_read', 'created_at']
    list_filter = ['is_read', 'created_at']
    search_fields = ['content', 'sender__email']
    readonly_fields = ['created_at', 'read_at']
