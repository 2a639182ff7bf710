from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'messaging'

router = DefaultRouter()
router.register(r'conversations', views.ConversationViewSet, basename='conversation')

urlpatterns = [
    # GET    /api/messaging/conversations/                  - Own conversations
    # POST   /api/messaging/conversations/                  - Start conversation about a vehicle
    # GET    /api/messaging/conversations/{id}/             - Conversation detail
    # GET    /api/messaging/conversations/{id}/messages/    - Messages, oldest first
    # POST   /api/messaging/conversations/{id}/send/        - Send message
    # POST   /api/messaging/conversations/{id}/read/        - Mark as read
    # GET    /api/messaging/conversations/{id}/search/?q=   - Search messages
    # GET    /api/messaging/conversations/unread_count/     - Conversations with unread messages
    path('', include(router.urls)),
]
