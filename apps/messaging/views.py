from rest_framework import viewsets, status, mixins
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .models import Conversation
from .serializers import (
    ConversationSerializer,
    ConversationStartSerializer,
    MessageSerializer,
    SendMessageSerializer,
    MessageSearchSerializer,
    UnreadCountSerializer,
    MarkReadResponseSerializer,
)
from .services import (
    start_conversation,
    get_conversation,
    list_conversations,
    count_unread_conversations,
    mark_conversation_read,
    send_message,
    list_messages,
    search_messages,
    MessagingServiceError,
    ConversationNotFoundError,
    VehicleNotFoundError,
    NotConversationParticipantError,
)


def _error_response(error: MessagingServiceError) -> Response:
    if isinstance(error, (ConversationNotFoundError, VehicleNotFoundError)):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, NotConversationParticipantError):
        code = status.HTTP_403_FORBIDDEN
    else:
        code = status.HTTP_400_BAD_REQUEST
    return Response({'error': str(error)}, status=code)


class MessagePagination(PageNumberPagination):
    """Custom pagination for conversations and messages."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 100


class ConversationViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Buyer/seller conversations about listings.

    list: Own conversations, latest activity first
    create: Start (or reopen) a conversation about a vehicle
    retrieve: Conversation detail (participants only)
    """

    serializer_class = ConversationSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = MessagePagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        if getattr(self, 'swagger_fake_view', False):
            return Conversation.objects.none()
        return list_conversations(user=self.request.user)

    def retrieve(self, request, *args, **kwargs):
        try:
            conversation = get_conversation(conversation_id=kwargs['pk'], user=request.user)
        except MessagingServiceError as e:
            return _error_response(e)
        return Response(ConversationSerializer(conversation, context={'request': request}).data)

    @extend_schema(request=ConversationStartSerializer, responses={201: ConversationSerializer})
    def create(self, request, *args, **kwargs):
        serializer = ConversationStartSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            conversation = start_conversation(
                vehicle_id=serializer.validated_data['vehicle'],
                buyer=request.user,
                message=serializer.validated_data.get('message'),
            )
        except MessagingServiceError as e:
            return _error_response(e)

        return Response(
            ConversationSerializer(conversation, context={'request': request}).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(responses={200: MessageSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def messages(self, request, pk=None):
        try:
            queryset = list_messages(conversation_id=pk, user=request.user)
        except MessagingServiceError as e:
            return _error_response(e)

        page = self.paginate_queryset(queryset)
        return self.get_paginated_response(MessageSerializer(page, many=True).data)

    @extend_schema(request=SendMessageSerializer, responses={201: MessageSerializer})
    @action(detail=True, methods=['post'])
    def send(self, request, pk=None):
        serializer = SendMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            message = send_message(
                conversation_id=pk,
                sender=request.user,
                content=serializer.validated_data['content'],
            )
        except MessagingServiceError as e:
            return _error_response(e)

        return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: MarkReadResponseSerializer})
    @action(detail=True, methods=['post'])
    def read(self, request, pk=None):
        try:
            marked = mark_conversation_read(conversation_id=pk, user=request.user)
        except MessagingServiceError as e:
            return _error_response(e)
        return Response({'marked_read': marked})

    @extend_schema(parameters=[MessageSearchSerializer], responses={200: MessageSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def search(self, request, pk=None):
        serializer = MessageSearchSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)

        try:
            queryset = search_messages(
                conversation_id=pk,
                user=request.user,
                query=serializer.validated_data['q'],
            )
        except MessagingServiceError as e:
            return _error_response(e)

        page = self.paginate_queryset(queryset)
        return self.get_paginated_response(MessageSerializer(page, many=True).data)

    @extend_schema(responses={200: UnreadCountSerializer})
    @action(detail=False, methods=['get'])
    def unread_count(self, request):
        return Response({'unread_conversations': count_unread_conversations(user=request.user)})
