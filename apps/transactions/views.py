from rest_framework import viewsets, status, mixins
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsMarketplaceAdmin
from .models import Transaction
from .serializers import (
    TransactionSerializer,
    TransactionListSerializer,
    TransactionCreateSerializer,
    TransactionFilterSerializer,
    CompleteTransactionSerializer,
    CancelTransactionSerializer,
    TransactionStatsSerializer,
)
from .permissions import IsTransactionParticipant, CanAdvanceTransaction
from .services import (
    create_transaction,
    process_transaction,
    complete_transaction,
    cancel_transaction,
    list_user_transactions,
    list_transactions,
    list_pending_transactions,
    get_transaction,
    get_transaction_by_number,
    get_user_transaction_stats,
)


class TransactionPagination(PageNumberPagination):
    """Custom pagination for transactions."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class TransactionViewSet(
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Purchase transactions.

    list: Own transactions (admins see all), filter by role/status
    create: Open a purchase offer on a listing
    retrieve: Transaction detail (participants and admins)
    process/complete: Seller or admin
    cancel: Buyer, seller or admin
    """

    serializer_class = TransactionSerializer
    permission_classes = [IsAuthenticated, IsTransactionParticipant]
    pagination_class = TransactionPagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_permissions(self):
        if self.action in ['process', 'complete']:
            return [IsAuthenticated(), CanAdvanceTransaction()]
        if self.action == 'pending':
            return [IsMarketplaceAdmin()]
        return super().get_permissions()

    def get_queryset(self):
        if getattr(self, 'swagger_fake_view', False):
            return Transaction.objects.none()

        filter_serializer = TransactionFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        user = self.request.user
        if user.is_marketplace_admin() and 'role' not in params:
            return list_transactions(status=params.get('status'))

        return list_user_transactions(
            user=user,
            role=params.get('role'),
            status=params.get('status'),
        )

    def get_object(self):
        txn = get_transaction(transaction_id=self.kwargs['pk'])
        self.check_object_permissions(self.request, txn)
        return txn

    def get_serializer_class(self):
        if self.action in ['list', 'pending']:
            return TransactionListSerializer
        elif self.action == 'create':
            return TransactionCreateSerializer
        return TransactionSerializer

    @extend_schema(parameters=[TransactionFilterSerializer])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(request=TransactionCreateSerializer, responses={201: TransactionSerializer})
    def create(self, request, *args, **kwargs):
        serializer = TransactionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        txn = create_transaction(
            vehicle_id=serializer.validated_data['vehicle'],
            buyer=request.user,
            payment_method=serializer.validated_data['payment_method'],
            notes=serializer.validated_data['notes'],
        )

        return Response(
            TransactionSerializer(get_transaction(transaction_id=txn.id)).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(request=None, responses={200: TransactionSerializer})
    @action(detail=True, methods=['post'])
    def process(self, request, pk=None):
        txn = self.get_object()
        process_transaction(transaction_id=txn.id)
        return Response(TransactionSerializer(get_transaction(transaction_id=txn.id)).data)

    @extend_schema(request=CompleteTransactionSerializer, responses={200: TransactionSerializer})
    @action(detail=True, methods=['post'])
    def complete(self, request, pk=None):
        txn = self.get_object()
        serializer = CompleteTransactionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        complete_transaction(
            transaction_id=txn.id,
            payment_reference=serializer.validated_data['payment_reference'],
        )
        return Response(TransactionSerializer(get_transaction(transaction_id=txn.id)).data)

    @extend_schema(request=CancelTransactionSerializer, responses={200: TransactionSerializer})
    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        txn = self.get_object()
        serializer = CancelTransactionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cancel_transaction(transaction_id=txn.id, reason=serializer.validated_data['reason'])
        return Response(TransactionSerializer(get_transaction(transaction_id=txn.id)).data)

    @extend_schema(responses={200: TransactionStatsSerializer})
    @action(detail=False, methods=['get'])
    def stats(self, request):
        """Counts and completed volume as buyer and as seller."""
        return Response(TransactionStatsSerializer({
            'as_buyer': get_user_transaction_stats(user=request.user, role='buyer'),
            'as_seller': get_user_transaction_stats(user=request.user, role='seller'),
        }).data)

    @action(detail=False, methods=['get'])
    def pending(self, request):
        """Pending offers across the marketplace, oldest first."""
        page = self.paginate_queryset(list_pending_transactions())
        return self.get_paginated_response(TransactionListSerializer(page, many=True).data)

    @extend_schema(responses={200: TransactionSerializer})
    @action(detail=False, methods=['get'], url_path=r'by-number/(?P<number>[A-Za-z0-9-]+)', url_name='by-number')
    def by_number(self, request, number=None):
        txn = get_transaction_by_number(transaction_number=number)
        self.check_object_permissions(request, txn)
        return Response(TransactionSerializer(txn).data)
