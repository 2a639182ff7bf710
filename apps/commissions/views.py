from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsMarketplaceAdmin
from .models import CommissionRule, Commission
from .serializers import (
    CommissionRuleSerializer,
    CommissionTableSerializer,
    CommissionSerializer,
    CommissionFilterSerializer,
    MarkPaidInputSerializer,
    PayBatchInputSerializer,
    PayBatchResponseSerializer,
    QuoteInputSerializer,
    QuoteResponseSerializer,
    SellerCommissionStatsSerializer,
)
from .services import (
    calculate_commission,
    commission_table,
    mark_commission_paid,
    pay_commissions_batch,
    list_unpaid_commissions,
    list_seller_commissions,
    get_seller_commission_stats,
    CommissionRuleNotFoundError,
    CommissionNotFoundError,
)


class CommissionPagination(PageNumberPagination):
    """Custom pagination for commissions."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class CommissionRuleViewSet(viewsets.ModelViewSet):
    """
    Commission rules.

    list/create/retrieve/update/destroy: admin only (destroy deactivates)
    table: public list of active rules
    """

    queryset = CommissionRule.objects.all()
    serializer_class = CommissionRuleSerializer
    permission_classes = [IsMarketplaceAdmin]
    pagination_class = CommissionPagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_permissions(self):
        if self.action == 'table':
            return [AllowAny()]
        return super().get_permissions()

    def get_object(self):
        try:
            return CommissionRule.objects.get(id=self.kwargs['pk'])
        except CommissionRule.DoesNotExist:
            raise CommissionRuleNotFoundError()

    def perform_destroy(self, instance):
        # Keep the row: commissions reference the rule that produced them
        instance.is_active = False
        instance.save(update_fields=['is_active', 'updated_at'])

    @extend_schema(responses={200: CommissionTableSerializer(many=True)})
    @action(detail=False, methods=['get'])
    def table(self, request):
        return Response(CommissionTableSerializer(commission_table(), many=True).data)


class CommissionViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Commissions charged on completed sales.

    list/retrieve: admin only, filterable by is_paid
    unpaid: admin, oldest first
    mark_paid / pay_batch: admin payouts
    mine / stats: the current seller's commissions
    """

    queryset = Commission.objects.select_related(
        'rule', 'transaction', 'transaction__vehicle', 'transaction__seller'
    )
    serializer_class = CommissionSerializer
    permission_classes = [IsMarketplaceAdmin]
    pagination_class = CommissionPagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_permissions(self):
        if self.action in ['mine', 'stats']:
            return [IsAuthenticated()]
        return super().get_permissions()

    def get_queryset(self):
        queryset = super().get_queryset()
        filter_serializer = CommissionFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        is_paid = filter_serializer.validated_data.get('is_paid')
        if is_paid is not None:
            queryset = queryset.filter(is_paid=is_paid)
        return queryset

    def get_object(self):
        try:
            return self.get_queryset().get(id=self.kwargs['pk'])
        except Commission.DoesNotExist:
            raise CommissionNotFoundError()

    @action(detail=False, methods=['get'])
    def unpaid(self, request):
        page = self.paginate_queryset(list_unpaid_commissions())
        return self.get_paginated_response(CommissionSerializer(page, many=True).data)

    @extend_schema(request=MarkPaidInputSerializer, responses={200: CommissionSerializer})
    @action(detail=True, methods=['post'])
    def mark_paid(self, request, pk=None):
        serializer = MarkPaidInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        commission = mark_commission_paid(
            commission_id=pk,
            payment_reference=serializer.validated_data['payment_reference'],
        )
        return Response(CommissionSerializer(commission).data)

    @extend_schema(request=PayBatchInputSerializer, responses={200: PayBatchResponseSerializer})
    @action(detail=False, methods=['post'])
    def pay_batch(self, request):
        serializer = PayBatchInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        updated = pay_commissions_batch(
            commission_ids=serializer.validated_data['commission_ids'],
            payment_reference=serializer.validated_data['payment_reference'],
        )
        return Response({'updated': updated})

    @extend_schema(parameters=[CommissionFilterSerializer])
    @action(detail=False, methods=['get'])
    def mine(self, request):
        filter_serializer = CommissionFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        queryset = list_seller_commissions(
            seller=request.user,
            is_paid=filter_serializer.validated_data.get('is_paid'),
        )
        page = self.paginate_queryset(queryset)
        return self.get_paginated_response(CommissionSerializer(page, many=True).data)

    @extend_schema(responses={200: SellerCommissionStatsSerializer})
    @action(detail=False, methods=['get'])
    def stats(self, request):
        stats = get_seller_commission_stats(seller=request.user)
        return Response(SellerCommissionStatsSerializer(stats).data)


@extend_schema(
    parameters=[QuoteInputSerializer],
    responses={200: QuoteResponseSerializer},
    description="Preview the commission the current rules would charge for a price and seller role.",
    tags=['commissions'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def quote(request):
    serializer = QuoteInputSerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)
    price = serializer.validated_data['price']

    breakdown = calculate_commission(price=price, seller_role=serializer.validated_data['role'])

    return Response(QuoteResponseSerializer({
        'price': price,
        'amount': breakdown.amount,
        'percentage': breakdown.percentage,
        'net_amount': price - breakdown.amount,
        'rule_id': breakdown.rule_id,
        'rule_name': breakdown.rule_name,
    }).data)
