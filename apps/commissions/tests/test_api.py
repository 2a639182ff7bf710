import pytest
import uuid
from decimal import Decimal
from django.urls import reverse
from rest_framework import status
from apps.commissions.models import CommissionRule


# =============================================================================
# Quote & public table
# =============================================================================

@pytest.mark.django_db
class TestQuote:
    """Tests for GET /api/commissions/quote/"""

    def test_quote_dealer(self, api_client, commission_rules):
        url = reverse('commissions:quote')
        response = api_client.get(url, {'price': '20000', 'role': 'dealer'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['amount'] == '600.00'
        assert response.data['percentage'] == '3.00'
        assert response.data['net_amount'] == '19400.00'
        assert response.data['rule_name'] == 'Dealer commission'

    def test_quote_fallback(self, api_client):
        url = reverse('commissions:quote')
        response = api_client.get(url, {'price': '10000'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['amount'] == '500.00'
        assert response.data['rule_id'] is None

    def test_quote_negative_price(self, api_client):
        url = reverse('commissions:quote')
        response = api_client.get(url, {'price': '-5'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['detail'].code == 'invalid_price'

    def test_quote_missing_price(self, api_client):
        response = api_client.get(reverse('commissions:quote'))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'price' in response.data

    def test_quote_unknown_role(self, api_client):
        response = api_client.get(reverse('commissions:quote'), {'price': '100', 'role': 'pirate'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestCommissionTable:

    def test_public_table_hides_inactive(self, api_client, commission_rules):
        CommissionRule.objects.filter(name='Luxury vehicles commission').update(is_active=False)

        response = api_client.get(reverse('commissions:rule-table'))

        assert response.status_code == status.HTTP_200_OK
        names = [row['name'] for row in response.data]
        assert names == ['Dealer commission', 'Economy vehicles commission', 'Standard commission']
        assert response.data[-1]['summary'] == 'Default commission for every sale'


# =============================================================================
# Rule administration
# =============================================================================

@pytest.mark.django_db
class TestRuleAdministration:

    def test_admin_creates_rule(self, admin_client):
        url = reverse('commissions:rule-list')
        response = admin_client.post(url, {
            'name': 'Weekend promo',
            'type': 'percentage',
            'value': '1.50',
            'priority': 20,
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['summary'] == 'Weekend promo: 1.5% of price'

    def test_percentage_over_100_rejected(self, admin_client):
        url = reverse('commissions:rule-list')
        response = admin_client.post(url, {'name': 'Greedy', 'type': 'percentage', 'value': '150'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'value' in response.data

    def test_inverted_band_rejected(self, admin_client):
        url = reverse('commissions:rule-list')
        response = admin_client.post(url, {
            'name': 'Broken band',
            'type': 'fixed',
            'value': '100',
            'min_price': '5000',
            'max_price': '1000',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'max_price' in response.data

    def test_non_admin_forbidden(self, seller_client):
        response = seller_client.get(reverse('commissions:rule-list'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_delete_deactivates(self, admin_client, commission_rules):
        rule = commission_rules['Standard commission']
        url = reverse('commissions:rule-detail', kwargs={'pk': rule.id})

        response = admin_client.delete(url)

        rule.refresh_from_db()
        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert rule.is_active is False

    def test_unknown_rule(self, admin_client):
        url = reverse('commissions:rule-detail', kwargs={'pk': uuid.uuid4()})

        assert admin_client.get(url).status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Commissions & payouts
# =============================================================================

@pytest.mark.django_db
class TestCommissionEndpoints:

    def test_admin_list_filter_paid(self, admin_client, commission, dealer_commission):
        url = reverse('commissions:commission-list')

        assert admin_client.get(url).data['count'] == 2
        assert admin_client.get(url, {'is_paid': 'false'}).data['count'] == 2
        assert admin_client.get(url, {'is_paid': 'true'}).data['count'] == 0

    def test_list_requires_admin(self, seller_client, commission):
        response = seller_client.get(reverse('commissions:commission-list'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_detail(self, admin_client, commission):
        url = reverse('commissions:commission-detail', kwargs={'pk': commission.id})
        response = admin_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['sale_price'] == '25000.00'
        assert response.data['rule_name'] == 'Standard commission'
        assert response.data['transaction_number'].startswith('TXN-')

    def test_mark_paid(self, admin_client, commission):
        url = reverse('commissions:commission-mark-paid', kwargs={'pk': commission.id})

        response = admin_client.post(url, {'payment_reference': 'PAYOUT-1'}, format='json')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_paid'] is True

        response = admin_client.post(url, {}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_pay_batch(self, admin_client, commission, dealer_commission):
        url = reverse('commissions:commission-pay-batch')
        response = admin_client.post(url, {
            'commission_ids': [str(commission.id), str(dealer_commission.id)],
            'payment_reference': 'BATCH-2026-10',
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'updated': 2}

    def test_unpaid(self, admin_client, commission):
        response = admin_client.get(reverse('commissions:commission-unpaid'))

        assert response.data['count'] == 1

    def test_mine_and_stats(self, seller_client, commission, dealer_commission):
        response = seller_client.get(reverse('commissions:commission-mine'))
        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['amount'] == '1250.00'

        response = seller_client.get(reverse('commissions:commission-stats'))
        assert response.data['total'] == '1250.00'
        assert response.data['pending_count'] == 1

    def test_mine_requires_login(self, api_client):
        response = api_client.get(reverse('commissions:commission-mine'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
