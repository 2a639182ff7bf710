import pytest
from unittest.mock import patch
from django.urls import reverse
from redis.exceptions import ConnectionError as RedisConnectionError
from rest_framework import status


@pytest.mark.django_db
class TestHealthCheck:

    def test_healthy(self, api_client):
        response = api_client.get(reverse('health-check'))

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {'status': 'ok', 'checks': {'database': 'ok', 'cache': 'ok'}}

    def test_cache_outage_degrades_only(self, api_client):
        with patch('config.views.cache') as cache:
            cache.set.side_effect = RedisConnectionError('down')
            response = api_client.get(reverse('health-check'))

        assert response.status_code == status.HTTP_200_OK
        assert response.json()['checks']['cache'] == 'degraded'

    def test_plain_http_is_not_redirected(self, client):
        response = client.get(reverse('health-check'))

        assert response.status_code == status.HTTP_200_OK


def test_unknown_api_route_is_json(client):
    response = client.get('/api/nothing-here/')

    assert response.status_code == 404
