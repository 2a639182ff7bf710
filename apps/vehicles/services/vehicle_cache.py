"""Look-aside cache for vehicle detail payloads and the brand list."""

import logging

from django.conf import settings
from django.core.cache import cache
from django.db import transaction
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

BRANDS_CACHE_KEY = 'brands:all'


def vehicle_cache_key(vehicle_id) -> str:
    return f'vehicle:{vehicle_id}'


def cache_get(key):
    """Read from cache; a cache outage is a miss, not a failure."""
    try:
        return cache.get(key)
    except RedisError as e:
        logger.warning("Cache read failed for %s: %s", key, e)
        return None


def cache_set(key, value, timeout):
    try:
        cache.set(key, value, timeout)
    except RedisError as e:
        logger.warning("Cache write failed for %s: %s", key, e)


def cache_delete(key):
    try:
        cache.delete(key)
    except RedisError as e:
        logger.warning("Cache delete failed for %s: %s", key, e)


def get_cached_vehicle(vehicle_id):
    return cache_get(vehicle_cache_key(vehicle_id))


def set_cached_vehicle(vehicle_id, payload) -> None:
    cache_set(vehicle_cache_key(vehicle_id), payload, settings.CACHE_TTL_SHORT)


def invalidate_vehicle(vehicle_id) -> None:
    """Drop the cached payload once the surrounding transaction commits."""
    key = vehicle_cache_key(vehicle_id)
    transaction.on_commit(lambda: cache_delete(key))


def invalidate_brands() -> None:
    transaction.on_commit(lambda: cache_delete(BRANDS_CACHE_KEY))
