import logging

from django.core.cache import cache
from django.db import connection, DatabaseError
from django.http import JsonResponse
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


def health_check(request):
    """Report database and cache reachability."""
    checks = {'database': 'ok', 'cache': 'ok'}
    status_code = 200

    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
    except DatabaseError:
        logger.exception('Health check: database unreachable')
        checks['database'] = 'error'
        status_code = 503

    # Cache is advisory, a failure degrades but does not fail the check
    try:
        cache.set('health:ping', 'pong', 5)
        if cache.get('health:ping') != 'pong':
            checks['cache'] = 'degraded'
    except RedisError:
        logger.warning('Health check: cache unreachable', exc_info=True)
        checks['cache'] = 'degraded'

    return JsonResponse({
        'status': 'ok' if status_code == 200 else 'error',
        'checks': checks,
    }, status=status_code)


def error_404(request, exception):
    return JsonResponse({'error': 'Not found', 'status': 404}, status=404)


def error_500(request):
    return JsonResponse({'error': 'Internal server error', 'status': 500}, status=500)
