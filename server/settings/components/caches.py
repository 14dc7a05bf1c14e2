"""Cache configuration.

The ``sessions`` alias backs the session-token store. It must be a
backend with native key expiry (Redis in every deployed environment).
"""

from server.settings.components import config

SESSION_CACHE_ALIAS = 'sessions'

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    },
    SESSION_CACHE_ALIAS: {
        'BACKEND': config(
            'SESSION_CACHE_BACKEND',
            default='django.core.cache.backends.redis.RedisCache',
        ),
        'LOCATION': config('REDIS_URL', default='redis://localhost:6379/0'),
        'KEY_PREFIX': 'file-registry',
    },
}
