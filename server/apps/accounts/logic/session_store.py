"""Session token storage backed by an expiring cache.

Tokens map to user ids in a Django cache whose backend enforces key
expiry natively (Redis in deployed environments). Reads never refresh
a token's lifetime.
"""

import logging
import uuid
from typing import Final, final

from django.core.cache.backends.base import BaseCache

logger = logging.getLogger(__name__)

# Sessions last 24 hours from creation
DEFAULT_SESSION_TTL: Final = 24 * 60 * 60

_KEY_PREFIX: Final = 'auth_'
_PROBE_KEY: Final = 'auth_probe'

# Token prefix shown in logs
_LOGGED_TOKEN_CHARS: Final = 8


@final
class SessionStore:
    """Binds opaque session tokens to user ids with a fixed expiry."""

    def __init__(
        self,
        cache: BaseCache,
        ttl: int = DEFAULT_SESSION_TTL,
    ) -> None:
        """Initialize the store.

        Args:
            cache: Cache backend holding token bindings.
            ttl: Token lifetime in seconds.
        """
        self._cache = cache
        self._ttl = ttl

    @property
    def ttl(self) -> int:
        """Token lifetime in seconds."""
        return self._ttl

    def create(self, user_id: str) -> str:
        """Create a new token bound to the user.

        Args:
            user_id: Id of the authenticated user.

        Returns:
            Newly generated token.
        """
        token = str(uuid.uuid4())
        self._cache.set(_key(token), str(user_id), timeout=self._ttl)
        logger.info(
            'Session created for user %s: %s',
            user_id,
            token[:_LOGGED_TOKEN_CHARS],
        )
        return token

    def resolve(self, token: str) -> str | None:
        """Look up the user bound to a token.

        Args:
            token: Session token.

        Returns:
            User id, or None if the token is unknown or expired.
        """
        return self._cache.get(_key(token))

    def revoke(self, token: str) -> None:
        """Remove a token binding. Revoking an unknown token is a no-op.

        Args:
            token: Session token.
        """
        if self._cache.delete(_key(token)):
            logger.info('Session revoked: %s', token[:_LOGGED_TOKEN_CHARS])

    def is_alive(self) -> bool:
        """Check that the backing cache answers requests.

        Returns:
            True if a probe write and read succeed.
        """
        try:
            self._cache.set(_PROBE_KEY, 1, timeout=1)
            return self._cache.get(_PROBE_KEY) == 1
        except Exception:
            logger.exception('Session cache is unreachable')
            return False


def _key(token: str) -> str:
    return f'{_KEY_PREFIX}{token}'
