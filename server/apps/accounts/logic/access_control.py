"""Resolution of session tokens into caller identities."""

import logging
from typing import Final, final

from server.apps.accounts.logic.session_store import SessionStore
from server.apps.core.exceptions import AuthError

logger = logging.getLogger(__name__)

# Header carrying the session token
TOKEN_HEADER: Final = 'X-Token'


@final
class AccessController:
    """Turns a request's session token into an authenticated user id.

    Protected requests move from unauthenticated to authenticated only
    when their token resolves; any other outcome rejects the request
    before handler logic runs.
    """

    def __init__(self, sessions: SessionStore) -> None:
        """Initialize the controller.

        Args:
            sessions: Store resolving tokens to user ids.
        """
        self._sessions = sessions

    def authenticate(self, token: str | None) -> str:
        """Resolve a token or reject the request.

        Args:
            token: Session token from the request, if any.

        Returns:
            Id of the authenticated user.

        Raises:
            AuthError: If the token is missing, unknown or expired.
        """
        if not token:
            logger.debug('Rejected request without session token')
            raise AuthError()

        user_id = self._sessions.resolve(token)
        if user_id is None:
            logger.warning('Rejected request with unresolvable session token')
            raise AuthError()

        return user_id

    def optional_identity(self, token: str | None) -> str | None:
        """Resolve a token, treating failure as an anonymous caller.

        Used by routes that serve public resources without a session.

        Args:
            token: Session token from the request, if any.

        Returns:
            Id of the authenticated user, or None for anonymous callers.
        """
        if not token:
            return None
        return self._sessions.resolve(token)
