"""Base views and HTTP helpers shared by every app."""

import json
import logging
from typing import TYPE_CHECKING, Any

from django.db import DatabaseError, connection
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views import View

from server.apps.accounts.logic.access_control import TOKEN_HEADER
from server.apps.accounts.logic.user_operations import count_users
from server.apps.core.exceptions import ErrorReason, RegistryError, ValidationError

if TYPE_CHECKING:
    from server.apps.core.container import Services

logger = logging.getLogger(__name__)


def error_response(error: RegistryError) -> JsonResponse:
    """Render a registry error as a JSON response.

    Args:
        error: Error to report.

    Returns:
        Response with ``{'error': message}`` and the error's status.
    """
    return JsonResponse({'error': error.message}, status=error.status_code)


def parse_json_body(request: HttpRequest) -> dict[str, Any]:
    """Decode a request body that must be a JSON object.

    Args:
        request: Incoming request.

    Returns:
        Decoded JSON object.

    Raises:
        ValidationError: If the body is not a JSON object.
    """
    try:
        body = json.loads(request.body or b'{}')
    except (ValueError, UnicodeDecodeError) as error:
        raise ValidationError(
            ErrorReason.INVALID_BODY,
            'Request body must be JSON',
        ) from error
    if not isinstance(body, dict):
        raise ValidationError(
            ErrorReason.INVALID_BODY,
            'Request body must be a JSON object',
        )
    return body


def request_token(request: HttpRequest) -> str | None:
    """Extract the session token header from a request."""
    return request.headers.get(TOKEN_HEADER)


class ServiceView(View):
    """View with injected services and registry error rendering.

    Subclasses are routed with ``as_view(services=...)``.
    """

    services: 'Services | None' = None

    def dispatch(
        self,
        request: HttpRequest,
        *args: Any,
        **kwargs: Any,
    ) -> HttpResponse:
        """Authorize the request, run the handler, render errors.

        Args:
            request: Incoming request.
            args: Positional URL arguments.
            kwargs: Keyword URL arguments.

        Returns:
            Handler response, or the JSON rendering of a registry error.
        """
        try:
            self.authorize(request)
            return super().dispatch(request, *args, **kwargs)
        except RegistryError as error:
            return error_response(error)

    def authorize(self, request: HttpRequest) -> None:
        """Hook run before the handler. Public views accept everyone."""

    @property
    def registry(self) -> 'Services':
        """Services injected at routing time."""
        if self.services is None:
            raise RuntimeError(
                '{0} was routed without services'.format(type(self).__name__),
            )
        return self.services


class AuthenticatedView(ServiceView):
    """View reachable only with a resolvable session token."""

    user_id: str

    def authorize(self, request: HttpRequest) -> None:
        """Resolve the session token into ``self.user_id``.

        Args:
            request: Incoming request.

        Raises:
            AuthError: If the token is missing, unknown or expired.
        """
        self.user_id = self.registry.access.authenticate(
            request_token(request),
        )


class StatusView(ServiceView):
    """Liveness of the session cache and the database."""

    def get(self, request: HttpRequest) -> JsonResponse:
        """Report backend liveness."""
        return JsonResponse({
            'redis': self.registry.sessions.is_alive(),
            'db': _database_is_alive(),
        })


class StatsView(ServiceView):
    """Counts of registered users and stored nodes."""

    def get(self, request: HttpRequest) -> JsonResponse:
        """Report user and node counts."""
        return JsonResponse({
            'users': count_users(),
            'files': self.registry.repository.count(),
        })


def _database_is_alive() -> bool:
    try:
        connection.ensure_connection()
    except DatabaseError:
        logger.exception('Database is unreachable')
        return False
    return True
