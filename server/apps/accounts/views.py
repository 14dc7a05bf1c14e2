"""HTTP views for registration, sign-in and sign-out."""

from django.http import HttpRequest, HttpResponse, JsonResponse

from server.apps.accounts.logic.credentials import decode_basic_credentials
from server.apps.accounts.logic.user_operations import (
    authenticate_user,
    get_user,
    register_user,
)
from server.apps.core.exceptions import AuthError
from server.apps.core.views import (
    AuthenticatedView,
    ServiceView,
    parse_json_body,
    request_token,
)


class UserCreateView(ServiceView):
    """``POST /users``: register a new user."""

    def post(self, request: HttpRequest) -> JsonResponse:
        """Create a user from an ``{email, password}`` body."""
        user = register_user(parse_json_body(request))
        return JsonResponse(user.as_projection(), status=201)


class CurrentUserView(AuthenticatedView):
    """``GET /users/me``: the user behind the session token."""

    def get(self, request: HttpRequest) -> JsonResponse:
        """Return the authenticated user's id and email."""
        return JsonResponse(get_user(self.user_id).as_projection())


class ConnectView(ServiceView):
    """``GET /connect``: exchange Basic credentials for a session token."""

    def get(self, request: HttpRequest) -> JsonResponse:
        """Authenticate the caller and open a session.

        Returns:
            ``{'token': ...}`` on success.
        """
        credentials = decode_basic_credentials(
            request.headers.get('Authorization'),
        )
        user = authenticate_user(credentials.email, credentials.password)
        token = self.registry.sessions.create(str(user.id))
        return JsonResponse({'token': token})


class DisconnectView(ServiceView):
    """``GET /disconnect``: end the session named by the token header."""

    def get(self, request: HttpRequest) -> HttpResponse:
        """Revoke the token. Unknown tokens are revoked silently.

        Raises:
            AuthError: If no token header was sent.
        """
        token = request_token(request)
        if not token:
            raise AuthError()
        self.registry.sessions.revoke(token)
        return HttpResponse(status=204)
