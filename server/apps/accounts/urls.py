"""URL routes for accounts app."""

from typing import TYPE_CHECKING

from django.urls import URLPattern, path

from server.apps.accounts.views import (
    ConnectView,
    CurrentUserView,
    DisconnectView,
    UserCreateView,
)

if TYPE_CHECKING:
    from server.apps.core.container import Services


def build_urlpatterns(services: 'Services') -> list[URLPattern]:
    """Route account views with injected services.

    Args:
        services: Shared registry services.

    Returns:
        URL patterns for the accounts app.
    """
    return [
        path('users', UserCreateView.as_view(services=services), name='users'),
        path('users/me', CurrentUserView.as_view(services=services), name='users-me'),
        path('connect', ConnectView.as_view(services=services), name='connect'),
        path(
            'disconnect',
            DisconnectView.as_view(services=services),
            name='disconnect',
        ),
    ]
