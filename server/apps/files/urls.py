"""URL routes for files app."""

from typing import TYPE_CHECKING

from django.urls import URLPattern, path

from server.apps.files.views import (
    NodeCollectionView,
    NodeDataView,
    NodeDetailView,
    NodeVisibilityView,
)

if TYPE_CHECKING:
    from server.apps.core.container import Services


def build_urlpatterns(services: 'Services') -> list[URLPattern]:
    """Route node views with injected services.

    Args:
        services: Shared registry services.

    Returns:
        URL patterns for the files app.
    """
    return [
        path(
            'files',
            NodeCollectionView.as_view(services=services),
            name='files',
        ),
        path(
            'files/<str:node_id>',
            NodeDetailView.as_view(services=services),
            name='file-detail',
        ),
        path(
            'files/<str:node_id>/publish',
            NodeVisibilityView.as_view(services=services, is_public=True),
            name='file-publish',
        ),
        path(
            'files/<str:node_id>/unpublish',
            NodeVisibilityView.as_view(services=services, is_public=False),
            name='file-unpublish',
        ),
        path(
            'files/<str:node_id>/data',
            NodeDataView.as_view(services=services),
            name='file-data',
        ),
    ]
