"""Tests for service views, health and statistics endpoints."""

import json

import pytest
from django.db import DatabaseError, connection
from django.urls import resolve

from server.apps.accounts.views import ConnectView, DisconnectView
from server.apps.core.container import Services, build_services
from server.apps.core.views import ServiceView, StatsView, StatusView
from server.apps.files.models import Node, NodeKind
from server.apps.files.views import (
    NodeCollectionView,
    NodeDataView,
    NodeDetailView,
    NodeVisibilityView,
)


@pytest.mark.django_db
class TestStatusView:
    """Tests for GET /status."""

    def test_status(self, rf, services):
        """Test both backends report alive."""
        response = StatusView.as_view(services=services)(rf.get('/status'))

        assert response.status_code == 200
        assert json.loads(response.content) == {'redis': True, 'db': True}

    def test_status_with_database_down(self, rf, services, monkeypatch):
        """Test an unreachable database is reported, not raised."""
        def broken_connect():
            raise DatabaseError('database down')

        monkeypatch.setattr(connection, 'ensure_connection', broken_connect)

        response = StatusView.as_view(services=services)(rf.get('/status'))

        assert json.loads(response.content)['db'] is False


@pytest.mark.django_db
def test_stats(rf, services, user, other_user, folder):
    """Test user and node counts."""
    Node.objects.create(owner=other_user, name='pics', kind=NodeKind.FOLDER)

    response = StatsView.as_view(services=services)(rf.get('/stats'))

    assert json.loads(response.content) == {'users': 2, 'files': 2}


def test_view_without_services():
    """Test routing a view without services fails loudly."""
    view = ServiceView()

    with pytest.raises(RuntimeError):
        view.registry  # noqa: B018


def test_build_services():
    """Test wiring from settings."""
    services = build_services()

    assert isinstance(services, Services)
    assert services.sessions.ttl == 86400
    assert services.repository.page_size == 20


@pytest.mark.parametrize(('path', 'view_class', 'kwargs'), [
    ('/status', StatusView, {}),
    ('/stats', StatsView, {}),
    ('/connect', ConnectView, {}),
    ('/disconnect', DisconnectView, {}),
    ('/files', NodeCollectionView, {}),
    ('/files/7', NodeDetailView, {'node_id': '7'}),
    ('/files/7/publish', NodeVisibilityView, {'node_id': '7'}),
    ('/files/7/unpublish', NodeVisibilityView, {'node_id': '7'}),
    ('/files/7/data', NodeDataView, {'node_id': '7'}),
])
def test_routes(path, view_class, kwargs):
    """Test URL routing."""
    match = resolve(path)

    assert match.func.view_class is view_class
    assert match.kwargs == kwargs


def test_unpublish_route_clears_visibility():
    """Test the unpublish route is bound to the private setting."""
    assert resolve('/files/7/publish').func.view_initkwargs['is_public']
    assert not resolve('/files/7/unpublish').func.view_initkwargs['is_public']
