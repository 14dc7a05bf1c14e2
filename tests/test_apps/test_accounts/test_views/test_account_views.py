"""Tests for registration, sign-in and sign-out endpoints."""

import json
import uuid

import pytest

from server.apps.accounts.logic.credentials import encode_basic_credentials
from server.apps.accounts.views import (
    ConnectView,
    CurrentUserView,
    DisconnectView,
    UserCreateView,
)


def _post_json(rf, body):
    return rf.post(
        '/users',
        data=json.dumps(body),
        content_type='application/json',
    )


@pytest.mark.django_db
class TestUserCreateView:
    """Tests for POST /users."""

    def test_register(self, rf, services):
        """Test successful registration returns the projection."""
        request = _post_json(rf, {
            'email': 'carol@example.com',
            'password': 'Secret123',
        })

        response = UserCreateView.as_view(services=services)(request)

        assert response.status_code == 201
        body = json.loads(response.content)
        assert body['email'] == 'carol@example.com'
        assert 'password' not in body
        assert isinstance(body['id'], str)

    def test_register_duplicate(self, rf, services, user):
        """Test duplicate email is a 400 with a fixed message."""
        request = _post_json(rf, {
            'email': user.email,
            'password': 'Secret123',
        })

        response = UserCreateView.as_view(services=services)(request)

        assert response.status_code == 400
        assert json.loads(response.content) == {'error': 'Already exist'}

    def test_register_invalid_json(self, rf, services):
        """Test non-JSON body is a 400."""
        request = rf.post(
            '/users',
            data='{not json',
            content_type='application/json',
        )

        response = UserCreateView.as_view(services=services)(request)

        assert response.status_code == 400

    def test_register_json_array(self, rf, services):
        """Test a JSON body that is not an object is a 400."""
        response = UserCreateView.as_view(services=services)(
            _post_json(rf, ['carol@example.com']),
        )

        assert response.status_code == 400


@pytest.mark.django_db
class TestConnectView:
    """Tests for GET /connect."""

    def test_connect(self, rf, services, user, sessions):
        """Test valid credentials yield a resolvable token."""
        request = rf.get(
            '/connect',
            headers={
                'Authorization': encode_basic_credentials(
                    'alice@example.com',
                    'Secret123',
                ),
            },
        )

        response = ConnectView.as_view(services=services)(request)

        assert response.status_code == 200
        token = json.loads(response.content)['token']
        assert sessions.resolve(token) == str(user.id)

    def test_connect_wrong_password(self, rf, services, user):
        """Test wrong password is a 401."""
        request = rf.get(
            '/connect',
            headers={
                'Authorization': encode_basic_credentials(
                    'alice@example.com',
                    'Wrong1234',
                ),
            },
        )

        response = ConnectView.as_view(services=services)(request)

        assert response.status_code == 401
        assert json.loads(response.content) == {'error': 'Unauthorized'}

    def test_connect_malformed_header(self, rf, services, user):
        """Test undecodable credentials are a 400, not a 401."""
        request = rf.get('/connect', headers={'Authorization': 'Basic @@@'})

        response = ConnectView.as_view(services=services)(request)

        assert response.status_code == 400

    def test_connect_without_header(self, rf, services):
        """Test missing header is a 400."""
        response = ConnectView.as_view(services=services)(rf.get('/connect'))

        assert response.status_code == 400


@pytest.mark.django_db
class TestCurrentUserView:
    """Tests for GET /users/me."""

    def test_current_user(self, rf, services, user, token):
        """Test the session's user is returned."""
        request = rf.get('/users/me', headers={'X-Token': token})

        response = CurrentUserView.as_view(services=services)(request)

        assert response.status_code == 200
        assert json.loads(response.content) == {
            'id': str(user.id),
            'email': 'alice@example.com',
        }

    @pytest.mark.parametrize('headers', [{}, {'X-Token': 'bogus'}])
    def test_current_user_unauthorized(self, rf, services, headers):
        """Test missing or unknown tokens are a 401."""
        request = rf.get('/users/me', headers=headers)

        response = CurrentUserView.as_view(services=services)(request)

        assert response.status_code == 401


@pytest.mark.django_db
class TestDisconnectView:
    """Tests for GET /disconnect."""

    def test_disconnect(self, rf, services, token, sessions):
        """Test the token stops resolving after sign-out."""
        request = rf.get('/disconnect', headers={'X-Token': token})

        response = DisconnectView.as_view(services=services)(request)

        assert response.status_code == 204
        assert sessions.resolve(token) is None

    def test_disconnect_unknown_token(self, rf, services):
        """Test unknown tokens are revoked silently."""
        request = rf.get(
            '/disconnect',
            headers={'X-Token': str(uuid.uuid4())},
        )

        response = DisconnectView.as_view(services=services)(request)

        assert response.status_code == 204

    def test_disconnect_without_token(self, rf, services):
        """Test sign-out without a token header is a 401."""
        response = DisconnectView.as_view(services=services)(
            rf.get('/disconnect'),
        )

        assert response.status_code == 401
