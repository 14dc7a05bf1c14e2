"""Shared fixtures for registry tests."""

import uuid
from typing import Final

import boto3
import pytest
from django.core.cache.backends.locmem import LocMemCache
from moto import mock_aws

from server.apps.accounts.logic.access_control import AccessController
from server.apps.accounts.logic.session_store import SessionStore
from server.apps.accounts.models import User
from server.apps.core.container import Services
from server.apps.files.infrastructure.storage import FileStorage
from server.apps.files.logic.node_repository import NodeRepository
from server.apps.files.logic.tree_validator import TreeValidator
from server.apps.files.models import Node, NodeKind

TEST_BUCKET: Final = 'file-registry-test'
TEST_PASSWORD: Final = 'Secret123'


@pytest.fixture
def user(db):
    """Create test user.

    Returns:
        User instance for testing.
    """
    return User.objects.create_user(
        email='alice@example.com',
        password=TEST_PASSWORD,
    )


@pytest.fixture
def other_user(db):
    """Create second test user for isolation tests.

    Returns:
        Second user instance.
    """
    return User.objects.create_user(
        email='bob@example.com',
        password=TEST_PASSWORD,
    )


@pytest.fixture
def session_cache():
    """Isolated in-memory cache standing in for Redis.

    Returns:
        LocMemCache with a unique location.
    """
    return LocMemCache(f'sessions-{uuid.uuid4().hex}', {})


@pytest.fixture
def sessions(session_cache):
    """Session store over the in-memory cache.

    Returns:
        SessionStore with the default TTL.
    """
    return SessionStore(session_cache)


@pytest.fixture
def token(user, sessions):
    """Session token for the test user.

    Returns:
        Token resolving to ``user``.
    """
    return sessions.create(str(user.id))


@pytest.fixture
def other_token(other_user, sessions):
    """Session token for the second test user."""
    return sessions.create(str(other_user.id))


@pytest.fixture
def mock_s3():
    """Mock S3 service with the registry bucket.

    Yields:
        boto3 S3 resource with the bucket created.
    """
    with mock_aws():
        conn = boto3.resource('s3', region_name='us-east-1')
        conn.create_bucket(Bucket=TEST_BUCKET)
        yield conn


@pytest.fixture
def storage(mock_s3):
    """Payload storage pointed at the mocked bucket.

    Returns:
        FileStorage instance.
    """
    return FileStorage(
        bucket_name=TEST_BUCKET,
        access_key='testing',
        secret_key='testing',
        region_name='us-east-1',
        file_overwrite=False,
    )


@pytest.fixture
def repository(storage):
    """Node repository over the mocked storage."""
    return NodeRepository(storage)


@pytest.fixture
def validator(repository):
    """Tree validator over the test repository."""
    return TreeValidator(repository)


@pytest.fixture
def services(repository, validator, sessions):
    """Services injected into views under test.

    Returns:
        Services wired to in-memory sessions and mocked storage.
    """
    return Services(
        repository=repository,
        validator=validator,
        sessions=sessions,
        access=AccessController(sessions),
    )


@pytest.fixture
def folder(user):
    """Top-level folder owned by the test user."""
    return Node.objects.create(
        owner=user,
        name='docs',
        kind=NodeKind.FOLDER,
    )
