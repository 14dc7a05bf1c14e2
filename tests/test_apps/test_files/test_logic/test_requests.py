"""Tests for the node creation request schema."""

from server.apps.files.logic.requests import CreateNodeRequest
from server.apps.files.models import ROOT_PARENT_ID


def test_from_body_maps_wire_names():
    """Test camelCase fields map to attributes."""
    request = CreateNodeRequest.from_body({
        'name': 'a.txt',
        'kind': 'file',
        'payload': 'SGVsbG8=',
        'parentId': '7',
        'isPublic': True,
    })

    assert request.name == 'a.txt'
    assert request.kind == 'file'
    assert request.payload == 'SGVsbG8='
    assert request.parent_id == '7'
    assert request.is_public is True
    assert not request.unexpected


def test_from_body_defaults():
    """Test absent optional fields take their defaults."""
    request = CreateNodeRequest.from_body({'name': 'docs', 'kind': 'folder'})

    assert request.parent_id == ROOT_PARENT_ID
    assert request.is_public is False
    assert request.payload is None
    assert request.is_folder
    assert not request.has('parent_id')
    assert request.has('name')


def test_from_body_keeps_explicit_null():
    """Test explicit nulls are kept apart from absent fields."""
    request = CreateNodeRequest.from_body({
        'name': 'docs',
        'kind': 'folder',
        'parentId': None,
    })

    assert request.parent_id is None
    assert request.has('parent_id')


def test_from_body_collects_unexpected_in_order():
    """Test unrecognized fields are listed in body order."""
    request = CreateNodeRequest.from_body({
        'zeta': 1,
        'name': 'docs',
        'alpha': 2,
        'parent_id': '3',
    })

    assert request.unexpected == ('zeta', 'alpha', 'parent_id')
