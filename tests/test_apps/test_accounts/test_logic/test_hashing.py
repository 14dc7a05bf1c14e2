"""Tests for password hashing."""

import hashlib

from server.apps.accounts.logic.hashing import hash_password, verify_password


def test_hash_password_is_sha1_hex():
    """Test digest format matches stored hashes."""
    digest = hash_password('Secret123')

    assert digest == hashlib.sha1(b'Secret123').hexdigest()  # noqa: S324
    assert len(digest) == 40


def test_hash_password_is_deterministic():
    """Test same password always hashes the same."""
    assert hash_password('Secret123') == hash_password('Secret123')
    assert hash_password('Secret123') != hash_password('Secret124')


def test_verify_password():
    """Test verification against a stored digest."""
    digest = hash_password('Secret123')

    assert verify_password('Secret123', digest)
    assert not verify_password('secret123', digest)
    assert not verify_password('', digest)
