"""Password hashing for stored user credentials.

Digests are unsalted SHA-1 hex strings so that hashes already stored
by existing deployments keep verifying. Moving to a salted scheme
needs a migration of the stored hashes first.
"""

import hashlib
import hmac


def hash_password(secret: str) -> str:
    """Hash a plaintext password.

    Args:
        secret: Plaintext password.

    Returns:
        40-character lowercase hex SHA-1 digest.
    """
    return hashlib.sha1(secret.encode('utf-8')).hexdigest()  # noqa: S324


def verify_password(secret: str, digest: str) -> bool:
    """Check a plaintext password against a stored digest.

    Args:
        secret: Plaintext password to check.
        digest: Stored hex digest.

    Returns:
        True if the password hashes to the stored digest.
    """
    return hmac.compare_digest(hash_password(secret), digest)
